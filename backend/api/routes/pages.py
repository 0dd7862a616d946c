"""
Browser page routes.

``/`` shows the three finders; each form submits to ``/finders/{domain}``,
which runs the search and renders the page again. The submitting card shows
the outcome of that request and echoes its inputs; the other cards show the
finders' shared state.
"""
from typing import Dict

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from domain.models import SearchDomain, SearchState
from api.routes.search import require_text
from services.render_html import render_finder_page
from services.search_orchestrator import get_default_panel

router = APIRouter()


def _render(own_state: SearchState | None = None, inputs: Dict[str, str] | None = None) -> HTMLResponse:
    states = get_default_panel().states()
    form_values: Dict[SearchDomain, Dict[str, str]] = {}
    if own_state is not None:
        states[own_state.domain] = own_state
        form_values[own_state.domain] = inputs or {}
    return HTMLResponse(render_finder_page(states, form_values))


@router.get("/", response_class=HTMLResponse)
async def finder_page():
    return _render()


@router.get("/finders/intersection", response_class=HTMLResponse)
async def submit_intersection(road1: str = "", road2: str = ""):
    first = require_text(road1, "road1")
    second = require_text(road2, "road2")
    state = await get_default_panel().intersection.submit(first, second)
    return _render(state, {"road1": first, "road2": second})


@router.get("/finders/street", response_class=HTMLResponse)
async def submit_street(name: str = ""):
    text = require_text(name, "name")
    state = await get_default_panel().street.submit(text)
    return _render(state, {"name": text})


@router.get("/finders/highway", response_class=HTMLResponse)
async def submit_highway(name: str = ""):
    text = require_text(name, "name")
    state = await get_default_panel().highway.submit(text)
    return _render(state, {"name": text})
