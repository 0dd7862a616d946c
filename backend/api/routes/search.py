"""
Search API routes.

One endpoint per finder plus a read-only view of all three finder states.
Empty and failed searches are normal 200 responses; the outcome is in
``status`` and ``message``.
"""
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from domain.models import ClassifiedResult, FinderResult, SearchDomain, SearchState
from services.finders import PROFILES
from services.map_links import osm_map_url
from services.search_orchestrator import get_default_panel

router = APIRouter()


class ResultResponse(BaseModel):
    lat: float
    lon: float
    display_name: str
    type: Optional[str] = None
    importance: Optional[float] = None
    map_url: str


class SearchStateResponse(BaseModel):
    domain: str
    status: str
    query: Optional[str] = None
    message: Optional[str] = None
    sequence: int
    results: List[ResultResponse]


class PanelStateResponse(BaseModel):
    intersection: SearchStateResponse
    street: SearchStateResponse
    highway: SearchStateResponse


def result_to_response(result: FinderResult, zoom: int) -> ResultResponse:
    extra = {}
    if isinstance(result, ClassifiedResult):
        extra = {"type": result.type, "importance": result.importance}
    return ResultResponse(
        lat=result.lat,
        lon=result.lon,
        display_name=result.display_name,
        map_url=osm_map_url(result.lat, result.lon, zoom),
        **extra,
    )


def state_to_response(state: SearchState) -> SearchStateResponse:
    """Convert a finder SearchState to its API response."""
    zoom = PROFILES[state.domain].map_zoom
    return SearchStateResponse(
        domain=state.domain.value,
        status=state.status.value,
        query=state.query,
        message=state.message,
        sequence=state.sequence,
        results=[result_to_response(r, zoom) for r in state.results],
    )


def require_text(value: Optional[str], field: str) -> str:
    """Reject blank form fields before any search is started."""
    text = (value or "").strip()
    if not text:
        raise HTTPException(status_code=422, detail=f"{field} must not be blank")
    return text


@router.get("/intersection", response_model=SearchStateResponse)
async def search_intersection(road1: str = "", road2: str = ""):
    """Find where two roads cross (best single match)."""
    first = require_text(road1, "road1")
    second = require_text(road2, "road2")
    state = await get_default_panel().intersection.submit(first, second)
    return state_to_response(state)


@router.get("/street", response_model=SearchStateResponse)
async def search_street(name: str = ""):
    """List locations of a street name."""
    state = await get_default_panel().street.submit(require_text(name, "name"))
    return state_to_response(state)


@router.get("/highway", response_model=SearchStateResponse)
async def search_highway(name: str = ""):
    """List locations of a highway name or number."""
    state = await get_default_panel().highway.submit(require_text(name, "name"))
    return state_to_response(state)


@router.get("/state", response_model=PanelStateResponse)
async def panel_state():
    """Current state of every finder, without starting a search."""
    states = get_default_panel().states()
    return PanelStateResponse(
        intersection=state_to_response(states[SearchDomain.INTERSECTION]),
        street=state_to_response(states[SearchDomain.STREET]),
        highway=state_to_response(states[SearchDomain.HIGHWAY]),
    )
