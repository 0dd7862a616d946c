from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import pages as pages_router
from domain.models import ClassifiedResult, SearchDomain, SearchState, SearchStatus
from services.render_html import render_finder_card
from services.search_orchestrator import FinderPanel


class FakeClient:
    def __init__(self, responses=None):
        self.responses = responses or {}

    def search(self, query, limit, address_details=False):
        return self.responses.get(query, [])


def _client() -> TestClient:
    app = FastAPI()
    app.include_router(pages_router.router)
    return TestClient(app)


def test_page_renders_three_forms():
    panel = FinderPanel(FakeClient())
    with patch.object(pages_router, "get_default_panel", return_value=panel):
        resp = _client().get("/")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    html = resp.text
    assert 'action="/finders/intersection"' in html
    assert 'action="/finders/street"' in html
    assert 'action="/finders/highway"' in html


def test_street_form_submission_shows_results_and_echoes_input():
    hit = {
        "lat": "42.3601",
        "lon": "-71.0589",
        "display_name": "Main Street, Boston, MA",
        "class": "highway",
        "type": "residential",
    }
    panel = FinderPanel(FakeClient({"Main Street": [hit]}))
    with patch.object(pages_router, "get_default_panel", return_value=panel):
        resp = _client().get("/finders/street", params={"name": "Main Street"})
        html = resp.text

    assert "Found 1 Locations" in html
    assert "Main Street, Boston, MA" in html
    assert 'value="Main Street"' in html
    assert "zoom=17" in html


def test_highway_form_submission_shows_guidance_when_empty():
    panel = FinderPanel(FakeClient())
    with patch.object(pages_router, "get_default_panel", return_value=panel):
        html = _client().get("/finders/highway", params={"name": "Q-99"}).text

    assert "No highways found" in html


def test_card_escapes_display_names():
    state = SearchState(
        domain=SearchDomain.STREET,
        status=SearchStatus.RESULTS,
        query="x",
        results=(ClassifiedResult(lat=1.0, lon=2.0, display_name="<script>alert(1)</script>", type="road"),),
        sequence=1,
    )
    html = render_finder_card(state)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_idle_card_has_no_message_or_results():
    html = render_finder_card(SearchState(domain=SearchDomain.HIGHWAY))
    assert 'class="error"' not in html
    assert 'class="results"' not in html
    assert "Try including state/country" in html


def test_submitted_inputs_are_not_shown_to_other_visitors():
    panel = FinderPanel(FakeClient())
    with patch.object(pages_router, "get_default_panel", return_value=panel):
        client = _client()
        client.get("/finders/street", params={"name": "Secret Lane"})
        html = client.get("/").text

    assert 'value="Secret Lane"' not in html
