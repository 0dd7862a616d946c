"""
HTML rendering for the finder page.

Server-rendered replacement for the single-page form UI: three cards
(intersection, street, highway), each with its form, message and results.
Forms submit with GET so every search is a plain link.
"""
from html import escape
from typing import Dict, List, Optional

from domain.models import ClassifiedResult, FinderResult, SearchDomain, SearchState, SearchStatus
from services.finders import PROFILES
from services.map_links import osm_map_url

CARD_ACCENTS = {
    SearchDomain.INTERSECTION: "#2563eb",
    SearchDomain.STREET: "#059669",
    SearchDomain.HIGHWAY: "#9333ea",
}

CARD_TITLES = {
    SearchDomain.INTERSECTION: "Intersection Finder",
    SearchDomain.STREET: "Street Finder",
    SearchDomain.HIGHWAY: "Highway Finder",
}


def _input(name: str, label: str, placeholder: str, value: str = "") -> str:
    return f"""
        <label for="{name}">{label}</label>
        <input type="text" id="{name}" name="{name}" value="{escape(value)}"
               placeholder="{escape(placeholder)}" required>
    """


def _form_fields(domain: SearchDomain, form_values: Dict[str, str]) -> str:
    if domain == SearchDomain.INTERSECTION:
        return (
            _input("road1", "First Road", "e.g. Main Street", form_values.get("road1", ""))
            + _input("road2", "Second Road", "e.g. Broadway", form_values.get("road2", ""))
        )
    if domain == SearchDomain.STREET:
        return _input("name", "Street Name", "e.g. Broadway", form_values.get("name", ""))
    return (
        _input("name", "Highway Name/Number", "e.g. MN-62, A1, Route 66", form_values.get("name", ""))
        + '<p class="hint">Try including state/country for better results</p>'
    )


def _render_result(result: FinderResult, zoom: int, accent: str) -> str:
    url = osm_map_url(result.lat, result.lon, zoom)
    kind = ""
    if isinstance(result, ClassifiedResult) and result.type:
        kind = f'<p class="kind">{escape(result.type)}</p>'
    return f"""
        <div class="result">
            <p class="name">{escape(result.display_name)}</p>
            {kind}
            <p>Latitude: {result.lat}</p>
            <p>Longitude: {result.lon}</p>
            <a href="{escape(url)}" target="_blank" rel="noopener noreferrer" style="color: {accent};">
                View on OpenStreetMap &rarr;
            </a>
        </div>
    """


def _results_heading(domain: SearchDomain, count: int) -> str:
    if domain == SearchDomain.INTERSECTION:
        return "Intersection Found"
    noun = "Locations" if domain == SearchDomain.STREET else "Highways"
    return f"Found {count} {noun}"


def render_finder_card(state: SearchState, form_values: Optional[Dict[str, str]] = None) -> str:
    """Render one finder card from its current state."""
    domain = state.domain
    profile = PROFILES[domain]
    accent = CARD_ACCENTS[domain]

    message = ""
    if state.status in (SearchStatus.EMPTY, SearchStatus.FAILED) and state.message:
        message = f'<div class="error">{escape(state.message)}</div>'

    results = ""
    if state.status == SearchStatus.RESULTS and state.results:
        items: List[str] = [_render_result(r, profile.map_zoom, accent) for r in state.results]
        results = f"""
        <div class="results">
            <h2>{_results_heading(domain, len(state.results))}</h2>
            {''.join(items)}
        </div>
        """

    return f"""
    <section class="card" id="{domain.value}">
        <h1 style="color: {accent};">{CARD_TITLES[domain]}</h1>
        <form method="get" action="/finders/{domain.value}">
            {_form_fields(domain, form_values or {})}
            <button type="submit" style="background: {accent};">Search</button>
        </form>
        {message}
        {results}
    </section>
    """


def render_finder_page(
    states: Dict[SearchDomain, SearchState],
    form_values: Optional[Dict[SearchDomain, Dict[str, str]]] = None,
) -> str:
    """Render the full page with all three finders side by side."""
    form_values = form_values or {}
    cards = "".join(
        render_finder_card(states[domain], form_values.get(domain))
        for domain in (SearchDomain.INTERSECTION, SearchDomain.STREET, SearchDomain.HIGHWAY)
    )
    return f"""<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Road Finder</title>
    <style>
        body {{ font-family: system-ui, sans-serif; background: #f9fafb; margin: 0; padding: 48px 16px; }}
        .grid {{ max-width: 1200px; margin: 0 auto; display: grid; gap: 32px;
                 grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); }}
        .card {{ background: #fff; border-radius: 12px; box-shadow: 0 1px 4px rgba(0,0,0,.1); padding: 32px; }}
        .card h1 {{ font-size: 22px; text-align: center; margin-top: 0; }}
        label {{ display: block; font-size: 14px; color: #374151; margin-top: 12px; }}
        input {{ width: 100%; box-sizing: border-box; padding: 8px; border: 1px solid #d1d5db; border-radius: 6px; }}
        button {{ width: 100%; margin-top: 16px; padding: 8px; color: #fff; border: 0; border-radius: 6px; }}
        .hint {{ font-size: 13px; color: #6b7280; }}
        .error {{ margin-top: 16px; color: #dc2626; font-size: 14px; text-align: center; }}
        .results {{ margin-top: 24px; max-height: 400px; overflow-y: auto; }}
        .result {{ background: #f9fafb; border-radius: 8px; padding: 12px; margin-bottom: 12px; font-size: 14px; }}
        .result p {{ margin: 2px 0; }}
        .result .name {{ color: #4b5563; margin-bottom: 6px; }}
        .result .kind {{ color: #6b7280; font-size: 12px; }}
    </style>
</head>
<body>
    <main class="grid">
        {cards}
    </main>
</body>
</html>
"""
