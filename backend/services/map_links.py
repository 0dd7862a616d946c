"""
OpenStreetMap viewer links for finder results.
"""
from __future__ import annotations

from urllib.parse import urlencode

from settings import settings

STREET_ZOOM = 17
HIGHWAY_ZOOM = 12


def osm_map_url(lat: float, lon: float, zoom: int, base_url: str | None = None) -> str:
    """Return a viewer URL with a marker at ``lat``/``lon``."""
    base = base_url or settings.OSM_VIEWER_URL
    query = urlencode({"mlat": lat, "mlon": lon, "zoom": zoom})
    return f"{base}?{query}"
