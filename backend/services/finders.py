"""
Per-domain finder settings: request limits, map zoom and user-facing messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from domain.models import SearchDomain
from services.map_links import HIGHWAY_ZOOM, STREET_ZOOM


@dataclass(frozen=True)
class FinderProfile:
    domain: SearchDomain
    limit: int
    address_details: bool
    map_zoom: int
    empty_message: str
    failure_message: str


INTERSECTION_PROFILE = FinderProfile(
    domain=SearchDomain.INTERSECTION,
    limit=1,
    address_details=False,
    map_zoom=STREET_ZOOM,
    empty_message="Intersection not found. Please try different road names.",
    failure_message="An error occurred while searching for the intersection.",
)

STREET_PROFILE = FinderProfile(
    domain=SearchDomain.STREET,
    limit=50,
    address_details=True,
    map_zoom=STREET_ZOOM,
    empty_message='No streets found with that name. Try including the city name (e.g., "Main Street, Boston")',
    failure_message="An error occurred while searching for streets.",
)

HIGHWAY_PROFILE = FinderProfile(
    domain=SearchDomain.HIGHWAY,
    limit=50,
    address_details=True,
    map_zoom=HIGHWAY_ZOOM,
    empty_message='No highways found. Try including the state/country (e.g., "MN-62 Minnesota" or "A1 Highway UK")',
    failure_message="An error occurred while searching for highways.",
)

PROFILES: Dict[SearchDomain, FinderProfile] = {
    p.domain: p for p in (INTERSECTION_PROFILE, STREET_PROFILE, HIGHWAY_PROFILE)
}
