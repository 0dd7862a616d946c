"""
Free-text query construction for the Nominatim search endpoint.

The strings returned here are passed as-is in the ``q`` parameter;
percent-encoding is left to the HTTP client.
"""
from __future__ import annotations

from domain.models import SearchDomain

INTERSECTION_SEPARATOR = " & "


def build_intersection_query(road1: str, road2: str) -> str:
    """Join two road names the way Nominatim understands a crossing."""
    return f"{road1}{INTERSECTION_SEPARATOR}{road2}"


def build_name_query(name: str) -> str:
    return name


def build_query(domain: SearchDomain, *terms: str) -> str:
    """Build the query for ``domain`` from the raw form inputs.

    Intersections take exactly two terms, street and highway lookups one.
    """
    if domain == SearchDomain.INTERSECTION:
        if len(terms) != 2:
            raise ValueError(f"intersection query needs two road names, got {len(terms)}")
        return build_intersection_query(terms[0], terms[1])
    if len(terms) != 1:
        raise ValueError(f"{domain.value} query needs one name, got {len(terms)}")
    return build_name_query(terms[0])
