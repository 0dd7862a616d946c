"""
Filtering of raw Nominatim search hits into finder results.

Nominatim tags roads inconsistently between regions, so the highway filter
also accepts display names that merely look like a highway. The street
filter relies on tags alone.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple

from domain.models import (
    ClassificationOutcome,
    ClassifiedResult,
    FinderResult,
    IntersectionResult,
    LocationRecord,
    SearchDomain,
)

logger = logging.getLogger(__name__)

STREET_CATEGORIES = frozenset(
    {"road", "street", "residential", "tertiary", "secondary", "primary", "path", "track", "service"}
)
HIGHWAY_CATEGORIES = frozenset({"motorway", "trunk", "primary", "secondary", "tertiary"})
HIGHWAY_NAME_MARKERS = ("highway", "route", "state road")


def _has_category(record: LocationRecord, categories: frozenset) -> bool:
    return any(
        isinstance(value, str) and value in categories
        for value in (record.get("class"), record.get("type"))
    )


def is_street_record(record: LocationRecord) -> bool:
    return _has_category(record, STREET_CATEGORIES)


def is_highway_record(record: LocationRecord) -> bool:
    if _has_category(record, HIGHWAY_CATEGORIES):
        return True
    name = str(record.get("display_name") or "").lower()
    return any(marker in name for marker in HIGHWAY_NAME_MARKERS)


def parse_coordinates(record: LocationRecord) -> Optional[Tuple[float, float]]:
    """Return ``(lat, lon)`` or None when either value is unusable.

    NaN, infinities and out-of-range values count as unusable.
    """
    try:
        lat = float(record.get("lat"))
        lon = float(record.get("lon"))
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return lat, lon


def _importance(record: LocationRecord) -> float:
    try:
        return float(record.get("importance", 0.0) or 0.0)
    except (TypeError, ValueError):
        return 0.0


def to_classified_result(record: LocationRecord) -> Optional[ClassifiedResult]:
    coords = parse_coordinates(record)
    if coords is None:
        return None
    lat, lon = coords
    return ClassifiedResult(
        lat=lat,
        lon=lon,
        display_name=str(record.get("display_name") or ""),
        type=str(record.get("type") or record.get("class") or ""),
        importance=_importance(record),
    )


def to_intersection_result(record: LocationRecord) -> Optional[IntersectionResult]:
    coords = parse_coordinates(record)
    if coords is None:
        return None
    lat, lon = coords
    return IntersectionResult(
        lat=lat,
        lon=lon,
        display_name=str(record.get("display_name") or ""),
    )


PREDICATES = {
    SearchDomain.STREET: is_street_record,
    SearchDomain.HIGHWAY: is_highway_record,
}


def _classify_filtered(records: Iterable[Any], domain: SearchDomain) -> ClassificationOutcome:
    predicate = PREDICATES[domain]
    results: List[FinderResult] = []
    rejected = 0
    invalid = 0
    for record in records:
        if not isinstance(record, Mapping):
            invalid += 1
            continue
        if not predicate(record):
            rejected += 1
            continue
        result = to_classified_result(record)
        if result is None:
            invalid += 1
            logger.warning(
                "Dropping %s match with unusable coordinates lat=%r lon=%r (%s)",
                domain.value,
                record.get("lat"),
                record.get("lon"),
                record.get("display_name"),
            )
            continue
        results.append(result)
    return ClassificationOutcome(results=tuple(results), rejected=rejected, invalid=invalid)


def _classify_intersection(records: List[Any]) -> ClassificationOutcome:
    if not records:
        return ClassificationOutcome()
    first = records[0]
    if not isinstance(first, Mapping):
        return ClassificationOutcome(invalid=1)
    result = to_intersection_result(first)
    if result is None:
        logger.warning(
            "Dropping intersection match with unusable coordinates lat=%r lon=%r (%s)",
            first.get("lat"),
            first.get("lon"),
            first.get("display_name"),
        )
        return ClassificationOutcome(invalid=1)
    return ClassificationOutcome(results=(result,))


def classify(domain: SearchDomain, records: Iterable[Any]) -> ClassificationOutcome:
    """
    Filter and map raw search hits for one finder.

    Response order is preserved; nothing is re-sorted by importance.
    Intersections keep only the first hit and apply no category filter.
    An empty outcome means "no matches", never a transport problem.
    """
    records = list(records or [])
    if domain == SearchDomain.INTERSECTION:
        outcome = _classify_intersection(records)
    else:
        outcome = _classify_filtered(records, domain)
    logger.debug(
        "classify %s: raw=%d kept=%d rejected=%d invalid=%d",
        domain.value,
        len(records),
        len(outcome.results),
        outcome.rejected,
        outcome.invalid,
    )
    return outcome
