"""
Core domain models for the road finder.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

# Raw Nominatim search hit, as decoded from JSON.
LocationRecord = Mapping[str, Any]


class SearchDomain(str, Enum):
    """Which finder a query belongs to; selects the filter and result shape."""
    INTERSECTION = "intersection"
    STREET = "street"
    HIGHWAY = "highway"


class SearchStatus(str, Enum):
    """
    Lifecycle of a single finder.

    IDLE is only seen before the first submit. RESULTS, EMPTY and FAILED are
    terminal for a search but any of them goes back to LOADING on the next one.
    """
    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ClassifiedResult:
    """A street or highway match that passed its domain filter."""
    lat: float
    lon: float
    display_name: str
    type: str
    importance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "display_name": self.display_name,
            "type": self.type,
            "importance": self.importance,
        }


@dataclass(frozen=True)
class IntersectionResult:
    """Best (first) match for a two-road query."""
    lat: float
    lon: float
    display_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "display_name": self.display_name,
        }


FinderResult = Union[ClassifiedResult, IntersectionResult]


@dataclass(frozen=True)
class ClassificationOutcome:
    """Filtered results plus counts of what was dropped and why."""
    results: Tuple[FinderResult, ...] = ()
    rejected: int = 0  # failed the domain predicate
    invalid: int = 0  # unusable coordinates or malformed entry

    @property
    def empty(self) -> bool:
        return not self.results


@dataclass(frozen=True)
class SearchState:
    """Snapshot of one finder after its latest transition."""
    domain: SearchDomain
    status: SearchStatus = SearchStatus.IDLE
    query: str | None = None
    results: Tuple[FinderResult, ...] = field(default_factory=tuple)
    message: str | None = None
    sequence: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == SearchStatus.LOADING
