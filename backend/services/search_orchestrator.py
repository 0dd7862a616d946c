"""
Per-finder search state machine.

Each finder owns one SearchOrchestrator. A submit clears the previous
results, moves to LOADING and waits on the geocoding client; the answer is
then classified into RESULTS, EMPTY (guidance message) or FAILED (generic
message). Nothing is raised to the caller for either outcome.

Every submit takes a new sequence number. A response that comes back for an
older sequence is not applied to the finder, so a slow first search cannot
overwrite a newer one. Its caller still gets its own outcome back.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from starlette.concurrency import run_in_threadpool

from domain.models import SearchDomain, SearchState, SearchStatus
from services.finders import PROFILES, FinderProfile
from services.geocoding import GeocodingClient, GeocodingError, get_default_client
from services.query_builder import build_query
from services.result_classifier import classify

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    def __init__(self, profile: FinderProfile, client: GeocodingClient):
        self.profile = profile
        self.client = client
        self._sequence = 0
        self._state = SearchState(domain=profile.domain)

    @property
    def domain(self) -> SearchDomain:
        return self.profile.domain

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def begin(self, query: str | None = None) -> int:
        """Enter LOADING for a new search and return its sequence number."""
        self._sequence += 1
        self._state = SearchState(
            domain=self.profile.domain,
            status=SearchStatus.LOADING,
            query=query,
            sequence=self._sequence,
        )
        return self._sequence

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._sequence:
            logger.debug(
                "Discarding stale %s response seq=%d (latest=%d)",
                self.profile.domain.value,
                sequence,
                self._sequence,
            )
            return True
        return False

    def _records_state(self, base: SearchState, records: List[Any]) -> SearchState:
        try:
            outcome = classify(self.profile.domain, records)
        except Exception as exc:
            logger.exception("%s response could not be classified", self.profile.domain.value)
            return self._failure_state(base, exc)
        if outcome.empty:
            return replace(base, status=SearchStatus.EMPTY, message=self.profile.empty_message)
        return replace(base, status=SearchStatus.RESULTS, results=outcome.results)

    def _failure_state(self, base: SearchState, error: Exception) -> SearchState:
        logger.warning("%s search failed: %s", self.profile.domain.value, error)
        return replace(base, status=SearchStatus.FAILED, message=self.profile.failure_message)

    def _settle(self, state: SearchState) -> bool:
        if self._is_stale(state.sequence):
            return False
        self._state = state
        return True

    def apply_records(self, sequence: int, records: List[Any]) -> bool:
        """Classify a response; returns False when it was discarded as stale."""
        if self._is_stale(sequence):
            return False
        return self._settle(self._records_state(self._state, records))

    def apply_failure(self, sequence: int, error: Exception) -> bool:
        if self._is_stale(sequence):
            return False
        return self._settle(self._failure_state(self._state, error))

    async def submit(self, *terms: str) -> SearchState:
        """Run one search for the given form inputs and return its final state.

        The returned state always belongs to this call's query. The finder's
        shared ``state`` is only updated if no newer search was submitted
        while this one was waiting.
        """
        query = build_query(self.profile.domain, *terms)
        self.begin(query)
        pending = self._state
        try:
            records = await run_in_threadpool(
                self.client.search,
                query,
                self.profile.limit,
                self.profile.address_details,
            )
        except GeocodingError as exc:
            final = self._failure_state(pending, exc)
        else:
            final = self._records_state(pending, records)
        self._settle(final)
        return final


class FinderPanel:
    """The three independent finders shown side by side.

    They share the geocoding client but no state; one failing never touches
    the others.
    """

    def __init__(self, client: Optional[GeocodingClient] = None):
        client = client or get_default_client()
        self.finders: Dict[SearchDomain, SearchOrchestrator] = {
            domain: SearchOrchestrator(profile, client) for domain, profile in PROFILES.items()
        }

    def get(self, domain: SearchDomain) -> SearchOrchestrator:
        return self.finders[domain]

    @property
    def intersection(self) -> SearchOrchestrator:
        return self.finders[SearchDomain.INTERSECTION]

    @property
    def street(self) -> SearchOrchestrator:
        return self.finders[SearchDomain.STREET]

    @property
    def highway(self) -> SearchOrchestrator:
        return self.finders[SearchDomain.HIGHWAY]

    def states(self) -> Dict[SearchDomain, SearchState]:
        return {domain: finder.state for domain, finder in self.finders.items()}


_default_panel: Optional[FinderPanel] = None


def get_default_panel() -> FinderPanel:
    global _default_panel
    if _default_panel is None:
        _default_panel = FinderPanel()
    return _default_panel
