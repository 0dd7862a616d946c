"""Forward geocoding against the OpenStreetMap Nominatim search API.

Only the ``/search`` endpoint is used. Requests share one session and a
simple global rate limit so that several finders searching at once still
respect the Nominatim usage policy.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from typing import Any, Dict, List, Optional, Protocol

import requests

from settings import FALLBACK_USER_AGENT, settings

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """The search service could not be reached or answered with garbage."""


class GeocodingClient(Protocol):
    def search(self, query: str, limit: int, address_details: bool = False) -> List[Dict[str, Any]]:
        ...


def _redact_email(ua: str) -> str:
    if "@" not in ua:
        return ua
    return re.sub(r"[^\s()]+@[^\s()]+", "<redacted>", ua)


def build_headers(user_agent: Optional[str], referer: Optional[str] = None) -> Dict[str, str]:
    headers = {"User-Agent": user_agent or FALLBACK_USER_AGENT}
    if referer:
        headers["Referer"] = referer
    return headers


class NominatimClient:
    """Thin wrapper over ``GET {base_url}/search?format=json``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        referer: Optional[str] = None,
        timeout: Optional[float] = None,
        min_interval: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.NOMINATIM_BASE_URL).rstrip("/")
        if self.base_url.endswith("/search"):
            self.base_url = self.base_url.rsplit("/", 1)[0]
        ua = user_agent or settings.NOMINATIM_USER_AGENT
        if ua is None:
            logger.warning(
                "NOMINATIM_USER_AGENT not set in environment; using fallback UA. "
                "This may violate Nominatim usage policy."
            )
        self.headers = build_headers(ua, referer or settings.NOMINATIM_REFERER)
        self.timeout = timeout if timeout is not None else settings.NOMINATIM_TIMEOUT_SECONDS
        self.min_interval = min_interval if min_interval is not None else settings.NOMINATIM_MIN_INTERVAL
        self._session = session or requests.Session()
        self._lock = threading.Lock()
        self._last_request_ts: float = 0.0
        self._logged_ua = False

    def _throttled_get(self, url: str, *, params: Dict[str, Any]) -> requests.Response:
        """Perform a GET request with a simple global rate limit."""
        with self._lock:
            now = time.time()
            delta = now - self._last_request_ts
            if delta < self.min_interval:
                time.sleep(self.min_interval - delta)
            self._last_request_ts = time.time()
        return self._session.get(url, params=params, headers=self.headers, timeout=self.timeout)

    def search(self, query: str, limit: int, address_details: bool = False) -> List[Dict[str, Any]]:
        """Run a free-text search and return the decoded JSON array.

        Raises GeocodingError on network errors, timeouts, HTTP error
        statuses, non-JSON bodies and payloads that are not a list.
        An empty list is a valid answer.
        """
        if not self._logged_ua:
            logger.debug("Nominatim User-Agent: %s", _redact_email(self.headers["User-Agent"]))
            self._logged_ua = True

        params: Dict[str, Any] = {
            "q": query,
            "format": "json",
            "limit": str(limit),
        }
        if address_details:
            params["addressdetails"] = "1"
        logger.debug("Nominatim search q=%r limit=%s addressdetails=%s", query, limit, address_details)

        try:
            resp = self._throttled_get(f"{self.base_url}/search", params=params)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Nominatim search error for q=%r: %s", query, exc)
            raise GeocodingError(f"search request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            logger.warning("Nominatim search JSON error for q=%r: %s", query, exc)
            raise GeocodingError("search response was not JSON") from exc

        if not isinstance(data, list):
            logger.warning("Nominatim search for q=%r returned %s, expected a list", query, type(data).__name__)
            raise GeocodingError("search response was not a JSON array")
        return data


_default_client: Optional[NominatimClient] = None


def get_default_client() -> NominatimClient:
    global _default_client
    if _default_client is None:
        _default_client = NominatimClient()
    return _default_client
