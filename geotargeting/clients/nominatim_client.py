"""OpenStreetMap Nominatim REST client for geotargeting.

Handles all HTTP communication with Nominatim: request construction,
usage-policy throttling, exponential backoff retry, and safe JSON parsing.

No business logic lives here — this client returns raw parsed API responses.
Normalization into typed results happens in the GeocodeGateway.

Nominatim usage policy:
- At most one request per second from one application.
- Every request must carry an identifying User-Agent.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Dict, List, Optional

import requests
from requests import Session
from requests.adapters import HTTPAdapter

from config.defaults import (
    GEOCODE_BACKOFF_BASE,
    GEOCODE_COUNTRY_CODES,
    GEOCODE_LANGUAGE,
    GEOCODE_MAX_RETRIES,
    GEOCODE_REQUEST_TIMEOUT,
    NOMINATIM_BASE_URL,
    NOMINATIM_MIN_INTERVAL_SECONDS,
    NOMINATIM_USER_AGENT,
)

logger = logging.getLogger(__name__)


def _safe_parse_json(text: str) -> Optional[Any]:
    """Parse a response body, returning None for empty or malformed JSON."""
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Nominatim unparseable response body: %.200s", text)
        logger.warning("Failed to parse Nominatim response body (length=%d)", len(text))
        return None


class NominatimClient:
    """Client for the Nominatim search and reverse endpoints.

    Args:
        base_url: Nominatim server root (no trailing path).
        user_agent: Identifying User-Agent header.
        max_retries: Maximum retry attempts on transient HTTP errors.
        backoff_base: Base seconds for exponential backoff (doubles per attempt).
        request_timeout: Default HTTP timeout in seconds.
        min_interval_seconds: Minimum seconds between successive requests.
        language: accept-language value for display names.
        country_codes: Comma-separated ISO codes restricting search results.
    """

    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = NOMINATIM_USER_AGENT,
        max_retries: int = GEOCODE_MAX_RETRIES,
        backoff_base: float = GEOCODE_BACKOFF_BASE,
        request_timeout: float = GEOCODE_REQUEST_TIMEOUT,
        min_interval_seconds: float = NOMINATIM_MIN_INTERVAL_SECONDS,
        language: str = GEOCODE_LANGUAGE,
        country_codes: str = GEOCODE_COUNTRY_CODES,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.request_timeout = request_timeout
        self.min_interval_seconds = min_interval_seconds
        self.language = language
        self.country_codes = country_codes
        self._last_request_time: float = 0.0
        self._request_lock: threading.Lock = threading.Lock()

        self._session = Session()
        self._session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
        adapter = HTTPAdapter(max_retries=0)   # We handle retries manually
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    def _enforce_interval(self, deadline: Optional[float] = None) -> bool:
        """Enforce the minimum delay between requests (thread-safe).

        Returns:
            False when the required wait would run past ``deadline``.
        """
        with self._request_lock:
            now = time.monotonic()
            wait = self.min_interval_seconds - (now - self._last_request_time)
            if wait > 0:
                if deadline is not None and now + wait >= deadline:
                    return False
                time.sleep(wait)
            self._last_request_time = time.monotonic()
            return True

    def _backoff(self, wait: float, attempt: int, deadline: Optional[float]) -> bool:
        """Sleep before the next attempt; False when no attempt should follow."""
        if attempt >= self.max_retries:
            return False
        if deadline is not None and time.monotonic() + wait >= deadline:
            return False
        time.sleep(wait)
        return True

    def _get_with_retry(
        self,
        endpoint: str,
        params: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Execute an HTTP GET with exponential backoff retry.

        Args:
            endpoint: Path under base_url ("search" or "reverse").
            params: Query parameters.
            timeout: Overall limit in seconds for the call, covering every
                attempt, throttling wait and backoff sleep. When None, each
                attempt is bounded by request_timeout alone.

        Returns:
            Response text on success, None on permanent failure, exhausted
            retries or a passed deadline.
        """
        url = f"{self.base_url}/{endpoint}"
        deadline = time.monotonic() + timeout if timeout is not None else None
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            if not self._enforce_interval(deadline):
                logger.warning("Nominatim: %.1fs deadline reached before /%s request", timeout, endpoint)
                return None

            if deadline is None:
                request_timeout = self.request_timeout
            else:
                request_timeout = deadline - time.monotonic()
                if request_timeout <= 0:
                    logger.warning("Nominatim: %.1fs deadline reached for /%s", timeout, endpoint)
                    return None

            try:
                resp = self._session.get(url, params=params, timeout=request_timeout)

                if resp.status_code == 429:
                    wait = self.backoff_base * (2 ** attempt)
                    logger.warning(
                        "Nominatim rate limit (429) — backing off %.1fs (attempt %d/%d)",
                        wait,
                        attempt + 1,
                        attempts,
                    )
                    if not self._backoff(wait, attempt, deadline):
                        break
                    continue

                if resp.status_code in (500, 502, 503, 504):
                    wait = self.backoff_base * (attempt + 1)
                    logger.warning(
                        "Nominatim server error %d — retrying in %.1fs (attempt %d/%d)",
                        resp.status_code,
                        wait,
                        attempt + 1,
                        attempts,
                    )
                    if not self._backoff(wait, attempt, deadline):
                        break
                    continue

                if resp.status_code != 200:
                    logger.warning("Nominatim returned HTTP %d for /%s", resp.status_code, endpoint)
                    return None

                return resp.text

            except requests.exceptions.Timeout:
                wait = self.backoff_base * (2 ** attempt)
                logger.warning(
                    "Nominatim request timeout — retrying in %.1fs (attempt %d/%d)",
                    wait,
                    attempt + 1,
                    attempts,
                )
                if not self._backoff(wait, attempt, deadline):
                    break
            except requests.exceptions.ConnectionError as exc:
                wait = self.backoff_base * (2 ** attempt)
                logger.warning(
                    "Nominatim connection error: %s — retrying in %.1fs (attempt %d/%d)",
                    exc,
                    wait,
                    attempt + 1,
                    attempts,
                )
                if not self._backoff(wait, attempt, deadline):
                    break
            except requests.exceptions.RequestException as exc:
                logger.error("Nominatim request failed permanently: %s", exc)
                return None

        logger.error("Nominatim: gave up on /%s after %d attempt(s)", endpoint, attempt + 1)
        return None

    def search(
        self,
        query: str,
        limit: int = 1,
        timeout: Optional[float] = None,
    ) -> Optional[List[Dict[str, Any]]]:
        """Free-text forward search.

        Args:
            query: Address or place text.
            limit: Maximum number of candidates.
            timeout: Overall limit in seconds, retries included.

        Returns:
            List of raw place dicts (possibly empty), or None on failure.
        """
        params: Dict[str, Any] = {
            "format": "json",
            "q": query,
            "limit": limit,
            "addressdetails": 1,
            "accept-language": self.language,
        }
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        raw = self._get_with_retry("search", params, timeout)
        if raw is None:
            return None
        parsed = _safe_parse_json(raw)
        if not isinstance(parsed, list):
            if parsed is not None:
                logger.warning("Nominatim search returned %s, expected a list",
                               type(parsed).__name__)
            return None
        return parsed

    def reverse(
        self,
        lat: float,
        lon: float,
        timeout: Optional[float] = None,
    ) -> Optional[Dict[str, Any]]:
        """Reverse lookup for a point.

        Returns:
            Raw place dict, or None on failure. A dict with an "error" key
            means the provider found nothing at that point.
        """
        params: Dict[str, Any] = {
            "format": "json",
            "lat": f"{lat:.8f}",
            "lon": f"{lon:.8f}",
            "addressdetails": 1,
            "accept-language": self.language,
        }
        raw = self._get_with_retry("reverse", params, timeout)
        if raw is None:
            return None
        parsed = _safe_parse_json(raw)
        if not isinstance(parsed, dict):
            return None
        return parsed

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> "NominatimClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
