"""Caching geocode gateway for geotargeting.

The gateway is the engine's only network boundary. It wraps the Nominatim
client, normalizes raw responses into typed results, and caches them in an
explicit LookupCache passed in by the caller.

Caching rules:
  - Forward lookups are keyed by the whitespace-normalized address text.
  - Reverse lookups are keyed by "lat:lng" at six decimals.
  - Autocomplete is keyed by "<normalized text>:<limit>".
  - OK and NOT_FOUND outcomes are cached; UNAVAILABLE is not, so a provider
    outage does not poison later lookups.

Concurrent misses for the same key are not coalesced; duplicate provider
calls are idempotent.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from config.defaults import REVERSE_KEY_PRECISION
from config.settings import TargetingConfig
from geotargeting.clients.nominatim_client import NominatimClient
from geotargeting.io.cache import LookupCache
from geotargeting.models.geocode import (
    AddressSuggestion,
    GeocodeResult,
    LookupStatus,
    ReverseGeocodeResult,
    StructuredAddress,
)
from geotargeting.models.targeting import Coordinate
from geotargeting.utils.geo_utils import is_valid_coordinate
from geotargeting.utils.regions import state_code_for

logger = logging.getLogger(__name__)

# Nominatim reports the locality under different keys depending on its size
_CITY_KEYS = ("city", "town", "village", "municipality", "city_district")


def normalize_query(text: str) -> str:
    """Collapse runs of whitespace and trim the ends."""
    return " ".join(text.split())


def reverse_key(coordinate: Coordinate, precision: int = REVERSE_KEY_PRECISION) -> str:
    """Cache key for a reverse lookup: ``"lat:lng"`` at fixed precision."""
    return f"{coordinate.latitude:.{precision}f}:{coordinate.longitude:.{precision}f}"


def parse_address(raw: Optional[Dict[str, Any]]) -> StructuredAddress:
    """Extract structured address fields from a Nominatim ``address`` block."""
    raw = raw or {}
    city = next((str(raw[k]) for k in _CITY_KEYS if raw.get(k)), "")
    state = str(raw.get("state", "") or "")

    state_code = ""
    iso = str(raw.get("ISO3166-2-lvl4", "") or "")
    if "-" in iso:
        state_code = iso.split("-", 1)[1].upper()
    elif state:
        state_code = state_code_for(state) or ""

    return StructuredAddress(
        city=city,
        state=state,
        state_code=state_code,
        country=str(raw.get("country", "") or ""),
        postcode=str(raw.get("postcode", "") or ""),
        road=str(raw.get("road", "") or ""),
        house_number=str(raw.get("house_number", "") or ""),
    )


def _parse_coordinate(item: Dict[str, Any]) -> Optional[Coordinate]:
    try:
        coordinate = Coordinate(float(item["lat"]), float(item["lon"]))
    except (KeyError, TypeError, ValueError):
        return None
    return coordinate if is_valid_coordinate(coordinate) else None


class GeocodeGateway:
    """Forward geocoding, reverse geocoding and autocomplete with caching.

    Args:
        client: Nominatim HTTP client.
        cache: Shared lookup cache; a fresh unbounded cache if omitted.
        autocomplete_min_chars: Shorter autocomplete inputs return [].
        autocomplete_limit: Default suggestion count.
    """

    def __init__(
        self,
        client: NominatimClient,
        cache: Optional[LookupCache] = None,
        autocomplete_min_chars: int = 3,
        autocomplete_limit: int = 5,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else LookupCache()
        self.autocomplete_min_chars = autocomplete_min_chars
        self.autocomplete_limit = autocomplete_limit

    @classmethod
    def from_config(
        cls,
        config: TargetingConfig,
        cache: Optional[LookupCache] = None,
    ) -> "GeocodeGateway":
        """Build a gateway, client and (unless given) cache from configuration."""
        client = NominatimClient(
            base_url=config.nominatim_base_url,
            user_agent=config.user_agent,
            max_retries=config.max_retries,
            backoff_base=config.backoff_base,
            request_timeout=config.request_timeout,
            min_interval_seconds=config.min_interval_seconds,
            language=config.language,
            country_codes=config.country_codes,
        )
        if cache is None:
            cache = LookupCache(
                capacity=config.cache_capacity,
                ttl_seconds=config.cache_ttl_seconds,
            )
        return cls(
            client,
            cache,
            autocomplete_min_chars=config.autocomplete_min_chars,
            autocomplete_limit=config.autocomplete_limit,
        )

    def forward_geocode(self, address: str, timeout: Optional[float] = None) -> GeocodeResult:
        """Resolve free-text address to a coordinate and display name.

        Args:
            address: Address text.
            timeout: Upper bound in seconds for the whole provider lookup,
                retries and backoff included. Past it the result is UNAVAILABLE.

        Returns:
            GeocodeResult with status OK, NOT_FOUND or UNAVAILABLE.
        """
        query = normalize_query(address)
        if not query:
            return GeocodeResult(query=query, status=LookupStatus.NOT_FOUND)

        key = f"forward|{query}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        places = self.client.search(query, limit=1, timeout=timeout)
        if places is None:
            logger.warning("Forward geocode unavailable for %.80r", query)
            return GeocodeResult(query=query, status=LookupStatus.UNAVAILABLE)

        result = GeocodeResult(query=query, status=LookupStatus.NOT_FOUND)
        if places:
            place = places[0]
            coordinate = _parse_coordinate(place)
            if coordinate is not None:
                result = GeocodeResult(
                    query=query,
                    status=LookupStatus.OK,
                    coordinate=coordinate,
                    display_name=str(place.get("display_name", "") or ""),
                    address=parse_address(place.get("address")),
                )
            else:
                logger.warning("Forward geocode for %.80r returned an unusable position", query)

        self.cache.set(key, result)
        return result

    def reverse_geocode(
        self,
        coordinate: Coordinate,
        timeout: Optional[float] = None,
    ) -> ReverseGeocodeResult:
        """Resolve a coordinate to a display name and structured address."""
        key = f"reverse|{reverse_key(coordinate)}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        place = self.client.reverse(coordinate.latitude, coordinate.longitude, timeout=timeout)
        if place is None:
            logger.warning(
                "Reverse geocode unavailable for (%.5f, %.5f)",
                coordinate.latitude, coordinate.longitude,
            )
            return ReverseGeocodeResult(coordinate=coordinate, status=LookupStatus.UNAVAILABLE)

        if "error" in place or not place.get("address"):
            result = ReverseGeocodeResult(coordinate=coordinate, status=LookupStatus.NOT_FOUND)
        else:
            result = ReverseGeocodeResult(
                coordinate=coordinate,
                status=LookupStatus.OK,
                display_name=str(place.get("display_name", "") or ""),
                address=parse_address(place.get("address")),
            )

        self.cache.set(key, result)
        return result

    def autocomplete(
        self,
        partial_text: str,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> List[AddressSuggestion]:
        """Suggest candidate addresses for partially typed text.

        Inputs shorter than autocomplete_min_chars return [] without any
        lookup. Provider failures also return [] and are not cached.
        """
        query = normalize_query(partial_text)
        if len(query) < self.autocomplete_min_chars:
            return []

        limit = limit if limit is not None else self.autocomplete_limit
        key = f"autocomplete|{query}:{limit}"
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)

        places = self.client.search(query, limit=limit, timeout=timeout)
        if places is None:
            logger.warning("Autocomplete unavailable for %.80r", query)
            return []

        suggestions: List[AddressSuggestion] = []
        for place in places:
            coordinate = _parse_coordinate(place)
            if coordinate is None:
                continue
            suggestions.append(
                AddressSuggestion(
                    coordinate=coordinate,
                    display_name=str(place.get("display_name", "") or ""),
                    address=parse_address(place.get("address")),
                    importance=place.get("importance"),
                    place_id=place.get("place_id"),
                    raw=place,
                )
            )

        self.cache.set(key, tuple(suggestions))
        return suggestions

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "GeocodeGateway":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
