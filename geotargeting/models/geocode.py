"""Geocoding result data models for geotargeting.

Gateway lookups never raise on provider failure; every result carries a
LookupStatus so callers can tell "no such address" from "provider down".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from geotargeting.models.targeting import Coordinate


class LookupStatus:
    """Status codes carried by geocoding results."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass
class StructuredAddress:
    """Address components extracted from a provider response."""

    city: str = ""
    state: str = ""
    state_code: str = ""
    country: str = ""
    postcode: str = ""
    road: str = ""
    house_number: str = ""

    def city_key(self) -> str:
        """Return the "City, StateCode" key used by city-list targeting."""
        return f"{self.city}, {self.state_code or self.state}"


@dataclass
class GeocodeResult:
    """Forward geocoding outcome for a free-text address."""

    query: str
    status: str = LookupStatus.OK
    coordinate: Optional[Coordinate] = None
    display_name: str = ""
    address: Optional[StructuredAddress] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.OK and self.coordinate is not None


@dataclass
class ReverseGeocodeResult:
    """Reverse geocoding outcome for a coordinate."""

    coordinate: Coordinate
    status: str = LookupStatus.OK
    display_name: str = ""
    address: Optional[StructuredAddress] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.OK and self.address is not None


@dataclass
class AddressSuggestion:
    """A single autocomplete candidate."""

    coordinate: Coordinate
    display_name: str
    address: Optional[StructuredAddress] = None
    importance: Optional[float] = None
    place_id: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict)
