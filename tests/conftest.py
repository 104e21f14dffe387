"""Shared pytest fixtures for geotargeting tests.

- Coordinates are real Brazilian locations chosen for known density classes.
- Geocoding is exercised through a real GeocodeGateway over a MagicMock
  NominatimClient; no real HTTP calls are made in any test.
"""

from __future__ import annotations

from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from geotargeting.clients.nominatim_client import NominatimClient
from geotargeting.geocode_gateway import GeocodeGateway
from geotargeting.io.cache import LookupCache
from geotargeting.models.targeting import Coordinate, PolygonShape, RadiusShape


# ── Coordinates ──────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def sao_paulo() -> Coordinate:
    """São Paulo metro centre (Metropolitan)."""
    return Coordinate(-23.5505, -46.6333)


@pytest.fixture(scope="session")
def rio() -> Coordinate:
    return Coordinate(-22.9068, -43.1729)


@pytest.fixture(scope="session")
def campinas() -> Coordinate:
    """Campinas, ~84 km from São Paulo (Urban)."""
    return Coordinate(-22.9099, -47.0626)


@pytest.fixture(scope="session")
def brasilia() -> Coordinate:
    """Brasília, > 100 km from every metro centre in the table (Suburban)."""
    return Coordinate(-15.7939, -47.8828)


# ── Shapes ───────────────────────────────────────────────────────────────────────

@pytest.fixture
def unit_square() -> PolygonShape:
    """Square of side 1° centred at the origin."""
    return PolygonShape(vertices=(
        Coordinate(-0.5, -0.5),
        Coordinate(-0.5, 0.5),
        Coordinate(0.5, 0.5),
        Coordinate(0.5, -0.5),
    ))


@pytest.fixture
def l_shape() -> PolygonShape:
    """Concave L-shaped polygon with the (1..2, 1..2) corner cut out."""
    return PolygonShape(vertices=(
        Coordinate(0, 0),
        Coordinate(0, 2),
        Coordinate(1, 2),
        Coordinate(1, 1),
        Coordinate(2, 1),
        Coordinate(2, 0),
    ))


@pytest.fixture
def campinas_radius(campinas) -> RadiusShape:
    return RadiusShape(center=campinas, radius_km=1.0)


# ── Nominatim payloads ───────────────────────────────────────────────────────────

@pytest.fixture
def paulista_place() -> Dict[str, Any]:
    """Raw Nominatim search item for an address on Avenida Paulista."""
    return {
        "place_id": 123456,
        "lat": "-23.5613",
        "lon": "-46.6565",
        "display_name": "Avenida Paulista, Bela Vista, São Paulo, Brasil",
        "importance": 0.62,
        "address": {
            "road": "Avenida Paulista",
            "house_number": "1000",
            "city": "São Paulo",
            "state": "São Paulo",
            "ISO3166-2-lvl4": "BR-SP",
            "postcode": "01310-100",
            "country": "Brasil",
        },
    }


@pytest.fixture
def campinas_reverse() -> Dict[str, Any]:
    """Raw Nominatim reverse response for central Campinas."""
    return {
        "display_name": "Centro, Campinas, São Paulo, Brasil",
        "address": {
            "town": "Campinas",
            "state": "São Paulo",
            "ISO3166-2-lvl4": "BR-SP",
            "country": "Brasil",
        },
    }


# ── Gateway fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def mock_nominatim_client() -> MagicMock:
    """NominatimClient double: search/reverse return empty results by default."""
    client = MagicMock(spec=NominatimClient)
    client.search.return_value = []
    client.reverse.return_value = {"error": "Unable to geocode"}
    return client


@pytest.fixture
def gateway(mock_nominatim_client) -> GeocodeGateway:
    """Real gateway with a fresh unbounded cache over the mocked client."""
    return GeocodeGateway(mock_nominatim_client, LookupCache())


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
