"""Unit tests for geotargeting.geocode_gateway.

Covers:
- normalize_query / reverse_key / parse_address helpers
- forward_geocode: OK, NOT_FOUND, UNAVAILABLE, caching rules
- reverse_geocode: OK, provider "error" payloads, caching rules
- autocomplete: minimum length, limits, caching, failure handling
- from_config wiring
"""

from __future__ import annotations

from config.settings import TargetingConfig
from geotargeting.geocode_gateway import (
    GeocodeGateway,
    normalize_query,
    parse_address,
    reverse_key,
)
from geotargeting.io.cache import LookupCache
from geotargeting.models.geocode import LookupStatus
from geotargeting.models.targeting import Coordinate


class TestHelpers:
    def test_normalize_query_collapses_whitespace(self):
        assert normalize_query("  Av.  Paulista,\t1000 ") == "Av. Paulista, 1000"

    def test_reverse_key_fixed_precision(self):
        assert reverse_key(Coordinate(-22.9099, -47.0626)) == "-22.909900:-47.062600"

    def test_reverse_key_merges_nearby_points(self):
        a = Coordinate(-22.90990001, -47.0626)
        b = Coordinate(-22.90990004, -47.0626)
        assert reverse_key(a) == reverse_key(b)

    def test_parse_address_prefers_iso_state_code(self, paulista_place):
        address = parse_address(paulista_place["address"])
        assert address.city == "São Paulo"
        assert address.state_code == "SP"
        assert address.postcode == "01310-100"
        assert address.road == "Avenida Paulista"
        assert address.city_key() == "São Paulo, SP"

    def test_parse_address_town_and_state_name_fallback(self):
        address = parse_address({"town": "Paraty", "state": "Rio de Janeiro"})
        assert address.city == "Paraty"
        assert address.state_code == "RJ"

    def test_parse_address_empty(self):
        address = parse_address(None)
        assert address.city == ""
        assert address.state_code == ""


class TestForwardGeocode:
    def test_found(self, gateway, mock_nominatim_client, paulista_place):
        mock_nominatim_client.search.return_value = [paulista_place]
        result = gateway.forward_geocode("Avenida Paulista, 1000")

        assert result.status == LookupStatus.OK
        assert result.found is True
        assert result.coordinate == Coordinate(-23.5613, -46.6565)
        assert result.display_name.startswith("Avenida Paulista")
        assert result.address.state_code == "SP"

    def test_repeat_lookup_is_served_from_cache(self, gateway, mock_nominatim_client, paulista_place):
        """Equal text (after whitespace normalization) hits the provider once."""
        mock_nominatim_client.search.return_value = [paulista_place]
        first = gateway.forward_geocode("Avenida Paulista, 1000")
        second = gateway.forward_geocode("  Avenida   Paulista, 1000 ")

        assert first == second
        assert mock_nominatim_client.search.call_count == 1

    def test_not_found_is_cached(self, gateway, mock_nominatim_client):
        result = gateway.forward_geocode("Rua Inexistente 999")
        gateway.forward_geocode("Rua Inexistente 999")

        assert result.status == LookupStatus.NOT_FOUND
        assert result.coordinate is None
        assert mock_nominatim_client.search.call_count == 1

    def test_unavailable_is_not_cached(self, gateway, mock_nominatim_client, paulista_place):
        """A provider failure is reported, and the next call tries again."""
        mock_nominatim_client.search.return_value = None
        assert gateway.forward_geocode("Avenida Paulista").status == LookupStatus.UNAVAILABLE

        mock_nominatim_client.search.return_value = [paulista_place]
        assert gateway.forward_geocode("Avenida Paulista").status == LookupStatus.OK
        assert mock_nominatim_client.search.call_count == 2

    def test_blank_address_skips_provider(self, gateway, mock_nominatim_client):
        assert gateway.forward_geocode("   ").status == LookupStatus.NOT_FOUND
        mock_nominatim_client.search.assert_not_called()

    def test_unusable_position_is_not_found(self, gateway, mock_nominatim_client):
        mock_nominatim_client.search.return_value = [{"lat": "abc", "lon": "1"}]
        assert gateway.forward_geocode("Somewhere").status == LookupStatus.NOT_FOUND

    def test_timeout_is_forwarded(self, gateway, mock_nominatim_client):
        gateway.forward_geocode("Campinas", timeout=2.5)
        mock_nominatim_client.search.assert_called_once_with("Campinas", limit=1, timeout=2.5)


class TestReverseGeocode:
    def test_found(self, gateway, mock_nominatim_client, campinas, campinas_reverse):
        mock_nominatim_client.reverse.return_value = campinas_reverse
        result = gateway.reverse_geocode(campinas)

        assert result.status == LookupStatus.OK
        assert result.found is True
        assert result.address.city_key() == "Campinas, SP"
        assert result.display_name.startswith("Centro, Campinas")

    def test_error_payload_is_not_found_and_cached(self, gateway, mock_nominatim_client):
        ocean = Coordinate(-30.0, -30.0)
        assert gateway.reverse_geocode(ocean).status == LookupStatus.NOT_FOUND
        assert gateway.reverse_geocode(ocean).found is False
        assert mock_nominatim_client.reverse.call_count == 1

    def test_unavailable_is_not_cached(self, gateway, mock_nominatim_client, campinas):
        mock_nominatim_client.reverse.return_value = None
        assert gateway.reverse_geocode(campinas).status == LookupStatus.UNAVAILABLE
        gateway.reverse_geocode(campinas)
        assert mock_nominatim_client.reverse.call_count == 2


class TestAutocomplete:
    def test_short_input_returns_empty_without_lookup(self, gateway, mock_nominatim_client):
        assert gateway.autocomplete("Av") == []
        assert gateway.autocomplete(" a  ") == []
        mock_nominatim_client.search.assert_not_called()

    def test_suggestions(self, gateway, mock_nominatim_client, paulista_place):
        broken = {"lat": None, "lon": None, "display_name": "?"}
        mock_nominatim_client.search.return_value = [paulista_place, broken]
        suggestions = gateway.autocomplete("Avenida Paul")

        assert len(suggestions) == 1
        s = suggestions[0]
        assert s.coordinate == Coordinate(-23.5613, -46.6565)
        assert s.place_id == 123456
        assert s.importance == 0.62
        assert s.address.city == "São Paulo"
        mock_nominatim_client.search.assert_called_once_with("Avenida Paul", limit=5, timeout=None)

    def test_cache_key_includes_limit(self, gateway, mock_nominatim_client, paulista_place):
        mock_nominatim_client.search.return_value = [paulista_place]
        gateway.autocomplete("Avenida Paul", limit=3)
        gateway.autocomplete("Avenida Paul", limit=3)
        gateway.autocomplete("Avenida Paul", limit=10)
        assert mock_nominatim_client.search.call_count == 2

    def test_cached_result_is_a_fresh_list(self, gateway, mock_nominatim_client, paulista_place):
        mock_nominatim_client.search.return_value = [paulista_place]
        first = gateway.autocomplete("Avenida Paul")
        first.clear()
        assert len(gateway.autocomplete("Avenida Paul")) == 1

    def test_empty_results_are_cached(self, gateway, mock_nominatim_client):
        assert gateway.autocomplete("xyzzy") == []
        assert gateway.autocomplete("xyzzy") == []
        assert mock_nominatim_client.search.call_count == 1

    def test_failure_returns_empty_and_is_not_cached(self, gateway, mock_nominatim_client):
        mock_nominatim_client.search.return_value = None
        assert gateway.autocomplete("Campinas") == []
        gateway.autocomplete("Campinas")
        assert mock_nominatim_client.search.call_count == 2


class TestGatewayConstruction:
    def test_from_config(self, monkeypatch):
        monkeypatch.delenv("NOMINATIM_BASE_URL", raising=False)
        config = TargetingConfig(
            user_agent="fleet-ads/2.0",
            cache_capacity=10,
            cache_ttl_seconds=60,
            autocomplete_min_chars=4,
        )
        gateway = GeocodeGateway.from_config(config)
        try:
            assert gateway.client.user_agent == "fleet-ads/2.0"
            assert gateway.cache.capacity == 10
            assert gateway.cache.ttl_seconds == 60
            assert gateway.autocomplete_min_chars == 4
        finally:
            gateway.close()

    def test_explicit_cache_is_used(self):
        cache = LookupCache(capacity=3)
        gateway = GeocodeGateway.from_config(TargetingConfig(), cache=cache)
        try:
            assert gateway.cache is cache
        finally:
            gateway.close()

    def test_context_manager_closes_client(self, mock_nominatim_client):
        with GeocodeGateway(mock_nominatim_client) as gateway:
            assert gateway.client is mock_nominatim_client
        mock_nominatim_client.close.assert_called_once()
