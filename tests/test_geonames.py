"""Tests for the GeoNames client and the offline place table."""

import asyncio

import httpx
import pytest

from config.settings import Settings
from sources.geonames_client import GeoNamesClient, fallback_places

KORAMANGALA = {
    "lat": "12.9352",
    "lng": "77.6245",
    "name": "Koramangala",
    "countryName": "India",
    "adminName1": "Karnataka",
    "population": 85000,
}


def make_client(handler, **settings_overrides):
    settings = Settings(**{"use_mock_geo": False, **settings_overrides})
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeoNamesClient(settings, client=http)


class TestSearchPlaces:
    def test_parses_results(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"geonames": [KORAMANGALA]})

        client = make_client(handler)
        places = asyncio.run(client.search_places("Koramangala"))

        assert len(places) == 1
        assert places[0].name == "Koramangala"
        assert places[0].lat == 12.9352
        assert places[0].admin_name == "Karnataka"
        assert places[0].population == 85000

        params = requests[0].url.params
        assert requests[0].url.path == "/searchJSON"
        assert params["q"] == "Koramangala"
        assert params["country"] == "IN"
        assert params["maxRows"] == "10"
        assert params["username"] == "demo"

    def test_drops_entries_without_coordinates(self):
        def handler(request):
            return httpx.Response(200, json={"geonames": [{"lat": "0", "lng": "0", "name": "Null Island"}, KORAMANGALA]})

        places = asyncio.run(make_client(handler).search_places("Koramangala"))
        assert [p.name for p in places] == ["Koramangala"]

    def test_results_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"geonames": [KORAMANGALA]})

        client = make_client(handler)

        async def search_twice():
            await client.search_places("Koramangala")
            return await client.search_places("Koramangala")

        places = asyncio.run(search_twice())
        assert len(calls) == 1
        assert places[0].name == "Koramangala"

    def test_http_error_uses_fallback(self):
        def handler(request):
            return httpx.Response(503)

        places = asyncio.run(make_client(handler).search_places("Powai"))
        assert [p.name for p in places] == ["Powai"]

    def test_unexpected_format_uses_fallback(self):
        def handler(request):
            return httpx.Response(200, json={"status": {"message": "user account not enabled"}})

        places = asyncio.run(make_client(handler).search_places("Noida"))
        assert [p.name for p in places] == ["Noida"]

    def test_network_error_uses_fallback(self):
        def handler(request):
            raise httpx.ConnectError("unreachable")

        places = asyncio.run(make_client(handler).search_places("Atlantis"))
        assert places == []

    def test_mock_mode_skips_http(self):
        def handler(request):
            pytest.fail("no request expected in mock mode")

        client = make_client(handler, use_mock_geo=True)
        location = asyncio.run(client.geocode("Cyber City"))
        assert location.admin_name == "Haryana"


class TestGeocode:
    def test_first_match(self):
        def handler(request):
            return httpx.Response(200, json={"geonames": [KORAMANGALA, {**KORAMANGALA, "name": "Second"}]})

        location = asyncio.run(make_client(handler).geocode("Koramangala"))
        assert location.name == "Koramangala"

    def test_no_match(self):
        def handler(request):
            return httpx.Response(200, json={"geonames": []})

        assert asyncio.run(make_client(handler).geocode("Nowhere")) is None


class TestFallbackPlaces:
    def test_exact(self):
        assert fallback_places("Sector 62")[0].population == 125000

    def test_partial_name(self):
        assert fallback_places("Bandra West")[0].name == "Bandra West"

    def test_typo(self):
        assert fallback_places("Koramangla")[0].name == "Koramangala"

    def test_unknown(self):
        assert fallback_places("Reykjavik") == []

    def test_empty(self):
        assert fallback_places("  ") == []
