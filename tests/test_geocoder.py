# =============================================================================
# tests/test_geocoder.py - Geocoding Client Tests
# =============================================================================
# Tests for lib/geocoder.py against mocked HTTP transports:
# - MapQuest and Nominatim response parsing
# - Provider and HTTP errors
# - Retry on network errors
#
# Run with: pytest tests/test_geocoder.py -v
# =============================================================================

import asyncio

import httpx
import pytest

from app.config import settings
from lib import geocoder
from lib.geocoder import GeocoderError, geocode

MAPQUEST_RESPONSE = {
    "info": {"statuscode": 0, "messages": []},
    "results": [{
        "providedLocation": {"location": "02215"},
        "locations": [{
            "street": "233 Bay State Rd",
            "adminArea5": "Boston",
            "adminArea3": "MA",
            "postalCode": "02215",
            "adminArea1": "US",
            "latLng": {"lat": 42.350846, "lng": -71.105844},
        }],
    }],
}

NOMINATIM_RESPONSE = [{
    "lat": "42.350846",
    "lon": "-71.105844",
    "display_name": "233, Bay State Road, Boston, Massachusetts, 02215, United States",
    "address": {
        "house_number": "233",
        "road": "Bay State Road",
        "city": "Boston",
        "state": "Massachusetts",
        "postcode": "02215",
        "country_code": "us",
    },
}]


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _run(query, handler):
    async def _go():
        async with _client(handler) as client:
            return await geocode(query, client=client)

    return asyncio.run(_go())


@pytest.fixture
def mapquest(monkeypatch):
    monkeypatch.setattr(settings, "GEOCODER_PROVIDER", "mapquest")
    monkeypatch.setattr(settings, "GEOCODER_API_KEY", "test-key")


@pytest.fixture
def nominatim(monkeypatch):
    monkeypatch.setattr(settings, "GEOCODER_PROVIDER", "nominatim")


# =============================================================================
# MapQuest
# =============================================================================

class TestMapQuest:
    """Tests for the MapQuest provider."""

    def test_geocode(self, mapquest):
        """Test a successful lookup is parsed into a GeocodeResult."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=MAPQUEST_RESPONSE)

        results = _run("02215", handler)

        assert seen["params"] == {"key": "test-key", "location": "02215"}
        assert len(results) == 1
        result = results[0]
        assert result.latitude == 42.350846
        assert result.longitude == -71.105844
        assert result.city == "Boston"
        assert result.state == "MA"
        assert result.zipcode == "02215"
        assert result.country == "US"
        assert result.formatted_address == "233 Bay State Rd, Boston, MA 02215, US"

    def test_no_results(self, mapquest):
        """Test an empty result set comes back as []."""
        body = {"info": {"statuscode": 0}, "results": [{"locations": []}]}

        assert _run("nowhere", lambda r: httpx.Response(200, json=body)) == []

    def test_provider_error(self, mapquest):
        """Test a non-zero MapQuest statuscode raises GeocoderError."""
        body = {"info": {"statuscode": 403, "messages": ["The AppKey submitted with this request is invalid."]}}

        with pytest.raises(GeocoderError) as exc_info:
            _run("02215", lambda r: httpx.Response(200, json=body))

        assert "AppKey" in exc_info.value.message
        assert exc_info.value.status_code == 502


# =============================================================================
# Nominatim
# =============================================================================

class TestNominatim:
    """Tests for the Nominatim provider."""

    def test_geocode(self, nominatim):
        """Test a Nominatim match is parsed, with a User-Agent sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["user_agent"] = request.headers.get("user-agent")
            seen["q"] = request.url.params.get("q")
            return httpx.Response(200, json=NOMINATIM_RESPONSE)

        results = _run("233 Bay State Rd Boston MA", handler)

        assert seen["user_agent"] == geocoder.USER_AGENT
        assert seen["q"] == "233 Bay State Rd Boston MA"
        result = results[0]
        assert result.latitude == 42.350846
        assert result.longitude == -71.105844
        assert result.street == "233 Bay State Road"
        assert result.country == "US"

    def test_no_results(self, nominatim):
        assert _run("nowhere", lambda r: httpx.Response(200, json=[])) == []


# =============================================================================
# Errors and Retries
# =============================================================================

class TestErrors:
    """Tests for HTTP errors and network retries."""

    def test_http_error(self, mapquest):
        """Test a non-200 response raises GeocoderError."""
        with pytest.raises(GeocoderError) as exc_info:
            _run("02215", lambda r: httpx.Response(500, text="oops"))

        assert "HTTP 500" in exc_info.value.message

    def test_retries_then_succeeds(self, mapquest, monkeypatch):
        """Test a transient network error is retried."""
        monkeypatch.setattr(geocoder, "RETRY_DELAY", 0)
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            if calls["count"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=MAPQUEST_RESPONSE)

        results = _run("02215", handler)

        assert calls["count"] == 2
        assert len(results) == 1

    def test_gives_up_after_max_retries(self, mapquest, monkeypatch):
        """Test persistent network errors raise after MAX_RETRIES attempts."""
        monkeypatch.setattr(geocoder, "RETRY_DELAY", 0)
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GeocoderError):
            _run("02215", handler)

        assert calls["count"] == geocoder.MAX_RETRIES
