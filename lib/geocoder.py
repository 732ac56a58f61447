# =============================================================================
# lib/geocoder.py - Geocoding Client
# =============================================================================
# Forward geocoding of addresses and zipcodes to coordinates.
#
# Providers (GEOCODER_PROVIDER):
# - mapquest: MapQuest Geocoding API (needs GEOCODER_API_KEY)
# - nominatim: OpenStreetMap Nominatim (no key, requires a User-Agent)
#
# Usage:
#   from lib.geocoder import geocode
#   results = await geocode("02215")
#   lat, lng = results[0].latitude, results[0].longitude
# =============================================================================

import asyncio
import logging

import httpx
from pydantic import BaseModel

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Constants
MAPQUEST_URL = "https://www.mapquestapi.com/geocoding/v1/address"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "DevCamperAPI/1.0"
REQUEST_TIMEOUT = 10
MAX_RETRIES = 3
RETRY_DELAY = 1.0


class GeocoderError(ApplicationError):
    """Raised when the geocoding provider fails or answers with an error."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message=f"Geocoding failed: {message}",
            code="GEOCODER_ERROR",
            status_code=502,
            suggestion="Check GEOCODER_PROVIDER and GEOCODER_API_KEY, or try again later",
            details=details,
        )


class GeocodeResult(BaseModel):
    """One match returned by the geocoder."""
    latitude: float
    longitude: float
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


# =============================================================================
# Provider Parsers
# =============================================================================

def _parse_mapquest(data: dict) -> list[GeocodeResult]:
    info = data.get("info", {})
    if info.get("statuscode", 0) != 0:
        raise GeocoderError(", ".join(info.get("messages", [])) or "MapQuest error",
                            details={"statuscode": info.get("statuscode")})

    results = []
    for result in data.get("results", []):
        for loc in result.get("locations", []):
            lat_lng = loc.get("latLng") or {}
            if "lat" not in lat_lng or "lng" not in lat_lng:
                continue
            street = loc.get("street") or None
            city = loc.get("adminArea5") or None
            state = loc.get("adminArea3") or None
            zipcode = loc.get("postalCode") or None
            country = loc.get("adminArea1") or None
            parts = [street, city, " ".join(p for p in (state, zipcode) if p), country]
            results.append(GeocodeResult(
                latitude=lat_lng["lat"],
                longitude=lat_lng["lng"],
                formatted_address=", ".join(p for p in parts if p) or None,
                street=street,
                city=city,
                state=state,
                zipcode=zipcode,
                country=country,
            ))
    return results


def _parse_nominatim(data: list) -> list[GeocodeResult]:
    results = []
    for item in data:
        address = item.get("address", {})
        street = " ".join(p for p in (address.get("house_number"), address.get("road")) if p) or None
        country_code = address.get("country_code")
        results.append(GeocodeResult(
            latitude=float(item["lat"]),
            longitude=float(item["lon"]),
            formatted_address=item.get("display_name"),
            street=street,
            city=address.get("city") or address.get("town") or address.get("village"),
            state=address.get("state"),
            zipcode=address.get("postcode"),
            country=country_code.upper() if country_code else None,
        ))
    return results


def _build_request(query: str) -> tuple[str, dict, dict]:
    if settings.GEOCODER_PROVIDER == "nominatim":
        params = {"q": query, "format": "json", "addressdetails": 1, "limit": 5}
        return NOMINATIM_URL, params, {"User-Agent": USER_AGENT}
    return MAPQUEST_URL, {"key": settings.GEOCODER_API_KEY, "location": query}, {}


# =============================================================================
# Public API
# =============================================================================

async def geocode(query: str, client: httpx.AsyncClient | None = None) -> list[GeocodeResult]:
    """
    Geocode an address or zipcode.

    Args:
        query: Free-form address or postal code
        client: Optional httpx client (a short-lived one is created otherwise)

    Returns:
        Matches in provider order; empty when nothing was found

    Raises:
        GeocoderError: Provider returned an error or was unreachable
    """
    url, params, headers = _build_request(query)
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    try:
        retries = 0
        while True:
            try:
                response = await client.get(url, params=params, headers=headers)
                break
            except httpx.TransportError as e:
                retries += 1
                if retries >= MAX_RETRIES:
                    logger.error(f"Geocoding '{query}' failed after {MAX_RETRIES} attempts: {e}")
                    raise GeocoderError(str(e), details={"query": query})
                wait_time = RETRY_DELAY * retries
                logger.warning(f"Network error geocoding '{query}': {e}. Retrying in {wait_time}s... (Attempt {retries}/{MAX_RETRIES})")
                await asyncio.sleep(wait_time)

        if response.status_code != 200:
            logger.warning(f"Geocoding HTTP error ({response.status_code}) for '{query}'")
            raise GeocoderError(f"HTTP {response.status_code}", details={"query": query})

        data = response.json()
        if settings.GEOCODER_PROVIDER == "nominatim":
            results = _parse_nominatim(data)
        else:
            results = _parse_mapquest(data)

        logger.info(f"Geocoded '{query}' ({len(results)} matches)")
        return results
    finally:
        if owns_client:
            await client.aclose()
