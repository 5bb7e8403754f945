"""
Nominatim Geocoder

Resolves free-text addresses to coordinates, county and municipality using
the OpenStreetMap Nominatim search API.
"""
from typing import Optional

import requests

from config.settings import settings
from src.parcel_lookup.exceptions import GeocodingError
from src.parcel_lookup.models.geocode import GeocodeResult
from src.parcel_lookup.models.parcel_record import UNKNOWN
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)

# Nominatim address keys that may hold the municipality, in priority order
MUNICIPALITY_KEYS = ("city", "town", "village", "township", "municipality", "hamlet")


class NominatimGeocoder:
    """
    Geocoder backed by Nominatim /search.

    Only the first result is used; there is no retry or disambiguation
    between multiple matches.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        suffix: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the geocoder.

        Args:
            base_url: Override the Nominatim search URL (for testing)
            suffix: Text appended to every query to bias results
            timeout: Request timeout in seconds
        """
        self.base_url = base_url or settings.nominatim_url
        self.suffix = settings.geocode_suffix if suffix is None else suffix
        self.timeout = timeout or settings.request_timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.http_user_agent})
        logger.info("geocoder_initialized", base_url=self.base_url)

    def build_query(self, address: str) -> str:
        """Append the bias suffix unless the address already ends with it."""
        address = address.strip()
        if not self.suffix:
            return address
        if address.lower().endswith(self.suffix.strip(", ").lower()):
            return address
        return f"{address}{self.suffix}"

    def geocode(self, address: str) -> GeocodeResult:
        """
        Geocode an address.

        Args:
            address: Free-text street address

        Returns:
            GeocodeResult for the first match

        Raises:
            GeocodingError: Empty address, service failure, no match or no county
        """
        if not address or not address.strip():
            raise GeocodingError("Address is required")

        query = self.build_query(address)
        params = {
            "q": query,
            "format": "json",
            "addressdetails": 1,
            "limit": 1,
            "countrycodes": "us",
        }

        logger.info("geocoding_address", query=query)

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            results = response.json()
        except requests.RequestException as e:
            logger.error(
                "geocode_request_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__
            )
            raise GeocodingError("Geocoding service unavailable", details=str(e)) from e
        except ValueError as e:
            logger.error("geocode_response_invalid", query=query, error=str(e))
            raise GeocodingError("Geocoding service returned invalid JSON", details=str(e)) from e

        if not results:
            logger.warning("geocode_no_results", query=query)
            raise GeocodingError(f"Address not found: {address}")

        if not isinstance(results, list) or not isinstance(results[0], dict):
            logger.error("geocode_response_malformed", query=query, results_type=type(results).__name__)
            raise GeocodingError("Geocoding service returned an unexpected payload")

        return self._parse_result(results[0], address)

    def _parse_result(self, result: dict, address: str) -> GeocodeResult:
        """
        Convert one Nominatim result into a GeocodeResult.

        Raises:
            GeocodingError: Result lacks coordinates or a county
        """
        details = result.get("address") or {}
        if not isinstance(details, dict):
            raise GeocodingError("Geocoding service returned an unexpected payload")
        county = details.get("county")

        if not county:
            logger.warning("geocode_missing_county", address=address, details=details)
            raise GeocodingError(f"Could not determine county for: {address}")

        try:
            lat = float(result["lat"])
            lon = float(result["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Geocoder returned no coordinates for: {address}") from e

        municipality = next(
            (details[key] for key in MUNICIPALITY_KEYS if details.get(key)),
            UNKNOWN
        )

        geocode = GeocodeResult(
            lat=lat,
            lon=lon,
            county=county,
            municipality=municipality,
            display_name=result.get("display_name") or address,
        )

        logger.info(
            "address_geocoded",
            county=geocode.county,
            municipality=geocode.municipality,
            lat=geocode.lat,
            lon=geocode.lon
        )
        return geocode
