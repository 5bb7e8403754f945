"""
Property Lookup Service

Runs the address-to-parcel pipeline: geocode, dispatch by county, normalize,
and apply the fallback policy when no real source can answer.

Fallback policy (settings.parcel_fallback_mode):
    demo  - substitute generated data tagged DataSource.DEMO with a reason
    error - raise the underlying PropertyLookupError
"""
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from config.settings import settings
from src.parcel_lookup.exceptions import (
    CountyNotConfiguredError,
    ParcelNotFoundError,
    ParcelSourceError,
    PropertyLookupError,
)
from src.parcel_lookup.geocoding.nominatim import NominatimGeocoder
from src.parcel_lookup.models.geocode import GeocodeResult
from src.parcel_lookup.models.parcel_record import ParcelRecord
from src.parcel_lookup.registry.county_registry import CountyRegistry
from src.parcel_lookup.sources.arcgis_client import ArcGISParcelClient
from src.parcel_lookup.sources.demo_data import generate_demo_parcel
from src.parcel_lookup.sources.regrid_client import RegridClient
from src.parcel_lookup.utils.geo_utils import is_within_pennsylvania
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_MODES = ("demo", "error")

# Fallback reasons reported on demo records
REASON_NOT_CONFIGURED = "county_not_configured"
REASON_SOURCE_ERROR = "source_error"
REASON_NOT_FOUND = "no_parcel_found"
REASON_NO_COVERAGE = "commercial_api_no_coverage"


@dataclass
class LookupResult:
    """
    Outcome of one address lookup.

    Attributes:
        geocode: Geocoded address
        parcel: Normalized parcel record (real, partial or demo)
        timestamp: When the lookup completed (UTC)
    """
    geocode: GeocodeResult
    parcel: ParcelRecord
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> dict:
        return {
            "success": True,
            "geocode": self.geocode.to_response(),
            "parcel": self.parcel.to_response(),
            "timestamp": self.timestamp.isoformat(),
        }


class PropertyLookupService:
    """
    Sequential lookup pipeline over the geocoder and parcel sources.

    Registered counties are served by their ArcGIS layer; other counties go
    to Regrid when a token is configured. Anything else, and any source
    failure, is handled by the fallback policy.
    """

    def __init__(
        self,
        registry: CountyRegistry,
        geocoder: Optional[NominatimGeocoder] = None,
        arcgis_client: Optional[ArcGISParcelClient] = None,
        regrid_client: Optional[RegridClient] = None,
        fallback_mode: Optional[str] = None,
        regrid_covers_pennsylvania: Optional[bool] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the service.

        Args:
            registry: County source registry
            geocoder: Address geocoder
            arcgis_client: County GIS client
            regrid_client: Commercial parcel API client
            fallback_mode: "demo" or "error" (default from settings)
            regrid_covers_pennsylvania: Whether the Regrid plan includes PA
            rng: Random source for demo data
        """
        self.registry = registry
        self.geocoder = geocoder or NominatimGeocoder()
        self.arcgis_client = arcgis_client or ArcGISParcelClient()
        self.regrid_client = regrid_client or RegridClient()
        self.fallback_mode = (fallback_mode or settings.parcel_fallback_mode).lower()
        self.regrid_covers_pennsylvania = (
            settings.regrid_covers_pennsylvania
            if regrid_covers_pennsylvania is None
            else regrid_covers_pennsylvania
        )
        self.rng = rng

        if self.fallback_mode not in FALLBACK_MODES:
            raise ValueError(
                f"parcel_fallback_mode must be one of {FALLBACK_MODES}, got '{self.fallback_mode}'"
            )

        logger.info(
            "property_lookup_service_initialized",
            counties=len(self.registry),
            regrid_configured=self.regrid_client.is_configured,
            fallback_mode=self.fallback_mode
        )

    def lookup(self, address: str) -> LookupResult:
        """
        Geocode an address and fetch its parcel.

        Raises:
            GeocodingError: Address could not be geocoded
            PropertyLookupError: Parcel source failed and fallback_mode is "error"
        """
        logger.info("property_lookup_started", address=address)

        geocode = self.geocoder.geocode(address)
        parcel = self.fetch_parcel(geocode)

        logger.info(
            "property_lookup_complete",
            county=geocode.county,
            parcel_id=parcel.parcel_id,
            data_source=parcel.data_source.value,
            source_name=parcel.source_name
        )
        return LookupResult(geocode=geocode, parcel=parcel)

    def fetch_parcel(self, geocode: GeocodeResult) -> ParcelRecord:
        """Dispatch a geocoded point to the right parcel source."""
        config = self.registry.get(geocode.county)

        if config is not None:
            try:
                return self.arcgis_client.lookup(config, geocode.lat, geocode.lon)
            except ParcelNotFoundError as e:
                return self._fallback(geocode, REASON_NOT_FOUND, e)
            except ParcelSourceError as e:
                return self._fallback(geocode, REASON_SOURCE_ERROR, e)

        if self.regrid_client.is_configured:
            if not self.regrid_covers_pennsylvania and is_within_pennsylvania(geocode.lat, geocode.lon):
                return self._fallback(
                    geocode,
                    REASON_NO_COVERAGE,
                    ParcelSourceError(
                        f"Commercial parcel API does not cover {geocode.county}"
                    )
                )
            try:
                return self.regrid_client.fetch_point(geocode.lat, geocode.lon)
            except ParcelNotFoundError as e:
                return self._fallback(geocode, REASON_NOT_FOUND, e)
            except ParcelSourceError as e:
                return self._fallback(geocode, REASON_SOURCE_ERROR, e)

        return self._fallback(
            geocode,
            REASON_NOT_CONFIGURED,
            CountyNotConfiguredError(
                f"County '{geocode.county}' is not configured",
                details=f"Configured counties: {', '.join(self.registry.county_names()) or 'none'}"
            )
        )

    def _fallback(
        self,
        geocode: GeocodeResult,
        reason: str,
        error: PropertyLookupError
    ) -> ParcelRecord:
        """Apply the fallback policy for a failed or missing source."""
        logger.warning(
            "parcel_source_unavailable",
            county=geocode.county,
            reason=reason,
            error=error.message,
            details=error.details,
            fallback_mode=self.fallback_mode
        )

        if self.fallback_mode == "error":
            raise error

        return generate_demo_parcel(
            geocode.lat,
            geocode.lon,
            county=geocode.county,
            fallback_reason=reason,
            rng=self.rng
        )
