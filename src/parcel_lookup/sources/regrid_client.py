"""
Regrid Parcel Client

Point lookups against the Regrid commercial parcel API, used for counties
without a registered GIS source.
"""
from typing import Any, Dict, Optional

import requests

from config.settings import settings
from src.parcel_lookup.exceptions import ParcelNotFoundError, ParcelSourceError
from src.parcel_lookup.models.parcel_record import DataSource, ParcelRecord
from src.parcel_lookup.transformers.field_normalizer import resolve_field
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)

# Logical field -> ordered Regrid "fields" names
REGRID_FIELD_ALIASES = {
    "parcel_id": ["parcelnumb", "parcel_id"],
    "owner": ["owner"],
    "acres": ["ll_gisacre", "acres"],
    "zoning": ["zoning"],
    "municipality": ["city", "usps_city"],
    "address": ["address"],
    "land_use": ["usedesc", "usecd"],
    "assessment": ["saleprice"],
}


class RegridClient:
    """
    Client for the Regrid v2 parcels API.

    The API token is read from settings (REGRID_API_TOKEN); there is no
    built-in default, so an unconfigured client reports is_configured False.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the client.

        Args:
            api_token: Override the configured token (for testing)
            base_url: Override the API base URL
            timeout: Request timeout in seconds
        """
        self.api_token = api_token or settings.regrid_api_token
        self.base_url = (base_url or settings.regrid_api_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.http_user_agent})

    @property
    def is_configured(self) -> bool:
        """Check if an API token is available."""
        return bool(self.api_token)

    def fetch_point(self, lat: float, lon: float) -> ParcelRecord:
        """
        Fetch the parcel containing a point.

        Raises:
            ParcelSourceError: No token, transport failure or non-2xx response
            ParcelNotFoundError: Response holds no parcel features
        """
        if not self.is_configured:
            raise ParcelSourceError("Regrid API token is not configured")

        params = {
            "lat": lat,
            "lon": lon,
            "token": self.api_token,
            "return_geometry": "false",
        }

        logger.info("calling_regrid_api", lat=lat, lon=lon)

        try:
            response = self.session.get(
                f"{self.base_url}/parcels/point",
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(
                "regrid_request_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise ParcelSourceError("Regrid API request failed", details=str(e)) from e

        logger.info("regrid_response", status_code=response.status_code)

        if not response.ok:
            raise ParcelSourceError(
                f"Regrid API failed with status {response.status_code}",
                details=response.text[:500]
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ParcelSourceError("Regrid API returned invalid JSON", details=str(e)) from e

        data = data or {}
        parcels = data.get("parcels") or {} if isinstance(data, dict) else None
        features = parcels.get("features") or [] if isinstance(parcels, dict) else None
        if not isinstance(features, list):
            logger.error("regrid_payload_malformed", payload_type=type(data).__name__)
            raise ParcelSourceError("Regrid API returned an unexpected payload")
        if not features:
            raise ParcelNotFoundError("No parcel found at this location")

        return self.parse_feature(features[0])

    def parse_feature(self, feature: Dict[str, Any]) -> ParcelRecord:
        """
        Normalize one Regrid GeoJSON feature.

        Raises:
            ParcelSourceError: Feature, properties or fields are not objects
        """
        props = feature.get("properties") or {} if isinstance(feature, dict) else None
        fields = props.get("fields") or {} if isinstance(props, dict) else None
        context = props.get("context") or {} if isinstance(props, dict) else None
        if not isinstance(fields, dict) or not isinstance(context, dict):
            raise ParcelSourceError("Regrid API returned an unexpected feature")
        context_name = context.get("name")

        def pick(logical: str) -> Optional[Any]:
            return resolve_field(fields, REGRID_FIELD_ALIASES[logical])

        return ParcelRecord(
            parcel_id=pick("parcel_id"),
            owner=pick("owner"),
            acres=pick("acres"),
            zoning=pick("zoning"),
            municipality=pick("municipality") or context_name,
            situs=pick("address") or props.get("headline"),
            land_use=pick("land_use"),
            assessment=pick("assessment"),
            county=context_name,
            data_source=DataSource.REAL,
            source_name="regrid",
            raw_attributes=dict(fields) if settings.include_raw_attributes else None,
        )
