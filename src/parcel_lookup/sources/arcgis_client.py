"""
County ArcGIS Parcel Client

Queries a county's ArcGIS MapServer/FeatureServer parcel layer around a
geocoded point and normalizes the first feature into a ParcelRecord.
Counties configured with a join table get a second query that pulls owner
and assessment details by parcel identifier.
"""
from typing import Any, Dict, List, Optional

import requests

from config.settings import settings
from src.parcel_lookup.exceptions import ParcelNotFoundError, ParcelSourceError
from src.parcel_lookup.models.county_config import CountyConfig, JoinConfig, QueryMode
from src.parcel_lookup.models.parcel_record import DataSource, ParcelRecord, UNKNOWN
from src.parcel_lookup.registry.county_registry import county_key
from src.parcel_lookup.transformers.field_normalizer import has_value, normalize_attributes
from src.parcel_lookup.utils.geo_utils import buffer_envelope, envelope_to_param, point_to_param
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)

# Fields cleared to "Unknown" when the join step cannot supply them
JOINED_FIELDS = ("owner", "land_use")


def _where_equals(field: str, value: Any) -> str:
    """Build a single-column equality where clause."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{field} = {value}"
    escaped = str(value).strip().replace("'", "''")
    return f"{field} = '{escaped}'"


class ArcGISParcelClient:
    """
    Client for county ArcGIS parcel layers.

    One instance serves every registered county; per-county behaviour comes
    from the CountyConfig passed to each call.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        buffer_degrees: Optional[float] = None,
        include_raw_attributes: Optional[bool] = None
    ):
        """
        Initialize the client.

        Args:
            timeout: Request timeout in seconds
            buffer_degrees: Default envelope half-width for counties without one
            include_raw_attributes: Attach source attributes to returned records
        """
        self.timeout = timeout or settings.request_timeout_seconds
        self.buffer_degrees = buffer_degrees or settings.parcel_buffer_degrees
        self.include_raw_attributes = (
            settings.include_raw_attributes
            if include_raw_attributes is None
            else include_raw_attributes
        )
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.http_user_agent})

    def build_spatial_params(self, config: CountyConfig, lat: float, lon: float) -> Dict[str, Any]:
        """
        Build query parameters for a spatial parcel lookup.

        Args:
            config: County source descriptor
            lat: Latitude
            lon: Longitude

        Returns:
            ArcGIS REST query parameters
        """
        params: Dict[str, Any] = {
            "where": "1=1",
            "outFields": "*",
            "returnGeometry": "false",
            "inSR": 4326,
            "spatialRel": "esriSpatialRelIntersects",
            "f": "json",
        }

        if config.query_mode == QueryMode.POINT:
            params["geometry"] = point_to_param(lat, lon)
            params["geometryType"] = "esriGeometryPoint"
            if config.distance_meters:
                params["distance"] = config.distance_meters
                params["units"] = "esriSRUnit_Meter"
        else:
            buffer = config.buffer_degrees or self.buffer_degrees
            params["geometry"] = envelope_to_param(buffer_envelope(lat, lon, buffer))
            params["geometryType"] = "esriGeometryEnvelope"

        return params

    def query_features(self, url: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Run one ArcGIS query and return the feature attribute dictionaries.

        Raises:
            ParcelSourceError: Transport failure, non-2xx, malformed JSON or error payload
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            json_data = response.json()
        except requests.RequestException as e:
            logger.error(
                "arcgis_request_failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__
            )
            raise ParcelSourceError("County GIS request failed", details=str(e)) from e
        except ValueError as e:
            logger.error("arcgis_response_invalid", url=url, error=str(e))
            raise ParcelSourceError("County GIS returned invalid JSON", details=str(e)) from e

        if not isinstance(json_data, dict):
            raise ParcelSourceError("County GIS returned an unexpected payload")

        if "error" in json_data:
            error = json_data["error"] or {}
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            logger.error("arcgis_error_payload", url=url, error=message)
            raise ParcelSourceError("County GIS returned an error", details=message)

        features = json_data.get("features") or []
        if not isinstance(features, list) or not all(
            isinstance(feature, dict) and isinstance(feature.get("attributes") or {}, dict)
            for feature in features
        ):
            logger.error("arcgis_features_malformed", url=url, features_type=type(features).__name__)
            raise ParcelSourceError("County GIS returned an unexpected payload")

        logger.info(
            "arcgis_request_successful",
            url=url,
            status_code=response.status_code,
            features_count=len(features)
        )

        return [feature.get("attributes") or {} for feature in features]

    def fetch_parcel_attributes(self, config: CountyConfig, lat: float, lon: float) -> Dict[str, Any]:
        """
        Fetch the attributes of the first parcel feature at a point.

        Raises:
            ParcelNotFoundError: Query succeeded but matched nothing
            ParcelSourceError: Query failed
        """
        params = self.build_spatial_params(config, lat, lon)
        features = self.query_features(config.query_url, params)

        if not features:
            logger.warning("parcel_not_found", county=config.name, lat=lat, lon=lon)
            raise ParcelNotFoundError(f"No parcel found in {config.name} at this location")

        return features[0]

    def fetch_joined_row(self, join: JoinConfig, key: Any) -> Optional[Dict[str, Any]]:
        """
        Fetch the first joined-table row for a parcel key.

        Returns:
            Row attributes, or None when the table has no matching row

        Raises:
            ParcelSourceError: Query failed
        """
        params = {
            "where": _where_equals(join.key_field, key),
            "outFields": "*",
            "returnGeometry": "false",
            "f": "json",
        }
        url = join.table_url if join.table_url.endswith("/query") else f"{join.table_url.rstrip('/')}/query"
        rows = self.query_features(url, params)
        return rows[0] if rows else None

    def build_record(
        self,
        config: CountyConfig,
        attributes: Dict[str, Any],
        data_source: DataSource = DataSource.REAL
    ) -> ParcelRecord:
        """
        Normalize source attributes into a ParcelRecord.

        Args:
            config: County source descriptor providing the field aliases
            attributes: Source attribute dictionary
            data_source: Provenance tag for the record

        Returns:
            ParcelRecord with placeholders for unresolved fields
        """
        fields = normalize_attributes(attributes, config.field_aliases)

        return ParcelRecord(
            parcel_id=fields.get("parcel_id"),
            owner=fields.get("owner"),
            acres=fields.get("acres"),
            zoning=fields.get("zoning"),
            municipality=fields.get("municipality"),
            situs=fields.get("address"),
            land_use=fields.get("land_use"),
            assessment=fields.get("assessment"),
            county=config.name,
            data_source=data_source,
            source_name=f"county_gis:{county_key(config.name)}",
            raw_attributes=dict(attributes) if self.include_raw_attributes else None,
        )

    def lookup(self, config: CountyConfig, lat: float, lon: float) -> ParcelRecord:
        """
        Look up the parcel at a point for one county.

        Single-step counties return the normalized first feature. Two-step
        counties additionally merge the joined row; any join failure yields a
        partial record instead of an error.

        Raises:
            ParcelNotFoundError: No parcel feature at the point
            ParcelSourceError: Parcel layer query failed
        """
        logger.info(
            "fetching_county_parcel",
            county=config.name,
            query_mode=config.query_mode.value,
            two_step=config.is_two_step
        )

        attributes = self.fetch_parcel_attributes(config, lat, lon)

        if not config.is_two_step:
            return self.build_record(config, attributes)

        return self._merge_joined(config, attributes)

    def _merge_joined(self, config: CountyConfig, attributes: Dict[str, Any]) -> ParcelRecord:
        """Second step of the two-step lookup. Never raises."""
        join = config.join
        key = attributes.get(join.join_field)

        joined_row = None
        if not has_value(key):
            logger.warning(
                "join_key_missing",
                county=config.name,
                join_field=join.join_field
            )
        else:
            try:
                joined_row = self.fetch_joined_row(join, key)
            except ParcelSourceError as e:
                logger.warning(
                    "join_query_failed",
                    county=config.name,
                    join_key=str(key),
                    error=e.message,
                    details=e.details
                )
            else:
                if joined_row is None:
                    logger.warning("join_no_rows", county=config.name, join_key=str(key))

        base = self.build_record(config, attributes)

        if joined_row is None:
            partial = {field: UNKNOWN for field in JOINED_FIELDS}
            return base.model_copy(update={**partial, "data_source": DataSource.PARTIAL})

        joined = normalize_attributes(joined_row, join.field_aliases)
        updates = {
            field: value
            for field, value in (
                ("owner", joined.get("owner")),
                ("land_use", joined.get("land_use")),
                ("assessment", joined.get("assessment")),
                ("zoning", joined.get("zoning")),
                ("acres", joined.get("acres")),
            )
            if value is not None
        }

        merged = base.model_dump()
        merged.update(updates)
        if base.raw_attributes is not None:
            merged["raw_attributes"] = {**attributes, **joined_row}

        logger.info("join_merged", county=config.name, merged_fields=sorted(updates))
        # Re-validate so merged values pass through the record's normalizers
        return ParcelRecord(**merged)

    def probe(self, config: CountyConfig, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Check whether a county endpoint answers a metadata request.

        Returns:
            Reachability report for the health diagnostics endpoint
        """
        timeout = timeout or settings.probe_timeout_seconds
        report: Dict[str, Any] = {"endpoint": config.endpoint_url}

        try:
            response = self.session.get(config.endpoint_url, params={"f": "json"}, timeout=timeout)
            report["status_code"] = response.status_code
            report["reachable"] = response.ok
        except requests.RequestException as e:
            logger.warning(
                "gis_probe_failed",
                county=config.name,
                error=str(e),
                error_type=type(e).__name__
            )
            report["reachable"] = False
            report["error"] = str(e)

        return report
