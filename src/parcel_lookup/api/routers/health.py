"""
Health Router

Process health and county GIS reachability diagnostics.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src import __version__
from src.parcel_lookup.api.dependencies import get_arcgis_client, get_regrid_client, get_registry
from src.parcel_lookup.api.schemas import GISProbeReport, HealthCheck
from src.parcel_lookup.registry.county_registry import CountyRegistry, county_key
from src.parcel_lookup.sources.arcgis_client import ArcGISParcelClient
from src.parcel_lookup.sources.regrid_client import RegridClient
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthCheck)
def health_check(
    registry: CountyRegistry = Depends(get_registry),
    regrid_client: RegridClient = Depends(get_regrid_client),
):
    """
    Health check endpoint.

    Returns:
        Status, version, current timestamp and the configured counties
    """
    return HealthCheck(
        status="ok",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        counties=registry.county_names(),
        commercialApiConfigured=regrid_client.is_configured,
    )


@router.get("/test-gis", response_model=GISProbeReport)
def test_gis_endpoints(
    registry: CountyRegistry = Depends(get_registry),
    client: ArcGISParcelClient = Depends(get_arcgis_client),
):
    """
    Probe every registered county endpoint with a short timeout.

    Returns:
        Reachability report keyed by county id
    """
    results = {county_key(config.name): client.probe(config) for config in registry}

    logger.info(
        "gis_probe_complete",
        counties=len(results),
        reachable=sum(1 for r in results.values() if r.get("reachable"))
    )

    return GISProbeReport(timestamp=datetime.now(timezone.utc), results=results)
