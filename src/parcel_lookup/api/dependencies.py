"""
FastAPI Dependencies

Provides dependency injection for the county registry, the parcel source
clients and the lookup service. Tests override these with app.dependency_overrides.
"""
from functools import lru_cache

from config.settings import settings
from src.parcel_lookup.registry.county_registry import CountyRegistry
from src.parcel_lookup.services.property_lookup import PropertyLookupService
from src.parcel_lookup.sources.arcgis_client import ArcGISParcelClient
from src.parcel_lookup.sources.regrid_client import RegridClient


@lru_cache(maxsize=1)
def get_registry() -> CountyRegistry:
    """
    County registry dependency, loaded once from settings.counties_file.

    Raises:
        RegistryValidationError: The registry file is invalid
    """
    return CountyRegistry.from_file(settings.counties_file)


@lru_cache(maxsize=1)
def get_arcgis_client() -> ArcGISParcelClient:
    """Shared ArcGIS client dependency."""
    return ArcGISParcelClient()


@lru_cache(maxsize=1)
def get_regrid_client() -> RegridClient:
    """Shared Regrid client dependency."""
    return RegridClient()


@lru_cache(maxsize=1)
def get_lookup_service() -> PropertyLookupService:
    """
    Lookup service dependency.

    Returns:
        PropertyLookupService wired to the configured sources
    """
    return PropertyLookupService(
        registry=get_registry(),
        arcgis_client=get_arcgis_client(),
        regrid_client=get_regrid_client(),
    )
