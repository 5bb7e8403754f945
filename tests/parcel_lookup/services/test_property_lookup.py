"""
Unit tests for property_lookup service module
"""
import random

import pytest
from unittest.mock import MagicMock, Mock

from src.parcel_lookup.exceptions import (
    CountyNotConfiguredError,
    GeocodingError,
    ParcelNotFoundError,
    ParcelSourceError,
)
from src.parcel_lookup.models.county_config import CountyConfig
from src.parcel_lookup.models.geocode import GeocodeResult
from src.parcel_lookup.models.parcel_record import DataSource, ParcelRecord
from src.parcel_lookup.registry.county_registry import CountyRegistry
from src.parcel_lookup.services.property_lookup import PropertyLookupService

LANCASTER_GEOCODE = GeocodeResult(
    lat=40.0397,
    lon=-76.3055,
    county="Lancaster County",
    municipality="Lancaster",
    display_name="50, North Duke Street, Lancaster, Pennsylvania",
)

# Outside the Pennsylvania coverage box
OHIO_GEOCODE = GeocodeResult(lat=39.96, lon=-82.99, county="Franklin County", municipality="Columbus")


@pytest.fixture
def lancaster_config():
    return CountyConfig(
        name="Lancaster County",
        endpoint_url="https://gis.example.com/arcgis/rest/services/Parcels/MapServer/0",
        field_aliases={"parcel_id": ["PIN"]},
    )


@pytest.fixture
def geocoder():
    geocoder = Mock()
    geocoder.geocode.return_value = LANCASTER_GEOCODE
    return geocoder


@pytest.fixture
def arcgis_client():
    client = MagicMock()
    client.lookup.return_value = ParcelRecord(
        parcel_id="410-12345-0-0000",
        county="Lancaster County",
        data_source=DataSource.REAL,
        source_name="county_gis:lancaster",
    )
    return client


@pytest.fixture
def regrid_client():
    client = MagicMock()
    client.is_configured = False
    return client


def make_service(registry, geocoder, arcgis_client, regrid_client, **kwargs):
    kwargs.setdefault("fallback_mode", "demo")
    kwargs.setdefault("regrid_covers_pennsylvania", False)
    return PropertyLookupService(
        registry=registry,
        geocoder=geocoder,
        arcgis_client=arcgis_client,
        regrid_client=regrid_client,
        rng=random.Random(1),
        **kwargs
    )


class TestPropertyLookupService:
    """Tests for PropertyLookupService class"""

    def test_registered_county_uses_gis(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test the Lancaster example against a registered county"""
        service = make_service(CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client)

        result = service.lookup("50 N Duke St, Lancaster, PA 17602")

        assert "Lancaster" in result.parcel.county
        assert result.parcel.data_source == DataSource.REAL
        arcgis_client.lookup.assert_called_once_with(lancaster_config, 40.0397, -76.3055)
        geocoder.geocode.assert_called_once_with("50 N Duke St, Lancaster, PA 17602")

    def test_unregistered_county_falls_back_to_demo(self, geocoder, arcgis_client, regrid_client):
        """Test demo substitution for an unconfigured county"""
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client)

        result = service.lookup("50 N Duke St, Lancaster, PA 17602")

        assert result.parcel.data_source == DataSource.DEMO
        assert result.parcel.fallback_reason == "county_not_configured"
        assert result.parcel.county == "Lancaster County"
        arcgis_client.lookup.assert_not_called()

    def test_unregistered_county_error_mode(self, geocoder, arcgis_client, regrid_client):
        """Test that error mode raises instead of substituting"""
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client, fallback_mode="error")

        with pytest.raises(CountyNotConfiguredError):
            service.lookup("50 N Duke St")

    def test_source_error_falls_back(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test demo substitution after an upstream failure"""
        arcgis_client.lookup.side_effect = ParcelSourceError("County GIS request failed")
        service = make_service(CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client)

        result = service.lookup("50 N Duke St")

        assert result.parcel.data_source == DataSource.DEMO
        assert result.parcel.fallback_reason == "source_error"

    def test_not_found_falls_back(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test demo substitution when no parcel matches"""
        arcgis_client.lookup.side_effect = ParcelNotFoundError("No parcel")
        service = make_service(CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client)

        result = service.lookup("50 N Duke St")

        assert result.parcel.fallback_reason == "no_parcel_found"

    def test_source_error_error_mode(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test that error mode surfaces upstream failures"""
        arcgis_client.lookup.side_effect = ParcelSourceError("County GIS request failed")
        service = make_service(
            CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client, fallback_mode="error"
        )

        with pytest.raises(ParcelSourceError):
            service.lookup("50 N Duke St")

    def test_partial_result_is_returned_as_is(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test that partial two-step results are final"""
        arcgis_client.lookup.return_value = ParcelRecord(
            parcel_id="410-1",
            owner="Unknown",
            land_use="Unknown",
            county="Lancaster County",
            data_source=DataSource.PARTIAL,
            source_name="county_gis:lancaster",
        )
        service = make_service(
            CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client, fallback_mode="error"
        )

        result = service.lookup("50 N Duke St")

        assert result.parcel.data_source == DataSource.PARTIAL

    def test_geocoding_error_propagates(self, geocoder, arcgis_client, regrid_client):
        """Test that geocoding failures are never masked by demo data"""
        geocoder.geocode.side_effect = GeocodingError("Address not found: nowhere")
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client)

        with pytest.raises(GeocodingError):
            service.lookup("nowhere")

        arcgis_client.lookup.assert_not_called()

    def test_regrid_used_outside_pennsylvania(self, geocoder, arcgis_client, regrid_client):
        """Test the commercial tier for unregistered counties"""
        geocoder.geocode.return_value = OHIO_GEOCODE
        regrid_client.is_configured = True
        regrid_client.fetch_point.return_value = ParcelRecord(
            parcel_id="010-1", data_source=DataSource.REAL, source_name="regrid"
        )
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client)

        result = service.lookup("1 High St, Columbus, OH")

        assert result.parcel.source_name == "regrid"
        regrid_client.fetch_point.assert_called_once_with(39.96, -82.99)

    def test_regrid_skipped_without_pennsylvania_coverage(self, geocoder, arcgis_client, regrid_client):
        """Test that PA points skip a plan without PA coverage"""
        regrid_client.is_configured = True
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client)

        result = service.lookup("50 N Duke St")

        assert result.parcel.data_source == DataSource.DEMO
        assert result.parcel.fallback_reason == "commercial_api_no_coverage"
        regrid_client.fetch_point.assert_not_called()

    def test_regrid_with_pennsylvania_coverage(self, geocoder, arcgis_client, regrid_client):
        """Test that PA points reach Regrid when the plan covers PA"""
        regrid_client.is_configured = True
        regrid_client.fetch_point.return_value = ParcelRecord(
            parcel_id="410-9", data_source=DataSource.REAL, source_name="regrid"
        )
        service = make_service(
            CountyRegistry(), geocoder, arcgis_client, regrid_client, regrid_covers_pennsylvania=True
        )

        result = service.lookup("50 N Duke St")

        assert result.parcel.parcel_id == "410-9"

    def test_regrid_failure_falls_back(self, geocoder, arcgis_client, regrid_client):
        """Test demo substitution after a Regrid failure"""
        geocoder.geocode.return_value = OHIO_GEOCODE
        regrid_client.is_configured = True
        regrid_client.fetch_point.side_effect = ParcelSourceError("Regrid API failed with status 500")
        service = make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client)

        result = service.lookup("1 High St, Columbus, OH")

        assert result.parcel.data_source == DataSource.DEMO
        assert result.parcel.fallback_reason == "source_error"

    def test_invalid_fallback_mode(self, geocoder, arcgis_client, regrid_client):
        with pytest.raises(ValueError):
            make_service(CountyRegistry(), geocoder, arcgis_client, regrid_client, fallback_mode="silent")

    def test_result_response_shape(self, lancaster_config, geocoder, arcgis_client, regrid_client):
        """Test the serialized lookup result"""
        service = make_service(CountyRegistry([lancaster_config]), geocoder, arcgis_client, regrid_client)

        response = service.lookup("50 N Duke St").to_response()

        assert response["success"] is True
        assert response["geocode"]["county"] == "Lancaster County"
        assert response["geocode"]["displayName"].startswith("50, North Duke")
        assert response["parcel"]["parcelId"] == "410-12345-0-0000"
        assert response["parcel"]["dataSource"] == "real"
        assert response["timestamp"].endswith("+00:00")
