"""
Unit tests for the lookup CLI
"""
import json
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from src.parcel_lookup import cli
from src.parcel_lookup.exceptions import GeocodingError
from src.parcel_lookup.models.geocode import GeocodeResult
from src.parcel_lookup.models.parcel_record import DataSource, ParcelRecord
from src.parcel_lookup.services.property_lookup import LookupResult


def make_result():
    return LookupResult(
        geocode=GeocodeResult(lat=40.04, lon=-76.3, county="Lancaster County"),
        parcel=ParcelRecord(parcel_id="410-1", data_source=DataSource.DEMO, source_name="demo"),
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


class TestCli:
    """Tests for cli.main"""

    def test_parse_args(self):
        args = cli.parse_args(["50 N Duke St", "--fallback", "error"])

        assert args.address == "50 N Duke St"
        assert args.fallback == "error"

    @patch("src.parcel_lookup.cli.setup_logging")
    @patch("src.parcel_lookup.cli.PropertyLookupService")
    @patch("src.parcel_lookup.cli.CountyRegistry")
    def test_main_prints_result(self, mock_registry, mock_service_cls, mock_setup, capsys):
        """Test JSON output and exit code on success"""
        mock_service = Mock()
        mock_service.lookup.return_value = make_result()
        mock_service_cls.return_value = mock_service

        exit_code = cli.main(["50 N Duke St", "--counties-file", "counties.json"])

        assert exit_code == 0
        mock_registry.from_file.assert_called_once_with("counties.json")
        output = json.loads(capsys.readouterr().out)
        assert output["parcel"]["parcelId"] == "410-1"
        assert output["timestamp"] == "2026-01-01T00:00:00+00:00"

    @patch("src.parcel_lookup.cli.setup_logging")
    @patch("src.parcel_lookup.cli.PropertyLookupService")
    @patch("src.parcel_lookup.cli.CountyRegistry")
    def test_main_reports_errors(self, mock_registry, mock_service_cls, mock_setup, capsys):
        """Test exit code 1 and error JSON on failure"""
        mock_service = Mock()
        mock_service.lookup.side_effect = GeocodingError("Address not found: x")
        mock_service_cls.return_value = mock_service

        exit_code = cli.main(["x"])

        assert exit_code == 1
        error = json.loads(capsys.readouterr().err)
        assert error["error"] == "Address not found: x"
