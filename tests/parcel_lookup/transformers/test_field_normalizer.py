"""
Unit tests for field_normalizer module
"""
import pytest

from src.parcel_lookup.transformers.field_normalizer import (
    has_value,
    normalize_attributes,
    resolve_field,
)


class TestResolveField:
    """Tests for resolve_field"""

    def test_first_candidate_wins(self):
        """Test that registry order decides between two present fields"""
        attrs = {"OWNER1": "Jane Smith", "OWNER": "John Doe"}

        assert resolve_field(attrs, ["OWNER1", "OWNER"]) == "Jane Smith"
        assert resolve_field(attrs, ["OWNER", "OWNER1"]) == "John Doe"

    def test_skips_missing_null_and_blank(self):
        """Test that absent, None and blank values fall through"""
        attrs = {"A": None, "B": "", "C": "   ", "D": "found"}

        assert resolve_field(attrs, ["MISSING", "A", "B", "C", "D"]) == "found"

    def test_no_match_returns_none(self):
        """Test that no matching candidate resolves to None"""
        attrs = {"A": None, "B": ""}

        assert resolve_field(attrs, ["A", "B", "C"]) is None
        assert resolve_field({}, ["A"]) is None
        assert resolve_field(attrs, []) is None

    def test_zero_counts_as_present(self):
        """Test that numeric zero is a real value, not a gap"""
        attrs = {"ACRES": 0, "CALC_ACRES": 1.5}

        assert resolve_field(attrs, ["ACRES", "CALC_ACRES"]) == 0

    def test_value_is_not_coerced(self):
        """Test that values are returned untouched"""
        attrs = {"ASSESS": "125,000"}

        assert resolve_field(attrs, ["ASSESS"]) == "125,000"


class TestNormalizeAttributes:
    """Tests for normalize_attributes"""

    def test_each_field_resolved_independently(self):
        """Test resolution of every logical field"""
        attrs = {
            "PIN": "410-123",
            "OWNER_NAME": "Keystone Holdings LLC",
            "GIS_ACRES": 2.5,
            "ZONE": "",
        }
        aliases = {
            "parcel_id": ["PARCEL_ID", "PIN"],
            "owner": ["OWNER", "OWNER_NAME"],
            "acres": ["GIS_ACRES"],
            "zoning": ["ZONE", "ZONING"],
        }

        result = normalize_attributes(attrs, aliases)

        assert result == {
            "parcel_id": "410-123",
            "owner": "Keystone Holdings LLC",
            "acres": 2.5,
            "zoning": None,
        }

    def test_empty_aliases(self):
        """Test that no aliases yields an empty mapping"""
        assert normalize_attributes({"A": 1}, {}) == {}


@pytest.mark.parametrize("value,expected", [
    (None, False),
    ("", False),
    ("  ", False),
    ("x", True),
    (0, True),
    (False, True),
    (0.0, True),
])
def test_has_value(value, expected):
    """Test presence rules"""
    assert has_value(value) is expected
