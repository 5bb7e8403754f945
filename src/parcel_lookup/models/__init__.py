"""
Data Models

Pydantic models shared by the geocoder, the parcel sources and the API.
"""

from .county_config import CountyConfig, JoinConfig, QueryMode, LOGICAL_FIELDS
from .geocode import GeocodeResult
from .parcel_record import DataSource, ParcelRecord, NOT_AVAILABLE, UNKNOWN

__all__ = [
    "CountyConfig",
    "JoinConfig",
    "QueryMode",
    "LOGICAL_FIELDS",
    "GeocodeResult",
    "DataSource",
    "ParcelRecord",
    "NOT_AVAILABLE",
    "UNKNOWN",
]
