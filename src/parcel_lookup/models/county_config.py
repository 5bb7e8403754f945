"""
County Configuration Models

Pydantic models describing how to query one county's parcel layer and how to
map its field names onto the normalized parcel record.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Logical attributes every source is normalized into
LOGICAL_FIELDS = (
    "parcel_id",
    "owner",
    "acres",
    "zoning",
    "municipality",
    "address",
    "land_use",
    "assessment",
)


def _validate_aliases(aliases: Dict[str, List[str]]) -> Dict[str, List[str]]:
    unknown = set(aliases) - set(LOGICAL_FIELDS)
    if unknown:
        raise ValueError(f"unknown logical fields: {sorted(unknown)}")
    for logical, candidates in aliases.items():
        if not candidates or any(not c or not c.strip() for c in candidates):
            raise ValueError(f"field '{logical}' needs at least one non-empty source field name")
    return {logical: list(candidates) for logical, candidates in aliases.items()}


class QueryMode(str, Enum):
    """Geometry used for the ArcGIS spatial query."""

    ENVELOPE = "envelope"
    POINT = "point"


class JoinConfig(BaseModel):
    """
    Second table for the two-step lookup.

    Attributes:
        table_url: ArcGIS layer/table URL holding owner and assessment rows
        join_field: Attribute on the parcel feature carrying the join key
        key_field: Column in the joined table matched against the key
        field_aliases: Logical field -> ordered source names in the joined table
    """

    model_config = ConfigDict(frozen=True)

    table_url: str = Field(..., min_length=1)
    join_field: str = Field(..., min_length=1)
    key_field: str = Field(..., min_length=1)
    field_aliases: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("field_aliases")
    @classmethod
    def validate_aliases(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return _validate_aliases(v)


class CountyConfig(BaseModel):
    """
    Parcel data source descriptor for one county.

    Attributes:
        name: Display name (e.g. "Lancaster County")
        endpoint_url: ArcGIS layer URL (the "/query" suffix is added when missing)
        query_mode: Envelope around the point or the point itself
        buffer_degrees: Envelope half-width; falls back to the global setting
        distance_meters: Search radius for point queries
        field_aliases: Logical field -> ordered list of acceptable source names
        join: Optional second table for the two-step lookup
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    endpoint_url: str = Field(..., min_length=1)
    query_mode: QueryMode = QueryMode.ENVELOPE
    buffer_degrees: Optional[float] = Field(None, gt=0, lt=1)
    distance_meters: Optional[float] = Field(None, gt=0)
    field_aliases: Dict[str, List[str]] = Field(default_factory=dict)
    join: Optional[JoinConfig] = None

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("field_aliases")
    @classmethod
    def validate_aliases(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return _validate_aliases(v)

    @model_validator(mode="after")
    def require_parcel_id_aliases(self) -> "CountyConfig":
        if "parcel_id" not in self.field_aliases:
            raise ValueError(f"county '{self.name}' must map the parcel_id field")
        return self

    @property
    def query_url(self) -> str:
        """Endpoint URL ending in /query."""
        if self.endpoint_url.endswith("/query"):
            return self.endpoint_url
        return f"{self.endpoint_url}/query"

    @property
    def is_two_step(self) -> bool:
        """Check if this county joins a second table."""
        return self.join is not None
