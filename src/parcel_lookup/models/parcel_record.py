"""
Parcel Record Data Models

Pydantic models for the normalized parcel result returned by every source
(county GIS, Regrid, demo generator).
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

NOT_AVAILABLE = "N/A"
UNKNOWN = "Unknown"


class DataSource(str, Enum):
    """Provenance tag attached to every parcel record."""

    REAL = "real"
    PARTIAL = "partial"
    DEMO = "demo"


class ParcelRecord(BaseModel):
    """
    Normalized parcel record.

    Text fields never hold None or blank strings: missing values collapse to
    the "N/A" placeholder ("Unknown" for municipality and county). Numeric
    fields are parsed leniently and fall back to None.

    Attributes:
        parcel_id: County parcel / tax identifier
        owner: Owner name
        acres: Lot size in acres
        zoning: Zoning code or description
        municipality: Municipality the parcel lies in
        situs: Situs (site) address
        land_use: Land use description
        assessment: Assessed or market value in dollars
        county: County name
        data_source: Provenance tag (real, partial, demo)
        source_name: Which source produced the record (county id, "regrid", "demo")
        fallback_reason: Why demo data replaced a real source, if it did
        raw_attributes: Untouched source attributes, when requested
    """

    parcel_id: str = Field(NOT_AVAILABLE, description="Parcel ID")
    owner: str = Field(NOT_AVAILABLE, description="Owner name")
    acres: Optional[float] = Field(None, description="Acreage", ge=0)
    zoning: str = Field(NOT_AVAILABLE, description="Zoning")
    municipality: str = Field(UNKNOWN, description="Municipality")
    situs: str = Field(NOT_AVAILABLE, description="Situs address")
    land_use: str = Field(NOT_AVAILABLE, description="Land use")
    assessment: Optional[float] = Field(None, description="Assessment value", ge=0)
    county: str = Field(UNKNOWN, description="County")
    data_source: DataSource = Field(..., description="Provenance tag")
    source_name: str = Field(..., description="Source identifier")
    fallback_reason: Optional[str] = Field(None, description="Demo fallback reason")
    raw_attributes: Optional[Dict[str, Any]] = Field(None, description="Raw source attributes")

    @field_validator("parcel_id", "owner", "zoning", "situs", "land_use", mode="before")
    @classmethod
    def default_not_available(cls, v: Any) -> str:
        """Collapse missing text to the N/A placeholder."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return NOT_AVAILABLE
        return str(v).strip()

    @field_validator("municipality", "county", mode="before")
    @classmethod
    def default_unknown(cls, v: Any) -> str:
        """Collapse missing area names to the Unknown placeholder."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNKNOWN
        return str(v).strip()

    @field_validator("acres", "assessment", mode="before")
    @classmethod
    def parse_number(cls, v: Any) -> Optional[float]:
        """Accept numbers or numeric strings ("1,250.5"); anything else is None."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return float(v) if v >= 0 else None
        try:
            parsed = float(str(v).replace(",", "").replace("$", "").strip())
        except ValueError:
            return None
        return parsed if parsed >= 0 else None

    def is_demo(self) -> bool:
        """Check if the record was synthesized rather than fetched."""
        return self.data_source == DataSource.DEMO

    def to_response(self) -> dict:
        """Serialize using the camelCase keys the lookup endpoint returns."""
        response = {
            "parcelId": self.parcel_id,
            "owner": self.owner,
            "acres": self.acres,
            "zoning": self.zoning,
            "municipality": self.municipality,
            "situs": self.situs,
            "landUse": self.land_use,
            "assessment": self.assessment,
            "county": self.county,
            "dataSource": self.data_source.value,
            "sourceName": self.source_name,
            "fallbackReason": self.fallback_reason,
        }
        if self.raw_attributes is not None:
            response["rawAttributes"] = self.raw_attributes
        return response
