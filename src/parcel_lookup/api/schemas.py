"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class LookupRequest(BaseModel):
    """Address lookup request body."""
    address: Optional[str] = Field(None, description="Free-text property address")


class GeocodeOut(BaseModel):
    """Geocoded address as returned to clients."""
    lat: float
    lon: float
    county: str
    municipality: str
    displayName: str


class ParcelOut(BaseModel):
    """Normalized parcel as returned to clients."""
    parcelId: str
    owner: str
    acres: Optional[float] = None
    zoning: str
    municipality: str
    situs: str
    landUse: str
    assessment: Optional[float] = None
    county: str
    dataSource: str
    sourceName: str
    fallbackReason: Optional[str] = None
    rawAttributes: Optional[Dict[str, Any]] = None


class LookupResponse(BaseModel):
    """Successful lookup response."""
    success: bool = True
    geocode: GeocodeOut
    parcel: ParcelOut
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error payload for 4xx/5xx responses."""
    error: str
    details: Optional[str] = None
    hint: Optional[str] = None


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
    counties: List[str] = Field(default_factory=list)
    commercialApiConfigured: bool = False


class EndpointProbe(BaseModel):
    """Reachability of one county GIS endpoint."""
    endpoint: str
    reachable: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class GISProbeReport(BaseModel):
    """Reachability of every registered county endpoint."""
    timestamp: datetime
    results: Dict[str, EndpointProbe]
