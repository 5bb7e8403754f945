"""
Geocode Result Model

Pydantic model for a single geocoded address.
"""
from pydantic import BaseModel, ConfigDict, Field


class GeocodeResult(BaseModel):
    """
    Coordinates and administrative areas for one geocoded address.

    Attributes:
        lat: WGS84 latitude
        lon: WGS84 longitude
        county: County name as reported by the geocoder (e.g. "Lancaster County")
        municipality: City, borough or township name
        display_name: Full display address from the geocoder
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., description="Latitude", ge=-90, le=90)
    lon: float = Field(..., description="Longitude", ge=-180, le=180)
    county: str = Field(..., min_length=1, description="County name")
    municipality: str = Field("Unknown", description="Municipality name")
    display_name: str = Field("", description="Display address")

    def to_response(self) -> dict:
        """Serialize using the camelCase keys the lookup endpoint returns."""
        return {
            "lat": self.lat,
            "lon": self.lon,
            "county": self.county,
            "municipality": self.municipality,
            "displayName": self.display_name,
        }
