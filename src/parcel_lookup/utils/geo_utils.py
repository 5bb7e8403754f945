"""
Geographic Utility Functions

Helpers for building ArcGIS query geometries and coarse coverage checks.
"""
from typing import Tuple

# Approximate bounding box for all of Pennsylvania (lat_min, lat_max, lon_min, lon_max)
PENNSYLVANIA_BOUNDS = (39.5, 42.5, -80.5, -74.5)


def buffer_envelope(
    lat: float,
    lon: float,
    buffer_degrees: float
) -> Tuple[float, float, float, float]:
    """
    Build a square envelope around a point.

    Args:
        lat: Latitude (decimal degrees)
        lon: Longitude (decimal degrees)
        buffer_degrees: Half-width of the envelope in degrees

    Returns:
        Tuple (xmin, ymin, xmax, ymax) in WGS84 lon/lat order
    """
    return (
        lon - buffer_degrees,
        lat - buffer_degrees,
        lon + buffer_degrees,
        lat + buffer_degrees,
    )


def envelope_to_param(envelope: Tuple[float, float, float, float]) -> str:
    """Format an envelope as the comma-separated ArcGIS geometry parameter."""
    return ",".join(f"{value:.6f}" for value in envelope)


def point_to_param(lat: float, lon: float) -> str:
    """Format a point as the ArcGIS "x,y" geometry parameter."""
    return f"{lon:.6f},{lat:.6f}"


def is_within_pennsylvania(lat: float, lon: float) -> bool:
    """
    Check whether a point falls inside the approximate Pennsylvania box.

    The box overlaps parts of neighbouring states; it is only used to decide
    whether the commercial parcel API is expected to cover a location.
    """
    lat_min, lat_max, lon_min, lon_max = PENNSYLVANIA_BOUNDS
    return lat_min <= lat <= lat_max and lon_min <= lon <= lon_max
