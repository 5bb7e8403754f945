"""
Geocoding Package

Address to coordinate resolution.
"""

from .nominatim import NominatimGeocoder

__all__ = ["NominatimGeocoder"]
