"""
Lookup Exceptions

Domain errors raised by the geocoder, the county registry and the parcel
sources. The API layer turns any PropertyLookupError into a JSON 500.
"""
from typing import Optional


class PropertyLookupError(Exception):
    """Base class for every failure in the address-to-parcel pipeline."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class GeocodingError(PropertyLookupError):
    """Address could not be resolved to coordinates and a county."""


class ParcelSourceError(PropertyLookupError):
    """A parcel data source failed (transport error, non-2xx, error payload)."""


class ParcelNotFoundError(ParcelSourceError):
    """The parcel source answered but returned no matching feature."""


class CountyNotConfiguredError(PropertyLookupError):
    """No registry entry and no commercial source for the resolved county."""


class RegistryValidationError(PropertyLookupError):
    """The county registry file is missing, malformed or inconsistent."""
