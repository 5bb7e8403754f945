"""
County Registry

Immutable mapping from county identifier to parcel data source descriptor,
loaded from JSON and validated once at startup.
"""
import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from config.settings import settings
from src.parcel_lookup.exceptions import RegistryValidationError
from src.parcel_lookup.models.county_config import CountyConfig
from src.parcel_lookup.utils.logger import get_logger

logger = get_logger(__name__)


def county_key(county_name: Optional[str]) -> str:
    """
    Normalize a county name into a registry identifier.

    "Lancaster County" -> "lancaster", " philadelphia " -> "philadelphia".
    """
    if not county_name:
        return ""
    key = county_name.strip().lower()
    if key.endswith(" county"):
        key = key[: -len(" county")]
    return key.strip()


class CountyRegistry:
    """
    Read-only registry of county parcel sources.

    Lookups go through county_key(), so geocoder output such as
    "Allegheny County" resolves to the "allegheny" entry.
    """

    def __init__(self, counties: Iterable[CountyConfig] = ()):
        entries = {}
        for config in counties:
            key = county_key(config.name)
            if not key:
                raise RegistryValidationError(f"County entry has an empty name: {config!r}")
            if key in entries:
                raise RegistryValidationError(f"Duplicate county entry: {config.name}")
            entries[key] = config
        self._entries = MappingProxyType(entries)

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> "CountyRegistry":
        """
        Load and validate a registry JSON file.

        Accepts either {"counties": [...]} or a bare list of county objects.

        Args:
            path: Registry file path (default from settings)

        Raises:
            RegistryValidationError: File missing, not JSON, or an entry is invalid
        """
        registry_path = Path(path or settings.counties_file)

        try:
            with open(registry_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise RegistryValidationError(
                f"County registry not found: {registry_path}"
            ) from e
        except json.JSONDecodeError as e:
            raise RegistryValidationError(
                f"County registry is not valid JSON: {registry_path}", details=str(e)
            ) from e

        if isinstance(data, dict):
            data = data.get("counties", [])
        if not isinstance(data, list):
            raise RegistryValidationError(f"County registry must hold a list: {registry_path}")

        try:
            counties = [CountyConfig(**item) for item in data]
        except (TypeError, ValidationError) as e:
            raise RegistryValidationError(
                f"Invalid county entry in {registry_path}", details=str(e)
            ) from e

        registry = cls(counties)
        logger.info(
            "county_registry_loaded",
            path=str(registry_path),
            counties=registry.county_names(),
        )
        return registry

    def get(self, county_name: Optional[str]) -> Optional[CountyConfig]:
        """Return the config for a county name, or None if unregistered."""
        return self._entries.get(county_key(county_name))

    def county_names(self) -> List[str]:
        """Display names of every registered county, sorted."""
        return sorted(config.name for config in self._entries.values())

    def __contains__(self, county_name: object) -> bool:
        return isinstance(county_name, str) and county_key(county_name) in self._entries

    def __iter__(self) -> Iterator[CountyConfig]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
