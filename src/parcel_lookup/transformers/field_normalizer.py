"""
Field Name Normalizer

Resolves logical parcel attributes from source records whose field names
differ between counties. Each logical field has an ordered list of candidate
source names; the first candidate holding a non-empty value wins.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional


def has_value(value: Any) -> bool:
    """
    Check whether a source value counts as present.

    None and blank strings are absent; any other value, including 0 and
    False, is present.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def resolve_field(attributes: Mapping[str, Any], candidates: Iterable[str]) -> Optional[Any]:
    """
    Return the value of the first candidate field that is present.

    Args:
        attributes: Source attribute dictionary
        candidates: Source field names in priority order

    Returns:
        The first present value, or None when no candidate matches
    """
    for name in candidates:
        value = attributes.get(name)
        if has_value(value):
            return value
    return None


def normalize_attributes(
    attributes: Mapping[str, Any],
    field_aliases: Mapping[str, List[str]]
) -> Dict[str, Optional[Any]]:
    """
    Resolve every logical field independently.

    Args:
        attributes: Source attribute dictionary
        field_aliases: Logical field name -> ordered candidate source names

    Returns:
        Dictionary keyed by logical field name; unresolved fields are None
    """
    return {
        logical: resolve_field(attributes, candidates)
        for logical, candidates in field_aliases.items()
    }
