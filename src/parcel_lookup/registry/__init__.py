"""
County Registry Package

Static county-to-data-source configuration.
"""

from .county_registry import CountyRegistry, county_key

__all__ = ["CountyRegistry", "county_key"]
