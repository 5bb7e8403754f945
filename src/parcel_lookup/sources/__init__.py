"""
Sources Package

Parcel data sources: county ArcGIS layers, the Regrid API and the demo
generator.
"""

from .arcgis_client import ArcGISParcelClient
from .regrid_client import RegridClient
from .demo_data import generate_demo_parcel

__all__ = [
    "ArcGISParcelClient",
    "RegridClient",
    "generate_demo_parcel",
]
