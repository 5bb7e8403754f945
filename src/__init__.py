"""
Pennsylvania Parcel Lookup - Core Package

Geocodes free-text addresses, dispatches to county parcel sources and
normalizes the results into a single parcel record shape.
"""

__version__ = "0.2.0"
