"""
Parcel Lookup

Address-to-parcel lookup for Pennsylvania counties: geocoding, county
registry, ArcGIS and Regrid parcel sources, field normalization and demo
fallback data.
"""
