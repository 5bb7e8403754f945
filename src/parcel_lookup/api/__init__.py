"""
FastAPI REST API for the PA Parcel Lookup Service

Provides REST endpoints for:
- Address to parcel lookup
- Health checks and county GIS reachability
- A static page for manual lookups
"""
