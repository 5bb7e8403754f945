"""
Lookup Router

Address-to-parcel lookup endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from src.parcel_lookup.api.dependencies import get_lookup_service
from src.parcel_lookup.api.schemas import ErrorResponse, LookupRequest, LookupResponse
from src.parcel_lookup.services.property_lookup import PropertyLookupService

router = APIRouter(prefix="/api", tags=["lookup"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/lookup",
    response_model=LookupResponse,
    responses=ERROR_RESPONSES,
    operation_id="lookup_property",
)
@router.post(
    "/lookup-property",
    response_model=LookupResponse,
    responses=ERROR_RESPONSES,
    operation_id="lookup_property_alias",
)
def lookup_property(
    request: Optional[LookupRequest] = Body(None),
    service: PropertyLookupService = Depends(get_lookup_service),
):
    """
    Look up the parcel for a street address.

    Args:
        request: Body with the address to look up
        service: Lookup service

    Returns:
        Geocode, normalized parcel (tagged real, partial or demo) and timestamp

    Raises:
        HTTPException: 400 if the address is missing or blank
    """
    address = (request.address or "").strip() if request else ""
    if not address:
        raise HTTPException(status_code=400, detail="Address is required")

    # PropertyLookupError propagates to the app-level handler (500)
    result = service.lookup(address)
    return result.to_response()
