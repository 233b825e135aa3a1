"""
FlightDesk API - Booking Routes

Endpoints:
    POST /traveler        - Preview the provider-shaped traveler (not stored)
    POST /bookings/order  - Place a flight order
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from flightdesk.api.v1.deps import (
    get_flight_service,
    provider_error_response,
    unexpected_error_response,
)
from flightdesk.models.flight_models import TravelerRequest
from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.common.errors import ProviderError

router = APIRouter(tags=["Bookings"])


@router.post("/traveler")
async def traveler(
    request: TravelerRequest,
    service: FlightService = Depends(get_flight_service),
):
    return service.build_traveler(request).model_dump(by_alias=True, exclude_none=True)


@router.post("/bookings/order")
async def order(
    order: Dict[str, Any] = Body(..., description="Complete flight-order payload"),
    service: FlightService = Depends(get_flight_service),
):
    """
    The client assembles offer + travelers; the payload goes to the
    provider unchanged.
    """
    try:
        return await service.place_order(order)

    except ProviderError as e:
        return provider_error_response("Error creating order", e)
    except Exception as e:
        return unexpected_error_response("Failed to process order", e)
