"""
FlightDesk API - Flight Routes

Endpoints:
    GET  /flights          - Flight offer search
    POST /flights/confirm  - Live re-pricing of a selected offer
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from flightdesk.api.v1.deps import (
    get_flight_service,
    provider_error_response,
    unexpected_error_response,
)
from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.common.errors import ProviderError

router = APIRouter(prefix="/flights", tags=["Flights"])


# --------------------------------------------------
# FLIGHT SEARCH
# --------------------------------------------------
@router.get("")
async def search_flights(
    origin: str = Query(..., min_length=3, max_length=3, description="Origin IATA code"),
    destination: str = Query(..., min_length=3, max_length=3, description="Destination IATA code"),
    depart_date: str = Query(..., alias="departDate", description="YYYY-MM-DD"),
    adults: int = Query(..., ge=1, le=9),
    children: int = Query(default=0, ge=0),
    infants: int = Query(default=0, ge=0),
    return_date: Optional[str] = Query(default=None, alias="returnDate"),
    max_results: int = Query(default=10, ge=1, le=250, alias="maxResults"),
    raw: bool = Query(default=False),
    currency_code: str = Query(default="USD", alias="currencyCode"),
    travel_class: Optional[str] = Query(default=None, alias="travelClass"),
    service: FlightService = Depends(get_flight_service),
):
    query = dict(
        origin=origin.upper(),
        destination=destination.upper(),
        departure_date=depart_date,
        adults=adults,
        children=children,
        infants=infants,
        return_date=return_date,
        travel_class=travel_class,
        currency_code=currency_code,
        max_results=max_results,
    )

    try:
        if raw:
            return await service.search_flights_raw(**query)

        offers = await service.search_flights(**query)
        return [offer.model_dump(by_alias=True, exclude_none=True) for offer in offers]

    except ProviderError as e:
        return provider_error_response("Error fetching flights", e)
    except Exception as e:
        return unexpected_error_response("Failed to process flights", e)


# --------------------------------------------------
# FLIGHT PRICING
# --------------------------------------------------
@router.post("/confirm")
async def confirm(
    payload: Any = Body(..., description="Offer from search, bare or wrapped in 'data'"),
    service: FlightService = Depends(get_flight_service),
):
    try:
        return await service.confirm_price(payload)

    except ProviderError as e:
        return provider_error_response("Failed to price offer", e)
    except Exception as e:
        return unexpected_error_response("Unexpected error", e)
