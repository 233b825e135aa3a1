"""
FlightDesk API - Location Routes

Endpoints:
    GET /locations  - Airport keyword search
    GET /airports   - IATA code(s) -> airport details (cached)
    GET /airlines   - Carrier code(s) -> display name
"""

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder

from flightdesk.api.v1.deps import (
    get_flight_service,
    provider_error_response,
    unexpected_error_response,
)
from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.common.errors import ProviderError

router = APIRouter(tags=["Locations"])


@router.get("/locations")
async def locations(
    keyword: str = Query(..., min_length=1, description="Airport name, city or code fragment"),
    raw: bool = Query(default=False, description="Return the provider response as is"),
    service: FlightService = Depends(get_flight_service),
):
    try:
        if raw:
            return await service.search_locations_raw(keyword)

        results = await service.search_locations(keyword)
        return [loc.model_dump(by_alias=True, exclude_none=True) for loc in results]

    except ProviderError as e:
        return provider_error_response("Error fetching locations", e)
    except Exception as e:
        return unexpected_error_response("Failed to process locations", e)


@router.get("/airports")
async def airports(
    codes: str = Query(..., description="Comma-separated IATA codes, e.g. JFK,LAX"),
    service: FlightService = Depends(get_flight_service),
):
    try:
        resolved = await service.resolve_airports(codes)
        return {
            code: airport.model_dump(by_alias=True, exclude_none=True)
            for code, airport in resolved.items()
        }

    except ProviderError as e:
        return provider_error_response("Error resolving airports", e)
    except Exception as e:
        return unexpected_error_response("Failed to resolve airports", e)


@router.get("/airlines")
async def airlines(
    codes: str = Query(..., description="Comma-separated carrier codes, e.g. UA,AA"),
    service: FlightService = Depends(get_flight_service),
):
    try:
        return jsonable_encoder(await service.airline_names(codes))

    except ProviderError as e:
        return provider_error_response("Error fetching airlines", e)
    except Exception as e:
        return unexpected_error_response("Failed to process airlines", e)
