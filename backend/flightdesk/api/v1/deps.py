import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.common.errors import ErrorResponse, ProviderError

logger = logging.getLogger("FlightDesk-API")


def get_flight_service(request: Request) -> FlightService:
    return request.app.state.flight_service


def provider_error_response(error: str, exc: ProviderError) -> JSONResponse:
    """Provider rejected the request: the caller's input or offer was bad."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=error,
            details=exc.message,
            category=exc.status_category,
        ).model_dump(exclude_none=True),
    )


def unexpected_error_response(error: str, exc: Exception) -> JSONResponse:
    logger.exception(f"❌ {error}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=error, details=str(exc)).model_dump(exclude_none=True),
    )
