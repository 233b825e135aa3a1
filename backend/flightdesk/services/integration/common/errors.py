"""
FlightDesk error taxonomy.

ConfigurationError  -> fatal, raised at startup
ProviderError       -> provider rejected a request, surfaced as a client error
UnexpectedPayloadError -> client sent something we cannot turn into an offer
"""
from typing import Optional

from pydantic import BaseModel


class FlightDeskError(Exception):
    """Base class for all FlightDesk errors."""


class ConfigurationError(FlightDeskError):
    pass


class ProviderError(FlightDeskError):
    """The flight-data provider rejected or failed a request."""

    CLIENT_ERROR = "CLIENT_ERROR"
    AUTHENTICATION = "AUTHENTICATION"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK = "NETWORK"
    PARSE_ERROR = "PARSE_ERROR"

    def __init__(
        self,
        status_category: str,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_category = status_category
        self.message = message
        self.status_code = status_code
        self.code = code

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class UnexpectedPayloadError(FlightDeskError):
    pass


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    category: Optional[str] = None
