"""
Amadeus API Client
FlightDesk - Provider integration

Handles OAuth2 authentication and the four request kinds FlightDesk issues
to the Amadeus Self-Service APIs: location search, flight offer search,
offer pricing and order placement (plus the airline lookup used for
carrier-name enrichment).

Every method returns the provider's JSON body as plain dicts/lists, or
raises ProviderError.
"""

import asyncio
import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import httpx

from flightdesk.core.config import Settings
from flightdesk.models.flight_models import Airport
from flightdesk.services.flight.mappers.mapper import map_airport
from flightdesk.services.integration.common.amadeus_error_mapper import map_amadeus_error
from flightdesk.services.integration.common.errors import ProviderError

logger = logging.getLogger("FlightDesk-Amadeus")

TOKEN_ENDPOINT = "/v1/security/oauth2/token"
LOCATIONS_ENDPOINT = "/v1/reference-data/locations"
AIRLINES_ENDPOINT = "/v1/reference-data/airlines"
FLIGHT_OFFERS_ENDPOINT = "/v2/shopping/flight-offers"
PRICING_ENDPOINT = "/v1/shopping/flight-offers/pricing"
ORDERS_ENDPOINT = "/v1/booking/flight-orders"

SUBTYPE_AIRPORT = "AIRPORT"
CURRENCY_PATTERN = re.compile(r"[A-Z]{3}", re.IGNORECASE)

# Refresh the token this long before Amadeus says it expires
TOKEN_SAFETY_MARGIN = 60


def build_flight_search_params(
    origin: str,
    destination: str,
    departure_date: str,
    adults: Any,
    children: int = 0,
    infants: int = 0,
    return_date: Optional[str] = None,
    travel_class: Optional[str] = None,
    currency_code: Optional[str] = None,
    max_results: int = 10,
) -> Dict[str, Any]:
    """
    Builds the flight-offers query. Optional parameters are added only
    when they carry a usable value.
    """
    params: Dict[str, Any] = {
        "originLocationCode": origin,
        "destinationLocationCode": destination,
        "departureDate": departure_date,
        "adults": adults,
        "max": max_results,
    }

    if children and children > 0:
        params["children"] = children
    if infants and infants > 0:
        params["infants"] = infants

    if return_date and return_date.strip():
        params["returnDate"] = return_date

    if travel_class and travel_class.strip():
        params["travelClass"] = travel_class.strip().replace(" ", "_").upper()

    if currency_code and CURRENCY_PATTERN.fullmatch(currency_code):
        params["currencyCode"] = currency_code.upper()

    return params


class AmadeusClient:
    """
    Thin async wrapper over the Amadeus REST API.

    One instance owns the credentials, the cached access token and a single
    httpx.AsyncClient that is reused for every call.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = "https://test.api.amadeus.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._api_secret = api_secret
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self._access_token: Optional[str] = None
        self._expires_at: Optional[datetime] = None
        self._token_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AmadeusClient":
        return cls(
            api_key=settings.amadeus_api_key,
            api_secret=settings.amadeus_api_secret,
            base_url=settings.base_url,
            timeout=settings.amadeus_timeout,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # ═══════════════════════════════════════════════════════════════════
    # TRANSPORT
    # ═══════════════════════════════════════════════════════════════════

    async def get_access_token(self) -> str:
        """
        Get OAuth2 access token from Amadeus.
        Caches token until shortly before expiry.
        """
        async with self._token_lock:
            if self._access_token and self._expires_at and datetime.now() < self._expires_at:
                return self._access_token

            data = await self._send(
                "POST",
                TOKEN_ENDPOINT,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._api_key,
                    "client_secret": self._api_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

            token = data.get("access_token")
            if not token:
                raise ProviderError(ProviderError.AUTHENTICATION, "Token response had no access_token")

            expires_in = int(data.get("expires_in", 1799)) - TOKEN_SAFETY_MARGIN
            self._access_token = token
            self._expires_at = datetime.now() + timedelta(seconds=max(expires_in, 0))

            logger.info("✅ Amadeus token refreshed")
            return token

    async def _send(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._http.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as e:
            raise ProviderError(ProviderError.NETWORK, f"Timed out calling Amadeus {endpoint}: {e}")
        except httpx.HTTPError as e:
            raise ProviderError(ProviderError.NETWORK, f"Could not reach Amadeus {endpoint}: {e}")

        try:
            body = response.json() if response.content else {}
        except ValueError:
            if response.status_code in (200, 201):
                raise ProviderError(
                    ProviderError.PARSE_ERROR,
                    f"Amadeus {endpoint} returned a non-JSON body",
                    status_code=response.status_code,
                )
            body = None

        if response.status_code not in (200, 201):
            error = map_amadeus_error(response.status_code, body)
            logger.warning(f"⚠️ Amadeus {method} {endpoint} rejected: {error}")
            raise error

        if not isinstance(body, dict):
            raise ProviderError(
                ProviderError.PARSE_ERROR,
                f"Amadeus API contract violation: expected object, got {type(body).__name__}",
                status_code=response.status_code,
            )

        return body

    async def _authorized(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        token = await self.get_access_token()
        headers = kwargs.pop("headers", {})
        headers["Authorization"] = f"Bearer {token}"
        return await self._send(method, endpoint, headers=headers, **kwargs)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._authorized("GET", endpoint, params=params or {})

    async def post(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._authorized(
            "POST",
            endpoint,
            json=body,
            headers={"Content-Type": "application/json"},
        )

    # ═══════════════════════════════════════════════════════════════════
    # PROVIDER OPERATIONS
    # ═══════════════════════════════════════════════════════════════════

    async def search_locations(self, keyword: str) -> Dict[str, Any]:
        """Airport search by keyword. Returns the raw response body."""
        return await self.get(LOCATIONS_ENDPOINT, {
            "keyword": keyword,
            "subType": SUBTYPE_AIRPORT,
        })

    async def resolve_airport(self, code: Optional[str]) -> Optional[Airport]:
        """
        Looks up one airport by IATA code.

        Prefers the result whose iataCode matches (case-insensitive), else
        the first result. Blank input and empty results give None.
        """
        if code is None or not code.strip():
            return None
        code = code.strip()

        body = await self.search_locations(code)
        results = body.get("data")
        if not isinstance(results, list) or not results:
            return None

        for location in results:
            if isinstance(location, dict) and str(location.get("iataCode", "")).upper() == code.upper():
                return map_airport(location)

        return map_airport(results[0])

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        adults: Any,
        children: int = 0,
        infants: int = 0,
        return_date: Optional[str] = None,
        travel_class: Optional[str] = None,
        currency_code: Optional[str] = None,
        max_results: int = 10,
    ) -> Dict[str, Any]:
        """Flight Offers Search. Returns the raw response body."""
        params = build_flight_search_params(
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            adults=adults,
            children=children,
            infants=infants,
            return_date=return_date,
            travel_class=travel_class,
            currency_code=currency_code,
            max_results=max_results,
        )
        body = await self.get(FLIGHT_OFFERS_ENDPOINT, params)

        data = body.get("data")
        logger.info(
            f"✈️ Amadeus search OK | {origin}->{destination} | "
            f"offers={len(data) if isinstance(data, list) else 0}"
        )
        return body

    async def search_airlines(self, codes_csv: str) -> Dict[str, Any]:
        return await self.get(AIRLINES_ENDPOINT, {"airlineCodes": codes_csv})

    async def price_offer(self, offer: Dict[str, Any]) -> Dict[str, Any]:
        """
        Re-prices one previously returned offer. The provider may answer
        with a different price than the search quoted.
        """
        return await self.post(PRICING_ENDPOINT, {
            "data": {
                "type": "flight-offers-pricing",
                "flightOffers": [offer],
            }
        })

    async def place_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        """Submits a complete flight-order payload as is."""
        return await self.post(ORDERS_ENDPOINT, order)
