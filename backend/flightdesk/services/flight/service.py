"""
FlightDesk orchestration service.

Each user operation is a short pipeline over the provider client, the
mappers and the airport cache. Nothing is kept between requests except
the airport cache; pricing and booking work off the raw offer the client
sends back.
"""
import logging
from typing import Any, Dict, List, Optional

from flightdesk.models.flight_models import Airport, FlightOffer, Location, Traveler, TravelerRequest
from flightdesk.services.flight.airport_cache import AirportCache
from flightdesk.services.flight.mappers.mapper import (
    collect_carrier_codes,
    map_airline_names,
    map_flight_offers,
    map_locations,
)
from flightdesk.services.flight.mappers.traveler_mapper import build_traveler
from flightdesk.services.flight.pricing import parse_offer_document
from flightdesk.services.integration.amadeus.client import AmadeusClient
from flightdesk.services.integration.common.errors import ProviderError

logger = logging.getLogger("FlightDesk-Service")

EMPTY_RESULT: Dict[str, Any] = {"data": []}


def _raw_or_empty(body: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    data = body.get("data") if isinstance(body, dict) else None
    if isinstance(data, list) and data:
        return body
    return dict(EMPTY_RESULT)


class FlightService:
    def __init__(self, client: AmadeusClient, airport_cache: Optional[AirportCache] = None):
        self.client = client
        self.airport_cache = airport_cache or AirportCache(client.resolve_airport)

    # --------------------------------------------------
    # LOCATIONS
    # --------------------------------------------------
    async def search_locations(self, keyword: str) -> List[Location]:
        body = await self.client.search_locations(keyword)
        locations = map_locations(body)
        logger.info(f"📍 Location search | keyword={keyword!r} | count={len(locations)}")
        return locations

    async def search_locations_raw(self, keyword: str) -> Dict[str, Any]:
        return _raw_or_empty(await self.client.search_locations(keyword))

    async def resolve_airports(self, codes_csv: str) -> Dict[str, Airport]:
        return await self.airport_cache.resolve_many(codes_csv)

    # --------------------------------------------------
    # AIRLINES
    # --------------------------------------------------
    async def airline_names(self, codes_csv: str) -> Dict[str, str]:
        body = await self.client.search_airlines(codes_csv)
        return map_airline_names(body)

    # --------------------------------------------------
    # FLIGHT SEARCH
    # --------------------------------------------------
    async def search_flights_raw(self, **query: Any) -> Dict[str, Any]:
        return _raw_or_empty(await self.client.search_flights(**query))

    async def search_flights(self, **query: Any) -> List[FlightOffer]:
        """
        Searches offers, looks up carrier names once for the whole result,
        and attaches each offer's raw JSON so the client can price/book it
        later without any server-side session.
        """
        body = await self.client.search_flights(**query)

        data = body.get("data")
        raw_offers: List[Any] = data if isinstance(data, list) else []
        if not raw_offers:
            return []

        names: Dict[str, str] = {}
        codes = collect_carrier_codes(raw_offers)
        if codes:
            names = await self.airline_names(",".join(codes))

        # The provider body is the single source: each offer is mapped from,
        # and carries, the exact object at its index.
        offers = map_flight_offers(raw_offers, names, raw_offers)
        logger.info(f"✈️ Flight search mapped | offers={len(offers)} | carriers={len(codes)}")
        return offers

    # --------------------------------------------------
    # PRICING / BOOKING
    # --------------------------------------------------
    async def confirm_price(self, payload: Any) -> Dict[str, Any]:
        document = parse_offer_document(payload)
        logger.info(f"💶 Pricing offer | shape={document.shape} | id={document.offer.get('id')}")
        return await self.client.price_offer(document.offer)

    async def place_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.client.place_order(order)
        if not result:
            raise ProviderError(ProviderError.CLIENT_ERROR, "Empty order response")

        data = result.get("data")
        order_id = data.get("id") if isinstance(data, dict) else None
        logger.info(f"🧾 Order placed | id={order_id}")
        return result

    @staticmethod
    def build_traveler(request: TravelerRequest) -> Traveler:
        return build_traveler(request, "1")
