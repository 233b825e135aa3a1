import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# 1. Force the backend directory into sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# 2. Dummy provider credentials for testing
import os
os.environ.setdefault("AMADEUS_API_KEY", "test_key")
os.environ.setdefault("AMADEUS_API_SECRET", "test_secret")

from flightdesk.models.flight_models import Airport
from flightdesk.services.integration.amadeus.client import AmadeusClient


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def make_amadeus_client(handler: Callable[[httpx.Request], httpx.Response]) -> AmadeusClient:
    """
    AmadeusClient backed by httpx.MockTransport. Token requests are answered
    here; every other request goes to `handler`.
    """
    def dispatch(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/security/oauth2/token":
            return json_response({"access_token": "test-token", "expires_in": 1799})
        return handler(request)

    return AmadeusClient(
        api_key="test_key",
        api_secret="test_secret",
        base_url="https://test.api.amadeus.com",
        transport=httpx.MockTransport(dispatch),
    )


class FakeAmadeus:
    """In-memory stand-in for AmadeusClient that records every call."""

    def __init__(
        self,
        flights: Optional[Dict[str, Any]] = None,
        locations: Optional[Dict[str, Any]] = None,
        airlines: Optional[Dict[str, Any]] = None,
        airports: Optional[Dict[str, Airport]] = None,
        priced: Optional[Dict[str, Any]] = None,
        order: Optional[Dict[str, Any]] = None,
    ):
        self.flights = flights if flights is not None else {"data": []}
        self.locations = locations if locations is not None else {"data": []}
        self.airlines = airlines if airlines is not None else {"data": []}
        self.airports = airports or {}
        self.priced = priced if priced is not None else {"data": {}}
        self.order = order if order is not None else {"data": {"id": "ORDER1"}}
        self.calls: List[tuple] = []

    async def search_locations(self, keyword):
        self.calls.append(("search_locations", keyword))
        return self.locations

    async def resolve_airport(self, code):
        self.calls.append(("resolve_airport", code))
        return self.airports.get(code)

    async def search_flights(self, **query):
        self.calls.append(("search_flights", query))
        return self.flights

    async def search_airlines(self, codes_csv):
        self.calls.append(("search_airlines", codes_csv))
        return self.airlines

    async def price_offer(self, offer):
        self.calls.append(("price_offer", offer))
        return self.priced

    async def place_order(self, order):
        self.calls.append(("place_order", order))
        return self.order

    def calls_to(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]


def make_offer(
    offer_id: str,
    carriers: List[str],
    total: str = "199.99",
    currency: str = "USD",
) -> Dict[str, Any]:
    """Amadeus-shaped one-way offer with one segment per carrier."""
    airports = ["IAH", "ORD", "DEN", "SFO", "SEA"]
    segments = []
    for i, carrier in enumerate(carriers):
        segments.append({
            "departure": {"iataCode": airports[i], "at": f"2025-03-01T{i + 8:02d}:00:00"},
            "arrival": {"iataCode": airports[i + 1], "at": f"2025-03-01T{i + 9:02d}:30:00"},
            "carrierCode": carrier,
            "number": str(100 + i),
            "duration": "PT1H30M",
            "numberOfStops": 0,
        })
    return {
        "type": "flight-offer",
        "id": offer_id,
        "source": "GDS",
        "itineraries": [{"duration": f"PT{len(carriers) * 2}H", "segments": segments}],
        "price": {"currency": currency, "total": total, "grandTotal": total},
        "validatingAirlineCodes": [carriers[0]],
        "travelerPricings": [{
            "travelerId": "1",
            "fareDetailsBySegment": [{"segmentId": "1", "cabin": "ECONOMY"}],
        }],
    }


@pytest.fixture
def fake_amadeus():
    return FakeAmadeus()
