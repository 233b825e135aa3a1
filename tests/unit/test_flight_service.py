import pytest

from flightdesk.models.flight_models import TravelerRequest
from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.common.errors import ProviderError

from conftest import FakeAmadeus, make_offer

QUERY = dict(
    origin="IAH",
    destination="ORD",
    departure_date="2025-03-01",
    adults=1,
    children=0,
    infants=0,
    return_date=None,
    travel_class=None,
    currency_code="USD",
    max_results=10,
)


@pytest.mark.asyncio
async def test_search_flights_enriches_and_keeps_raw_offers():
    raw_offers = [make_offer("1", ["UA", "AA"]), make_offer("2", ["ZZ"])]
    provider = FakeAmadeus(
        flights={"data": raw_offers, "dictionaries": {}},
        airlines={"data": [{"iataCode": "UA", "businessName": "UNITED AIRLINES"}]},
    )
    service = FlightService(provider)

    offers = await service.search_flights(**QUERY)

    assert len(offers) == len(raw_offers)
    for offer, raw in zip(offers, raw_offers):
        assert offer.raw_offer is raw
        assert offer.id == raw["id"]

    assert offers[0].airline_name == "UNITED AIRLINES"
    assert offers[1].airline_name == "ZZ"
    assert provider.calls_to("search_airlines") == [("search_airlines", "UA,AA,ZZ")]
    assert provider.calls_to("search_flights")[0][1] == QUERY


@pytest.mark.asyncio
async def test_search_flights_without_offers_skips_airline_lookup():
    provider = FakeAmadeus(flights={"data": []})
    service = FlightService(provider)

    assert await service.search_flights(**QUERY) == []
    assert provider.calls_to("search_airlines") == []


@pytest.mark.asyncio
async def test_search_flights_without_carrier_codes_skips_airline_lookup():
    provider = FakeAmadeus(flights={"data": [{"id": "1", "price": {"total": "1.00", "currency": "USD"}}]})
    service = FlightService(provider)

    offers = await service.search_flights(**QUERY)

    assert len(offers) == 1
    assert offers[0].airline_name is None
    assert provider.calls_to("search_airlines") == []


@pytest.mark.asyncio
async def test_raw_search_returns_body_or_empty_data():
    body = {"meta": {"count": 1}, "data": [make_offer("1", ["UA"])]}
    service = FlightService(FakeAmadeus(flights=body))
    assert await service.search_flights_raw(**QUERY) is body

    service = FlightService(FakeAmadeus(flights={"meta": {"count": 0}}))
    assert await service.search_flights_raw(**QUERY) == {"data": []}


@pytest.mark.asyncio
async def test_search_locations():
    provider = FakeAmadeus(locations={"data": [{"iataCode": "IAH", "address": {"cityName": "HOUSTON"}}]})
    service = FlightService(provider)

    locations = await service.search_locations("hou")

    assert [loc.iata_code for loc in locations] == ["IAH"]
    assert provider.calls_to("search_locations") == [("search_locations", "hou")]


@pytest.mark.asyncio
async def test_place_order_forwards_payload_unchanged():
    order = {"data": {"type": "flight-order", "flightOffers": [make_offer("1", ["UA"])], "travelers": []}}
    confirmation = {"data": {"type": "flight-order", "id": "eJzTd9f3NjIJdzcBAAtXAmE="}}
    provider = FakeAmadeus(order=confirmation)
    service = FlightService(provider)

    result = await service.place_order(order)

    assert provider.calls_to("place_order") == [("place_order", order)]
    assert result is confirmation


@pytest.mark.asyncio
async def test_place_order_empty_response_is_provider_error():
    service = FlightService(FakeAmadeus(order={}))

    with pytest.raises(ProviderError):
        await service.place_order({"data": {}})


@pytest.mark.asyncio
async def test_provider_error_propagates(mocker):
    provider = FakeAmadeus()
    mocker.patch.object(
        provider,
        "search_flights",
        side_effect=ProviderError(ProviderError.RATE_LIMITED, "Too many requests", 429),
    )
    service = FlightService(provider)

    with pytest.raises(ProviderError) as exc_info:
        await service.search_flights(**QUERY)

    assert exc_info.value.status_category == ProviderError.RATE_LIMITED


def test_build_traveler_uses_id_one():
    traveler = FlightService.build_traveler(
        TravelerRequest(first_name="Jane", last_name="Doe", date_of_birth="1990-01-15")
    )
    assert traveler.id == "1"
