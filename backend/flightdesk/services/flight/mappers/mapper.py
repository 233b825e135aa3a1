"""
Mapper functions that turn Amadeus responses into FlightDesk models.

Every output field is read on its own through `dig`, which walks the raw
JSON tree and returns None as soon as a key is missing or a node has the
wrong type. A surprise in one field leaves that field empty and nothing
else.
"""
from typing import Any, Dict, List, Optional, Sequence, Union

from flightdesk.models.flight_models import (
    Airport,
    FlightOffer,
    Itinerary,
    Location,
    Price,
    Segment,
)

PathKey = Union[str, int]


def dig(node: Any, *path: PathKey) -> Any:
    """
    Safe lookup into nested dicts/lists.

    dig(offer, "itineraries", 0, "segments") -> list or None
    """
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or not -len(node) <= key < len(node):
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        if node is None:
            return None
    return node


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _items(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


# --------------------------------------------------
# LOCATIONS / AIRPORTS / AIRLINES
# --------------------------------------------------

def map_location(raw: Any) -> Location:
    return Location(
        iata_code=_text(dig(raw, "iataCode")),
        name=_text(dig(raw, "name")),
        city=_text(dig(raw, "address", "cityName")),
        country_code=_text(dig(raw, "address", "countryCode")),
        latitude=_number(dig(raw, "geoCode", "latitude")),
        longitude=_number(dig(raw, "geoCode", "longitude")),
    )


def map_locations(body: Any) -> List[Location]:
    """Location search response -> Location list (null entries skipped)."""
    return [map_location(raw) for raw in _items(dig(body, "data")) if raw is not None]


def map_airport(raw: Any) -> Airport:
    return Airport(
        code=_text(dig(raw, "iataCode")),
        city_name=_text(dig(raw, "address", "cityName")),
        airport_name=_text(dig(raw, "name")),
        country_code=_text(dig(raw, "address", "countryCode")),
        time_zone_offset=_text(dig(raw, "timeZoneOffset")),
    )


def map_airline_names(body: Any) -> Dict[str, str]:
    """
    Airline lookup response -> {iataCode: display name}.
    Display name is businessName, then commonName, then the code itself.
    """
    names: Dict[str, str] = {}
    for airline in _items(dig(body, "data")):
        code = _text(dig(airline, "iataCode"))
        if not code:
            continue
        name = _text(dig(airline, "businessName"))
        if not name or not name.strip():
            name = _text(dig(airline, "commonName"))
        names[code] = name if name else code
    return names


# --------------------------------------------------
# FLIGHT OFFERS
# --------------------------------------------------

def map_segment(raw: Any) -> Segment:
    return Segment(
        carrier_code=_text(dig(raw, "carrierCode")),
        flight_number=_text(dig(raw, "number")),
        departure_iata=_text(dig(raw, "departure", "iataCode")),
        departure_at=_text(dig(raw, "departure", "at")),
        arrival_iata=_text(dig(raw, "arrival", "iataCode")),
        arrival_at=_text(dig(raw, "arrival", "at")),
        duration=_text(dig(raw, "duration")),
        number_of_stops=_integer(dig(raw, "numberOfStops")),
    )


def map_itinerary(raw: Any) -> Itinerary:
    # Segment order is flight order; keep it.
    return Itinerary(
        duration=_text(dig(raw, "duration")),
        segments=[map_segment(seg) for seg in _items(dig(raw, "segments"))],
    )


def map_price(raw: Any) -> Optional[Price]:
    if not isinstance(raw, dict):
        return None
    return Price(
        currency=_text(dig(raw, "currency")),
        total=_text(dig(raw, "total")),
    )


def collect_carrier_codes(offers: Sequence[Any]) -> List[str]:
    """Every distinct carrierCode used by any segment of any offer, first-seen order."""
    codes: Dict[str, None] = {}
    for offer in offers:
        for itinerary in _items(dig(offer, "itineraries")):
            for segment in _items(dig(itinerary, "segments")):
                code = _text(dig(segment, "carrierCode"))
                if code:
                    codes.setdefault(code, None)
    return list(codes)


def map_flight_offer(
    raw: Any,
    airline_names: Optional[Dict[str, str]] = None,
    raw_offer: Any = None,
) -> FlightOffer:
    """
    Amadeus flight-offer -> FlightOffer.

    Summary fields are projections of the first itinerary, its first and
    last segment, and the first travelerPricing entry.
    """
    airline_names = airline_names or {}

    validating = dig(raw, "validatingAirlineCodes")
    itineraries = dig(raw, "itineraries")

    segments = dig(raw, "itineraries", 0, "segments")
    segments = segments if isinstance(segments, list) and segments else None

    carrier_code = _text(dig(segments, 0, "carrierCode"))

    return FlightOffer(
        id=_text(dig(raw, "id")),
        price=map_price(dig(raw, "price")),
        validating_airlines=(
            [code for code in (_text(v) for v in validating) if code]
            if isinstance(validating, list) else None
        ),
        itineraries=(
            [map_itinerary(it) for it in itineraries]
            if isinstance(itineraries, list) else None
        ),
        raw_offer=raw_offer,
        airline_name=airline_names.get(carrier_code, carrier_code) if carrier_code else None,
        carrier_code=carrier_code,
        flight_number=_text(dig(segments, 0, "number")),
        cabin=_text(dig(raw, "travelerPricings", 0, "fareDetailsBySegment", 0, "cabin")),
        number_of_stops=max(0, len(segments) - 1) if segments else None,
        duration=_text(dig(raw, "itineraries", 0, "duration")),
        origin_code=_text(dig(segments, 0, "departure", "iataCode")),
        destination_code=_text(dig(segments, -1, "arrival", "iataCode")),
        departure_time=_text(dig(segments, 0, "departure", "at")),
        arrival_time=_text(dig(segments, -1, "arrival", "at")),
    )


def map_flight_offers(
    offers: Sequence[Any],
    airline_names: Optional[Dict[str, str]] = None,
    raw_offers: Optional[Sequence[Any]] = None,
) -> List[FlightOffer]:
    """
    Maps every offer and attaches raw_offers[i] to offer i.

    Correlation is by position only; offer ids are not trusted to be unique.
    """
    raw_offers = raw_offers if raw_offers is not None else offers
    return [
        map_flight_offer(
            offer,
            airline_names,
            raw_offers[i] if i < len(raw_offers) else None,
        )
        for i, offer in enumerate(offers)
    ]
