# backend/flightdesk/models/flight_models.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialized with camelCase keys, the shape the booking UI reads."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    iata_code: Optional[str] = None      # "IAH"
    name: Optional[str] = None           # "GEORGE BUSH INTERCONTINENTAL"
    city: Optional[str] = None           # "HOUSTON"
    country_code: Optional[str] = None   # "US"
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Airport(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    code: Optional[str] = None
    city_name: Optional[str] = None
    airport_name: Optional[str] = None
    country_code: Optional[str] = None
    time_zone_offset: Optional[str] = None  # "-05:00"


class Price(CamelModel):
    currency: Optional[str] = None
    total: Optional[str] = None  # kept as string, no float rounding


class Segment(CamelModel):
    carrier_code: Optional[str] = None
    flight_number: Optional[str] = None
    departure_iata: Optional[str] = None
    departure_at: Optional[str] = None
    arrival_iata: Optional[str] = None
    arrival_at: Optional[str] = None
    duration: Optional[str] = None        # "PT3H25M"
    number_of_stops: Optional[int] = None


class Itinerary(CamelModel):
    duration: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)


class FlightOffer(CamelModel):
    """
    One flight offer for the UI.

    Carries the detailed structure (price, itineraries) plus flat summary
    fields for list rendering. raw_offer is the untouched provider JSON for
    this offer; the client sends it back for pricing and booking.
    """
    id: Optional[str] = None
    price: Optional[Price] = None
    validating_airlines: Optional[List[str]] = None
    itineraries: Optional[List[Itinerary]] = None
    raw_offer: Optional[Any] = None

    # Summary fields
    airline_name: Optional[str] = None
    carrier_code: Optional[str] = None
    flight_number: Optional[str] = None
    cabin: Optional[str] = None
    number_of_stops: Optional[int] = None
    duration: Optional[str] = None
    origin_code: Optional[str] = None
    destination_code: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None


# --------------------------------------------------
# TRAVELER
# --------------------------------------------------

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
COUNTRY_PATTERN = r"^[A-Z]{2}$"


class TravelerRequest(CamelModel):
    """Traveler info as typed in by the user."""

    first_name: str = Field(pattern=r"^\s*\S")          # "Jane"
    last_name: str = Field(pattern=r"^\s*\S")           # "Doe"
    date_of_birth: str = Field(pattern=DATE_PATTERN)  # "1990-01-15"

    phone_country_code: Optional[str] = Field(default=None, pattern=r"^\d{1,3}$")
    phone_number: Optional[str] = Field(default=None, pattern=r"^\d{7,20}$")
    device_type: Optional[str] = None                # "MOBILE" if missing

    document_type: Optional[str] = None              # "PASSPORT" if missing
    document_number: Optional[str] = None
    passport_expiry_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    nationality: Optional[str] = Field(default=None, pattern=COUNTRY_PATTERN)
    issuance_country: Optional[str] = Field(default=None, pattern=COUNTRY_PATTERN)


class TravelerName(CamelModel):
    first_name: str
    last_name: str


class Phone(CamelModel):
    device_type: str = "MOBILE"
    country_calling_code: str
    number: str


class Contact(CamelModel):
    phones: List[Phone]


class Document(CamelModel):
    document_type: str = "PASSPORT"
    number: str
    expiry_date: Optional[str] = None
    nationality: Optional[str] = None
    issuance_country: Optional[str] = None
    holder: bool = True


class Traveler(CamelModel):
    """Traveler in the shape the provider's flight-orders API expects."""
    id: str = "1"
    date_of_birth: str
    name: TravelerName
    contact: Optional[Contact] = None
    documents: Optional[List[Document]] = None
