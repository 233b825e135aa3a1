"""
Offer document parsing for the confirm/price step.

The UI may post the offer it got from search in three shapes:

    {...offer...}                 bare offer
    {"data": [{...offer...}]}     list wrapper (first element wins)
    {"data": {...offer...}}       object wrapper

parse_offer_document picks one, in that priority order (list wrapper,
object wrapper, bare), before anything is sent to the provider.
"""
from dataclasses import dataclass
from typing import Any, Dict

from flightdesk.services.integration.common.errors import UnexpectedPayloadError

BARE = "bare"
DATA_LIST = "data_list"
DATA_OBJECT = "data_object"


@dataclass(frozen=True)
class OfferDocument:
    shape: str
    offer: Dict[str, Any]


def parse_offer_document(payload: Any) -> OfferDocument:
    if not isinstance(payload, dict):
        raise UnexpectedPayloadError(
            f"Offer payload must be a JSON object, got {type(payload).__name__}"
        )

    data = payload.get("data")

    if isinstance(data, list) and data:
        offer = data[0]
        if not isinstance(offer, dict):
            raise UnexpectedPayloadError("First element of 'data' is not an offer object")
        return OfferDocument(DATA_LIST, offer)

    if isinstance(data, dict):
        return OfferDocument(DATA_OBJECT, data)

    return OfferDocument(BARE, payload)
