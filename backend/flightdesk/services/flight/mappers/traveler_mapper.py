"""
Builds provider-shaped travelers from what the user typed in.
"""
from typing import List, Optional

from flightdesk.models.flight_models import (
    Contact,
    Document,
    Phone,
    Traveler,
    TravelerName,
    TravelerRequest,
)


def _filled(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def build_traveler(request: TravelerRequest, traveler_id: Optional[str] = "1") -> Traveler:
    """
    Phone contact is added only when a phone number is given, the travel
    document only when a document number is given.
    """
    contact = None
    if _filled(request.phone_number):
        contact = Contact(phones=[
            Phone(
                country_calling_code=request.phone_country_code if _filled(request.phone_country_code) else "1",
                number=request.phone_number,
                device_type=request.device_type if _filled(request.device_type) else "MOBILE",
            )
        ])

    documents = None
    if _filled(request.document_number):
        documents = [
            Document(
                document_type=request.document_type if _filled(request.document_type) else "PASSPORT",
                number=request.document_number,
                expiry_date=request.passport_expiry_date if _filled(request.passport_expiry_date) else None,
                nationality=request.nationality if _filled(request.nationality) else None,
                issuance_country=request.issuance_country if _filled(request.issuance_country) else None,
                holder=True,
            )
        ]

    return Traveler(
        id=traveler_id if _filled(traveler_id) else "1",
        date_of_birth=request.date_of_birth,
        name=TravelerName(first_name=request.first_name, last_name=request.last_name),
        contact=contact,
        documents=documents,
    )


def build_travelers(requests: Optional[List[TravelerRequest]]) -> List[Traveler]:
    """Travelers for one order, ids "1", "2", ..."""
    return [build_traveler(r, str(i)) for i, r in enumerate(requests or [], start=1)]
