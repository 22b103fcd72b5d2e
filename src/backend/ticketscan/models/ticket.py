"""
Pydantic models for movie tickets.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

# Output order of the ten ticket fields
TICKET_FIELDS = (
    'movie_title',
    'theater_name',
    'theater_chain',
    'show_date',
    'show_time',
    'price',
    'seat_number',
    'movie_rating',
    'theater_room',
    'ticket_number',
)


class TicketRecord(BaseModel):
    """Extracted ticket. None means the field could not be determined."""
    movie_title: Optional[str] = None
    theater_name: Optional[str] = None
    theater_chain: Optional[str] = None
    show_date: Optional[str] = None  # MM/DD/YY
    show_time: Optional[str] = None  # "7:30 PM" or "19:30"
    price: Optional[str] = None  # "12.50"
    seat_number: Optional[str] = None
    movie_rating: Optional[str] = None  # G, PG, PG-13, R, NC-17
    theater_room: Optional[str] = None
    ticket_number: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator('*', mode='before')
    @classmethod
    def numbers_as_text(cls, value):
        # Providers sometimes send price or seat as a number
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value

    def presence(self) -> Dict[str, bool]:
        """Per-field "was this determined" flags."""
        return {name: getattr(self, name) is not None for name in TICKET_FIELDS}

    def populated_fields(self) -> List[str]:
        return [name for name in TICKET_FIELDS if getattr(self, name) is not None]


class VisionChannelResult(TicketRecord):
    """Structured result from the vision provider; any field may be missing."""
    ticket_type: Optional[str] = None  # accepted, not merged


class ExtractionReport(BaseModel):
    """Merged record plus where each field came from."""
    record: TicketRecord
    sources: Dict[str, Optional[str]]  # field -> "vision" | "fallback" | None
    failed_fields: List[str] = []
    presence: Dict[str, bool]
