from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

# Matches the String(255) columns in infrastructure/models.py
NAME_MAX_LENGTH = 255


class CamelModel(BaseModel):
    """JSON keys are camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RowCreate(CamelModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    total_seats: Optional[StrictInt] = None


class SectionCreate(CamelModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    rows: Optional[list[RowCreate]] = None


class EventCreateRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    sections: Optional[list[SectionCreate]] = None


class RowResponse(CamelModel):
    name: str
    total_seats: int
    booked_seats: int


class SectionResponse(CamelModel):
    name: str
    rows: list[RowResponse]


class EventResponse(CamelModel):
    id: UUID
    name: str
    sections: list[SectionResponse]
    created_at: datetime
    updated_at: datetime


class EventCreatedResponse(CamelModel):
    message: str
    event: EventResponse


class EventsListResponse(CamelModel):
    message: str
    event: list[EventResponse]


class RowAvailabilityResponse(CamelModel):
    row: str
    available_seats: int
    total_seats: int
    booked_seats: int


class SectionAvailabilityResponse(CamelModel):
    section: str
    rows: list[RowAvailabilityResponse]


class AvailabilityResponse(CamelModel):
    event_id: UUID
    event_name: str
    availability: list[SectionAvailabilityResponse]


class PurchaseRequest(CamelModel):
    section_name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    row_name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    quantity: Optional[StrictInt] = None
    idempotency_key: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)


class PurchaseResponse(CamelModel):
    message: str
    section: str
    row: str
    purchased_quantity: int
    group_discount: bool
    remaining_seats: int


class ErrorResponse(BaseModel):
    message: str
    detail: Optional[list[dict[str, Any]]] = None
