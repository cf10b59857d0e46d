from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from box_office.api.schemas import (
    AvailabilityResponse,
    ErrorResponse,
    EventCreatedResponse,
    EventCreateRequest,
    EventResponse,
    EventsListResponse,
    PurchaseRequest,
    PurchaseResponse,
    SectionAvailabilityResponse,
)
from box_office.infrastructure.database import get_db
from box_office.services import inventory
from box_office.services.availability import EventAvailability, get_availability
from box_office.services.purchase import purchase_tickets

router = APIRouter(tags=["events"])

_errors = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _availability_to_response(report: EventAvailability) -> AvailabilityResponse:
    return AvailabilityResponse(
        event_id=report.event_id,
        event_name=report.event_name,
        availability=[
            SectionAvailabilityResponse.model_validate(section) for section in report.sections
        ],
    )


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/events",
    response_model=EventCreatedResponse,
    status_code=201,
    responses={400: _errors[400], 500: _errors[500]},
)
async def create_event(
    body: EventCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> EventCreatedResponse:
    sections = (
        [section.model_dump() for section in body.sections]
        if body.sections is not None
        else None
    )
    event = await inventory.create_event(session, body.name, sections)
    return EventCreatedResponse(
        message="Event created successfully",
        event=EventResponse.model_validate(event),
    )


@router.get("/events", response_model=EventsListResponse, responses={500: _errors[500]})
async def list_events(session: AsyncSession = Depends(get_db)) -> EventsListResponse:
    events = await inventory.get_all_events(session)
    return EventsListResponse(
        message="Events retrieved successfully",
        event=[EventResponse.model_validate(event) for event in events],
    )


@router.get(
    "/events/{event_id}/availability",
    response_model=AvailabilityResponse,
    responses={404: _errors[404], 500: _errors[500]},
)
async def event_availability(
    event_id: str,
    session: AsyncSession = Depends(get_db),
) -> AvailabilityResponse:
    report = await get_availability(session, event_id)
    return _availability_to_response(report)


@router.post(
    "/events/{event_id}/purchase",
    response_model=PurchaseResponse,
    responses={**_errors, 409: {"model": ErrorResponse}},
)
async def purchase(
    event_id: str,
    body: PurchaseRequest,
    session: AsyncSession = Depends(get_db),
) -> PurchaseResponse:
    result = await purchase_tickets(
        session,
        event_id,
        section_name=body.section_name,
        row_name=body.row_name,
        quantity=body.quantity,
        idempotency_key=body.idempotency_key,
    )
    return PurchaseResponse(
        message="Tickets purchased successfully",
        section=result.section,
        row=result.row,
        purchased_quantity=result.purchased_quantity,
        group_discount=result.group_discount,
        remaining_seats=result.remaining_seats,
    )
