from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from box_office.infrastructure.models import Event
from box_office.services.inventory import get_event_by_id


@dataclass(frozen=True)
class RowAvailability:
    row: str
    available_seats: int
    total_seats: int
    booked_seats: int


@dataclass(frozen=True)
class SectionAvailability:
    section: str
    rows: tuple[RowAvailability, ...]


@dataclass(frozen=True)
class EventAvailability:
    event_id: uuid.UUID
    event_name: str
    sections: tuple[SectionAvailability, ...]


def project_availability(event: Event) -> EventAvailability:
    """Remaining seats per row, sections and rows in declaration order."""
    return EventAvailability(
        event_id=event.id,
        event_name=event.name,
        sections=tuple(
            SectionAvailability(
                section=section.name,
                rows=tuple(
                    RowAvailability(
                        row=row.name,
                        available_seats=row.total_seats - row.booked_seats,
                        total_seats=row.total_seats,
                        booked_seats=row.booked_seats,
                    )
                    for row in section.rows
                ),
            )
            for section in event.sections
        ),
    )


async def get_availability(session: AsyncSession, event_id: str) -> EventAvailability:
    """Read-only availability report; raises EventNotFoundError."""
    event = await get_event_by_id(session, event_id)
    return project_availability(event)
