from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value

from box_office.infrastructure.models import Event, SeatRow, Section


class EventRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _with_layout():
        return selectinload(Event.sections).selectinload(Section.rows)

    async def create(self, name: str, sections: list[dict[str, Any]]) -> Event:
        """Insert an event with its sections and rows, all rows unbooked."""
        event = Event(
            name=name,
            sections=[
                Section(
                    name=section_data["name"],
                    position=section_idx,
                    rows=[
                        SeatRow(
                            name=row_data["name"],
                            position=row_idx,
                            total_seats=row_data["total_seats"],
                            booked_seats=0,
                        )
                        for row_idx, row_data in enumerate(section_data["rows"])
                    ],
                )
                for section_idx, section_data in enumerate(sections)
            ],
        )
        self._session.add(event)
        await self._session.flush()
        return event

    async def list_events(self) -> list[Event]:
        """All events with their layout, oldest first."""
        stmt = select(Event).options(self._with_layout()).order_by(Event.created_at, Event.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, event_id: uuid.UUID) -> Optional[Event]:
        """Get event by ID with sections and rows loaded."""
        stmt = select(Event).options(self._with_layout()).where(Event.id == event_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def reserve_seats(self, row: SeatRow, quantity: int) -> bool:
        """Book ``quantity`` seats in one conditional UPDATE.

        The capacity check runs inside the statement, so concurrent purchases
        on the same row cannot both pass it against a stale count. Returns
        False when the row does not have enough seats left.
        """
        stmt = (
            update(SeatRow)
            .where(
                SeatRow.id == row.id,
                SeatRow.booked_seats + quantity <= SeatRow.total_seats,
            )
            .values(booked_seats=SeatRow.booked_seats + quantity)
            .returning(SeatRow.booked_seats, SeatRow.total_seats)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        updated = result.one_or_none()
        if updated is None:
            return False
        set_committed_value(row, "booked_seats", updated.booked_seats)
        set_committed_value(row, "total_seats", updated.total_seats)
        return True

    async def get_available_seats(self, row: SeatRow) -> int:
        """Re-read the committed seat count of a row."""
        stmt = select(SeatRow.total_seats - SeatRow.booked_seats).where(SeatRow.id == row.id)
        result = await self._session.execute(stmt)
        available = result.scalar_one()
        return available

    async def touch(self, event: Event) -> None:
        """Move the event's updated_at after one of its rows changed."""
        now = datetime.now(timezone.utc)
        stmt = (
            update(Event)
            .where(Event.id == event.id)
            .values(updated_at=now)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
        set_committed_value(event, "updated_at", now)
