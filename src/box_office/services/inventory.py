"""Event inventory: creating events with their seating layout and reading them back."""

import logging
import uuid
from collections.abc import Mapping
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from box_office.infrastructure.models import Event
from box_office.infrastructure.repositories.event_repository import EventRepository
from box_office.services.exceptions import EventNotFoundError, EventValidationError

logger = logging.getLogger(__name__)

MAX_ROW_SEATS = 100_000


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_layout(name: Any, sections: Any) -> list[dict[str, Any]]:
    """Check an event's name and nested sections/rows before anything is stored.

    Accepts the loosely typed structure a client sends (sequences of mappings
    with ``name``, ``rows`` and ``total_seats`` keys) and returns a normalized
    copy. Raises EventValidationError on the first problem found.
    """
    if _is_blank(name) or not sections:
        raise EventValidationError("Name and sections are required")
    if not isinstance(sections, (list, tuple)):
        raise EventValidationError("Sections must be a list")

    normalized: list[dict[str, Any]] = []
    seen_sections: set[str] = set()
    for section in sections:
        if not isinstance(section, Mapping) or _is_blank(section.get("name")):
            raise EventValidationError("Every section needs a name")
        section_name = section["name"]
        if section_name in seen_sections:
            raise EventValidationError(f"Duplicate section name: {section_name}")
        seen_sections.add(section_name)

        rows = section.get("rows") or []
        if not isinstance(rows, (list, tuple)):
            raise EventValidationError(f"Rows of section {section_name} must be a list")

        normalized_rows: list[dict[str, Any]] = []
        seen_rows: set[str] = set()
        for row in rows:
            if not isinstance(row, Mapping) or _is_blank(row.get("name")):
                raise EventValidationError(f"Every row in section {section_name} needs a name")
            row_name = row["name"]
            if row_name in seen_rows:
                raise EventValidationError(
                    f"Duplicate row name {row_name} in section {section_name}"
                )
            seen_rows.add(row_name)
            if not _is_positive_int(row.get("total_seats")):
                raise EventValidationError(
                    f"Row {row_name} in section {section_name} needs a positive totalSeats"
                )
            if row["total_seats"] > MAX_ROW_SEATS:
                raise EventValidationError(
                    f"Row {row_name} in section {section_name} cannot exceed {MAX_ROW_SEATS} seats"
                )
            normalized_rows.append({"name": row_name, "total_seats": row["total_seats"]})

        normalized.append({"name": section_name, "rows": normalized_rows})
    return normalized


def parse_event_id(event_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(event_id))
    except ValueError:
        return None


async def create_event(session: AsyncSession, name: Any, sections: Any) -> Event:
    """Persist a new event; every row starts with zero booked seats."""
    layout = validate_layout(name, sections)
    event = await EventRepository(session).create(name.strip(), layout)
    logger.info(
        "Event %s created: %s (%d sections)", event.id, event.name, len(event.sections)
    )
    return event


async def get_all_events(session: AsyncSession) -> list[Event]:
    return await EventRepository(session).list_events()


async def get_event_by_id(session: AsyncSession, event_id: str) -> Event:
    """Return the event or raise EventNotFoundError (malformed ids included)."""
    parsed = parse_event_id(event_id)
    event = await EventRepository(session).get_by_id(parsed) if parsed else None
    if event is None:
        raise EventNotFoundError(event_id)
    return event
