import hashlib
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from box_office.infrastructure.repositories.event_repository import EventRepository
from box_office.infrastructure.repositories.idempotency_repository import IdempotencyRepository
from box_office.services.exceptions import (
    CapacityExceededError,
    IdempotencyConflictError,
    InvalidPurchaseRequestError,
    RowNotFoundError,
    SectionNotFoundError,
)
from box_office.services.inventory import get_event_by_id

logger = logging.getLogger(__name__)

GROUP_DISCOUNT_THRESHOLD = 4


@dataclass(frozen=True)
class PurchaseResult:
    section: str
    row: str
    purchased_quantity: int
    group_discount: bool
    remaining_seats: int


def _compute_request_hash(event_id: str, section_name: str, row_name: str, quantity: int) -> str:
    """Compute a deterministic hash of the purchase request (excluding idempotency key)."""
    data = {
        "event_id": str(event_id),
        "section_name": section_name,
        "row_name": row_name,
        "quantity": quantity,
    }
    raw = json.dumps(data, sort_keys=True)
    return hashlib.sha256(raw.encode()).hexdigest()


def _validate_request(section_name: Any, row_name: Any, quantity: Any) -> None:
    if not isinstance(section_name, str) or not section_name:
        raise InvalidPurchaseRequestError()
    if not isinstance(row_name, str) or not row_name:
        raise InvalidPurchaseRequestError()
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise InvalidPurchaseRequestError()


async def purchase_tickets(
    session: AsyncSession,
    event_id: str,
    section_name: Any,
    row_name: Any,
    quantity: Any,
    idempotency_key: Optional[str] = None,
) -> PurchaseResult:
    """Book ``quantity`` seats in one row of an event.

    Checks run in a fixed order and the first failure wins: request shape,
    idempotency replay, event, section, row, then capacity. The seat count is
    changed by a single conditional update, so the booked count of a row can
    never pass its total. Replaying a request with the same idempotency key
    returns the first result without booking again.
    """
    _validate_request(section_name, row_name, quantity)

    request_hash = None
    if idempotency_key:
        request_hash = _compute_request_hash(event_id, section_name, row_name, quantity)
        existing = await IdempotencyRepository(session).get_by_key(idempotency_key)
        if existing is not None:
            if existing.request_hash != request_hash:
                logger.warning("Idempotency key %s reused with different data", idempotency_key)
                raise IdempotencyConflictError()
            logger.info("Replaying purchase for idempotency key %s", idempotency_key)
            return PurchaseResult(**existing.response)

    event = await get_event_by_id(session, event_id)

    section = next((s for s in event.sections if s.name == section_name), None)
    if section is None:
        raise SectionNotFoundError(section_name)

    row = next((r for r in section.rows if r.name == row_name), None)
    if row is None:
        raise RowNotFoundError(row_name)

    event_repo = EventRepository(session)
    # A quantity above the row size can never fit and may not fit the column type either
    if quantity > row.total_seats or not await event_repo.reserve_seats(row, quantity):
        available = await event_repo.get_available_seats(row)
        logger.warning(
            "Rejected purchase of %d seats in %s/%s for event %s: %d available",
            quantity,
            section_name,
            row_name,
            event.id,
            available,
        )
        raise CapacityExceededError(available)
    await event_repo.touch(event)

    result = PurchaseResult(
        section=section_name,
        row=row_name,
        purchased_quantity=quantity,
        group_discount=quantity >= GROUP_DISCOUNT_THRESHOLD,
        remaining_seats=row.total_seats - row.booked_seats,
    )

    if idempotency_key:
        await IdempotencyRepository(session).create(
            idempotency_key=idempotency_key,
            request_hash=request_hash,
            event_id=event.id,
            response=asdict(result),
        )

    logger.info(
        "Purchased %d seats in %s/%s for event %s, %d remaining",
        quantity,
        section_name,
        row_name,
        event.id,
        result.remaining_seats,
    )
    return result
