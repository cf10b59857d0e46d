from __future__ import annotations

import uuid
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from box_office.infrastructure.models import IdempotencyRecord


class IdempotencyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_key(self, idempotency_key: str) -> Optional[IdempotencyRecord]:
        """Find existing record by idempotency key."""
        stmt = select(IdempotencyRecord).where(
            IdempotencyRecord.idempotency_key == idempotency_key
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self,
        idempotency_key: str,
        request_hash: str,
        event_id: uuid.UUID,
        response: dict[str, Any],
    ) -> IdempotencyRecord:
        """Save a successful purchase result keyed by idempotency key."""
        record = IdempotencyRecord(
            idempotency_key=idempotency_key,
            request_hash=request_hash,
            event_id=event_id,
            response=response,
        )
        self._session.add(record)
        await self._session.flush()
        return record
