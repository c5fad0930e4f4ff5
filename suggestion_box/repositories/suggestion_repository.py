"""제안 DB 레포지토리 — 원격 문서 컬렉션 저장소.

Suggestion database repository — the hosted document collection backend.
Every write commits its own transaction so the backend is interchangeable
with the local one; SQLAlchemy failures roll back and raise StorageError.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from suggestion_box.models.suggestion import Suggestion
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.repositories.base import BaseRepository
from suggestion_box.schemas.suggestion import SuggestionRecord
from suggestion_box.utils.change_feed import ChangeFeed, suggestion_feed
from suggestion_box.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


def _column_values(fields: dict[str, Any]) -> dict[str, Any]:
    # Enum 값은 문자열 컬럼에 value로 저장 (Enums are stored by value)
    return {key: value.value if isinstance(value, Enum) else value for key, value in fields.items()}


def _record_columns(record: SuggestionRecord) -> dict[str, Any]:
    exclude = {"id"} if record.id is None else set()
    return _column_values(record.model_dump(exclude=exclude))


class SuggestionRepository(BaseRepository[Suggestion], SuggestionBackend):

    def __init__(self, db: AsyncSession, feed: ChangeFeed = suggestion_feed) -> None:
        BaseRepository.__init__(self, Suggestion, db)
        SuggestionBackend.__init__(self, feed)

    async def _fail(self, message: str, exc: SQLAlchemyError) -> StorageError:
        logger.error("Suggestion database error: %s", exc)
        await self.db.rollback()
        return StorageError(message)

    async def list_all(self) -> list[SuggestionRecord]:
        try:
            rows = await self.get_all(order_by=Suggestion.created.desc())
        except SQLAlchemyError as exc:
            raise await self._fail("Error loading suggestions. Please try again.", exc) from exc
        return [SuggestionRecord.model_validate(row) for row in rows]

    async def get(self, suggestion_id: str) -> SuggestionRecord | None:
        try:
            row = await self.get_by_id(suggestion_id)
        except SQLAlchemyError as exc:
            raise await self._fail("Error loading suggestion. Please try again.", exc) from exc
        return SuggestionRecord.model_validate(row) if row is not None else None

    async def create(self, record: SuggestionRecord) -> str:
        try:
            row = await BaseRepository.create(self, _record_columns(record))
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise await self._fail("Failed to submit suggestion. Please try again.", exc) from exc
        await self.publish_changes()
        return row.id

    async def update(self, suggestion_id: str, fields: dict[str, Any]) -> bool:
        try:
            row = await BaseRepository.update(self, suggestion_id, _column_values(fields))
            if row is None:
                return False
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise await self._fail("Failed to update suggestion. Please try again.", exc) from exc
        await self.publish_changes()
        return True

    async def delete(self, suggestion_id: str) -> bool:
        try:
            deleted = await BaseRepository.delete(self, suggestion_id)
            if not deleted:
                return False
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise await self._fail("Failed to delete suggestion. Please try again.", exc) from exc
        await self.publish_changes()
        return True

    async def replace_all(self, records: Sequence[SuggestionRecord]) -> int:
        try:
            await self.delete_all()
            # 삭제된 행의 identity map 잔여 객체 제거: 같은 ID 재삽입 허용
            # Drop stale identities so imported rows may reuse existing ids
            self.db.expunge_all()
            self.db.add_all([Suggestion(**_record_columns(record)) for record in records])
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise await self._fail("Failed to import suggestions. Please try again.", exc) from exc
        await self.publish_changes()
        return len(records)
