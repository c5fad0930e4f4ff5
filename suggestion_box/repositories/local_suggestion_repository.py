"""제안 로컬 레포지토리 — 키-값 저장소의 단일 키에 전체 목록 보관.

Local suggestion repository. The whole collection is one JSON array under
LOCAL_STORE_KEY, newest first. Ids are generated client-side
(``SUG_<ms>_<random>``). Stored entries are normalized through
SuggestionRecord on every read, so legacy entries load as canonical records.
"""

import logging
from collections.abc import Sequence
from typing import Any, Callable

from suggestion_box.config import settings
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.repositories.local_store import LocalKeyValueStore
from suggestion_box.schemas.suggestion import SuggestionRecord
from suggestion_box.utils.change_feed import ChangeFeed, suggestion_feed
from suggestion_box.utils.exceptions import StorageError
from suggestion_box.utils.ids import generate_suggestion_id

logger = logging.getLogger(__name__)


def _parse(raw: Any) -> list[SuggestionRecord]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("Stored suggestions must be a JSON array")
    return [SuggestionRecord.model_validate(item) for item in raw]


def _serialize(records: Sequence[SuggestionRecord]) -> list[dict[str, Any]]:
    return [record.model_dump(mode="json") for record in records]


class LocalSuggestionRepository(SuggestionBackend):

    def __init__(
        self,
        store: LocalKeyValueStore,
        feed: ChangeFeed = suggestion_feed,
        key: str | None = None,
    ) -> None:
        super().__init__(feed)
        self.store: LocalKeyValueStore = store
        self.key: str = key or settings.LOCAL_STORE_KEY

    async def _load(self) -> list[SuggestionRecord]:
        try:
            return _parse(await self.store.get_item(self.key))
        except (OSError, ValueError) as exc:
            logger.error("Reading local suggestions from %s failed: %s", self.store.path, exc)
            raise StorageError("Error loading suggestions. Please try again.") from exc

    async def _write(self, updater: Callable[[Any | None], Any], message: str) -> None:
        try:
            await self.store.update_item(self.key, updater)
        except (OSError, ValueError) as exc:
            logger.error("Writing local suggestions to %s failed: %s", self.store.path, exc)
            raise StorageError(message) from exc

    async def list_all(self) -> list[SuggestionRecord]:
        records = await self._load()
        # 안정 정렬: 같은 시각이면 저장 순서 유지 (Stable: ties keep stored order)
        return sorted(records, key=lambda r: r.created, reverse=True)

    async def get(self, suggestion_id: str) -> SuggestionRecord | None:
        for record in await self._load():
            if record.id == suggestion_id:
                return record
        return None

    async def create(self, record: SuggestionRecord) -> str:
        stored = record if record.id else record.model_copy(update={"id": generate_suggestion_id()})

        def _prepend(raw: Any | None) -> list[Any]:
            return _serialize([stored]) + list(raw or [])

        await self._write(_prepend, "Failed to submit suggestion. Please try again.")
        await self.publish_changes()
        return stored.id

    async def update(self, suggestion_id: str, fields: dict[str, Any]) -> bool:
        found = False

        def _apply(raw: Any | None) -> Any:
            nonlocal found
            records = _parse(raw)
            for index, record in enumerate(records):
                if record.id == suggestion_id:
                    records[index] = record.model_copy(update=fields)
                    found = True
                    break
            return _serialize(records) if found else raw

        await self._write(_apply, "Failed to update suggestion. Please try again.")
        if found:
            await self.publish_changes()
        return found

    async def delete(self, suggestion_id: str) -> bool:
        found = False

        def _remove(raw: Any | None) -> Any:
            nonlocal found
            records = _parse(raw)
            for index, record in enumerate(records):
                if record.id == suggestion_id:
                    del records[index]
                    found = True
                    break
            return _serialize(records) if found else raw

        await self._write(_remove, "Failed to delete suggestion. Please try again.")
        if found:
            await self.publish_changes()
        return found

    async def replace_all(self, records: Sequence[SuggestionRecord]) -> int:
        stored = [r if r.id else r.model_copy(update={"id": generate_suggestion_id()}) for r in records]
        await self._write(lambda _raw: _serialize(stored), "Failed to import suggestions. Please try again.")
        await self.publish_changes()
        return len(stored)
