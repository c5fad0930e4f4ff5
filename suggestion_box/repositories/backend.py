"""제안 저장소 계약 — 두 저장소(DB/로컬)가 구현하는 추상 클래스.

Suggestion backend contract implemented by the database and local backends.
Services and routes only talk to this interface, so the two backends are
interchangeable through configuration.

Contract:
    - list_all(): created 내림차순 전체 목록 (Full collection, newest first)
    - get(id): 단건 조회 (Single record or None)
    - create(record): 저장 후 ID 반환 (Persist and return the id)
    - update(id, fields): 부분 수정, 성공 여부 반환 (Partial update -> found?)
    - delete(id): 삭제, 성공 여부 반환 (Delete -> found?)
    - replace_all(records): 전체 교체, 백업 복원용 (Swap whole collection)
    - subscribe(view_id, listener): 변경 구독 (Change subscription)

Failures surface as StorageError; the caller's view keeps its last good state.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from suggestion_box.schemas.suggestion import SuggestionRecord
from suggestion_box.utils.change_feed import ChangeFeed, ChangeListener, Subscription
from suggestion_box.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class SuggestionBackend(ABC):
    """제안 저장소 추상 클래스.

    Attributes:
        feed: 쓰기 성공 시 갱신 목록을 발행할 피드 (Feed receiving refreshed lists)
    """

    def __init__(self, feed: ChangeFeed) -> None:
        self.feed: ChangeFeed = feed

    @abstractmethod
    async def list_all(self) -> list[SuggestionRecord]:
        ...

    @abstractmethod
    async def get(self, suggestion_id: str) -> SuggestionRecord | None:
        ...

    @abstractmethod
    async def create(self, record: SuggestionRecord) -> str:
        ...

    @abstractmethod
    async def update(self, suggestion_id: str, fields: dict[str, Any]) -> bool:
        ...

    @abstractmethod
    async def delete(self, suggestion_id: str) -> bool:
        ...

    @abstractmethod
    async def replace_all(self, records: Sequence[SuggestionRecord]) -> int:
        ...

    def subscribe(
        self,
        view_id: str,
        listener: ChangeListener,
        on_cancel: Callable[[], None] | None = None,
    ) -> Subscription:
        return self.feed.subscribe(view_id, listener, on_cancel)

    async def publish_changes(self) -> None:
        """쓰기 후 구독자에게 전체 목록 발행 (Push the refreshed list after a write)."""
        if not self.feed.subscriber_count:
            return
        try:
            records = await self.list_all()
        except StorageError:
            # 쓰기는 이미 완료됨: 알림만 건너뜀 (Write already succeeded; skip the push)
            logger.warning("Skipping change notification: could not reload suggestions")
            return
        await self.feed.publish(records)
