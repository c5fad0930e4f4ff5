"""제안 화면 필터 및 화면 상태.

Pure view helpers over an in-memory suggestion collection, plus BoardState,
the explicit state object held by one admin view (current collection and
active filter). Nothing here touches a backend except BoardState.reload.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.suggestion import (
    PublicStats,
    SuggestionRecord,
    SuggestionStats,
    SuggestionStatus,
    SuggestionView,
)
from suggestion_box.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


def filter_suggestions(
    records: Iterable[SuggestionRecord],
    view: SuggestionView,
) -> list[SuggestionRecord]:
    """화면 필터 적용 — 입력 순서 유지.

    Apply a view filter, preserving input order.

    - all: 전체 (identity)
    - pending: status == Pending
    - responded: 공백이 아닌 관리자 답변이 있는 제안 (non-blank admin_response)
    """
    if view == SuggestionView.PENDING:
        return [r for r in records if r.status == SuggestionStatus.PENDING]
    if view == SuggestionView.RESPONDED:
        return [r for r in records if r.is_responded]
    return list(records)


def calculate_stats(records: Sequence[SuggestionRecord]) -> SuggestionStats:
    by_status = Counter(r.status for r in records)
    return SuggestionStats(
        total=len(records),
        pending=by_status[SuggestionStatus.PENDING],
        in_review=by_status[SuggestionStatus.IN_REVIEW],
        implemented=by_status[SuggestionStatus.IMPLEMENTED],
        rejected=by_status[SuggestionStatus.REJECTED],
        responded=sum(1 for r in records if r.is_responded),
    )


def calculate_public_stats(records: Sequence[SuggestionRecord]) -> PublicStats:
    return PublicStats(
        total=len(records),
        implemented=sum(1 for r in records if r.status == SuggestionStatus.IMPLEMENTED),
    )


def recent_activity(records: Iterable[SuggestionRecord], limit: int) -> list[SuggestionRecord]:
    """최근 제출 순 상위 N건 (Newest ``limit`` records by created)."""
    return sorted(records, key=lambda r: r.created, reverse=True)[:limit]


@dataclass
class BoardState:
    """관리자 화면 하나의 상태 — 현재 목록과 활성 필터.

    State owned by one admin view. Handlers replace the collection and read
    the filtered projection; a failed reload keeps the last good collection
    and records a notice for the user instead.

    Attributes:
        view: 활성 필터 (Active view filter)
        records: 마지막으로 성공적으로 불러온 목록 (Last successfully loaded collection)
        notice: 사용자에게 보여줄 오류 안내 (User-visible error notice, if any)
    """

    view: SuggestionView = SuggestionView.ALL
    records: list[SuggestionRecord] = field(default_factory=list)
    notice: str | None = None

    def replace(self, records: Sequence[SuggestionRecord]) -> None:
        self.records = list(records)
        self.notice = None

    def visible(self) -> list[SuggestionRecord]:
        return filter_suggestions(self.records, self.view)

    def switch_view(self, view: SuggestionView) -> None:
        self.view = view

    async def reload(self, backend: SuggestionBackend) -> bool:
        """저장소에서 다시 읽기 — 실패 시 기존 목록 유지.

        Returns:
            bool: 성공 여부 (False when the backend failed; records unchanged)
        """
        try:
            records = await backend.list_all()
        except StorageError as exc:
            logger.warning("Keeping %d cached suggestions after reload failure", len(self.records))
            self.notice = exc.detail
            return False
        self.replace(records)
        return True

    def snapshot(self) -> dict:
        """스트림 전송용 직렬화 (JSON-ready payload for the live stream)."""
        items = self.visible()
        return {
            "view": self.view.value,
            "total": len(items),
            "items": [r.model_dump(mode="json") for r in items],
            "notice": self.notice,
        }
