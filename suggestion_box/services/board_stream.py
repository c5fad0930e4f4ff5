"""관리자 화면 실시간 스트림.

Live stream behind one open admin view. Opening it loads the current
collection into a BoardState and subscribes to the change feed under the
view's id; every published change becomes an ``update`` event. When the
subscription is cancelled (a newer stream for the same view, or logout)
the stream emits ``closed`` and ends.

Every update carries the whole view, so a client that falls behind only
needs the newest one: once ``max_pending`` updates are waiting, the backlog
is dropped in favour of the latest snapshot.
"""

import asyncio
import json
from collections.abc import AsyncIterator

from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.suggestion import SuggestionRecord, SuggestionView
from suggestion_box.services.suggestion_views import BoardState
from suggestion_box.utils.change_feed import Subscription


class BoardStream:
    """관리자 화면 하나의 이벤트 스트림.

    Attributes:
        view_id: 구독 키 (Subscription key, ``<username>:<client_id>``)
        state: 화면 상태 (View state kept current by feed callbacks)
        max_pending: 전송 대기 이벤트 상한 (Queued updates kept for a slow client)
    """

    max_pending: int = 16

    def __init__(self, view_id: str, state: BoardState) -> None:
        self.view_id: str = view_id
        self.state: BoardState = state
        self._queue: asyncio.Queue[dict | None] = asyncio.Queue(maxsize=self.max_pending)
        self._subscription: Subscription | None = None

    @classmethod
    async def open(
        cls,
        backend: SuggestionBackend,
        view_id: str,
        view: SuggestionView = SuggestionView.ALL,
    ) -> "BoardStream":
        """초기 목록을 읽고 변경 피드를 구독합니다.

        The initial load uses the request-scoped backend; afterwards the
        stream only depends on feed callbacks.
        """
        stream = cls(view_id, BoardState(view=view))
        await stream.state.reload(backend)
        stream._subscription = backend.subscribe(view_id, stream._on_change, on_cancel=stream._on_cancel)
        return stream

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def _push(self, payload: dict | None) -> None:
        if self._queue.full():
            while not self._queue.empty():
                self._queue.get_nowait()
        self._queue.put_nowait(payload)

    async def _on_change(self, records: list[SuggestionRecord]) -> None:
        self.state.replace(records)
        self._push(self.state.snapshot())

    def _on_cancel(self) -> None:
        self._push(None)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()

    async def events(self) -> AsyncIterator[dict[str, str]]:
        """SSE 이벤트 — snapshot, update..., closed 순서.

        The subscription is released when the consumer stops iterating
        (client disconnect) as well as when it is cancelled elsewhere.
        """
        try:
            yield {"event": "snapshot", "data": json.dumps(self.state.snapshot())}
            while True:
                payload = await self._queue.get()
                if payload is None:
                    break
                yield {"event": "update", "data": json.dumps(payload)}
            yield {"event": "closed", "data": json.dumps({"view_id": self.view_id})}
        finally:
            self.close()
