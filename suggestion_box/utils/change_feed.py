"""제안 변경 알림 피드 — 프로세스 내 pub/sub.

In-process change feed for the suggestion collection.
Backends publish the full refreshed list after every successful write; each
open admin view holds at most one Subscription, keyed by its view id.
Subscribing again under the same view id cancels the previous handle.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from suggestion_box.schemas.suggestion import SuggestionRecord

logger = logging.getLogger(__name__)

# 변경 리스너: 갱신된 전체 목록을 받음 (Receives the full refreshed list)
ChangeListener = Callable[[list[SuggestionRecord]], Awaitable[None]]


class Subscription:
    """변경 구독 핸들 (Typed unsubscribe handle).

    Attributes:
        view_id: 구독한 화면 식별자 (Identifier of the subscribing view)
    """

    def __init__(
        self,
        feed: "ChangeFeed",
        view_id: str,
        listener: ChangeListener,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._feed = feed
        self.view_id: str = view_id
        self.listener: ChangeListener = listener
        self._on_cancel = on_cancel
        self._active: bool = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """구독 해제 — 여러 번 호출해도 안전 (Idempotent)."""
        if not self._active:
            return
        self._active = False
        self._feed._discard(self)
        if self._on_cancel is not None:
            self._on_cancel()


class ChangeFeed:
    """화면별 단일 구독을 보장하는 변경 피드.

    Change feed enforcing a single active subscription per view id.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, Subscription] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def is_subscribed(self, view_id: str) -> bool:
        return view_id in self._subscriptions

    def subscribe(
        self,
        view_id: str,
        listener: ChangeListener,
        on_cancel: Callable[[], None] | None = None,
    ) -> Subscription:
        """리스너를 등록하고 같은 화면의 이전 구독은 해제합니다.

        Register a listener for a view. Any previous subscription under the
        same view id is cancelled first.

        Args:
            view_id: 화면 식별자 (View identifier)
            listener: 갱신 목록을 받을 비동기 콜백 (Async callback for refreshed lists)
            on_cancel: 구독 해제 시 호출 (Called once when the subscription ends)

        Returns:
            Subscription: 구독 해제 핸들 (Unsubscribe handle)
        """
        previous = self._subscriptions.get(view_id)
        if previous is not None:
            previous.cancel()
        subscription = Subscription(self, view_id, listener, on_cancel)
        self._subscriptions[view_id] = subscription
        return subscription

    def cancel_matching(self, prefix: str) -> int:
        """접두사가 일치하는 모든 구독 해제 — 로그아웃 시 사용.

        Cancel every subscription whose view id starts with ``prefix``.
        Used when an admin logs out and all of their views are torn down.
        """
        matching = [s for key, s in self._subscriptions.items() if key.startswith(prefix)]
        for subscription in matching:
            subscription.cancel()
        return len(matching)

    def clear(self) -> None:
        for subscription in list(self._subscriptions.values()):
            subscription.cancel()

    async def publish(self, records: Sequence[SuggestionRecord]) -> None:
        """모든 구독자에게 갱신 목록 전달.

        Deliver the refreshed collection to every active subscriber. Each
        listener receives its own list; a failing listener is logged and
        does not affect the others.
        """
        for subscription in list(self._subscriptions.values()):
            if not subscription.active:
                continue
            try:
                await subscription.listener(list(records))
            except Exception:
                logger.exception("Change listener for view %s failed", subscription.view_id)

    def _discard(self, subscription: Subscription) -> None:
        if self._subscriptions.get(subscription.view_id) is subscription:
            del self._subscriptions[subscription.view_id]


# 전역 변경 피드: 두 저장소가 공유 (Process-wide feed shared by both backends)
suggestion_feed: ChangeFeed = ChangeFeed()
