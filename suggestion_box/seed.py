"""샘플 제안 시드 스크립트 — 비어 있는 저장소에 예시 제안 3건 추가.

Seed script — Adds three sample suggestions to the configured backend
when it holds no suggestions yet, so the student site and dashboard have
something to show on a fresh install.

Usage:
    python -m suggestion_box.seed

Creates:
    - Library / Academic (In Review, 2일 전)
    - ICT / Technology (Pending, 1일 전)
    - Administration / Infrastructure (Implemented, 5일 전)
"""

import asyncio
from datetime import datetime, timedelta, timezone

from suggestion_box.config import settings
from suggestion_box.database import Base, async_session, engine
from suggestion_box.models import Suggestion  # noqa: F401  테이블 메타데이터 등록 (registers the table)
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.repositories.local_store import LocalKeyValueStore
from suggestion_box.repositories.local_suggestion_repository import LocalSuggestionRepository
from suggestion_box.repositories.suggestion_repository import SuggestionRepository
from suggestion_box.schemas.suggestion import SuggestionRecord
from suggestion_box.utils.ids import generate_suggestion_id


def sample_suggestions(now: datetime | None = None) -> list[SuggestionRecord]:
    """예시 제안 — 구버전 상태값으로 작성, 검증 시 정식 상태로 변환.

    Sample records written in the legacy vocabulary; validation maps
    "In Progress" / "New" / "Resolved" onto the canonical statuses.
    """
    now = now or datetime.now(timezone.utc)
    raw: list[dict] = [
        {
            "department": "Library",
            "suggestion_text": "Extend library opening hours during exam periods to accommodate students "
                               "who prefer studying late at night. Many students would benefit from having "
                               "access to library resources until midnight.",
            "tag": "Academic",
            "status": "In Progress",
            "timestamp": now - timedelta(days=2),
        },
        {
            "department": "ICT",
            "suggestion_text": "Improve WiFi connectivity in student hostels and common areas. The current "
                               "network is often slow and unreliable, affecting online learning and research "
                               "activities.",
            "tag": "Technology",
            "status": "New",
            "timestamp": now - timedelta(days=1),
        },
        {
            "department": "Administration",
            "suggestion_text": "Install more water dispensers around campus, especially near lecture halls "
                               "and the library. Students often struggle to find drinking water during busy days.",
            "tag": "Infrastructure",
            "status": "Resolved",
            "timestamp": now - timedelta(days=5),
        },
    ]
    records = [SuggestionRecord.model_validate({"id": generate_suggestion_id(), **item}) for item in raw]
    return sorted(records, key=lambda r: r.created, reverse=True)


async def seed_backend(backend: SuggestionBackend) -> int:
    """저장소가 비어 있을 때만 시드 (Idempotent: skips a non-empty backend).

    Returns:
        int: 추가된 제안 수 (Number of suggestions inserted, 0 when skipped)
    """
    if await backend.list_all():
        return 0
    return await backend.replace_all(sample_suggestions())


async def seed() -> None:
    if settings.STORAGE_BACKEND == "local":
        inserted = await seed_backend(LocalSuggestionRepository(LocalKeyValueStore(settings.LOCAL_STORE_PATH)))
    else:
        # 테이블 생성: DDL 실행 (Create tables from ORM metadata)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with async_session() as db:
            inserted = await seed_backend(SuggestionRepository(db))

    if inserted:
        print(f"Seeded {inserted} sample suggestions into the {settings.STORAGE_BACKEND} backend.")
    else:
        print("Already seeded. Skipping.")


if __name__ == "__main__":
    asyncio.run(seed())
