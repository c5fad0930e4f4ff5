"""학생 제안 라우터 — 제안 제출, 최근 제안 목록, 공개 카운터.

Student Suggestion Router — Anonymous submission, recent suggestions
feed, and the hero counters shown on the student site.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from suggestion_box.api.deps import get_suggestion_backend
from suggestion_box.config import settings
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.suggestion import PublicStats, SuggestionCreate, SuggestionRecord
from suggestion_box.services.suggestion_service import suggestion_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[SuggestionRecord])
async def list_recent_suggestions(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> list[SuggestionRecord]:
    """최근 제안 목록 — 기본 6건 (Newest suggestions, 6 by default)."""
    return await suggestion_service.list_recent(
        backend, limit or settings.RECENT_SUGGESTIONS_LIMIT
    )


@router.post("", response_model=SuggestionRecord, status_code=status.HTTP_201_CREATED)
async def submit_suggestion(
    data: SuggestionCreate,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
) -> SuggestionRecord:
    """제안 제출 — 항상 Pending 상태로 저장.

    Submit a suggestion. Validation failures return 422 with the
    user-facing message; the stored record starts as Pending.
    """
    return await suggestion_service.submit(backend, data)


@router.get("/stats", response_model=PublicStats)
async def get_public_stats(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
) -> PublicStats:
    """전체 제안 수와 시행된 제안 수."""
    return await suggestion_service.public_stats(backend)
