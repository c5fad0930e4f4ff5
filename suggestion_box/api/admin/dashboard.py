"""관리자 대시보드 라우터 — 제안 집계 API.

Admin Dashboard Router — Suggestion counters by status and the most
recent submissions for the dashboard landing page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from suggestion_box.api.deps import get_current_admin, get_suggestion_backend
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.auth import AdminSession
from suggestion_box.schemas.suggestion import DashboardResponse
from suggestion_box.services.suggestion_service import suggestion_service

router: APIRouter = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> DashboardResponse:
    """대시보드 조회 — 상태별 건수와 최근 활동."""
    return await suggestion_service.dashboard(backend)
