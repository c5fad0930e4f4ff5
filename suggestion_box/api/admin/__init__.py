"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - auth: 관리자 로그인/세션/로그아웃 (Admin login, session, logout)
    - suggestions: 제안 검토/답변/실시간 스트림/백업 (Review, respond, stream, backup)
    - dashboard: 상태별 집계 및 최근 활동 (Counters and recent activity)
"""

from fastapi import APIRouter

from suggestion_box.api.admin.auth import router as auth_router
from suggestion_box.api.admin.suggestions import router as suggestions_router
from suggestion_box.api.admin.dashboard import router as dashboard_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(auth_router, prefix="/auth", tags=["Admin Auth"])
# 제안: /suggestions 하위 (Suggestion review, live stream, backup)
admin_router.include_router(suggestions_router, prefix="/suggestions", tags=["Admin Suggestions"])
# 대시보드: /dashboard (Dashboard aggregation)
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
