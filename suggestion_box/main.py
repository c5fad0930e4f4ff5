"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures logging, request logging, CORS, health check, and includes
the admin and student routers.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from suggestion_box.config import settings
from suggestion_box.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어: CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어: 학생 사이트/관리자 화면 프론트엔드 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    Reports which suggestion backend is active.
    """
    return {"status": "ok", "storage_backend": settings.STORAGE_BACKEND}


# ---------------------------------------------------------------------------
# 라우터 등록: Router registration
# ---------------------------------------------------------------------------
# admin_router: 인증 + 제안 검토/실시간 스트림/백업 + 대시보드
# student_router: 제안 제출/최근 목록/카운터 + 문의
from suggestion_box.api.admin import admin_router  # noqa: E402
from suggestion_box.api.student import student_router  # noqa: E402

app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(student_router, prefix="/api/v1/student")
