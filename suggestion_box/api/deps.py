"""FastAPI 의존성 주입 모듈 — 관리자 인증 및 저장소 선택.

FastAPI dependency injection module — Admin authentication and backend selection.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. auth_service가 서명/만료(로그인 후 24시간)를 검증
       (auth_service verifies signature and the 24-hour session expiry)
    4. 만료 시 401 "Session expired" — 클라이언트는 로그인 화면으로 이동
       (Expired sessions get 401; clients redirect to the login page)

Backend Selection:
    STORAGE_BACKEND=database → SuggestionRepository (요청 범위 세션)
    STORAGE_BACKEND=local    → LocalSuggestionRepository (JSON 파일)
"""

from pathlib import Path
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from suggestion_box.config import settings
from suggestion_box.database import get_db
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.repositories.local_store import LocalKeyValueStore
from suggestion_box.repositories.local_suggestion_repository import LocalSuggestionRepository
from suggestion_box.repositories.suggestion_repository import SuggestionRepository
from suggestion_box.schemas.auth import AdminSession
from suggestion_box.services.auth_service import auth_service
from suggestion_box.utils.exceptions import UnauthorizedError

# HTTP Bearer 토큰 추출기: 헤더가 없으면 직접 401 처리
# (auto_error=False so a missing header yields our 401 instead of 403)
security: HTTPBearer = HTTPBearer(auto_error=False)

# 경로별 로컬 저장소: 같은 파일에 대해 하나의 잠금을 공유
# One store (and lock) per file path
_local_stores: dict[Path, LocalKeyValueStore] = {}


def get_local_store() -> LocalKeyValueStore:
    path = Path(settings.LOCAL_STORE_PATH)
    store = _local_stores.get(path)
    if store is None:
        store = LocalKeyValueStore(path)
        _local_stores[path] = store
    return store


async def get_suggestion_backend(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuggestionBackend:
    """설정된 제안 저장소를 반환합니다 (Return the configured suggestion backend)."""
    if settings.STORAGE_BACKEND == "local":
        return LocalSuggestionRepository(get_local_store())
    return SuggestionRepository(db)


async def get_current_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AdminSession:
    """Authorization 헤더에서 관리자 세션을 추출합니다.

    Raises:
        UnauthorizedError: 토큰 없음, 잘못된 토큰, 세션 만료
                           (Missing token, invalid token, or expired session)
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    return auth_service.resolve_session(credentials.credentials)
