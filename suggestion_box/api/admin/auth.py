"""관리자 인증 라우터 — 로그인, 세션 확인, 로그아웃.

Admin Auth Router — Login, current session, and logout endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from suggestion_box.api.deps import get_current_admin
from suggestion_box.schemas.auth import AdminSession, LoginRequest, TokenResponse
from suggestion_box.schemas.common import MessageResponse
from suggestion_box.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def admin_login(data: LoginRequest) -> TokenResponse:
    """관리자 로그인 — 24시간 유효한 세션 토큰 발급.

    Admin login. The issued token expires 24 hours after login.
    """
    return auth_service.admin_login(data)


@router.get("/me", response_model=AdminSession)
async def get_me(
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> AdminSession:
    """현재 세션 정보 (Current admin session)."""
    return current_admin


@router.post("/logout", response_model=MessageResponse)
async def admin_logout(
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> dict:
    """로그아웃 — 세션 토큰 폐기, 열려 있는 실시간 구독 해제.

    The same token is rejected with 401 afterwards.
    """
    auth_service.logout(current_admin)
    return {"message": "Logged out successfully"}
