"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers admin login, token issuance, and the current admin session.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """관리자 로그인 요청 스키마.

    Attributes:
        username: 관리자 아이디 (Administrator login name)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after a successful admin login. The token stays valid for
    ADMIN_SESSION_HOURS after login_time; there is no refresh flow.

    Attributes:
        access_token: JWT 액세스 토큰 (Session token)
        token_type: 토큰 유형 (Always "bearer")
        login_time: 로그인 시각 UTC (Login timestamp)
        expires_at: 만료 시각 UTC (Session expiry timestamp)
    """

    access_token: str
    token_type: str = "bearer"
    login_time: datetime
    expires_at: datetime


class AdminSession(BaseModel):
    """현재 관리자 세션 정보 (Current admin session).

    Attributes:
        jti: 세션 식별자 (Token id used to revoke the session on logout; not serialized)
    """

    username: str
    login_time: datetime
    expires_at: datetime
    jti: str | None = Field(default=None, exclude=True)
