"""관리자 인증 서비스.

Admin authentication service — Verifies the configured administrator
credentials and issues/validates 24-hour session tokens.
Login state lives in the token (login time, expiry and a session id). Logging
out revokes that session id until the token would have expired anyway and
tears down the admin's live change subscriptions.
"""

import logging
import secrets
from datetime import datetime, timezone
from functools import cached_property

import jwt

from suggestion_box.config import settings
from suggestion_box.schemas.auth import AdminSession, LoginRequest, TokenResponse
from suggestion_box.utils.change_feed import suggestion_feed
from suggestion_box.utils.exceptions import UnauthorizedError
from suggestion_box.utils.jwt import create_access_token, decode_token
from suggestion_box.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


def view_prefix(username: str) -> str:
    """관리자별 구독 키 접두사 (Subscription key prefix for one admin)."""
    return f"{username}:"


class AuthService:

    def __init__(self) -> None:
        # 로그아웃된 세션 ID → 원래 만료 시각 (Revoked session ids and their expiry)
        self._revoked: dict[str, datetime] = {}

    @cached_property
    def _password_hash(self) -> str:
        # 해시가 설정되지 않았으면 평문 설정값을 한 번만 해싱
        # Hash the plain configured password once when no hash is configured
        return settings.ADMIN_PASSWORD_HASH or hash_password(settings.ADMIN_PASSWORD)

    def admin_login(self, data: LoginRequest) -> TokenResponse:
        """관리자 로그인 — 아이디/비밀번호 확인 후 세션 토큰 발급.

        Raises:
            UnauthorizedError: 아이디 또는 비밀번호 불일치 (Invalid credentials)
        """
        username_ok = secrets.compare_digest(data.username, settings.ADMIN_USERNAME)
        password_ok = verify_password(data.password, self._password_hash)
        if not (username_ok and password_ok):
            logger.warning("Rejected admin login for %r", data.username)
            raise UnauthorizedError("Invalid username or password")

        login_time = datetime.now(timezone.utc)
        token, expires_at = create_access_token({"sub": settings.ADMIN_USERNAME}, login_time)
        logger.info("Admin %s logged in", settings.ADMIN_USERNAME)
        return TokenResponse(access_token=token, login_time=login_time, expires_at=expires_at)

    def resolve_session(self, token: str) -> AdminSession:
        """토큰에서 관리자 세션 복원.

        Raises:
            UnauthorizedError: 세션 만료, 로그아웃된 세션 또는 잘못된 토큰
                (Expired, logged-out or invalid token)
        """
        try:
            payload: dict = decode_token(token)
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Session expired, please log in again")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token")

        if payload.get("type") != "access" or payload.get("sub") != settings.ADMIN_USERNAME:
            raise UnauthorizedError("Invalid token")

        try:
            login_time = datetime.fromtimestamp(int(payload["login_time"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (KeyError, TypeError, ValueError):
            raise UnauthorizedError("Invalid token")

        jti = payload.get("jti")
        if not isinstance(jti, str) or not jti:
            raise UnauthorizedError("Invalid token")
        if jti in self._revoked:
            raise UnauthorizedError("Session ended, please log in again")

        return AdminSession(
            username=payload["sub"], login_time=login_time, expires_at=expires_at, jti=jti
        )

    def logout(self, session: AdminSession) -> int:
        """로그아웃 — 세션 토큰 폐기, 관리자의 모든 실시간 구독 해제.

        Revokes the session's token id and cancels the admin's live
        subscriptions. Returns the number of subscriptions closed.
        """
        now = datetime.now(timezone.utc)
        self._revoked = {jti: exp for jti, exp in self._revoked.items() if exp > now}
        if session.jti:
            self._revoked[session.jti] = session.expires_at

        cancelled = suggestion_feed.cancel_matching(view_prefix(session.username))
        logger.info("Admin %s logged out, %d live view(s) closed", session.username, cancelled)
        return cancelled


auth_service: AuthService = AuthService()
