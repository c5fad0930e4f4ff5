"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.

JWT Payload Structure:
    {
        "sub": "admin",              # 관리자 아이디 (Admin username)
        "login_time": 1234567890,    # 로그인 시각 UNIX timestamp (Login timestamp)
        "exp": 1234654290,           # 만료 시각 = login_time + 24h (Expiration)
        "type": "access",            # 토큰 유형 (Token type discriminator)
        "jti": "9f1c..."             # 세션 식별자, 로그아웃 시 폐기 (Session id, revoked on logout)
    }
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from suggestion_box.config import settings


def create_access_token(
    data: dict[str, Any],
    login_time: datetime | None = None,
) -> tuple[str, datetime]:
    """관리자 세션 토큰을 생성합니다.

    Generate a JWT access token that expires ADMIN_SESSION_HOURS after login.

    Args:
        data: JWT 페이로드 데이터 (Payload data, typically {"sub": username})
        login_time: 로그인 시각, 기본값은 현재 UTC (Login time, defaults to now)

    Returns:
        tuple[str, datetime]: (인코딩된 토큰, 만료 시각) (Encoded token and its expiry)
    """
    issued_at: datetime = login_time or datetime.now(timezone.utc)
    expire: datetime = issued_at + timedelta(hours=settings.ADMIN_SESSION_HOURS)
    to_encode: dict[str, Any] = data.copy()
    to_encode.update({
        "login_time": int(issued_at.timestamp()),
        "exp": expire,
        "type": "access",
        "jti": uuid.uuid4().hex,
    })
    token: str = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, expire


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 세션 만료 시 (When the session has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When the token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
