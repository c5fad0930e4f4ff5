"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class
used by the database suggestion backend.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from suggestion_box.config import settings

# 커넥션 풀 옵션: asyncpg(PostgreSQL)에서만 풀 크기/statement cache 설정
# Pool options only apply to asyncpg; SQLite drivers reject them
_engine_options: dict[str, Any] = {}
if settings.DATABASE_URL.startswith("postgresql+asyncpg"):
    _engine_options = {
        "pool_size": 5,
        "max_overflow": 10,
        # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
        "connect_args": {"statement_cache_size": 0},
    }

# 비동기 데이터베이스 엔진: Async database engine
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    **_engine_options,
)

# 비동기 세션 팩토리: Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.
    The session is automatically closed after the request completes.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
