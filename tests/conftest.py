"""테스트 인프라 — 임시 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Temporary SQLite (aiosqlite) DB per test, session,
httpx client, admin token, and the local JSON backend switch.
Every test gets a fresh database file and a fresh local store under tmp_path.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from suggestion_box.config import settings
from suggestion_box.database import Base, get_db
from suggestion_box.main import app
from suggestion_box.models import *  # noqa: F401,F403 — register all models with metadata
from suggestion_box.repositories.local_store import LocalKeyValueStore
from suggestion_box.repositories.local_suggestion_repository import LocalSuggestionRepository
from suggestion_box.repositories.suggestion_repository import SuggestionRepository
from suggestion_box.schemas.auth import LoginRequest
from suggestion_box.schemas.suggestion import SuggestionRecord
from suggestion_box.services.auth_service import auth_service
from suggestion_box.utils.change_feed import suggestion_feed

ADMIN = "/api/v1/admin"
STUDENT = "/api/v1/student"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 SQLite 파일에 스키마를 생성합니다."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture(autouse=True)
def reset_feed():
    """테스트 간 실시간 구독이 남지 않도록 피드를 비웁니다."""
    suggestion_feed.clear()
    yield
    suggestion_feed.clear()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 저장소 픽스처
# ---------------------------------------------------------------------------
@pytest.fixture
def local_store(tmp_path) -> LocalKeyValueStore:
    return LocalKeyValueStore(tmp_path / "local_store.json")


@pytest.fixture
def db_backend(db: AsyncSession) -> SuggestionRepository:
    return SuggestionRepository(db)


@pytest.fixture
def local_backend(local_store: LocalKeyValueStore) -> LocalSuggestionRepository:
    return LocalSuggestionRepository(local_store)


@pytest.fixture
def use_local_backend(monkeypatch, tmp_path):
    """API가 로컬 JSON 저장소를 사용하도록 전환합니다."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "LOCAL_STORE_PATH", tmp_path / "api_store.json")


@pytest.fixture(params=["database", "local"])
def storage_backend(request, monkeypatch, tmp_path) -> str:
    """두 저장소 모두에 대해 API 테스트를 실행합니다."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", request.param)
    monkeypatch.setattr(settings, "LOCAL_STORE_PATH", tmp_path / "api_store.json")
    return request.param


# ---------------------------------------------------------------------------
# 헬퍼: 인증, 테스트 데이터
# ---------------------------------------------------------------------------
@pytest.fixture
def admin_token() -> str:
    """설정된 관리자 계정으로 로그인한 토큰."""
    return auth_service.admin_login(
        LoginRequest(username=settings.ADMIN_USERNAME, password=settings.ADMIN_PASSWORD)
    ).access_token


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_record(
    text: str = "Please add more charging points in the library study area.",
    days_ago: float = 0,
    **overrides,
) -> SuggestionRecord:
    """테스트용 제안 레코드를 생성합니다."""
    data = {
        "department": "Library",
        "tag": "Facilities",
        "text": text,
        "created": datetime.now(timezone.utc) - timedelta(days=days_ago),
    }
    data.update(overrides)
    return SuggestionRecord(**data)


def valid_submission(**overrides) -> dict:
    data = {
        "department": "ICT",
        "tag": "Technology",
        "text": "Improve WiFi coverage in the hostels and common rooms.",
    }
    data.update(overrides)
    return data
