"""학생 API 테스트 — 제안 제출, 최근 제안 목록, 공개 카운터.

Student API tests — Submission validation, recent suggestions feed and
hero counters, run against both the database and the local backend.
"""

from httpx import AsyncClient

from suggestion_box.config import settings
from tests.conftest import STUDENT, make_record, valid_submission

SUGGESTIONS = f"{STUDENT}/suggestions"


def _messages(res) -> str:
    return " ".join(err["msg"] for err in res.json()["detail"])


# ===== Submission =====

class TestSubmitSuggestion:
    """제안 제출 테스트."""

    async def test_submit_success(self, client: AsyncClient, storage_backend: str):
        """제출 성공 — Pending 상태, 기본 제출자 Anonymous."""
        res = await client.post(SUGGESTIONS, json=valid_submission())
        assert res.status_code == 201
        data = res.json()
        assert data["id"]
        assert data["status"] == "Pending"
        assert data["submitted_by"] == "Anonymous"
        assert data["priority"] == "Medium"
        assert data["admin_response"] == ""
        assert data["responded_date"] is None

    async def test_local_backend_generates_sug_id(self, client: AsyncClient, use_local_backend):
        res = await client.post(SUGGESTIONS, json=valid_submission())
        assert res.status_code == 201
        assert res.json()["id"].startswith("SUG_")

    async def test_text_is_trimmed(self, client: AsyncClient, storage_backend: str):
        res = await client.post(SUGGESTIONS, json=valid_submission(text="   More study rooms please   "))
        assert res.status_code == 201
        assert res.json()["text"] == "More study rooms please"

    async def test_text_exactly_min_length(self, client: AsyncClient):
        """정확히 10자는 허용."""
        res = await client.post(SUGGESTIONS, json=valid_submission(text="a" * 10))
        assert res.status_code == 201

    async def test_text_too_short(self, client: AsyncClient):
        """9자는 거부."""
        res = await client.post(SUGGESTIONS, json=valid_submission(text="a" * 9))
        assert res.status_code == 422
        assert "minimum 10 characters" in _messages(res)

    async def test_text_padded_to_min_length_rejected(self, client: AsyncClient):
        """공백을 제외한 길이로 판정."""
        res = await client.post(SUGGESTIONS, json=valid_submission(text="   short    "))
        assert res.status_code == 422

    async def test_text_exactly_max_length(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(text="a" * 500))
        assert res.status_code == 201

    async def test_text_too_long(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(text="a" * 501))
        assert res.status_code == 422
        assert "500 characters or fewer" in _messages(res)

    async def test_missing_department(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(department="   "))
        assert res.status_code == 422
        assert "Please fill in all fields" in _messages(res)

    async def test_blank_text(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(text="  "))
        assert res.status_code == 422
        assert "Please fill in all fields" in _messages(res)

    async def test_rejected_submission_not_stored(self, client: AsyncClient, storage_backend: str):
        """검증 실패 시 저장소는 변경되지 않음."""
        await client.post(SUGGESTIONS, json=valid_submission(text="short"))
        res = await client.get(SUGGESTIONS)
        assert res.json() == []

    async def test_submitted_by_and_priority(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(submitted_by="Jane", priority="High"))
        assert res.status_code == 201
        assert res.json()["submitted_by"] == "Jane"
        assert res.json()["priority"] == "High"

    async def test_invalid_priority(self, client: AsyncClient):
        res = await client.post(SUGGESTIONS, json=valid_submission(priority="Urgent"))
        assert res.status_code == 422


# ===== Recent suggestions & stats =====

class TestRecentSuggestions:
    """최근 제안 목록 및 카운터 테스트."""

    async def test_recent_newest_first_limited(self, client: AsyncClient, storage_backend: str):
        """최신순, 기본 6건."""
        for i in range(settings.RECENT_SUGGESTIONS_LIMIT + 2):
            res = await client.post(SUGGESTIONS, json=valid_submission(text=f"Suggestion number {i:02d}"))
            assert res.status_code == 201

        res = await client.get(SUGGESTIONS)
        assert res.status_code == 200
        items = res.json()
        assert len(items) == settings.RECENT_SUGGESTIONS_LIMIT
        created = [item["created"] for item in items]
        assert created == sorted(created, reverse=True)

    async def test_recent_with_limit(self, client: AsyncClient):
        for i in range(3):
            await client.post(SUGGESTIONS, json=valid_submission(text=f"Suggestion number {i:02d}"))
        res = await client.get(SUGGESTIONS, params={"limit": 2})
        assert len(res.json()) == 2

    async def test_recent_empty(self, client: AsyncClient, storage_backend: str):
        res = await client.get(SUGGESTIONS)
        assert res.status_code == 200
        assert res.json() == []

    async def test_public_stats(self, client: AsyncClient, db_backend):
        await db_backend.create(make_record(status="Implemented"))
        await db_backend.create(make_record(status="Pending"))
        await db_backend.create(make_record(status="In Review"))

        res = await client.get(f"{SUGGESTIONS}/stats")
        assert res.status_code == 200
        assert res.json() == {"total": 3, "implemented": 1}
