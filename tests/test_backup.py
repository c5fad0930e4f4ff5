"""백업 API 테스트 — JSON 내보내기/가져오기, Excel 보고서.

Backup API tests — JSON export envelope, replace/merge import including
legacy-shaped records, duplicate id rejection, and the Excel report.
"""

from io import BytesIO

from httpx import AsyncClient
from openpyxl import load_workbook

from suggestion_box.services.export_service import REPORT_HEADERS
from tests.conftest import ADMIN, STUDENT, auth_header, valid_submission

SUGGESTIONS = f"{ADMIN}/suggestions"


async def _submit(client: AsyncClient, **overrides) -> dict:
    res = await client.post(f"{STUDENT}/suggestions", json=valid_submission(**overrides))
    assert res.status_code == 201
    return res.json()


class TestJsonExport:
    """JSON 내보내기 테스트."""

    async def test_export_envelope(self, client: AsyncClient, admin_token: str, storage_backend: str):
        await _submit(client, text="Exported suggestion one")
        await _submit(client, text="Exported suggestion two")

        res = await client.get(f"{SUGGESTIONS}/export", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert "attachment" in res.headers["content-disposition"]
        data = res.json()
        assert data["version"] == 1
        assert data["count"] == 2
        assert data["exported_at"]
        assert [s["text"] for s in data["suggestions"]] == [
            "Exported suggestion two",
            "Exported suggestion one",
        ]

    async def test_export_then_replace_import_restores(
        self, client: AsyncClient, admin_token: str, storage_backend: str
    ):
        """내보낸 백업을 그대로 복원하면 ID와 모든 필드가 동일."""
        headers = auth_header(admin_token)
        answered = await _submit(client, text="Answered and implemented suggestion", submitted_by="Jane")
        rejected = await _submit(client, text="Suggestion that gets rejected")
        await _submit(client, text="Suggestion still waiting")

        await client.post(
            f"{SUGGESTIONS}/{answered['id']}/response",
            json={"response": "Installed in the east wing.", "status": "Implemented"},
            headers=headers,
        )
        await client.patch(f"{SUGGESTIONS}/{rejected['id']}/status", json={"status": "Rejected"}, headers=headers)

        before = (await client.get(SUGGESTIONS, headers=headers)).json()["items"]
        backup = (await client.get(f"{SUGGESTIONS}/export", headers=headers)).json()

        await _submit(client, text="Added after the backup")
        res = await client.post(f"{SUGGESTIONS}/import", json=backup, headers=headers)
        assert res.status_code == 200
        assert res.json() == {"mode": "replace", "imported": 3, "total": 3}

        after = (await client.get(SUGGESTIONS, headers=headers)).json()["items"]
        assert after == before
        restored = next(s for s in after if s["id"] == answered["id"])
        assert restored["status"] == "Implemented"
        assert restored["admin_response"] == "Installed in the east wing."
        assert restored["responded_date"] is not None

    async def test_export_requires_auth(self, client: AsyncClient):
        res = await client.get(f"{SUGGESTIONS}/export")
        assert res.status_code == 401


class TestJsonImport:
    """JSON 가져오기 테스트."""

    async def test_merge_keeps_existing(self, client: AsyncClient, admin_token: str, storage_backend: str):
        existing = await _submit(client, text="Existing suggestion text")
        payload = {
            "suggestions": [
                {
                    "id": "imported-1",
                    "department": "Cafeteria",
                    "tag": "Food",
                    "text": "Offer vegetarian options every day.",
                    "created": "2025-01-10T08:00:00Z",
                },
            ]
        }
        res = await client.post(
            f"{SUGGESTIONS}/import",
            params={"mode": "merge"},
            json=payload,
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        assert res.json() == {"mode": "merge", "imported": 1, "total": 2}

        listing = await client.get(SUGGESTIONS, headers=auth_header(admin_token))
        ids = [s["id"] for s in listing.json()["items"]]
        assert ids == [existing["id"], "imported-1"]

    async def test_merge_overwrites_same_id(self, client: AsyncClient, admin_token: str, storage_backend: str):
        existing = await _submit(client, text="Original suggestion text")
        payload = {"suggestions": [{**existing, "status": "Rejected"}]}
        res = await client.post(
            f"{SUGGESTIONS}/import",
            params={"mode": "merge"},
            json=payload,
            headers=auth_header(admin_token),
        )
        assert res.json()["total"] == 1

        detail = await client.get(f"{SUGGESTIONS}/{existing['id']}", headers=auth_header(admin_token))
        assert detail.json()["status"] == "Rejected"

    async def test_legacy_records_normalized(self, client: AsyncClient, admin_token: str, storage_backend: str):
        """구버전 필드명/상태값 백업도 정식 스키마로 복원."""
        payload = {
            "suggestions": [
                {
                    "id": 1700000000000,
                    "department": "ICT",
                    "suggestion_text": "Improve WiFi in the hostels please.",
                    "category": "Technology",
                    "status": "In Progress",
                    "timestamp": "2024-11-02T10:00:00",
                    "adminResponse": "Contractor booked.",
                },
                {
                    "department": "Library",
                    "text": "Extend opening hours during exams.",
                    "tag": "Academic",
                    "status": "Resolved",
                    "created": "2024-11-01T10:00:00Z",
                },
            ]
        }
        res = await client.post(f"{SUGGESTIONS}/import", json=payload, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["imported"] == 2

        items = (await client.get(SUGGESTIONS, headers=auth_header(admin_token))).json()["items"]
        first, second = items
        assert first["id"] == "1700000000000"
        assert first["text"] == "Improve WiFi in the hostels please."
        assert first["tag"] == "Technology"
        assert first["status"] == "In Review"
        assert first["admin_response"] == "Contractor booked."
        assert first["submitted_by"] == "Anonymous"
        assert second["status"] == "Implemented"
        assert second["id"]

    async def test_duplicate_ids_rejected(self, client: AsyncClient, admin_token: str, storage_backend: str):
        """중복 ID가 있으면 아무것도 쓰지 않음."""
        existing = await _submit(client)
        record = {"id": "dup", "department": "ICT", "tag": "Tech", "text": "Duplicate record text"}
        res = await client.post(
            f"{SUGGESTIONS}/import",
            json={"suggestions": [record, record]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400
        assert "dup" in res.json()["detail"]

        listing = await client.get(SUGGESTIONS, headers=auth_header(admin_token))
        assert [s["id"] for s in listing.json()["items"]] == [existing["id"]]

    async def test_invalid_mode(self, client: AsyncClient, admin_token: str):
        res = await client.post(
            f"{SUGGESTIONS}/import",
            params={"mode": "append"},
            json={"suggestions": []},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 422


class TestExcelExport:
    """Excel 보고서 테스트."""

    async def test_xlsx_report(self, client: AsyncClient, admin_token: str, storage_backend: str):
        created = await _submit(client, text="Spreadsheet suggestion text")
        res = await client.get(f"{SUGGESTIONS}/export/xlsx", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )

        ws = load_workbook(BytesIO(res.content)).active
        rows = list(ws.iter_rows(values_only=True))
        assert list(rows[0]) == REPORT_HEADERS
        assert rows[1][0] == created["id"]
        assert rows[1][REPORT_HEADERS.index("status")] == "Pending"
        assert rows[1][REPORT_HEADERS.index("text")] == "Spreadsheet suggestion text"
