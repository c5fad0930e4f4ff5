"""제안 서비스.

Suggestion service — Business logic for the suggestion lifecycle:
student submission, admin status changes and responses, deletion,
dashboard aggregation, and JSON backup export/import.
All persistence goes through a SuggestionBackend passed in by the caller.
"""

import logging
from datetime import datetime, timezone

from suggestion_box.config import settings
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.suggestion import (
    DashboardResponse,
    ImportMode,
    ImportResult,
    PublicStats,
    SuggestionCreate,
    SuggestionExport,
    SuggestionImport,
    SuggestionRecord,
    SuggestionRespond,
    SuggestionStatus,
    SuggestionView,
)
from suggestion_box.services.suggestion_views import (
    calculate_public_stats,
    calculate_stats,
    filter_suggestions,
    recent_activity,
)
from suggestion_box.utils.exceptions import BadRequestError, NotFoundError
from suggestion_box.utils.ids import generate_suggestion_id

logger = logging.getLogger(__name__)

_NOT_FOUND = "제안을 찾을 수 없습니다 (Suggestion not found)"


class SuggestionService:

    # --- Student (학생용) ---

    async def submit(self, backend: SuggestionBackend, data: SuggestionCreate) -> SuggestionRecord:
        """학생 제안 제출 — 항상 Pending 상태로 목록 맨 앞에 저장.

        Persist a validated submission as a new Pending record at the head
        of the collection and return it with its backend-assigned id.
        """
        record = SuggestionRecord(
            department=data.department,
            tag=data.tag,
            text=data.text,
            status=SuggestionStatus.PENDING,
            submitted_by=data.submitted_by,
            priority=data.priority,
            created=datetime.now(timezone.utc),
        )
        suggestion_id = await backend.create(record)
        logger.info("Suggestion %s submitted for %s", suggestion_id, record.department)
        return record.model_copy(update={"id": suggestion_id})

    async def list_recent(self, backend: SuggestionBackend, limit: int) -> list[SuggestionRecord]:
        return (await backend.list_all())[:limit]

    async def public_stats(self, backend: SuggestionBackend) -> PublicStats:
        return calculate_public_stats(await backend.list_all())

    # --- Admin ---

    async def list_suggestions(
        self,
        backend: SuggestionBackend,
        view: SuggestionView = SuggestionView.ALL,
    ) -> list[SuggestionRecord]:
        return filter_suggestions(await backend.list_all(), view)

    async def get_detail(self, backend: SuggestionBackend, suggestion_id: str) -> SuggestionRecord:
        record = await backend.get(suggestion_id)
        if record is None:
            raise NotFoundError(_NOT_FOUND)
        return record

    async def change_status(
        self,
        backend: SuggestionBackend,
        suggestion_id: str,
        status: SuggestionStatus,
    ) -> SuggestionRecord:
        """상태 변경 — 어떤 상태에서든 어떤 상태로든 가능 (Any state to any state)."""
        if not await backend.update(suggestion_id, {"status": status}):
            raise NotFoundError(_NOT_FOUND)
        return await self.get_detail(backend, suggestion_id)

    async def respond(
        self,
        backend: SuggestionBackend,
        suggestion_id: str,
        data: SuggestionRespond,
    ) -> SuggestionRecord:
        """관리자 답변 — 답변, 답변 일시, 상태를 한 번의 쓰기로 기록.

        admin_response, responded_date and (when given) status are written
        in a single backend update.
        """
        fields: dict = {
            "admin_response": data.response,
            "responded_date": datetime.now(timezone.utc),
        }
        if data.status is not None:
            fields["status"] = data.status
        if not await backend.update(suggestion_id, fields):
            raise NotFoundError(_NOT_FOUND)
        return await self.get_detail(backend, suggestion_id)

    async def delete_suggestion(self, backend: SuggestionBackend, suggestion_id: str) -> None:
        if not await backend.delete(suggestion_id):
            raise NotFoundError(_NOT_FOUND)
        logger.info("Suggestion %s deleted", suggestion_id)

    async def dashboard(self, backend: SuggestionBackend) -> DashboardResponse:
        records = await backend.list_all()
        return DashboardResponse(
            stats=calculate_stats(records),
            recent_activity=recent_activity(records, settings.RECENT_ACTIVITY_LIMIT),
        )

    # --- Backup ---

    async def export_collection(self, backend: SuggestionBackend) -> SuggestionExport:
        records = await backend.list_all()
        return SuggestionExport(
            exported_at=datetime.now(timezone.utc),
            count=len(records),
            suggestions=records,
        )

    async def import_collection(
        self,
        backend: SuggestionBackend,
        payload: SuggestionImport,
        mode: ImportMode = ImportMode.REPLACE,
    ) -> ImportResult:
        """JSON 백업 가져오기.

        Restore a backup. ``replace`` swaps the whole collection; ``merge``
        upserts by id, keeping existing records that are not in the backup.
        Records without an id receive a generated one. Duplicate ids in the
        backup are rejected before anything is written.
        """
        incoming = [
            r if r.id else r.model_copy(update={"id": generate_suggestion_id()})
            for r in payload.suggestions
        ]
        seen: set[str] = set()
        for record in incoming:
            if record.id in seen:
                raise BadRequestError(f"Duplicate suggestion id in backup: {record.id}")
            seen.add(record.id)

        if mode == ImportMode.MERGE:
            kept = [r for r in await backend.list_all() if r.id not in seen]
            collection = kept + incoming
        else:
            collection = incoming

        collection.sort(key=lambda r: r.created, reverse=True)
        total = await backend.replace_all(collection)
        logger.info("Imported %d suggestions (%s), collection now %d", len(incoming), mode.value, total)
        return ImportResult(mode=mode, imported=len(incoming), total=total)


suggestion_service: SuggestionService = SuggestionService()
