"""관리자 제안 라우터 — 제안 검토/답변/상태 변경/삭제, 실시간 스트림, 백업.

Admin Suggestion Router — Review, respond, status change, delete,
live change stream (SSE), and JSON/Excel backup endpoints.
Static paths (/stream, /export, /import) are declared before /{suggestion_id}.
"""

from datetime import datetime, timezone
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse
from sse_starlette.sse import EventSourceResponse

from suggestion_box.api.deps import get_current_admin, get_suggestion_backend
from suggestion_box.config import settings
from suggestion_box.repositories.backend import SuggestionBackend
from suggestion_box.schemas.auth import AdminSession
from suggestion_box.schemas.common import MessageResponse
from suggestion_box.schemas.suggestion import (
    ImportMode,
    ImportResult,
    SuggestionImport,
    SuggestionListResponse,
    SuggestionRecord,
    SuggestionRespond,
    SuggestionStatusUpdate,
    SuggestionView,
)
from suggestion_box.services.auth_service import view_prefix
from suggestion_box.services.board_stream import BoardStream
from suggestion_box.services.export_service import build_suggestions_workbook
from suggestion_box.services.suggestion_service import suggestion_service

router: APIRouter = APIRouter()


@router.get("", response_model=SuggestionListResponse)
async def list_suggestions(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
    view: SuggestionView = Query(SuggestionView.ALL),
) -> dict:
    """제안 목록 조회 — all / pending / responded 필터."""
    items = await suggestion_service.list_suggestions(backend, view)
    return {"view": view, "total": len(items), "items": items}


@router.get("/stream")
async def stream_suggestions(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
    view: SuggestionView = Query(SuggestionView.ALL),
    client_id: str = Query("dashboard", min_length=1, max_length=64),
) -> EventSourceResponse:
    """실시간 제안 스트림 (Server-Sent Events).

    Sends a ``snapshot`` event with the filtered view, then an ``update``
    event after every change. Only one stream per admin view (client_id)
    stays open; a newer stream or logout ends the older one with ``closed``.
    """
    stream = await BoardStream.open(backend, f"{view_prefix(current_admin.username)}{client_id}", view)
    return EventSourceResponse(stream.events(), ping=settings.STREAM_PING_SECONDS)


@router.get("/export")
async def export_suggestions(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> JSONResponse:
    """전체 제안 JSON 백업 다운로드."""
    export = await suggestion_service.export_collection(backend)
    filename = f"suggestions-backup-{export.exported_at:%Y%m%d}.json"
    return JSONResponse(
        content=export.model_dump(mode="json"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/export/xlsx")
async def export_suggestions_excel(
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> StreamingResponse:
    """전체 제안 Excel 보고서 다운로드."""
    records = await backend.list_all()
    excel_bytes: bytes = build_suggestions_workbook(records)
    filename = f"suggestions-{datetime.now(timezone.utc):%Y%m%d}.xlsx"
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/import", response_model=ImportResult)
async def import_suggestions(
    data: SuggestionImport,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
    mode: ImportMode = Query(ImportMode.REPLACE),
) -> ImportResult:
    """JSON 백업 복원 — replace(전체 교체) 또는 merge(ID 기준 병합)."""
    return await suggestion_service.import_collection(backend, data, mode)


@router.get("/{suggestion_id}", response_model=SuggestionRecord)
async def get_suggestion(
    suggestion_id: str,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> SuggestionRecord:
    """제안 상세 조회."""
    return await suggestion_service.get_detail(backend, suggestion_id)


@router.patch("/{suggestion_id}/status", response_model=SuggestionRecord)
async def update_suggestion_status(
    suggestion_id: str,
    data: SuggestionStatusUpdate,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> SuggestionRecord:
    """제안 상태 변경 — 모든 상태 간 전환 허용."""
    return await suggestion_service.change_status(backend, suggestion_id, data.status)


@router.post("/{suggestion_id}/response", response_model=SuggestionRecord)
async def respond_to_suggestion(
    suggestion_id: str,
    data: SuggestionRespond,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> SuggestionRecord:
    """관리자 답변 등록 — 답변/답변 일시/상태를 함께 저장."""
    return await suggestion_service.respond(backend, suggestion_id, data)


@router.delete("/{suggestion_id}", response_model=MessageResponse)
async def delete_suggestion(
    suggestion_id: str,
    backend: Annotated[SuggestionBackend, Depends(get_suggestion_backend)],
    current_admin: Annotated[AdminSession, Depends(get_current_admin)],
) -> dict:
    """제안 삭제."""
    await suggestion_service.delete_suggestion(backend, suggestion_id)
    return {"message": "Suggestion deleted successfully"}
