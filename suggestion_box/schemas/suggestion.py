"""제안 Pydantic 스키마.

Suggestion request/response schemas.
SuggestionRecord is the single canonical record shape; every record read from a
backend or restored from a backup is validated through it exactly once, which
resolves defaults and maps legacy field names and status values.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# 제출 본문 길이 제한: Submission text bounds (inclusive)
MIN_TEXT_LENGTH: int = 10
MAX_TEXT_LENGTH: int = 500

DEFAULT_SUBMITTER: str = "Anonymous"


class SuggestionStatus(str, Enum):
    PENDING = "Pending"
    IN_REVIEW = "In Review"
    IMPLEMENTED = "Implemented"
    REJECTED = "Rejected"


class SuggestionPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SuggestionView(str, Enum):
    """관리자 화면 필터 (Admin view filter)."""

    ALL = "all"
    PENDING = "pending"
    RESPONDED = "responded"


class ImportMode(str, Enum):
    REPLACE = "replace"
    MERGE = "merge"


# 구버전 필드명 → 정식 필드명 (Legacy field name -> canonical field name)
_LEGACY_FIELDS: dict[str, str] = {
    "suggestion_text": "text",
    "adminResponse": "admin_response",
    "response": "admin_response",
    "submittedBy": "submitted_by",
    "respondedDate": "responded_date",
    "timestamp": "created",
    "category": "tag",
}

# 구버전 상태값 → 정식 상태값 (Legacy status vocabulary -> canonical)
_LEGACY_STATUSES: dict[str, str] = {
    "New": SuggestionStatus.PENDING.value,
    "In Progress": SuggestionStatus.IN_REVIEW.value,
    "Resolved": SuggestionStatus.IMPLEMENTED.value,
}

# 비어 있으면 기본값으로 채우는 필드 (Falsy values fall back to these defaults)
_FIELD_DEFAULTS: dict[str, str] = {
    "status": SuggestionStatus.PENDING.value,
    "admin_response": "",
    "submitted_by": DEFAULT_SUBMITTER,
    "priority": SuggestionPriority.MEDIUM.value,
}


class SuggestionRecord(BaseModel):
    """정식 제안 레코드.

    Canonical suggestion record shared by both backends and both API surfaces.
    ``id`` is None only before the backend has stored the record.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    department: str
    tag: str
    text: str
    status: SuggestionStatus = SuggestionStatus.PENDING
    admin_response: str = ""
    submitted_by: str = DEFAULT_SUBMITTER
    priority: SuggestionPriority = SuggestionPriority.MEDIUM
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    responded_date: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy(cls, data: Any) -> Any:
        # ORM 객체(from_attributes)는 이미 정식 스키마 (ORM rows are already canonical)
        if not isinstance(data, dict):
            return data

        normalized: dict[str, Any] = {}
        for key, value in data.items():
            target = _LEGACY_FIELDS.get(key, key)
            # 정식 필드가 함께 있으면 정식 필드가 우선 (Canonical key wins over its alias)
            if target != key and target in data:
                continue
            normalized[target] = value

        status = normalized.get("status")
        if isinstance(status, str):
            normalized["status"] = _LEGACY_STATUSES.get(status, status)

        for field_name, default in _FIELD_DEFAULTS.items():
            if not normalized.get(field_name):
                normalized[field_name] = default

        if isinstance(normalized.get("id"), int):
            normalized["id"] = str(normalized["id"])
        return normalized

    @field_validator("created", "responded_date")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_responded(self) -> bool:
        return bool(self.admin_response.strip())


class SuggestionCreate(BaseModel):
    """학생 제안 제출 요청 스키마.

    Student submission request. Department, tag and text are required;
    text must be MIN_TEXT_LENGTH..MAX_TEXT_LENGTH characters once trimmed.

    Attributes:
        department: 대상 부서 (Target department)
        tag: 분류 태그 (Category tag)
        text: 제안 본문 (Suggestion body)
        submitted_by: 제출자 이름 (Optional display name, "Anonymous" when blank)
        priority: 우선순위 (Low/Medium/High, default Medium)
    """

    department: str
    tag: str
    text: str
    submitted_by: str | None = Field(default=None, validate_default=True)
    priority: SuggestionPriority = SuggestionPriority.MEDIUM

    @field_validator("department", "tag")
    @classmethod
    def _require_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please fill in all fields")
        return value

    @field_validator("text")
    @classmethod
    def _check_text_length(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please fill in all fields")
        if len(value) < MIN_TEXT_LENGTH:
            raise ValueError(
                f"Please provide a more detailed suggestion (minimum {MIN_TEXT_LENGTH} characters)"
            )
        if len(value) > MAX_TEXT_LENGTH:
            raise ValueError(f"Suggestion must be {MAX_TEXT_LENGTH} characters or fewer")
        return value

    @field_validator("submitted_by")
    @classmethod
    def _default_submitter(cls, value: str | None) -> str:
        value = (value or "").strip()
        return value or DEFAULT_SUBMITTER


class SuggestionStatusUpdate(BaseModel):
    status: SuggestionStatus


class SuggestionRespond(BaseModel):
    """관리자 답변 요청 — 답변과 상태를 한 번에 기록.

    Admin response request. When status is omitted the current status is kept.
    """

    response: str
    status: SuggestionStatus | None = None

    @field_validator("response")
    @classmethod
    def _require_response(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a response before submitting.")
        return value


class SuggestionListResponse(BaseModel):
    view: SuggestionView
    total: int
    items: list[SuggestionRecord]


class SuggestionStats(BaseModel):
    """대시보드 집계 (Dashboard counters)."""

    total: int = 0
    pending: int = 0
    in_review: int = 0
    implemented: int = 0
    rejected: int = 0
    responded: int = 0


class PublicStats(BaseModel):
    """학생 사이트 카운터 (Student site hero counters)."""

    total: int = 0
    implemented: int = 0


class DashboardResponse(BaseModel):
    stats: SuggestionStats
    recent_activity: list[SuggestionRecord]


class SuggestionExport(BaseModel):
    """JSON 백업 봉투 (JSON backup envelope)."""

    version: int = 1
    exported_at: datetime
    count: int
    suggestions: list[SuggestionRecord]


class SuggestionImport(BaseModel):
    """JSON 백업 가져오기 — export 봉투를 그대로 받음 (Accepts the export envelope as-is)."""

    version: int = 1
    suggestions: list[SuggestionRecord]


class ImportResult(BaseModel):
    mode: ImportMode
    imported: int
    total: int
