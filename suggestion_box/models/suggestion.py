"""제안 SQLAlchemy ORM 모델 정의.

Suggestion SQLAlchemy ORM model definition.
One row per student suggestion; the database backend's document collection.

Tables:
    - suggestions: 학생 제안 (Student suggestions with admin review state)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from suggestion_box.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Suggestion(Base):
    """제안 모델 — 학생이 제출하고 관리자가 검토하는 제안.

    Suggestion model — Submitted by students, reviewed by administrators.
    Only status, admin_response and responded_date change after creation.

    Attributes:
        id: 고유 식별자 (Store-assigned identifier, UUID string unless imported)
        department: 대상 부서 (Target department)
        tag: 분류 태그 (Category tag used for filtering/display)
        text: 제안 본문 (Suggestion body, 10-500 chars at submission)
        status: 처리 상태 (Pending, In Review, Implemented, Rejected)
        admin_response: 관리자 답변 (Empty until an admin responds)
        submitted_by: 제출자 표시 이름 (Display name, "Anonymous" by default)
        priority: 우선순위 (Low, Medium, High)
        created: 제출 일시 UTC (Submission timestamp, immutable)
        responded_date: 답변 일시 UTC (Set when an admin responds)
    """

    __tablename__ = "suggestions"
    __table_args__ = (Index("ix_suggestions_created", "created"),)

    # 제안 식별자: 가져오기(import) 시에는 원본 ID 유지 (Imported records keep their id)
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    tag: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    # 처리 상태: 고정된 4개 값 중 하나 (One of the fixed status values)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Pending")
    admin_response: Mapped[str] = mapped_column(Text, nullable=False, default="")
    submitted_by: Mapped[str] = mapped_column(String(200), nullable=False, default="Anonymous")
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default="Medium")
    # 제출 일시: 목록은 항상 이 컬럼 내림차순 (Lists are ordered by this column, newest first)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    responded_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
