"""학생 API 라우터 패키지 — 인증 없는 학생용 엔드포인트 통합.

Student API Router package — Aggregates the public, unauthenticated
endpoints used by the student site.

Included routers:
    - suggestions: 제안 제출, 최근 제안, 카운터 (Submit, recent list, counters)
    - contact: 문의 양식 (Contact form)
"""

from fastapi import APIRouter

from suggestion_box.api.student.suggestions import router as suggestions_router
from suggestion_box.api.student.contact import router as contact_router

student_router: APIRouter = APIRouter()

student_router.include_router(suggestions_router, prefix="/suggestions", tags=["Student Suggestions"])
student_router.include_router(contact_router, prefix="/contact", tags=["Contact"])
