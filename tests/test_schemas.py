"""스키마 테스트 — 제출 검증 경계값, 구버전 레코드 정규화.

Schema tests — Submission validation boundaries and normalization of
legacy-shaped records into the canonical SuggestionRecord.
"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from suggestion_box.schemas.contact import ContactMessageCreate
from suggestion_box.schemas.suggestion import (
    SuggestionCreate,
    SuggestionPriority,
    SuggestionRecord,
    SuggestionRespond,
    SuggestionStatus,
)


class TestSuggestionCreate:
    """제출 요청 검증."""

    @pytest.mark.parametrize("length", [10, 11, 250, 499, 500])
    def test_accepted_lengths(self, length: int):
        data = SuggestionCreate(department="ICT", tag="Tech", text="x" * length)
        assert len(data.text) == length

    @pytest.mark.parametrize("length", [1, 9, 501])
    def test_rejected_lengths(self, length: int):
        with pytest.raises(ValidationError):
            SuggestionCreate(department="ICT", tag="Tech", text="x" * length)

    def test_length_measured_after_trim(self):
        """앞뒤 공백 제외 10자 미만이면 거부."""
        with pytest.raises(ValidationError, match="minimum 10 characters"):
            SuggestionCreate(department="ICT", tag="Tech", text="   " + "x" * 9 + "   ")

    def test_defaults(self):
        data = SuggestionCreate(department=" ICT ", tag="Tech", text="Valid suggestion text")
        assert data.department == "ICT"
        assert data.submitted_by == "Anonymous"
        assert data.priority == SuggestionPriority.MEDIUM

    def test_blank_submitter_becomes_anonymous(self):
        data = SuggestionCreate(department="ICT", tag="Tech", text="Valid suggestion text", submitted_by="  ")
        assert data.submitted_by == "Anonymous"

    def test_missing_tag(self):
        with pytest.raises(ValidationError, match="Please fill in all fields"):
            SuggestionCreate(department="ICT", tag="", text="Valid suggestion text")


class TestSuggestionRecord:
    """정식 레코드 정규화."""

    def test_legacy_fields_and_status(self):
        record = SuggestionRecord.model_validate({
            "id": 42,
            "department": "Library",
            "suggestion_text": "Longer opening hours.",
            "category": "Academic",
            "status": "New",
            "timestamp": "2024-05-01T12:00:00",
            "response": "Noted",
            "respondedDate": "2024-05-02T09:30:00Z",
            "submittedBy": "",
        })
        assert record.id == "42"
        assert record.text == "Longer opening hours."
        assert record.tag == "Academic"
        assert record.status == SuggestionStatus.PENDING
        assert record.admin_response == "Noted"
        assert record.submitted_by == "Anonymous"
        assert record.created.tzinfo == timezone.utc
        assert record.responded_date is not None

    @pytest.mark.parametrize(
        "legacy, canonical",
        [
            ("New", SuggestionStatus.PENDING),
            ("In Progress", SuggestionStatus.IN_REVIEW),
            ("Resolved", SuggestionStatus.IMPLEMENTED),
            ("Rejected", SuggestionStatus.REJECTED),
        ],
    )
    def test_status_mapping(self, legacy: str, canonical: SuggestionStatus):
        record = SuggestionRecord(department="ICT", tag="Tech", text="Some text here", status=legacy)
        assert record.status == canonical

    def test_canonical_field_wins_over_alias(self):
        record = SuggestionRecord.model_validate({
            "department": "ICT",
            "tag": "Tech",
            "text": "Canonical text",
            "suggestion_text": "Legacy text",
        })
        assert record.text == "Canonical text"

    def test_missing_optional_fields_defaulted(self):
        record = SuggestionRecord.model_validate({"department": "ICT", "tag": "Tech", "text": "Text body"})
        assert record.status == SuggestionStatus.PENDING
        assert record.priority == SuggestionPriority.MEDIUM
        assert record.admin_response == ""
        assert record.responded_date is None
        assert record.created.tzinfo is not None

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            SuggestionRecord(department="ICT", tag="Tech", text="Some text here", status="Archived")

    @pytest.mark.parametrize("response, responded", [("", False), ("   ", False), ("Done", True)])
    def test_is_responded(self, response: str, responded: bool):
        record = SuggestionRecord(department="ICT", tag="Tech", text="Some text", admin_response=response)
        assert record.is_responded is responded


class TestOtherRequests:
    """답변/문의 요청 검증."""

    def test_respond_requires_text(self):
        with pytest.raises(ValidationError, match="Please enter a response before submitting."):
            SuggestionRespond(response="  ")

    def test_respond_status_optional(self):
        assert SuggestionRespond(response="Thanks").status is None

    @pytest.mark.parametrize("email", ["student@uni.ac.ke", "a.b@c.io"])
    def test_contact_valid_email(self, email: str):
        message = ContactMessageCreate(name="Amina", email=email, subject="Hi", message="Hello there")
        assert message.email == email

    def test_contact_email_trimmed(self):
        message = ContactMessageCreate(name="Amina", email="  student@uni.ac.ke ", subject="Hi", message="Hello")
        assert message.email == "student@uni.ac.ke"

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.d", "a..b@uni.ac.ke", ".a@uni.ac.ke"])
    def test_contact_invalid_email(self, email: str):
        with pytest.raises(ValidationError) as exc_info:
            ContactMessageCreate(name="Amina", email=email, subject="Hi", message="Hello there")
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_contact_blank_email(self):
        with pytest.raises(ValidationError, match="Please fill in all fields"):
            ContactMessageCreate(name="Amina", email="   ", subject="Hi", message="Hello there")
