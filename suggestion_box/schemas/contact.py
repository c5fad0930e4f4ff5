"""문의 폼 Pydantic 스키마.

Contact form request schema.
"""

from pydantic import BaseModel, EmailStr, field_validator


class ContactMessageCreate(BaseModel):
    name: str
    email: EmailStr
    subject: str
    message: str

    @field_validator("name", "email", "subject", "message", mode="before")
    @classmethod
    def _require_value(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Please fill in all fields")
        return value
