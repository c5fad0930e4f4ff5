"""공통 Pydantic 응답 스키마.

Common Pydantic response schemas shared across API domains.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """단순 메시지 응답 스키마.

    Generic message response for operations that return no entity
    (delete, logout, contact form acknowledgement).

    Attributes:
        message: 결과 메시지 (Human-readable result message)
    """

    message: str
