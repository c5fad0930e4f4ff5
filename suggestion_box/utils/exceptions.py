"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error categories
of the suggestion box: missing records, bad requests, session problems,
and backend (storage/mail) failures. Every failure path ends in one of
these; none of them is fatal to the process.

Usage:
    from suggestion_box.utils.exceptions import NotFoundError, StorageError
    raise NotFoundError("Suggestion not found")
    raise StorageError("Failed to load suggestions. Please try again.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 제안을 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 또는 세션 만료 시 사용.

    401 Unauthorized exception.
    Raised when the admin token is missing, invalid, or the 24-hour session
    has expired. Clients send the user back to the login page.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when request data is invalid beyond what Pydantic validation catches
    (e.g. duplicate ids in a backup import).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ServiceUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 외부 의존 서비스 실패 시 사용.

    503 Service Unavailable exception.
    Raised when a collaborator (mail server, storage) fails. The operation is
    abandoned and not retried; the client shows a transient notification.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Service temporarily unavailable. Please try again.") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class StorageError(ServiceUnavailableError):
    """제안 저장소 읽기/쓰기 실패 (Suggestion backend read/write failure)."""

    def __init__(self, detail: str = "Storage is unavailable. Please try again.") -> None:
        super().__init__(detail=detail)
