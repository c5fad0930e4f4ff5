"""API 요청 로깅 미들웨어 — Axiom 전송, 미설정 시 표준 로거.

Request logging middleware.
Every API call produces one structured event (method, path, params, masked
body, status, duration, error detail). Events go to Axiom when a token and
dataset are configured, otherwise to the ``suggestion_box.access`` logger.
Sensitive fields (password, token, secret) are masked before logging.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from suggestion_box.config import settings

logger = logging.getLogger("suggestion_box.access")

# 마스킹 대상 필드: Fields masked in request bodies and query params
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 본문을 읽지 않는 경로: 스트림/파일 응답 (Streaming or file responses)
_STREAM_SUFFIXES = ("/stream", "/export/xlsx")

_MAX_ERROR_LEN = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 (Recursively mask sensitive fields)."""
    if depth > 4:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        # 백업 가져오기처럼 큰 목록은 앞부분만 (Only the head of large lists, e.g. imports)
        return [_mask(item, depth + 1) for item in data[:10]]
    if isinstance(data, str) and len(data) > 1000:
        return data[:1000] + "...(truncated)"
    return data


async def _read_json_body(request: Request) -> Any:
    body_bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return _mask(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출 (Extract ``detail`` from an error body)."""
    try:
        detail = json.loads(body).get("detail")
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]
    if not isinstance(detail, str):
        detail = json.dumps(detail, default=str)
    return detail[:_MAX_ERROR_LEN]


def build_log_event(
    request: Request,
    status_code: int,
    duration_ms: float,
    request_body: Any = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Axiom/로거 공통 이벤트 구성 (Build the structured access event)."""
    event: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": duration_ms,
        "storage_backend": settings.STORAGE_BACKEND,
    }
    if request.query_params:
        event["query_params"] = _mask(dict(request.query_params))
    if request.path_params:
        event["path_params"] = dict(request.path_params)
    if request_body is not None:
        event["request_body"] = request_body
    if error:
        event["error"] = error
    return event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 기록하는 미들웨어.

    Middleware that records every API request and response, shipping the
    event to Axiom when configured and to the standard logger otherwise.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        request_body: Any = None
        if request.method in ("POST", "PUT", "PATCH"):
            request_body = await _read_json_body(request)

        error: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400 and not request.url.path.endswith(_STREAM_SUFFIXES):
                # 소비한 body를 다시 응답으로 감쌈 (Re-wrap the consumed body)
                body = b"".join(
                    [chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                     async for chunk in response.body_iterator]
                )
                error = _error_detail(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            self._emit(build_log_event(request, status_code, duration_ms, request_body, error))

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            level = logging.WARNING if event["status_code"] >= 400 else logging.INFO
            logger.log(level, "%s %s -> %s (%sms)", event["method"], event["path"],
                       event["status_code"], event["duration_ms"])
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록 (Never break a request on log failure)
            logger.exception("Axiom ingest failed for %s %s", event["method"], event["path"])
