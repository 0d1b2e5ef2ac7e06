"""요청/응답 로깅 미들웨어"""

import time
from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.context import reset_request_id, set_request_id
from app.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청 ID 부여, 요청/응답 로깅, 처리 시간 측정"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        # 상위 서비스가 보낸 요청 ID가 있으면 이어서 사용
        request_id, token = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        client = request.client.host if request.client else "unknown"
        logger.info(f"→ {request.method} {request.url.path} | Client: {client}")

        started = time.perf_counter()
        try:
            response = cast(Response, await call_next(request))
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"✗ {request.method} {request.url.path} "
                f"| Error: {e} | Time: {elapsed_ms:.2f}ms"
            )
            reset_request_id(token)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}ms"

        log_method = logger.info if response.status_code < 400 else logger.warning
        log_method(
            f"{'✓' if response.status_code < 400 else '✗'} {request.method} "
            f"{request.url.path} | Status: {response.status_code} "
            f"| Time: {elapsed_ms:.2f}ms"
        )

        reset_request_id(token)
        return response
