"""요청 ID 컨텍스트 관리

로깅 필터와 서비스 계층이 같은 요청 ID를 참조할 수 있도록
contextvars로 보관합니다.
"""

import contextvars
import uuid
from typing import Optional

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환 (요청 밖에서는 None)"""
    return request_id_ctx.get()


def set_request_id(
    request_id: Optional[str] = None,
) -> tuple[str, contextvars.Token]:
    """요청 ID 설정 (없으면 새로 생성)

    Returns:
        (요청 ID, 복원용 토큰)
    """
    request_id = request_id or str(uuid.uuid4())
    return request_id, request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    """set_request_id 이전 값으로 복원"""
    request_id_ctx.reset(token)
