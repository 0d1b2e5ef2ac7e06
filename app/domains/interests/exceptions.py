"""Interests 도메인 예외 정의"""

from enum import Enum
from typing import Any

from app.core.exceptions import ConflictException, ValidationException


class InterestErrorCode(str, Enum):
    """관심사 도메인 에러 코드"""

    INVALID_KEYWORD = "INVALID_KEYWORD"
    INVALID_SCORE = "INVALID_SCORE"
    INVALID_MENTION_COUNT = "INVALID_MENTION_COUNT"
    FUTURE_TIMESTAMP = "FUTURE_TIMESTAMP"
    MISSING_IDENTIFIER = "MISSING_IDENTIFIER"
    INTEREST_UPDATE_CONFLICT = "INTEREST_UPDATE_CONFLICT"


class InvalidKeywordException(ValidationException):
    """키워드가 규칙(1~100자, 문자/숫자 포함)을 어긴 경우"""

    def __init__(self, reason: str, keyword: Any = None):
        detail = {"keyword": keyword} if isinstance(keyword, str) else {}
        super().__init__(
            message=reason,
            error_code=InterestErrorCode.INVALID_KEYWORD,
            detail=detail,
        )


class InvalidScoreException(ValidationException):
    """점수가 0~100 범위를 벗어나거나 유한한 숫자가 아닌 경우"""

    def __init__(self, reason: str, score: Any = None):
        detail = {"score": score} if isinstance(score, (int, float)) else {}
        super().__init__(
            message=reason,
            error_code=InterestErrorCode.INVALID_SCORE,
            detail=detail,
        )


class InvalidMentionCountException(ValidationException):
    """언급 횟수가 0 이상의 정수가 아닌 경우"""

    def __init__(self, mention_count: Any = None):
        super().__init__(
            message="언급 횟수는 0 이상의 정수여야 합니다.",
            error_code=InterestErrorCode.INVALID_MENTION_COUNT,
            detail={"mention_count": mention_count},
        )


class FutureTimestampException(ValidationException):
    """마지막 업데이트 시각이 기준 시각보다 미래인 경우 (시계 오차)"""

    def __init__(self, last_updated: Any = None, now: Any = None):
        super().__init__(
            message="마지막 업데이트 시간이 미래일 수 없습니다.",
            error_code=InterestErrorCode.FUTURE_TIMESTAMP,
            detail={"last_updated": str(last_updated), "now": str(now)},
        )


class MissingIdentifierException(ValidationException):
    """아이 ID, 대화 ID 등 필수 식별자가 없는 경우"""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field}는 필수입니다.",
            error_code=InterestErrorCode.MISSING_IDENTIFIER,
            detail={"field": field},
        )


class InterestUpdateConflictException(ConflictException):
    """동일 (아이, 키워드) 관심사에 대한 동시 수정이 충돌한 경우"""

    def __init__(self, child_id: int | None = None, keyword: str | None = None):
        detail: dict[str, Any] = {}
        if child_id is not None:
            detail["child_id"] = child_id
        if keyword is not None:
            detail["keyword"] = keyword
        super().__init__(
            message="관심사가 동시에 수정되었습니다. 잠시 후 다시 시도해주세요.",
            error_code=InterestErrorCode.INTEREST_UPDATE_CONFLICT,
            detail=detail,
        )
