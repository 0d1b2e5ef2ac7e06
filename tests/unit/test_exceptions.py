"""예외 단위 테스트"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    ErrorCode,
    UnauthorizedException,
    ValidationException,
    base_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from app.domains.interests.exceptions import (
    FutureTimestampException,
    InterestErrorCode,
    InterestUpdateConflictException,
    InvalidMentionCountException,
    MissingIdentifierException,
)


def _body(response) -> dict:
    return json.loads(response.body)


class TestGlobalExceptions:
    """전역 예외 테스트"""

    def test_bad_request_exception(self):
        """BadRequestException"""
        exc = BadRequestException(message="잘못된 입력입니다.")

        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.BAD_REQUEST

    def test_validation_exception_is_bad_request(self):
        """ValidationException은 400"""
        exc = ValidationException(detail={"page": 0})

        assert isinstance(exc, BadRequestException)
        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.VALIDATION_ERROR
        assert exc.detail_info == {"page": 0}

    def test_unauthorized_exception(self):
        """UnauthorizedException"""
        exc = UnauthorizedException()

        assert exc.status_code == 401
        assert exc.error_code == ErrorCode.UNAUTHORIZED

    def test_conflict_exception(self):
        """ConflictException"""
        exc = ConflictException()

        assert exc.status_code == 409
        assert exc.error_code == ErrorCode.CONFLICT


class TestDomainExceptions:
    """도메인 예외 테스트"""

    def test_missing_identifier(self):
        """MissingIdentifierException"""
        exc = MissingIdentifierException("child_id")

        assert exc.status_code == 400
        assert exc.error_code == InterestErrorCode.MISSING_IDENTIFIER
        assert exc.message == "child_id는 필수입니다."
        assert exc.detail_info == {"field": "child_id"}

    def test_invalid_mention_count(self):
        """InvalidMentionCountException"""
        exc = InvalidMentionCountException(-1)

        assert exc.status_code == 400
        assert exc.detail_info == {"mention_count": -1}

    def test_future_timestamp(self):
        """FutureTimestampException"""
        exc = FutureTimestampException(last_updated="2025-03-02", now="2025-03-01")

        assert exc.error_code == InterestErrorCode.FUTURE_TIMESTAMP
        assert exc.detail_info["now"] == "2025-03-01"

    def test_update_conflict(self):
        """InterestUpdateConflictException"""
        exc = InterestUpdateConflictException(child_id=1, keyword="공룡")

        assert isinstance(exc, ConflictException)
        assert exc.status_code == 409
        assert exc.error_code == InterestErrorCode.INTEREST_UPDATE_CONFLICT
        assert exc.detail_info == {"child_id": 1, "keyword": "공룡"}


class TestExceptionHandlers:
    """예외 핸들러 응답 형식 테스트"""

    @pytest.mark.asyncio
    async def test_base_exception_handler(self):
        """도메인 예외는 에러 코드와 상세 정보 포함"""
        response = await base_exception_handler(
            MagicMock(), MissingIdentifierException("conversation_id")
        )

        body = _body(response)
        assert response.status_code == 400
        assert body["success"] is False
        assert body["error"]["code"] == "MISSING_IDENTIFIER"
        assert body["error"]["detail"] == {"field": "conversation_id"}

    @pytest.mark.asyncio
    async def test_http_exception_handler_maps_status(self):
        """일반 HTTPException은 상태 코드로 에러 코드 결정"""
        response = await http_exception_handler(
            MagicMock(), HTTPException(status_code=404, detail="Not Found")
        )

        body = _body(response)
        assert response.status_code == 404
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["message"] == "Not Found"

    @pytest.mark.asyncio
    async def test_request_validation_handler(self):
        """스키마 검증 실패는 422 VALIDATION_ERROR"""
        exc = RequestValidationError(
            [{"loc": ("query", "page"), "msg": "too small", "type": "greater_than_equal"}]
        )

        response = await request_validation_exception_handler(MagicMock(), exc)

        body = _body(response)
        assert response.status_code == 422
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["detail"]["errors"] == [
            {"loc": ["query", "page"], "msg": "too small", "type": "greater_than_equal"}
        ]

    @pytest.mark.asyncio
    async def test_generic_exception_handler_hides_details(self):
        """처리되지 않은 예외는 500, 내부 메시지 노출 안 함"""
        request = MagicMock()
        request.method = "GET"

        response = await generic_exception_handler(request, RuntimeError("secret"))

        body = _body(response)
        assert response.status_code == 500
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert "secret" not in body["message"]
