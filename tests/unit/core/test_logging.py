"""로깅 설정 단위 테스트"""

import json
import logging

from app.core.context import get_request_id, reset_request_id, set_request_id
from app.core.logging import ColoredFormatter, JsonFormatter, RequestIdFilter


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIdContext:
    """요청 ID 컨텍스트 테스트"""

    def test_set_and_reset(self):
        """설정 후 복원"""
        assert get_request_id() is None

        request_id, token = set_request_id("req-1")
        assert request_id == "req-1"
        assert get_request_id() == "req-1"

        reset_request_id(token)
        assert get_request_id() is None

    def test_generates_id_when_missing(self):
        """ID가 없으면 새로 생성"""
        request_id, token = set_request_id()
        try:
            assert request_id
            assert get_request_id() == request_id
        finally:
            reset_request_id(token)


class TestRequestIdFilter:
    """요청 ID 필터 테스트"""

    def test_injects_current_request_id(self):
        _, token = set_request_id("req-42")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
            assert record.request_id == "req-42"
        finally:
            reset_request_id(token)

    def test_placeholder_outside_request(self):
        record = _record()

        RequestIdFilter().filter(record)

        assert record.request_id == "-"


class TestFormatters:
    """포맷터 테스트"""

    def test_json_formatter_includes_extra_fields(self):
        """extra 필드와 요청 ID를 한 줄 JSON으로"""
        record = _record("Analytics ingested", request_id="req-7", child_id=1)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "Analytics ingested"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.test"
        assert payload["request_id"] == "req-7"
        assert payload["child_id"] == 1
        assert "msg" not in payload

    def test_colored_formatter_restores_levelname(self):
        """색상 적용 후 레코드의 levelname은 원래 값"""
        record = _record()

        output = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[32m" in output
        assert record.levelname == "INFO"
