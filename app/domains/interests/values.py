"""관심사 값 객체

- Keyword: 정규화된 관심사 키워드 (대소문자 무시 비교)
- Score: 0~100 범위, 소수점 둘째 자리로 반올림되는 관심도 점수
"""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from app.core.logging import get_logger
from app.domains.interests.exceptions import (
    InvalidKeywordException,
    InvalidScoreException,
)

logger = get_logger(__name__)

KEYWORD_MAX_LENGTH = 100
# 영문/숫자/한글 중 최소 한 글자는 있어야 함
_MEANINGFUL_CHAR = re.compile(r"[a-zA-Z0-9가-힣]")


@dataclass(frozen=True, eq=False)
class Keyword:
    """관심사 키워드 값 객체

    원래 표기(트림된 값)를 보존하고, 비교/해시는 소문자 기준으로 합니다.

    Example::

        Keyword.create("  Dino ") == Keyword.create("dino")  # True
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidKeywordException(
                "키워드는 문자열이어야 합니다.", self.value
            )

        trimmed = self.value.strip()

        if not trimmed:
            raise InvalidKeywordException("키워드는 비어있을 수 없습니다.")

        if len(trimmed) > KEYWORD_MAX_LENGTH:
            raise InvalidKeywordException(
                f"키워드는 {KEYWORD_MAX_LENGTH}자를 초과할 수 없습니다.",
                trimmed,
            )

        if not _MEANINGFUL_CHAR.search(trimmed):
            raise InvalidKeywordException(
                "키워드는 최소 하나의 문자나 숫자를 포함해야 합니다.", trimmed
            )

        object.__setattr__(self, "value", trimmed)

    @classmethod
    def create(cls, raw: Any) -> "Keyword":
        """원시 값에서 Keyword 생성 (이미 Keyword면 그대로 반환)"""
        if isinstance(raw, Keyword):
            return raw
        if raw is None:
            raise InvalidKeywordException("키워드는 필수입니다.")
        return cls(raw)

    @property
    def normalized(self) -> str:
        """비교용 소문자 키워드"""
        return self.value.lower()

    def matches(self, other: str) -> bool:
        """문자열과 대소문자/앞뒤 공백 무시 비교"""
        return self.normalized == other.strip().lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keyword):
            return NotImplemented
        return self.normalized == other.normalized

    def __hash__(self) -> int:
        return hash(self.normalized)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value


def normalize_keywords(raws: Optional[Iterable[Any]]) -> dict[Keyword, int]:
    """추출된 키워드 목록을 정규화하고 언급 횟수를 집계

    - 대소문자/공백 차이는 같은 키워드로 취급
    - 처음 등장한 표기와 순서를 유지
    - 규칙에 맞지 않는 항목은 건너뜀

    Args:
        raws: 대화에서 추출된 원시 키워드 목록

    Returns:
        {Keyword: 언급 횟수} (삽입 순서 = 첫 등장 순서)

    Example::

        normalize_keywords(["공룡", "공룡 ", "  공룡"])  # {Keyword("공룡"): 3}
    """
    counts: dict[Keyword, int] = {}

    for raw in raws or []:
        try:
            keyword = Keyword.create(raw)
        except InvalidKeywordException as e:
            logger.debug(f"Skipping invalid keyword {raw!r}: {e.message}")
            continue
        counts[keyword] = counts.get(keyword, 0) + 1

    return counts


_TWO_PLACES = Decimal("0.01")


def _round_half_up(value: float) -> float:
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, ROUND_HALF_UP))


@dataclass(frozen=True, order=True)
class Score:
    """관심도 점수 값 객체

    생성될 때마다 0 이상 100 이하인지 검증하고 소수점 둘째 자리로
    반올림합니다. 연산 결과도 같은 검증을 거치므로 100을 넘으면
    잘리지 않고 예외가 발생합니다. 포화가 필요하면 ``Score.clamped``를
    사용하세요.
    """

    value: float

    MIN_SCORE = 0.0
    MAX_SCORE = 100.0

    def __post_init__(self) -> None:
        raw = self.value

        if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
            raise InvalidScoreException("점수는 숫자여야 합니다.")

        raw = float(raw)

        if math.isnan(raw) or math.isinf(raw):
            raise InvalidScoreException("점수는 유한한 숫자여야 합니다.")

        # 범위 검사는 반올림된 값 기준 (100.004 -> 100.0 허용)
        rounded = _round_half_up(raw) + 0.0

        if rounded < self.MIN_SCORE:
            raise InvalidScoreException(
                f"점수는 {self.MIN_SCORE:g} 이상이어야 합니다.", raw
            )

        if rounded > self.MAX_SCORE:
            raise InvalidScoreException(
                f"점수는 {self.MAX_SCORE:g} 이하여야 합니다.", raw
            )

        object.__setattr__(self, "value", rounded)

    @classmethod
    def zero(cls) -> "Score":
        return cls(0.0)

    @classmethod
    def clamped(cls, value: float) -> "Score":
        """범위를 벗어난 값을 [0, 100]으로 포화시켜 생성"""
        if math.isnan(value):
            raise InvalidScoreException("점수는 유한한 숫자여야 합니다.")
        return cls(min(max(float(value), cls.MIN_SCORE), cls.MAX_SCORE))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_above(self, threshold: float) -> bool:
        return self.value > threshold

    def is_below(self, threshold: float) -> bool:
        return self.value < threshold

    def add(self, amount: "float | Score") -> "Score":
        """점수 더하기 (새 Score 반환)"""
        return Score(self.value + float(amount))

    def multiply(self, factor: float) -> "Score":
        """점수 곱하기 (새 Score 반환)"""
        return Score(self.value * factor)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:.2f}"
