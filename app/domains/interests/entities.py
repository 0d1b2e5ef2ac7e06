"""Interests 도메인 엔티티

ORM 모델과 분리된 불변 도메인 객체입니다. 변경은 항상 새 인스턴스를
반환하므로 동시에 읽는 쪽이 반쯤 수정된 상태를 보지 않습니다.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Optional

from app.core.utils.datetime import ensure_utc, now_utc
from app.domains.interests.exceptions import MissingIdentifierException
from app.domains.interests.values import Keyword, Score, normalize_keywords


def _require_id(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise MissingIdentifierException(field_name)
    return value


@dataclass(frozen=True)
class Interest:
    """아이의 (키워드, 관심도) 한 쌍

    Attributes:
        child_id: 아이 프로필 ID
        keyword: 관심사 키워드
        score: 현재 관심도 점수
        last_updated: 마지막 점수 변경 시각
        created_at: 최초 생성 시각
        id: 저장 후 부여되는 ID (저장 전 None)
        version: 낙관적 동시성 제어용 버전
    """

    child_id: int
    keyword: Keyword
    score: Score
    last_updated: datetime
    created_at: datetime
    id: Optional[int] = None
    version: int = 0

    @classmethod
    def create(
        cls,
        child_id: int,
        keyword: Keyword | str,
        raw_score: Score | float,
        now: Optional[datetime] = None,
    ) -> "Interest":
        """신규 관심사 생성

        Raises:
            MissingIdentifierException: child_id가 없는 경우
            InvalidKeywordException: 키워드가 유효하지 않은 경우
            InvalidScoreException: 점수가 범위를 벗어난 경우
        """
        timestamp = ensure_utc(now) if now is not None else now_utc()
        score = raw_score if isinstance(raw_score, Score) else Score(raw_score)
        return cls(
            child_id=_require_id(child_id, "child_id"),
            keyword=Keyword.create(keyword),
            score=score,
            last_updated=timestamp,
            created_at=timestamp,
        )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def update_score(
        self, new_score: Score | float, now: Optional[datetime] = None
    ) -> "Interest":
        """점수를 교체하고 last_updated를 갱신한 새 인스턴스 반환

        id, created_at, version은 그대로 유지합니다.
        """
        score = new_score if isinstance(new_score, Score) else Score(new_score)
        timestamp = ensure_utc(now) if now is not None else now_utc()
        return replace(self, score=score, last_updated=timestamp)

    def has_score_above(self, threshold: float) -> bool:
        """점수가 임계값 이상인지 확인"""
        return self.score.value >= threshold


@dataclass(frozen=True)
class AnalyticsRecord:
    """대화 단위 키워드 추출 기록 (추가 전용)"""

    child_id: int
    conversation_id: int
    keywords: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def create(
        cls,
        child_id: int,
        conversation_id: int,
        keywords: Iterable[Keyword | str] = (),
        now: Optional[datetime] = None,
    ) -> "AnalyticsRecord":
        """분석 기록 생성

        키워드는 정규화 후 중복 제거되며 처음 등장한 순서를 유지합니다.

        Raises:
            MissingIdentifierException: child_id 또는 conversation_id가 없는 경우
        """
        unique = normalize_keywords(keywords)
        return cls(
            child_id=_require_id(child_id, "child_id"),
            conversation_id=_require_id(conversation_id, "conversation_id"),
            keywords=tuple(kw.value for kw in unique),
            created_at=ensure_utc(now) if now is not None else now_utc(),
        )
