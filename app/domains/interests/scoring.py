"""관심도 점수 계산

I/O 없는 순수 계산 모듈입니다.

공식:
    - 신규 점수: BASE_SCORE + min(언급 횟수 * 0.5, 3.0)  -> [3.0, 6.0]
    - 감쇠: 현재 점수 * 0.5 ** (경과 일수 / 7)  (반감기 7일)
    - 재언급: 감쇠된 기존 점수 + 신규 점수
"""

from datetime import datetime
from typing import Optional

from app.core.utils.datetime import days_between, ensure_utc, now_utc
from app.domains.interests.exceptions import (
    FutureTimestampException,
    InvalidMentionCountException,
)
from app.domains.interests.values import Score


class InterestScoringService:
    """관심도 점수 계산 서비스

    Example::

        scoring = InterestScoringService()
        scoring.calculate_score(1)        # Score(3.5)
        scoring.apply_decay(Score(10.0), now - timedelta(days=7), now)  # Score(5.0)
    """

    BASE_SCORE = 3.0
    MENTION_BONUS_PER_COUNT = 0.5
    MENTION_BONUS_MAX = 3.0
    HALF_LIFE_DAYS = 7
    SIGNIFICANCE_THRESHOLD = 3.0

    def calculate_score(self, mention_count: int) -> Score:
        """언급 횟수로 신규 관심도 점수 계산

        Args:
            mention_count: 이번 대화에서의 언급 횟수 (0 이상 정수)

        Returns:
            3.0 ~ 6.0 범위의 Score

        Raises:
            InvalidMentionCountException: 음수이거나 정수가 아닌 경우
        """
        if (
            isinstance(mention_count, bool)
            or not isinstance(mention_count, int)
            or mention_count < 0
        ):
            raise InvalidMentionCountException(mention_count)

        bonus = min(
            mention_count * self.MENTION_BONUS_PER_COUNT, self.MENTION_BONUS_MAX
        )
        return Score(self.BASE_SCORE + bonus)

    def apply_decay(
        self,
        current_score: Score | float,
        last_updated: datetime,
        now: Optional[datetime] = None,
    ) -> Score:
        """경과 시간에 따른 지수 감쇠 적용 (반감기 7일)

        Args:
            current_score: 현재 점수
            last_updated: 마지막 업데이트 시각 (naive면 UTC로 간주)
            now: 기준 시각 (기본: 현재 UTC)

        Returns:
            감쇠된 Score

        Raises:
            FutureTimestampException: last_updated가 now보다 미래인 경우
            InvalidScoreException: current_score가 범위를 벗어난 경우
        """
        score = (
            current_score
            if isinstance(current_score, Score)
            else Score(current_score)
        )
        reference = ensure_utc(now) if now is not None else now_utc()
        updated_at = ensure_utc(last_updated)

        if updated_at > reference:
            raise FutureTimestampException(last_updated=updated_at, now=reference)

        days_elapsed = days_between(updated_at, reference)
        return score.multiply(0.5 ** (days_elapsed / self.HALF_LIFE_DAYS))

    def update_existing_score(
        self,
        current_score: Score | float,
        last_updated: datetime,
        new_mention_count: int,
        now: Optional[datetime] = None,
    ) -> Score:
        """기존 점수 감쇠 후 새 언급 점수를 더함

        감쇠가 항상 먼저 적용되므로, 생성 직후 재언급되면 기존 값이
        거의 그대로 유지되고 오랜만에 언급되면 신규 점수에 가까워집니다.
        """
        decayed = self.apply_decay(current_score, last_updated, now)
        return decayed.add(self.calculate_score(new_mention_count))

    def is_significant(
        self,
        score: Score | float,
        threshold: float = SIGNIFICANCE_THRESHOLD,
    ) -> bool:
        """점수가 임계값 이상인지 확인"""
        return float(score) >= threshold
