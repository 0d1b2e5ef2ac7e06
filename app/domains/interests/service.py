"""Interests 도메인 서비스

대화에서 추출된 키워드를 관심사 점수로 반영하고, 오래된 관심사를 정리합니다.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.context import get_request_id
from app.core.logging import get_logger
from app.core.utils.datetime import now_utc
from app.domains.interests.entities import AnalyticsRecord, Interest
from app.domains.interests.exceptions import (
    InterestUpdateConflictException,
    MissingIdentifierException,
)
from app.domains.interests.repository import (
    AnalyticsRepository,
    ChildInterestRepository,
)
from app.domains.interests.schemas import IngestionResult, PruneResult
from app.domains.interests.scoring import InterestScoringService
from app.domains.interests.values import Keyword, normalize_keywords

logger = get_logger(__name__)


class InterestIngestionService:
    """대화 키워드 -> 관심사 점수 반영 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        scoring: Optional[InterestScoringService] = None,
        max_retries: Optional[int] = None,
    ):
        self.interest_repository = ChildInterestRepository(session)
        self.analytics_repository = AnalyticsRepository(session)
        self.scoring = scoring or InterestScoringService()
        self.max_retries = max_retries or settings.interest_update_max_retries

    async def create_analytics(
        self,
        child_id: Optional[int],
        conversation_id: Optional[int],
        extracted_keywords: Optional[Iterable[Any]] = None,
        now: Optional[datetime] = None,
    ) -> IngestionResult:
        """분석 기록 저장 및 관심사 생성/수정

        1. 키워드 정규화 및 언급 횟수 집계
        2. 분석 기록 추가
        3. 키워드별로 기존 관심사가 있으면 감쇠 후 가산, 없으면 신규 생성

        Args:
            child_id: 아이 프로필 ID
            conversation_id: 대화 ID
            extracted_keywords: 추출된 원시 키워드 목록 (중복 허용)
            now: 기준 시각 (테스트용, 기본: 시도마다 현재 UTC)

        Returns:
            IngestionResult: 수정/생성된 키워드 (처음 등장한 순서)

        Raises:
            MissingIdentifierException: child_id 또는 conversation_id 누락
            InterestUpdateConflictException: 재시도 후에도 동시 수정 충돌
        """
        if child_id is None:
            raise MissingIdentifierException("child_id")
        if conversation_id is None:
            raise MissingIdentifierException("conversation_id")

        mention_counts = normalize_keywords(extracted_keywords)

        record = AnalyticsRecord.create(
            child_id=child_id,
            conversation_id=conversation_id,
            keywords=mention_counts.keys(),
            now=now,
        )
        await self.analytics_repository.create(record)

        result = IngestionResult()
        for keyword, count in mention_counts.items():
            created = await self._apply_mentions(child_id, keyword, count, now)
            if created:
                result.created_keywords.append(keyword.value)
            else:
                result.updated_keywords.append(keyword.value)

        logger.info(
            "Analytics ingested",
            extra={
                "request_id": get_request_id(),
                "child_id": child_id,
                "conversation_id": conversation_id,
                "created_count": len(result.created_keywords),
                "updated_count": len(result.updated_keywords),
            },
        )
        return result

    async def _apply_mentions(
        self,
        child_id: int,
        keyword: Keyword,
        mention_count: int,
        now: Optional[datetime],
    ) -> bool:
        """한 키워드의 언급을 관심사에 반영 (충돌 시 다시 읽고 재시도)

        Returns:
            새로 생성했으면 True, 기존 관심사를 수정했으면 False
        """
        for attempt in range(1, self.max_retries + 1):
            current = now or now_utc()
            existing = await self.interest_repository.find_by_child_and_keyword(
                child_id, keyword
            )

            try:
                if existing:
                    new_score = self.scoring.update_existing_score(
                        existing.score,
                        existing.last_updated,
                        mention_count,
                        now=current,
                    )
                    await self.interest_repository.save(
                        existing.update_score(new_score, now=current)
                    )
                    return False

                interest = Interest.create(
                    child_id=child_id,
                    keyword=keyword,
                    raw_score=self.scoring.calculate_score(mention_count),
                    now=current,
                )
                await self.interest_repository.save(interest)
                return True

            except InterestUpdateConflictException:
                if attempt >= self.max_retries:
                    logger.error(
                        "Interest update conflict retries exhausted",
                        extra={
                            "request_id": get_request_id(),
                            "child_id": child_id,
                            "keyword": keyword.value,
                            "attempts": attempt,
                        },
                    )
                    raise
                logger.warning(
                    "Retrying interest update after conflict",
                    extra={
                        "request_id": get_request_id(),
                        "child_id": child_id,
                        "keyword": keyword.value,
                        "attempt": attempt,
                    },
                )

        # max_retries >= 1 이므로 도달하지 않음
        raise InterestUpdateConflictException(
            child_id=child_id, keyword=keyword.value
        )


class InterestPruningService:
    """오래되고 점수가 낮은 관심사 정리 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = ChildInterestRepository(session)

    async def prune_old_interests(
        self,
        min_days_since_update: Optional[int] = None,
        max_score: Optional[float] = None,
    ) -> PruneResult:
        """last_updated가 min_days보다 오래되고 점수가 max_score 미만인 관심사 삭제

        Args:
            min_days_since_update: 기준 경과 일수 (기본: 설정값, 14일)
            max_score: 기준 점수 (기본: 설정값, 1.0)

        Returns:
            PruneResult: 삭제 건수와 키워드
        """
        min_days = (
            min_days_since_update
            if min_days_since_update is not None
            else settings.interest_prune_min_days
        )
        threshold = (
            max_score if max_score is not None else settings.interest_prune_max_score
        )

        deleted_count, deleted_keywords = await self.repository.delete_stale(
            min_days=min_days, max_score=threshold
        )

        logger.info(
            "Stale interests pruned",
            extra={
                "request_id": get_request_id(),
                "min_days": min_days,
                "max_score": threshold,
                "deleted_count": deleted_count,
            },
        )
        return PruneResult(
            deleted_count=deleted_count, deleted_keywords=deleted_keywords
        )


class TopInterestsService:
    """상위 관심사 조회 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = ChildInterestRepository(session)

    async def get_top_interests(
        self, child_id: int, limit: int = 10
    ) -> list[Interest]:
        """점수 상위 관심사 조회 (없으면 빈 목록)"""
        return await self.repository.find_top_by_child_id(child_id, limit)
