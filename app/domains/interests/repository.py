"""Interests 도메인 리포지토리

ORM 모델과 도메인 엔티티(Interest, AnalyticsRecord) 사이를 변환합니다.
관심사 수정은 version 컬럼을 이용한 낙관적 동시성 제어로 처리합니다.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.utils.datetime import days_ago
from app.domains.interests.entities import AnalyticsRecord, Interest
from app.domains.interests.exceptions import InterestUpdateConflictException
from app.domains.interests.models import Analytics, ChildInterest
from app.domains.interests.values import Keyword, Score

logger = get_logger(__name__)


def _to_decimal(score: Score) -> Decimal:
    return Decimal(f"{score.value:.2f}")


def _to_interest(row: ChildInterest) -> Interest:
    return Interest(
        id=row.id,
        child_id=row.child_id,
        keyword=Keyword(row.keyword),
        score=Score(row.raw_score),
        last_updated=row.last_updated,
        created_at=row.created_at,
        version=row.version,
    )


def _to_record(row: Analytics) -> AnalyticsRecord:
    return AnalyticsRecord(
        id=row.id,
        child_id=row.child_id,
        conversation_id=row.conversation_id,
        keywords=tuple(row.extracted_keywords or ()),
        created_at=row.created_at,
    )


class ChildInterestRepository:
    """아이 관심사 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_child_and_keyword(
        self, child_id: int, keyword: Keyword | str
    ) -> Optional[Interest]:
        """(아이, 키워드)로 관심사 조회 (키워드 대소문자 무시)

        재시도 시 최신 값을 읽도록 identity map을 덮어씁니다.
        """
        normalized = Keyword.create(keyword).normalized
        query = (
            select(ChildInterest)
            .where(
                ChildInterest.child_id == child_id,
                func.lower(ChildInterest.keyword) == normalized,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        row: Optional[ChildInterest] = result.scalar_one_or_none()
        return _to_interest(row) if row else None

    async def find_top_by_child_id(
        self, child_id: int, limit: int = 10
    ) -> list[Interest]:
        """점수 상위 N개 관심사 조회

        Args:
            child_id: 아이 프로필 ID
            limit: 최대 개수

        Returns:
            점수 내림차순, 동점이면 최근 업데이트 순
        """
        query = (
            select(ChildInterest)
            .where(ChildInterest.child_id == child_id)
            .order_by(
                ChildInterest.raw_score.desc(),
                ChildInterest.last_updated.desc(),
                ChildInterest.id,
            )
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return [_to_interest(row) for row in result.scalars().all()]

    async def save(self, interest: Interest) -> Interest:
        """관심사 생성 또는 버전 검사 후 수정

        Returns:
            저장된 관심사 (id, version 반영)

        Raises:
            InterestUpdateConflictException: 다른 요청이 먼저 생성/수정한 경우
        """
        if interest.is_persisted:
            return await self._update(interest)
        return await self._insert(interest)

    async def bulk_save(self, interests: Sequence[Interest]) -> list[Interest]:
        """여러 관심사를 하나의 SAVEPOINT 안에서 저장 (전부 성공 또는 전부 취소)"""
        saved: list[Interest] = []
        async with self.session.begin_nested():
            for interest in interests:
                saved.append(await self.save(interest))
        return saved

    async def delete_stale(
        self,
        min_days: int,
        max_score: float,
        now: Optional[datetime] = None,
    ) -> tuple[int, list[str]]:
        """오래되고 점수가 낮은 관심사 일괄 삭제

        last_updated < now - min_days AND raw_score < max_score

        Returns:
            (삭제 건수, 삭제된 키워드 목록)
        """
        cutoff = days_ago(min_days, now)
        stmt = (
            delete(ChildInterest)
            .where(
                ChildInterest.last_updated < cutoff,
                ChildInterest.raw_score < Decimal(str(max_score)),
            )
            .returning(ChildInterest.keyword)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        keywords = list(result.scalars().all())
        return len(keywords), keywords

    async def _insert(self, interest: Interest) -> Interest:
        row = ChildInterest(
            child_id=interest.child_id,
            keyword=interest.keyword.value,
            raw_score=_to_decimal(interest.score),
            version=0,
            last_updated=interest.last_updated,
            created_at=interest.created_at,
        )
        try:
            # 유니크 인덱스 충돌 시 바깥 트랜잭션은 유지
            async with self.session.begin_nested():
                self.session.add(row)
                await self.session.flush()
        except IntegrityError as e:
            logger.info(
                "Concurrent interest create detected",
                extra={
                    "child_id": interest.child_id,
                    "keyword": interest.keyword.value,
                },
            )
            raise InterestUpdateConflictException(
                child_id=interest.child_id, keyword=interest.keyword.value
            ) from e

        return replace(interest, id=row.id, version=0)

    async def _update(self, interest: Interest) -> Interest:
        stmt = (
            update(ChildInterest)
            .where(
                ChildInterest.id == interest.id,
                ChildInterest.version == interest.version,
            )
            .values(
                raw_score=_to_decimal(interest.score),
                last_updated=interest.last_updated,
                version=ChildInterest.version + 1,
            )
            .returning(ChildInterest.version)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        new_version: Optional[int] = result.scalar_one_or_none()

        if new_version is None:
            logger.info(
                "Interest version conflict",
                extra={
                    "interest_id": interest.id,
                    "expected_version": interest.version,
                },
            )
            raise InterestUpdateConflictException(
                child_id=interest.child_id, keyword=interest.keyword.value
            )

        return replace(interest, version=new_version)


class AnalyticsRepository:
    """분석 기록 리포지토리 (추가 전용)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: AnalyticsRecord) -> AnalyticsRecord:
        """분석 기록 저장"""
        row = Analytics(
            child_id=record.child_id,
            conversation_id=record.conversation_id,
            extracted_keywords=list(record.keywords),
        )
        if record.created_at is not None:
            row.created_at = record.created_at

        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return _to_record(row)

    async def get_by_id(self, record_id: int) -> Optional[AnalyticsRecord]:
        query = select(Analytics).where(Analytics.id == record_id)
        result = await self.session.execute(query)
        row: Optional[Analytics] = result.scalar_one_or_none()
        return _to_record(row) if row else None

    async def list_by_child_id(
        self, child_id: int, skip: int = 0, limit: int = 20
    ) -> list[AnalyticsRecord]:
        """아이별 분석 기록 목록 (최신순)"""
        query = (
            select(Analytics)
            .where(Analytics.child_id == child_id)
            .order_by(Analytics.created_at.desc(), Analytics.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [_to_record(row) for row in result.scalars().all()]

    async def get_by_conversation_id(
        self, conversation_id: int
    ) -> list[AnalyticsRecord]:
        """대화 ID로 분석 기록 조회 (생성순)"""
        query = (
            select(Analytics)
            .where(Analytics.conversation_id == conversation_id)
            .order_by(Analytics.created_at, Analytics.id)
        )
        result = await self.session.execute(query)
        return [_to_record(row) for row in result.scalars().all()]
