"""Interests 리포지토리 통합 테스트 (PostgreSQL)"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from app.core.utils.datetime import now_utc
from app.domains.interests.entities import AnalyticsRecord, Interest
from app.domains.interests.exceptions import InterestUpdateConflictException
from app.domains.interests.models import ChildInterest
from app.domains.interests.repository import (
    AnalyticsRepository,
    ChildInterestRepository,
)
from app.domains.interests.values import Score


@pytest.fixture
def interest_repository(db_session):
    return ChildInterestRepository(db_session)


@pytest.fixture
def analytics_repository(db_session):
    return AnalyticsRepository(db_session)


class TestChildInterestRepository:
    """관심사 저장/조회 테스트"""

    @pytest.mark.asyncio
    async def test_insert_and_find_case_insensitive(
        self, interest_repository, child_id_factory
    ):
        """저장 후 대소문자 무시 조회"""
        # Given
        child_id = child_id_factory()
        interest = Interest.create(child_id=child_id, keyword="Dinosaur", raw_score=3.5)

        # When
        saved = await interest_repository.save(interest)
        found = await interest_repository.find_by_child_and_keyword(
            child_id, "DINOSAUR"
        )

        # Then
        assert saved.id is not None
        assert saved.version == 0
        assert found is not None
        assert found.id == saved.id
        assert found.keyword.value == "Dinosaur"
        assert found.score == Score(3.5)

    @pytest.mark.asyncio
    async def test_duplicate_keyword_create_conflicts(
        self, db_session, interest_repository, child_id_factory
    ):
        """같은 (아이, 키워드) 중복 생성은 충돌, 바깥 트랜잭션은 유지"""
        child_id = child_id_factory()
        await interest_repository.save(
            Interest.create(child_id=child_id, keyword="공룡", raw_score=3.5)
        )

        with pytest.raises(InterestUpdateConflictException):
            await interest_repository.save(
                Interest.create(child_id=child_id, keyword="공룡 ", raw_score=4.0)
            )

        # SAVEPOINT만 롤백되어 이후 작업 가능
        found = await interest_repository.find_by_child_and_keyword(child_id, "공룡")
        assert found.score == Score(3.5)

    @pytest.mark.asyncio
    async def test_optimistic_update_bumps_version(
        self, interest_repository, child_id_factory
    ):
        """버전이 맞으면 수정 후 버전 증가"""
        child_id = child_id_factory()
        saved = await interest_repository.save(
            Interest.create(child_id=child_id, keyword="로봇", raw_score=3.5)
        )

        updated = await interest_repository.save(saved.update_score(7.0))
        found = await interest_repository.find_by_child_and_keyword(child_id, "로봇")

        assert updated.version == 1
        assert found.version == 1
        assert found.score == Score(7.0)

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(
        self, interest_repository, child_id_factory
    ):
        """오래된 버전으로 수정하면 충돌 (먼저 쓴 값 유지)"""
        child_id = child_id_factory()
        saved = await interest_repository.save(
            Interest.create(child_id=child_id, keyword="우주", raw_score=3.5)
        )
        await interest_repository.save(saved.update_score(5.0))

        with pytest.raises(InterestUpdateConflictException):
            await interest_repository.save(saved.update_score(9.0))

        found = await interest_repository.find_by_child_and_keyword(child_id, "우주")
        assert found.score == Score(5.0)

    @pytest.mark.asyncio
    async def test_find_top_orders_by_score_then_recency(
        self, interest_repository, child_id_factory
    ):
        """점수 내림차순, 동점이면 최근 업데이트 우선"""
        child_id, other_child = child_id_factory(2)
        now = now_utc()
        for keyword, score, age in [
            ("공룡", 5.0, 3),
            ("로봇", 9.0, 1),
            ("우주", 5.0, 1),
            ("미술", 3.0, 0),
        ]:
            await interest_repository.save(
                Interest.create(
                    child_id=child_id,
                    keyword=keyword,
                    raw_score=score,
                    now=now - timedelta(days=age),
                )
            )
        await interest_repository.save(
            Interest.create(child_id=other_child, keyword="음악", raw_score=50.0)
        )

        top = await interest_repository.find_top_by_child_id(child_id, limit=3)

        assert [i.keyword.value for i in top] == ["로봇", "우주", "공룡"]
        assert await interest_repository.find_top_by_child_id(child_id_factory()) == []

    @pytest.mark.asyncio
    async def test_bulk_save_is_all_or_nothing(
        self, db_session, interest_repository, child_id_factory
    ):
        """일괄 저장 중 충돌하면 전부 취소"""
        child_id = child_id_factory()
        await interest_repository.save(
            Interest.create(child_id=child_id, keyword="공룡", raw_score=3.0)
        )

        with pytest.raises(InterestUpdateConflictException):
            await interest_repository.bulk_save(
                [
                    Interest.create(child_id=child_id, keyword="로봇", raw_score=3.0),
                    Interest.create(child_id=child_id, keyword="공룡", raw_score=3.0),
                ]
            )

        rows = (
            await db_session.execute(
                select(ChildInterest.keyword).where(ChildInterest.child_id == child_id)
            )
        ).scalars().all()
        assert rows == ["공룡"]

    @pytest.mark.asyncio
    async def test_bulk_save(self, interest_repository, child_id_factory):
        """일괄 저장 성공"""
        child_id = child_id_factory()

        saved = await interest_repository.bulk_save(
            [
                Interest.create(child_id=child_id, keyword="로봇", raw_score=3.0),
                Interest.create(child_id=child_id, keyword="우주", raw_score=4.0),
            ]
        )

        assert all(interest.is_persisted for interest in saved)
        assert len(await interest_repository.find_top_by_child_id(child_id)) == 2

    @pytest.mark.asyncio
    async def test_delete_stale(self, interest_repository, child_id_factory):
        """오래되고 점수가 낮은 관심사만 삭제"""
        child_id = child_id_factory()
        now = now_utc()
        for keyword, score, age in [
            ("오래되고낮음", 0.5, 20),
            ("오래되고높음", 5.0, 20),
            ("최근이고낮음", 0.5, 1),
            ("경계점수", 1.0, 20),
        ]:
            await interest_repository.save(
                Interest.create(
                    child_id=child_id,
                    keyword=keyword,
                    raw_score=score,
                    now=now - timedelta(days=age),
                )
            )

        count, keywords = await interest_repository.delete_stale(
            min_days=14, max_score=1.0, now=now
        )

        assert count == 1
        assert keywords == ["오래되고낮음"]
        remaining = await interest_repository.find_top_by_child_id(child_id)
        assert {i.keyword.value for i in remaining} == {
            "오래되고높음",
            "최근이고낮음",
            "경계점수",
        }


class TestAnalyticsRepository:
    """분석 기록 테스트"""

    @pytest.mark.asyncio
    async def test_create_and_query(self, analytics_repository, child_id_factory):
        """생성 후 ID/아이/대화별 조회"""
        child_id = child_id_factory()
        first = await analytics_repository.create(
            AnalyticsRecord.create(
                child_id=child_id, conversation_id=100, keywords=["공룡", "공룡", "로봇"]
            )
        )
        await analytics_repository.create(
            AnalyticsRecord.create(child_id=child_id, conversation_id=101)
        )

        assert first.id is not None
        assert first.keywords == ("공룡", "로봇")
        assert (await analytics_repository.get_by_id(first.id)).conversation_id == 100
        assert await analytics_repository.get_by_id(-1) is None
        assert len(await analytics_repository.list_by_child_id(child_id)) == 2
        assert len(await analytics_repository.list_by_child_id(child_id, limit=1)) == 1
        by_conversation = await analytics_repository.get_by_conversation_id(100)
        assert [r.id for r in by_conversation] == [first.id]
