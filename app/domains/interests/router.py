"""Interests 도메인 라우터

대화 분석 결과 수집, 상위 관심사 조회, 관심사 정리 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_internal_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.interests.schemas import (
    AnalyticsCreate,
    IngestionResult,
    InterestResponse,
    PruneResult,
    TopInterestsResponse,
)
from app.domains.interests.service import (
    InterestIngestionService,
    InterestPruningService,
    TopInterestsService,
)

router = APIRouter()


def get_ingestion_service(
    session: AsyncSession = Depends(get_db),
) -> InterestIngestionService:
    """InterestIngestionService 의존성"""
    return InterestIngestionService(session)


def get_pruning_service(
    session: AsyncSession = Depends(get_db),
) -> InterestPruningService:
    """InterestPruningService 의존성"""
    return InterestPruningService(session)


def get_top_interests_service(
    session: AsyncSession = Depends(get_db),
) -> TopInterestsService:
    """TopInterestsService 의존성"""
    return TopInterestsService(session)


@router.post(
    "/analytics",
    response_model=APIResponse[IngestionResult],
    status_code=201,
    dependencies=[Depends(verify_internal_api_key)],
)
async def create_analytics(
    request: AnalyticsCreate,
    service: InterestIngestionService = Depends(get_ingestion_service),
):
    """대화 키워드 분석 결과 저장 및 관심사 반영"""
    result = await service.create_analytics(
        child_id=request.child_id,
        conversation_id=request.conversation_id,
        extracted_keywords=request.extracted_keywords,
    )
    return create_response(
        data=result,
        message="분석 결과가 저장되었습니다.",
    )


@router.get(
    "/interests/{child_id}/top",
    response_model=APIResponse[TopInterestsResponse],
    dependencies=[Depends(verify_internal_api_key)],
)
async def get_top_interests(
    child_id: int,
    limit: int = Query(10, ge=1, le=100, description="조회할 관심사 수"),
    service: TopInterestsService = Depends(get_top_interests_service),
):
    """상위 관심사 조회"""
    interests = await service.get_top_interests(child_id, limit=limit)
    return create_response(
        data=TopInterestsResponse(
            child_id=child_id,
            interests=[
                InterestResponse(
                    keyword=interest.keyword.value,
                    raw_score=interest.score.value,
                    last_updated=interest.last_updated,
                )
                for interest in interests
            ],
        ),
        message="관심사를 조회했습니다.",
    )


@router.delete(
    "/interests/prune",
    response_model=APIResponse[PruneResult],
    dependencies=[Depends(verify_internal_api_key)],
)
async def prune_interests(
    min_days: int | None = Query(
        None, ge=0, description="마지막 업데이트 후 경과 일수 기준"
    ),
    max_score: float | None = Query(
        None, ge=0, le=100, description="이 점수 미만만 삭제"
    ),
    service: InterestPruningService = Depends(get_pruning_service),
):
    """오래되고 점수가 낮은 관심사 정리"""
    result = await service.prune_old_interests(
        min_days_since_update=min_days,
        max_score=max_score,
    )
    return create_response(
        data=result,
        message=f"{result.deleted_count}개의 관심사를 정리했습니다.",
    )
