"""Recommendations 도메인 라우터"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_internal_api_key
from app.core.schemas import ListAPIResponse, create_list_response
from app.domains.interests.repository import ChildInterestRepository
from app.domains.recommendations.cache import get_recommendation_cache
from app.domains.recommendations.providers import create_recommendation_provider
from app.domains.recommendations.schemas import RecommendationItem
from app.domains.recommendations.service import RecommendationService
from app.domains.recommendations.user_service import (
    create_location_query,
    create_profile_query,
)

router = APIRouter()


def get_recommendation_service(
    session: AsyncSession = Depends(get_db),
) -> RecommendationService:
    """RecommendationService 의존성"""
    return RecommendationService(
        interest_query=ChildInterestRepository(session),
        provider=create_recommendation_provider(),
        profile_query=create_profile_query(),
        location_query=create_location_query(),
        cache=get_recommendation_cache(),
    )


@router.get(
    "/recommendations/{child_id}",
    response_model=ListAPIResponse[RecommendationItem],
    dependencies=[Depends(verify_internal_api_key)],
)
async def get_recommendations(
    child_id: int,
    page: int = Query(1, ge=1, description="페이지 번호"),
    page_size: int = Query(10, ge=1, le=100, description="페이지 크기"),
    category: Optional[str] = Query(None, description="카테고리 필터"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """관심사 기반 추천 콘텐츠 조회"""
    result = await service.get_recommendations(
        child_id=child_id,
        page=page,
        page_size=page_size,
        category=category or None,
    )
    return create_list_response(
        data=result.items,
        total=result.total_count,
        page=result.page,
        size=result.page_size,
        has_next=result.has_more,
        message="추천 콘텐츠를 조회했습니다.",
    )
