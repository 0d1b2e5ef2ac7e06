"""Recommendations 도메인 서비스

아이의 상위 관심사로 외부 콘텐츠를 검색하고, 사용자 위치가 있으면
거리순으로 정렬한 뒤 관련 키워드를 표시하고 페이지로 잘라 반환합니다.
"""

from typing import Optional, Sequence

from app.core.config import settings
from app.core.context import get_request_id
from app.core.exceptions import ValidationException
from app.core.logging import get_logger
from app.core.utils.pagination import paginate
from app.domains.recommendations.distance import (
    LocationDistanceService,
    LocationPoint,
)
from app.domains.recommendations.matching import KeywordMatchingService
from app.domains.recommendations.ports import (
    InterestQuery,
    ProfileQuery,
    RecommendationCache,
    RecommendationProvider,
    UserLocationQuery,
)
from app.domains.recommendations.schemas import (
    RecommendationItem,
    RecommendationPage,
    RecommendationSearchResult,
    UserLocation,
)

logger = get_logger(__name__)


class RecommendationService:
    """관심사 기반 추천 서비스"""

    def __init__(
        self,
        interest_query: InterestQuery,
        provider: RecommendationProvider,
        profile_query: Optional[ProfileQuery] = None,
        location_query: Optional[UserLocationQuery] = None,
        cache: Optional[RecommendationCache] = None,
        matcher: Optional[KeywordMatchingService] = None,
        distance_service: Optional[LocationDistanceService] = None,
        top_k: Optional[int] = None,
        cache_ttl: Optional[int] = None,
    ):
        self.interest_query = interest_query
        self.provider = provider
        self.profile_query = profile_query
        self.location_query = location_query
        self.cache = cache
        self.matcher = matcher or KeywordMatchingService()
        self.distance_service = distance_service or LocationDistanceService()
        self.top_k = top_k or settings.recommendation_top_k
        self.cache_ttl = cache_ttl or settings.recommendation_cache_ttl_seconds

    async def get_recommendations(
        self,
        child_id: int,
        page: int = 1,
        page_size: int = 10,
        category: Optional[str] = None,
    ) -> RecommendationPage:
        """추천 콘텐츠 한 페이지 조회

        관심사가 없으면 외부 호출 없이 빈 페이지를 반환합니다.
        제공자/위치 조회 실패는 빈 결과 또는 거리 정렬 생략으로 처리됩니다.

        Args:
            child_id: 아이 프로필 ID
            page: 페이지 번호 (1 이상)
            page_size: 페이지 크기 (1 이상)
            category: 카테고리 필터

        Returns:
            RecommendationPage

        Raises:
            ValidationException: page 또는 page_size가 1 미만인 경우
        """
        if page < 1 or page_size < 1:
            raise ValidationException(
                message="페이지 번호와 페이지 크기는 1 이상이어야 합니다.",
                detail={"page": page, "page_size": page_size},
            )

        interests = await self.interest_query.find_top_by_child_id(
            child_id, limit=self.top_k
        )
        if not interests:
            logger.info(
                "No interests found, returning empty recommendations",
                extra={"request_id": get_request_id(), "child_id": child_id},
            )
            return RecommendationPage(page=page, page_size=page_size)

        keywords = [interest.keyword.value for interest in interests]

        location = await self._resolve_location(child_id)
        result = await self._search(keywords, category)

        ranked: list[RecommendationItem] = list(result.items)
        if location is not None:
            ranked = self.distance_service.add_distance_and_sort(
                ranked,
                LocationPoint(
                    latitude=location.latitude, longitude=location.longitude
                ),
            )

        annotated = [
            item.model_copy(
                update={
                    "relevant_keywords": self.matcher.find_relevant_keywords(
                        item, keywords
                    )
                }
            )
            for item in ranked
        ]

        page_slice = paginate(annotated, page, page_size)

        logger.info(
            "Recommendations served",
            extra={
                "request_id": get_request_id(),
                "child_id": child_id,
                "keywords": keywords,
                "total": page_slice.total,
                "distance_ranked": location is not None,
            },
        )
        return RecommendationPage(
            items=page_slice.items,
            total_count=page_slice.total,
            page=page_slice.page,
            page_size=page_slice.size,
            has_more=page_slice.has_more,
            keywords=keywords,
        )

    async def _resolve_location(self, child_id: int) -> Optional[UserLocation]:
        """프로필 -> 사용자 위치 순으로 조회 (실패 시 None)"""
        if self.profile_query is None or self.location_query is None:
            return None

        try:
            profile = await self.profile_query.find_by_id(child_id)
            if profile is None:
                return None
            return await self.location_query.find_location_by_user_id(
                profile.user_id
            )
        except Exception as e:
            logger.warning(
                f"User location lookup failed, skipping distance ranking: {e}",
                extra={"request_id": get_request_id(), "child_id": child_id},
            )
            return None

    async def _search(
        self, keywords: Sequence[str], category: Optional[str]
    ) -> RecommendationSearchResult:
        """캐시 조회 후 미스면 제공자 검색 (실패 시 빈 결과)"""
        if self.cache is not None:
            cached = await self.cache.get(keywords, category)
            if cached is not None:
                return cached

        try:
            result = await self.provider.search(keywords, category)
        except Exception as e:
            logger.error(
                f"Recommendation provider failed: {e}",
                extra={"request_id": get_request_id(), "keywords": list(keywords)},
            )
            return RecommendationSearchResult.empty()

        if self.cache is not None and result.items:
            await self.cache.set(keywords, result, category, ttl=self.cache_ttl)

        return result
