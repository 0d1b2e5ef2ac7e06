"""추천 서비스가 의존하는 외부 포트 정의

구현체는 providers.py, user_service.py, cache.py,
interests.repository 에 있으며 테스트에서는 Mock으로 대체합니다.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from app.domains.interests.entities import Interest
from app.domains.recommendations.schemas import (
    ProfileInfo,
    RecommendationSearchResult,
    UserLocation,
)


@runtime_checkable
class InterestQuery(Protocol):
    """상위 관심사 조회 포트"""

    async def find_top_by_child_id(
        self, child_id: int, limit: int = 10
    ) -> list[Interest]: ...


@runtime_checkable
class RecommendationProvider(Protocol):
    """외부 추천 콘텐츠 제공자

    어떤 실패에도 예외 대신 빈 결과를 반환해야 합니다.
    """

    async def search(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> RecommendationSearchResult: ...


@runtime_checkable
class ProfileQuery(Protocol):
    """프로필 조회 포트 (없으면 None)"""

    async def find_by_id(self, profile_id: int) -> Optional[ProfileInfo]: ...


@runtime_checkable
class UserLocationQuery(Protocol):
    """사용자 위치 조회 포트 (없으면 None)"""

    async def find_location_by_user_id(
        self, user_id: int
    ) -> Optional[UserLocation]: ...


@runtime_checkable
class RecommendationCache(Protocol):
    """추천 결과 캐시 포트

    조회 실패는 캐시 미스와 동일하게 취급되고, 저장/삭제 실패는 무시됩니다.
    """

    async def get(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> Optional[RecommendationSearchResult]: ...

    async def set(
        self,
        keywords: Sequence[str],
        result: RecommendationSearchResult,
        category: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> None: ...

    async def invalidate(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> None: ...
