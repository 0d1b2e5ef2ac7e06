"""Recommendations 도메인 스키마 정의"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecommendationItem(BaseModel):
    """추천 콘텐츠 (저장하지 않는 전달용 객체)

    distance와 relevant_keywords는 순위 계산 후에 채워집니다.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    category: str = ""
    location: Optional[str] = None
    start_date: Optional[str] = Field(None, description="시작일 (YYYY-MM-DD)")
    end_date: Optional[str] = Field(None, description="종료일 (YYYY-MM-DD)")
    image_url: Optional[str] = None
    link: Optional[str] = None
    map_x: Optional[float] = Field(None, description="경도 (longitude)")
    map_y: Optional[float] = Field(None, description="위도 (latitude)")
    distance: Optional[float] = Field(
        None, description="사용자로부터의 거리 (km)"
    )
    relevant_keywords: list[str] = Field(
        default_factory=list, description="콘텐츠에 등장한 관심 키워드"
    )


class RecommendationSearchResult(BaseModel):
    """추천 제공자 검색 결과"""

    items: list[RecommendationItem] = Field(default_factory=list)
    total_count: int = 0

    @classmethod
    def empty(cls) -> "RecommendationSearchResult":
        return cls(items=[], total_count=0)


class ProfileInfo(BaseModel):
    """User Service 프로필 정보"""

    profile_id: int
    user_id: int
    name: Optional[str] = None
    profile_type: Optional[Literal["parent", "child"]] = None


class UserLocation(BaseModel):
    """User Service 사용자 위치 정보"""

    user_id: Optional[int] = None
    latitude: float
    longitude: float
    address: Optional[str] = None


class RecommendationPage(BaseModel):
    """추천 결과 한 페이지"""

    items: list[RecommendationItem] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10
    has_more: bool = False
    keywords: list[str] = Field(
        default_factory=list, description="검색에 사용된 관심 키워드"
    )
