"""Recommendations 도메인 모듈

아이의 상위 관심사로 외부 콘텐츠를 검색하고 순위를 매깁니다.

구조:
    - schemas.py: 추천 항목/페이지, 프로필/위치 스키마
    - ports.py: 외부 의존 포트 (Protocol)
    - matching.py: 키워드 연관성 판단
    - distance.py: Haversine 거리 계산 및 정렬
    - providers.py: 한국관광공사 API / 고정 카탈로그 제공자
    - user_service.py: User Service 프로필/위치 조회
    - cache.py: Redis 추천 결과 캐시
    - service.py: 추천 서비스
    - router.py: API 엔드포인트
"""

from app.domains.recommendations.distance import (
    LocationDistanceService,
    LocationPoint,
)
from app.domains.recommendations.matching import KeywordMatchingService
from app.domains.recommendations.router import router
from app.domains.recommendations.schemas import (
    RecommendationItem,
    RecommendationPage,
    RecommendationSearchResult,
)
from app.domains.recommendations.service import RecommendationService

__all__ = [
    "KeywordMatchingService",
    "LocationDistanceService",
    "LocationPoint",
    "RecommendationItem",
    "RecommendationPage",
    "RecommendationSearchResult",
    "RecommendationService",
    "router",
]
