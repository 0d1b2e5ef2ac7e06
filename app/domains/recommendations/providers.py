"""추천 콘텐츠 제공자 구현

- KoreaTourismProvider: 한국관광공사 Tour API (KorService2)
- StaticRecommendationProvider: 개발/테스트용 고정 카탈로그
"""

from typing import Any, Optional, Sequence

import httpx

from app.core.config import Settings, settings
from app.core.logging import get_logger
from app.core.utils.datetime import format_compact_date
from app.domains.recommendations.matching import KeywordMatchingService
from app.domains.recommendations.ports import RecommendationProvider
from app.domains.recommendations.schemas import (
    RecommendationItem,
    RecommendationSearchResult,
)

logger = get_logger(__name__)

# 관광타입 ID -> 카테고리
CONTENT_TYPE_CATEGORIES: dict[int, str] = {
    12: "관광지",
    14: "문화시설",
    15: "축제",
    25: "여행코스",
    28: "레포츠",
    32: "숙박",
    38: "쇼핑",
    39: "음식점",
}
DEFAULT_CATEGORY = "관광지"

DETAIL_LINK_TEMPLATE = (
    "https://korean.visitkorea.or.kr/detail/ms_detail.do?cotid={content_id}"
)
SUCCESS_RESULT_CODE = "0000"


def map_content_type_to_category(content_type_id: Any) -> str:
    """관광타입 ID를 카테고리명으로 변환 (알 수 없으면 관광지)"""
    try:
        return CONTENT_TYPE_CATEGORIES.get(int(content_type_id), DEFAULT_CATEGORY)
    except (TypeError, ValueError):
        return DEFAULT_CATEGORY


def _to_coordinate(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # 좌표 미등록 항목은 0으로 내려옴
    return number or None


class KoreaTourismProvider:
    """한국관광공사 Tour API 키워드 검색 제공자

    API 문서: https://api.visitkorea.or.kr/#/useKoreaGuide
    """

    SEARCH_PATH = "/searchKeyword2"
    PAGE_SIZE = 50

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

        if not api_key:
            logger.warning("Korea Tour API key is not configured")

    async def search(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> RecommendationSearchResult:
        """키워드별로 검색한 결과를 병합 (id 기준 중복 제거, 키워드 순서 유지)

        카테고리 필터는 검색 후에 적용합니다. 실패 시 빈 결과를 반환합니다.
        """
        try:
            merged: list[RecommendationItem] = []
            seen_ids: set[str] = set()

            for keyword in keywords:
                for item in await self._search_by_keyword(keyword):
                    if item.id in seen_ids:
                        continue
                    seen_ids.add(item.id)
                    merged.append(item)

            if category:
                merged = [item for item in merged if item.category == category]

            logger.info(
                f"Korea Tour API search complete: keywords={list(keywords)}, "
                f"category={category or 'all'}, items={len(merged)}"
            )
            return RecommendationSearchResult(items=merged, total_count=len(merged))

        except Exception as e:
            logger.error(f"Korea Tour API search failed: {e}")
            return RecommendationSearchResult.empty()

    async def _search_by_keyword(self, keyword: str) -> list[RecommendationItem]:
        params = {
            "serviceKey": self.api_key,
            "numOfRows": str(self.PAGE_SIZE),
            "pageNo": "1",
            "MobileOS": "ETC",
            "MobileApp": "PAI",
            "_type": "json",
            "arrange": "C",  # 수정일순
            "keyword": keyword,
        }

        try:
            response = await self._get(f"{self.base_url}{self.SEARCH_PATH}", params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Korea Tour API HTTP error for {keyword!r}: "
                f"{e.response.status_code}"
            )
            return []
        except httpx.TimeoutException:
            logger.error(f"Korea Tour API timeout for {keyword!r}")
            return []
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Korea Tour API request failed for {keyword!r}: {e}")
            return []

        return self._parse_items(keyword, data)

    async def _get(self, url: str, params: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, params=params)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, params=params)

    def _parse_items(self, keyword: str, data: Any) -> list[RecommendationItem]:
        response = data.get("response", {}) if isinstance(data, dict) else {}
        header = response.get("header") or {}
        body = response.get("body") or {}

        if header.get("resultCode") != SUCCESS_RESULT_CODE:
            logger.warning(
                f"Korea Tour API returned {header.get('resultCode')} "
                f"for {keyword!r}: {header.get('resultMsg')}"
            )
            return []

        # 결과가 없으면 items가 빈 문자열로 내려옴
        items_node = body.get("items")
        raw_items = items_node.get("item") if isinstance(items_node, dict) else None
        if not raw_items:
            return []
        if isinstance(raw_items, dict):
            raw_items = [raw_items]

        return [self._to_item(raw) for raw in raw_items if isinstance(raw, dict)]

    @staticmethod
    def _to_item(raw: dict[str, Any]) -> RecommendationItem:
        content_id = raw.get("contentid", "")
        address = raw.get("addr1") or ""
        return RecommendationItem(
            id=f"{raw.get('contenttypeid', '')}-{content_id}",
            title=raw.get("title") or "",
            description=address,
            category=map_content_type_to_category(raw.get("contenttypeid")),
            location=address,
            start_date=format_compact_date(raw.get("eventstartdate")),
            end_date=format_compact_date(raw.get("eventenddate")),
            image_url=raw.get("firstimage") or raw.get("firstimage2") or None,
            link=DETAIL_LINK_TEMPLATE.format(content_id=content_id),
            map_x=_to_coordinate(raw.get("mapx")),
            map_y=_to_coordinate(raw.get("mapy")),
        )


_STATIC_CATALOGUE: tuple[RecommendationItem, ...] = (
    RecommendationItem(
        id="rec-001",
        title="국립과학관 공룡 전시회",
        description="중생대 공룡들의 화석과 복원 모형을 볼 수 있는 특별 전시",
        category="전시",
        location="서울 국립과학관",
        start_date="2025-01-01",
        end_date="2025-03-31",
        image_url="https://example.com/dino.jpg",
        link="https://example.com/dino-exhibition",
        map_x=127.0016,
        map_y=37.5172,
    ),
    RecommendationItem(
        id="rec-002",
        title="어린이 우주 체험 프로그램",
        description="천체 관측과 로켓 제작 체험을 할 수 있는 교육 프로그램",
        category="체험",
        location="부산 천문대",
        start_date="2025-02-01",
        end_date="2025-02-28",
        image_url="https://example.com/space.jpg",
        link="https://example.com/space-program",
        map_x=129.0756,
        map_y=35.1796,
    ),
    RecommendationItem(
        id="rec-003",
        title="어린이 미술 축제",
        description="다양한 미술 작품 전시와 그리기 체험",
        category="축제",
        location="대전 예술의전당",
        start_date="2025-03-01",
        end_date="2025-03-15",
        image_url="https://example.com/art.jpg",
        link="https://example.com/art-festival",
        map_x=127.3845,
        map_y=36.3504,
    ),
    RecommendationItem(
        id="rec-004",
        title="로봇 코딩 캠프",
        description="어린이를 위한 로봇 제작 및 코딩 교육",
        category="체험",
        location="서울 로봇과학관",
        start_date="2025-04-01",
        end_date="2025-04-30",
        image_url="https://example.com/robot.jpg",
        link="https://example.com/robot-camp",
        map_x=127.0495,
        map_y=37.6545,
    ),
    RecommendationItem(
        id="rec-005",
        title="동물의 왕국 특별전",
        description="세계 각국의 동물들을 만날 수 있는 전시",
        category="전시",
        location="인천 동물원",
        start_date="2025-05-01",
        end_date="2025-06-30",
        image_url="https://example.com/animal.jpg",
        link="https://example.com/animal-exhibition",
        map_x=126.7052,
        map_y=37.4563,
    ),
)


class StaticRecommendationProvider:
    """고정 카탈로그 제공자 (외부 API 키가 없는 환경용)

    키워드와 일치하는 항목이 없으면 카탈로그 전체를 돌려줍니다.
    """

    def __init__(
        self,
        catalogue: Sequence[RecommendationItem] = _STATIC_CATALOGUE,
        matcher: Optional[KeywordMatchingService] = None,
    ):
        self.catalogue = list(catalogue)
        self.matcher = matcher or KeywordMatchingService()

    async def search(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> RecommendationSearchResult:
        candidates = [
            item
            for item in self.catalogue
            if not category or item.category == category
        ]
        matched = [
            item
            for item in candidates
            if self.matcher.find_relevant_keywords(item, keywords)
        ]
        items = matched or candidates

        logger.info(
            f"Static recommendation search: keywords={list(keywords)}, "
            f"matched={len(matched)}, returned={len(items)}"
        )
        return RecommendationSearchResult(items=items, total_count=len(items))


def create_recommendation_provider(
    config: Settings = settings,
) -> RecommendationProvider:
    """설정에 따른 추천 제공자 생성"""
    if config.recommendation_provider == "tourism":
        return KoreaTourismProvider(
            api_key=config.korea_tour_api_key,
            base_url=config.korea_tour_base_url,
            timeout=config.external_api_timeout,
        )
    return StaticRecommendationProvider()
