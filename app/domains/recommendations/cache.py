"""Redis 추천 결과 캐시

키 형식: recommendation:{소문자 키워드들을 ','로 연결}[:{카테고리}]
캐시 장애는 요청 실패로 이어지지 않으며 로그만 남깁니다.
"""

from typing import Optional, Sequence

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.core.config import Settings, settings
from app.core.logging import get_logger
from app.domains.recommendations.schemas import RecommendationSearchResult

logger = get_logger(__name__)

KEY_PREFIX = "recommendation:"


def build_cache_key(keywords: Sequence[str], category: Optional[str] = None) -> str:
    """정규화된 키워드 목록과 카테고리로 캐시 키 생성"""
    normalized = ",".join(keyword.strip().lower() for keyword in keywords)
    key = f"{KEY_PREFIX}{normalized}"
    return f"{key}:{category}" if category else key


class RedisRecommendationCache:
    """Redis 기반 추천 결과 캐시"""

    def __init__(self, redis: Redis, default_ttl: int = 3600):
        self.redis = redis
        self.default_ttl = default_ttl

    async def get(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> Optional[RecommendationSearchResult]:
        """캐시 조회 (미스/오류는 None)"""
        key = build_cache_key(keywords, category)
        try:
            cached = await self.redis.get(key)
            if not cached:
                logger.debug(f"Recommendation cache miss: {key}")
                return None

            logger.debug(f"Recommendation cache hit: {key}")
            return RecommendationSearchResult.model_validate_json(cached)
        except (RedisError, OSError, ValueError) as e:
            logger.error(f"Recommendation cache get failed for {key}: {e}")
            return None

    async def set(
        self,
        keywords: Sequence[str],
        result: RecommendationSearchResult,
        category: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> None:
        """검색 결과 저장 (SETEX)"""
        key = build_cache_key(keywords, category)
        expire = ttl or self.default_ttl
        try:
            await self.redis.setex(key, expire, result.model_dump_json())
            logger.debug(
                f"Recommendation cached: {key} "
                f"({len(result.items)} items, ttl={expire}s)"
            )
        except (RedisError, OSError) as e:
            logger.error(f"Recommendation cache set failed for {key}: {e}")

    async def invalidate(
        self,
        keywords: Sequence[str],
        category: Optional[str] = None,
    ) -> None:
        key = build_cache_key(keywords, category)
        try:
            await self.redis.delete(key)
        except (RedisError, OSError) as e:
            logger.error(f"Recommendation cache invalidate failed for {key}: {e}")


_redis_client: Optional[Redis] = None


def get_recommendation_cache(
    config: Settings = settings,
) -> Optional[RedisRecommendationCache]:
    """캐시가 활성화된 경우 공유 Redis 클라이언트로 캐시 생성"""
    global _redis_client

    if not config.recommendation_cache_enabled:
        return None

    if _redis_client is None:
        _redis_client = Redis.from_url(config.redis_url, decode_responses=True)

    return RedisRecommendationCache(
        _redis_client, default_ttl=config.recommendation_cache_ttl_seconds
    )


async def close_recommendation_cache() -> None:
    """공유 Redis 연결 종료"""
    global _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
