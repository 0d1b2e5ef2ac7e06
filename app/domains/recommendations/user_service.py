"""User Service HTTP 조회 어댑터

프로필과 사용자 위치를 내부 API로 조회합니다. 다른 서비스 장애가
추천 기능 전체를 막지 않도록 모든 실패는 None으로 처리합니다.

예상 응답::

    {"success": true, "data": {"profileId": 1, "userId": 10, ...}}
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.core.config import Settings, settings
from app.core.logging import get_logger
from app.domains.recommendations.schemas import ProfileInfo, UserLocation

logger = get_logger(__name__)


class _UserServiceClient:
    """User Service 공통 GET 요청"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        self._client = client

    async def _fetch_data(self, path: str) -> Optional[dict[str, Any]]:
        """envelope의 data를 반환 (404, 형식 오류, 통신 오류는 None)"""
        url = f"{self.base_url}{path}"
        headers = {"X-Internal-Api-Key": self.api_key} if self.api_key else None

        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers)

            if response.status_code == 404:
                logger.warning(f"User Service resource not found: {path}")
                return None

            response.raise_for_status()
            payload = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                f"User Service HTTP error for {path}: {e.response.status_code}"
            )
            return None
        except httpx.TimeoutException:
            logger.error(f"User Service timeout for {path}")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"User Service request failed for {path}: {e}")
            return None

        if (
            not isinstance(payload, dict)
            or not payload.get("success")
            or not isinstance(payload.get("data"), dict)
        ):
            logger.warning(f"Unexpected User Service response for {path}")
            return None

        return payload["data"]


class UserServiceProfileQuery(_UserServiceClient):
    """프로필 조회 (GET /api/internal/profiles/{id})"""

    async def find_by_id(self, profile_id: int) -> Optional[ProfileInfo]:
        data = await self._fetch_data(f"/api/internal/profiles/{profile_id}")
        if data is None:
            return None

        try:
            return ProfileInfo(
                profile_id=data.get("profileId", profile_id),
                user_id=data["userId"],
                name=data.get("name"),
                profile_type=data.get("profileType"),
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Invalid profile payload for {profile_id}: {e}")
            return None


class UserServiceLocationQuery(_UserServiceClient):
    """사용자 위치 조회 (GET /api/internal/users/{id}/location)"""

    async def find_location_by_user_id(
        self, user_id: int
    ) -> Optional[UserLocation]:
        data = await self._fetch_data(f"/api/internal/users/{user_id}/location")
        if data is None:
            return None

        try:
            return UserLocation(
                user_id=data.get("userId", user_id),
                latitude=data["latitude"],
                longitude=data["longitude"],
                address=data.get("address"),
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Invalid location payload for user {user_id}: {e}")
            return None


def create_profile_query(config: Settings = settings) -> UserServiceProfileQuery:
    return UserServiceProfileQuery(
        base_url=config.user_service_url,
        timeout=config.external_api_timeout,
        api_key=config.internal_api_key,
    )


def create_location_query(config: Settings = settings) -> UserServiceLocationQuery:
    return UserServiceLocationQuery(
        base_url=config.user_service_url,
        timeout=config.external_api_timeout,
        api_key=config.internal_api_key,
    )
