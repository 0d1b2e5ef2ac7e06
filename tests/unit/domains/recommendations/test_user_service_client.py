"""User Service 조회 어댑터 단위 테스트"""

import httpx
import pytest

from app.domains.recommendations.user_service import (
    UserServiceLocationQuery,
    UserServiceProfileQuery,
)

BASE_URL = "http://user-service:3001"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestProfileQuery:
    """프로필 조회 테스트"""

    @pytest.mark.asyncio
    async def test_find_by_id(self):
        """envelope의 data를 ProfileInfo로 변환"""
        # Given
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "profileId": 5,
                        "userId": 42,
                        "name": "지우",
                        "profileType": "child",
                    },
                },
            )

        query = UserServiceProfileQuery(
            BASE_URL, api_key="internal-key", client=_client(handler)
        )

        # When
        profile = await query.find_by_id(5)

        # Then
        assert requests[0].url == f"{BASE_URL}/api/internal/profiles/5"
        assert requests[0].headers["X-Internal-Api-Key"] == "internal-key"
        assert profile is not None
        assert profile.profile_id == 5
        assert profile.user_id == 42
        assert profile.name == "지우"
        assert profile.profile_type == "child"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(404, json={"success": False}),
            httpx.Response(503, text="unavailable"),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json={"success": False, "data": None}),
            httpx.Response(200, json={"success": True, "data": {"name": "x"}}),
            httpx.Response(
                200,
                json={"success": True, "data": {"userId": 1, "profileType": "pet"}},
            ),
        ],
    )
    async def test_failures_return_none(self, response):
        """404, 서버 오류, 형식 오류는 모두 None"""
        query = UserServiceProfileQuery(
            BASE_URL, client=_client(lambda request: response)
        )

        assert await query.find_by_id(5) is None

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        """타임아웃은 None"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        query = UserServiceProfileQuery(BASE_URL, client=_client(handler))

        assert await query.find_by_id(5) is None


class TestLocationQuery:
    """사용자 위치 조회 테스트"""

    @pytest.mark.asyncio
    async def test_find_location_by_user_id(self):
        """위경도 변환"""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/internal/users/42/location"
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "userId": 42,
                        "latitude": 37.5665,
                        "longitude": 126.978,
                        "address": "서울특별시 중구",
                    },
                },
            )

        query = UserServiceLocationQuery(BASE_URL, client=_client(handler))

        location = await query.find_location_by_user_id(42)

        assert location is not None
        assert location.user_id == 42
        assert location.latitude == 37.5665
        assert location.longitude == 126.978
        assert location.address == "서울특별시 중구"

    @pytest.mark.asyncio
    async def test_missing_coordinates_returns_none(self):
        """좌표가 없으면 None"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"success": True, "data": {"userId": 42, "latitude": None}}
            )

        query = UserServiceLocationQuery(BASE_URL, client=_client(handler))

        assert await query.find_location_by_user_id(42) is None
