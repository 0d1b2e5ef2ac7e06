"""API 통합 테스트 - 응답 구조, 미들웨어, 에러 형식 검증"""

import pytest


class TestHealthCheck:
    """헬스 체크 API 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_response_structure(self, app_client):
        """헬스 체크 응답 구조 검증"""
        response = await app_client.get("/health")

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OK"
        assert data["data"]["status"] == "healthy"
        assert "recommendation_provider" in data["data"]

    @pytest.mark.asyncio
    async def test_health_check_is_not_traced(self, app_client):
        """헬스 체크는 로깅 제외 경로 (X-Request-ID 없음)"""
        response = await app_client.get("/health")

        assert "x-request-id" not in response.headers


class TestAPIRoot:
    """API 루트 테스트"""

    @pytest.mark.asyncio
    async def test_api_v1_root(self, app_client):
        """API v1 루트 응답 검증"""
        response = await app_client.get("/api/v1/")

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert "version" in data["data"]


class TestMiddleware:
    """미들웨어 테스트"""

    @pytest.mark.asyncio
    async def test_request_id_header_in_response(self, app_client):
        """응답에 X-Request-ID 헤더 포함 (UUID 형식)"""
        response = await app_client.get("/api/v1/")

        assert len(response.headers["x-request-id"]) == 36

    @pytest.mark.asyncio
    async def test_upstream_request_id_is_propagated(self, app_client):
        """상위 서비스가 보낸 요청 ID를 그대로 사용"""
        response = await app_client.get(
            "/api/v1/", headers={"X-Request-ID": "conversation-svc-123"}
        )

        assert response.headers["x-request-id"] == "conversation-svc-123"

    @pytest.mark.asyncio
    async def test_process_time_header_in_response(self, app_client):
        """응답에 X-Process-Time 헤더 포함"""
        response = await app_client.get("/api/v1/")

        assert response.headers["x-process-time"].endswith("ms")


class TestErrorFormat:
    """에러 응답 형식 테스트"""

    @pytest.mark.asyncio
    async def test_unknown_route_returns_error_envelope(self, app_client):
        """존재하지 않는 경로는 404 NOT_FOUND"""
        response = await app_client.get("/api/v1/unknown")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "NOT_FOUND"
