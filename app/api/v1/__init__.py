"""API v1 라우터"""

from typing import Any

from fastapi import APIRouter

from app.core.schemas import APIResponse, ErrorResponse
from app.domains.interests.router import router as interests_router
from app.domains.recommendations.router import router as recommendations_router

api_router = APIRouter()

# 내부 API 키 인증 실패/입력 오류 응답 문서화
_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}

api_router.include_router(
    interests_router,
    prefix="/insights",
    tags=["Interests"],
    responses=_ERROR_RESPONSES,
)
api_router.include_router(
    recommendations_router,
    prefix="/insights",
    tags=["Recommendations"],
    responses=_ERROR_RESPONSES,
)


@api_router.get("/", response_model=APIResponse[dict[str, Any]])
async def api_v1_root():
    """API v1 루트 엔드포인트"""
    return APIResponse(
        success=True,
        message="Child Insight API v1",
        data={
            "version": "1.0.0",
            "docs": "/docs",
        },
    )
