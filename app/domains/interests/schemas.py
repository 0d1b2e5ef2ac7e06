"""Interests 도메인 스키마 정의"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyticsCreate(BaseModel):
    """대화 키워드 분석 결과 저장 요청

    식별자 누락은 서비스 계층에서 400(MISSING_IDENTIFIER)으로 처리합니다.
    """

    child_id: Optional[int] = Field(None, description="아이 프로필 ID")
    conversation_id: Optional[int] = Field(None, description="대화 ID")
    extracted_keywords: list[str] = Field(
        default_factory=list,
        max_length=500,
        description="대화에서 추출된 키워드 목록 (중복 허용)",
    )


class IngestionResult(BaseModel):
    """관심사 반영 결과 (생성/수정 키워드는 겹치지 않음)"""

    updated_keywords: list[str] = Field(default_factory=list)
    created_keywords: list[str] = Field(default_factory=list)


class InterestResponse(BaseModel):
    """관심사 응답 스키마"""

    model_config = ConfigDict(from_attributes=True)

    keyword: str
    raw_score: float
    last_updated: datetime


class TopInterestsResponse(BaseModel):
    """상위 관심사 목록 응답"""

    child_id: int
    interests: list[InterestResponse] = Field(default_factory=list)


class PruneResult(BaseModel):
    """관심사 정리 결과"""

    deleted_count: int = Field(..., description="삭제된 관심사 수")
    deleted_keywords: list[str] = Field(
        default_factory=list, description="삭제된 키워드 목록"
    )
