"""Interests 도메인 모델 정의

아이별 관심사 점수(child_interests)와 대화별 키워드 추출 기록(analytics)을
저장합니다. 아이/대화 ID는 User Service에서 제공되며 외래키를 두지 않습니다.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ChildInterest(Base):
    """아이 관심사 모델

    (child_id, lower(keyword)) 조합은 유일합니다.
    version은 낙관적 동시성 제어에 사용됩니다.
    """

    __tablename__ = "child_interests"

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
        comment="관심사 ID",
    )
    child_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="아이 프로필 ID (User Service)",
    )
    keyword: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="관심사 키워드 (최초 등장 표기)",
    )
    raw_score: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        comment="관심도 점수 (0~100)",
    )
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="낙관적 락 버전",
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="마지막 점수 변경 일시",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )

    __table_args__ = (
        Index(
            "uq_child_interests_child_keyword",
            "child_id",
            text("lower(keyword)"),
            unique=True,
        ),
        Index(
            "ix_child_interests_child_score",
            "child_id",
            text("raw_score DESC"),
        ),
        Index("ix_child_interests_last_updated", "last_updated"),
    )

    def __repr__(self) -> str:
        return (
            f"<ChildInterest(id={self.id}, child_id={self.child_id}, "
            f"keyword={self.keyword!r}, raw_score={self.raw_score}, "
            f"version={self.version})>"
        )


class Analytics(Base):
    """대화 키워드 추출 기록 모델 (추가 전용)"""

    __tablename__ = "analytics"

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
        comment="분석 기록 ID",
    )
    child_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="아이 프로필 ID",
    )
    conversation_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="대화 ID",
    )
    extracted_keywords: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="중복 제거된 추출 키워드 목록",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )

    __table_args__ = (
        Index("ix_analytics_child_id", "child_id"),
        Index("ix_analytics_conversation_id", "conversation_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Analytics(id={self.id}, child_id={self.child_id}, "
            f"conversation_id={self.conversation_id}, "
            f"keywords={len(self.extracted_keywords or [])})>"
        )
