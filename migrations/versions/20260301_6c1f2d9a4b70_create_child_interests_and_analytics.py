"""create_child_interests_and_analytics

Revision ID: 6c1f2d9a4b70
Revises:
Create Date: 2026-03-01 10:12:44.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "6c1f2d9a4b70"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """업그레이드 마이그레이션"""
    op.create_table(
        "child_interests",
        sa.Column(
            "id",
            sa.BigInteger(),
            autoincrement=True,
            nullable=False,
            comment="관심사 ID",
        ),
        sa.Column(
            "child_id",
            sa.Integer(),
            nullable=False,
            comment="아이 프로필 ID (User Service)",
        ),
        sa.Column(
            "keyword",
            sa.String(length=100),
            nullable=False,
            comment="관심사 키워드 (최초 등장 표기)",
        ),
        sa.Column(
            "raw_score",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            comment="관심도 점수 (0~100)",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="낙관적 락 버전",
        ),
        sa.Column(
            "last_updated",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="마지막 점수 변경 일시",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="생성 일시",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_child_interests")),
    )
    op.create_index(
        "uq_child_interests_child_keyword",
        "child_interests",
        ["child_id", sa.text("lower(keyword)")],
        unique=True,
    )
    op.create_index(
        "ix_child_interests_child_score",
        "child_interests",
        ["child_id", sa.text("raw_score DESC")],
    )
    op.create_index(
        "ix_child_interests_last_updated", "child_interests", ["last_updated"]
    )

    op.create_table(
        "analytics",
        sa.Column(
            "id",
            sa.BigInteger(),
            autoincrement=True,
            nullable=False,
            comment="분석 기록 ID",
        ),
        sa.Column(
            "child_id", sa.Integer(), nullable=False, comment="아이 프로필 ID"
        ),
        sa.Column(
            "conversation_id", sa.BigInteger(), nullable=False, comment="대화 ID"
        ),
        sa.Column(
            "extracted_keywords",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="중복 제거된 추출 키워드 목록",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="생성 일시",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_analytics")),
    )
    op.create_index("ix_analytics_child_id", "analytics", ["child_id"])
    op.create_index(
        "ix_analytics_conversation_id", "analytics", ["conversation_id"]
    )


def downgrade() -> None:
    """다운그레이드 마이그레이션"""
    op.drop_index("ix_analytics_conversation_id", table_name="analytics")
    op.drop_index("ix_analytics_child_id", table_name="analytics")
    op.drop_table("analytics")
    op.drop_index(
        "ix_child_interests_last_updated", table_name="child_interests"
    )
    op.drop_index("ix_child_interests_child_score", table_name="child_interests")
    op.drop_index(
        "uq_child_interests_child_keyword", table_name="child_interests"
    )
    op.drop_table("child_interests")
