"""데이터베이스 엔진/세션 설정"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

# Alembic autogenerate와 동일한 제약조건 이름 규칙
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 모델 베이스 클래스"""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """요청 밖(스케줄러 등)에서 쓰는 트랜잭션 세션

    정상 종료 시 커밋, 예외 발생 시 롤백 후 다시 던집니다.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 데이터베이스 세션 의존성 (성공 시 커밋, 실패 시 롤백)"""
    async with session_scope() as session:
        yield session


async def close_db() -> None:
    """데이터베이스 연결 종료"""
    await engine.dispose()
