"""마이그레이션 자동 실행 유틸리티

서버 시작 시 Alembic 리비전을 확인하고, auto_migrate 설정에 따라 head까지
업그레이드합니다.
"""

from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def sync_database_url(url: Optional[str] = None) -> str:
    """asyncpg URL을 Alembic용 동기(psycopg2) URL로 변환"""
    return (url or settings.database_url).replace("+asyncpg", "+psycopg2")


def get_alembic_config() -> Config:
    """Alembic 설정 객체 반환"""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", sync_database_url())
    config.attributes["configure_logger"] = False
    return config


def get_current_revision() -> Optional[str]:
    """데이터베이스에 기록된 리비전 (없거나 조회 실패 시 None)"""
    engine = create_engine(sync_database_url())
    try:
        with engine.connect() as conn:
            rev = MigrationContext.configure(conn).get_current_revision()
            return str(rev) if rev else None
    except Exception as e:
        logger.warning(f"현재 마이그레이션 버전 조회 실패: {e}")
        return None
    finally:
        engine.dispose()


def get_head_revision() -> Optional[str]:
    head = ScriptDirectory.from_config(get_alembic_config()).get_current_head()
    return str(head) if head else None


def run_migrations_on_startup(auto_migrate: bool = True) -> None:
    """서버 시작 시 마이그레이션 확인 및 실행

    Args:
        auto_migrate: True면 head까지 업그레이드, False면 상태만 로그

    Raises:
        RuntimeError: 프로덕션에서 마이그레이션 실패
    """
    try:
        current = get_current_revision()
        head = get_head_revision()

        if current == head:
            logger.info(f"✅ 마이그레이션 상태: 최신 (revision: {current})")
            return

        logger.warning(f"⚠️ 마이그레이션 필요 (현재: {current}, 최신: {head})")
        if auto_migrate:
            command.upgrade(get_alembic_config(), "head")
            logger.info(f"✅ 마이그레이션 완료 (revision: {head})")

    except Exception as e:
        logger.error(f"❌ 마이그레이션 실패: {e}")
        if settings.is_production:
            raise RuntimeError("프로덕션 환경에서 마이그레이션 실패") from e
        logger.warning("⚠️ 개발 환경이므로 서버를 계속 시작합니다.")
