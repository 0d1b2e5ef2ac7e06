"""관심사 정리 스케줄러

매일 정해진 시각(KST)에 오래되고 점수가 낮은 관심사를 삭제합니다.
FastAPI lifespan에서 시작/종료합니다.
"""

from typing import AsyncContextManager, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, settings
from app.core.database import session_scope
from app.core.logging import get_logger
from app.core.utils.datetime import KST
from app.domains.interests.schemas import PruneResult
from app.domains.interests.service import InterestPruningService

logger = get_logger(__name__)

PRUNE_JOB_ID = "interest_prune"


class InterestPruningScheduler:
    """관심사 정리 작업 스케줄러"""

    def __init__(
        self,
        config: Settings = settings,
        session_factory: Callable[
            [], AsyncContextManager[AsyncSession]
        ] = session_scope,
    ):
        self.config = config
        self.session_factory = session_factory
        self.scheduler = AsyncIOScheduler(timezone=KST)

    def setup(self) -> None:
        """매일 interest_prune_hour시 정각(KST)에 실행되는 작업 등록"""
        self.scheduler.add_job(
            self.run_prune,
            CronTrigger(hour=self.config.interest_prune_hour, minute=0, timezone=KST),
            id=PRUNE_JOB_ID,
            name="Prune stale interests",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        logger.info(
            f"Interest prune job scheduled daily at "
            f"{self.config.interest_prune_hour:02d}:00 KST"
        )

    async def run_prune(self) -> Optional[PruneResult]:
        """정리 작업 실행 (자체 세션 사용, 실패는 로그만 남김)"""
        logger.info("Starting scheduled interest prune")

        try:
            async with self.session_factory() as session:
                result = await InterestPruningService(session).prune_old_interests(
                    min_days_since_update=self.config.interest_prune_min_days,
                    max_score=self.config.interest_prune_max_score,
                )
        except Exception as e:
            logger.exception(f"Scheduled interest prune failed: {e}")
            return None

        logger.info(
            f"Scheduled interest prune complete: {result.deleted_count} deleted"
        )
        return result

    def start(self) -> None:
        self.setup()
        self.scheduler.start()
        logger.info("Interest prune scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Interest prune scheduler stopped")
