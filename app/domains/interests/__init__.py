"""Interests 도메인 모듈

대화에서 추출된 키워드로 아이의 관심사를 추론하고 점수를 관리합니다.

구조:
    - values.py: 값 객체 (Keyword, Score)
    - scoring.py: 점수 계산 (생성/감쇠/가산)
    - entities.py: 도메인 엔티티 (Interest, AnalyticsRecord)
    - models.py: SQLAlchemy 모델 (ChildInterest, Analytics)
    - repository.py: 데이터 접근 계층 (낙관적 동시성 제어)
    - service.py: 수집/정리/조회 서비스
    - scheduler.py: 주기적 정리 작업
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from app.domains.interests.entities import AnalyticsRecord, Interest
from app.domains.interests.exceptions import (
    FutureTimestampException,
    InterestErrorCode,
    InterestUpdateConflictException,
    InvalidKeywordException,
    InvalidMentionCountException,
    InvalidScoreException,
    MissingIdentifierException,
)
from app.domains.interests.models import Analytics, ChildInterest
from app.domains.interests.router import router
from app.domains.interests.scoring import InterestScoringService
from app.domains.interests.service import (
    InterestIngestionService,
    InterestPruningService,
    TopInterestsService,
)
from app.domains.interests.values import Keyword, Score, normalize_keywords

__all__ = [
    "Keyword",
    "Score",
    "normalize_keywords",
    "InterestScoringService",
    "Interest",
    "AnalyticsRecord",
    "ChildInterest",
    "Analytics",
    "InterestIngestionService",
    "InterestPruningService",
    "TopInterestsService",
    "router",
    "InterestErrorCode",
    "InvalidKeywordException",
    "InvalidScoreException",
    "InvalidMentionCountException",
    "FutureTimestampException",
    "MissingIdentifierException",
    "InterestUpdateConflictException",
]
