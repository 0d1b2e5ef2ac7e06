"""날짜/시간 유틸리티

DB와 도메인 계산은 모두 timezone-aware UTC 기준입니다.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

# 한국 시간대 (UTC+9), 스케줄러 기준 시각
KST = timezone(timedelta(hours=9))
UTC = timezone.utc

SECONDS_PER_DAY = 86400


def now_utc() -> datetime:
    """현재 UTC 시간 반환"""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """timezone 정보가 없는 datetime은 UTC로 간주"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_ago(days: int, now: Optional[datetime] = None) -> datetime:
    """n일 전 시간 반환"""
    return (ensure_utc(now) if now else now_utc()) - timedelta(days=days)


def days_between(start: datetime, end: datetime) -> float:
    """두 시점 사이의 경과 일수 (소수 포함, end - start)"""
    delta = ensure_utc(end) - ensure_utc(start)
    return delta.total_seconds() / SECONDS_PER_DAY


def format_compact_date(date_str: Optional[str]) -> Optional[str]:
    """YYYYMMDD 문자열을 YYYY-MM-DD로 변환

    형식이 맞지 않으면 None을 반환합니다.
    """
    if not date_str or len(date_str) != 8 or not date_str.isdigit():
        return None
    return f"{date_str[0:4]}-{date_str[4:6]}-{date_str[6:8]}"
