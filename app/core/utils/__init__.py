"""유틸리티 모듈"""

from app.core.utils.datetime import (
    KST,
    UTC,
    days_ago,
    days_between,
    ensure_utc,
    format_compact_date,
    now_utc,
)
from app.core.utils.pagination import PageSlice, paginate

__all__ = [
    # datetime
    "UTC",
    "KST",
    "now_utc",
    "ensure_utc",
    "days_ago",
    "days_between",
    "format_compact_date",
    # pagination
    "PageSlice",
    "paginate",
]
