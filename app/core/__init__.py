"""Core 모듈"""

from app.core.config import settings
from app.core.database import Base, get_db
from app.core.exceptions import (
    BadRequestException,
    BaseAPIException,
    ConflictException,
    ErrorCode,
    UnauthorizedException,
    ValidationException,
)
from app.core.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "Base",
    "get_db",
    "ErrorCode",
    "BaseAPIException",
    "BadRequestException",
    "UnauthorizedException",
    "ValidationException",
    "ConflictException",
    "get_logger",
    "setup_logging",
]
