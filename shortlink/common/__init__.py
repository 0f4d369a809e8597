"""Common utilities for shortlink."""

from .validators import is_valid_url, is_valid_short_code
from .headers import extract_forwarded_headers, build_base_url
from .logging_config import setup_logging, get_logger
from .rwlock import ReadWriteLock

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "extract_forwarded_headers",
    "build_base_url",
    "setup_logging",
    "get_logger",
    "ReadWriteLock",
]
