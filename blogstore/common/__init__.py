# Common utilities and shared modules
"""
Shared components used by the content store and the linter:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
- HTTP client and rate limiter
"""

from .config import CONTENT_DIR, PROJECT_ROOT, Settings, settings
from .logging import set_verbosity, setup_logging
from .models import Post, format_post_date, parse_post_date

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "CONTENT_DIR",
    "Post",
    "format_post_date",
    "parse_post_date",
    "set_verbosity",
    "setup_logging",
]
