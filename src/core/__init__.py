"""
Cross-cutting helpers: structlog setup and small shared utilities.
"""

from core.logging import LoggerMixin, bound_context, configure_from_settings, configure_logging, get_logger
from core.utils import clamp, convert_numpy, jaccard, normalize_string_set, safe_get

__all__ = [
    "LoggerMixin",
    "bound_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "clamp",
    "convert_numpy",
    "jaccard",
    "normalize_string_set",
    "safe_get",
]
