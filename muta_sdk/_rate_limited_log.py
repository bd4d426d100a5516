"""
Thread-safe rate-limited logging utilities.

Receipt polling can hit the same condition many times a second; this keeps
the log readable while still recording the first occurrence.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

# Configure logger
logger = logging.getLogger(__name__)

# Global rate limiting cache with thread safety
_log_cache: TTLCache = TTLCache(maxsize=256, ttl=3600)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = 60,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message with rate limiting, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical logs in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    key = (log_instance.name, level.lower(), message)

    with _log_cache_lock:
        expires_at = _log_cache.get(key)
        now = _log_cache.timer()
        if expires_at is not None and now < expires_at:
            return False

        log_method(message)
        # The cache TTL bounds memory; the stored deadline honors ``interval``.
        _log_cache[key] = now + interval
        return True


def reset_rate_limits() -> None:
    """Forget every suppressed message."""
    with _log_cache_lock:
        _log_cache.clear()
