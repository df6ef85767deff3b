"""
Shared slowapi rate limiter instance.

Keyed on the socket peer address only; forwarded headers are client
supplied and feed security-event logging, never the limit key.

Routes pick a limit class with rate_limit(name); the concrete
"<count>/<window>" strings are installed from configuration by
configure_limiter() when the app is created.
"""

from typing import Callable, Dict

from slowapi import Limiter
from slowapi.util import get_remote_address

from config import DEFAULT_RATE_LIMITS

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")

_limits: Dict[str, str] = dict(DEFAULT_RATE_LIMITS)


def configure_limiter(enabled: bool, limits: Dict[str, str]) -> Limiter:
    limiter.enabled = enabled
    _limits.update(limits)
    return limiter


def rate_limit(limit_class: str) -> Callable[[], str]:
    return lambda: _limits[limit_class]
