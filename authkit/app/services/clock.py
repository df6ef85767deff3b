from datetime import datetime

from authkit.domain.base import utcnow


class Clock:
    """Source of "now" for expiry comparisons. Swap for a fixed clock in tests."""

    def now(self) -> datetime:
        return utcnow()
