"""
Inline banners for the client views.

Errors stay until dismissed. Successes disappear on their own after a
few seconds.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

SUCCESS_TTL = 3.0  # seconds


class BannerKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Banner:
    kind: BannerKind
    message: str
    shown_at: float
    ttl: Optional[float] = None

    def expired(self, now: float) -> bool:
        return self.ttl is not None and now - self.shown_at >= self.ttl


class Notifications:
    """At most one error banner and one success banner at a time."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._error: Optional[Banner] = None
        self._success: Optional[Banner] = None

    def error(self, message: str) -> None:
        self._error = Banner(BannerKind.ERROR, message, self._clock())

    def success(self, message: str) -> None:
        self._success = Banner(BannerKind.SUCCESS, message, self._clock(), ttl=SUCCESS_TTL)

    def dismiss_error(self) -> None:
        self._error = None

    @property
    def current_error(self) -> Optional[str]:
        return self._error.message if self._error else None

    def active(self) -> list[Banner]:
        """Banners still on screen, errors first."""
        now = self._clock()
        if self._success is not None and self._success.expired(now):
            self._success = None
        return [b for b in (self._error, self._success) if b is not None]
