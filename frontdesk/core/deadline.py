"""
Caller-supplied deadlines for storage-bound operations.
"""
import time
from typing import Optional

from ..exceptions import RequestTimeoutException


class Deadline:
    """
    A point on the monotonic clock after which an operation must abort.

    Services call ``check()`` before each storage call and before any write, so
    an expired deadline never leaves a half-applied change behind. Repositories
    use ``remaining()`` to bound the in-flight statement itself.
    """

    def __init__(self, seconds: float, clock=time.monotonic):
        self._clock = clock
        self.expires_at = clock() + seconds

    @classmethod
    def after(cls, seconds: Optional[float]) -> Optional["Deadline"]:
        """Build a deadline, or None when no timeout is configured."""
        if seconds is None or seconds <= 0:
            return None
        return cls(seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def check(self) -> None:
        if self.expired:
            raise RequestTimeoutException()


def check_deadline(deadline: Optional[Deadline]) -> None:
    """No-op when the caller supplied no deadline."""
    if deadline is not None:
        deadline.check()
