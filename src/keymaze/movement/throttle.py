from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class MoveThrottle:
    """Minimum spacing between accepted move attempts.

    Holding a key repeats it far faster than tiles can be crossed, so the
    orchestrator asks the throttle before forwarding a move. The throttle keeps
    no clock of its own: callers pass ``now`` from their accumulated frame time.

    An interval of 0 disables throttling.
    """

    def __init__(self, interval: float = 0.09) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = float(interval)
        self._last: Optional[float] = None

    def allow(self, now: float) -> bool:
        """Return True and record ``now`` if enough time has passed since the last allowed attempt."""
        if self._last is not None and now - self._last < self.interval:
            logger.debug("Move throttled (%.3fs since last, interval=%.3fs)", now - self._last, self.interval)
            return False
        self._last = now
        return True

    def reset(self) -> None:
        self._last = None
