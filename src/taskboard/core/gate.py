"""ChangeGate — single-flight latch for refresh cycles.

Held from the start of a fetch until the presenter reports that the
resulting animation has finished. A cycle requested while the gate is
held is dropped, not queued.
"""

import logging

logger = logging.getLogger(__name__)


class ChangeGate:
    def __init__(self):
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def try_acquire(self) -> bool:
        """Take the gate. Returns False, changing nothing, if already held."""
        if self._busy:
            logger.debug("Refresh already running; request dropped")
            return False
        self._busy = True
        return True

    def release(self) -> None:
        self._busy = False
