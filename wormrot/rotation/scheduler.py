"""
Fixes the time reference of a run and guards against starting too close to a
rotation window boundary.
"""

import time
from typing import Callable, Optional

from wormrot.config import BOUNDARY_THRESHOLD
from wormrot.errors import BoundaryUnsafeError
from wormrot.ui.logging import Logger, LoggerInstance

logger = Logger()

ROTATOR_CODENAME = 'ROTATOR'
ROTATOR_PREFIX = f'[cyan]\\[{ROTATOR_CODENAME}][/]'


def time_window(base: int, modulo: int) -> int:
    """Start of the window containing `base`: floor(base / modulo) * modulo."""
    return (base // modulo) * modulo


def check_boundary(base: int, modulo: int, threshold: int = BOUNDARY_THRESHOLD) -> int:
    """
    Refuse a base timestamp that sits in the first seconds of its window.

    Args:
        base: BaseTimestamp of the run
        modulo: Rotation window width in seconds
        threshold: Seconds after a window start during which codes are unsafe

    Returns:
        The remainder `base % modulo` when the start is safe

    Raises:
        BoundaryUnsafeError: with the number of seconds until the start is safe
    """
    remainder = base % modulo
    if remainder < threshold:
        raise BoundaryUnsafeError(remainder, threshold - remainder)
    return remainder


class RotationScheduler:
    """Holds the BaseTimestamp and RotationModulo of one run."""

    def __init__(self, modulo: int, clock: Optional[Callable[[], float]] = None,
                 log: Optional[LoggerInstance] = None):
        self.modulo = modulo
        self._clock = clock or time.time
        self._base: Optional[int] = None
        self.logger = log or logger.get_logger(ROTATOR_PREFIX)

    def capture_base(self) -> int:
        """Read the UTC wall clock once. A run never re-reads it."""
        if self._base is not None:
            raise RuntimeError("Base timestamp already captured for this run")
        self._base = int(self._clock())
        self.logger.debug(f"Base timestamp: {self._base} (window {self.window})")
        return self._base

    @property
    def base(self) -> int:
        if self._base is None:
            raise RuntimeError("Base timestamp has not been captured yet")
        return self._base

    @property
    def window(self) -> int:
        return time_window(self.base, self.modulo)

    def check_boundary(self) -> int:
        remainder = self.base % self.modulo
        self.logger.debug(f"Timestamp modulo-remainder: {remainder} (threshold: {BOUNDARY_THRESHOLD})")
        return check_boundary(self.base, self.modulo)
