"""Throttle Gate: single-flight plus minimum-interval admission.

A gate admits one call at a time and refuses calls that start less than
``min_gap`` seconds after the previously admitted call started. Rejected
calls never touch the gate's state. The gate is advisory protection against
rapid-fire invocation from this process; it does not queue callers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_MIN_GAP_SECONDS = 2.0


class ThrottleGate:
    """Single-flight gate with a minimum gap between call starts.

    Usage:
        gate = ThrottleGate()

        if not gate.try_admit():
            return "busy"
        try:
            ...
        finally:
            gate.release()
    """

    def __init__(
        self,
        min_gap: float = DEFAULT_MIN_GAP_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.min_gap = min_gap
        self._clock = clock
        self._in_flight = False
        self._last_started: float | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def try_admit(self) -> bool:
        """Admit a call if none is running and the minimum gap has passed."""
        now = self._clock()
        if self._in_flight:
            logger.debug("Throttle: rejected, a call is already in flight")
            return False
        if self._last_started is not None and now - self._last_started < self.min_gap:
            logger.debug("Throttle: rejected, %.2fs since last call", now - self._last_started)
            return False

        self._in_flight = True
        self._last_started = now
        return True

    def release(self) -> None:
        """Mark the admitted call as settled. Safe to call more than once."""
        self._in_flight = False
