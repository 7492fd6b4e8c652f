"""
Round timer contract.

The game core never waits on a clock. A host supplies a RoundTimer that is
started with a duration and a callback, may be cancelled, and calls the
callback at most once if it is not cancelled first. A timer that never fires
is valid: the game then advances on explicit guesses only.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ExpiryCallback = Callable[[], None]


class RoundTimer(ABC):
    """Countdown for a single round."""

    @abstractmethod
    def start(self, duration_seconds: float, on_expire: ExpiryCallback) -> None:
        """Begin counting down; replaces any countdown already running."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the countdown. No-op if nothing is running."""


class AsyncioRoundTimer(RoundTimer):
    """RoundTimer driven by an asyncio event loop via `loop.call_later`."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, duration_seconds: float, on_expire: ExpiryCallback) -> None:
        if duration_seconds < 0:
            raise ValueError("Timer duration must be non-negative")
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()

        def _fire() -> None:
            self._handle = None
            on_expire()

        self._handle = loop.call_later(duration_seconds, _fire)
        logger.debug("Round timer started for %.1fs", duration_seconds)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Round timer cancelled")
