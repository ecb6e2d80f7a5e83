"""Pacing between deployment steps."""

import logging
import time
from typing import Callable, Optional

from .constants import DEFAULT_WAIT_SECONDS

logger = logging.getLogger(__name__)


class Pacer:
    """Fixed pause between steps, to stay under node rate limits."""

    def __init__(
        self,
        delay: float = DEFAULT_WAIT_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Args:
            delay: Seconds to pause on each wait()
            sleep: Sleep function (defaults to time.sleep)
        """
        if delay < 0:
            raise ValueError(f"Delay must not be negative: {delay}")
        self.delay = delay
        self.count = 0
        self._sleep = sleep

    def wait(self) -> None:
        """Block for the configured delay."""
        self.count += 1
        logger.debug(">>> [%d] Waiting...", self.count)
        (self._sleep or time.sleep)(self.delay)
