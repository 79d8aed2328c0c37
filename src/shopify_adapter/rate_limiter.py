"""
RateLimiter module for spacing out calls to the Shopify Admin API
"""

import logging
import time
from typing import Callable

# Shopify's REST Admin API allows roughly two requests per second per store
DEFAULT_DELAY_SECONDS = 0.5

logger = logging.getLogger(__name__)


class RateLimiter:
    """Fixed-delay throttle applied before every outbound call"""

    def __init__(self, delay_seconds: float = DEFAULT_DELAY_SECONDS,
                 sleep: Callable[[float], None] = time.sleep):
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self.calls = 0

    def wait(self) -> None:
        """
        Block for the configured delay

        A zero or negative delay returns immediately.
        """
        self.calls += 1
        if self.delay_seconds <= 0:
            return

        logger.debug(f"Rate limiting: sleeping {self.delay_seconds:.3f}s before call {self.calls}")
        self._sleep(self.delay_seconds)
