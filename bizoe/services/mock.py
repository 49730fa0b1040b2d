from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from bizoe.errors import ServiceUnavailable

logger = logging.getLogger(__name__)


class MockService:
    """
    Base for services that stand in for a backend.

    Every call waits `delay` seconds and then fails with ServiceUnavailable
    with probability `failure_rate`. Nothing is retried.
    """

    def __init__(self, delay: float = 0.0, failure_rate: float = 0.0, rng: Optional[random.Random] = None):
        self.delay = delay
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()

    async def _simulate(self, operation: str) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.warning("simulated network failure in %s", operation)
            raise ServiceUnavailable(f"{operation} failed")
        logger.info("%s ok", operation)
