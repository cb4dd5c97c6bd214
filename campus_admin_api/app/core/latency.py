"""
Simulated network latency.

Every service call waits for a fixed, operation dependent delay before
touching its data source so that clients can exercise loading states.
Reads are lighter than writes.  The delay is deterministic and scaled by
``Settings.latency_scale``; a scale of ``0`` skips the wait entirely.
"""

import asyncio
from typing import Dict


# Base delays in milliseconds.
DELAYS_MS: Dict[str, int] = {
    "list": 300,
    "get": 200,
    "query": 200,
    "stats": 200,
    "create": 400,
    "update": 350,
    "delete": 250,
}


class Latency:
    """Awaitable delay keyed by operation kind."""

    def __init__(self, scale: float = 1.0) -> None:
        if scale < 0:
            raise ValueError("Latency scale must not be negative")
        self.scale = scale

    def seconds(self, operation: str) -> float:
        return DELAYS_MS[operation] * self.scale / 1000

    async def wait(self, operation: str) -> None:
        delay = self.seconds(operation)
        if delay > 0:
            await asyncio.sleep(delay)
