"""Rate Limiting: in-memory sliding window keyed by client address.

Invariants:
    - At most max_requests hits per client within any window_seconds span
    - A rejected request is not counted against the window
    - Counters are guarded by one asyncio.Lock (single-process uvicorn)

Design Decisions:
    - In-memory deque per client over Redis: one process, no extra service
      (ADR: limits reset on restart, acceptable for this API)
    - Raises RateLimitExceededError so the global handler shapes the 429 body
"""

import asyncio
import logging
import time
from collections import defaultdict, deque
from typing import Callable

from fastapi import Request

from product_api.core.errors import ErrorContext, RateLimitExceededError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """FastAPI dependency limiting each client to max_requests per window."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.enabled = enabled
        self._clock = clock
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()

    async def __call__(self, request: Request) -> None:
        if not self.enabled:
            return
        await self.hit(self._client_key(request))

    async def hit(self, key: str) -> None:
        """Record one request for key, or raise RateLimitExceededError."""
        now = self._clock()
        window_start = now - self.window_seconds
        async with self._lock:
            hits = self._hits[key]
            while hits and hits[0] <= window_start:
                hits.popleft()
            if len(hits) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - hits[0])))
                logger.warning(
                    f"Rate limit exceeded for {key}", extra={"client": key},
                )
                raise RateLimitExceededError(
                    retry_after, ErrorContext(debug_info={"client": key}),
                )
            hits.append(now)
            self._forget_idle(window_start)

    def reset(self) -> None:
        self._hits.clear()

    def _forget_idle(self, window_start: float) -> None:
        idle = [k for k, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in idle:
            del self._hits[key]

    @staticmethod
    def _client_key(request: Request) -> str:
        return request.client.host if request.client else "anonymous"
