"""
Request deadline passed explicitly from the controller down to every
repository call.

A Deadline is created once per request and is immutable; each store operation
runs inside `deadline.scope()` so it is aborted when the request budget runs
out. Expiry surfaces as the builtin `TimeoutError`, which the repository error
mapper turns into `StoreUnavailableError`.
"""
from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator


@dataclass(frozen=True)
class Deadline:
    # Monotonic clock value after which work must stop; None means no limit.
    expires_at: float | None = None

    @classmethod
    def after(cls, seconds: float | None) -> Deadline:
        """Deadline `seconds` from now. None, zero or a negative budget disables it."""
        if seconds is None or seconds <= 0:
            return cls.unbounded()
        return cls(expires_at=time.monotonic() + seconds)

    @classmethod
    def unbounded(cls) -> Deadline:
        return cls(expires_at=None)

    def remaining(self) -> float | None:
        """Seconds left (never negative), or None when unbounded."""
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    @asynccontextmanager
    async def scope(self) -> AsyncIterator[None]:
        """Cancel the enclosed awaits at expiry; fail fast if already expired."""
        if self.expired:
            raise TimeoutError("request deadline exceeded")
        async with asyncio.timeout(self.remaining()):
            yield
