"""Bounded acquisition for the registry locks."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from app.core.errors import LockTimeoutError


@asynccontextmanager
async def guarded(
    lock: asyncio.Lock,
    *,
    name: str,
    timeout: Optional[float],
) -> AsyncIterator[None]:
    """Hold `lock` for the block, waiting at most `timeout` seconds.

    Cancelling the waiting task aborts the wait without taking the lock.
    """
    try:
        await asyncio.wait_for(lock.acquire(), timeout)
    except asyncio.TimeoutError as e:
        raise LockTimeoutError(f"Timed out waiting for the {name} lock") from e
    try:
        yield
    finally:
        lock.release()
