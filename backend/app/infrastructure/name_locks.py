"""Hierarchy Locks — serialize registry mutations that touch the same name hierarchy.

Invariants:
    - One asyncio.Lock per active key; dropped when no holder or waiter remains
    - Key is the hierarchy root (two right-most labels): every pair of
      overlapping names maps to the same key
    - On PostgreSQL a transaction-scoped advisory lock on the same key is also
      taken, extending the exclusion across processes; it is released by the
      enclosing commit/rollback

Design Decisions:
    - In-process lock plus advisory lock: the asyncio lock keeps one process
      from queueing on the database, the advisory lock covers multi-worker deploys
    - Locks never time out: critical sections are a single short transaction
    - hold_many sorts its keys; every other caller holds a single key
"""

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class NameLockRegistry:
    """Reference-counted keyed asyncio locks."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncGenerator[None, None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                del self._holders[key]
                del self._locks[key]

    @asynccontextmanager
    async def hold_many(self, keys) -> AsyncGenerator[None, None]:
        """Hold several keys, acquired in sorted order so holders never deadlock."""
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.hold(key))
            yield

    def active_keys(self) -> list[str]:
        return sorted(self._locks)


async def acquire_advisory_lock(db: AsyncSession, key: str) -> None:
    """Transaction-scoped advisory lock (PostgreSQL only, no-op elsewhere)."""
    if db.get_bind().dialect.name != "postgresql":
        return
    await db.execute(
        text("SELECT pg_advisory_xact_lock(hashtext(:key))"), {"key": key},
    )


# Singleton: one registry per process, shared by all services
name_locks = NameLockRegistry()
