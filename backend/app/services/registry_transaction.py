"""Serialized Registry Transactions — the unit of work every registry mutation runs in.

Invariants:
    - One mutation = one session = one transaction: commit on success, rollback on any error
    - The hierarchy lock is held from before the first read until after commit/rollback
    - Rejections (RegistryError) are logged at WARNING with error_code; never swallowed
    - Sessions come from a provider, so returned ORM objects are detached with
      their attributes loaded (expire_on_commit=False)

Design Decisions:
    - Session provider over an injected AsyncSession: a mutation must start its
      transaction INSIDE the lock, otherwise a snapshot taken before the lock
      could miss a conflicting insert
    - Same provider shape as DatabaseSessionManager.session and async_sessionmaker,
      so the app and the tests plug in without adapters
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncGenerator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_hierarchy import hierarchy_root
from app.core.domain_types import RegistryOperation
from app.core.enforce_name import normalize_name
from app.core.errors import RegistryError, ResourceNotFoundError
from app.infrastructure.name_locks import (
    NameLockRegistry, acquire_advisory_lock, name_locks,
)
from app.models.domain import Domain

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def log_rejection(
    error: RegistryError, operation: RegistryOperation, name: str | None = None,
) -> RegistryError:
    """Log a rejected mutation and hand the error back for raising."""
    logger.warning(
        f"{operation.value} rejected: {error.message}",
        extra={
            "error_code": error.code,
            "operation": operation.value,
            "domain_name": name,
        },
    )
    return error


class SerializedMutations:
    """Runs registry mutations under the hierarchy lock of the domain they touch."""

    def __init__(
        self, session_provider: SessionProvider, locks: NameLockRegistry = name_locks,
    ):
        self.session_provider = session_provider
        self.locks = locks

    async def domain_name(self, domain_id: UUID) -> str:
        """Canonical name of a domain, read outside any lock (names are immutable)."""
        async with self.session_provider() as db:
            name = await db.scalar(
                select(Domain.canonical_name).where(Domain.id == domain_id),
            )
        if name is None:
            raise ResourceNotFoundError("Domain", str(domain_id))
        return name

    @asynccontextmanager
    async def transaction(
        self, name: str, operation: RegistryOperation,
    ) -> AsyncGenerator[AsyncSession, None]:
        key = hierarchy_root(name) or normalize_name(name)
        async with self.locks.hold(key):
            async with self.session_provider() as db:
                try:
                    await acquire_advisory_lock(db, key)
                    yield db
                    await db.commit()
                except RegistryError as e:
                    await db.rollback()
                    log_rejection(e, operation, name)
                    raise
                except Exception:
                    await db.rollback()
                    raise
