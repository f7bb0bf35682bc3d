"""Shared Domain Registry — the privileged, organization-less subset of domains.

Invariants:
    - find_or_create_shared is idempotent: one record per canonical name
    - create_unowned requires a privileged actor; find_or_create_shared is a
      system path (startup seeding) and is always privileged
    - Shared domains auto-associate with organizations created AFTER them,
      never retroactively (associate_new_organization is the creation hook)
    - default_serving_domain reads core.serving_domain at call time

Design Decisions:
    - Creation delegates to DomainLifecycle.create: shared names go through the
      same format and overlap checks as owned names
    - Hook runs inside the organization-creation transaction and passes every
      association through the same AssociationGuard as direct calls
    - The hook runs under the hierarchy locks of all shared domains, so a
      concurrent destroy cannot remove a domain between listing and insert
"""

import logging
from collections.abc import Collection
from uuid import UUID

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.domain_hierarchy import hierarchy_root
from app.core.enforce_association import check_organization_association
from app.core.errors import DuplicateNameError
from app.core.serving_domain import DefaultServingDomainName, default_serving_domain_name
from app.infrastructure.name_locks import NameLockRegistry, name_locks
from app.models.domain import Domain, organization_domains
from app.services.domain_lifecycle import DomainLifecycle
from app.services.domain_queries import find_domain_by_name, list_shared_domains
from app.services.registry_transaction import SessionProvider

logger = logging.getLogger(__name__)


class SharedDomainRegistry:
    """Lookup, creation and auto-association of shared domains."""

    def __init__(
        self,
        session_provider: SessionProvider,
        lifecycle: DomainLifecycle | None = None,
        serving_name: DefaultServingDomainName = default_serving_domain_name,
        locks: NameLockRegistry = name_locks,
    ):
        self.session_provider = session_provider
        self.locks = locks
        self.lifecycle = lifecycle or DomainLifecycle(session_provider, locks)
        self.serving_name = serving_name

    async def find_shared(self, name: str) -> Domain | None:
        async with self.session_provider() as db:
            return await find_domain_by_name(db, name, shared_only=True)

    async def find_or_create_shared(self, name: str) -> Domain:
        """Return the shared domain with this name, creating it if absent."""
        existing = await self.find_shared(name)
        if existing is not None:
            return existing
        try:
            return await self.lifecycle.create(
                name, owning_organization_id=None, actor_is_privileged=True,
            )
        except DuplicateNameError:
            # a concurrent caller created it between lookup and create
            existing = await self.find_shared(name)
            if existing is None:
                raise
            return existing

    async def create_unowned(
        self, name: str, actor_is_privileged: bool, wildcard: bool = False,
    ) -> Domain:
        return await self.lifecycle.create(
            name,
            owning_organization_id=None,
            wildcard=wildcard,
            actor_is_privileged=actor_is_privileged,
        )

    async def list_shared(self) -> list[Domain]:
        async with self.session_provider() as db:
            return await list_shared_domains(db)

    async def default_serving_domain(self) -> Domain | None:
        """Shared domain matching the configured default serving name, if any."""
        name = self.serving_name.get()
        if name is None:
            return None
        return await self.find_shared(name)

    async def shared_lock_keys(self) -> list[str]:
        """Hierarchy keys covering every shared domain, for the creation hook."""
        return sorted({hierarchy_root(d.canonical_name) for d in await self.list_shared()})

    async def associate_new_organization(
        self,
        db: AsyncSession,
        organization_id: UUID,
        locked_keys: Collection[str] | None = None,
    ) -> int:
        """Organization-creation hook: attach every existing shared domain.

        With locked_keys, only shared domains under those hierarchy keys are attached.
        """
        shared = [
            domain for domain in await list_shared_domains(db)
            if locked_keys is None
            or hierarchy_root(domain.canonical_name) in locked_keys
        ]
        for domain in shared:
            error = check_organization_association(domain, organization_id)
            if error:
                raise error
        if shared:
            await db.execute(
                insert(organization_domains),
                [
                    {"organization_id": organization_id, "domain_id": domain.id}
                    for domain in shared
                ],
            )
        logger.info(
            f"Attached {len(shared)} shared domain(s) to new organization",
            extra={"organization_id": organization_id},
        )
        return len(shared)


async def seed_shared_domains(
    registry: SharedDomainRegistry, settings: Settings,
) -> list[Domain]:
    """Startup: apply the default serving name and ensure configured shared domains exist."""
    names = list(settings.shared_domain_names)
    if settings.default_serving_domain_name:
        registry.serving_name.set(settings.default_serving_domain_name)
        names.append(settings.default_serving_domain_name)

    seeded = []
    for name in dict.fromkeys(n.strip().lower() for n in names):
        seeded.append(await registry.find_or_create_shared(name))
    return seeded
