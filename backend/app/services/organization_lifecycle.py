"""Organization Lifecycle — tenant and space creation, with the shared-domain hook.

Invariants:
    - A new organization is associated with every shared domain that exists at
      its creation, in the same transaction
    - The hook holds the hierarchy locks of every shared domain it attaches;
      a shared domain created after the keys are read is not attached
    - A space belongs to exactly one existing organization

Design Decisions:
    - Organization/space business logic beyond identity is out of scope; this
      module exists so the registry's creation hook has a single caller
"""

import logging
from uuid import UUID

from app.infrastructure.name_locks import acquire_advisory_lock
from app.models.organization import Organization
from app.models.space import Space
from app.services.domain_queries import get_organization_or_raise
from app.services.registry_transaction import SessionProvider
from app.services.shared_domains import SharedDomainRegistry

logger = logging.getLogger(__name__)


class OrganizationLifecycle:
    """Creates organizations and spaces."""

    def __init__(
        self,
        session_provider: SessionProvider,
        shared_registry: SharedDomainRegistry | None = None,
    ):
        self.session_provider = session_provider
        self.shared_registry = shared_registry or SharedDomainRegistry(session_provider)

    async def create_organization(self, name: str) -> Organization:
        keys = await self.shared_registry.shared_lock_keys()
        async with self.shared_registry.locks.hold_many(keys):
            async with self.session_provider() as db:
                for key in keys:
                    await acquire_advisory_lock(db, key)
                organization = Organization(name=name)
                db.add(organization)
                await db.flush()
                await self.shared_registry.associate_new_organization(
                    db, organization.id, locked_keys=keys,
                )
                await db.commit()

        logger.info(
            f"Organization created: {organization.name}",
            extra={"organization_id": organization.id},
        )
        return organization

    async def create_space(self, organization_id: UUID, name: str) -> Space:
        async with self.session_provider() as db:
            await get_organization_or_raise(db, organization_id)
            space = Space(organization_id=organization_id, name=name)
            db.add(space)
            await db.commit()

        logger.info(
            f"Space created: {space.name}",
            extra={"organization_id": organization_id, "space_id": space.id},
        )
        return space
