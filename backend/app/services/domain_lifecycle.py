"""Domain Lifecycle — create, update, associate and destroy registered domains.

Invariants:
    - States: absent -> registered (owned | shared) -> destroyed; nothing in between
    - Every mutation runs in one serialized transaction (registry_transaction.py):
      a rejected check leaves prior state untouched
    - create: name format -> shared privilege -> owner exists -> overlap ->
      duplicate -> insert -> owner auto-associated
    - update: wildcard change passes WildcardGuard first; name/owner immutable
    - destroy: routes deleted, associations removed, record deleted — one unit

Design Decisions:
    - Shell owns ordering and IO; every rule is a pure core check chained with `or`
    - Associations written with explicit insert/delete statements: the cascade
      on destroy is visible here instead of hidden in ORM relationship config
    - Unique index on canonical_name backs the duplicate check; an
      IntegrityError at flush surfaces as DuplicateNameError
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError

from app.core.domain_types import DomainLifecycleState, RegistryOperation
from app.core.enforce_association import (
    check_organization_association, check_space_association,
)
from app.core.enforce_name import check_name_format, normalize_name
from app.core.enforce_overlap import domain_kind, validate_registration
from app.core.enforce_shared import check_shared_creation_privilege
from app.core.enforce_wildcard import check_wildcard_transition
from app.core.errors import DuplicateNameError
from app.infrastructure.name_locks import NameLockRegistry, name_locks
from app.models.domain import Domain, organization_domains, space_domains
from app.models.route import Route
from app.schemas.domain import DomainUpdate
from app.services.domain_queries import (
    find_domain_by_name,
    find_overlap_candidates,
    get_domain_or_raise,
    get_organization_or_raise,
    get_space_or_raise,
    is_associated,
    list_organization_domains,
    list_routes,
    list_space_domains,
)
from app.services.registry_transaction import (
    SerializedMutations, SessionProvider, log_rejection,
)

logger = logging.getLogger(__name__)


@dataclass
class DestroyResult:
    """What a destroy removed."""
    domain_id: UUID
    name: str
    routes_deleted: int
    organizations_detached: int
    spaces_detached: int
    state: DomainLifecycleState = DomainLifecycleState.DESTROYED


class DomainLifecycle:
    """Orchestrates registry checks and persistence for one domain at a time."""

    def __init__(
        self, session_provider: SessionProvider, locks: NameLockRegistry = name_locks,
    ):
        self.session_provider = session_provider
        self.mutations = SerializedMutations(session_provider, locks)

    # ─── Reads ───────────────────────────────────────────────────

    async def get(self, domain_id: UUID) -> Domain:
        async with self.session_provider() as db:
            return await get_domain_or_raise(db, domain_id)

    async def get_by_name(self, name: str) -> Domain | None:
        async with self.session_provider() as db:
            return await find_domain_by_name(db, name)

    async def organization_domains(self, organization_id: UUID) -> list[Domain]:
        async with self.session_provider() as db:
            await get_organization_or_raise(db, organization_id)
            return await list_organization_domains(db, organization_id)

    async def space_domains(self, space_id: UUID) -> list[Domain]:
        async with self.session_provider() as db:
            await get_space_or_raise(db, space_id)
            return await list_space_domains(db, space_id)

    # ─── Mutations ───────────────────────────────────────────────

    async def create(
        self,
        name: str,
        owning_organization_id: UUID | None = None,
        wildcard: bool = False,
        actor_is_privileged: bool = False,
    ) -> Domain:
        """Register a domain. Shared (unowned) domains need a privileged actor."""
        display_name = (name or "").strip()
        error = (
            check_name_format(display_name)
            or check_shared_creation_privilege(
                display_name, owning_organization_id, actor_is_privileged,
            )
        )
        if error:
            raise log_rejection(error, RegistryOperation.CREATE, display_name)

        async with self.mutations.transaction(
            display_name, RegistryOperation.CREATE,
        ) as db:
            if owning_organization_id is not None:
                await get_organization_or_raise(db, owning_organization_id)

            existing = await find_overlap_candidates(db, display_name)
            error = validate_registration(
                display_name, owning_organization_id, existing,
            )
            if error:
                raise error

            domain = Domain(
                name=display_name,
                canonical_name=normalize_name(display_name),
                owning_organization_id=owning_organization_id,
                wildcard=wildcard,
            )
            db.add(domain)
            try:
                await db.flush()
            except IntegrityError:
                raise DuplicateNameError(display_name)

            if owning_organization_id is not None:
                await db.execute(
                    insert(organization_domains).values(
                        organization_id=owning_organization_id, domain_id=domain.id,
                    )
                )

        logger.info(
            f"Domain registered: {domain.name} "
            f"({domain_kind(owning_organization_id).value})",
            extra={
                "domain_id": domain.id,
                "domain_name": domain.name,
                "organization_id": owning_organization_id,
                "operation": RegistryOperation.CREATE.value,
            },
        )
        return domain

    async def update(self, domain_id: UUID, changes: DomainUpdate) -> Domain:
        """Apply mutable field changes. All-or-nothing."""
        name = await self.mutations.domain_name(domain_id)
        fields = changes.changes()
        async with self.mutations.transaction(name, RegistryOperation.UPDATE) as db:
            domain = await get_domain_or_raise(db, domain_id)
            if "wildcard" in fields:
                routes = await list_routes(db, domain_id)
                error = check_wildcard_transition(domain, fields["wildcard"], routes)
                if error:
                    raise error
                domain.wildcard = fields["wildcard"]

        logger.info(
            f"Domain updated: {domain.name}",
            extra={
                "domain_id": domain.id,
                "domain_name": domain.name,
                "operation": RegistryOperation.UPDATE.value,
            },
        )
        return domain

    async def add_space(self, domain_id: UUID, space_id: UUID) -> Domain:
        """Attach a space. Owned domains accept only the owner's spaces."""
        name = await self.mutations.domain_name(domain_id)
        async with self.mutations.transaction(name, RegistryOperation.ADD_SPACE) as db:
            domain = await get_domain_or_raise(db, domain_id)
            space = await get_space_or_raise(db, space_id)
            error = check_space_association(domain, space)
            if error:
                raise error
            if not await is_associated(db, space_domains, "space_id", space_id, domain_id):
                await db.execute(
                    insert(space_domains).values(space_id=space_id, domain_id=domain_id),
                )

        logger.info(
            f"Space attached to {domain.name}",
            extra={
                "domain_id": domain.id,
                "space_id": space_id,
                "operation": RegistryOperation.ADD_SPACE.value,
            },
        )
        return domain

    async def add_organization(self, domain_id: UUID, organization_id: UUID) -> Domain:
        """Attach an organization. Owned domains accept only their owner."""
        name = await self.mutations.domain_name(domain_id)
        async with self.mutations.transaction(
            name, RegistryOperation.ADD_ORGANIZATION,
        ) as db:
            domain = await get_domain_or_raise(db, domain_id)
            await get_organization_or_raise(db, organization_id)
            error = check_organization_association(domain, organization_id)
            if error:
                raise error
            if not await is_associated(
                db, organization_domains, "organization_id", organization_id, domain_id,
            ):
                await db.execute(
                    insert(organization_domains).values(
                        organization_id=organization_id, domain_id=domain_id,
                    )
                )

        logger.info(
            f"Organization attached to {domain.name}",
            extra={
                "domain_id": domain.id,
                "organization_id": organization_id,
                "operation": RegistryOperation.ADD_ORGANIZATION.value,
            },
        )
        return domain

    async def destroy(self, domain_id: UUID) -> DestroyResult:
        """Delete routes, detach organizations and spaces, delete the domain."""
        name = await self.mutations.domain_name(domain_id)
        async with self.mutations.transaction(name, RegistryOperation.DESTROY) as db:
            domain = await get_domain_or_raise(db, domain_id)
            routes = await db.execute(
                delete(Route).where(Route.domain_id == domain_id),
            )
            organizations = await db.execute(
                delete(organization_domains)
                .where(organization_domains.c.domain_id == domain_id),
            )
            spaces = await db.execute(
                delete(space_domains).where(space_domains.c.domain_id == domain_id),
            )
            await db.delete(domain)
            result = DestroyResult(
                domain_id=domain_id,
                name=domain.name,
                routes_deleted=routes.rowcount,
                organizations_detached=organizations.rowcount,
                spaces_detached=spaces.rowcount,
            )

        logger.info(
            f"Domain destroyed: {result.name} "
            f"({result.routes_deleted} routes, {result.spaces_detached} spaces)",
            extra={
                "domain_id": domain_id,
                "domain_name": result.name,
                "operation": RegistryOperation.DESTROY.value,
            },
        )
        return result
