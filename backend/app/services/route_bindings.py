"""Route Bindings — the minimal route collaborator the registry reads and cascades.

Invariants:
    - A route's space must be associated with the route's domain
    - A non-empty host requires the domain's wildcard flag
    - Route creation and deletion take the domain's hierarchy lock, so they
      serialize with wildcard updates and destroy of the same domain

Design Decisions:
    - Routes are externally owned; only what the wildcard invariant and the
      destroy cascade need is implemented here
"""

import logging
from uuid import UUID

from app.core.domain_types import RegistryOperation
from app.core.enforce_association import check_space_has_domain
from app.core.enforce_wildcard import check_route_host_allowed
from app.infrastructure.name_locks import NameLockRegistry, name_locks
from app.models.domain import Domain
from app.models.route import Route
from app.services.domain_queries import (
    get_domain_or_raise,
    get_route_or_raise,
    get_space_or_raise,
    list_routes,
    space_domain_ids,
)
from app.services.registry_transaction import SerializedMutations, SessionProvider

logger = logging.getLogger(__name__)


class RouteBindings:
    """Create, delete and list routes under registered domains."""

    def __init__(
        self, session_provider: SessionProvider, locks: NameLockRegistry = name_locks,
    ):
        self.session_provider = session_provider
        self.mutations = SerializedMutations(session_provider, locks)

    async def list_routes(self, domain_id: UUID) -> list[Route]:
        async with self.session_provider() as db:
            await get_domain_or_raise(db, domain_id)
            return await list_routes(db, domain_id)

    async def create_route(
        self, domain_id: UUID, space_id: UUID, host: str = "",
    ) -> Route:
        name = await self.mutations.domain_name(domain_id)
        async with self.mutations.transaction(
            name, RegistryOperation.CREATE_ROUTE,
        ) as db:
            domain = await get_domain_or_raise(db, domain_id)
            space = await get_space_or_raise(db, space_id)
            error = (
                check_space_has_domain(
                    await space_domain_ids(db, space_id), domain, space,
                )
                or check_route_host_allowed(domain, host)
            )
            if error:
                raise error
            route = Route(domain_id=domain_id, space_id=space_id, host=host.strip())
            db.add(route)

        logger.info(
            f"Route created: {_route_label(route, domain)}",
            extra={
                "domain_id": domain_id,
                "space_id": space_id,
                "operation": RegistryOperation.CREATE_ROUTE.value,
            },
        )
        return route

    async def delete_route(self, route_id: UUID) -> None:
        async with self.session_provider() as db:
            route = await get_route_or_raise(db, route_id)
            domain_id = route.domain_id
        name = await self.mutations.domain_name(domain_id)
        async with self.mutations.transaction(
            name, RegistryOperation.DELETE_ROUTE,
        ) as db:
            route = await get_route_or_raise(db, route_id)
            await db.delete(route)

        logger.info(
            "Route deleted",
            extra={
                "domain_id": domain_id,
                "operation": RegistryOperation.DELETE_ROUTE.value,
            },
        )


def _route_label(route: Route, domain: Domain) -> str:
    return f"{route.host}.{domain.name}" if route.host else domain.name
