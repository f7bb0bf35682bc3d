"""API Dependencies — wire services to the process database manager.

Invariants:
    - Services receive a session provider, never a request-scoped session:
      each mutation opens its own transaction inside its hierarchy lock
    - Actor privilege is resolved once per request and passed explicitly

Design Decisions:
    - X-Actor-Privileged is trusted only because the upstream gateway strips any
      client-supplied value and re-sets it; without such a gateway set
      TRUST_ACTOR_PRIVILEGE_HEADER=false (shared creation is then refused)
    - db_manager read through the module at call time so startup/test patching
      of app.infrastructure.database.db_manager is honored
"""

from fastapi import Depends, Header

import app.infrastructure.database as database
from app.config import Settings, get_settings
from app.services.domain_lifecycle import DomainLifecycle
from app.services.organization_lifecycle import OrganizationLifecycle
from app.services.registry_transaction import SessionProvider
from app.services.route_bindings import RouteBindings
from app.services.shared_domains import SharedDomainRegistry


def get_session_provider() -> SessionProvider:
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    return database.db_manager.session


def get_domain_lifecycle(
    provider: SessionProvider = Depends(get_session_provider),
) -> DomainLifecycle:
    return DomainLifecycle(provider)


def get_shared_registry(
    provider: SessionProvider = Depends(get_session_provider),
) -> SharedDomainRegistry:
    return SharedDomainRegistry(provider)


def get_organization_lifecycle(
    provider: SessionProvider = Depends(get_session_provider),
) -> OrganizationLifecycle:
    return OrganizationLifecycle(provider)


def get_route_bindings(
    provider: SessionProvider = Depends(get_session_provider),
) -> RouteBindings:
    return RouteBindings(provider)


def get_actor_is_privileged(
    x_actor_privileged: bool = Header(False),
    settings: Settings = Depends(get_settings),
) -> bool:
    """Privilege from the gateway header; always False when the header is not trusted.

    Deployments with another authorization source override this dependency.
    """
    return settings.trust_actor_privilege_header and x_actor_privileged
