"""Shared Domain Enforcement — who may create domains without an owner.

Invariants:
    - PURE: privilege arrives as an explicit boolean, never from ambient context
    - Owned domains need no privilege; shared domains need a privileged actor
"""

from uuid import UUID

from app.core.errors import UnauthorizedSharedDomainCreationError


def check_shared_creation_privilege(
    name: str, owning_organization_id: UUID | None, actor_is_privileged: bool,
) -> UnauthorizedSharedDomainCreationError | None:
    if owning_organization_id is None and not actor_is_privileged:
        return UnauthorizedSharedDomainCreationError(name)
    return None
