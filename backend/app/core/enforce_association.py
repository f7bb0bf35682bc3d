"""Association Enforcement — which spaces and organizations may attach to a domain.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Owned domain: only spaces of the owning organization, only the owning organization
    - Shared domain: any space, any organization
    - Recording the association is the shell's job, never the guard's

Design Decisions:
    - Same guard for direct calls and the organization-creation hook, so every
      association path goes through one rule set
    - Owner auto-association on create is a lifecycle side effect, not a guard concern
"""

from collections.abc import Collection
from uuid import UUID

from app.core.errors import (
    DomainNotInSpaceError,
    InvalidOrganizationRelationError,
    InvalidSpaceRelationError,
)
from app.core.repository_protocols import DomainLike, SpaceLike


def check_space_association(
    domain: DomainLike, space: SpaceLike,
) -> InvalidSpaceRelationError | None:
    owner_id = domain.owning_organization_id
    if owner_id is not None and space.organization_id != owner_id:
        return InvalidSpaceRelationError(domain.name, str(space.id))
    return None


def check_organization_association(
    domain: DomainLike, organization_id: UUID,
) -> InvalidOrganizationRelationError | None:
    owner_id = domain.owning_organization_id
    if owner_id is not None and organization_id != owner_id:
        return InvalidOrganizationRelationError(domain.name, str(organization_id))
    return None


def check_space_has_domain(
    space_domain_ids: Collection[UUID], domain: DomainLike, space: SpaceLike,
) -> DomainNotInSpaceError | None:
    """Routes can only be created in a space the domain is attached to."""
    if domain.id not in space_domain_ids:
        return DomainNotInSpaceError(domain.name, str(space.id))
    return None
