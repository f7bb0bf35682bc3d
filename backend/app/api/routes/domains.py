"""Domain Routes — HTTP surface for the registry lifecycle.

Invariants:
    - Routes contain no registry rules: every check lives in core/, every
      mutation in DomainLifecycle / SharedDomainRegistry
    - RegistryError propagates to the global handler and is surfaced verbatim
    - Responses use the DomainSummary / DomainDetail presentation records

Design Decisions:
    - /shared and /default declared before /{domain_id} so they are not parsed as UUIDs
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.dependencies import (
    get_actor_is_privileged, get_domain_lifecycle, get_shared_registry,
)
from app.core.errors import ResourceNotFoundError
from app.schemas.domain import (
    DestroyResponse, DomainCreate, DomainDetail, DomainSummary, DomainUpdate,
)
from app.services.domain_lifecycle import DomainLifecycle
from app.services.shared_domains import SharedDomainRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/domains", tags=["domains"])


@router.post(
    "", response_model=DomainDetail, status_code=status.HTTP_201_CREATED,
)
async def create_domain(
    body: DomainCreate,
    lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
    actor_is_privileged: bool = Depends(get_actor_is_privileged),
):
    """Register an owned domain, or a shared one for privileged actors.

    Privilege comes from the X-Actor-Privileged header, which the gateway
    strips from client requests and re-sets for privileged callers.
    """
    domain = await lifecycle.create(
        body.name,
        owning_organization_id=body.owning_organization_id,
        wildcard=body.wildcard,
        actor_is_privileged=actor_is_privileged,
    )
    return DomainDetail.from_domain(domain)


@router.get("/shared", response_model=list[DomainSummary])
async def list_shared_domains(
    registry: SharedDomainRegistry = Depends(get_shared_registry),
):
    return [DomainSummary.from_domain(d) for d in await registry.list_shared()]


@router.get("/default", response_model=DomainSummary)
async def get_default_serving_domain(
    registry: SharedDomainRegistry = Depends(get_shared_registry),
):
    domain = await registry.default_serving_domain()
    if domain is None:
        raise ResourceNotFoundError("Domain", "default")
    return DomainSummary.from_domain(domain)


@router.get("/{domain_id}", response_model=DomainDetail)
async def get_domain(
    domain_id: UUID, lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
):
    return DomainDetail.from_domain(await lifecycle.get(domain_id))


@router.patch("/{domain_id}", response_model=DomainDetail)
async def update_domain(
    domain_id: UUID,
    body: DomainUpdate,
    lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
):
    return DomainDetail.from_domain(await lifecycle.update(domain_id, body))


@router.delete("/{domain_id}", response_model=DestroyResponse)
async def destroy_domain(
    domain_id: UUID, lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
):
    """Delete the domain with its routes and associations."""
    result = await lifecycle.destroy(domain_id)
    return DestroyResponse(
        domain_id=result.domain_id,
        name=result.name,
        routes_deleted=result.routes_deleted,
        organizations_detached=result.organizations_detached,
        spaces_detached=result.spaces_detached,
    )


@router.put("/{domain_id}/spaces/{space_id}", response_model=DomainSummary)
async def add_space(
    domain_id: UUID,
    space_id: UUID,
    lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
):
    return DomainSummary.from_domain(await lifecycle.add_space(domain_id, space_id))


@router.put(
    "/{domain_id}/organizations/{organization_id}", response_model=DomainSummary,
)
async def add_organization(
    domain_id: UUID,
    organization_id: UUID,
    lifecycle: DomainLifecycle = Depends(get_domain_lifecycle),
):
    domain = await lifecycle.add_organization(domain_id, organization_id)
    return DomainSummary.from_domain(domain)
