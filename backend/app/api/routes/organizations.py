"""Organization Routes — tenant and space creation plus domain listings.

Invariants:
    - Creating an organization attaches every existing shared domain to it
    - Listings read through a request-scoped session (get_db)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_organization_lifecycle
from app.infrastructure.database import get_db
from app.schemas.domain import DomainSummary
from app.schemas.organization import (
    OrganizationCreate, OrganizationResponse, SpaceCreate, SpaceResponse,
)
from app.services.domain_queries import (
    get_organization_or_raise,
    get_space_or_raise,
    list_organization_domains,
    list_space_domains,
)
from app.services.organization_lifecycle import OrganizationLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["organizations"])


@router.post(
    "/organizations",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    body: OrganizationCreate,
    lifecycle: OrganizationLifecycle = Depends(get_organization_lifecycle),
):
    return await lifecycle.create_organization(body.name)


@router.post(
    "/organizations/{organization_id}/spaces",
    response_model=SpaceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_space(
    organization_id: UUID,
    body: SpaceCreate,
    lifecycle: OrganizationLifecycle = Depends(get_organization_lifecycle),
):
    return await lifecycle.create_space(organization_id, body.name)


@router.get(
    "/organizations/{organization_id}/domains",
    response_model=list[DomainSummary],
)
async def list_domains_for_organization(
    organization_id: UUID, db: AsyncSession = Depends(get_db),
):
    await get_organization_or_raise(db, organization_id)
    domains = await list_organization_domains(db, organization_id)
    return [DomainSummary.from_domain(d) for d in domains]


@router.get("/spaces/{space_id}/domains", response_model=list[DomainSummary])
async def list_domains_for_space(
    space_id: UUID, db: AsyncSession = Depends(get_db),
):
    await get_space_or_raise(db, space_id)
    domains = await list_space_domains(db, space_id)
    return [DomainSummary.from_domain(d) for d in domains]
