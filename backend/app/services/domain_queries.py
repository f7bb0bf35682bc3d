"""Domain Queries — storage reads shared by the registry services.

Invariants:
    - Read-only: no function here adds, flushes or commits
    - Name lookups compare canonical_name (case-insensitive by construction)
    - find_overlap_candidates returns a superset of every domain that can
      overlap the candidate; the pure resolver makes the final decision

Design Decisions:
    - Narrowed overlap query (ancestors by suffix-chain IN, descendants by
      suffix LIKE) instead of loading every registered name
    - *_or_raise variants raise ResourceNotFoundError so services stay linear
"""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_hierarchy import LABEL_SEPARATOR, suffix_chain
from app.core.enforce_name import normalize_name
from app.core.errors import ResourceNotFoundError
from app.models.domain import Domain, organization_domains, space_domains
from app.models.organization import Organization
from app.models.route import Route
from app.models.space import Space


async def get_domain_or_raise(db: AsyncSession, domain_id: UUID) -> Domain:
    domain = await db.get(Domain, domain_id, populate_existing=True)
    if domain is None:
        raise ResourceNotFoundError("Domain", str(domain_id))
    return domain


async def get_organization_or_raise(
    db: AsyncSession, organization_id: UUID,
) -> Organization:
    organization = await db.get(Organization, organization_id)
    if organization is None:
        raise ResourceNotFoundError("Organization", str(organization_id))
    return organization


async def get_space_or_raise(db: AsyncSession, space_id: UUID) -> Space:
    space = await db.get(Space, space_id)
    if space is None:
        raise ResourceNotFoundError("Space", str(space_id))
    return space


async def get_route_or_raise(db: AsyncSession, route_id: UUID) -> Route:
    route = await db.get(Route, route_id)
    if route is None:
        raise ResourceNotFoundError("Route", str(route_id))
    return route


async def find_domain_by_name(
    db: AsyncSession, name: str, shared_only: bool = False,
) -> Domain | None:
    """Case-insensitive exact lookup."""
    query = select(Domain).where(Domain.canonical_name == normalize_name(name))
    if shared_only:
        query = query.where(Domain.owning_organization_id.is_(None))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def find_overlap_candidates(db: AsyncSession, name: str) -> list[Domain]:
    """Domains equal to, above, or below the candidate in its hierarchy."""
    chain = suffix_chain(name)
    if chain is None:
        return []
    canonical = normalize_name(name)
    result = await db.execute(
        select(Domain).where(
            or_(
                Domain.canonical_name.in_(chain),
                Domain.canonical_name.endswith(
                    LABEL_SEPARATOR + canonical, autoescape=True,
                ),
            )
        )
    )
    return list(result.scalars().all())


async def list_routes(db: AsyncSession, domain_id: UUID) -> list[Route]:
    result = await db.execute(
        select(Route).where(Route.domain_id == domain_id).order_by(Route.created_at),
    )
    return list(result.scalars().all())


async def list_shared_domains(db: AsyncSession) -> list[Domain]:
    result = await db.execute(
        select(Domain)
        .where(Domain.owning_organization_id.is_(None))
        .order_by(Domain.canonical_name),
    )
    return list(result.scalars().all())


async def list_organization_domains(
    db: AsyncSession, organization_id: UUID,
) -> list[Domain]:
    result = await db.execute(
        select(Domain)
        .join(organization_domains, organization_domains.c.domain_id == Domain.id)
        .where(organization_domains.c.organization_id == organization_id)
        .order_by(Domain.canonical_name),
    )
    return list(result.scalars().all())


async def list_space_domains(db: AsyncSession, space_id: UUID) -> list[Domain]:
    result = await db.execute(
        select(Domain)
        .join(space_domains, space_domains.c.domain_id == Domain.id)
        .where(space_domains.c.space_id == space_id)
        .order_by(Domain.canonical_name),
    )
    return list(result.scalars().all())


async def space_domain_ids(db: AsyncSession, space_id: UUID) -> set[UUID]:
    result = await db.execute(
        select(space_domains.c.domain_id).where(space_domains.c.space_id == space_id),
    )
    return set(result.scalars().all())


async def is_associated(
    db: AsyncSession, table, column: str, owner_id: UUID, domain_id: UUID,
) -> bool:
    """True when (owner_id, domain_id) already exists in an association table."""
    result = await db.execute(
        select(table.c.domain_id)
        .where(table.c[column] == owner_id)
        .where(table.c.domain_id == domain_id),
    )
    return result.first() is not None
