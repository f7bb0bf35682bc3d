"""Service test fixtures — async DB, registry services and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Services receive the test sessionmaker as their session provider
    - get_session_provider and get_db overridden for route tests
    - default_serving_domain_name cleared around every test

Design Decisions:
    - SQLite in-memory: fast, no external dependency; advisory locks are a
      no-op off PostgreSQL, the in-process hierarchy lock still applies
    - Organizations and spaces created through OrganizationLifecycle so the
      shared-domain hook runs exactly as in production
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_session_provider
from app.core.serving_domain import default_serving_domain_name
from app.db.base import Base
from app.infrastructure.database import get_db
from app.main import app
from app.services.domain_lifecycle import DomainLifecycle
from app.services.organization_lifecycle import OrganizationLifecycle
from app.services.route_bindings import RouteBindings
from app.services.shared_domains import SharedDomainRegistry


@pytest.fixture(autouse=True)
def reset_serving_domain():
    default_serving_domain_name.clear()
    yield
    default_serving_domain_name.clear()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


# ─── Services ────────────────────────────────────────────────────

@pytest.fixture
def lifecycle(test_session_factory):
    return DomainLifecycle(test_session_factory)


@pytest.fixture
def shared_registry(test_session_factory, lifecycle):
    return SharedDomainRegistry(test_session_factory, lifecycle)


@pytest.fixture
def organizations(test_session_factory, shared_registry):
    return OrganizationLifecycle(test_session_factory, shared_registry)


@pytest.fixture
def bindings(test_session_factory):
    return RouteBindings(test_session_factory)


@pytest.fixture
async def org_a(organizations):
    return await organizations.create_organization("Org A")


@pytest.fixture
async def org_b(organizations):
    return await organizations.create_organization("Org B")


@pytest.fixture
async def space_a(organizations, org_a):
    return await organizations.create_space(org_a.id, "space-a")


@pytest.fixture
async def space_b(organizations, org_b):
    return await organizations.create_space(org_b.id, "space-b")


# ─── HTTP ────────────────────────────────────────────────────────

@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with the session provider and get_db overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_session_provider] = lambda: test_session_factory
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
