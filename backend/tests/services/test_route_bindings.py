"""Route Bindings — route creation rules and deletion."""

import pytest
from uuid import uuid4

from app.core.errors import (
    DomainNotInSpaceError,
    HostNotAllowedError,
    ResourceNotFoundError,
)


async def test_create_bare_route(lifecycle, bindings, org_a, space_a):
    domain = await lifecycle.create("example.com", owning_organization_id=org_a.id)
    await lifecycle.add_space(domain.id, space_a.id)

    route = await bindings.create_route(domain.id, space_a.id)

    assert route.host == ""
    assert [r.id for r in await bindings.list_routes(domain.id)] == [route.id]


async def test_host_requires_wildcard(lifecycle, bindings, org_a, space_a):
    domain = await lifecycle.create("example.com", owning_organization_id=org_a.id)
    await lifecycle.add_space(domain.id, space_a.id)

    with pytest.raises(HostNotAllowedError):
        await bindings.create_route(domain.id, space_a.id, host="www")
    assert await bindings.list_routes(domain.id) == []


async def test_route_requires_space_association(lifecycle, bindings, org_a, space_a):
    domain = await lifecycle.create("example.com", owning_organization_id=org_a.id)

    with pytest.raises(DomainNotInSpaceError):
        await bindings.create_route(domain.id, space_a.id)


async def test_shared_domain_routes_in_any_attached_space(
    lifecycle, bindings, space_b,
):
    domain = await lifecycle.create("apps.io", actor_is_privileged=True, wildcard=True)
    await lifecycle.add_space(domain.id, space_b.id)

    route = await bindings.create_route(domain.id, space_b.id, host="shop")

    assert route.host == "shop"


async def test_delete_route(lifecycle, bindings, org_a, space_a):
    domain = await lifecycle.create("example.com", owning_organization_id=org_a.id)
    await lifecycle.add_space(domain.id, space_a.id)
    route = await bindings.create_route(domain.id, space_a.id)

    await bindings.delete_route(route.id)

    assert await bindings.list_routes(domain.id) == []
    with pytest.raises(ResourceNotFoundError):
        await bindings.delete_route(route.id)


async def test_route_under_unknown_domain_raises(bindings, space_a):
    with pytest.raises(ResourceNotFoundError):
        await bindings.create_route(uuid4(), space_a.id)
