"""Registry Schemas — boundary validation for domain, organization and route payloads."""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from app.schemas.domain import DomainCreate, DomainDetail, DomainSummary, DomainUpdate
from app.schemas.organization import OrganizationCreate
from app.schemas.route import RouteCreate


@dataclass
class FakeDomain:
    id: UUID
    name: str
    owning_organization_id: UUID | None
    wildcard: bool = False


def test_domain_create_strips_name():
    assert DomainCreate(name="  example.com ").name == "example.com"


def test_domain_update_rejects_immutable_fields():
    with pytest.raises(ValidationError):
        DomainUpdate(name="other.com")
    with pytest.raises(ValidationError):
        DomainUpdate(owning_organization_id=str(uuid4()))


def test_domain_update_changes_only_set_fields():
    assert DomainUpdate().changes() == {}
    assert DomainUpdate(wildcard=False).changes() == {"wildcard": False}


def test_summary_from_domain():
    domain = FakeDomain(uuid4(), "apps.io", None)

    summary = DomainSummary.from_domain(domain)

    assert summary.model_dump() == {
        "id": domain.id, "name": "apps.io", "owning_organization_id": None,
    }


def test_detail_marks_shared_domains():
    owner = uuid4()
    assert DomainDetail.from_domain(FakeDomain(uuid4(), "apps.io", None)).shared
    assert not DomainDetail.from_domain(FakeDomain(uuid4(), "example.com", owner)).shared


def test_organization_name_cannot_be_blank():
    with pytest.raises(ValidationError):
        OrganizationCreate(name="   ")


def test_route_host_stripped_and_defaults_to_bare():
    ids = {"domain_id": uuid4(), "space_id": uuid4()}
    assert RouteCreate(**ids).host == ""
    assert RouteCreate(**ids, host=" www ").host == "www"
