"""Association Enforcement — tests for space and organization attachment rules."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from app.core.enforce_association import (
    check_organization_association,
    check_space_association,
    check_space_has_domain,
)
from app.core.errors import (
    DomainNotInSpaceError,
    InvalidOrganizationRelationError,
    InvalidSpaceRelationError,
)

ORG_A = uuid4()
ORG_B = uuid4()


@dataclass
class FakeDomain:
    name: str = "example.com"
    owning_organization_id: UUID | None = None
    wildcard: bool = False
    id: UUID = field(default_factory=uuid4)


@dataclass
class FakeSpace:
    organization_id: UUID
    id: UUID = field(default_factory=uuid4)


def test_owned_domain_accepts_owner_space():
    assert check_space_association(FakeDomain(owning_organization_id=ORG_A), FakeSpace(ORG_A)) is None


def test_owned_domain_rejects_foreign_space():
    space = FakeSpace(ORG_B)
    error = check_space_association(FakeDomain(owning_organization_id=ORG_A), space)
    assert isinstance(error, InvalidSpaceRelationError)
    assert error.context.space_id == str(space.id)
    assert error.http_status == 400


def test_shared_domain_accepts_any_space():
    assert check_space_association(FakeDomain(), FakeSpace(ORG_B)) is None


def test_owned_domain_accepts_only_owner_organization():
    domain = FakeDomain(owning_organization_id=ORG_A)
    assert check_organization_association(domain, ORG_A) is None
    error = check_organization_association(domain, ORG_B)
    assert isinstance(error, InvalidOrganizationRelationError)
    assert error.code == "INVALID_ORGANIZATION_RELATION"


def test_shared_domain_accepts_any_organization():
    domain = FakeDomain()
    assert check_organization_association(domain, ORG_A) is None
    assert check_organization_association(domain, ORG_B) is None


def test_route_space_must_hold_domain():
    domain = FakeDomain()
    space = FakeSpace(ORG_A)
    assert isinstance(check_space_has_domain(set(), domain, space), DomainNotInSpaceError)
    assert check_space_has_domain({domain.id}, domain, space) is None
