"""Overlap Enforcement — tests for cross-organization conflict resolution.

Tests cover:
    - Same-owner overlap allowed at any suffix distance
    - Different-owner overlap rejected in both directions
    - Shared names block every overlapping owned candidate
    - Shared candidate blocked by any overlapping owned name
    - Exact matches: foreign owner -> OVERLAPPING_DOMAIN, same owner -> DUPLICATE_NAME
    - First conflict wins
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from app.core.domain_types import DomainKind
from app.core.enforce_overlap import (
    check_duplicate_name,
    check_overlap,
    domain_kind,
    validate_registration,
)
from app.core.errors import DuplicateNameError, OverlappingDomainError

ORG_A = uuid4()
ORG_B = uuid4()


@dataclass
class FakeDomain:
    name: str
    owning_organization_id: UUID | None = None
    wildcard: bool = False
    id: UUID = field(default_factory=uuid4)


def test_domain_kind_follows_owner():
    assert domain_kind(None) is DomainKind.SHARED
    assert domain_kind(ORG_A) is DomainKind.OWNED


def test_no_existing_names_never_conflicts():
    assert validate_registration("example.com", ORG_A, []) is None


def test_unrelated_names_do_not_conflict():
    existing = [FakeDomain("other.com", ORG_B), FakeDomain("shared.io")]
    assert check_overlap("example.com", ORG_A, existing) is None


# ─── Owned vs owned ──────────────────────────────────────────────

def test_same_owner_descendant_allowed():
    existing = [FakeDomain("example.com", ORG_A)]
    assert check_overlap("a.b.c.example.com", ORG_A, existing) is None


def test_same_owner_ancestor_allowed():
    existing = [FakeDomain("deep.sub.example.com", ORG_A)]
    assert check_overlap("example.com", ORG_A, existing) is None


def test_foreign_owner_descendant_rejected():
    existing = [FakeDomain("example.com", ORG_A)]
    error = check_overlap("foo.example.com", ORG_B, existing)
    assert isinstance(error, OverlappingDomainError)
    assert error.conflicting_name == "example.com"
    assert error.http_status == 409


def test_foreign_owner_ancestor_rejected():
    existing = [FakeDomain("foo.example.com", ORG_A)]
    assert isinstance(
        check_overlap("example.com", ORG_B, existing), OverlappingDomainError,
    )


# ─── Shared names ────────────────────────────────────────────────

def test_shared_name_blocks_owned_descendant_at_any_distance():
    existing = [FakeDomain("apps.io")]
    error = check_overlap("x.y.z.apps.io", ORG_A, existing)
    assert isinstance(error, OverlappingDomainError)


def test_shared_name_blocks_owned_ancestor():
    existing = [FakeDomain("apps.example.com")]
    assert isinstance(
        check_overlap("example.com", ORG_A, existing), OverlappingDomainError,
    )


def test_shared_name_blocks_identical_owned_name():
    existing = [FakeDomain("apps.io")]
    error = validate_registration("APPS.io", ORG_A, existing)
    assert isinstance(error, OverlappingDomainError)


def test_shared_candidate_blocked_by_owned_name():
    existing = [FakeDomain("foo.apps.io", ORG_A)]
    assert isinstance(
        check_overlap("apps.io", None, existing), OverlappingDomainError,
    )


def test_shared_candidate_blocked_by_distinct_shared_name():
    existing = [FakeDomain("apps.io")]
    assert isinstance(
        check_overlap("sub.apps.io", None, existing), OverlappingDomainError,
    )


def test_identical_shared_name_is_duplicate_not_overlap():
    existing = [FakeDomain("apps.io")]
    assert check_overlap("apps.io", None, existing) is None
    assert isinstance(
        validate_registration("apps.io", None, existing), DuplicateNameError,
    )


# ─── Duplicates & ordering ───────────────────────────────────────

def test_same_owner_exact_match_is_duplicate():
    existing = [FakeDomain("example.com", ORG_A)]
    error = validate_registration("Example.COM", ORG_A, existing)
    assert isinstance(error, DuplicateNameError)
    assert error.code == "DUPLICATE_NAME"


def test_foreign_owner_exact_match_is_overlap():
    existing = [FakeDomain("example.com", ORG_A)]
    error = validate_registration("example.com", ORG_B, existing)
    assert isinstance(error, OverlappingDomainError)


def test_check_duplicate_name_is_case_insensitive():
    assert isinstance(
        check_duplicate_name("EXAMPLE.com", [FakeDomain("example.COM", ORG_A)]),
        DuplicateNameError,
    )
    assert check_duplicate_name("a.example.com", [FakeDomain("example.com")]) is None


def test_first_conflict_wins():
    existing = [
        FakeDomain("example.com", ORG_A),
        FakeDomain("sub.example.com", ORG_A),
    ]
    error = check_overlap("x.sub.example.com", ORG_B, existing)
    assert error.conflicting_name == "example.com"
