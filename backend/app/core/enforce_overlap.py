"""Overlap Enforcement — cross-organization conflict resolution for new names.

Invariants:
    - All functions are PURE: existing domains are passed in, never queried
    - Shared (unowned) domains block every overlapping candidate except an
      identical shared one (left to the duplicate check)
    - A shared candidate is blocked by any overlapping owned domain
    - Two owned domains may overlap only when owned by the same organization
    - First conflict wins (short-circuit)

Design Decisions:
    - Overlap check runs BEFORE the duplicate check: an exact match with a
      foreign owner reports OVERLAPPING_DOMAIN, an exact match with the same
      owner reports DUPLICATE_NAME
    - Candidate chain computed once and reused for every existing name
"""

from collections.abc import Iterable
from uuid import UUID

from app.core.domain_hierarchy import names_overlap, suffix_chain
from app.core.domain_types import DomainKind
from app.core.enforce_name import normalize_name
from app.core.errors import DuplicateNameError, OverlappingDomainError
from app.core.repository_protocols import DomainLike


def domain_kind(owning_organization_id: UUID | None) -> DomainKind:
    return DomainKind.SHARED if owning_organization_id is None else DomainKind.OWNED


def _conflicts(
    candidate_name: str, candidate_owner_id: UUID | None, existing: DomainLike,
) -> bool:
    """Resolution policy for one overlapping pair."""
    existing_owner_id = existing.owning_organization_id
    if existing_owner_id is None:
        identical = normalize_name(existing.name) == normalize_name(candidate_name)
        return not (identical and candidate_owner_id is None)
    if candidate_owner_id is None:
        return True
    return existing_owner_id != candidate_owner_id


def check_overlap(
    candidate_name: str,
    candidate_owner_id: UUID | None,
    existing: Iterable[DomainLike],
) -> OverlappingDomainError | None:
    """Return the first conflict between the candidate and registered domains."""
    chain = suffix_chain(candidate_name)
    for domain in existing:
        if not names_overlap(candidate_name, domain.name, chain_a=chain):
            continue
        if _conflicts(candidate_name, candidate_owner_id, domain):
            return OverlappingDomainError(candidate_name, domain.name)
    return None


def check_duplicate_name(
    candidate_name: str, existing: Iterable[DomainLike],
) -> DuplicateNameError | None:
    """Case-insensitive exact collision."""
    canonical = normalize_name(candidate_name)
    for domain in existing:
        if normalize_name(domain.name) == canonical:
            return DuplicateNameError(candidate_name)
    return None


def validate_registration(
    candidate_name: str,
    candidate_owner_id: UUID | None,
    existing: list[DomainLike],
) -> OverlappingDomainError | DuplicateNameError | None:
    """Chain registration conflict checks. Returns first error or None."""
    return (
        check_overlap(candidate_name, candidate_owner_id, existing)
        or check_duplicate_name(candidate_name, existing)
    )
