"""Boundary Protocols — structural contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Core guards read only the attributes declared here
    - ORM models (app/models) satisfy these protocols structurally

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Guards accept *Like objects, not ORM rows: tests build plain dataclasses
      and never need a database to exercise the registry rules
"""

from typing import Protocol
from uuid import UUID


class DomainLike(Protocol):
    """Fields of a registered domain that the registry rules read."""
    id: UUID
    name: str
    owning_organization_id: UUID | None
    wildcard: bool


class SpaceLike(Protocol):
    """A space belongs to exactly one organization."""
    id: UUID
    organization_id: UUID


class RouteLike(Protocol):
    """A route under a domain. Empty host means the bare domain."""
    id: UUID
    domain_id: UUID
    space_id: UUID
    host: str
