"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DomainId, OrganizationId, SpaceId, RouteId wrap UUIDs — never use bare UUID in domain logic
    - CanonicalName is always stripped and lowercase
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

DomainId = NewType("DomainId", UUID)
OrganizationId = NewType("OrganizationId", UUID)
SpaceId = NewType("SpaceId", UUID)
RouteId = NewType("RouteId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

CanonicalName = NewType("CanonicalName", str)   # stripped + lowercase


# ─── Enums ───────────────────────────────────────────────────────

class DomainKind(str, Enum):
    """Ownership class of a registered domain."""
    OWNED = "owned"
    SHARED = "shared"


class DomainLifecycleState(str, Enum):
    """Registered domains have no intermediate states."""
    ABSENT = "absent"
    REGISTERED = "registered"
    DESTROYED = "destroyed"


class RegistryOperation(str, Enum):
    """Mutations serialized per hierarchy root — used for logs and locks."""
    CREATE = "create"
    UPDATE = "update"
    ADD_SPACE = "add_space"
    ADD_ORGANIZATION = "add_organization"
    DESTROY = "destroy"
    CREATE_ROUTE = "create_route"
    DELETE_ROUTE = "delete_route"
