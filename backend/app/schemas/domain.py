"""Domain Schemas — Pydantic models for the registry's API boundary.

Invariants:
    - DomainCreate.name is stripped; grammar is enforced by core, not here,
      so the error surfaces as INVALID_NAME_FORMAT rather than a generic 400
    - DomainUpdate only carries mutable fields; unknown fields are rejected
    - DomainSummary is the presentation record {id, name, owning_organization_id}

Design Decisions:
    - from_attributes: summaries built straight from ORM rows
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DomainCreate(BaseModel):
    """Domain registration request."""
    name: str = Field(min_length=1, max_length=255)
    owning_organization_id: UUID | None = None
    wildcard: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class DomainUpdate(BaseModel):
    """Mutable domain fields. Name and owner are fixed at creation."""
    model_config = ConfigDict(extra="forbid")

    wildcard: bool | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class DomainSummary(BaseModel):
    """Presentation record used by API responses."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    owning_organization_id: UUID | None = None

    @classmethod
    def from_domain(cls, domain) -> "DomainSummary":
        return cls.model_validate(domain)


class DomainDetail(DomainSummary):
    wildcard: bool
    shared: bool

    @classmethod
    def from_domain(cls, domain) -> "DomainDetail":
        return cls(
            id=domain.id,
            name=domain.name,
            owning_organization_id=domain.owning_organization_id,
            wildcard=domain.wildcard,
            shared=domain.owning_organization_id is None,
        )


class DestroyResponse(BaseModel):
    domain_id: UUID
    name: str
    routes_deleted: int
    organizations_detached: int
    spaces_detached: int
