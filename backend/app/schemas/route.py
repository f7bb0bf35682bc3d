"""Route Schemas — request/response models for the route collaborator."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RouteCreate(BaseModel):
    """Empty host binds the bare domain."""
    domain_id: UUID
    space_id: UUID
    host: str = Field("", max_length=63)

    @field_validator("host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        return v.strip()


class RouteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    domain_id: UUID
    space_id: UUID
    host: str
