"""Domain ORM — a registered DNS-style name with ownership and wildcard state.

Invariants:
    - canonical_name (stripped, lowercase) is unique: case-insensitive uniqueness
    - name keeps the caller's casing for display
    - owning_organization_id NULL marks a shared/system domain
    - name, canonical_name and owning_organization_id never change after insert

Design Decisions:
    - Separate canonical_name column: unique index enforces invariant 2 at the
      storage level even if two writers slip past the application lock
    - Association tables declared here (organization_domains, space_domains):
      they only exist because domains do, and destroy clears them explicitly
    - No ORM cascades: DomainLifecycle.destroy performs the cascade in order
      inside one transaction
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, String, Table,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


organization_domains = Table(
    "organization_domains",
    Base.metadata,
    Column(
        "organization_id", UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "domain_id", UUID(as_uuid=True),
        ForeignKey("domains.id", ondelete="CASCADE"), primary_key=True,
    ),
)

space_domains = Table(
    "space_domains",
    Base.metadata,
    Column(
        "space_id", UUID(as_uuid=True),
        ForeignKey("spaces.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "domain_id", UUID(as_uuid=True),
        ForeignKey("domains.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Domain(Base):
    """Registered domain — the registry's aggregate root."""
    __tablename__ = "domains"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    canonical_name: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    owning_organization_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("organizations.id"), nullable=True,
    )
    wildcard: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_shared(self) -> bool:
        return self.owning_organization_id is None
