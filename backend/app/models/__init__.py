"""ORM Models — SQLAlchemy declarative models for all registry entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Domain is the aggregate root; routes and associations are scoped by domain_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata knows every table before
      create_all or alembic autogenerate runs
"""

from app.models.organization import Organization  # noqa: F401
from app.models.space import Space  # noqa: F401
from app.models.domain import Domain, organization_domains, space_domains  # noqa: F401
from app.models.route import Route  # noqa: F401
