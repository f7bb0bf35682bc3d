"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - default_serving_domain_name seeds core.serving_domain at startup only;
      runtime changes go through DefaultServingDomainName.set/clear

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SERIALIZABLE isolation by default: registry mutations read-then-write and
      must not interleave with a conflicting insert
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://registry:registry@db:5432/registry"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers give postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_isolation_level: str = "SERIALIZABLE"

    # Registry
    default_serving_domain_name: str | None = None
    shared_domain_names: list[str] = []
    # Only enable behind a gateway that strips and re-sets X-Actor-Privileged
    trust_actor_privilege_header: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
