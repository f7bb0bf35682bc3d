"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach for the docker-compose database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
