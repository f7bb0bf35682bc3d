"""Database Metadata — the declarative Base every registry table hangs off.

Invariants:
    - Engines and sessions live in infrastructure/database.py, not here
    - Base.metadata is what alembic and the test fixtures create tables from
"""
