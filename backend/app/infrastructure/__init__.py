"""Infrastructure Layer — database sessions, locks, and cross-cutting concerns.

Invariants:
    - All database errors mapped to typed RegistryError subclasses
    - Locks are process singletons; advisory locks extend them across processes

Design Decisions:
    - Thin wrappers over SQLAlchemy and asyncio primitives
"""
