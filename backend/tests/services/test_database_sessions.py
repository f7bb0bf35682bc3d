"""Database Session Manager — exception mapping at the session boundary.

Invariants:
    - Serialization failures (SQLSTATE 40001/40P01) become ConcurrencyError
    - Other driver failures become DatabaseError
    - RegistryError raised inside a session passes through unchanged
"""

import pytest
from sqlalchemy.exc import DBAPIError, OperationalError

from app.core.errors import ConcurrencyError, DatabaseError, OverlappingDomainError
from app.infrastructure.database import DatabaseSessionManager, is_serialization_failure


class _DriverError(Exception):
    def __init__(self, sqlstate: str | None):
        super().__init__(f"driver error {sqlstate}")
        self.sqlstate = sqlstate


@pytest.fixture
def manager(test_engine, test_session_factory):
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    return fake_manager


def test_serialization_failure_detection():
    assert is_serialization_failure(DBAPIError("SELECT 1", {}, _DriverError("40001")))
    assert is_serialization_failure(DBAPIError("SELECT 1", {}, _DriverError("40P01")))
    assert not is_serialization_failure(DBAPIError("SELECT 1", {}, _DriverError("23505")))
    assert not is_serialization_failure(DBAPIError("SELECT 1", {}, _DriverError(None)))


async def test_serialization_failure_maps_to_concurrency_error(manager):
    with pytest.raises(ConcurrencyError) as exc:
        async with manager.session():
            raise DBAPIError("SELECT 1", {}, _DriverError("40001"))
    assert exc.value.context.retryable


async def test_operational_error_maps_to_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session():
            raise OperationalError("SELECT 1", {}, _DriverError(None))
    assert exc.value.http_status == 503


async def test_registry_errors_pass_through(manager):
    with pytest.raises(OverlappingDomainError):
        async with manager.session():
            raise OverlappingDomainError("b.a.com", "a.com")


async def test_health_check(manager):
    assert await manager.health_check() is True
