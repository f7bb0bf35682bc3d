"""Structured Logging — JSON formatter output and handler setup."""

import json
import logging
from uuid import uuid4

from app.core.domain_types import RegistryOperation
from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.domain_lifecycle", logging.INFO, __file__, 1,
        "Domain registered: %s", ("example.com",), None,
    )
    record.__dict__.update(extra)
    return record


def test_formatter_emits_core_fields():
    log = json.loads(JSONFormatter().format(_record()))

    assert log["level"] == "INFO"
    assert log["logger"] == "app.services.domain_lifecycle"
    assert log["message"] == "Domain registered: example.com"
    assert "timestamp" in log
    assert "domain_id" not in log


def test_formatter_renders_registry_extras():
    domain_id = uuid4()
    log = json.loads(JSONFormatter().format(_record(
        domain_id=domain_id,
        domain_name="example.com",
        operation=RegistryOperation.CREATE,
    )))

    assert log["domain_id"] == str(domain_id)
    assert log["domain_name"] == "example.com"
    assert log["operation"] == "create"


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    engine_logger = logging.getLogger("sqlalchemy.engine")
    before, levels = list(root.handlers), (root.level, engine_logger.level)
    try:
        setup_logging("INFO", "json")
        setup_logging("DEBUG", "text")
        installed = [h for h in root.handlers if h not in before]
        assert len(installed) == 1
        assert root.level == logging.DEBUG
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
        root.setLevel(levels[0])
        engine_logger.setLevel(levels[1])
