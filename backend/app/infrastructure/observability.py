"""Structured Logging — JSON records carrying registry context.

Invariants:
    - Every record has timestamp (from record.created), level, logger, message
    - Registry extras (domain_name, organization_id, error_code, ...) are
      emitted only when set; UUIDs and enums are rendered as strings
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - Stdlib logging + JSONFormatter, no third-party logging stack
    - sqlalchemy.engine held at WARNING unless the app runs at DEBUG
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum

EXTRA_FIELDS: tuple[str, ...] = (
    "domain_name", "domain_id", "organization_id", "space_id",
    "error_code", "operation", "path",
)

_HANDLER_NAME = "registry"


def _render(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: _render(record.__dict__[key])
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the registry handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    )
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        root_level if root_level <= logging.DEBUG else logging.WARNING,
    )
