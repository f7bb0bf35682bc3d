"""Default Serving Domain Name — process-wide, test-resettable configuration state.

Invariants:
    - Exactly one instance per process (default_serving_domain_name)
    - Writes are exclusive (lock); reads never block and see the latest write
    - Stored name is canonical (stripped, lowercase) and format-valid
    - clear() restores the absent state

Design Decisions:
    - Explicit get/set/clear object over a bare module global: tests and ops
      tooling reset it without reaching into module attributes
    - threading.Lock, not asyncio.Lock: changes come from startup and admin
      tooling that may run outside the event loop
"""

import threading

from app.core.domain_types import CanonicalName
from app.core.enforce_name import check_name_format, normalize_name


class DefaultServingDomainName:
    """Holder for the configured default serving domain name."""

    def __init__(self) -> None:
        self._name: CanonicalName | None = None
        self._write_lock = threading.Lock()

    def get(self) -> CanonicalName | None:
        return self._name

    def set(self, name: str) -> None:
        """Replace the configured name. Raises InvalidNameFormatError."""
        error = check_name_format(name)
        if error:
            raise error
        with self._write_lock:
            self._name = normalize_name(name)

    def clear(self) -> None:
        with self._write_lock:
            self._name = None

    @property
    def is_set(self) -> bool:
        return self._name is not None


default_serving_domain_name = DefaultServingDomainName()
