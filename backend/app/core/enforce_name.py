"""Name Format Enforcement — syntactic acceptance of candidate domain names.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Validation runs on the normalized form (stripped, lowercase)
    - Non-ASCII input is rejected before lowercasing: a character that folds to
      ASCII (e.g. the Kelvin sign) must not pass as its ASCII look-alike
    - A name has 2+ dot-separated labels, none empty, and a top-level label
      of 2–5 ASCII letters

Design Decisions:
    - Return error instance (not raise): lets the shell chain checks with `or`
      and raise the first violation after rollback
    - TLD bounds kept at 2–5: "au" and "com" valid, "d" and "abcefg" invalid
"""

import re

from app.core.domain_types import CanonicalName
from app.core.errors import InvalidNameFormatError


TLD_MIN_LENGTH: int = 2
TLD_MAX_LENGTH: int = 5

DOMAIN_NAME_PATTERN = re.compile(
    r"^(?:[^.\s]+\.)+[a-z]{%d,%d}$" % (TLD_MIN_LENGTH, TLD_MAX_LENGTH)
)


def normalize_name(name: str) -> CanonicalName:
    """Strip surrounding whitespace and lowercase."""
    return CanonicalName(name.strip().lower())


def is_valid_domain_name(name: str | None) -> bool:
    if not name or not name.isascii():
        return False
    return DOMAIN_NAME_PATTERN.fullmatch(normalize_name(name)) is not None


def check_name_format(name: str | None) -> InvalidNameFormatError | None:
    """Reject names that fail the domain name grammar."""
    if not is_valid_domain_name(name):
        return InvalidNameFormatError(name or "")
    return None
