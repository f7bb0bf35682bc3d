"""Domain Hierarchy — decomposes a name into its ordered suffix chain.

Invariants:
    - suffix_chain is a lookup helper: returns None for empty or invalid input, never raises
    - Chain runs from the top-level label alone up to the full name
    - Chain length equals the label count; output is canonical (lowercase)
    - Any two overlapping names share the same hierarchy_root

Design Decisions:
    - Overlap defined via chain membership in both directions: one name is an
      ancestor of the other iff it appears in the other's chain
    - hierarchy_root is the two right-most labels: the narrowest key every
      overlapping pair has in common, used to scope mutation locks
"""

from app.core.domain_types import CanonicalName
from app.core.enforce_name import is_valid_domain_name, normalize_name


LABEL_SEPARATOR: str = "."


def suffix_chain(name: str | None) -> list[CanonicalName] | None:
    """Ordered suffixes: a.b.com -> [com, b.com, a.b.com]. None for empty/invalid."""
    if not name or not is_valid_domain_name(name):
        return None
    labels = normalize_name(name).split(LABEL_SEPARATOR)
    return [
        CanonicalName(LABEL_SEPARATOR.join(labels[i:]))
        for i in range(len(labels) - 1, -1, -1)
    ]


def hierarchy_root(name: str) -> CanonicalName | None:
    """Two right-most labels of a valid name, e.g. "example.com"."""
    chain = suffix_chain(name)
    if chain is None:
        return None
    return chain[1]


def names_overlap(
    name_a: str, name_b: str,
    chain_a: list[CanonicalName] | None = None,
) -> bool:
    """True when the names are identical or one is an ancestor of the other."""
    canonical_a, canonical_b = normalize_name(name_a), normalize_name(name_b)
    if canonical_a == canonical_b:
        return True
    chain_a = chain_a if chain_a is not None else suffix_chain(canonical_a)
    chain_b = suffix_chain(canonical_b)
    return (
        (chain_a is not None and canonical_b in chain_a)
        or (chain_b is not None and canonical_a in chain_b)
    )
