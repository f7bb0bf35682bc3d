"""Wildcard Enforcement — guards both sides of the wildcard/host invariant.

Invariants:
    - All functions are PURE: routes are passed in, never queried
    - wildcard may become False only when no route under the domain has a host
    - A route with a host may only be created under a wildcard domain
    - Creation of a domain accepts any initial wildcard value (not checked here)

Design Decisions:
    - Two checks, one invariant: update-time (check_wildcard_transition) and
      route-creation-time (check_route_host_allowed) — the shell runs both under
      the same hierarchy lock so neither side can race the other
"""

from collections.abc import Iterable

from app.core.errors import HostNotAllowedError, WildcardInUseError
from app.core.repository_protocols import DomainLike, RouteLike


def has_host(route: RouteLike) -> bool:
    return bool(route.host and route.host.strip())


def check_wildcard_transition(
    domain: DomainLike, new_wildcard: bool, routes: Iterable[RouteLike],
) -> WildcardInUseError | None:
    """Disabling wildcard fails while any route under the domain has a host."""
    if new_wildcard:
        return None
    hosted = sum(1 for route in routes if has_host(route))
    if hosted:
        return WildcardInUseError(domain.name, hosted)
    return None


def check_route_host_allowed(
    domain: DomainLike, host: str,
) -> HostNotAllowedError | None:
    if host.strip() and not domain.wildcard:
        return HostNotAllowedError(domain.name, host)
    return None
