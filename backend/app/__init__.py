"""Domain Registry Application Package — domain-name ownership for a multi-tenant platform.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
