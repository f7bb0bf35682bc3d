"""Services Layer — registry lifecycle orchestration over async sessions.

Invariants:
    - Every mutation runs in one serialized transaction (registry_transaction.py)
    - Services call core checks and raise the first error; they hold no rules of their own

Design Decisions:
    - One service per aggregate/collaborator for locality: domains, shared
      domains, organizations, routes
"""
