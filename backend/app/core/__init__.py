"""Core Layer — pure registry rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic; checks return an error or None

Design Decisions:
    - Functional core separated from imperative shell (services/)
    - Guards read *Like protocols (repository_protocols.py), never ORM rows directly
"""
