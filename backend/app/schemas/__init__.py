"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Registry rules (name grammar, overlap, guards) live in core/, not here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
