"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Store-owned fields (identity, timestamps, version) are never written from a payload

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
