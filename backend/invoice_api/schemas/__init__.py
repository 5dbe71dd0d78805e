"""Pydantic Schemas — request validation and response shapes for API endpoints.

Invariants:
    - Schemas describe the system boundary (request bodies, query params, responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
