"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate types and ranges at the system boundary
    - Domain types from core/ used for enum fields in responses
"""
