"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (frontend JSON bodies)
    - Wire names are camelCase; Python attributes are snake_case
"""
