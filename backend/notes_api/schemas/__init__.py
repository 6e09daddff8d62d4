"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Response schemas are explicit projections; ORM records never cross the boundary
"""
