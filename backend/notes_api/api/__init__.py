"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every protected route runs rate admission, then token verification, then the service
    - All endpoints return structured JSON responses
"""
