"""Infrastructure Layer — database, hashing, token signing, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library exceptions are mapped to core/errors.py types at this boundary
"""
