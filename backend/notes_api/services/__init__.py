"""Service Layer — orchestrates core rules around repository IO.

Invariants:
    - Services receive repositories and collaborators through __init__
    - Services raise core/errors.py types; they never build HTTP responses
"""
