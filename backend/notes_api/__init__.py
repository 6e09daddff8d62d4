"""Notes API Package — authenticated personal notes with rate admission.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
