"""Core Layer — pure admission and authorization logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rate window state is mutated only through its own methods

Design Decisions:
    - Functional core separated from imperative shell: the shell owns locks,
      clocks, and sessions and passes plain values in
"""
