"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (the clock is always passed in)

Design Decisions:
    - Functional core separated from imperative shell: services fetch rows,
      core decides which slots exist and what status they display
"""
