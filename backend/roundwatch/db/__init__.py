"""Database Base & Sessions — declarative base and a standalone async session factory.

Invariants:
    - Request-scoped sessions come from infrastructure/database.py, not here
"""
