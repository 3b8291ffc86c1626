"""Async Session Factory — async DB sessions outside the FastAPI request cycle.

Invariants:
    - expire_on_commit=False, same as DatabaseSessionManager sessions
    - The engine is reachable as factory.kw["bind"] (schema setup, dispose)

Design Decisions:
    - Separate from infrastructure/database.py: no pooling policy and no
      error mapping, for scripts and test fixtures that manage their own
      transactions
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
