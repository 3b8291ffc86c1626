"""Boundary Protocols — contracts between the round core and the persistence shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO is reached through RoundStore
    - "Not found" is None, never an exception and never a zero-valued row

Design Decisions:
    - Structural *Like protocols instead of ORM classes: services and core
      read attributes only, so any object carrying them (ORM row, dataclass,
      SimpleNamespace) can cross the boundary
    - Async in RoundStore: implementations do IO; the pure functions in core/
      that consume the rows it returns are never async themselves
"""

from typing import Protocol, Sequence


class RoundTypeLike(Protocol):
    """Structural contract for a RoundType row (a named cadence definition)."""
    id: int
    name: str
    duration_amount: int
    duration_unit: str


class RoundConfigLike(Protocol):
    """Structural contract for a RoundConfig row (enables one RoundType)."""
    id: int
    round_type_id: int
    enabled: bool


class RoundLike(Protocol):
    """Structural contract for a persisted Round."""
    id: int
    round_timestamp: str
    status: str


class RoundMemberLike(Protocol):
    id: int
    round_id: int
    subject_id: str


class RoundAssignmentLike(Protocol):
    id: int
    round_type_id: int
    subject_id: str


class RoundStore(Protocol):
    """Contract for round persistence — implemented by shell.

    Writes are flushed, not committed: the caller owns the transaction.
    link_round_to_type and create_round_member are idempotent on their
    unique keys and report whether a row was written.
    """

    async def list_round_configs(self) -> Sequence[RoundConfigLike]: ...

    async def get_round_type(self, round_type_id: int) -> RoundTypeLike | None: ...

    async def get_latest_round_for_type(
        self, round_type_id: int,
    ) -> RoundLike | None: ...

    async def get_round_by_timestamp(
        self, round_timestamp: str,
    ) -> RoundLike | None: ...

    async def list_rounds_in_window(
        self, start: str, end: str,
    ) -> Sequence[RoundLike]: ...

    async def create_round(self, round_timestamp: str, status: str) -> RoundLike: ...

    async def link_round_to_type(self, round_id: int, round_type_id: int) -> bool: ...

    async def list_members_for_round(
        self, round_id: int,
    ) -> Sequence[RoundMemberLike]: ...

    async def list_assignments_for_type(
        self, round_type_id: int,
    ) -> Sequence[RoundAssignmentLike]: ...

    async def create_round_member(self, round_id: int, subject_id: str) -> bool: ...
