"""Domain Types — identities, status literals and resolved cadences.

Invariants:
    - Round status literals are the exact strings persisted and rendered
    - Cadence.duration is always a positive timedelta
    - RoundStatusView serializes with the keys roundTimestamp and status

Design Decisions:
    - NewType over dataclass wrappers for identities: zero runtime cost
    - str Enums: compare equal to the raw column values read from the DB
    - Round.status stays a free-form str in the views: the external actor that
      advances rounds may write literals this service does not know about
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RoundTypeId = NewType("RoundTypeId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RoundStatus(str, Enum):
    """Round status literals written by the materializer or the projector."""
    CREATED = "CREATED"
    NOT_STARTED = "NOT_STARTED"
    STARTED = "STARTED"
    COMPLETE = "COMPLETE"
    MISSED = "MISSED"


class DurationUnit(str, Enum):
    """Cadence duration units. Only minutes are supported."""
    MINUTES = "minutes"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Cadence:
    """A RoundType resolved into something the lattice walk can step with."""
    round_type_id: RoundTypeId
    name: str
    duration: timedelta


@dataclass(frozen=True)
class RoundStatusView:
    """One display row of the status timeline. Never persisted."""
    round_timestamp: str
    status: str

    def to_dict(self) -> dict:
        return {"roundTimestamp": self.round_timestamp, "status": self.status}
