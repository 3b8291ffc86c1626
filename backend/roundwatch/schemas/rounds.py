"""Round Schemas — Pydantic models for the setup and materialization endpoints.

Invariants:
    - RoundTypeCreate.duration_amount > 0 and duration_unit == "minutes"
    - subject_id and name are stripped and non-empty
    - Responses read straight from ORM rows (from_attributes)

Design Decisions:
    - Literal["minutes"] for the unit: rejected at the boundary with a 400
      instead of surfacing later as a fatal walk error
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoundTypeCreate(BaseModel):
    """Round type creation — a named cadence."""
    name: str = Field(min_length=1, max_length=100)
    duration_amount: int = Field(gt=0, le=24 * 60)
    duration_unit: Literal["minutes"] = "minutes"

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class RoundTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration_amount: int
    duration_unit: str


class RoundConfigCreate(BaseModel):
    round_type_id: int = Field(gt=0)
    enabled: bool = True


class RoundConfigUpdate(BaseModel):
    enabled: bool


class RoundConfigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    round_type_id: int
    enabled: bool


class RoundAssignmentCreate(BaseModel):
    """Roster entry — subject_id is an opaque patient identifier."""
    round_type_id: int = Field(gt=0)
    subject_id: str = Field(min_length=1, max_length=64)

    @field_validator("subject_id")
    @classmethod
    def strip_subject_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("subject_id cannot be empty or whitespace")
        return v


class RoundAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    round_type_id: int
    subject_id: str


class MaterializeRequest(BaseModel):
    """Materializer trigger. `now` defaults to the current minute (UTC)."""
    now: datetime | None = None
