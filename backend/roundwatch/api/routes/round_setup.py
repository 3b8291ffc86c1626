"""Round Setup — round types, configs and roster assignments.

Invariants:
    - Configs and assignments must reference an existing RoundType (404 otherwise)
    - One config per RoundType (409 on a second one)
    - Deleting an assignment never touches RoundMember snapshots

Design Decisions:
    - Plain CRUD stays in the route: no lattice logic involved
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roundwatch.core.errors import DuplicateResourceError, ResourceNotFoundError
from roundwatch.infrastructure.database import get_db
from roundwatch.models.round_assignment import RoundAssignment
from roundwatch.models.round_config import RoundConfig
from roundwatch.models.round_type import RoundType
from roundwatch.schemas.rounds import (
    RoundAssignmentCreate,
    RoundAssignmentResponse,
    RoundConfigCreate,
    RoundConfigResponse,
    RoundConfigUpdate,
    RoundTypeCreate,
    RoundTypeResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["round-setup"])


async def _get_round_type_or_404(round_type_id: int, db: AsyncSession) -> RoundType:
    round_type = await db.get(RoundType, round_type_id)
    if round_type is None:
        raise ResourceNotFoundError("RoundType", str(round_type_id))
    return round_type


# ─── Round types ────────────────────────────────────────────────

@router.post(
    "/round-types", response_model=RoundTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_round_type(
    body: RoundTypeCreate, db: AsyncSession = Depends(get_db),
):
    round_type = RoundType(
        name=body.name,
        duration_amount=body.duration_amount,
        duration_unit=body.duration_unit,
    )
    db.add(round_type)
    await db.commit()
    await db.refresh(round_type)
    logger.info(
        f"Created round type '{round_type.name}'",
        extra={"round_type_id": round_type.id},
    )
    return round_type


@router.get("/round-types", response_model=list[RoundTypeResponse])
async def list_round_types(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(RoundType).order_by(RoundType.id))
    return result.scalars().all()


# ─── Round configs ──────────────────────────────────────────────

@router.post(
    "/round-configs", response_model=RoundConfigResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_round_config(
    body: RoundConfigCreate, db: AsyncSession = Depends(get_db),
):
    await _get_round_type_or_404(body.round_type_id, db)
    existing = await db.execute(
        select(RoundConfig.id).where(
            RoundConfig.round_type_id == body.round_type_id,
        ),
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateResourceError(
            f"RoundType {body.round_type_id} already has a config",
        )
    round_config = RoundConfig(
        round_type_id=body.round_type_id, enabled=body.enabled,
    )
    db.add(round_config)
    await db.commit()
    await db.refresh(round_config)
    return round_config


@router.get("/round-configs", response_model=list[RoundConfigResponse])
async def list_round_configs(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(RoundConfig).order_by(RoundConfig.id))
    return result.scalars().all()


@router.patch(
    "/round-configs/{round_config_id}", response_model=RoundConfigResponse,
)
async def update_round_config(
    round_config_id: int, body: RoundConfigUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Enable or disable a cadence. Re-enabling resumes from its last round."""
    round_config = await db.get(RoundConfig, round_config_id)
    if round_config is None:
        raise ResourceNotFoundError("RoundConfig", str(round_config_id))
    round_config.enabled = body.enabled
    await db.commit()
    await db.refresh(round_config)
    logger.info(
        f"RoundConfig {round_config.id} enabled={round_config.enabled}",
        extra={
            "round_config_id": round_config.id,
            "round_type_id": round_config.round_type_id,
        },
    )
    return round_config


# ─── Roster assignments ─────────────────────────────────────────

@router.post(
    "/round-assignments", response_model=RoundAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_round_assignment(
    body: RoundAssignmentCreate, db: AsyncSession = Depends(get_db),
):
    await _get_round_type_or_404(body.round_type_id, db)
    assignment = RoundAssignment(
        round_type_id=body.round_type_id, subject_id=body.subject_id,
    )
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment


@router.get(
    "/round-assignments", response_model=list[RoundAssignmentResponse],
)
async def list_round_assignments(
    round_type_id: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = select(RoundAssignment).order_by(RoundAssignment.id)
    if round_type_id is not None:
        query = query.where(RoundAssignment.round_type_id == round_type_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.delete(
    "/round-assignments/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_round_assignment(
    assignment_id: int, db: AsyncSession = Depends(get_db),
):
    assignment = await db.get(RoundAssignment, assignment_id)
    if assignment is None:
        raise ResourceNotFoundError("RoundAssignment", str(assignment_id))
    await db.delete(assignment)
    await db.commit()
