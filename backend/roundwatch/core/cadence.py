"""Cadence Lattice — resolving RoundTypes and walking their time slots.

Invariants:
    - Only DurationUnit.MINUTES resolves; anything else raises UnsupportedDurationUnitError
    - walk_slots is inclusive of both endpoints and strictly increasing
    - materialization_start never returns a slot earlier than now - BOOTSTRAP_LOOKBACK,
      and when a prior round exists it stays on that round's lattice phase

Design Decisions:
    - resolve_cadence takes RoundConfigLike / RoundTypeLike: ORM rows in
      services, plain stand-ins in tests
    - A catch-up older than the lookback is advanced by whole steps instead of
      being reset to now - 12h, so resumed cadences keep landing on the same
      minute marks they always used
"""

from datetime import datetime, timedelta
from typing import Iterator

from roundwatch.core.domain_types import Cadence, DurationUnit, RoundTypeId
from roundwatch.core.errors import (
    ErrorContext,
    InvalidDurationError,
    MissingRoundTypeError,
    UnsupportedDurationUnitError,
)
from roundwatch.core.repository_protocols import RoundConfigLike, RoundTypeLike


BOOTSTRAP_LOOKBACK = timedelta(hours=12)


def resolve_cadence(
    round_config: RoundConfigLike, round_type: RoundTypeLike | None,
) -> Cadence:
    """Validate the RoundType a config points at and turn it into a Cadence.

    round_type is None when the store found nothing for
    round_config.round_type_id.
    """
    context = ErrorContext(
        round_type_id=round_config.round_type_id,
        round_config_id=round_config.id,
    )
    if round_type is None:
        raise MissingRoundTypeError(round_config.round_type_id, context)
    if round_type.duration_unit != DurationUnit.MINUTES.value:
        raise UnsupportedDurationUnitError(round_type.duration_unit, context)
    if round_type.duration_amount is None or round_type.duration_amount <= 0:
        raise InvalidDurationError(round_type.duration_amount, context)
    return Cadence(
        round_type_id=RoundTypeId(round_type.id),
        name=round_type.name,
        duration=timedelta(minutes=round_type.duration_amount),
    )


def walk_slots(
    start: datetime, end: datetime, step: timedelta,
) -> Iterator[datetime]:
    """Yield start, start + step, ... while <= end."""
    slot = start
    while slot <= end:
        yield slot
        slot += step


def materialization_start(
    last_round_at: datetime | None, now: datetime, cadence: Cadence,
) -> datetime:
    """First slot a materialization walk should visit for this cadence."""
    floor = now - BOOTSTRAP_LOOKBACK
    if last_round_at is None:
        return floor
    start = last_round_at + cadence.duration
    if start < floor:
        behind = (floor - start) // cadence.duration
        start += behind * cadence.duration
        if start < floor:
            start += cadence.duration
    return start
