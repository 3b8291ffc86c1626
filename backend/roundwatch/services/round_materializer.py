"""Round Materializer — idempotently persists the rounds elapsed since each cadence's last run.

Invariants:
    - At most one Round per canonical timestamp; cadences landing on the same
      instant share it and each attach their own RoundTypeLink
    - Running twice with the same `now` writes nothing the second time
    - Membership is a set-union snapshot taken when a cadence first touches a
      round; existing members are never removed or re-evaluated
    - Every enabled config is resolved before the first write, so a
      configuration error aborts the run with nothing written

Design Decisions:
    - Single writer: overlapping runs are not supported. The resume point
      ("latest round for type") assumes nobody else advances the cadence
      concurrently; serialize runs externally (one per scheduler tick)
    - Roster read once per cadence walk: within a single-writer run it cannot
      change between slots
    - Flushes only; the caller commits once the whole run succeeded
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime

from roundwatch.core.cadence import materialization_start, walk_slots
from roundwatch.core.domain_types import Cadence, RoundStatus
from roundwatch.core.roster import missing_subjects
from roundwatch.core.timestamps import (
    format_timestamp, normalize_instant, parse_timestamp,
)
from roundwatch.services.cadences import load_enabled_cadences
from roundwatch.core.repository_protocols import RoundStore

logger = logging.getLogger(__name__)


@dataclass
class MaterializationSummary:
    """Counters for one materializer run."""
    now: str
    cadences_walked: int = 0
    configs_skipped: int = 0
    rounds_created: int = 0
    links_created: int = 0
    members_created: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


async def materialize_rounds(store: RoundStore, now: datetime) -> MaterializationSummary:
    """Create every missing round, link and member up to and including `now`."""
    now = normalize_instant(now)
    summary = MaterializationSummary(now=format_timestamp(now))

    loaded = await load_enabled_cadences(store)
    summary.configs_skipped = loaded.configs_skipped
    for cadence in loaded.cadences:
        await _walk_cadence(store, cadence, now, summary)
        summary.cadences_walked += 1

    logger.info(
        f"Materialized rounds up to {summary.now}",
        extra={
            "now": summary.now,
            "cadences_walked": summary.cadences_walked,
            "configs_skipped": summary.configs_skipped,
            "rounds_created": summary.rounds_created,
            "links_created": summary.links_created,
            "members_created": summary.members_created,
        },
    )
    return summary


async def _walk_cadence(
    store: RoundStore, cadence: Cadence, now: datetime,
    summary: MaterializationSummary,
) -> None:
    """Walk one cadence forward from its resume point to `now`."""
    last_round = await store.get_latest_round_for_type(cadence.round_type_id)
    last_round_at = (
        parse_timestamp(last_round.round_timestamp) if last_round else None
    )
    start = materialization_start(last_round_at, now, cadence)

    assignments = await store.list_assignments_for_type(cadence.round_type_id)
    roster = [a.subject_id for a in assignments]

    slots = 0
    for slot in walk_slots(start, now, cadence.duration):
        round_timestamp = format_timestamp(slot)
        db_round = await store.get_round_by_timestamp(round_timestamp)
        if db_round is None:
            db_round = await store.create_round(
                round_timestamp, RoundStatus.CREATED.value,
            )
            summary.rounds_created += 1

        if await store.link_round_to_type(db_round.id, cadence.round_type_id):
            summary.links_created += 1

        members = await store.list_members_for_round(db_round.id)
        for subject_id in missing_subjects(
            (m.subject_id for m in members), roster,
        ):
            if await store.create_round_member(db_round.id, subject_id):
                summary.members_created += 1
        slots += 1

    logger.info(
        f"Walked cadence '{cadence.name}': {slots} slot(s) from {format_timestamp(start)}",
        extra={"round_type_id": cadence.round_type_id},
    )
