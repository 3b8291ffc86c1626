"""Round Materializer — tests for bootstrap, catch-up, idempotency and membership snapshots.

Tests cover:
    - First run bootstraps floor(12h / D) + 1 rounds for a single cadence
    - Catch-up from a round 60 min old creates exactly 4 quarter-hour rounds
    - A second run at the same `now` writes nothing
    - Cadences landing on one instant share a Round and each add a link
    - Disabled configs are skipped and resume from their last round when re-enabled
    - Membership is snapshotted; later roster changes only reach new rounds
    - Configuration errors abort the run before anything is written
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from roundwatch.core.errors import MissingRoundTypeError, UnsupportedDurationUnitError
from roundwatch.models.round import Round
from roundwatch.models.round_assignment import RoundAssignment
from roundwatch.models.round_config import RoundConfig
from roundwatch.models.round_member import RoundMember
from roundwatch.models.round_type_link import RoundTypeLink
from roundwatch.services.round_materializer import materialize_rounds
from tests.services.seed_rounds import (
    NOW,
    count_rows,
    linked_type_ids,
    member_ids,
    round_timestamps,
    seed_cadence,
    seed_round,
)


# ─── Bootstrap ───────────────────────────────────────────────────

async def test_first_run_creates_49_quarter_hour_rounds(test_db, store):
    await seed_cadence(test_db, 15)

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 49
    assert summary.links_created == 49
    stamps = await round_timestamps(test_db)
    assert len(stamps) == 49
    assert stamps[0] == "2022-01-09T21:30:00Z"
    assert stamps[-1] == "2022-01-10T09:30:00Z"


async def test_new_rounds_start_as_created(test_db, store):
    await seed_cadence(test_db, 60)
    await materialize_rounds(store, NOW)

    result = await test_db.execute(select(Round.status).distinct())
    assert result.scalars().all() == ["CREATED"]


@pytest.mark.parametrize("minutes, expected", [(15, 49), (30, 25), (60, 13), (45, 17)])
async def test_bootstrap_count_is_lookback_over_duration_plus_one(
    test_db, store, minutes, expected,
):
    await seed_cadence(test_db, minutes)
    summary = await materialize_rounds(store, NOW)
    assert summary.rounds_created == expected


async def test_three_cadences_share_aligned_rounds(test_db, store):
    fifteen = await seed_cadence(test_db, 15)
    thirty = await seed_cadence(test_db, 30)
    sixty = await seed_cadence(test_db, 60)

    summary = await materialize_rounds(store, NOW)

    assert summary.cadences_walked == 3
    assert summary.rounds_created == 49
    assert summary.links_created == 49 + 25 + 13
    assert await linked_type_ids(test_db, "2022-01-10T09:30:00Z") == {
        fifteen.id, thirty.id, sixty.id,
    }
    assert await linked_type_ids(test_db, "2022-01-10T09:00:00Z") == {
        fifteen.id, thirty.id,
    }
    assert await linked_type_ids(test_db, "2022-01-10T09:15:00Z") == {fifteen.id}


async def test_longer_cadence_first_still_shares_rounds(test_db, store):
    await seed_cadence(test_db, 60)
    await seed_cadence(test_db, 15)

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 49
    assert summary.links_created == 13 + 49


async def test_timestamps_are_globally_unique(test_db, store):
    for minutes in (15, 20, 30, 60):
        await seed_cadence(test_db, minutes)
    await materialize_rounds(store, NOW)

    total = await count_rows(test_db, Round)
    distinct = await test_db.execute(
        select(func.count(func.distinct(Round.round_timestamp))),
    )
    assert distinct.scalar_one() == total


# ─── Catch-up & idempotency ──────────────────────────────────────

async def test_catch_up_creates_four_rounds_after_an_hour(test_db, store):
    fifteen = await seed_cadence(test_db, 15)
    await seed_round(test_db, "2022-01-10T08:30:00Z", round_type_ids=(fifteen.id,))

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 4
    assert await round_timestamps(test_db) == [
        "2022-01-10T08:30:00Z",
        "2022-01-10T08:45:00Z",
        "2022-01-10T09:00:00Z",
        "2022-01-10T09:15:00Z",
        "2022-01-10T09:30:00Z",
    ]


async def test_second_run_at_same_time_writes_nothing(test_db, store):
    await seed_cadence(test_db, 15, subjects=("p1",))
    await seed_cadence(test_db, 30, subjects=("p2",))
    await materialize_rounds(store, NOW)
    await test_db.commit()
    before = [
        await count_rows(test_db, model)
        for model in (Round, RoundTypeLink, RoundMember)
    ]

    summary = await materialize_rounds(store, NOW)

    assert (summary.rounds_created, summary.links_created, summary.members_created) == (0, 0, 0)
    after = [
        await count_rows(test_db, model)
        for model in (Round, RoundTypeLink, RoundMember)
    ]
    assert after == before


async def test_run_before_next_slot_is_due_writes_nothing(test_db, store):
    await seed_cadence(test_db, 15)
    await materialize_rounds(store, NOW)

    summary = await materialize_rounds(store, NOW + timedelta(minutes=14))

    assert summary.rounds_created == 0


async def test_existing_round_at_slot_is_reused(test_db, store):
    fifteen = await seed_cadence(test_db, 15)
    await seed_round(test_db, "2022-01-10T09:30:00Z", status="STARTED")

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 48
    assert fifteen.id in await linked_type_ids(test_db, "2022-01-10T09:30:00Z")
    result = await test_db.execute(
        select(Round.status).where(Round.round_timestamp == "2022-01-10T09:30:00Z"),
    )
    assert result.scalar_one() == "STARTED"


async def test_stale_resume_point_is_clamped_to_lookback(test_db, store):
    fifteen = await seed_cadence(test_db, 15)
    await seed_round(test_db, "2022-01-08T09:30:00Z", round_type_ids=(fifteen.id,))

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 49
    stamps = await round_timestamps(test_db)
    assert stamps[1] == "2022-01-09T21:30:00Z"


# ─── Enablement ──────────────────────────────────────────────────

async def test_disabled_config_is_skipped(test_db, store):
    await seed_cadence(test_db, 15, enabled=False)

    summary = await materialize_rounds(store, NOW)

    assert summary.cadences_walked == 0
    assert summary.configs_skipped == 1
    assert summary.to_dict()["configs_skipped"] == 1
    assert await count_rows(test_db, Round) == 0


async def test_reenabled_config_resumes_from_last_round(test_db, store):
    await seed_cadence(test_db, 15)
    await materialize_rounds(store, NOW)
    config = (await test_db.execute(select(RoundConfig))).scalar_one()
    config.enabled = False
    await test_db.commit()

    later = NOW + timedelta(hours=1)
    assert (await materialize_rounds(store, later)).rounds_created == 0

    config.enabled = True
    await test_db.commit()
    summary = await materialize_rounds(store, later)

    assert summary.rounds_created == 4
    stamps = await round_timestamps(test_db)
    assert stamps[-4:] == [
        "2022-01-10T09:45:00Z",
        "2022-01-10T10:00:00Z",
        "2022-01-10T10:15:00Z",
        "2022-01-10T10:30:00Z",
    ]


# ─── Membership ──────────────────────────────────────────────────

async def test_every_new_round_gets_the_roster(test_db, store):
    await seed_cadence(test_db, 60, subjects=("p1", "p2"))

    summary = await materialize_rounds(store, NOW)

    assert summary.members_created == 13 * 2
    assert await member_ids(test_db, "2022-01-10T09:30:00Z") == {"p1", "p2"}


async def test_roster_change_only_reaches_new_rounds(test_db, store):
    fifteen = await seed_cadence(test_db, 15, subjects=("p1",))
    await materialize_rounds(store, NOW)
    test_db.add(RoundAssignment(round_type_id=fifteen.id, subject_id="p2"))
    await test_db.commit()

    summary = await materialize_rounds(store, NOW + timedelta(minutes=15))

    assert summary.rounds_created == 1
    assert summary.members_created == 2
    assert await member_ids(test_db, "2022-01-10T09:45:00Z") == {"p1", "p2"}
    assert await member_ids(test_db, "2022-01-10T09:30:00Z") == {"p1"}
    assert await member_ids(test_db, "2022-01-09T21:30:00Z") == {"p1"}


async def test_shared_round_gets_union_of_rosters(test_db, store):
    await seed_cadence(test_db, 15, subjects=("p1", "shared"))
    await seed_cadence(test_db, 30, subjects=("p2", "shared"))

    await materialize_rounds(store, NOW)

    assert await member_ids(test_db, "2022-01-10T09:30:00Z") == {"p1", "p2", "shared"}
    assert await member_ids(test_db, "2022-01-10T09:15:00Z") == {"p1", "shared"}
    result = await test_db.execute(
        select(func.count())
        .select_from(RoundMember)
        .join(Round, Round.id == RoundMember.round_id)
        .where(Round.round_timestamp == "2022-01-10T09:30:00Z")
    )
    assert result.scalar_one() == 3


# ─── Configuration errors ────────────────────────────────────────

async def test_unsupported_unit_aborts_before_any_write(test_db, store):
    await seed_cadence(test_db, 15)
    await seed_cadence(test_db, 1, unit="hours")

    with pytest.raises(UnsupportedDurationUnitError):
        await materialize_rounds(store, NOW)

    assert await count_rows(test_db, Round) == 0


async def test_missing_round_type_aborts(test_db, store):
    test_db.add(RoundConfig(round_type_id=999, enabled=True))
    await test_db.commit()

    with pytest.raises(MissingRoundTypeError):
        await materialize_rounds(store, NOW)


async def test_disabled_misconfigured_type_is_ignored(test_db, store):
    await seed_cadence(test_db, 15)
    await seed_cadence(test_db, 1, unit="hours", enabled=False)

    summary = await materialize_rounds(store, NOW)

    assert summary.rounds_created == 49
    assert summary.configs_skipped == 1
