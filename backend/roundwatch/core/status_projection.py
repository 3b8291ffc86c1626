"""Status Projection — merges persisted rounds with the virtual cadence lattice.

Invariants:
    - Pure: takes already-fetched rounds and cadences, returns a new list
    - Persisted statuses are never overwritten by lattice entries
    - Output is sorted ascending by round_timestamp, one entry per timestamp
    - Only NOT_STARTED entries at least MISSED_AFTER old become MISSED
    - At most one synthetic slot is appended, and only when nothing is NOT_STARTED

Design Decisions:
    - CREATED (written by the materializer) is kept distinct from NOT_STARTED:
      it is shown verbatim, never marked MISSED, and does not count as pending.
      Whether the two should be unified is an open product question
    - No enabled cadence means no "next" slot can be derived, so none is appended
"""

from datetime import datetime, timedelta
from typing import Iterable, Sequence

from roundwatch.core.cadence import walk_slots
from roundwatch.core.domain_types import Cadence, RoundStatus, RoundStatusView
from roundwatch.core.timestamps import format_timestamp, parse_timestamp


MISSED_AFTER = timedelta(minutes=30)


def merge_lattice(
    persisted: Iterable[RoundStatusView],
    cadences: Sequence[Cadence],
    window_start: datetime,
    now: datetime,
) -> list[RoundStatusView]:
    """Persisted rounds plus a NOT_STARTED entry for every uncovered lattice slot."""
    by_timestamp: dict[str, RoundStatusView] = {}
    for view in persisted:
        by_timestamp[view.round_timestamp] = view

    for cadence in cadences:
        for slot in walk_slots(window_start, now, cadence.duration):
            key = format_timestamp(slot)
            if key not in by_timestamp:
                by_timestamp[key] = RoundStatusView(
                    round_timestamp=key,
                    status=RoundStatus.NOT_STARTED.value,
                )

    return sorted(by_timestamp.values(), key=lambda v: v.round_timestamp)


def mark_missed_rounds(
    views: Sequence[RoundStatusView], now: datetime,
) -> list[RoundStatusView]:
    """Display NOT_STARTED slots that are MISSED_AFTER old (or older) as MISSED."""
    marked = []
    for view in views:
        if (
            view.status == RoundStatus.NOT_STARTED.value
            and now - parse_timestamp(view.round_timestamp) >= MISSED_AFTER
        ):
            view = RoundStatusView(view.round_timestamp, RoundStatus.MISSED.value)
        marked.append(view)
    return marked


def append_next_round_if_needed(
    views: Sequence[RoundStatusView],
    cadences: Sequence[Cadence],
    now: datetime,
) -> list[RoundStatusView]:
    """Surface one actionable slot at now + shortest cadence when none is pending."""
    result = list(views)
    if any(v.status == RoundStatus.NOT_STARTED.value for v in result):
        return result
    if not cadences:
        return result

    shortest = min(c.duration for c in cadences)
    result.append(RoundStatusView(
        round_timestamp=format_timestamp(now + shortest),
        status=RoundStatus.NOT_STARTED.value,
    ))
    return result


def project_timeline(
    persisted: Iterable[RoundStatusView],
    cadences: Sequence[Cadence],
    window_start: datetime,
    now: datetime,
) -> list[RoundStatusView]:
    """Full projection: merge, sort, staleness pass, future-slot pass."""
    views = merge_lattice(persisted, cadences, window_start, now)
    views = mark_missed_rounds(views, now)
    return append_next_round_if_needed(views, cadences, now)
