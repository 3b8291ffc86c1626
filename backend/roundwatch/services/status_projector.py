"""Status Projector — read-only live timeline of persisted and expected rounds.

Invariants:
    - Never writes to the store
    - Works with no materialized rounds at all (all-virtual lattice)
    - Racing a materializer run is safe: uncommitted gaps show as NOT_STARTED
    - An inverted window, or one longer than max_window, raises
      InvalidWindowError before any read

Design Decisions:
    - IO here, decisions in core/status_projection.py
"""

import logging
from datetime import datetime, timedelta

from roundwatch.core.domain_types import RoundStatusView
from roundwatch.core.errors import InvalidWindowError
from roundwatch.core.repository_protocols import RoundStore
from roundwatch.core.status_projection import project_timeline
from roundwatch.core.timestamps import format_timestamp, normalize_instant
from roundwatch.services.cadences import load_enabled_cadences

logger = logging.getLogger(__name__)


async def project_round_status(
    store: RoundStore, window_start: datetime, now: datetime,
    max_window: timedelta | None = None,
) -> list[RoundStatusView]:
    """Timeline for [window_start, now], plus at most one upcoming slot."""
    window_start = normalize_instant(window_start)
    now = normalize_instant(now)
    if window_start > now:
        raise InvalidWindowError(
            format_timestamp(window_start), format_timestamp(now),
        )
    if max_window is not None and now - window_start > max_window:
        raise InvalidWindowError(
            format_timestamp(window_start), format_timestamp(now),
            message=(
                f"Window {format_timestamp(window_start)}..{format_timestamp(now)} "
                f"is longer than {max_window}"
            ),
        )

    loaded = await load_enabled_cadences(store)
    rounds = await store.list_rounds_in_window(
        format_timestamp(window_start), format_timestamp(now),
    )
    persisted = [
        RoundStatusView(round_timestamp=r.round_timestamp, status=r.status)
        for r in rounds
    ]

    views = project_timeline(persisted, loaded.cadences, window_start, now)
    logger.debug(
        f"Projected {len(views)} round(s) ({len(persisted)} persisted)",
        extra={"now": format_timestamp(now), "entries": len(views)},
    )
    return views
