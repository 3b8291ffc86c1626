"""Enabled Cadences — resolves every enabled RoundConfig into a Cadence.

Invariants:
    - Disabled configs are skipped entirely and only counted
    - Any unresolvable config raises RoundConfigurationError (whole call aborts)
"""

from dataclasses import dataclass, field

from roundwatch.core.cadence import resolve_cadence
from roundwatch.core.domain_types import Cadence
from roundwatch.core.repository_protocols import RoundStore


@dataclass
class EnabledCadences:
    cadences: list[Cadence] = field(default_factory=list)
    configs_skipped: int = 0


async def load_enabled_cadences(store: RoundStore) -> EnabledCadences:
    """Cadences of all enabled configs, in config order."""
    loaded = EnabledCadences()
    for round_config in await store.list_round_configs():
        if not round_config.enabled:
            loaded.configs_skipped += 1
            continue
        round_type = await store.get_round_type(round_config.round_type_id)
        loaded.cadences.append(resolve_cadence(round_config, round_type))
    return loaded
