"""Roster Snapshot — which assigned subjects still need a RoundMember row.

Invariants:
    - Result is a set-union delta: existing members are never removed
    - Each subject appears at most once, in first-assignment order
"""

from typing import Iterable


def missing_subjects(
    existing_subject_ids: Iterable[str], assigned_subject_ids: Iterable[str],
) -> list[str]:
    """Assigned subjects that are not yet members of the round."""
    seen = set(existing_subject_ids)
    missing = []
    for subject_id in assigned_subject_ids:
        if subject_id in seen:
            continue
        seen.add(subject_id)
        missing.append(subject_id)
    return missing
