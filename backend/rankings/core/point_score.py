"""Point-Score Arithmetic — pure rules for the cumulative ranking.

Invariants:
    - CONTEST_COUNT_DELTAS covers every RankingsUpdateReason (checked at import)
    - Deltas: NEW_CONTEST +1, POINTS_CHANGED 0, DELETED_CONTEST -1
    - apply_contest_count_delta() never computes with a missing operand:
      either side None -> None (field left untouched)
"""

from types import MappingProxyType
from typing import Mapping

from rankings.core.domain_types import RankingsUpdateReason

CONTEST_COUNT_DELTAS: Mapping[RankingsUpdateReason, int] = MappingProxyType({
    RankingsUpdateReason.NEW_CONTEST: 1,
    RankingsUpdateReason.POINTS_CHANGED: 0,
    RankingsUpdateReason.DELETED_CONTEST: -1,
})

if set(CONTEST_COUNT_DELTAS) != set(RankingsUpdateReason):
    raise RuntimeError("every update reason needs a contest-count delta")


def contest_count_delta(reason: RankingsUpdateReason | None) -> int | None:
    if reason is None:
        return None
    return CONTEST_COUNT_DELTAS[reason]


def apply_contest_count_delta(
    current: int | None, delta: int | None,
) -> int | None:
    if current is None or delta is None:
        return None
    return current + delta
