"""Forgiving streak calculation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence


class Loggable(Protocol):
    logged: bool


@dataclass(frozen=True)
class StreakWalk:
    current: int
    longest: int
    freezes_used: int


def walk_streak(history: Sequence[Loggable], max_freezes: int = 3) -> StreakWalk:
    """Walk the log history from newest to oldest.

    A single missed day after at least one logged day spends a freeze and
    counts toward the streak. A second consecutive miss, or a miss with no
    freezes left, ends the walk. Misses before the first logged day (today
    and yesterday not logged yet) neither count nor spend a freeze.

    Args:
        history: Day entries ordered oldest to newest
        max_freezes: Freezes available for the period

    Returns:
        StreakWalk with the current streak, the longest run seen during the
        walk and the freezes spent
    """
    streak = 0
    longest = 0
    freezes_used = 0
    consecutive_misses = 0

    for day in reversed(history):
        if day.logged:
            streak += 1
            consecutive_misses = 0
        else:
            consecutive_misses += 1
            if consecutive_misses == 1 and streak > 0:
                if freezes_used < max_freezes:
                    freezes_used += 1
                    streak += 1
                else:
                    break
            elif consecutive_misses >= 2:
                break

        longest = max(longest, streak)

    return StreakWalk(current=streak, longest=longest, freezes_used=freezes_used)


def weekly_consistency(history: Iterable[Loggable], days: int = 7) -> float:
    """Percent of the trailing week that was logged, unrounded."""
    recent = list(history)[-days:]
    logged = sum(1 for day in recent if day.logged)
    return logged / days * 100
