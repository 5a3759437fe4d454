# src/rankboard/levels.py

"""Player level derived from total score."""

import math

# Score needed for level 100; every level past it costs a flat 100 billion
LEVEL_100_SCORE = 26931190829
SCORE_PER_LEVEL_PAST_100 = 100000000000


def required_score_for_level(level: int) -> int:
    """Total score required to reach `level`."""
    if level <= 100:
        if level >= 2:
            # 5000 / 3 is truncated to 1666 by the reference formula
            return int(
                (5000 // 3) * (4 * level**3 - 3 * level**2 - level)
                + 1.25 * math.pow(1.8, level - 60)
            )
        return 1
    return LEVEL_100_SCORE + SCORE_PER_LEVEL_PAST_100 * (level - 100)


def get_level(score: int) -> int:
    """Highest whole level whose required score is at most `score`."""
    level = 1
    while score >= required_score_for_level(level):
        level += 1
    return level - 1


def get_level_precise(score: int) -> float:
    """Level including progress towards the next one, e.g. 97.43."""
    base_level = get_level(score)
    base_score = required_score_for_level(base_level)
    span = required_score_for_level(base_level + 1) - base_score
    if span == 0:
        return 0.0
    return (score - base_score) / span + base_level
