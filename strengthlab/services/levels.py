"""Strength level curve.

Level ``n`` costs ``n`` more XP than level ``n - 1`` (triangular growth).
The low levels are seeded explicitly, everything past the table follows
the same rule.
"""
from strengthlab.utils.numbers import clamp, round_half_up

LEVEL_THRESHOLDS = {
    1: 1,
    2: 3,
    3: 6,
    4: 10,
    5: 15,
}
MAX_SEEDED_LEVEL = max(LEVEL_THRESHOLDS)


def xp_for_level(level: int) -> int:
    """Total cumulative XP needed to reach ``level``."""
    if level < 1:
        return 0
    if level in LEVEL_THRESHOLDS:
        return LEVEL_THRESHOLDS[level]
    extra = sum(range(MAX_SEEDED_LEVEL + 1, level + 1))
    return LEVEL_THRESHOLDS[MAX_SEEDED_LEVEL] + extra


def xp_gap_between_levels(level: int) -> int:
    return xp_for_level(level + 1) - xp_for_level(level)


def level_for_xp(total_xp: int) -> int:
    """Largest level whose threshold is <= ``total_xp``; never below 1."""
    level = 1
    while xp_for_level(level + 1) <= total_xp:
        level += 1
    return level


def next_level_info(total_xp: int) -> dict:
    current_level = level_for_xp(total_xp)
    if total_xp < xp_for_level(1):
        # not there yet: the next milestone is the level 1 threshold itself
        next_level = 1
        xp_for_current = 0
    else:
        next_level = current_level + 1
        xp_for_current = xp_for_level(current_level)
    xp_for_next = xp_for_level(next_level)
    xp_gap = xp_for_next - xp_for_current

    progress = round_half_up(100 * (total_xp - xp_for_current) / xp_gap)

    return {
        'current_level': current_level,
        'next_level': next_level,
        'xp_needed': xp_for_next - total_xp,
        'total_xp': total_xp,
        'progress_percentage': clamp(progress),
        'xp_for_current_level': xp_for_current,
        'xp_for_next_level': xp_for_next,
        'xp_gap': xp_gap,
    }


def level_progress_rows(total_xp: int) -> list:
    current_level = level_for_xp(total_xp)
    rows = []
    previous = 0
    for level, threshold in LEVEL_THRESHOLDS.items():
        if total_xp >= threshold:
            progress = 100
        elif total_xp <= previous:
            progress = 0
        else:
            progress = round_half_up(100 * (total_xp - previous) / (threshold - previous))
        rows.append({
            'level': level,
            'threshold': threshold,
            'xp_required': threshold - previous,
            'is_current': level == current_level,
            'is_completed': level < current_level,
            'progress_percentage': progress,
        })
        previous = threshold
    return rows
