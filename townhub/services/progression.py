# townhub/services/progression.py
"""Job level progression.

Levels run from 1 to MAX_LEVEL. ``xp_for_level`` is the cumulative XP a
worker needs to reach a level.
"""

MAX_LEVEL = 10


def xp_for_level(level: int) -> int:
    if level <= 1:
        return 0
    if level == 2:
        return 100
    return 100 * level * (level + 1) // 2 - 100


def xp_needed_for_next_level(level: int) -> int:
    if level >= MAX_LEVEL:
        return 0
    return xp_for_level(level + 1) - xp_for_level(level)


def apply_experience(level: int, xp: int, gained: int) -> tuple[int, int]:
    """Return (new_xp, new_level) after gaining XP; levels never go down."""
    new_xp = xp + gained
    new_level = level
    for candidate in range(level, MAX_LEVEL):
        if new_xp >= xp_for_level(candidate + 1):
            new_level = candidate + 1
        else:
            break
    return new_xp, new_level
