"""Drop speed, points and level as functions of cleared lines"""

SCORE_TABLE = (40, 100, 300, 1200)
CASCADE_MULTIPLIER = 1.5
LINES_PER_LEVEL = 5
BASE_DROP_MS = 1000
MIN_DROP_MS = 50


def drop_period_ms(lines: int) -> float:
    # Speeds up 1% per line for the first five lines, 1.25% per line after
    speed = 1.01 ** min(lines, 5) * 1.0125 ** max(lines - 5, 0)
    return max(MIN_DROP_MS, BASE_DROP_MS / speed)


def level_for_lines(total_lines: int) -> int:
    return total_lines // LINES_PER_LEVEL


def points_for_lines(cleared: int, level: int, cascade: bool = False) -> int:
    if cleared <= 0:
        return 0
    points = SCORE_TABLE[min(cleared, len(SCORE_TABLE)) - 1] * (level + 1)
    if cascade:
        points = int(points * CASCADE_MULTIPLIER)
    return points
