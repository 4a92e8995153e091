## Study-hour budget estimation
import math

from app.planning.errors import ValidationError

UNIT_DAYS = {"days": 1, "weeks": 7, "months": 30}  # months are approximate

DIFFICULTY_MULTIPLIER = {
    "beginner": 1.3,
    "intermediate": 1.0,
    "advanced": 0.9,
}

BASELINE_HOURS_PER_DAY = 2
MIN_BUDGET_HOURS = 6


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's rounding)."""
    return int(math.floor(x + 0.5))


def normalize_unit(unit: str) -> str:
    u = unit.strip().lower()
    if not u.endswith("s"):
        u += "s"
    if u not in UNIT_DAYS:
        raise ValidationError(f"Unknown duration unit: {unit!r}")
    return u


def unit_to_days(value: int, unit: str) -> int:
    return value * UNIT_DAYS[normalize_unit(unit)]


def difficulty_multiplier(difficulty: str) -> float:
    try:
        return DIFFICULTY_MULTIPLIER[difficulty]
    except KeyError:
        raise ValidationError(f"Unknown difficulty: {difficulty!r}") from None


def compute_budget(duration_value: int, duration_unit: str, difficulty: str) -> int:
    """
    Total study hours for the plan: 2h/day over the duration, scaled by difficulty.
    Never below MIN_BUDGET_HOURS.
    """
    if duration_value <= 0:
        raise ValidationError(f"Duration must be positive, got {duration_value}")

    days = unit_to_days(duration_value, duration_unit)
    hours = days * BASELINE_HOURS_PER_DAY * difficulty_multiplier(difficulty)
    return max(MIN_BUDGET_HOURS, round_half_up(hours))
