"""Running totals and trend deltas over meals and body metrics."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from nutrition_assistant.domain.meals import MacroTotals, MealEntry
from nutrition_assistant.domain.pantry import ItemCategory, PantryItem
from nutrition_assistant.domain.tracking import BodyMetricLog
from nutrition_assistant.services.normalize import (
    identity_key,
    round_half_up,
    round_one,
)

WEEK_DAYS = 7
MONTH_DAYS = 30


@dataclass(frozen=True)
class WeightProgress:
    """Summary of a weight history relative to today."""

    current: float
    starting: float
    total_change: float
    weekly_change: float | None
    monthly_change: float | None
    remaining_to_goal: float | None
    total_entries: int
    first_entry: date
    last_entry: date


@dataclass(frozen=True)
class WaterProgress:
    """Daily water total measured against the goal."""

    total: int
    goal: int
    remaining: int
    percent_complete: int
    goal_reached: bool


def sum_macros(meals: Iterable[MealEntry]) -> MacroTotals:
    """Sum calories and macros over exactly the given meals."""
    total = MacroTotals(calories=0, protein=0, carbs=0, fat=0)
    for meal in meals:
        total = MacroTotals(
            calories=total.calories + (meal.calories or 0),
            protein=total.protein + (meal.protein or 0),
            carbs=total.carbs + (meal.carbs or 0),
            fat=total.fat + (meal.fat or 0),
        )
    return total


def weight_change(current: float, previous: float | None) -> float | None:
    """Return the rounded delta to a previous weight, if there is one."""
    if previous is None:
        return None
    return round_one(current - previous)


def weight_progress(
    history: Sequence[BodyMetricLog], today: date, goal: float | None
) -> WeightProgress | None:
    """Compute total, weekly and monthly weight deltas.

    Weekly and monthly deltas compare the newest entry with the most recent
    entry dated on or before the cutoff day; with no such entry the delta is
    None rather than zero.
    """
    if not history:
        return None
    ordered = sorted(history, key=lambda log: log.date, reverse=True)
    current = ordered[0]
    starting = ordered[-1]
    week_entry = _latest_on_or_before(ordered, today - timedelta(days=WEEK_DAYS))
    month_entry = _latest_on_or_before(ordered, today - timedelta(days=MONTH_DAYS))
    return WeightProgress(
        current=current.amount,
        starting=starting.amount,
        total_change=round_one(current.amount - starting.amount),
        weekly_change=weight_change(
            current.amount, week_entry.amount if week_entry else None
        ),
        monthly_change=weight_change(
            current.amount, month_entry.amount if month_entry else None
        ),
        remaining_to_goal=weight_change(current.amount, goal) if goal else None,
        total_entries=len(ordered),
        first_entry=starting.date,
        last_entry=current.date,
    )


def water_progress(total: int, goal: int) -> WaterProgress:
    """Measure a day's water total against the goal."""
    return WaterProgress(
        total=total,
        goal=goal,
        remaining=max(0, goal - total),
        percent_complete=round_half_up(total / goal * 100) if goal else 0,
        goal_reached=total >= goal,
    )


def frequent_meals(meals: Iterable[MealEntry], limit: int = 5) -> list[MealEntry]:
    """Return the most often logged meals, one representative per name.

    Names are compared case-insensitively; ties go to the most recently
    logged meal, which is also the representative returned.
    """
    latest: dict[str, MealEntry] = {}
    counts: dict[str, int] = {}
    for meal in meals:
        key = identity_key(meal.name)
        counts[key] = counts.get(key, 0) + 1
        if key not in latest or meal.logged_at > latest[key].logged_at:
            latest[key] = meal
    ranked = sorted(
        latest,
        key=lambda key: (counts[key], latest[key].logged_at),
        reverse=True,
    )
    return [latest[key] for key in ranked[:limit]]


def group_by_category(items: Iterable[PantryItem]) -> dict[str, list[PantryItem]]:
    """Group pantry items by category, uncategorized items under ``other``."""
    grouped: dict[str, list[PantryItem]] = {}
    for item in items:
        category = str(item.category or ItemCategory.OTHER)
        grouped.setdefault(category, []).append(item)
    return grouped


def _latest_on_or_before(
    ordered: Sequence[BodyMetricLog], cutoff: date
) -> BodyMetricLog | None:
    for log in ordered:
        if log.date <= cutoff:
            return log
    return None
