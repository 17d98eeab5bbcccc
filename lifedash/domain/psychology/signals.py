"""Cheap behavioural signals derived from the full record set"""

from dataclasses import dataclass
from datetime import date
from typing import List

from lifedash.config import Settings
from lifedash.domain import scoring
from lifedash.domain.models import Goal, UserData
from lifedash.utils.date_utils import current_streak, filter_window, parse_date, sort_by_date


@dataclass(frozen=True)
class HabitStackingSuggestion:
    existing: str
    new: str
    why: str
    minutes: int
    frequency: str


HABIT_STACKS = (
    HabitStackingSuggestion("Morning coffee", "5 min meditation", "Calm start increases focus for entire day", 5, "Daily"),
    HabitStackingSuggestion("Workout completion", "10 min cold shower", "Enhances recovery and builds resilience", 10, "Each workout"),
    HabitStackingSuggestion(
        "Before career work", "2 min focus ritual (breathing + goal)", "Primes mind for deep work", 2, "Daily"
    ),
)


def _ordered_totals(user_data: UserData) -> List[float]:
    return [float(s.total_score) for s in sort_by_date(user_data.daily_scores, key=lambda s: s.date)]


def daily_consistency(user_data: UserData, today: date) -> float:
    """Share of the last 30 calendar days with at least one daily score"""
    recent = filter_window(user_data.daily_scores, today, 30, key=lambda s: s.date)
    return len({parse_date(s.date) for s in recent}) / 30


def consecutive_days(user_data: UserData, today: date) -> int:
    return current_streak({parse_date(s.date) for s in user_data.daily_scores if parse_date(s.date)}, today)


def daily_variation(user_data: UserData) -> float:
    """Standard deviation of the last 30 daily totals; 0 with fewer than 2"""
    totals = _ordered_totals(user_data)[-30:]
    if len(totals) < 2:
        return 0.0
    return scoring.population_std(totals)


def goal_categories(goals: List[Goal]) -> List[str]:
    seen = []
    for goal in goals:
        if goal.category and goal.category not in seen:
            seen.append(goal.category)
    return seen


def is_intrinsic(user_data: UserData, config: Settings) -> bool:
    # Goals spread across many life domains read as intrinsic motivation
    return len(goal_categories(user_data.goals)) >= config.intrinsic_goal_categories


def strong_habits(user_data: UserData, config: Settings) -> List[str]:
    habits = []
    if len(user_data.workouts) > config.strong_habit_workouts:
        habits.append("Daily exercise")
    if len(user_data.daily_scores) > config.strong_habit_daily_logs:
        habits.append("Daily reflection")
    if len(user_data.job_applications) > config.strong_habit_applications:
        habits.append("Career focus")
    if len(user_data.trades) > config.strong_habit_trades:
        habits.append("Trading discipline")
    return habits


@dataclass(frozen=True)
class FocusDemand:
    daily_hours_needed: float
    current_capacity: float

    @property
    def gap(self) -> float:
        return self.daily_hours_needed - self.current_capacity


def focus_demand() -> FocusDemand:
    return FocusDemand(daily_hours_needed=5, current_capacity=3)


def distraction_level(config: Settings) -> float:
    """No distraction data is tracked; the level is a configured estimate"""
    return config.estimated_distraction_level


@dataclass(frozen=True)
class EnergyTrend:
    trend: float
    burnout_risk: float


def energy_trend(user_data: UserData, config: Settings) -> EnergyTrend:
    """Last-minus-first over the last 7 daily totals, and the burnout risk it implies"""
    recent = _ordered_totals(user_data)[-7:]
    trend = recent[-1] - recent[0] if len(recent) >= 2 else 0.0
    return EnergyTrend(trend=trend, burnout_risk=0.8 if trend < config.burnout_trend else 0.4)


def high_stress(user_data: UserData, config: Settings) -> bool:
    return daily_variation(user_data) > config.stress_variance


def goal_clarity(goals: List[Goal]) -> float:
    """0-10: share of goals that have a target, a category and a descriptive name"""
    clear = [g for g in goals if g.target and g.category and g.name and len(g.name) > 10]
    return len(clear) / max(len(goals), 1) * 10


def failure_aversion(user_data: UserData, config: Settings) -> bool:
    minimum = config.failure_aversion_min_records
    return len(user_data.job_applications) < minimum or len(user_data.trades) < minimum
