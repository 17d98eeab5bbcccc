"""Workout analysis by type, weekly volume and monthly consistency"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Sequence

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.models import Workout
from lifedash.utils.date_utils import filter_window, reference_day, sort_by_date


@dataclass(frozen=True)
class WorkoutTypeSpec:
    label: str
    importance: str
    recovery_hours: int


WORKOUT_TYPES: Dict[str, WorkoutTypeSpec] = {
    "strength": WorkoutTypeSpec("Strength", "HIGH - Muscle building", 48),
    "cardio": WorkoutTypeSpec("Cardio", "HIGH - Cardiovascular health", 24),
    "hiit": WorkoutTypeSpec("HIIT", "MEDIUM - Fat loss + conditioning", 48),
    "flexibility": WorkoutTypeSpec("Flexibility", "MEDIUM - Mobility, injury prevention", 0),
    "sports": WorkoutTypeSpec("Sports", "LOW - Fun + movement", 24),
    "hiking": WorkoutTypeSpec("Hiking", "LOW - Endurance + outdoors", 24),
}


@dataclass
class WorkoutTypeStats:
    key: str
    label: str
    target: int
    this_week: int = 0
    total: int = 0
    avg_duration: float = 0.0
    last_workout: Optional[str] = None
    consistency: str = scoring.INSUFFICIENT_DATA
    status: str = "MISSING"


@dataclass
class WeeklyBreakdown:
    total: int
    target: int
    remaining: int
    by_type: Dict[str, int]
    status: str


@dataclass
class MonthlyConsistency:
    total_last_month: int
    avg_per_week: float
    target: int
    status: str


@dataclass
class HealthAnalysis:
    total_count: int
    this_week_count: int
    weekly_average: float
    status: str
    by_type: Dict[str, WorkoutTypeStats] = field(default_factory=dict)
    weekly: Optional[WeeklyBreakdown] = None
    consistency: Optional[MonthlyConsistency] = None


def _matches(workout: Workout, key: str, spec: WorkoutTypeSpec) -> bool:
    kind = (workout.type or "").strip().lower()
    return kind in (key, spec.label.lower())


def assess_workout_status(this_week: int, target: int, consistency: str) -> str:
    if this_week >= target and consistency == scoring.HIGH_CONSISTENCY:
        return "EXCELLENT"
    elif this_week >= max(1, target - 1) and consistency != scoring.LOW_CONSISTENCY:
        return "GOOD"
    elif this_week >= 1:
        return "PRESENT"
    else:
        return "MISSING"


def _monthly_consistency(workouts: Sequence[Workout], today, config: Settings) -> Optional[MonthlyConsistency]:
    if len(workouts) < 7:
        return None
    last_month = filter_window(workouts, today, 30, key=lambda w: w.date)
    avg_per_week = round(len(last_month) / 4.3, 1)
    if avg_per_week >= config.weekly_workout_target:
        status = "ON_TRACK"
    elif avg_per_week >= 4:
        status = "BUILDING"
    else:
        status = "NEEDS_FOCUS"
    return MonthlyConsistency(
        total_last_month=len(last_month),
        avg_per_week=avg_per_week,
        target=config.weekly_workout_target,
        status=status,
    )


def analyze_health(
    workouts: Sequence[Workout],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[HealthAnalysis]:
    """
    Analyze workouts by type and weekly volume.

    Requirements:
    - At least `health_min_workouts` dated workouts, otherwise None
    - Per type: this-week count, average duration, 4-week consistency, status
    - Weekly breakdown against the 6-workout target
    - Primary metric: average workouts per week over the last 28 days
    """
    config = config or settings
    today = reference_day(now)

    ordered = sort_by_date(workouts, key=lambda w: w.date)
    if len(ordered) < config.health_min_workouts:
        return None

    this_week = filter_window(ordered, today, 7, key=lambda w: w.date)
    last_28 = filter_window(ordered, today, 28, key=lambda w: w.date)

    by_type = {}
    for key, spec in WORKOUT_TYPES.items():
        stats = WorkoutTypeStats(key=key, label=spec.label, target=config.workout_type_targets.get(key, 1))
        typed = [w for w in ordered if _matches(w, key, spec)]
        if typed:
            typed_week = sum(1 for w in this_week if _matches(w, key, spec))
            typed_28 = sum(1 for w in last_28 if _matches(w, key, spec))
            stats.this_week = typed_week
            stats.total = len(typed)
            stats.avg_duration = round(scoring.mean(float(w.duration or 0) for w in typed), 1)
            stats.last_workout = str(typed[-1].date)
            stats.consistency = scoring.classify_frequency_consistency(typed_28, len(typed), config)
            stats.status = assess_workout_status(typed_week, stats.target, stats.consistency)
        by_type[key] = stats

    counts: Dict[str, int] = {}
    for w in this_week:
        kind = w.type or "unknown"
        counts[kind] = counts.get(kind, 0) + 1
    target = config.weekly_workout_target
    remaining = max(0, target - len(this_week))
    weekly = WeeklyBreakdown(
        total=len(this_week),
        target=target,
        remaining=remaining,
        by_type=counts,
        status="TARGET MET" if remaining == 0 else f"NEED {remaining} MORE",
    )

    weekly_average = round(len(last_28) / 4, 2)

    return HealthAnalysis(
        total_count=len(ordered),
        this_week_count=len(this_week),
        weekly_average=weekly_average,
        status=scoring.status_for_ratio(weekly_average, target, config),
        by_type=by_type,
        weekly=weekly,
        consistency=_monthly_consistency(ordered, today, config),
    )
