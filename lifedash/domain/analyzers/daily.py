"""Daily discipline score analysis: per-category detail, trend and logging consistency"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.models import DailyScore
from lifedash.utils.date_utils import current_streak, filter_window, parse_date, reference_day, sort_by_date


@dataclass(frozen=True)
class CategorySpec:
    label: str
    importance: str
    requirement: str


CATEGORIES: Dict[str, CategorySpec] = {
    "morning_routine": CategorySpec(
        "Morning Routine", "CRITICAL - Sets tone for entire day",
        "Wake 5:00 AM, cold shower, vision review, 30 min reading",
    ),
    "deep_work": CategorySpec(
        "Deep Work", "CRITICAL - Drives career progression",
        "4+ hours uninterrupted focus (9-1 PM ideal)",
    ),
    "exercise": CategorySpec(
        "Exercise", "HIGH - Energy, confidence, health",
        "45+ mins (strength + cardio balance)",
    ),
    "trading": CategorySpec(
        "Trading", "HIGH - Revenue generation",
        "Execute plan + journal all trades by 4 PM",
    ),
    "learning": CategorySpec(
        "Learning", "MEDIUM - Skill accumulation",
        "60+ mins (courses, reading, podcasts)",
    ),
    "nutrition": CategorySpec(
        "Nutrition", "MEDIUM - Physical performance",
        "Hit macros, 3+ veg, hydrate (100 oz water)",
    ),
    "sleep": CategorySpec(
        "Sleep", "CRITICAL - Recovery and cognition",
        "7-8 hours, bed by 10 PM, dark room",
    ),
    "social": CategorySpec(
        "Social", "MEDIUM - Mental health, relationships",
        "Meaningful conversation (not scrolling)",
    ),
    "daily_mit": CategorySpec(
        "Daily MIT", "CRITICAL - Accomplishment focus",
        "One most-important-task completed before sleep",
    ),
}


@dataclass
class CategoryDetail:
    key: str
    label: str
    target: float
    importance: str
    requirement: str
    average: float
    current: float
    trend: str
    gap: float
    scoring_impact: float
    status: str


@dataclass
class Trajectory:
    last3_average: float
    trend: str
    label: str


@dataclass
class DailyAnalysis:
    total_count: int
    this_week_count: int
    recent_average: float
    trend: float
    momentum: str
    logged_days_30: int
    consistency_ratio: float
    consistency: str
    streak: int
    status: str
    categories: Dict[str, CategoryDetail] = field(default_factory=dict)
    trajectory: Optional[Trajectory] = None


def _category_detail(key: str, spec: CategorySpec, values: List[float], config: Settings) -> CategoryDetail:
    average = scoring.mean(values)
    target = config.daily_category_targets.get(key, 10.0)
    gap = max(0.0, target - average)
    if average >= 7:
        trend = "improving"
    elif average >= 5:
        trend = "stable"
    else:
        trend = "declining"

    if average >= 8:
        status = "EXCELLENT"
    elif average >= 6:
        status = "GOOD"
    else:
        status = "NEEDS FOCUS"

    return CategoryDetail(
        key=key,
        label=spec.label,
        target=target,
        importance=spec.importance,
        requirement=spec.requirement,
        average=round(average, 1),
        current=values[-1],
        trend=trend,
        gap=round(gap, 2),
        scoring_impact=round(gap * config.daily_score_impact_per_point, 2),
        status=status,
    )


def _trajectory(totals: List[float]) -> Optional[Trajectory]:
    if len(totals) < 3:
        return None
    last_three = totals[-3:]
    average = scoring.mean(last_three)
    if average >= 8:
        label = "ON TRACK"
    elif average >= 7:
        label = "CLOSE"
    else:
        label = "NEEDS FOCUS"
    return Trajectory(last3_average=round(average, 1), trend=scoring.trend_label(last_three), label=label)


def analyze_daily(
    scores: Sequence[DailyScore],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[DailyAnalysis]:
    """
    Summarise the daily score history.

    Requirements:
    - At least `daily_min_scores` dated entries, otherwise None
    - Category detail over the last 7 entries, by date
    - Trend: mean of the last 3 minus mean of the first 3 of the last 7 totals
    - Logging consistency over 30 days; frequency class over 28 days
    """
    config = config or settings
    today = reference_day(now)

    ordered = [s for s in sort_by_date(scores, key=lambda s: s.date) if parse_date(s.date) <= today]
    if len(ordered) < config.daily_min_scores:
        return None

    totals = [float(s.total_score) for s in ordered]
    last_week = ordered[-config.daily_category_window:]

    categories = {}
    for key, spec in CATEGORIES.items():
        values = [float(s.categories[key]) for s in last_week if key in (s.categories or {})]
        if values:
            categories[key] = _category_detail(key, spec, values, config)

    recent_average = round(scoring.mean(totals[-config.trend_lookback:]), 2)
    trend = scoring.score_trend(totals, config.trend_lookback)

    logged_days = {parse_date(s.date) for s in filter_window(ordered, today, 30, key=lambda s: s.date)}
    in_28 = filter_window(ordered, today, 28, key=lambda s: s.date)

    return DailyAnalysis(
        total_count=len(ordered),
        this_week_count=len(filter_window(ordered, today, 7, key=lambda s: s.date)),
        recent_average=recent_average,
        trend=trend,
        momentum=scoring.classify_momentum(trend),
        logged_days_30=len(logged_days),
        consistency_ratio=round(len(logged_days) / 30, 2),
        consistency=scoring.classify_frequency_consistency(len(in_28), len(ordered), config),
        streak=current_streak({parse_date(s.date) for s in ordered}, today),
        status=scoring.status_for_ratio(recent_average, config.daily_score_target, config),
        categories=categories,
        trajectory=_trajectory(totals),
    )


def daily_score_impact(analysis: Optional[DailyAnalysis]) -> Dict[str, float]:
    """Potential daily-score gain per category if its gap were closed"""
    if analysis is None:
        return {}
    return {key: detail.scoring_impact for key, detail in analysis.categories.items()}
