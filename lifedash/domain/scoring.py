"""Shared scoring primitives used by every analyzer and by the master integrator"""

import math
from typing import Iterable, List, Optional, Sequence

from lifedash.config import Settings, settings

# Status labels, best to worst
EXCELLENT = "excellent"
GOOD = "good"
FAIR = "fair"
WARNING = "warning"
CRITICAL = "critical"

HIGH_CONSISTENCY = "HIGH_CONSISTENCY"
MODERATE_CONSISTENCY = "MODERATE_CONSISTENCY"
LOW_CONSISTENCY = "LOW_CONSISTENCY"
INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Division that yields `default` instead of ZeroDivisionError, NaN or Infinity"""
    if not denominator:
        return default
    result = numerator / denominator
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def mean(values: Iterable[float]) -> float:
    values = list(values)
    return safe_div(sum(values), len(values))


def population_std(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def win_rate(wins: int, total: int) -> float:
    """Percentage of winning trades, rounded to one decimal; 0 when there are no trades"""
    return round(safe_div(wins * 100, total), 1)


def profit_factor(avg_win: float, wins: int, avg_loss: float, losses: int) -> float:
    """
    Gross profit over gross loss, built from averages and counts.

    (avg_win x wins) / (|avg_loss| x losses). With no losing trades the
    denominator is zero and the result is 0, never Infinity.
    """
    return round(safe_div(avg_win * wins, abs(avg_loss) * losses), 2)


def status_for_ratio(current: float, target: float, config: Optional[Settings] = None) -> str:
    """
    Map a metric against its target onto a status band.

    Bands (current / target):
    - >= 1.0: excellent
    - >= 0.8: good
    - >= 0.6: fair
    - >= 0.4: warning
    - below:  critical

    A non-positive target gives ratio 0, which is critical.
    """
    config = config or settings
    ratio = safe_div(current, target)
    if ratio >= config.status_excellent_ratio:
        return EXCELLENT
    elif ratio >= config.status_good_ratio:
        return GOOD
    elif ratio >= config.status_fair_ratio:
        return FAIR
    elif ratio >= config.status_warning_ratio:
        return WARNING
    else:
        return CRITICAL


def classify_frequency_consistency(count_in_28_days: int, data_points: int, config: Optional[Settings] = None) -> str:
    """Classify a 4-week record count by its weekly average"""
    config = config or settings
    if data_points < 2:
        return INSUFFICIENT_DATA
    per_week = count_in_28_days / 4
    if per_week >= config.consistency_high_per_week:
        return HIGH_CONSISTENCY
    if per_week >= config.consistency_moderate_per_week:
        return MODERATE_CONSISTENCY
    return LOW_CONSISTENCY


def classify_variation_consistency(values: Sequence[float]) -> str:
    """
    Classify how steady a series of outcomes is by its coefficient of variation.

    std / |mean| (plain std when the mean is 0): < 0.5 HIGH, < 1.5 MODERATE,
    otherwise LOW.
    """
    if len(values) < 2:
        return INSUFFICIENT_DATA
    avg = mean(values)
    std = population_std(values)
    coefficient = std / abs(avg) if avg else std
    if coefficient < 0.5:
        return HIGH_CONSISTENCY
    if coefficient < 1.5:
        return MODERATE_CONSISTENCY
    return LOW_CONSISTENCY


def score_trend(scores: Sequence[float], lookback: int = 7) -> float:
    """
    Recent-half minus earlier-half average over the last `lookback` points.

    Compares the mean of the last 3 points with the mean of the first 3 points
    of the lookback window. Fewer than 2 points gives 0.
    """
    window = list(scores)[-lookback:]
    if len(window) < 2:
        return 0.0
    recent = window[-3:]
    earlier = window[:3]
    return round(mean(recent) - mean(earlier), 2)


def classify_momentum(trend: float) -> str:
    if trend > 0.5:
        return "Strong positive"
    if trend > 0:
        return "Positive"
    if trend < -0.5:
        return "Strong negative"
    if trend < 0:
        return "Negative"
    return "Stable"


def trend_label(values: List[float]) -> str:
    """Direction of a short series: first vs last value"""
    if len(values) < 2:
        return "stable"
    if values[-1] > values[0]:
        return "improving"
    if values[-1] < values[0]:
        return "declining"
    return "stable"
