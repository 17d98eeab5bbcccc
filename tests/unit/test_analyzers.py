"""Unit tests for the per-domain analyzers"""

import math
import pytest

from lifedash.domain.analyzers.career import analyze_career
from lifedash.domain.analyzers.daily import analyze_daily, daily_score_impact
from lifedash.domain.analyzers.finance import analyze_finance, discipline_score, months_to_milestone
from lifedash.domain.analyzers.health import WORKOUT_TYPES, analyze_health
from lifedash.domain.analyzers.trading import analyze_trading, monthly_stats
from lifedash.domain.models import Expense, FinancialSnapshot


# Daily scores


def test_daily_requires_two_scores(make_daily_score, now):
    """Test a single score is insufficient data"""
    assert analyze_daily([], now) is None
    assert analyze_daily([make_daily_score(0)], now) is None


def test_daily_flat_week_is_stable(make_daily_score, now):
    """Test seven scores of 5 give zero trend and Stable momentum"""
    scores = [make_daily_score(ago, total=5) for ago in range(6, -1, -1)]

    analysis = analyze_daily(scores, now)

    assert analysis.trend == 0
    assert analysis.momentum == "Stable"
    assert analysis.recent_average == 5.0
    assert analysis.status == "fair"  # 5/7 = 0.71


def test_daily_excludes_future_and_counts_window(make_daily_score, now):
    """Test future entries are ignored and the week window stops at today-6"""
    scores = [
        make_daily_score(7, total=6),
        make_daily_score(6, total=6),
        make_daily_score(0, total=8),
        make_daily_score(-1, total=10),
    ]

    analysis = analyze_daily(scores, now)

    assert analysis.total_count == 3
    assert analysis.this_week_count == 2
    assert analysis.streak == 1


def test_daily_category_detail_uses_latest_entries(make_daily_score, now):
    """Test category averages, current value and gap to target"""
    scores = [make_daily_score(ago, total=6, sleep=value) for ago, value in ((2, 5), (1, 6), (0, 7))]

    analysis = analyze_daily(scores, now)
    sleep = analysis.categories["sleep"]

    assert sleep.average == 6.0
    assert sleep.current == 7
    assert sleep.gap == 3.0
    assert sleep.scoring_impact == 0.45
    assert sleep.status == "GOOD"
    assert "deep_work" not in analysis.categories
    assert daily_score_impact(analysis) == {"sleep": 0.45}


def test_daily_logging_consistency(make_daily_score, now):
    scores = [make_daily_score(ago) for ago in range(0, 28)]

    analysis = analyze_daily(scores, now)

    assert analysis.logged_days_30 == 28
    assert analysis.consistency_ratio == 0.93
    assert analysis.consistency == "HIGH_CONSISTENCY"
    assert analysis.streak == 28


def test_daily_is_deterministic(make_daily_score, now):
    """Test repeated calls over the same input give identical results"""
    scores = [make_daily_score(ago, total=ago % 10) for ago in range(20)]

    assert analyze_daily(scores, now) == analyze_daily(scores, now)


# Workouts


def test_health_requires_three_workouts(make_workout, now):
    assert analyze_health([make_workout(0), make_workout(1)], now) is None


def test_health_weekly_breakdown(make_workout, now):
    """Test three workouts this week against the target of six"""
    workouts = [make_workout(0), make_workout(2, type="cardio"), make_workout(5), make_workout(10)]

    analysis = analyze_health(workouts, now)

    assert analysis.this_week_count == 3
    assert analysis.weekly.total == 3
    assert analysis.weekly.remaining == 3
    assert analysis.weekly.status == "NEED 3 MORE"
    assert analysis.weekly_average == 1.0  # 4 workouts in 28 days
    assert set(analysis.by_type) == set(WORKOUT_TYPES)
    assert analysis.by_type["strength"].this_week == 2
    assert analysis.by_type["hiit"].status == "MISSING"
    assert analysis.consistency is None  # fewer than 7 workouts


def test_health_monthly_consistency(make_workout, now):
    workouts = [make_workout(ago) for ago in range(0, 28)]

    analysis = analyze_health(workouts, now)

    assert analysis.consistency.total_last_month == 28
    assert analysis.consistency.avg_per_week == 6.5
    assert analysis.consistency.status == "ON_TRACK"
    assert analysis.status == "excellent"


# Trading


def test_trading_empty_journal_is_none(now):
    assert analyze_trading([], now) is None


def test_trading_profit_factor_example(make_trade, now):
    """Test 12 wins of $100 and 8 losses of $50 over 20 trades"""
    trades = [make_trade(ago, pnl=100) for ago in range(12)] + [make_trade(ago, pnl=-50) for ago in range(12, 20)]

    overall = analyze_trading(trades, now).overall

    assert overall.total_trades == 20
    assert overall.win_rate == 60.0
    assert overall.avg_win == 100
    assert overall.avg_loss == 50
    assert overall.profit_factor == 3.0
    assert overall.total_pnl == 800


def test_trading_uses_last_twenty_by_date(make_trade, now):
    """Test the oldest trades fall out of the statistics even when entered last"""
    recent = [make_trade(ago, pnl=10) for ago in range(20)]
    old = [make_trade(100 + ago, pnl=-500) for ago in range(5)]

    analysis = analyze_trading(recent + old, now)

    assert analysis.overall.total_trades == 20
    assert analysis.overall.loss_count == 0
    assert analysis.this_week_count == 7


@pytest.mark.parametrize("pnl", [100, -100])
def test_trading_one_sided_journal_is_finite(make_trade, now, pnl):
    """Test all-wins and all-losses journals never produce NaN or Infinity"""
    trades = [make_trade(ago, pnl=pnl) for ago in range(5)]

    overall = analyze_trading(trades, now).overall

    assert math.isfinite(overall.profit_factor)
    assert overall.profit_factor == 0
    assert overall.win_rate in (0.0, 100.0)


def test_trading_breakdowns(make_trade, now):
    trades = [
        make_trade(0, pnl=80, asset="NQ", direction="Short", notes="planned 2:1"),
        make_trade(1, pnl=-60, asset="NQ", direction="Long", notes="R:R 3:1"),
        make_trade(2, pnl=70, asset="ES", direction="Short"),
        make_trade(3, pnl=-70, asset="ES", direction="Long"),
    ]

    analysis = analyze_trading(trades, now)

    assert analysis.overall.risk_reward_ratio == 2.5
    assert analysis.by_asset["NQ"].count == 2
    assert analysis.by_asset["NQ"].win_rate == 50.0
    assert analysis.by_direction["Short"].win_rate == 100.0
    assert analysis.by_direction["Long"].total_pnl == -130
    assert analysis.entry_quality.good_entries == 2
    assert analysis.entry_quality.bad_entries == 2
    assert analysis.entry_quality.patterns == []


def test_trading_monthly_stats(make_trade, now):
    trades = [make_trade(ago, pnl=-300) for ago in (1, 5, 10)] + [make_trade(40, pnl=1000)]

    stats = monthly_stats(trades, now)

    assert stats["month"] == "June 2024"
    assert stats["total_trades"] == 3
    assert stats["status"] == "DRAWDOWN"


# Career


def test_career_empty_is_none(now):
    assert analyze_career([], now) is None


def test_career_tiers_and_rates(make_application, now):
    """Test tier aliases, conversion rates and expected offers"""
    apps = [
        make_application(0, tier="Tier 1", status="interview"),
        make_application(1, tier="tier1", status="rejected"),
        make_application(2, tier="Tier1", status="rejected"),
        make_application(3, tier="Tier1"),
        make_application(20, tier="Tier4", status="offer"),
    ]

    analysis = analyze_career(apps, now)
    tier1 = analysis.tiers["Tier1"]

    assert analysis.total_count == 5
    assert analysis.this_week_count == 4
    assert analysis.remaining_this_week == 11
    assert tier1.total == 4
    assert tier1.interview_rate == 25.0
    assert tier1.offer_rate_from_interview == 0.0
    assert "RECENT_REJECTIONS" in tier1.quality_flags
    assert "ALL_REJECTED" not in tier1.quality_flags
    assert tier1.pipeline_health == "HEALTHY - 10%+ interview rate"
    assert analysis.tiers["Tier4"].pipeline_health == "STRONG - Offers in pipeline"
    assert analysis.distribution == {"Tier1": 80.0, "Tier2": 0.0, "Tier3": 0.0, "Tier4": 20.0}
    assert analysis.expected_offers == pytest.approx(0.38)


def test_career_status_against_weekly_target(make_application, now):
    apps = [make_application(0) for _ in range(15)]

    assert analyze_career(apps, now).status == "excellent"


# Finance


def test_finance_without_income_or_expenses_is_none(now):
    assert analyze_finance(FinancialSnapshot(), [], now) is None


def test_finance_savings_and_health(now):
    snapshot = FinancialSnapshot(net_worth=100_000, monthly_income=10_000, monthly_expenses=7_000)

    analysis = analyze_finance(snapshot, [], now)

    assert analysis.monthly_savings == 3000
    assert analysis.savings_rate == 30.0
    assert analysis.expense_ratio == 70.0
    assert analysis.health == "EXCELLENT"
    assert analysis.status == "excellent"
    assert analysis.discipline.score == 100
    assert isinstance(analysis.milestones["milestone_500k"], int)


def test_finance_falls_back_to_expense_records(days_ago, now):
    """Test the 30-day expense sum stands in when the snapshot has no expenses"""
    expenses = [
        Expense(id="1", date=days_ago(1), amount=400, category="food"),
        Expense(id="2", date=days_ago(29), amount=600, category="rent"),
        Expense(id="3", date=days_ago(30), amount=9999, category="rent"),
    ]

    analysis = analyze_finance(FinancialSnapshot(monthly_income=2000), expenses, now)

    assert analysis.expenses_from_records is True
    assert analysis.monthly_expenses == 1000
    assert analysis.categories == {"food": 400, "rent": 600}
    assert analysis.savings_rate == 50.0


def test_finance_negative_savings(now):
    analysis = analyze_finance(FinancialSnapshot(monthly_income=3000, monthly_expenses=3300), [], now)

    assert analysis.savings_rate == -10.0
    assert analysis.health == "POOR"
    assert analysis.milestones["milestone_2m"] == "Infinite (no savings)"


def test_months_to_milestone_and_discipline():
    assert months_to_milestone(500_000, 500_000, 1000, 0.10) == 0
    assert months_to_milestone(0, 2_000_000, 1, 0.0) == "Beyond 50 years"
    assert discipline_score(0, 100, 0).rating == "NEEDS_IMPROVEMENT"
