"""Unit tests for the rule-based recommendation generators"""

import pytest

from lifedash.domain.analyzers.career import analyze_career
from lifedash.domain.analyzers.daily import analyze_daily
from lifedash.domain.analyzers.finance import analyze_finance
from lifedash.domain.analyzers.health import analyze_health
from lifedash.domain.analyzers.trading import analyze_trading
from lifedash.domain.integrator import GENERATORS
from lifedash.domain.models import FinancialSnapshot
from lifedash.domain.ranking import Severity
from lifedash.domain.recommendations.career import generate_career_recommendations
from lifedash.domain.recommendations.daily import generate_daily_recommendations
from lifedash.domain.recommendations.finance import generate_finance_recommendations, required_annual_growth
from lifedash.domain.recommendations.health import generate_fitness_recommendations
from lifedash.domain.recommendations.trading import breakeven_win_rate, generate_trading_recommendations


def _titles(recs):
    return [r.title for r in recs]


def _ranks(recs):
    return [r.severity.rank for r in recs]


@pytest.mark.parametrize(
    "generator",
    [
        generate_daily_recommendations,
        generate_fitness_recommendations,
        generate_trading_recommendations,
        generate_career_recommendations,
        generate_finance_recommendations,
    ],
)
def test_insufficient_data_gives_no_recommendations(generator):
    """Test every generator returns an empty list for a missing analysis"""
    assert generator(None) == []


# Fitness


def test_weekly_volume_too_low(make_workout, now, config):
    """Test three workouts this week flag the volume gap against the target of six"""
    workouts = [make_workout(ago) for ago in (0, 1, 2)]

    recs = generate_fitness_recommendations(analyze_health(workouts, now, config), config)
    volume = next(r for r in recs if r.title == "🔴 Weekly Volume Too Low")

    assert volume.severity is Severity.URGENT
    assert volume.details["missing"] == "Need 3 more"
    assert recs[0] is volume
    assert _ranks(recs) == sorted(_ranks(recs))


def test_fitness_type_gaps(make_workout, now, config):
    workouts = [make_workout(ago) for ago in (0, 1, 2)]

    titles = _titles(generate_fitness_recommendations(analyze_health(workouts, now, config), config))

    assert "💪 Strength Training Gap" not in titles
    assert "🏃 Cardio Consistency Missing" in titles
    assert "⚡ HIIT For Fat Loss Acceleration" in titles
    assert "🧘 Mobility: Injury Prevention Missing" in titles
    assert titles[-1] == "🛌 Recovery Protocol"


def test_fitness_type_targets_come_from_config(make_workout, now, config):
    """Test raising the strength target turns three sessions into a gap"""
    custom = config.model_copy(update={"workout_type_targets": {**config.workout_type_targets, "strength": 4}})
    workouts = [make_workout(ago) for ago in (0, 1, 2)]

    analysis = analyze_health(workouts, now, custom)
    recs = {r.title: r for r in generate_fitness_recommendations(analysis, custom)}

    assert analysis.by_type["strength"].target == 4
    assert recs["💪 Strength Training Gap"].details["missing"] == "Missing: 1 strength session(s)"
    assert recs["💪 Strength Training Gap"].target_state == "4 per week"


def test_fitness_volume_on_track(make_workout, now, config):
    workouts = [make_workout(ago, type=kind) for ago, kind in enumerate(["strength", "cardio"] * 3)]

    titles = _titles(generate_fitness_recommendations(analyze_health(workouts, now, config), config))

    assert "✅ Weekly Volume On Track" in titles
    assert "🔴 Weekly Volume Too Low" not in titles


def test_fitness_is_deterministic(make_workout, now, config):
    """Test the same analysis always yields the same recommendation list"""
    analysis = analyze_health([make_workout(ago) for ago in range(5)], now, config)

    assert generate_fitness_recommendations(analysis, config) == generate_fitness_recommendations(analysis, config)


# Daily


def test_daily_category_rules(make_daily_score, now):
    """Test only categories under their threshold are flagged, urgent first"""
    scores = [
        make_daily_score(1, sleep=9, social=6, morning_routine=8),
        make_daily_score(0, sleep=6, social=4, morning_routine=8),
    ]

    recs = generate_daily_recommendations(analyze_daily(scores, now))

    assert _titles(recs) == ["😴 Sleep Quality Critical", "👥 Isolation Risk"]
    assert recs[0].severity is Severity.URGENT
    assert recs[0].details["category"] == "sleep"
    assert recs[0].details["gap"] == "1.5"


def test_daily_thresholds_and_targets_come_from_config(make_daily_score, now, config):
    """Test overridden thresholds move or switch off category rules"""
    custom = config.model_copy(
        update={
            "daily_category_thresholds": {"sleep": 5, "morning_routine": 9},
            "daily_category_targets": {**config.daily_category_targets, "morning_routine": 10},
        }
    )
    scores = [
        make_daily_score(1, sleep=9, social=6, morning_routine=8),
        make_daily_score(0, sleep=6, social=4, morning_routine=8),
    ]
    analysis = analyze_daily(scores, now, custom)

    recs = GENERATORS["daily"](analysis, custom)

    assert _titles(recs) == ["⏰ Morning Routine Quality Issue"]
    assert recs[0].target_state == "Target: 10/10"
    assert recs[0].details["gap"] == "2.0"


# Trading


def test_trading_critical_win_rate_and_drawdown(make_trade, now, config):
    trades = [make_trade(0, pnl=100)] + [make_trade(ago, pnl=-300) for ago in (1, 2, 3)]

    recs = generate_trading_recommendations(analyze_trading(trades, now, config), config)

    assert _titles(recs)[:2] == ["🔴 Critical Win Rate Issue", "🚨 Negative Month/Week Alert"]
    assert recs[1].current_state == "-$800.00 total P&L"


def test_trading_edge_and_consistency(make_trade, now, config):
    """Test a profitable but erratic journal: edge found, consistency flagged, no win-rate praise"""
    trades = [make_trade(ago, pnl=100) for ago in range(12)] + [make_trade(ago, pnl=-50) for ago in range(12, 20)]

    recs = generate_trading_recommendations(analyze_trading(trades, now, config), config)
    titles = _titles(recs)

    assert "🎉 Positive Month Alert" in titles
    assert "📈 Consistency Issue" in titles
    assert "✅ LONG Trades: Your Edge Found" in titles
    assert "✅ Win Rate Strong: Maintain Process" not in titles
    assert _ranks(recs) == sorted(_ranks(recs))


def test_trading_tight_risk_reward(make_trade, now, config):
    trades = [make_trade(ago, pnl=100 if ago % 2 else -100, notes="1:1") for ago in range(6)]

    recs = generate_trading_recommendations(analyze_trading(trades, now, config), config)
    rr = next(r for r in recs if r.title == "⚠️ Poor Risk/Reward Ratio")

    assert rr.severity is Severity.WARNING
    assert "50%" in rr.problem


def test_breakeven_win_rate():
    assert breakeven_win_rate(1.0) == 50.0
    assert breakeven_win_rate(2.0) == 33.3


# Career


def test_career_without_tier1_volume(make_application, now, config):
    """Test an all-Tier2 week flags Tier 1 volume, distribution and the missing safety nets"""
    apps = [make_application(ago // 2) for ago in range(14)]

    recs = generate_career_recommendations(analyze_career(apps, now, config), config)

    assert _titles(recs) == [
        "🎯 Tier 1 Volume Too Low",
        "⚖️ Application Distribution Out of Balance",
        "🛡️ Tier 3 Safety Net Weak",
        "🆘 No Safety Net Applications",
    ]
    assert recs[1].current_state == "Tier 1: 0% | Tier 2: 100% | Tier 3: 0% | Tier 4: 0%"


def test_career_tier1_conversion_low(make_application, now, config):
    apps = [make_application(ago, tier="Tier1", status="rejected") for ago in range(4)]

    titles = _titles(generate_career_recommendations(analyze_career(apps, now, config), config))

    assert "📊 Tier 1 Conversion Rate Low" in titles
    assert "🎯 Tier 1 Volume Too Low" not in titles


# Finance


def test_finance_critical_savings(now, config):
    snapshot = FinancialSnapshot(net_worth=0, monthly_income=10_000, monthly_expenses=9_500)

    recs = generate_finance_recommendations(analyze_finance(snapshot, [], now, config), config)

    assert _titles(recs) == [
        "💰 Critical Savings Rate",
        "🚨 High Expense-to-Income Ratio",
        "🎯 Net Worth Goal: $2,000,000",
    ]
    assert recs[-1].details["required_growth"] == "34.9% per year"


def test_finance_excellent_savings(now, config):
    snapshot = FinancialSnapshot(net_worth=500_000, monthly_income=4_000, monthly_expenses=2_000)

    titles = _titles(generate_finance_recommendations(analyze_finance(snapshot, [], now, config), config))

    assert titles[0] == "✅ Excellent Savings Rate"
    assert "💵 Income Growth Opportunity" in titles


def test_required_annual_growth():
    assert required_annual_growth(2_000_000, 2_000_000) == 0.0
    assert required_annual_growth(0, 200_000) == required_annual_growth(100_000, 200_000)
