"""Unit tests for the master integrator"""

import pytest
from dataclasses import fields

from lifedash.domain import integrator
from lifedash.domain.integrator import MasterIntegrator, get_master_analysis, safe_execute
from lifedash.domain.models import (
    Bottleneck,
    DomainStatus,
    FinancialSnapshot,
    MasterAnalysis,
    SystemState,
    UserData,
)
from lifedash.domain.psychology import modules
from lifedash.domain.ranking import Priority


class RecordingObserver:
    def __init__(self):
        self.failed = []

    def agent_failed(self, agent, error):
        self.failed.append((agent, error))


def _boom(*args, **kwargs):
    raise RuntimeError("boom")


def _state(overall, trend=0.0):
    return SystemState(domains={}, overall_score=overall, trend=trend, momentum="Stable")


def test_safe_execute_returns_default_on_error():
    observer = RecordingObserver()

    ok = safe_execute("ok", lambda: 42, 0, observer)
    failed = safe_execute("bad", _boom, "fallback", observer)

    assert ok.ok and ok.value == 42
    assert not failed.ok
    assert failed.value == "fallback"
    assert isinstance(failed.error, RuntimeError)
    assert [agent for agent, _ in observer.failed] == ["bad"]


def test_empty_user_data_fills_every_key(now, config):
    """Test a user with no records still gets a complete analysis"""
    analysis = get_master_analysis(UserData(), now, config, RecordingObserver())

    assert isinstance(analysis, MasterAnalysis)
    for f in fields(MasterAnalysis):
        assert getattr(analysis, f.name) is not None
    assert analysis.agent_failures == []
    assert analysis.timestamp == now
    assert analysis.system_state.overall_score == 0
    assert set(analysis.system_state.domains) == set(integrator.DOMAINS)
    assert all(recs == [] for recs in analysis.domain_recommendations.values())


def test_empty_user_data_bottlenecks_and_conflicts(now, config):
    analysis = get_master_analysis(UserData(), now, config, RecordingObserver())

    domains = [b.domain for b in analysis.bottlenecks]
    assert domains[-2:] == ["Energy/Recovery", "Focus/Attention"]
    assert all(b.severity is Priority.CRITICAL for b in analysis.bottlenecks)
    assert [c.type for c in analysis.conflicts] == ["Time Allocation", "Sustainable Performance"]
    assert analysis.health_score.critical_issues == 7
    assert analysis.health_score.score == -3.5
    assert analysis.health_score.status == "Poor"


def test_failing_analyzer_is_isolated(monkeypatch, sample_user_data, now, config):
    """Test one analyzer raising leaves every other part of the result intact"""
    monkeypatch.setitem(integrator.ANALYZERS, "trading", _boom)
    observer = RecordingObserver()

    analysis = get_master_analysis(sample_user_data, now, config, observer)

    assert analysis.agent_failures == ["trading_analyzer"]
    assert [agent for agent, _ in observer.failed] == ["trading_analyzer"]
    assert analysis.system_state.domains["trading"].metric == 0.0
    assert analysis.system_state.domains["career"].metric == 7
    assert analysis.domain_recommendations["trading"] == []
    assert analysis.domain_recommendations["career"]


def test_failing_module_uses_empty_result(monkeypatch, now, config):
    monkeypatch.setitem(modules.MODULES, modules.FOCUS, _boom)

    analysis = get_master_analysis(UserData(), now, config, RecordingObserver())

    assert analysis.agent_failures == [modules.FOCUS]
    assert "Focus/Attention" not in [b.domain for b in analysis.bottlenecks]
    assert "Sustainable Performance" not in [c.type for c in analysis.conflicts]


def test_overall_score_is_weighted_and_clamped(make_application, now, config):
    """Test each domain adds weight x min(1, metric/target) x 10"""
    data = UserData(
        job_applications=[make_application(ago % 7) for ago in range(15)],
        financial=FinancialSnapshot(monthly_income=10_000, monthly_expenses=4_000),  # 60% saved
    )

    state = MasterIntegrator(data, now, config).system_state(MasterIntegrator(data, now, config).run_analyzers())

    assert state.domains["career"].status == "excellent"
    assert state.domains["finance"].metric == 60.0
    assert state.overall_score == pytest.approx(3.5)


def test_trend_ignores_future_scores(make_daily_score, now, config):
    scores = [make_daily_score(ago, total=5) for ago in range(6, -1, -1)] + [make_daily_score(-2, total=10)]

    assert MasterIntegrator(UserData(daily_scores=scores), now, config).trend() == 0


@pytest.mark.parametrize(
    "overall,trend,expected",
    [
        (9.0, 0.5, [10.0, 10.0, 10.0]),
        (2.0, -0.5, [0.5, 0.0, 0.0]),
        (5.0, 0.0, [5.0, 5.0, 5.0]),
    ],
)
def test_predictions_are_clamped(overall, trend, expected, config):
    predictions = MasterIntegrator(UserData(), config=config).predictions(_state(overall, trend))

    assert [p.months for p in predictions] == [3, 6, 12]
    assert [p.predicted for p in predictions] == expected
    assert [p.confidence for p in predictions] == ["High", "Medium", "Low"]


def test_health_score_penalizes_critical_bottlenecks(config):
    """Test the penalty applies to the score while the status uses the overall score"""
    bottlenecks = [
        Bottleneck(domain="a", severity=Priority.CRITICAL, description="", impact=""),
        Bottleneck(domain="b", severity=Priority.CRITICAL, description="", impact=""),
        Bottleneck(domain="c", severity=Priority.HIGH, description="", impact=""),
    ]

    score = MasterIntegrator(UserData(), config=config).health_score(_state(6.0), bottlenecks)

    assert score.score == 5.0
    assert score.critical_issues == 2
    assert score.status == "Good"


def test_bottlenecks_rank_critical_before_high(config):
    state = SystemState(
        domains={
            "career": DomainStatus(metric=6, target=15, status="critical"),
            "health": DomainStatus(metric=3, target=6, status="warning"),
            "daily": DomainStatus(metric=7, target=7, status="excellent"),
        },
        overall_score=5.0,
        trend=0.0,
        momentum="Stable",
    )
    quiet = {name: integrator._empty_module(name) for name in modules.MODULES}

    found = MasterIntegrator(UserData(), config=config).bottlenecks(state, quiet)

    assert [(b.domain, b.severity) for b in found] == [("career", Priority.CRITICAL), ("health", Priority.HIGH)]


def test_opportunities_and_patterns(sample_user_data, now, config):
    analysis = get_master_analysis(sample_user_data, now, config, RecordingObserver())

    assert [o.type for o in analysis.opportunities] == ["Synergy", "Habit Stacking", "Leverage"]
    assert [p.name for p in analysis.patterns] == ["Consistency Advantage", "Multi-Domain Engagement"]


def test_quick_win_for_low_daily_scores(make_daily_score, now, config):
    data = UserData(daily_scores=[make_daily_score(ago, total=4) for ago in range(5)])

    types = [o.type for o in MasterIntegrator(data, now, config).opportunities()]

    assert types == ["Habit Stacking", "Quick Win", "Leverage"]


def test_prioritized_actions_ranked_and_limited(sample_user_data, now, config):
    analysis = get_master_analysis(sample_user_data, now, config, RecordingObserver())
    actions = analysis.prioritized_actions
    ranks = [a.priority.rank for a in actions]

    assert len(actions) == config.prioritized_actions_limit
    assert [a.rank for a in actions] == list(range(1, len(actions) + 1))
    assert ranks == sorted(ranks)
    assert actions[0].priority is Priority.CRITICAL


def test_strategies_follow_the_clock(now, config):
    analysis = get_master_analysis(UserData(), now, config, RecordingObserver())

    assert analysis.weekly_strategy.week == "2024-06-15"
    assert analysis.weekly_strategy.psychology_focus == modules.FOCUS
    assert analysis.monthly_strategy.month == "2024-06"
    assert [p.duration_days for p in analysis.master_plan.phases] == [7, 28, 60]


def test_master_analysis_is_deterministic(sample_user_data, now, config):
    """Test the same snapshot and clock give the same analysis"""
    first = get_master_analysis(sample_user_data, now, config, RecordingObserver())
    second = get_master_analysis(sample_user_data, now, config, RecordingObserver())

    assert first == second
