"""
Master integration across every analyzer, generator and coaching module.

All sub-agents run against the same UserData snapshot. Each call is wrapped
in `safe_execute`, which turns an exception into an AgentResult carrying the
error plus a safe default, and reports it to the observer. One failing
sub-agent never blocks the unified result.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.analyzers.career import analyze_career
from lifedash.domain.analyzers.daily import analyze_daily
from lifedash.domain.analyzers.finance import analyze_finance
from lifedash.domain.analyzers.health import analyze_health
from lifedash.domain.analyzers.trading import analyze_trading
from lifedash.domain.models import (
    ActionItem,
    Bottleneck,
    Conflict,
    DomainStatus,
    HealthScore,
    InsightModuleResult,
    MasterAnalysis,
    MasterPlan,
    MonthlyStrategy,
    Opportunity,
    Pattern,
    PlanPhase,
    Prediction,
    RankedAction,
    Recommendation,
    SystemState,
    UserData,
    WeeklyStrategy,
)
from lifedash.domain.psychology import signals
from lifedash.domain.psychology.coaching import combine_coaching
from lifedash.domain.psychology.modules import ENERGY, FOCUS, MODULES
from lifedash.domain.quick_actions import get_quick_action_recommendations
from lifedash.domain.ranking import InsightType, Priority, sort_by_priority
from lifedash.domain.recommendations.career import generate_career_recommendations
from lifedash.domain.recommendations.daily import generate_daily_recommendations
from lifedash.domain.recommendations.finance import generate_finance_recommendations
from lifedash.domain.recommendations.health import generate_fitness_recommendations
from lifedash.domain.recommendations.trading import generate_trading_recommendations
from lifedash.infrastructure.observability.logging import log_agent_failure
from lifedash.infrastructure.observability.metrics import agent_failures_counter
from lifedash.utils.date_utils import parse_date, reference_day, sort_by_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

Analyzer = Callable[[UserData, Optional[datetime], Settings], Any]
Generator = Callable[[Any, Settings], List[Recommendation]]

ANALYZERS: Dict[str, Analyzer] = {
    "daily": lambda data, now, config: analyze_daily(data.daily_scores, now, config),
    "career": lambda data, now, config: analyze_career(data.job_applications, now, config),
    "trading": lambda data, now, config: analyze_trading(data.trades, now, config),
    "health": lambda data, now, config: analyze_health(data.workouts, now, config),
    "finance": lambda data, now, config: analyze_finance(data.financial, data.expenses, now, config),
}

GENERATORS: Dict[str, Generator] = {
    "daily": generate_daily_recommendations,
    "career": generate_career_recommendations,
    "trading": generate_trading_recommendations,
    "health": generate_fitness_recommendations,
    "finance": generate_finance_recommendations,
}

DOMAINS = tuple(ANALYZERS)

# Quick-action reports folded into the prioritized action list
QUICK_ACTION_TOKENS = ("Log today", "Add app", "Log trade", "Log workout", "Track hours")


class AgentObserver(Protocol):
    def agent_failed(self, agent: str, error: BaseException) -> None:
        ...


class LoggingObserver:
    """Default observer: one structured error line and a counter increment per failure"""

    def agent_failed(self, agent: str, error: BaseException) -> None:
        log_agent_failure(agent, error)
        agent_failures_counter.labels(agent=agent).inc()


@dataclass
class AgentResult(Generic[T]):
    """Outcome of one sub-agent call: its value, or the default plus the error"""

    agent: str
    value: T
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def safe_execute(agent: str, fn: Callable[[], T], default: T, observer: Optional[AgentObserver] = None) -> AgentResult[T]:
    observer = observer or LoggingObserver()
    try:
        return AgentResult(agent=agent, value=fn())
    except Exception as e:
        observer.agent_failed(agent, e)
        return AgentResult(agent=agent, value=default, error=e)


def _empty_module(name: str) -> InsightModuleResult:
    return InsightModuleResult(module=name, icon="", insights=[], action_items=[], science_base="")


def _has_critical(result: InsightModuleResult) -> bool:
    return any(insight.type is InsightType.CRITICAL for insight in result.insights)


class MasterIntegrator:
    """One integration run over a fixed snapshot, `now` and config"""

    def __init__(
        self,
        user_data: UserData,
        now: Optional[datetime] = None,
        config: Optional[Settings] = None,
        observer: Optional[AgentObserver] = None,
    ):
        self.user_data = user_data
        self.now = now
        self.today = reference_day(now)
        self.config = config or settings
        self.observer = observer or LoggingObserver()
        self.failures: List[str] = []

    def _run(self, agent: str, fn: Callable[[], T], default: T) -> T:
        result = safe_execute(agent, fn, default, self.observer)
        if not result.ok:
            self.failures.append(agent)
        return result.value

    # Sub-agents

    def run_analyzers(self) -> Dict[str, Any]:
        return {
            domain: self._run(
                f"{domain}_analyzer", lambda analyzer=analyzer: analyzer(self.user_data, self.now, self.config), None
            )
            for domain, analyzer in ANALYZERS.items()
        }

    def run_generators(self, analyses: Dict[str, Any]) -> Dict[str, List[Recommendation]]:
        return {
            domain: self._run(
                f"{domain}_recommendations", lambda domain=domain, gen=gen: gen(analyses[domain], self.config), []
            )
            for domain, gen in GENERATORS.items()
        }

    def run_modules(self) -> Dict[str, InsightModuleResult]:
        results = {}
        for name, module in MODULES.items():
            results[name] = self._run(
                name, lambda module=module: module(self.user_data, self.now, self.config), _empty_module(name)
            )
        return results

    def run_quick_actions(self) -> list:
        reports = []
        for token in QUICK_ACTION_TOKENS:
            report = self._run(
                f"quick_action:{token}",
                lambda token=token: get_quick_action_recommendations(token, self.user_data, self.now, self.config),
                None,
            )
            if report is not None:
                reports.append(report)
        return reports

    # Composition

    def system_state(self, analyses: Dict[str, Any]) -> SystemState:
        config = self.config
        daily, career, trading, health, finance = (analyses[d] for d in DOMAINS)
        metrics = {
            "daily": (daily.recent_average if daily else 0.0, config.daily_score_target),
            "career": (career.this_week_count if career else 0, config.weekly_application_target),
            "trading": (trading.overall.win_rate if trading else 0.0, config.trading_win_rate_target),
            "health": (health.weekly_average if health else 0.0, config.weekly_workout_target),
            "finance": (finance.savings_rate if finance else 0.0, config.savings_rate_target),
        }

        domains = {}
        overall = 0.0
        for domain, (metric, target) in metrics.items():
            domains[domain] = DomainStatus(
                metric=metric, target=target, status=scoring.status_for_ratio(metric, target, config)
            )
            ratio = min(1.0, max(0.0, scoring.safe_div(metric, target)))
            overall += config.domain_weights.get(domain, 0.0) * ratio * 10

        trend = self.trend()
        return SystemState(
            domains=domains,
            overall_score=round(overall, 2),
            trend=trend,
            momentum=scoring.classify_momentum(trend),
        )

    def trend(self) -> float:
        ordered = sort_by_date(self.user_data.daily_scores, key=lambda s: s.date)
        totals = [float(s.total_score) for s in ordered if parse_date(s.date) <= self.today]
        return scoring.score_trend(totals, self.config.trend_lookback)

    def bottlenecks(self, state: SystemState, modules: Dict[str, InsightModuleResult]) -> List[Bottleneck]:
        found = []
        for domain, status in state.domains.items():
            if status.status == scoring.CRITICAL:
                found.append(
                    Bottleneck(
                        domain=domain,
                        severity=Priority.CRITICAL,
                        description=f"{domain} performance critically low",
                        impact="Blocking goal achievement",
                    )
                )
            elif status.status == scoring.WARNING:
                found.append(
                    Bottleneck(
                        domain=domain,
                        severity=Priority.HIGH,
                        description=f"{domain} underperforming",
                        impact="Slowing progress toward goals",
                    )
                )

        if _has_critical(modules[ENERGY]):
            found.append(
                Bottleneck(
                    domain="Energy/Recovery",
                    severity=Priority.CRITICAL,
                    description="Burnout risk detected - energy depletion without recovery",
                    impact="Blocks performance across ALL domains",
                )
            )
        if _has_critical(modules[FOCUS]):
            found.append(
                Bottleneck(
                    domain="Focus/Attention",
                    severity=Priority.CRITICAL,
                    description="High distraction load preventing deep work",
                    impact="Reduces effective work hours by 4-5 hours/day",
                )
            )

        return sorted(found, key=lambda b: b.severity.rank)

    def opportunities(self) -> List[Opportunity]:
        data, config = self.user_data, self.config
        found = []

        if len(data.job_applications) > config.synergy_min_records and len(data.trades) > config.synergy_min_records:
            found.append(
                Opportunity(
                    type="Synergy",
                    title="Career + Trading Combined Power",
                    description="Trading discipline and career momentum compound into higher income",
                    leverage="High",
                    timeframe="This year",
                    actions=["Maintain both paths - they compound together"],
                )
            )

        if signals.HABIT_STACKS:
            found.append(
                Opportunity(
                    type="Habit Stacking",
                    title="Efficiency Gains Through Habit Linking",
                    description="Link new habits to existing ones for automatic behavior",
                    leverage="High",
                    timeframe="Immediately",
                    actions=[f"{h.existing} → {h.new}" for h in signals.HABIT_STACKS],
                )
            )

        totals = [float(s.total_score) for s in data.daily_scores]
        if totals and scoring.mean(totals) < config.quick_win_daily_average:
            found.append(
                Opportunity(
                    type="Quick Win",
                    title="Daily Score Quick Wins",
                    description="Target lowest-scoring categories for biggest score improvement",
                    leverage="High",
                    timeframe="1 week",
                    actions=["Focus on weakest category - one point there lifts the whole daily score"],
                )
            )

        found.append(
            Opportunity(
                type="Leverage",
                title="Accelerate Learning Through Systems",
                description="Curated resources plus deliberate practice for faster skill growth",
                leverage="Very High",
                timeframe="Ongoing",
                actions=["Spend 30 min/day on high-impact learning aligned to your goals"],
            )
        )
        return found

    def conflicts(self, state: SystemState, modules: Dict[str, InsightModuleResult]) -> List[Conflict]:
        found = []

        # A domain "needs more time" while it is below its warning band
        needs_more = [
            label
            for domain, label in (("career", "Career"), ("health", "Health"), ("trading", "Trading"))
            if state.domains[domain].status in (scoring.WARNING, scoring.CRITICAL)
        ]
        if len(needs_more) > 2:
            found.append(
                Conflict(
                    type="Time Allocation",
                    issue="Multiple domains requesting more time simultaneously",
                    domains=needs_more,
                    resolution="Prioritize by goal importance: Career > Trading > Health > Learning > Fitness",
                    action="Use time-blocking to ensure all domains get minimum weekly hours",
                )
            )

        if _has_critical(modules[ENERGY]) and _has_critical(modules[FOCUS]):
            found.append(
                Conflict(
                    type="Sustainable Performance",
                    issue="High intensity + high distraction = unsustainable",
                    domains=["Energy", "Focus"],
                    resolution="First: Fix distraction (gain 4-5 hours). Then: Build recovery (prevent burnout)",
                    action="Week 1: Eliminate distractions. Week 2: Add recovery protocols.",
                )
            )
        return found

    def engaged_domains(self) -> int:
        data = self.user_data
        return sum(
            1
            for records in (data.daily_scores, data.job_applications, data.trades, data.workouts, data.goals)
            if records
        )

    def patterns(self, state: SystemState) -> List[Pattern]:
        config = self.config
        found = []

        consistency = signals.daily_consistency(self.user_data, self.today)
        if consistency > config.consistency_pattern_ratio:
            found.append(
                Pattern(
                    name="Consistency Advantage",
                    description="High daily consistency is turning routines into automatic habits",
                    evidence=f"{consistency * 100:.0f}% daily consistency",
                    implication="Maintain this to build effortless achievement",
                    action="Never break the chain. Even 1 entry counts.",
                )
            )

        engaged = self.engaged_domains()
        if engaged > config.engagement_pattern_domains:
            found.append(
                Pattern(
                    name="Multi-Domain Engagement",
                    description="You're actively pursuing diverse goals",
                    evidence=f"Engaged in {engaged} domains",
                    implication="Diversity builds broader skills and resilience",
                    action="Maintain balanced engagement across all domains",
                )
            )

        if state.trend < config.decline_pattern_trend:
            found.append(
                Pattern(
                    name="Performance Decline Trend",
                    description="Metrics declining - suggests energy depletion",
                    evidence=f"Negative trend of {state.trend:.2f}",
                    implication="Need recovery/reset to prevent burnout",
                    action="Implement recovery protocol this week",
                )
            )

        aligned = len(self.user_data.goals)
        if aligned > config.goal_alignment_pattern:
            found.append(
                Pattern(
                    name="Strong Goal Alignment",
                    description="Your daily actions are well-aligned with your goals",
                    evidence=f"{aligned} goals have aligned daily actions",
                    implication="High probability of goal achievement",
                    action="Continue current direction - maintain alignment",
                )
            )
        return found

    def predictions(self, state: SystemState) -> List[Prediction]:
        """Naive linear extrapolation of the overall score, clamped to 0-10"""
        predictions = []
        for months in (3, 6, 12):
            predicted = state.overall_score + state.trend * months
            confidence = "High" if months <= 3 else "Medium" if months <= 6 else "Low"
            predictions.append(
                Prediction(months=months, predicted=round(min(10.0, max(0.0, predicted)), 2), confidence=confidence)
            )
        return predictions

    @staticmethod
    def executive_summary(state: SystemState, bottlenecks: List[Bottleneck], opportunities: List[Opportunity]) -> str:
        score = state.overall_score
        if score > 7:
            summary = f"🟢 You're performing well ({score:.1f}/10). "
        elif score > 5:
            summary = f"🟡 Moderate performance ({score:.1f}/10). "
        else:
            summary = f"🔴 Below target performance ({score:.1f}/10). "

        if state.trend > 0:
            summary += "Positive trend - momentum on your side. "
        elif state.trend < 0:
            summary += "Declining trend - needs immediate attention. "

        if bottlenecks:
            summary += f"Main blocker: {bottlenecks[0].description}. "
        if opportunities:
            summary += f"Quick win: {opportunities[0].title}. "

        summary += f"Recommendation: Focus on {'fixing bottlenecks' if bottlenecks else 'capitalizing on opportunities'}."
        return summary

    @staticmethod
    def master_plan(bottlenecks: List[Bottleneck], opportunities: List[Opportunity]) -> MasterPlan:
        return MasterPlan(
            title="🎯 Master Plan - Unified Strategy",
            phases=[
                PlanPhase(
                    name="Critical Fix (This Week)",
                    duration_days=7,
                    focus="Fix top 2-3 bottlenecks",
                    actions=[f"{b.domain}: {b.description} ({b.impact})" for b in bottlenecks[:3]],
                ),
                PlanPhase(
                    name="Optimization (Next 4 Weeks)",
                    duration_days=28,
                    focus="Implement psychology coaching modules",
                    actions=[
                        "Week 1: Focus & Distraction elimination",
                        "Week 2: Habit formation & stacking",
                        "Week 3: Energy management & recovery",
                        "Week 4: Goal alignment & motivation",
                    ],
                ),
                PlanPhase(
                    name="Scaling (Month 2-3)",
                    duration_days=60,
                    focus="Capitalize on opportunities",
                    actions=[f"{o.title} ({o.timeframe}, {o.leverage} leverage)" for o in opportunities],
                ),
            ],
            continuous_improvements=[
                "Daily: Review evening score + psychology coaching tip",
                "Weekly: 1 strategic review + 1 psychology module implementation",
                "Monthly: Full system evaluation + strategy adjustment",
            ],
        )

    def prioritized_actions(
        self,
        psychology_items: List[ActionItem],
        reports: list,
        recommendations: Dict[str, List[Recommendation]],
    ) -> List[RankedAction]:
        """Every action item across all sources, stable-sorted by priority, top N ranked"""
        candidates = [
            RankedAction(0, item.priority, item.action, item.timeline, item.impact_estimate, item.source_module)
            for item in psychology_items
        ]
        for report in reports:
            candidates.extend(
                RankedAction(0, item.priority, item.action, item.timeline, item.impact_estimate, report.title)
                for item in report.action_items
            )
        for domain, recs in recommendations.items():
            candidates.extend(
                RankedAction(0, rec.severity.as_priority(), rec.title, "", rec.impact_estimate, domain) for rec in recs
            )

        ranked = sort_by_priority(candidates)[: self.config.prioritized_actions_limit]
        for rank, action in enumerate(ranked, start=1):
            action.rank = rank
        return ranked

    def health_score(self, state: SystemState, bottlenecks: List[Bottleneck]) -> HealthScore:
        critical = sum(1 for b in bottlenecks if b.severity is Priority.CRITICAL)
        score = state.overall_score
        if score > 7:
            status = "Excellent"
        elif score > 5:
            status = "Good"
        elif score > 3:
            status = "Fair"
        else:
            status = "Poor"
        return HealthScore(
            score=round(score - critical * self.config.critical_bottleneck_penalty, 2),
            components=state.domains,
            critical_issues=critical,
            status=status,
        )

    def weekly_strategy(self, bottlenecks: List[Bottleneck]) -> WeeklyStrategy:
        return WeeklyStrategy(
            week=self.today.isoformat(),
            focus=f"Fix: {bottlenecks[0].description}" if bottlenecks else "Maintain momentum",
            daily_schedule={
                "morning": "Deep work on highest-priority goal (2-3h)",
                "midday": "Secondary domain focus (1-2h)",
                "afternoon": "Health/Recovery (workout + nutrition)",
                "evening": "Reflection + next day planning",
                "recovery": "1 evening off for leisure/rest",
            },
            psychology_focus=FOCUS,
            success_metrics=[
                f"Daily score ≥ {self.config.daily_score_target:g}",
                "No distraction lapses during deep work",
                "Full recovery evening completed",
                "Psychology coaching tip implemented",
            ],
        )

    def monthly_strategy(self) -> MonthlyStrategy:
        return MonthlyStrategy(
            month=self.today.strftime("%Y-%m"),
            overall_focus="Build sustainable systems + accelerate toward yearly goals",
            weekly_themes=[
                "Week 1: Eliminate distractions, deep work baseline",
                "Week 2: Build habit stacking, automate decisions",
                "Week 3: Optimize energy, recovery protocols",
                "Week 4: Goal alignment, motivation boost",
            ],
            key_initiatives=[
                "Implement all psychology coaching modules (1 per week)",
                "Establish time-blocking schedule for all domains",
                "Track 3 progress metrics beyond current system",
                "Weekly strategy review + adjustment",
            ],
            expected_outcome="+0.5 to +1.0 point in overall score by month end",
        )

    def analyze(self) -> MasterAnalysis:
        analyses = self.run_analyzers()
        recommendations = self.run_generators(analyses)
        modules = self.run_modules()
        reports = self.run_quick_actions()
        coaching = combine_coaching(modules.values(), self.config)

        state = self.system_state(analyses)
        bottlenecks = self.bottlenecks(state, modules)
        opportunities = self.opportunities()

        if self.failures:
            logger.warning("Master analysis completed with failed sub-agents", extra={"agents": self.failures})

        return MasterAnalysis(
            timestamp=self.now or datetime.now(timezone.utc),
            executive_summary=self.executive_summary(state, bottlenecks, opportunities),
            system_state=state,
            bottlenecks=bottlenecks,
            opportunities=opportunities,
            conflicts=self.conflicts(state, modules),
            patterns=self.patterns(state),
            predictions=self.predictions(state),
            master_plan=self.master_plan(bottlenecks, opportunities),
            prioritized_actions=self.prioritized_actions(coaching.all_action_items, reports, recommendations),
            health_score=self.health_score(state, bottlenecks),
            weekly_strategy=self.weekly_strategy(bottlenecks),
            monthly_strategy=self.monthly_strategy(),
            domain_recommendations=recommendations,
            agent_failures=list(self.failures),
        )


def get_master_analysis(
    user_data: UserData,
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
    observer: Optional[AgentObserver] = None,
) -> MasterAnalysis:
    return MasterIntegrator(user_data, now, config, observer).analyze()
