"""Domain models - pure Python dataclasses representing tracked records and derived outputs"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from lifedash.domain.ranking import InsightType, Priority, Severity

DateLike = Union[date, datetime, str, None]


class TradeDirection(str, Enum):
    LONG = "Long"
    SHORT = "Short"


# ---------------------------------------------------------------------------
# Records (user-entered facts, never mutated by the analytics layer)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DailyScore:
    """One day's discipline score, 0-10, with optional per-category scores"""

    id: str
    date: DateLike
    total_score: float
    categories: Dict[str, float] = field(default_factory=dict)
    notes: str = ""


@dataclass(frozen=True)
class Workout:
    """Logged workout session"""

    id: str
    date: DateLike
    type: str
    duration: float  # minutes
    intensity: float  # 1-10
    notes: str = ""


@dataclass(frozen=True)
class Trade:
    """Closed trade from the trading journal"""

    id: str
    date: DateLike
    asset: str
    direction: str  # "Long" or "Short"
    entry_price: float
    exit_price: float
    quantity: float
    pnl: float
    notes: str = ""


@dataclass(frozen=True)
class JobApplication:
    """Job application with company tier and pipeline status"""

    id: str
    date: DateLike
    company: str
    tier: str  # Tier1..Tier4
    position: str = ""
    status: str = "applied"


@dataclass(frozen=True)
class Expense:
    """Single expense entry"""

    id: str
    date: DateLike
    amount: float
    category: str
    description: str = ""


@dataclass(frozen=True)
class Goal:
    """Long-term goal the user is working toward"""

    id: str
    name: str
    category: str
    target: Optional[str] = None


@dataclass(frozen=True)
class FinancialSnapshot:
    """Self-reported monthly financial figures"""

    net_worth: float = 0.0
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0


@dataclass(frozen=True)
class UserData:
    """Immutable snapshot of every collection, handed to each analyzer"""

    daily_scores: List[DailyScore] = field(default_factory=list)
    workouts: List[Workout] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    job_applications: List[JobApplication] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    financial: FinancialSnapshot = field(default_factory=FinancialSnapshot)


# ---------------------------------------------------------------------------
# Derived outputs
# ---------------------------------------------------------------------------


@dataclass
class Recommendation:
    """Rule output from a domain recommendation generator"""

    domain: str
    severity: Severity
    title: str
    current_state: str = ""
    target_state: str = ""
    problem: str = ""
    suggested_actions: List[str] = field(default_factory=list)
    impact_estimate: str = ""
    details: Dict[str, str] = field(default_factory=dict)


@dataclass
class ActionItem:
    """Atomic unit the integrator sorts and truncates"""

    priority: Priority
    action: str
    timeline: str = ""
    impact_estimate: str = ""
    source_module: str = ""
    steps: List[str] = field(default_factory=list)


@dataclass
class Insight:
    """Observation produced by a coaching module or quick-action report"""

    type: InsightType
    title: str = ""
    message: str = ""
    science: str = ""
    detail: str = ""
    action: str = ""
    module: str = ""
    suggestions: List[str] = field(default_factory=list)


@dataclass
class InsightModuleResult:
    """Output of one psychology module"""

    module: str
    icon: str
    insights: List[Insight]
    action_items: List[ActionItem]
    science_base: str


@dataclass
class ValidationResult:
    """Outcome of validating one raw record; errors are reported, never raised"""

    valid: bool
    error: Optional[str] = None
    index: Optional[int] = None
    entry: Any = None


@dataclass
class DomainStatus:
    """Primary metric of one domain mapped onto a status band"""

    metric: float
    target: float
    status: str


@dataclass
class SystemState:
    domains: Dict[str, DomainStatus]
    overall_score: float
    trend: float
    momentum: str


@dataclass
class Bottleneck:
    domain: str
    severity: Priority
    description: str
    impact: str
    action_needed: bool = True


@dataclass
class Opportunity:
    type: str
    title: str
    description: str
    leverage: str
    timeframe: str
    actions: List[str] = field(default_factory=list)


@dataclass
class Conflict:
    type: str
    issue: str
    domains: List[str]
    resolution: str
    action: str


@dataclass
class Pattern:
    name: str
    description: str
    evidence: str
    implication: str
    action: str


@dataclass
class Prediction:
    months: int
    predicted: float
    confidence: str
    assumptions: str = "Based on current trend and trajectory"


@dataclass
class PlanPhase:
    name: str
    duration_days: int
    focus: str
    actions: List[str]


@dataclass
class MasterPlan:
    title: str
    phases: List[PlanPhase]
    continuous_improvements: List[str]


@dataclass
class HealthScore:
    score: float
    components: Dict[str, DomainStatus]
    critical_issues: int
    status: str


@dataclass
class RankedAction:
    rank: int
    priority: Priority
    action: str
    timeline: str
    impact_estimate: str
    source: str


@dataclass
class WeeklyStrategy:
    week: str
    focus: str
    daily_schedule: Dict[str, str]
    psychology_focus: str
    success_metrics: List[str]


@dataclass
class MonthlyStrategy:
    month: str
    overall_focus: str
    weekly_themes: List[str]
    key_initiatives: List[str]
    expected_outcome: str


@dataclass
class MasterAnalysis:
    """Unified output of the master integrator; every key is always present"""

    timestamp: datetime
    executive_summary: str
    system_state: SystemState
    bottlenecks: List[Bottleneck]
    opportunities: List[Opportunity]
    conflicts: List[Conflict]
    patterns: List[Pattern]
    predictions: List[Prediction]
    master_plan: MasterPlan
    prioritized_actions: List[RankedAction]
    health_score: HealthScore
    weekly_strategy: WeeklyStrategy
    monthly_strategy: MonthlyStrategy
    domain_recommendations: Dict[str, List[Recommendation]]
    agent_failures: List[str]
