"""Pydantic schemas for stored records and saved analysis summaries"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from lifedash.domain.models import (
    DailyScore,
    Expense,
    FinancialSnapshot,
    Goal,
    JobApplication,
    MasterAnalysis,
    Trade,
    Workout,
)


class StoredRecord(BaseModel):
    """Base for records read back from the store; unknown keys are ignored"""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    # Dates stay strings: an unparseable date only drops the record from windows
    date: Optional[str] = None


class DailyScoreRecord(StoredRecord):
    total_score: float
    categories: Dict[str, float] = Field(default_factory=dict)
    notes: str = ""

    def to_domain(self) -> DailyScore:
        return DailyScore(**self.model_dump())


class WorkoutRecord(StoredRecord):
    type: str
    duration: float
    intensity: float
    notes: str = ""

    def to_domain(self) -> Workout:
        return Workout(**self.model_dump())


class TradeRecord(StoredRecord):
    asset: str = ""
    direction: str = ""
    entry_price: float
    exit_price: float
    quantity: float
    pnl: float
    notes: str = ""

    def to_domain(self) -> Trade:
        return Trade(**self.model_dump())


class JobApplicationRecord(StoredRecord):
    company: str
    tier: str
    position: str = ""
    status: str = "applied"

    def to_domain(self) -> JobApplication:
        return JobApplication(**self.model_dump())


class ExpenseRecord(StoredRecord):
    amount: float
    category: str
    description: str = ""

    def to_domain(self) -> Expense:
        return Expense(**self.model_dump())


class GoalRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = Field(..., min_length=1)
    category: str = ""
    target: Optional[str] = None

    def to_domain(self) -> Goal:
        return Goal(**self.model_dump())


class FinancialSnapshotRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    net_worth: float = 0.0
    monthly_income: float = Field(0.0, ge=0)
    monthly_expenses: float = Field(0.0, ge=0)

    def to_domain(self) -> FinancialSnapshot:
        return FinancialSnapshot(**self.model_dump())


class AnalysisSummary(BaseModel):
    """One entry of the saved analysis history"""

    timestamp: datetime
    overall_score: float
    health_score: float
    status: str
    trend: float
    momentum: str
    critical_issues: int
    bottlenecks: List[str]
    agent_failures: List[str] = Field(default_factory=list)

    @classmethod
    def from_analysis(cls, analysis: MasterAnalysis) -> "AnalysisSummary":
        return cls(
            timestamp=analysis.timestamp,
            overall_score=analysis.system_state.overall_score,
            health_score=analysis.health_score.score,
            status=analysis.health_score.status,
            trend=analysis.system_state.trend,
            momentum=analysis.system_state.momentum,
            critical_issues=analysis.health_score.critical_issues,
            bottlenecks=[b.domain for b in analysis.bottlenecks],
            agent_failures=analysis.agent_failures,
        )


# JSON-mode dump of the full analysis dataclass tree (enums as values, datetimes as ISO)
master_analysis_adapter = TypeAdapter(MasterAnalysis)
