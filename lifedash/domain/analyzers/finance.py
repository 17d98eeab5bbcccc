"""Financial health: savings rate, expense mix, milestones and discipline score"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Sequence, Union

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.models import Expense, FinancialSnapshot
from lifedash.utils.date_utils import filter_window, reference_day

MILESTONES = {
    "milestone_500k": 500_000,
    "milestone_1m": 1_000_000,
    "milestone_2m": 2_000_000,
}
MAX_MONTHS = 600  # 50 years


@dataclass
class DisciplineScore:
    score: int
    rating: str
    savings_points: float
    expense_points: float
    income_points: float


@dataclass
class FinanceAnalysis:
    net_worth: float
    monthly_income: float
    monthly_expenses: float
    monthly_savings: float
    savings_rate: float
    expense_ratio: float
    health: str
    status: str
    expenses_from_records: bool
    categories: Dict[str, float] = field(default_factory=dict)
    milestones: Dict[str, Union[int, str]] = field(default_factory=dict)
    discipline: Optional[DisciplineScore] = None


def health_label(savings_rate: float) -> str:
    if savings_rate >= 30:
        return "EXCELLENT"
    if savings_rate >= 20:
        return "VERY_GOOD"
    if savings_rate >= 10:
        return "GOOD"
    if savings_rate >= 0:
        return "FAIR"
    return "POOR"


def months_to_milestone(current: float, target: float, monthly_addition: float, annual_return: float) -> Union[int, str]:
    """Months of compounding savings until `target`; a label when unreachable"""
    if monthly_addition <= 0:
        return "Infinite (no savings)"
    monthly_return = annual_return / 12
    balance = current
    months = 0
    while balance < target and months < MAX_MONTHS:
        balance = balance * (1 + monthly_return) + monthly_addition
        months += 1
    if balance < target:
        return "Beyond 50 years"
    return months


def discipline_score(savings_rate: float, expense_ratio: float, monthly_income: float) -> DisciplineScore:
    """
    100-point discipline score.

    - 40 points: savings rate, full marks at 30%
    - 30 points: expense control, full marks at a 75% expense ratio
    - 30 points: any income at all
    """
    savings_points = max(0.0, min(40.0, savings_rate / 30 * 40))
    expense_points = max(0.0, min(30.0, (100 - expense_ratio) / 25 * 30))
    income_points = 30.0 if monthly_income > 0 else 0.0
    score = int(savings_points + expense_points + income_points)

    if score >= 80:
        rating = "EXCELLENT"
    elif score >= 60:
        rating = "GOOD"
    elif score >= 40:
        rating = "FAIR"
    else:
        rating = "NEEDS_IMPROVEMENT"

    return DisciplineScore(
        score=score,
        rating=rating,
        savings_points=round(savings_points, 1),
        expense_points=round(expense_points, 1),
        income_points=income_points,
    )


def analyze_finance(
    snapshot: FinancialSnapshot,
    expenses: Sequence[Expense] = (),
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[FinanceAnalysis]:
    """
    Analyze monthly cash flow.

    Monthly expenses come from the snapshot; when it has none, the last 30
    days of expense records are summed instead. Returns None when there is
    neither income nor expense data.
    """
    config = config or settings
    today = reference_day(now)

    recent = filter_window(expenses, today, 30, key=lambda e: e.date)
    categories: Dict[str, float] = {}
    for expense in recent:
        categories[expense.category] = round(categories.get(expense.category, 0.0) + float(expense.amount), 2)

    income = float(snapshot.monthly_income or 0)
    monthly_expenses = float(snapshot.monthly_expenses or 0)
    from_records = False
    if not monthly_expenses and recent:
        monthly_expenses = round(sum(categories.values()), 2)
        from_records = True

    if not income and not monthly_expenses:
        return None

    savings = round(income - monthly_expenses, 2)
    savings_rate = round(scoring.safe_div(savings * 100, income), 1)
    expense_ratio = round(scoring.safe_div(monthly_expenses * 100, income), 1)
    net_worth = float(snapshot.net_worth or 0)

    return FinanceAnalysis(
        net_worth=net_worth,
        monthly_income=income,
        monthly_expenses=monthly_expenses,
        monthly_savings=savings,
        savings_rate=savings_rate,
        expense_ratio=expense_ratio,
        health=health_label(savings_rate),
        status=scoring.status_for_ratio(savings_rate, config.savings_rate_target, config),
        expenses_from_records=from_records,
        categories=categories,
        milestones={
            name: months_to_milestone(net_worth, target, savings, config.annual_return_assumption)
            for name, target in MILESTONES.items()
        },
        discipline=discipline_score(savings_rate, expense_ratio, income),
    )
