"""Savings, expense and net-worth recommendations"""

from typing import List, Optional

from lifedash.config import Settings, settings
from lifedash.domain.analyzers.finance import FinanceAnalysis
from lifedash.domain.models import Recommendation
from lifedash.domain.ranking import Severity, sort_by_severity


def required_annual_growth(net_worth: float, goal: float, years: int = 10) -> float:
    """Compound annual growth (%) to reach `goal`; 100K is assumed when net worth is unknown"""
    base = net_worth if net_worth > 0 else 100_000
    return round(((goal / base) ** (1 / years) - 1) * 100, 1)


def generate_finance_recommendations(
    analysis: Optional[FinanceAnalysis],
    config: Optional[Settings] = None,
) -> List[Recommendation]:
    if analysis is None:
        return []
    config = config or settings

    recs = []
    rate = analysis.savings_rate
    savings = analysis.monthly_savings

    if rate < config.savings_rate_urgent:
        extra = analysis.monthly_income * 0.20 - analysis.monthly_income * (rate / 100)
        recs.append(
            Recommendation(
                domain="finance",
                severity=Severity.URGENT,
                title="💰 Critical Savings Rate",
                current_state=f"{rate}% savings rate",
                target_state=f"Target: {config.savings_rate_target:g}% for wealth building",
                problem=f"Current: ${savings:.0f}/month = ${savings * 12:.0f}/year",
                suggested_actions=[
                    "1. IMMEDIATE: Cut discretionary spending 20-30%",
                    "2. Identify: Entertainment + shopping likely culprits",
                    "3. Action: Track every expense this month",
                    "4. Goal: Move to 20%+ savings rate within 60 days",
                ],
                impact_estimate=f"Improving {rate}% → 20% = ${extra:.0f}/month extra for investing",
            )
        )
    elif rate < config.savings_rate_warning:
        recs.append(
            Recommendation(
                domain="finance",
                severity=Severity.WARNING,
                title="⚠️ Below Optimal Savings Rate",
                current_state=f"{rate}% savings rate",
                target_state="25-30% for accelerated wealth building",
                problem=f"At {rate}%, wealth building is slow.",
                suggested_actions=[
                    "1. Analyze spending: Which category can you cut 10%?",
                    "2. Likely: Dining out, entertainment, shopping",
                    "3. Goal: 25%+ savings within 90 days",
                ],
                details={"gap": f"Gap: {25 - rate:.1f}%"},
            )
        )
    elif rate >= config.savings_rate_target:
        recs.append(
            Recommendation(
                domain="finance",
                severity=Severity.INSIGHT,
                title="✅ Excellent Savings Rate",
                current_state=f"{rate}% savings rate",
                problem=f"${savings:.0f}/month = ${savings * 12:.0f}/year saved",
                suggested_actions=["Invest savings: Index funds, trading, diversified portfolio"],
                impact_estimate=f"At this rate: ${savings * 120:.0f} in 10 years (pre-investing returns)",
            )
        )

    if analysis.expense_ratio > config.expense_ratio_max:
        recs.append(
            Recommendation(
                domain="finance",
                severity=Severity.WARNING,
                title="🚨 High Expense-to-Income Ratio",
                current_state=f"Expenses: {analysis.expense_ratio}% of income",
                target_state="75% expense ratio",
                problem="Spending nearly all you earn. Zero margin for error.",
                suggested_actions=[
                    "1. Cut expenses by 15-20% minimum",
                    "2. Create buffer: Target 75% expense ratio",
                    "3. Rebuild: 10% emergency fund, 15% invest",
                ],
            )
        )

    if analysis.monthly_income < config.income_growth_below:
        recs.append(
            Recommendation(
                domain="finance",
                severity=Severity.INSIGHT,
                title="💵 Income Growth Opportunity",
                current_state=f"Monthly income: ${analysis.monthly_income:.0f}",
                target_state="$10-15K/month (from trading + career)",
                suggested_actions=["Focus on trading skill development + career advancement"],
            )
        )

    goal = config.net_worth_goal
    recs.append(
        Recommendation(
            domain="finance",
            severity=Severity.INSIGHT,
            title=f"🎯 Net Worth Goal: ${goal:,.0f}",
            current_state=f"${analysis.net_worth:,.0f}",
            target_state=f"${goal:,.0f} in 10 years",
            suggested_actions=[
                "1. Income growth (trading + career)",
                "2. Consistent savings (30% rate)",
                "3. Smart investing",
                "4. Discipline (no lifestyle inflation)",
            ],
            details={
                "required_growth": f"{required_annual_growth(analysis.net_worth, goal)}% per year",
                "milestone_2m": str(analysis.milestones.get("milestone_2m")),
            },
        )
    )

    return sort_by_severity(recs)
