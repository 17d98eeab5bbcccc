"""
Quick-action reports.

A fixed set of action tokens ("Log today", "Add app", ...) is routed to a
report builder. Each report carries insights tagged with an action code,
prioritized action items, metrics and report-specific extras.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.analyzers.daily import CATEGORIES
from lifedash.domain.models import ActionItem, Insight, UserData
from lifedash.domain.ranking import InsightType, Priority, sort_by_priority
from lifedash.domain.validators import normalize_tier
from lifedash.utils.date_utils import filter_window, reference_day, sort_by_date


@dataclass
class QuickActionReport:
    action_type: str
    title: str
    icon: str
    insights: List[Insight] = field(default_factory=list)
    action_items: List[ActionItem] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    extras: Dict[str, Any] = field(default_factory=dict)


def _items(*rows) -> List[ActionItem]:
    return sort_by_priority(
        ActionItem(priority=priority, action=action, timeline=timeline, impact_estimate=impact)
        for priority, action, timeline, impact in rows
    )


def _insight(kind: InsightType, message: str, action: str) -> Insight:
    return Insight(type=kind, message=message, action=action)


def daily_score_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    today = reference_day(now)
    ordered = sort_by_date(user_data.daily_scores, key=lambda s: s.date)
    report = QuickActionReport(action_type="Log today", title="📝 Daily Score Recommendations", icon="📊")

    todays = filter_window(ordered, today, 1, key=lambda s: s.date)
    report.metrics["current_score"] = todays[-1].total_score if todays else None
    report.metrics["target"] = 8.0

    focus_areas = []
    if ordered:
        last = ordered[-1]
        scored = [(CATEGORIES[k].label, float(v)) for k, v in (last.categories or {}).items() if k in CATEGORIES]
        weakest = sorted(scored, key=lambda pair: pair[1])[:3]
        for label, value in weakest:
            if value < 7:
                focus_areas.append({"category": label, "score": value, "message": f"{label} was at {value:g}/10 - aim for 8+"})

        average = round(scoring.mean(v for _, v in scored), 1) if scored else float(last.total_score)
        if average >= 8:
            report.insights.append(
                _insight(InsightType.SUCCESS, f"✅ Last entry averaged {average}/10! Maintain momentum today.", "MAINTAIN")
            )
        else:
            focus = weakest[0][0] if weakest else "your weakest category"
            report.insights.append(
                _insight(InsightType.OPPORTUNITY, f"📈 Last entry averaged {average}/10. Focus on {focus} today.", "IMPROVE")
            )

    report.action_items = _items(
        (Priority.CRITICAL, "⏰ Complete 5AM morning routine", "Start of day", "+1.5 points"),
        (Priority.CRITICAL, "🎯 2 hrs deep work session (MIT)", "Before noon", "+2.0 points"),
        (Priority.HIGH, "💪 1 workout (30+ min)", "During day", "+1.0 point"),
        (Priority.HIGH, "📚 1 hour learning/study", "Evening", "+0.8 points"),
        (Priority.MEDIUM, "😴 8 hrs quality sleep", "Before midnight", "+1.2 points"),
    )

    recent = [float(s.total_score) for s in ordered[-7:]]
    baseline = round(scoring.mean(recent), 1) if recent else 6.0
    report.extras["focus_areas"] = focus_areas
    report.extras["predicted_score"] = min(10.0, baseline + 0.5)
    return report


def job_application_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    today = reference_day(now)
    this_week = filter_window(user_data.job_applications, today, 7, key=lambda a: a.date)
    tier1 = [a for a in user_data.job_applications if normalize_tier(a.tier) == "Tier1"]
    tier1_week = [a for a in this_week if normalize_tier(a.tier) == "Tier1"]
    target = config.tier1_weekly_target

    report = QuickActionReport(action_type="Add app", title="💼 Job Application Recommendations", icon="📋")

    if len(tier1_week) >= target:
        report.insights.append(
            _insight(InsightType.SUCCESS, f"✅ {len(tier1_week)} Tier 1 apps this week! Great focus on quality.", "MAINTAIN")
        )
        tier_focus = "EXPAND_VOLUME"
    elif tier1_week:
        report.insights.append(
            _insight(
                InsightType.OPPORTUNITY,
                f"📈 {len(tier1_week)}/{target} Tier 1 apps. Target {target - len(tier1_week)} more this week.",
                "PRIORITIZE_TIER1",
            )
        )
        tier_focus = "FOCUS_TIER1"
    else:
        report.insights.append(
            _insight(
                InsightType.CRITICAL,
                "🚨 Zero Tier 1 applications this week! Must prioritize quality companies.",
                "PIVOT_TO_TIER1",
            )
        )
        tier_focus = "URGENT_TIER1"

    progressed = sum(1 for a in tier1 if (a.status or "").lower() != "applied")
    report.metrics = {
        "current_week": len(this_week),
        "target": config.weekly_application_target,
        "tier1_total": len(tier1),
        "tier1_this_week": len(tier1_week),
        "interview_rate": round(scoring.safe_div(progressed * 100, len(tier1)), 1),
    }
    report.action_items = _items(
        (Priority.CRITICAL, f"🎯 Apply to {target} Tier 1 companies", "This week", "Meets target"),
        (Priority.CRITICAL, "📝 Customize cover letter per company", "Before applying", "+15% response rate"),
        (Priority.HIGH, "🔗 LinkedIn outreach to 3 recruiters", "This week", "+20% interview chances"),
        (Priority.HIGH, "📊 Update resume with recent achievements", "Today", "+10% quality increase"),
        (Priority.MEDIUM, "📋 Create target company list (50 companies)", "This weekend", "Streamlines process"),
    )
    report.extras["tier_focus"] = tier_focus
    return report


def trading_log_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    today = reference_day(now)
    this_week = filter_window(user_data.trades, today, 7, key=lambda t: t.date)
    pnls = [float(t.pnl or 0) for t in this_week]
    wins = [p for p in pnls if p > 0]
    total = round(sum(pnls), 2)
    rate = scoring.win_rate(len(wins), len(pnls))

    report = QuickActionReport(action_type="Log trade", title="📊 Trading Log Recommendations", icon="💹")
    report.metrics = {
        "weekly_pnl": total,
        "win_rate": rate,
        "avg_win": round(scoring.mean(wins), 2),
        "trades_this_week": len(pnls),
        "target_trades": "3-5",
    }

    if rate >= config.win_rate_good_at:
        report.insights.append(
            _insight(InsightType.SUCCESS, f"✅ Win rate at {rate}%! Above 50% target. Consider scaling.", "SCALE")
        )
    elif rate >= config.win_rate_urgent_below:
        report.insights.append(
            _insight(
                InsightType.OPPORTUNITY,
                f"📈 Win rate at {rate}%. Need 55%+ for profitability. Review losing trades.",
                "IMPROVE_EDGE",
            )
        )
    else:
        report.insights.append(
            _insight(InsightType.CRITICAL, f"🚨 Win rate {rate}% is too low. Review strategy immediately.", "REVIEW_STRATEGY")
        )

    if total > 0:
        report.insights.append(_insight(InsightType.SUCCESS, f"💰 Weekly P&L: +${total:.2f}.", "MAINTAIN"))
    elif total < 0:
        report.insights.append(
            _insight(
                InsightType.WARNING,
                f"⚠️ Negative P&L this week (-${abs(total):.2f}). Reduce size and tighten stops.",
                "REDUCE_SIZE",
            )
        )

    report.action_items = _items(
        (Priority.CRITICAL, "📋 Journal every trade", "During market hours", "Captures edge patterns"),
        (Priority.CRITICAL, "✏️ Review 5 worst trades from this month", "After market close", "+5% edge improvement"),
        (Priority.HIGH, "📊 Set position sizing rules (risk 1% max)", "Before next trade", "Better risk management"),
        (Priority.HIGH, "🎯 Identify 2 high-probability setups", "Next session", "+10% win rate"),
        (Priority.MEDIUM, "📈 Analyze market conditions (trend, volatility)", "Morning prep", "Context awareness"),
    )
    report.extras["risk_limits"] = {
        "risk_per_trade": "1%",
        "stop_distance": "2%",
        "weekly_drawdown_max": "2%",
    }
    return report


def workout_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    today = reference_day(now)
    this_week = filter_window(user_data.workouts, today, 7, key=lambda w: w.date)
    target = config.weekly_workout_target
    minutes = sum(float(w.duration or 0) for w in this_week)
    types: Dict[str, int] = {}
    for w in this_week:
        types[w.type] = types.get(w.type, 0) + 1

    report = QuickActionReport(action_type="Log workout", title="💪 Workout Recommendations", icon="🏋️")
    report.metrics = {
        "workouts_this_week": len(this_week),
        "target": target,
        "total_minutes": minutes,
        "avg_duration": round(scoring.safe_div(minutes, len(this_week))),
        "types_logged": sorted(types),
    }

    if len(this_week) >= target:
        report.insights.append(
            _insight(InsightType.SUCCESS, f"✅ {len(this_week)} workouts this week! Goal met.", "MAINTAIN")
        )
    else:
        remaining = target - len(this_week)
        report.insights.append(
            _insight(
                InsightType.OPPORTUNITY,
                f"📈 {len(this_week)}/{target} workouts. Need {remaining} more to hit target.",
                "SCHEDULE_NOW",
            )
        )

    if len(types) >= 3:
        report.insights.append(
            _insight(InsightType.SUCCESS, f"💯 Great variety: {', '.join(sorted(types))}.", "MAINTAIN")
        )
    else:
        report.insights.append(
            _insight(InsightType.OPPORTUNITY, f"🔄 Add workout variety. Currently: {', '.join(sorted(types))}", "ADD_VARIETY")
        )

    report.action_items = _items(
        (Priority.CRITICAL, f"⏰ Schedule {target} workouts for this week", "Monday morning", "Locks in commitment"),
        (Priority.CRITICAL, "💪 Complete today's workout (30+ min)", "Today", "+1 toward target"),
        (Priority.HIGH, "🏃 2 cardio sessions (running/bike)", "This week", "Cardiovascular health"),
        (Priority.HIGH, "🏋️ 3 strength training sessions", "This week", "Muscle development"),
        (Priority.MEDIUM, "📊 Track body metrics weekly", "Sunday evening", "Progress monitoring"),
    )
    report.extras["workout_plan"] = [
        {"day": "Monday", "type": "Strength", "duration": "45 min", "intensity": "HIGH"},
        {"day": "Tuesday", "type": "Cardio", "duration": "30 min", "intensity": "MEDIUM"},
        {"day": "Wednesday", "type": "Strength", "duration": "45 min", "intensity": "HIGH"},
        {"day": "Thursday", "type": "Active Recovery", "duration": "20 min", "intensity": "LOW"},
        {"day": "Friday", "type": "Strength", "duration": "45 min", "intensity": "MEDIUM"},
        {"day": "Saturday", "type": "Cardio", "duration": "45 min", "intensity": "HIGH"},
    ]
    return report


def learning_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    report = QuickActionReport(action_type="Track hours", title="📚 Learning & Resources Recommendations", icon="🎓")
    report.insights = [
        _insight(InsightType.OPPORTUNITY, "🎯 Pick one goal and study the resources behind it", "EXPLORE"),
        _insight(InsightType.INFO, "📚 Each goal has strategies, action items and resources", "LEARN"),
    ]
    report.action_items = _items(
        (Priority.CRITICAL, "🎯 Select top goal to get resources", "Now", "Immediate actionable steps"),
        (Priority.HIGH, "📖 Read 1 CRITICAL resource from selected goal", "Today", "+1 knowledge point"),
        (Priority.HIGH, "📋 Implement 1 strategy from recommendations", "This week", "Direct goal progress"),
        (Priority.MEDIUM, "🔄 Refresh recommendations weekly", "Every Sunday", "Fresh strategies"),
    )
    report.extras["top_resources"] = [
        {"category": "DISCIPLINE", "resource": "Atomic Habits - Build 1% daily improvement", "relevance": "CRITICAL"},
        {"category": "CAREER", "resource": "Cracking the Coding Interview", "relevance": "CRITICAL"},
        {"category": "TRADING", "resource": "Market Wizards - Psychology of winning traders", "relevance": "CRITICAL"},
        {"category": "HEALTH", "resource": "Renaissance Periodization - Science-based training", "relevance": "HIGH"},
        {"category": "FINANCE", "resource": "A Random Walk Down Wall Street", "relevance": "HIGH"},
    ]
    report.extras["focus_areas"] = [g.name for g in user_data.goals if (g.category or "").lower() == "career"]
    return report


def weekly_reflection_report(user_data: UserData, now: Optional[datetime], config: Settings) -> QuickActionReport:
    today = reference_day(now)
    this_week = filter_window(user_data.daily_scores, today, 7, key=lambda s: s.date)
    scores = [float(s.total_score) for s in this_week]
    average = round(scoring.mean(scores), 1)
    best = max(scores) if scores else None
    worst = min(scores) if scores else None

    report = QuickActionReport(action_type="Reflect", title="📋 Weekly Reflection Recommendations", icon="🎯")
    report.metrics = {
        "days_logged": len(this_week),
        "average_score": average,
        "best_day": best,
        "worst_day": worst,
        "consistency": round(len(this_week) / 7 * 100),
    }

    if average >= 8:
        report.insights.append(
            _insight(InsightType.SUCCESS, f"✅ Excellent week! Average {average}/10. Keep this momentum going.", "CELEBRATE")
        )
    elif average >= 6.5:
        report.insights.append(
            _insight(InsightType.OPPORTUNITY, f"📈 Good week at {average}/10. Target 8.0+ next week.", "IMPROVE")
        )
    else:
        report.insights.append(
            _insight(
                InsightType.CRITICAL,
                f"🚨 Challenging week ({average}/10). Review what went wrong and adjust.",
                "RESET",
            )
        )

    best_label = f"{best:g}/10" if best is not None else "n/a"
    report.action_items = _items(
        (Priority.CRITICAL, "🎯 Review all daily scores from this week", "Now", "Pattern recognition"),
        (Priority.CRITICAL, f"📊 Analyze best day ({best_label}) - what was different?", "30 min", "Identify success patterns"),
        (Priority.HIGH, "🔍 Identify worst performing category", "1 hour", "Target improvement area"),
        (Priority.HIGH, "✍️ Write 3 wins and 3 lessons for next week", "1.5 hours", "Reflection & learning"),
        (Priority.MEDIUM, "🎯 Set specific 3 goals for next week", "2 hours", "Direction & motivation"),
    )

    weak_week = worst is not None and worst < 7
    report.extras["next_week_plan"] = [
        {
            "goal": "Daily Score 8.0+",
            "strategy": "Focus on weak categories" if weak_week else "Focus on maintaining consistency",
            "difficulty": "MEDIUM",
        },
        {
            "goal": f"{config.weekly_application_target} Job Applications",
            "strategy": "Prioritize Tier 1 companies",
            "difficulty": "HIGH",
        },
        {
            "goal": f"{config.weekly_workout_target} Workouts",
            "strategy": "Schedule all sessions Sunday evening",
            "difficulty": "MEDIUM",
        },
    ]
    return report


ReportBuilder = Callable[[UserData, Optional[datetime], Settings], QuickActionReport]

ACTION_TYPES: Dict[str, ReportBuilder] = {
    "Log today": daily_score_report,
    "Add app": job_application_report,
    "Log trade": trading_log_report,
    "Log workout": workout_report,
    "Track hours": learning_report,
    "Reflect": weekly_reflection_report,
}


def get_quick_action_recommendations(
    action_type: str,
    user_data: UserData,
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[QuickActionReport]:
    """Route an action token to its report; unknown tokens return None"""
    builder = ACTION_TYPES.get(action_type)
    if builder is None:
        return None
    return builder(user_data, now, config or settings)
