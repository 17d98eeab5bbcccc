"""Per-category daily score recommendations"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from lifedash.config import Settings, settings
from lifedash.domain.analyzers.daily import DailyAnalysis
from lifedash.domain.models import Recommendation
from lifedash.domain.ranking import Severity, sort_by_severity


@dataclass(frozen=True)
class CategoryRule:
    category: str
    severity: Severity
    title: str
    problem: str
    actions: Tuple[str, ...]
    impact: str
    deadline: str


# Evaluated in this order; every rule is checked independently against
# its threshold in Settings.daily_category_thresholds
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        "morning_routine", Severity.URGENT, "⏰ Morning Routine Quality Issue",
        "You're missing 1-2 morning essentials. Late start cascades through entire day.",
        ("Checklist: 5:00 wake → cold shower (3 min) → vision review (5 min) → read (25 min)",),
        "Fixing this = +0.8 daily score (most leveraged category)", "Tomorrow 5:00 AM",
    ),
    CategoryRule(
        "deep_work", Severity.URGENT, "🎯 Deep Work Insufficient",
        "Career progression stalls without uninterrupted focus blocks.",
        (
            "Block 9 AM-1 PM NO INTERRUPTIONS. Phone: silent. Browser: single tab.",
            "Log: start time, end time, focus quality (1-10)",
        ),
        "Each hour deep work = 1.5x better quality applications", "Block: 9 AM - 1 PM",
    ),
    CategoryRule(
        "exercise", Severity.WARNING, "💪 Workout Gap Detected",
        "Skipping exercise kills daily score AND energy for deep work. They compound.",
        (
            "Make it automatic: 6:30 AM gym slot non-negotiable.",
            "Mix: 2x strength, 2x cardio, 1x HIIT, 1x flexibility",
        ),
        "+2 points on deep work after exercise", "Tomorrow 6:30 AM",
    ),
    CategoryRule(
        "trading", Severity.URGENT, "📊 Trading Execution Missing",
        "Trading only counts if the trade was executed AND the journal is complete.",
        ("Checklist: Market open → execute plan → log in journal by 3 PM",),
        "Consistent execution keeps the AUM plan on track", "Today 3 PM trading journal complete",
    ),
    CategoryRule(
        "learning", Severity.INSIGHT, "📚 Skill Development Stalling",
        "60+ mins daily = 365+ hours/year. Skipping compounds negatively.",
        ("Habit stack: After lunch = 30 min course, Evening = 30 min reading",),
        "1 hour daily = Industry expert in 2 years", "Add to calendar: 12:30 PM learning (30 min)",
    ),
    CategoryRule(
        "nutrition", Severity.WARNING, "🥗 Nutrition Impact",
        "Diet directly impacts deep work quality, energy levels and trading psychology.",
        ("Track: Protein, carbs, water.", "Prep: 2-hour Sunday meal prep for Mon-Wed"),
        "Poor nutrition = -1 to -2 score impact", "Sunday: meal prep completed",
    ),
    CategoryRule(
        "sleep", Severity.URGENT, "😴 Sleep Quality Critical",
        "Poor sleep = -0.5 daily score, -2 trading accuracy, -1 decision quality",
        (
            "Non-negotiable: Bed 10 PM, sleep by 10:15 PM, wake 5 AM",
            "Blue light blocker 9 PM, no screens, dark room, white noise",
        ),
        "One good night = recovery from one bad day", "Bed tonight: 10 PM sharp",
    ),
    CategoryRule(
        "social", Severity.INSIGHT, "👥 Isolation Risk",
        "Isolation affects motivation, decision quality and long-term sustainability.",
        ("Schedule: 1x daily meaningful conversation (10-30 min)",),
        "This prevents burnout on hard goals", "Today: 15 min call with someone",
    ),
    CategoryRule(
        "daily_mit", Severity.URGENT, "✅ Most Important Task",
        "MIT incomplete = day incomplete. Everything else is bonus.",
        (
            'Define MIT by 5 PM: "What ONE thing would make today successful?"',
            "MIT must be done before sleep. No exceptions.",
        ),
        "Completing the MIT is the single biggest lever on the daily score", "Tonight: MIT completed before sleep",
    ),
)


def generate_daily_recommendations(
    analysis: Optional[DailyAnalysis],
    config: Optional[Settings] = None,
) -> List[Recommendation]:
    """One recommendation per category whose latest score is under its configured threshold"""
    if analysis is None:
        return []
    config = config or settings

    recs = []
    for rule in CATEGORY_RULES:
        detail = analysis.categories.get(rule.category)
        below = config.daily_category_thresholds.get(rule.category)
        if detail is None or below is None or detail.current >= below:
            continue
        recs.append(
            Recommendation(
                domain="daily",
                severity=rule.severity,
                title=rule.title,
                current_state=f"Current: {detail.current}/10 (7-day avg {detail.average})",
                target_state=f"Target: {detail.target:g}/10",
                problem=rule.problem,
                suggested_actions=list(rule.actions),
                impact_estimate=rule.impact,
                details={"category": rule.category, "deadline": rule.deadline, "gap": f"{detail.gap:.1f}"},
            )
        )
    return sort_by_severity(recs)
