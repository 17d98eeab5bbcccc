"""Fitness recommendations from workout analysis"""

from typing import List, Optional

from lifedash.config import Settings, settings
from lifedash.domain.analyzers.health import HealthAnalysis
from lifedash.domain.models import Recommendation
from lifedash.domain.ranking import Severity, sort_by_severity

IDEAL_WEEK = [
    "Monday: Strength 60 min",
    "Tuesday: Cardio 30 min",
    "Wednesday: Strength 60 min",
    "Thursday: Cardio 30 min",
    "Friday: HIIT 20 min",
    "Saturday/Sunday: 1 of (HIIT, Yoga, Sports, Hiking)",
]


def generate_fitness_recommendations(
    analysis: Optional[HealthAnalysis],
    config: Optional[Settings] = None,
) -> List[Recommendation]:
    """
    Evaluate every fitness rule against the workout analysis.

    Rules (all independent):
    - strength sessions this week below target: urgent
    - cardio sessions this week below target: warning
    - no HIIT while strength is on target: insight
    - no flexibility work this week: warning
    - weekly volume under 4: urgent; at or above the weekly target: insight
    - average strength session over 90 minutes: insight
    - recovery protocol: always
    """
    if analysis is None:
        return []
    config = config or settings

    recs = []
    strength = analysis.by_type["strength"]
    cardio = analysis.by_type["cardio"]
    hiit = analysis.by_type["hiit"]
    flexibility = analysis.by_type["flexibility"]

    if strength.this_week < strength.target:
        missing = strength.target - strength.this_week
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.URGENT,
                title="💪 Strength Training Gap",
                current_state=f"{strength.this_week} workouts this week",
                target_state=f"{strength.target} per week",
                problem="Muscle building requires CONSISTENT 2x/week minimum. Gaps cause muscle loss.",
                suggested_actions=[
                    "1. Schedule: Lock in two fixed morning slots (non-negotiable)",
                    "2. Program: Push/Pull/Legs or Upper/Lower split (compound lifts focus)",
                    "3. Duration: 45-60 minutes",
                    "4. Progressive: Track weights, aim for +5 lbs per month per lift",
                ],
                impact_estimate="Consistent strength = +1 daily score from discipline + muscle preservation",
                details={"missing": f"Missing: {missing} strength session(s)"},
            )
        )

    if cardio.this_week < cardio.target:
        missing = cardio.target - cardio.this_week
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.WARNING,
                title="🏃 Cardio Consistency Missing",
                current_state=f"{cardio.this_week} workouts this week",
                target_state=f"{cardio.target} per week",
                problem="No cardio = energy issues + body fat doesn't drop + trading performance suffers",
                suggested_actions=[
                    "1. Easy day: Run/bike/swim 30 mins at conversational pace",
                    "2. Moderate day: 20 mins at 75-80% max heart rate",
                    "3. Time: Morning or lunch break to boost focus",
                    "4. Tracking: Log duration + how you felt",
                ],
                impact_estimate="Cardio 2x/week = +0.5 daily score from energy",
                details={"missing": f"Missing: {missing} cardio session(s)"},
            )
        )

    if hiit.this_week == 0 and strength.this_week >= strength.target:
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.INSIGHT,
                title="⚡ HIIT For Fat Loss Acceleration",
                current_state="No HIIT workouts this week",
                target_state="1 per week (optional but recommended)",
                problem="HIIT = Maximum fat loss in minimum time",
                suggested_actions=["20 mins: 30 sec all-out effort, 90 sec recovery (x8 rounds)"],
                impact_estimate="20 min HIIT is roughly equivalent to 45 min steady cardio",
                details={"caution": "Recovery needed: 48 hours before next hard workout"},
            )
        )

    if flexibility.this_week == 0:
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.WARNING,
                title="🧘 Mobility: Injury Prevention Missing",
                current_state="No flexibility/mobility work this week",
                target_state="1-2 per week",
                problem="Tight muscles from training = injury risk + reduced performance",
                suggested_actions=[
                    "1. Add 10-15 min stretching post-workout",
                    "2. Weekly yoga/mobility: 20-30 min dedicated session",
                    "3. Focus: Hip flexors, hamstrings, shoulders, lower back",
                ],
                impact_estimate="Prevents injuries that derail entire program",
            )
        )

    total = analysis.weekly.total
    target = config.weekly_workout_target
    if total < config.health_low_volume_below:
        breakdown = ", ".join(f"{kind}: {count}" for kind, count in analysis.weekly.by_type.items())
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.URGENT,
                title="🔴 Weekly Volume Too Low",
                current_state=f"{total} workouts this week",
                target_state=f"{target} workouts per week",
                problem="At 3-4 workouts/week, you won't see progress. Inconsistency is your biggest obstacle.",
                suggested_actions=list(IDEAL_WEEK),
                impact_estimate="This requires 4-5 hours/week = non-negotiable time blocks",
                details={
                    "missing": f"Need {target - total} more",
                    "current_gaps": breakdown or "none logged",
                    "deadline": "Tomorrow: Schedule entire week of workouts on calendar",
                },
            )
        )
    elif total >= target:
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.INSIGHT,
                title="✅ Weekly Volume On Track",
                current_state=f"{total} workouts this week",
                target_state=f"{target} workouts per week",
                suggested_actions=["Keep this pace: consistency matters more than intensity"],
                impact_estimate="This is the discipline level needed for peak performance",
            )
        )

    if strength.avg_duration > config.long_workout_minutes:
        recs.append(
            Recommendation(
                domain="health",
                severity=Severity.INSIGHT,
                title="⏱️ Workout Duration Check",
                current_state=f"Average: {strength.avg_duration} minutes",
                target_state="45-60 min",
                problem="Longer ≠ Better. Focus > Time.",
                suggested_actions=["Get same results in less time through intensity"],
            )
        )

    recs.append(
        Recommendation(
            domain="health",
            severity=Severity.INSIGHT,
            title="🛌 Recovery Protocol",
            problem="Recovery = Where muscles grow, not in gym",
            suggested_actions=[
                "Sleep: 7-8 hours per night",
                "Nutrition: Protein with every meal, carbs post-workout",
                "Foam rolling: 10 min post-workout",
                "Active recovery: Walking, stretching on rest days",
            ],
        )
    )

    return sort_by_severity(recs)
