"""
The eight psychology coaching modules.

Each module is a pure function of the user's records:
(user_data, now, config) -> InsightModuleResult. Modules never call each
other; the master coaching aggregator and the master integrator compose them.
"""

from datetime import datetime
from typing import Callable, Dict, Optional

from lifedash.config import Settings, settings
from lifedash.domain.models import ActionItem, Insight, InsightModuleResult, UserData
from lifedash.domain.psychology import signals
from lifedash.domain.ranking import InsightType, Priority
from lifedash.utils.date_utils import reference_day

NEUROPLASTICITY = "Neuroplasticity & Brain Enhancement"
MOTIVATION = "Motivation & Willpower Management"
HABITS = "Habit Formation & Behavioral Architecture"
FOCUS = "Focus & Attention Optimization"
ENERGY = "Energy Management & Recovery"
EMOTIONAL = "Emotional Intelligence & Stress Resilience"
GOAL_ALIGNMENT = "Goal-Aligned Mind Coaching"
PROGRESS = "Progress Mindset & Growth Psychology"

InsightModule = Callable[..., InsightModuleResult]


def neuroplasticity_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    today = reference_day(now)
    insights = []
    actions = []

    consistency = signals.daily_consistency(user_data, today)
    if consistency < config.consistency_low_ratio:
        streak = signals.consecutive_days(user_data, today)
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="🧠 Neuroplasticity Breakthrough Opportunity",
                message="Inconsistent patterns prevent neural pathway formation. "
                "Habits need 66+ days of consistent repetition.",
                science="Neural pathways strengthen with repeated activation. Missing days resets the clock.",
                detail=f"You're at day {streak}. To trigger neuroplasticity: never miss twice.",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Establish 21-day consistency streak",
                timeline="21 consecutive days",
                impact_estimate="First habit neural pathway activation (habit formation begins)",
                steps=["Don't miss even one day. Missing = restart the neural clock."],
            )
        )
    elif consistency > config.consistency_high_ratio:
        insights.append(
            Insight(
                type=InsightType.SUCCESS,
                title="🧠 Neural Pathway Strengthening",
                message="Your consistency is building strong neural pathways.",
                science="Consistent behavior shifts work from willpower to habit circuits",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.HIGH,
                action="Maintain + upgrade difficulty",
                timeline="Ongoing",
                impact_estimate="Neural pathway deepening + cognitive enhancement",
                steps=["Current pattern is now easy. Add 1 level of complexity to keep growing."],
            )
        )

    if len(signals.goal_categories(user_data.goals)) > config.goal_diversity_min:
        insights.append(
            Insight(
                type=InsightType.OPPORTUNITY,
                title="🧠 Multi-Domain Brain Enhancement",
                message="You're working on goals across many domains (career, trading, health, finance, learning).",
                science="Different goals activate different neural networks",
            )
        )

    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="😴 Sleep = Neural Consolidation",
            message="Pathway consolidation happens during sleep. 7-9 hours required.",
            detail="Track sleep quality. Better sleep = faster brain rewiring.",
        )
    )

    return InsightModuleResult(
        module=NEUROPLASTICITY,
        icon="🧠",
        insights=insights,
        action_items=actions,
        science_base="Neuroplasticity, Habit Formation, Neural Pathway Strengthening",
    )


def motivation_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    if signals.daily_variation(user_data) > config.willpower_variance:
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="⚡ Willpower Depletion Detected",
                message="High variance in daily scores indicates willpower fluctuations (ego depletion)",
                science="Willpower is a limited resource that depletes with each decision",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Implement Decision Architecture",
                timeline="Start tomorrow",
                impact_estimate="Reduce daily decisions to preserve willpower for high-leverage actions",
                steps=[
                    "Pre-decide: what time you will work on each goal",
                    "Pre-commit: use environment design to remove friction",
                    "Pre-schedule: block calendar for career/trading/workouts",
                ],
            )
        )

    if signals.is_intrinsic(user_data, config):
        message = "Your motivation is goal-driven (INTRINSIC) - sustainable long-term"
        detail = "You're pursuing meaningful goals across different life domains."
    else:
        message = "Your motivation is external (EXTRINSIC) - high burnout risk"
        detail = "Consider deeper purpose: why do these goals matter personally to you?"
    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="🎯 Motivation Type Assessment",
            message=message,
            science="Intrinsic motivation is more sustainable than external rewards",
            detail=detail,
        )
    )

    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Restore Willpower Throughout Day",
            timeline="Daily habit",
            impact_estimate="Maintain peak willpower for critical decisions",
            steps=["Midday: 10-min walk", "Hydration", "Meditation: 5 min", "Sleep 7-9h"],
        )
    )

    return InsightModuleResult(
        module=MOTIVATION,
        icon="⚡",
        insights=insights,
        action_items=actions,
        science_base="Ego Depletion, Self-Control Resources, Intrinsic vs Extrinsic Motivation",
    )


def habit_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    habits = signals.strong_habits(user_data, config)
    if habits:
        insights.append(
            Insight(
                type=InsightType.SUCCESS,
                title="🔗 Strong Habit Foundation Detected",
                message=f"You have {len(habits)} established habits: {', '.join(habits)}",
                detail="Leverage them as anchors for new habits",
            )
        )

    stacks = signals.HABIT_STACKS
    insights.append(
        Insight(
            type=InsightType.OPPORTUNITY,
            title="🔗 Habit Stacking Opportunities Found",
            message="Chain new habits to existing ones to make them automatic",
            science="[Existing Habit] → [New Habit]: the new behavior runs on the old habit's autopilot",
            suggestions=[f"{s.existing} → {s.new} (adds {s.minutes} min)" for s in stacks],
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Implement Habit Stacking",
            timeline="This week",
            impact_estimate="New habits become automatic without extra willpower",
            steps=[f"After {s.existing} → Do {s.new} ({s.frequency})" for s in stacks],
        )
    )

    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="🎯 Habit Loop Optimization",
            message="Every habit has Cue → Routine → Reward. Optimize each phase.",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.MEDIUM,
            action="Design Environment for Target Habits",
            timeline="This week",
            impact_estimate="Reduce friction, increase automatic behavior",
            steps=[
                "Remove friction: place items where you'll use them",
                "Increase friction: hide temptations",
                "Make the desired behavior the easiest option",
            ],
        )
    )

    return InsightModuleResult(
        module=HABITS,
        icon="🔗",
        insights=insights,
        action_items=actions,
        science_base="Habit Loops, Habit Stacking, Environmental Design, Behavioral Architecture",
    )


def focus_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    demand = signals.focus_demand()
    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="🎯 Focus Architecture Needed",
            message="Your goals require deep focus: Career (2-3h/day), Trading (1-2h/day), Learning (1h/day)",
            science="Deep work requires 90+ min uninterrupted focus blocks",
            detail=f"Total focus needed: {demand.daily_hours_needed:g}h/day. "
            f"Current capacity: {demand.current_capacity:g}h/day",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.CRITICAL,
            action="Create Deep Work Schedule",
            timeline="This week - lock it in",
            impact_estimate="Ensure 4-6h deep work daily = goal achievement",
            steps=[
                "6:00-7:30 AM: Career focus",
                "8:00-10:00 AM: Trading focus",
                "10:15-11:15 AM: Learning",
                "2:00-3:30 PM: Strategic thinking",
            ],
        )
    )

    if signals.distraction_level(config) > config.distraction_threshold:
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="📱 High Distraction Load Detected",
                message="Your environment has excessive notifications/interruptions.",
                science="Switching tasks costs 15-25 min to recover focus",
                detail="10 distractions = 4 hours wasted per day",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Distraction Elimination Protocol",
                timeline="Immediately",
                impact_estimate="+4-5 hours effective focus per day",
                steps=[
                    "Phone: airplane mode during deep work",
                    "Notifications: disable all",
                    "Internet: block distracting sites",
                ],
            )
        )

    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Trigger Flow State",
            timeline="Each focus block",
            impact_estimate="Work moves from effortful to effortless",
        )
    )

    return InsightModuleResult(
        module=FOCUS,
        icon="🎯",
        insights=insights,
        action_items=actions,
        science_base="Deep Work, Ultradian Rhythms, Context Switching Costs, Flow Psychology",
    )


def energy_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    energy = signals.energy_trend(user_data, config)
    if energy.burnout_risk > config.burnout_risk_threshold:
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="🔥 BURNOUT WARNING",
                message="Your energy pattern shows rapid depletion without recovery.",
                science="Sustained high output without recovery leads to exhaustion and a crash",
                detail="Sustainable: 70-80% output with 1-2 recovery days/week",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Activate Recovery Protocol",
                timeline="This week",
                impact_estimate="Prevent burnout, sustain high performance long-term",
            )
        )

    # Always emitted: sleep is treated as a standing critical factor
    insights.append(
        Insight(
            type=InsightType.CRITICAL,
            title="😴 Sleep = #1 Performance Factor",
            message="Sleep quality determines: Focus, Willpower, Motivation, Recovery, Brain Plasticity",
            detail="Missing 1 night = -30% cognitive performance for 3 days",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.CRITICAL,
            action="Optimize Sleep",
            timeline="Tonight",
            impact_estimate="+40% mental performance, faster recovery",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Manage Energy Cycles",
            timeline="Daily",
            impact_estimate="Sustain high performance across entire day",
        )
    )

    return InsightModuleResult(
        module=ENERGY,
        icon="⚡",
        insights=insights,
        action_items=actions,
        science_base="Sleep Science, Circadian Rhythms, Burnout Psychology, Energy Management",
    )


def emotional_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    if signals.high_stress(user_data, config):
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="😰 High Stress Detected",
                message="Large swings in daily scores point to elevated stress.",
                science="Chronic stress impairs decision-making",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Stress Management Protocol",
                timeline="Today",
                impact_estimate="Restore cognitive function, improve decision-making",
                steps=["Box breathing 4-4-4-4", "10 min walk outside", "Write down the top worry and one next step"],
            )
        )

    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="🎭 Emotional Awareness = Success",
            message="Your emotions guide decisions. Use them as information, not directives.",
            science="Fear = risk signal, Excitement = overconfidence signal",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Develop Emotional Regulation",
            timeline="Daily practice",
            impact_estimate="Better decisions, resilience, stress management",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Build Antifragility & Resilience",
            timeline="Ongoing practice",
            impact_estimate="Bounce back from failures, grow through challenges",
        )
    )

    return InsightModuleResult(
        module=EMOTIONAL,
        icon="💪",
        insights=insights,
        action_items=actions,
        science_base="Stress Physiology, Emotional Regulation, Resilience Psychology, Decision Science",
    )


def goal_alignment_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = []
    actions = []

    clarity = signals.goal_clarity(user_data.goals)
    if clarity < config.goal_clarity_min:
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="🎯 Goal Clarity Issue",
                message="Vague goals = no neural pathway. Brain needs SPECIFIC targets.",
                detail=f"Goal clarity {clarity:.1f}/10. Give every goal a name, a category and a measurable target.",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Clarify All Goals (Specific, Measurable)",
                timeline="This week",
                impact_estimate="Specific goals make opportunities visible",
                steps=["What exactly?", "By when?", "How will you measure it?"],
            )
        )

    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="🆔 Identity > Goals",
            message="People who achieve goals usually changed their identity first.",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.HIGH,
            action="Align Identity with Goals",
            timeline="This week - write it down",
            impact_estimate="Actions flow automatically from identity",
        )
    )
    insights.append(
        Insight(
            type=InsightType.INSIGHT,
            title="💡 Purpose = Sustained Motivation",
            message="Goals backed by purpose outperform. Why do your goals matter?",
        )
    )
    actions.append(
        ActionItem(
            priority=Priority.MEDIUM,
            action="Connect Each Goal to Purpose",
            timeline="Reflect this week",
            impact_estimate="Intrinsic motivation, sustained effort",
        )
    )

    return InsightModuleResult(
        module=GOAL_ALIGNMENT,
        icon="🎯",
        insights=insights,
        action_items=actions,
        science_base="Goal-Setting Theory, Identity Psychology, Motivation Science",
    )


def progress_mindset_coaching(
    user_data: UserData, now: Optional[datetime] = None, config: Optional[Settings] = None
) -> InsightModuleResult:
    config = config or settings
    insights = [
        Insight(
            type=InsightType.INSIGHT,
            title="🌱 Growth Mindset = Unlimited Potential",
            message="Fixed mindset: \"I'm not good at X\". Growth mindset: \"I'm not good at X YET\"",
        )
    ]
    actions = [
        ActionItem(
            priority=Priority.HIGH,
            action="Implement Deliberate Practice",
            timeline="For all goals",
            impact_estimate="Accelerate skill development beyond casual practice",
        )
    ]

    if signals.failure_aversion(user_data, config):
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="⚠️ Failure Aversion Detected",
                message="Avoiding failure = avoiding growth. Comfort zone = no improvement.",
                detail="Every failed application gets you closer to a yes. Every losing trade teaches something.",
            )
        )
        actions.append(
            ActionItem(
                priority=Priority.CRITICAL,
                action="Reframe Failure as Learning",
                timeline="Daily mindset",
                impact_estimate="Eliminate fear-based paralysis, accelerate learning",
            )
        )

    actions.append(
        ActionItem(
            priority=Priority.MEDIUM,
            action="Track Progress Metrics (Not Just Outcomes)",
            timeline="Daily",
            impact_estimate="Focus on what you control",
        )
    )

    return InsightModuleResult(
        module=PROGRESS,
        icon="🌱",
        insights=insights,
        action_items=actions,
        science_base="Fixed vs Growth Mindset, Deliberate Practice, Learning Science",
    )


# Evaluation order of the master coaching plan
MODULES: Dict[str, InsightModule] = {
    NEUROPLASTICITY: neuroplasticity_coaching,
    MOTIVATION: motivation_coaching,
    HABITS: habit_coaching,
    FOCUS: focus_coaching,
    ENERGY: energy_coaching,
    EMOTIONAL: emotional_coaching,
    GOAL_ALIGNMENT: goal_alignment_coaching,
    PROGRESS: progress_mindset_coaching,
}
