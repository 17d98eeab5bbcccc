"""Job application analysis by company tier"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.models import JobApplication
from lifedash.domain.validators import normalize_tier
from lifedash.utils.date_utils import filter_window, reference_day, sort_by_date

INTERVIEW_STATUSES = ("interview", "interviewing")


@dataclass(frozen=True)
class TierSpec:
    label: str
    weekly_target: int
    importance: str
    success_rate: float  # historical application -> offer


TIERS: Dict[str, TierSpec] = {
    "Tier1": TierSpec("Tier 1 (FAANG/Elite)", 5, "Highest prestige, best network, highest salary", 0.02),
    "Tier2": TierSpec("Tier 2 (Strong Startups/Growth)", 4, "Equity upside, learning opportunity, good network", 0.08),
    "Tier3": TierSpec("Tier 3 (Solid Companies)", 4, "Balance, learning, less risk", 0.15),
    "Tier4": TierSpec("Tier 4 (Safety Net)", 2, "Fallback option", 0.30),
}


@dataclass
class TierStats:
    tier: str
    label: str
    total: int
    this_week: int
    applied: int
    interview: int
    offer: int
    rejected: int
    interview_rate: float
    offer_rate_from_interview: float
    offer_rate: float
    expected_offers: float
    pipeline_health: str
    quality_flags: List[str] = field(default_factory=list)


@dataclass
class CareerAnalysis:
    total_count: int
    this_week_count: int
    weekly_target: int
    remaining_this_week: int
    status: str
    tiers: Dict[str, TierStats] = field(default_factory=dict)
    distribution: Dict[str, float] = field(default_factory=dict)
    expected_offers: float = 0.0


def _status_of(app: JobApplication) -> str:
    return (app.status or "").strip().lower()


def pipeline_health(apps: Sequence[JobApplication]) -> str:
    if not apps:
        return "EMPTY - No applications"
    interviews = sum(1 for a in apps if _status_of(a) in INTERVIEW_STATUSES)
    offers = sum(1 for a in apps if _status_of(a) == "offer")
    if offers > 0:
        return "STRONG - Offers in pipeline"
    if interviews > len(apps) * 0.1:
        return "HEALTHY - 10%+ interview rate"
    if len(apps) >= 5:
        return "ACTIVE - Good application count"
    return "WEAK - Low activity or conversion"


def _quality_flags(apps: Sequence[JobApplication], today) -> List[str]:
    flags = []
    if apps and all(_status_of(a) == "rejected" for a in apps):
        flags.append("ALL_REJECTED")
    recent = filter_window(apps, today, 30, key=lambda a: a.date)
    if sum(1 for a in recent if _status_of(a) == "rejected") >= 2:
        flags.append("RECENT_REJECTIONS")
    return flags


def _tier_stats(tier: str, spec: TierSpec, apps: List[JobApplication], week: List[JobApplication], today) -> TierStats:
    interview = sum(1 for a in apps if _status_of(a) in INTERVIEW_STATUSES)
    offer = sum(1 for a in apps if _status_of(a) == "offer")
    return TierStats(
        tier=tier,
        label=spec.label,
        total=len(apps),
        this_week=len(week),
        applied=sum(1 for a in apps if _status_of(a) == "applied"),
        interview=interview,
        offer=offer,
        rejected=sum(1 for a in apps if _status_of(a) == "rejected"),
        interview_rate=round(scoring.safe_div(interview * 100, len(apps)), 1),
        offer_rate_from_interview=round(scoring.safe_div(offer * 100, interview), 1),
        offer_rate=round(scoring.safe_div(offer * 100, len(apps)), 1),
        expected_offers=round(len(apps) * spec.success_rate, 2),
        pipeline_health=pipeline_health(apps),
        quality_flags=_quality_flags(apps, today),
    )


def analyze_career(
    applications: Sequence[JobApplication],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[CareerAnalysis]:
    """
    Break the application history down by tier.

    Requirements:
    - At least one dated application, otherwise None
    - Per tier: totals, this-week counts, status counts, conversion rates
    - Expected offers from historical tier success rates (2/8/15/30%)
    - Primary metric: applications this week against the weekly target
    """
    config = config or settings
    today = reference_day(now)

    ordered = sort_by_date(applications, key=lambda a: a.date)
    if not ordered:
        return None

    this_week = filter_window(ordered, today, 7, key=lambda a: a.date)

    tiers = {}
    for tier, spec in TIERS.items():
        apps = [a for a in ordered if normalize_tier(a.tier) == tier]
        week = [a for a in this_week if normalize_tier(a.tier) == tier]
        tiers[tier] = _tier_stats(tier, spec, apps, week, today)

    total = len(ordered)
    distribution = {tier: round(scoring.safe_div(stats.total * 100, total), 1) for tier, stats in tiers.items()}
    target = config.weekly_application_target

    return CareerAnalysis(
        total_count=total,
        this_week_count=len(this_week),
        weekly_target=target,
        remaining_this_week=max(0, target - len(this_week)),
        status=scoring.status_for_ratio(len(this_week), target, config),
        tiers=tiers,
        distribution=distribution,
        expected_offers=round(sum(stats.expected_offers for stats in tiers.values()), 2),
    )
