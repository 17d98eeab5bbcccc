"""Tier-specific job search recommendations"""

from typing import List, Optional

from lifedash.config import Settings, settings
from lifedash.domain.analyzers.career import CareerAnalysis
from lifedash.domain.models import Recommendation
from lifedash.domain.ranking import Severity, sort_by_severity


def generate_career_recommendations(
    analysis: Optional[CareerAnalysis],
    config: Optional[Settings] = None,
) -> List[Recommendation]:
    if analysis is None:
        return []
    config = config or settings

    recs = []
    tier1 = analysis.tiers["Tier1"]
    tier2 = analysis.tiers["Tier2"]
    tier3 = analysis.tiers["Tier3"]
    tier4 = analysis.tiers["Tier4"]

    if tier1.total < config.tier_volume_min:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.URGENT,
                title="🎯 Tier 1 Volume Too Low",
                current_state=f"{tier1.total} applications",
                target_state="5-7 per week",
                problem="Tier 1 needs volume to generate interviews at a 2% historical conversion rate.",
                suggested_actions=[
                    "Daily deep work goal: Research + apply to 1 Tier 1 company (high quality)",
                    "Quality > Speed: Customized resume, tailored cover letter, research firm",
                ],
                impact_estimate="This week: +5 Tier 1 applications",
                details={"tier": "Tier1"},
            )
        )
    elif tier1.interview_rate < config.tier1_interview_rate_min:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.WARNING,
                title="📊 Tier 1 Conversion Rate Low",
                current_state=f"{tier1.interview_rate}% app→interview",
                target_state="5-8% is good for Tier 1",
                problem=f"Of {tier1.total} Tier 1 apps, only {tier1.interview} interviews. "
                "Applications are filtered out before human review.",
                suggested_actions=[
                    "1. Ask interviewers for feedback where possible",
                    "2. Update resume to emphasize quantitative skills, projects, proven results",
                    "3. Write a custom cover letter for EACH application",
                    "4. Optimize LinkedIn profile to match the resume",
                ],
                impact_estimate="Fixing application quality: 5% → 12-15% interview rate",
                details={"tier": "Tier1"},
            )
        )

    if tier2.total < config.tier_volume_min:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.INSIGHT,
                title="💼 Tier 2 Pipeline Underdeveloped",
                current_state=f"{tier2.total} applications",
                target_state="3-5 per week",
                problem="Tier 2 has 8% conversion rate vs. 2% Tier 1. Better offer probability.",
                suggested_actions=["+3 Tier 2 applications to build momentum"],
                impact_estimate="Tier 2 interviews = Practice for Tier 1 interviews",
                details={"tier": "Tier2"},
            )
        )

    if tier3.total < config.tier_volume_min:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.INSIGHT,
                title="🛡️ Tier 3 Safety Net Weak",
                current_state=f"{tier3.total} applications",
                target_state="3-5 per week",
                problem="Tier 3 is the safety net: 15% conversion rate, solid companies, better odds",
                suggested_actions=["+3 Tier 3 applications for security"],
                details={"tier": "Tier3"},
            )
        )

    if tier4.total == 0:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.INSIGHT,
                title="🆘 No Safety Net Applications",
                current_state="0 applications",
                problem="Tier 4 = Guaranteed backup: 30% conversion rate, remote-friendly",
                suggested_actions=["Add 1-2 Tier 4 applications (takes 20 min each)"],
                impact_estimate="Knowing you have a backup = Better performance in Tier 1 interviews",
                details={"tier": "Tier4"},
            )
        )

    dist = analysis.distribution
    if analysis.total_count > 0 and dist["Tier1"] < config.tier1_share_min:
        recs.append(
            Recommendation(
                domain="career",
                severity=Severity.WARNING,
                title="⚖️ Application Distribution Out of Balance",
                current_state=" | ".join(f"Tier {t[-1]}: {dist[t]:.0f}%" for t in ("Tier1", "Tier2", "Tier3", "Tier4")),
                target_state="Tier 1: 40% | Tier 2: 30% | Tier 3: 25% | Tier 4: 5%",
                problem="Too many applications to lower tiers. Reduces offer probability.",
                suggested_actions=["Shift focus: Next week, 60%+ of applications should be Tier 1-2"],
            )
        )

    return sort_by_severity(recs)
