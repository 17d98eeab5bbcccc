"""Master psychology coaching: all eight modules merged into one plan"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, List, Optional

from lifedash.config import Settings, settings
from lifedash.domain.models import ActionItem, Insight, InsightModuleResult, UserData
from lifedash.domain.psychology.modules import MODULES
from lifedash.domain.ranking import InsightType, sort_by_priority


@dataclass
class CriticalIssue:
    module: str
    insight: str
    action: str


@dataclass
class PsychologyCoaching:
    title: str
    critical_issues: List[CriticalIssue]
    top_priorities: List[ActionItem]
    modules: List[InsightModuleResult]
    all_insights: List[Insight] = field(default_factory=list)
    all_action_items: List[ActionItem] = field(default_factory=list)
    recommendation: str = (
        "Start with CRITICAL items this week. Implement one module per week for 8 weeks."
    )


def combine_coaching(results: Iterable[InsightModuleResult], config: Optional[Settings] = None) -> PsychologyCoaching:
    """
    Merge module outputs.

    Every insight and action item is tagged with its module. Insights of type
    critical become critical issues. Action items are stable-sorted by
    priority and the first `psychology_priorities_limit` become the top
    priorities.
    """
    config = config or settings
    results = list(results)

    insights = []
    actions = []
    critical = []
    for result in results:
        for insight in result.insights:
            insights.append(replace(insight, module=result.module))
            if insight.type is InsightType.CRITICAL:
                critical.append(CriticalIssue(module=result.module, insight=insight.title, action=insight.message))
        for item in result.action_items:
            actions.append(replace(item, source_module=result.module))

    ranked = sort_by_priority(actions)

    return PsychologyCoaching(
        title="🧠 Master Psychology Coaching Plan",
        critical_issues=critical,
        top_priorities=ranked[: config.psychology_priorities_limit],
        modules=results,
        all_insights=insights,
        all_action_items=ranked,
    )


def get_master_psychology_coaching(
    user_data: UserData,
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> PsychologyCoaching:
    config = config or settings
    return combine_coaching((module(user_data, now, config) for module in MODULES.values()), config)
