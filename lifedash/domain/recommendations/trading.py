"""Trading recommendations: win rate, risk/reward, asset and direction edges, P&L alerts"""

from typing import List, Optional

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.analyzers.trading import TradingAnalysis
from lifedash.domain.models import Recommendation
from lifedash.domain.ranking import Severity, sort_by_severity


def breakeven_win_rate(risk_reward: float) -> float:
    """Win rate (%) needed to break even at a given reward:risk ratio"""
    return round(scoring.safe_div(100, 1 + risk_reward), 1)


def _win_rate_rec(analysis: TradingAnalysis, config: Settings) -> Optional[Recommendation]:
    overall = analysis.overall
    rate = overall.win_rate
    if rate < config.win_rate_urgent_below:
        return Recommendation(
            domain="trading",
            severity=Severity.URGENT,
            title="🔴 Critical Win Rate Issue",
            current_state=f"{rate}% win rate ({overall.win_count}/{overall.total_trades} trades)",
            target_state="50-55% win rate minimum",
            problem=f"{rate}% means you lose more than you win. Even with good R:R, this is unsustainable.",
            suggested_actions=[
                "1. Review last 5 losses: What triggered entry? Was it valid signal or forced?",
                "2. Tighten entry criteria: Only take 1:2+ R:R setups",
                "3. Journal improvement: Document EXACTLY why you entered each trade",
                "4. A/B test: Trade half size for 1 week with stricter entries",
            ],
            impact_estimate="48-hour win rate review required",
            details={
                "risk": f"Each loss: -${overall.avg_loss:.2f} avg | Each win: +${overall.avg_win:.2f} avg",
            },
        )
    if rate < config.win_rate_good_at:
        return Recommendation(
            domain="trading",
            severity=Severity.INSIGHT,
            title="📈 Win Rate Improvement Opportunity",
            current_state=f"{rate}% win rate",
            target_state=f"{config.win_rate_good_at:g}%+ win rate",
            problem="Positive but thin edge. Small gains in selectivity compound quickly.",
            suggested_actions=[
                "1. Tag every trade with its setup name",
                "2. Drop the setup with the lowest win rate for 2 weeks",
            ],
            impact_estimate=f"Each +5% win rate on {overall.total_trades} trades = more winners per month",
        )
    if overall.consistency != scoring.LOW_CONSISTENCY:
        return Recommendation(
            domain="trading",
            severity=Severity.INSIGHT,
            title="✅ Win Rate Strong: Maintain Process",
            current_state=f"{rate}% win rate",
            target_state="Keep it above 55%",
            suggested_actions=["Keep the current checklist and position sizing unchanged"],
            impact_estimate="Consistency at this level is the edge",
        )
    return None


def generate_trading_recommendations(
    analysis: Optional[TradingAnalysis],
    config: Optional[Settings] = None,
) -> List[Recommendation]:
    """Evaluate every trading rule; None analysis means insufficient data and no output"""
    if analysis is None:
        return []
    config = config or settings

    recs = []
    overall = analysis.overall

    rec = _win_rate_rec(analysis, config)
    if rec is not None:
        recs.append(rec)

    rr = overall.risk_reward_ratio
    if 0 < rr < config.risk_reward_min:
        breakeven = breakeven_win_rate(rr)
        recs.append(
            Recommendation(
                domain="trading",
                severity=Severity.WARNING,
                title="⚠️ Poor Risk/Reward Ratio",
                current_state=f"{rr}:1 average risk/reward",
                target_state="2:1 or better",
                problem=f"At {rr}:1, you need a {breakeven:.0f}%+ win rate just to break even.",
                suggested_actions=[
                    "1. Review entries: Average R:R is too tight. Adjust stops further out.",
                    "2. Identify best setups: Which trades had 2:1+ R:R? Repeat those.",
                    "3. Reject trades: If setup doesn't offer 2:1+, skip it.",
                ],
                impact_estimate=f"Improving R:R from {rr}:1 → 2.5:1 = 50% more profitability",
                details={"math": f"Breakeven win rate: {breakeven:.0f}% | Your current: {overall.win_rate}%"},
            )
        )

    for asset, stats in analysis.by_asset.items():
        if stats.win_rate < config.asset_low_win_rate and stats.count >= config.asset_min_trades:
            sign = "+" if stats.total_pnl > 0 else ""
            recs.append(
                Recommendation(
                    domain="trading",
                    severity=Severity.WARNING,
                    title=f"📊 {asset.upper()}: Low Win Rate",
                    current_state=f"{stats.win_rate}% win rate ({stats.count} trades, {sign}${stats.total_pnl})",
                    problem=f"{asset} is underperforming. Consider specializing in fewer assets.",
                    suggested_actions=[
                        f"1. Master {asset}: Commit 2 weeks, study patterns",
                        f"2. Reduce {asset}: Cut position size 50%, focus on better-performing assets",
                        f"3. Eliminate: If pattern doesn't improve in 20 trades, stop trading {asset}",
                    ],
                )
            )

    for direction, stats in analysis.by_direction.items():
        if stats.win_rate > config.edge_win_rate and stats.count >= config.edge_min_trades and stats.total_pnl > 0:
            recs.append(
                Recommendation(
                    domain="trading",
                    severity=Severity.INSIGHT,
                    title=f"✅ {direction.upper()} Trades: Your Edge Found",
                    current_state=f"{stats.win_rate}% win rate, +${stats.total_pnl} on {stats.count} trades",
                    target_state=f"{stats.count * 2} trades next month",
                    problem="This is your PROVEN edge. Double down on this trade type.",
                    suggested_actions=[f"Increase allocation to {direction} trades: 40-50% of capital"],
                )
            )

    if overall.total_pnl < config.drawdown_alert_pnl:
        recs.append(
            Recommendation(
                domain="trading",
                severity=Severity.URGENT,
                title="🚨 Negative Month/Week Alert",
                current_state=f"-${abs(overall.total_pnl):.2f} total P&L",
                target_state="Back to break-even",
                problem="DRAWDOWN MODE - Risk reduction needed",
                suggested_actions=[
                    "1. REDUCE position size 50%: Recover from emotional trading",
                    "2. Manual trading only: No automation, full control",
                    "3. Execute checklist before EVERY trade",
                    "4. Daily review: What went wrong? Track in journal.",
                ],
                impact_estimate="Recovery mode: Continue until break-even reached",
            )
        )
    elif overall.total_pnl > config.positive_alert_pnl:
        recs.append(
            Recommendation(
                domain="trading",
                severity=Severity.INSIGHT,
                title="🎉 Positive Month Alert",
                current_state=f"+${overall.total_pnl:.2f} P&L",
                problem="This is YOUR edge working. Document what you did.",
                suggested_actions=[
                    "1. Analyze winning trades: What setups generated profits?",
                    "2. Replicate: Focus exclusively on this setup type",
                    "3. Scaling: Increase position size slightly (10-20%)",
                ],
                impact_estimate=f"At this pace: ${overall.total_pnl * 12:.0f}/year",
            )
        )

    if overall.consistency == scoring.LOW_CONSISTENCY:
        recs.append(
            Recommendation(
                domain="trading",
                severity=Severity.WARNING,
                title="📈 Consistency Issue",
                problem="Your trading results are too variable. Huge wins, huge losses.",
                suggested_actions=[
                    "1. Standardize: Same position size for every trade",
                    "2. Same setups: Trade only your proven patterns",
                    "3. Risk per trade: Fixed 1-2% account risk, always",
                ],
            )
        )

    return sort_by_severity(recs)
