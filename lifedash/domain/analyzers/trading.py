"""Trading journal analysis: overall statistics, per-asset and per-direction breakdowns"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from lifedash.config import Settings, settings
from lifedash.domain import scoring
from lifedash.domain.models import Trade
from lifedash.utils.date_utils import filter_window, reference_day, sort_by_date

# "2:1", "2.5 : 1" inside free-text notes
RISK_REWARD_PATTERN = re.compile(r"(\d+\.?\d*)\s*:\s*(\d+\.?\d*)")


@dataclass
class OverallStats:
    total_trades: int
    total_pnl: float
    win_count: int
    loss_count: int
    win_rate: float
    avg_win: float
    avg_loss: float
    profit_factor: float
    risk_reward_ratio: float
    consistency: str


@dataclass
class AssetStats:
    asset: str
    count: int
    total_pnl: float
    win_rate: float
    avg_win: float
    avg_loss: float
    consistency: str


@dataclass
class DirectionStats:
    direction: str
    count: int
    total_pnl: float
    win_rate: float
    avg_trade: float


@dataclass
class EntryQuality:
    good_entries: int
    bad_entries: int
    patterns: List[str] = field(default_factory=list)


@dataclass
class TradingAnalysis:
    overall: OverallStats
    this_week_count: int
    status: str
    by_asset: Dict[str, AssetStats] = field(default_factory=dict)
    by_direction: Dict[str, DirectionStats] = field(default_factory=dict)
    entry_quality: Optional[EntryQuality] = None
    recent_trades: List[Trade] = field(default_factory=list)


def _pnl(trade: Trade) -> float:
    try:
        return float(trade.pnl)
    except (TypeError, ValueError):
        return 0.0


def average_risk_reward(trades: Sequence[Trade]) -> float:
    """Mean of the R:R ratios written into trade notes; 0 when none are present"""
    ratios = []
    for trade in trades:
        match = RISK_REWARD_PATTERN.search(trade.notes or "")
        if match and float(match.group(2)) > 0:
            ratios.append(float(match.group(1)) / float(match.group(2)))
    return round(scoring.mean(ratios), 2)


def overall_stats(trades: Sequence[Trade]) -> OverallStats:
    """Win/loss statistics; every ratio falls back to 0 rather than NaN"""
    pnls = [_pnl(t) for t in trades]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    avg_win = scoring.mean(wins)
    avg_loss = scoring.mean(abs(p) for p in losses)

    return OverallStats(
        total_trades=len(pnls),
        total_pnl=round(sum(pnls), 2),
        win_count=len(wins),
        loss_count=len(losses),
        win_rate=scoring.win_rate(len(wins), len(pnls)),
        avg_win=round(avg_win, 2),
        avg_loss=round(avg_loss, 2),
        profit_factor=scoring.profit_factor(avg_win, len(wins), avg_loss, len(losses)),
        risk_reward_ratio=average_risk_reward(trades),
        consistency=scoring.classify_variation_consistency(pnls),
    )


def _by_asset(trades: Sequence[Trade]) -> Dict[str, AssetStats]:
    grouped: Dict[str, List[float]] = {}
    for trade in trades:
        grouped.setdefault(trade.asset or "unknown", []).append(_pnl(trade))

    result = {}
    for asset, pnls in grouped.items():
        wins = [p for p in pnls if p > 0]
        losses = [p for p in pnls if p < 0]
        result[asset] = AssetStats(
            asset=asset,
            count=len(pnls),
            total_pnl=round(sum(pnls), 2),
            win_rate=scoring.win_rate(len(wins), len(pnls)),
            avg_win=round(scoring.mean(wins), 2),
            avg_loss=round(scoring.mean(losses), 2),
            consistency=scoring.classify_variation_consistency(pnls),
        )
    return result


def _by_direction(trades: Sequence[Trade]) -> Dict[str, DirectionStats]:
    grouped: Dict[str, List[float]] = {}
    for trade in trades:
        grouped.setdefault(trade.direction or "unknown", []).append(_pnl(trade))

    return {
        direction: DirectionStats(
            direction=direction,
            count=len(pnls),
            total_pnl=round(sum(pnls), 2),
            win_rate=scoring.win_rate(sum(1 for p in pnls if p > 0), len(pnls)),
            avg_trade=round(scoring.mean(pnls), 2),
        )
        for direction, pnls in grouped.items()
    }


def _entry_quality(trades: Sequence[Trade], config: Settings) -> EntryQuality:
    pnls = [_pnl(t) for t in trades]
    good = sum(1 for p in pnls if p > config.large_trade_pnl)
    bad = sum(1 for p in pnls if p < -config.large_trade_pnl)
    patterns = ["BAD_ENTRIES"] if bad >= 3 else []
    return EntryQuality(good_entries=good, bad_entries=bad, patterns=patterns)


def analyze_trading(
    trades: Sequence[Trade],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Optional[TradingAnalysis]:
    """
    Analyze the most recent trades.

    Requirements:
    - At least `trading_min_trades` dated trades, otherwise None
    - Statistics over the last 20 trades by date (not by entry order)
    - Profit factor = (avg_win x wins) / (|avg_loss| x losses), 0 without losses
    - Primary metric: win rate against the 50% target
    """
    config = config or settings
    today = reference_day(now)

    ordered = sort_by_date(trades, key=lambda t: t.date)
    if len(ordered) < config.trading_min_trades:
        return None

    recent = ordered[-config.trading_recent_window:]
    overall = overall_stats(recent)

    return TradingAnalysis(
        overall=overall,
        this_week_count=len(filter_window(ordered, today, 7, key=lambda t: t.date)),
        status=scoring.status_for_ratio(overall.win_rate, config.trading_win_rate_target, config),
        by_asset=_by_asset(recent),
        by_direction=_by_direction(recent),
        entry_quality=_entry_quality(recent, config),
        recent_trades=list(recent),
    )


def monthly_stats(
    trades: Sequence[Trade],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> Dict[str, object]:
    """Calendar-month summary of the journal"""
    config = config or settings
    today = reference_day(now)
    month_start = today.replace(day=1)
    days_elapsed = (today - month_start).days + 1
    month_trades = filter_window(trades, today, days_elapsed, key=lambda t: t.date)
    stats = overall_stats(month_trades)
    if stats.total_pnl > 0:
        label = "PROFITABLE"
    elif stats.total_pnl < config.drawdown_alert_pnl:
        label = "DRAWDOWN"
    else:
        label = "BREAKEVEN"
    return {
        "month": today.strftime("%B %Y"),
        "total_trades": stats.total_trades,
        "wins": stats.win_count,
        "losses": stats.loss_count,
        "total_pnl": stats.total_pnl,
        "win_rate": stats.win_rate,
        "status": label,
        "annualised_pnl": round(stats.total_pnl * 12, 2),
    }
