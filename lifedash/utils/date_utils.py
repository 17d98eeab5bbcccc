"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import Any, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def parse_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO 8601 string to a date; None if unparseable"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def reference_day(now: Optional[datetime] = None) -> date:
    """Calendar day used as 'today' for window calculations"""
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def in_window(value: Any, today: date, days: int) -> bool:
    """True when value falls in the last `days` calendar days ending today (inclusive)"""
    day = parse_date(value)
    if day is None:
        return False
    return today - timedelta(days=days) < day <= today


def filter_window(records: Iterable[T], today: date, days: int, key: Callable[[T], Any]) -> List[T]:
    """Records whose date (via key) is inside the window; unparseable dates are dropped"""
    return [r for r in records if in_window(key(r), today, days)]


def sort_by_date(records: Iterable[T], key: Callable[[T], Any]) -> List[T]:
    """
    Sort records chronologically by their parsed date.

    Insertion order is not trusted (entries can be back-dated). Records with an
    unparseable date are dropped. The sort is stable, so same-day records keep
    their entry order.
    """
    dated = [(parse_date(key(r)), r) for r in records]
    return [r for d, r in sorted((pair for pair in dated if pair[0] is not None), key=lambda p: p[0])]


def current_streak(days: Iterable[date], today: date) -> int:
    """
    Count consecutive logged calendar days ending today.

    If today has no entry yet the streak is counted from yesterday, so an
    unfinished day does not break it.
    """
    logged = set(days)
    cursor = today if today in logged else today - timedelta(days=1)
    streak = 0
    while cursor in logged:
        streak += 1
        cursor -= timedelta(days=1)
    return streak
