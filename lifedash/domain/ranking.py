"""Ordered priority/severity labels and the stable sorts built on them"""

from enum import Enum
from typing import Iterable, List, TypeVar

from lifedash.domain.exceptions import UnknownPriorityError, UnknownSeverityError


class Priority(Enum):
    """Action item priority with a total order: CRITICAL < HIGH < MEDIUM < LOW"""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def parse(cls, label: "str | Priority") -> "Priority":
        """Resolve a label; unknown labels are an error, never a silent default"""
        if isinstance(label, Priority):
            return label
        try:
            return cls(str(label).strip().upper())
        except ValueError:
            raise UnknownPriorityError(f"Unknown priority: {label!r}") from None


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Severity(Enum):
    """Recommendation severity: urgent outranks warning outranks insight"""

    URGENT = "urgent"
    WARNING = "warning"
    INSIGHT = "insight"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def parse(cls, label: "str | Severity") -> "Severity":
        """Accepts both the severity names and the priority-style aliases"""
        if isinstance(label, Severity):
            return label
        key = str(label).strip().lower()
        if key in _SEVERITY_ALIASES:
            return _SEVERITY_ALIASES[key]
        raise UnknownSeverityError(f"Unknown severity: {label!r}")

    def as_priority(self) -> Priority:
        return _SEVERITY_TO_PRIORITY[self]


_SEVERITY_RANK = {
    Severity.URGENT: 0,
    Severity.WARNING: 1,
    Severity.INSIGHT: 2,
}

_SEVERITY_ALIASES = {
    "urgent": Severity.URGENT,
    "critical": Severity.URGENT,
    "warning": Severity.WARNING,
    "high": Severity.WARNING,
    "insight": Severity.INSIGHT,
    "medium": Severity.INSIGHT,
    "low": Severity.INSIGHT,
}

_SEVERITY_TO_PRIORITY = {
    Severity.URGENT: Priority.CRITICAL,
    Severity.WARNING: Priority.HIGH,
    Severity.INSIGHT: Priority.MEDIUM,
}


class InsightType(Enum):
    """Tag carried by coaching insights and quick-action insights"""

    CRITICAL = "critical"
    WARNING = "warning"
    OPPORTUNITY = "opportunity"
    SUCCESS = "success"
    INSIGHT = "insight"
    INFO = "info"


T = TypeVar("T")


def sort_by_severity(items: Iterable[T]) -> List[T]:
    """Stable sort on `.severity`; ties keep rule-evaluation order"""
    return sorted(items, key=lambda item: item.severity.rank)


def sort_by_priority(items: Iterable[T]) -> List[T]:
    """Stable sort on `.priority`; ties keep source order"""
    return sorted(items, key=lambda item: item.priority.rank)
