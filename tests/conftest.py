"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from typing import Callable

from lifedash.config import Settings
from lifedash.domain.models import (
    DailyScore,
    Expense,
    FinancialSnapshot,
    Goal,
    JobApplication,
    Trade,
    UserData,
    Workout,
)
from lifedash.infrastructure.database.session import make_session_factory
from lifedash.infrastructure.store import InMemoryStore, SqlAlchemyStore

# Fixed clock: every window in the tests is computed against this moment
NOW = datetime(2024, 6, 15, 12, 0, 0)
TODAY = NOW.date()


def days_ago(n: int) -> str:
    return (TODAY - timedelta(days=n)).isoformat()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(name="days_ago")
def days_ago_fixture() -> Callable[[int], str]:
    """ISO date `n` days before the fixed clock"""
    return days_ago


@pytest.fixture
def config() -> Settings:
    """Settings with defaults only (no environment or .env overrides)"""
    return Settings(_env_file=None)


@pytest.fixture
def make_daily_score() -> Callable[..., DailyScore]:
    counter = iter(range(10_000))

    def _make(ago: int, total: float = 7.0, **categories: float) -> DailyScore:
        return DailyScore(id=f"ds_{next(counter)}", date=days_ago(ago), total_score=total, categories=categories)

    return _make


@pytest.fixture
def make_workout() -> Callable[..., Workout]:
    counter = iter(range(10_000))

    def _make(ago: int, type: str = "strength", duration: float = 45, intensity: float = 7) -> Workout:
        return Workout(id=f"wo_{next(counter)}", date=days_ago(ago), type=type, duration=duration, intensity=intensity)

    return _make


@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    counter = iter(range(10_000))

    def _make(ago: int, pnl: float, asset: str = "ES", direction: str = "Long", notes: str = "") -> Trade:
        return Trade(
            id=f"tr_{next(counter)}",
            date=days_ago(ago),
            asset=asset,
            direction=direction,
            entry_price=100.0,
            exit_price=101.0,
            quantity=1,
            pnl=pnl,
            notes=notes,
        )

    return _make


@pytest.fixture
def make_application() -> Callable[..., JobApplication]:
    counter = iter(range(10_000))

    def _make(ago: int, tier: str = "Tier2", status: str = "applied", company: str = "Acme") -> JobApplication:
        return JobApplication(id=f"ja_{next(counter)}", date=days_ago(ago), company=company, tier=tier, status=status)

    return _make


@pytest.fixture
def sample_user_data(make_daily_score, make_workout, make_trade, make_application) -> UserData:
    """Four weeks of activity across every domain"""
    daily_scores = [
        make_daily_score(ago, total=6.0 + (ago % 3), morning_routine=8, deep_work=6, sleep=7)
        for ago in range(27, -1, -1)
    ]
    workouts = [make_workout(ago, type=("strength" if ago % 2 else "cardio")) for ago in range(0, 28, 2)]
    trades = [make_trade(ago, pnl=(120 if ago % 3 else -60)) for ago in range(0, 20)]
    applications = [make_application(ago, tier=f"Tier{1 + ago % 4}") for ago in range(0, 14)]
    return UserData(
        daily_scores=daily_scores,
        workouts=workouts,
        trades=trades,
        job_applications=applications,
        expenses=[
            Expense(id="ex_1", date=days_ago(3), amount=1200, category="housing"),
            Expense(id="ex_2", date=days_ago(10), amount=300, category="food"),
        ],
        goals=[
            Goal(id="g1", name="Land a senior engineering role", category="career", target="Q4 offer"),
            Goal(id="g2", name="Trade a funded account", category="trading", target="$500K AUM"),
        ],
        financial=FinancialSnapshot(net_worth=150_000, monthly_income=8000, monthly_expenses=5600),
    )


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def sqlite_store(tmp_path) -> SqlAlchemyStore:
    """Store on a throwaway SQLite file with tables created"""
    factory = make_session_factory(f"sqlite:///{tmp_path / 'lifedash.db'}")
    return SqlAlchemyStore(session_factory=factory)
