"""Configuration management using Pydantic Settings"""

from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Every rule threshold used by the analyzers, generators and coaching
    modules lives here so it can be overridden (LIFEDASH_<FIELD>=...)
    without touching the rule code.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIFEDASH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Storage
    database_url: str = "sqlite:///./lifedash.db"
    history_limit: int = 50

    # Service
    service_name: str = "lifedash"
    log_level: str = "INFO"
    refresh_interval_seconds: float = 7200.0  # 2 hours

    # Status bands (ratio of current metric to target)
    status_excellent_ratio: float = 1.0
    status_good_ratio: float = 0.8
    status_fair_ratio: float = 0.6
    status_warning_ratio: float = 0.4

    # Frequency consistency (records per week over the last 4 weeks)
    consistency_high_per_week: float = 1.5
    consistency_moderate_per_week: float = 0.75

    # Daily scores
    daily_score_target: float = 7.0
    daily_min_scores: int = 2
    daily_category_window: int = 7
    daily_score_impact_per_point: float = 0.15
    daily_category_targets: Dict[str, float] = Field(
        default_factory=lambda: {
            "morning_routine": 9,
            "deep_work": 9,
            "exercise": 9,
            "trading": 9,
            "learning": 8,
            "nutrition": 9,
            "sleep": 9,
            "social": 7,
            "daily_mit": 10,
        }
    )
    # Latest category score below which a recommendation fires; absent = rule off
    daily_category_thresholds: Dict[str, float] = Field(
        default_factory=lambda: {
            "morning_routine": 7,
            "deep_work": 7,
            "exercise": 7,
            "trading": 7,
            "learning": 6,
            "nutrition": 6,
            "sleep": 8,
            "social": 5,
            "daily_mit": 9,
        }
    )

    # Health
    weekly_workout_target: int = 6
    health_min_workouts: int = 3
    health_low_volume_below: int = 4
    workout_type_targets: Dict[str, int] = Field(
        default_factory=lambda: {
            "strength": 2,
            "cardio": 2,
            "hiit": 1,
            "flexibility": 1,
            "sports": 1,
            "hiking": 1,
        }
    )
    long_workout_minutes: float = 90.0

    # Trading
    trading_min_trades: int = 3
    trading_recent_window: int = 20
    trading_win_rate_target: float = 50.0
    win_rate_urgent_below: float = 45.0
    win_rate_good_at: float = 55.0
    risk_reward_min: float = 1.5
    asset_low_win_rate: float = 40.0
    asset_min_trades: int = 5
    edge_win_rate: float = 55.0
    edge_min_trades: int = 3
    drawdown_alert_pnl: float = -500.0
    positive_alert_pnl: float = 500.0
    large_trade_pnl: float = 50.0
    weekly_trade_target: int = 3

    # Career
    weekly_application_target: int = 15
    tier1_weekly_target: int = 5
    tier_volume_min: int = 3
    tier1_interview_rate_min: float = 5.0
    tier1_share_min: float = 30.0

    # Finance
    savings_rate_target: float = 30.0
    savings_rate_warning: float = 20.0
    savings_rate_urgent: float = 10.0
    expense_ratio_max: float = 85.0
    income_growth_below: float = 5000.0
    net_worth_goal: float = 2_000_000.0
    annual_return_assumption: float = 0.10

    # Psychology
    consistency_low_ratio: float = 0.5
    consistency_high_ratio: float = 0.7
    goal_diversity_min: int = 3
    intrinsic_goal_categories: int = 4
    willpower_variance: float = 2.0
    stress_variance: float = 2.5
    estimated_distraction_level: float = 0.65
    distraction_threshold: float = 0.6
    burnout_trend: float = -1.0
    burnout_risk_threshold: float = 0.7
    goal_clarity_min: float = 6.0
    strong_habit_daily_logs: int = 20
    strong_habit_workouts: int = 20
    strong_habit_applications: int = 10
    strong_habit_trades: int = 10
    failure_aversion_min_records: int = 5

    # Master integration
    domain_weights: Dict[str, float] = Field(
        default_factory=lambda: {
            "daily": 0.30,
            "career": 0.20,
            "trading": 0.20,
            "health": 0.15,
            "finance": 0.15,
        }
    )
    trend_lookback: int = 7
    quick_win_daily_average: float = 6.0
    synergy_min_records: int = 5
    consistency_pattern_ratio: float = 0.8
    engagement_pattern_domains: int = 4
    decline_pattern_trend: float = -0.5
    goal_alignment_pattern: int = 7
    critical_bottleneck_penalty: float = 0.5
    prioritized_actions_limit: int = 10
    psychology_priorities_limit: int = 5


settings = Settings()
