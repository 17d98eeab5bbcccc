"""Prometheus metrics for record intake, sub-agent health and analysis latency"""

from prometheus_client import Counter, Gauge, Histogram

# Record intake
records_counter = Counter(
    "lifedash_records_total",
    "Records submitted to the dashboard",
    ["kind", "outcome"],  # outcome: accepted | rejected
)

# Sub-agent failures inside the master integrator
agent_failures_counter = Counter(
    "lifedash_agent_failures_total",
    "Analyzer, generator or coaching module calls that raised",
    ["agent"],
)

analysis_duration_histogram = Histogram(
    "lifedash_analysis_duration_seconds",
    "Master analysis wall time",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

health_score_gauge = Gauge(
    "lifedash_health_score",
    "Health score of the most recent master analysis",
)

# Storage
store_errors_counter = Counter(
    "lifedash_store_errors_total",
    "Record store operations that failed",
    ["operation"],
)


def record_submission(kind: str, accepted: bool) -> None:
    """Count a submitted record by kind and validation outcome"""
    outcome = "accepted" if accepted else "rejected"
    records_counter.labels(kind=kind, outcome=outcome).inc()


def record_analysis(duration_seconds: float, health_score: float) -> None:
    analysis_duration_histogram.observe(duration_seconds)
    health_score_gauge.set(health_score)
