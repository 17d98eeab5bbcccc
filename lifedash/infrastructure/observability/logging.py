"""Structured JSON logging for the analytics core"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from lifedash.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: Optional[str] = None) -> None:
    """Route the root logger to stdout as JSON lines; level defaults to LIFEDASH_LOG_LEVEL"""
    root = logging.getLogger()
    root.setLevel(level or settings.log_level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)


def log_analysis(kind: str, health_score: float, bottlenecks: int, agent_failures: int, duration_ms: float) -> None:
    """Log one structured line per completed master analysis"""
    logging.info(
        "Analysis completed",
        extra={
            "step": "analysis_complete",
            "kind": kind,
            "health_score": health_score,
            "bottleneck_count": bottlenecks,
            "agent_failure_count": agent_failures,
            "duration_ms": duration_ms,
        },
    )


def log_agent_failure(agent: str, error: BaseException) -> None:
    logging.error(
        f"Sub-agent {agent} failed: {error}",
        extra={
            "step": "agent_failed",
            "agent": agent,
            "error_type": type(error).__name__,
        },
    )


def log_validation_rejected(kind: str, error: str) -> None:
    logging.warning(
        "Record rejected",
        extra={
            "step": "validation",
            "kind": kind,
            "error": error,
        },
    )
