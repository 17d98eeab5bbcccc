"""
Dashboard service - wires the pure analytics core to the record store.

Flow of a submission:
1. Canonicalise the kind (and tier spellings for job applications)
2. Validate; rejected records are logged, counted and returned as-is
3. Normalize, stamp an id and append to the domain collection

Reads never raise on storage failure: a failing load becomes an empty
collection, logged and counted.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from lifedash.config import Settings, settings
from lifedash.domain.exceptions import StorageError, UnknownDomainError, UnknownRecordKindError
from lifedash.domain.integrator import ANALYZERS, GENERATORS, AgentObserver, LoggingObserver, get_master_analysis
from lifedash.domain.models import FinancialSnapshot, MasterAnalysis, Recommendation, UserData, ValidationResult
from lifedash.domain.psychology.coaching import PsychologyCoaching, get_master_psychology_coaching
from lifedash.domain.quick_actions import QuickActionReport, get_quick_action_recommendations
from lifedash.domain.validators import (
    canonical_kind,
    normalize_direction,
    normalize_record,
    normalize_tier,
    validate,
    validate_money,
)
from lifedash.infrastructure.observability.logging import log_analysis, log_validation_rejected
from lifedash.infrastructure.observability.metrics import record_analysis, record_submission, store_errors_counter
from lifedash.infrastructure.store import KeyValueStore
from lifedash.services.schemas import (
    AnalysisSummary,
    DailyScoreRecord,
    ExpenseRecord,
    FinancialSnapshotRecord,
    GoalRecord,
    JobApplicationRecord,
    TradeRecord,
    WorkoutRecord,
    master_analysis_adapter,
)

logger = logging.getLogger(__name__)

# Record kind -> (collection key, schema used when reading it back)
COLLECTIONS: Dict[str, Tuple[str, Type[BaseModel]]] = {
    "daily_score": ("daily_scores", DailyScoreRecord),
    "workout": ("workouts", WorkoutRecord),
    "trade": ("trades", TradeRecord),
    "job_application": ("job_applications", JobApplicationRecord),
    "expense": ("expenses", ExpenseRecord),
}

GOALS_KEY = "goals"
FINANCIAL_KEY = "financial"
LATEST_ANALYSIS_KEY = "latest_analysis"
HISTORY_KEY = "analysis_history"


def new_record_id(now: Optional[datetime] = None) -> str:
    """Millisecond timestamp prefix plus random suffix; sorts roughly by creation"""
    moment = now or datetime.now(timezone.utc)
    return f"{int(moment.timestamp() * 1000)}-{uuid.uuid4().hex[:12]}"


class Dashboard:
    """Entry point used by the presentation layer"""

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[Settings] = None,
        observer: Optional[AgentObserver] = None,
    ):
        self.store = store
        self.config = config or settings
        self.observer = observer or LoggingObserver()

    # Storage guards

    def _store_failed(self, operation: str, error: StorageError) -> None:
        store_errors_counter.labels(operation=operation).inc()
        logger.error(f"Store {operation} failed: {error}", extra={"step": "store", "operation": operation})

    def _load(self, collection: str) -> List[Any]:
        try:
            return self.store.load(collection)
        except StorageError as e:
            self._store_failed("load", e)
            return []

    def _get(self, key: str) -> Optional[Any]:
        try:
            return self.store.get(key)
        except StorageError as e:
            self._store_failed("get", e)
            return None

    def _save(self, key: str, value: Any) -> bool:
        try:
            self.store.save(key, value)
        except StorageError as e:
            self._store_failed("save", e)
            return False
        return True

    # Writes

    def submit(self, kind: str, payload: Any, now: Optional[datetime] = None) -> ValidationResult:
        """
        Validate, normalize and append one record.

        Returns the validation result; on success `entry` holds the stored
        record. An unknown kind raises UnknownRecordKindError.
        """
        name = canonical_kind(kind)
        if name not in COLLECTIONS:
            raise UnknownRecordKindError(f"{kind!r} is not a storable record kind")

        record = dict(payload) if isinstance(payload, Mapping) else payload
        if name == "job_application" and isinstance(record, dict):
            record["tier"] = normalize_tier(record.get("tier"))
        elif name == "trade" and isinstance(record, dict):
            record["direction"] = normalize_direction(record.get("direction"))

        result = validate(record, name)
        if not result.valid:
            log_validation_rejected(name, result.error)
            record_submission(name, accepted=False)
            return result

        stored = normalize_record(record, name)
        if not stored.get("id"):
            stored["id"] = new_record_id(now)

        collection, _ = COLLECTIONS[name]
        try:
            self.store.append(collection, stored)
        except StorageError as e:
            self._store_failed("append", e)
            return ValidationResult(valid=False, error="Record could not be saved", entry=stored)

        record_submission(name, accepted=True)
        logger.info("Record stored", extra={"step": "submit", "kind": name, "record_id": stored["id"]})
        return ValidationResult(valid=True, entry=stored)

    def add_goal(self, name: str, category: str, target: Optional[str] = None, now: Optional[datetime] = None) -> ValidationResult:
        try:
            goal = GoalRecord(id=new_record_id(now), name=name, category=category, target=target)
        except ValidationError:
            return ValidationResult(valid=False, error="Goal name is required")
        entry = goal.model_dump()
        try:
            self.store.append(GOALS_KEY, entry)
        except StorageError as e:
            self._store_failed("append", e)
            return ValidationResult(valid=False, error="Record could not be saved", entry=entry)
        return ValidationResult(valid=True, entry=entry)

    def set_financial(self, net_worth: float, monthly_income: float, monthly_expenses: float) -> ValidationResult:
        """
        Replace the financial snapshot.

        Income and expenses go through the money rules; net worth only has to
        be a number since it can be negative.
        """
        for amount in (monthly_income, monthly_expenses):
            result = validate_money(amount)
            if not result.valid:
                log_validation_rejected("financial", result.error)
                return result
        try:
            snapshot = FinancialSnapshotRecord(
                net_worth=net_worth, monthly_income=monthly_income, monthly_expenses=monthly_expenses
            )
        except ValidationError:
            log_validation_rejected("financial", "Net worth must be a number")
            return ValidationResult(valid=False, error="Net worth must be a number")
        if not self._save(FINANCIAL_KEY, snapshot.model_dump()):
            return ValidationResult(valid=False, error="Record could not be saved")
        return ValidationResult(valid=True, entry=snapshot.model_dump())

    # Reads

    def _records(self, collection: str, schema: Type[BaseModel]) -> list:
        records = []
        for raw in self._load(collection):
            try:
                records.append(schema.model_validate(raw).to_domain())
            except ValidationError as e:
                logger.warning(
                    f"Skipping unreadable {collection} entry",
                    extra={"step": "load", "collection": collection, "errors": e.error_count()},
                )
        return records

    def user_data(self) -> UserData:
        """Snapshot of every collection, read through the record schemas"""
        collections = {key: self._records(key, schema) for key, schema in COLLECTIONS.values()}

        financial = FinancialSnapshot()
        raw = self._get(FINANCIAL_KEY)
        if raw is not None:
            try:
                financial = FinancialSnapshotRecord.model_validate(raw).to_domain()
            except ValidationError:
                logger.warning("Ignoring unreadable financial snapshot", extra={"step": "load"})

        return UserData(
            daily_scores=collections["daily_scores"],
            workouts=collections["workouts"],
            trades=collections["trades"],
            job_applications=collections["job_applications"],
            expenses=collections["expenses"],
            goals=self._records(GOALS_KEY, GoalRecord),
            financial=financial,
        )

    def analyze(self, domain: str, now: Optional[datetime] = None) -> Any:
        """Run one domain analyzer; None when the domain has too little data"""
        analyzer = ANALYZERS.get(domain)
        if analyzer is None:
            raise UnknownDomainError(f"Unknown domain: {domain!r}")
        return analyzer(self.user_data(), now, self.config)

    def recommend(self, domain: str, now: Optional[datetime] = None) -> List[Recommendation]:
        analysis = self.analyze(domain, now)
        return GENERATORS[domain](analysis, self.config)

    def quick_action(self, action_type: str, now: Optional[datetime] = None) -> Optional[QuickActionReport]:
        return get_quick_action_recommendations(action_type, self.user_data(), now, self.config)

    def psychology(self, now: Optional[datetime] = None) -> PsychologyCoaching:
        return get_master_psychology_coaching(self.user_data(), now, self.config)

    def master_analysis(self, now: Optional[datetime] = None) -> MasterAnalysis:
        start_time = time.time()
        analysis = get_master_analysis(self.user_data(), now, self.config, self.observer)
        duration = time.time() - start_time

        record_analysis(duration, analysis.health_score.score)
        log_analysis(
            "master",
            analysis.health_score.score,
            len(analysis.bottlenecks),
            len(analysis.agent_failures),
            duration * 1000,
        )
        return analysis

    # Refresh

    def refresh(self, now: Optional[datetime] = None) -> MasterAnalysis:
        """
        Recompute the master analysis and persist it.

        The full analysis is saved under `latest_analysis`; a summary is
        appended to `analysis_history`, which keeps the last `history_limit`
        entries. A failed save is logged and counted, the analysis is still
        returned.
        """
        analysis = self.master_analysis(now)
        self._save(LATEST_ANALYSIS_KEY, master_analysis_adapter.dump_python(analysis, mode="json"))

        history = self._history_entries()
        history.append(AnalysisSummary.from_analysis(analysis).model_dump(mode="json"))
        self._save(HISTORY_KEY, history[-self.config.history_limit:])
        return analysis

    def _history_entries(self) -> List[Any]:
        try:
            return self.store.load_history(HISTORY_KEY)
        except StorageError as e:
            self._store_failed("load_history", e)
            return []

    def history(self) -> List[AnalysisSummary]:
        summaries = []
        for raw in self._history_entries():
            try:
                summaries.append(AnalysisSummary.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping unreadable history entry", extra={"step": "load"})
        return summaries

    def latest_analysis(self) -> Optional[Dict[str, Any]]:
        """Last saved analysis in its JSON form, or None"""
        return self._get(LATEST_ANALYSIS_KEY)
