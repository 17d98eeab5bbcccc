"""
Record validators and normalizers.

Validators never raise for bad input: a violation comes back as
ValidationResult(valid=False, error=...). Normalizers are applied after a
record is accepted and before it is stored; analyzers only ever see
normalized records.
"""

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from lifedash.domain.exceptions import UnknownRecordKindError
from lifedash.domain.models import TradeDirection, ValidationResult
from lifedash.utils.date_utils import parse_date

TIERS = ("Tier1", "Tier2", "Tier3", "Tier4")
DIRECTIONS = tuple(d.value for d in TradeDirection)
MONEY_CEILING = 1_000_000_000  # anything above is treated as an input glitch

Validator = Callable[[Any], ValidationResult]


def _ok() -> ValidationResult:
    return ValidationResult(valid=True)


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _positive(value: Any) -> bool:
    return _is_number(value) and value > 0


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def validate_score(score: Any, category: Any) -> ValidationResult:
    """Validate a single category score (0-10)"""
    if not _is_number(score):
        return _fail("Score must be a number")
    if score < 0 or score > 10:
        return _fail("Score must be between 0 and 10")
    if not _is_text(category):
        return _fail("Category is required")
    return _ok()


def validate_date(value: Any) -> ValidationResult:
    if value is None or value == "":
        return _fail("Date is required")
    if parse_date(value) is None:
        return _fail("Invalid date format")
    return _ok()


def validate_percentage(value: Any) -> ValidationResult:
    if not _is_number(value):
        return _fail("Must be a number")
    if value < 0 or value > 100:
        return _fail("Must be between 0 and 100")
    return _ok()


def validate_money(amount: Any) -> ValidationResult:
    if not _is_number(amount):
        return _fail("Must be a number")
    if amount < 0:
        return _fail("Cannot be negative")
    if amount > MONEY_CEILING:
        return _fail("Amount seems too large")
    return _ok()


# ---------------------------------------------------------------------------
# Record validators
# ---------------------------------------------------------------------------


def validate_daily_score(entry: Mapping[str, Any]) -> ValidationResult:
    """Total score plus every per-category score must be in range"""
    if not entry.get("date"):
        return _fail("Date is required")
    if not _is_number(entry.get("total_score")):
        return _fail("Score must be a number")
    if not 0 <= entry["total_score"] <= 10:
        return _fail("Score must be between 0 and 10")
    categories = entry.get("categories") or {}
    if not isinstance(categories, Mapping):
        return _fail("Categories must be an object")
    for category, score in categories.items():
        result = validate_score(score, category)
        if not result.valid:
            return result
    return _ok()


def validate_trade(entry: Mapping[str, Any]) -> ValidationResult:
    if not entry.get("date"):
        return _fail("Trade date is required")
    if not _is_number(entry.get("pnl")):
        return _fail("P&L must be a number")
    if entry.get("direction") not in DIRECTIONS:
        return _fail("Direction must be Long or Short")
    if not _positive(entry.get("entry_price")):
        return _fail("Entry price must be positive")
    if not _positive(entry.get("exit_price")):
        return _fail("Exit price must be positive")
    if not _positive(entry.get("quantity")):
        return _fail("Quantity must be positive")
    return _ok()


def validate_job_application(app: Mapping[str, Any]) -> ValidationResult:
    if not _is_text(app.get("company")):
        return _fail("Company name is required")
    if app.get("tier") not in TIERS:
        return _fail("Invalid tier. Must be Tier1, Tier2, Tier3, or Tier4")
    if not app.get("date"):
        return _fail("Application date is required")
    return _ok()


def validate_workout(workout: Mapping[str, Any]) -> ValidationResult:
    if not workout.get("date"):
        return _fail("Workout date is required")
    if not _is_text(workout.get("type")):
        return _fail("Workout type is required")
    if not _positive(workout.get("duration")):
        return _fail("Duration must be a positive number (minutes)")
    intensity = workout.get("intensity")
    if not _is_number(intensity) or intensity < 1 or intensity > 10:
        return _fail("Intensity must be 1-10")
    return _ok()


def validate_expense(expense: Mapping[str, Any]) -> ValidationResult:
    if not _positive(expense.get("amount")):
        return _fail("Amount must be a positive number")
    if not _is_text(expense.get("category")):
        return _fail("Category is required")
    if not expense.get("date"):
        return _fail("Expense date is required")
    return _ok()


VALIDATORS: Dict[str, Validator] = {
    "daily_score": validate_daily_score,
    "trade": validate_trade,
    "job_application": validate_job_application,
    "workout": validate_workout,
    "expense": validate_expense,
    "date": validate_date,
    "percentage": validate_percentage,
    "money": validate_money,
}

# Names used by the presentation layer
_KIND_ALIASES = {
    "dailyScore": "daily_score",
    "jobApplication": "job_application",
    "tradeEntry": "trade",
}


def canonical_kind(kind: str) -> str:
    """Resolve a record kind name; an unknown kind is a caller bug and raises"""
    name = _KIND_ALIASES.get(kind, kind)
    if name not in VALIDATORS:
        raise UnknownRecordKindError(f"No validator for record kind: {kind!r}")
    return name


def validate(record: Any, kind: str) -> ValidationResult:
    """Validate one record or scalar against the rule set for `kind`"""
    name = canonical_kind(kind)
    validator = VALIDATORS[name]
    if name in ("date", "percentage", "money"):
        return validator(record)
    if not isinstance(record, Mapping):
        return _fail("Record must be an object")
    return validator(record)


# ---------------------------------------------------------------------------
# Normalizers
# ---------------------------------------------------------------------------


def normalize_date(value: Any) -> Optional[str]:
    """ISO 8601 calendar date; strings that do not parse are passed through"""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        parsed = parse_date(value)
        return parsed.isoformat() if parsed else value
    return None


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _round_half_up(number: float, places: str) -> float:
    # round() is half-to-even; stored values round halves away from zero
    return float(Decimal(str(number)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def normalize_score(score: Any) -> float:
    return _round_half_up(max(0.0, min(10.0, _to_float(score))), "0.1")


def normalize_percentage(pct: Any) -> float:
    return max(0.0, min(100.0, _to_float(pct)))


def normalize_money(amount: Any) -> float:
    number = _to_float(amount)
    return _round_half_up(number, "0.01") if math.isfinite(number) else 0.0


def normalize_direction(direction: Any) -> Any:
    """Canonicalise "long"/"SHORT" spellings; unrecognised values are returned unchanged"""
    if not isinstance(direction, str):
        return direction
    text = direction.strip().capitalize()
    return text if text in DIRECTIONS else direction


def normalize_tier(tier: Any) -> Any:
    """
    Canonicalise tier spellings to "TierN".

    "Tier1", "Tier 1", "tier1" and 1 all map to "Tier1". Unrecognised values
    are returned unchanged so the validator can reject them.
    """
    if tier is None:
        return None
    text = str(tier).strip().lower().replace(" ", "")
    if text.startswith("tier"):
        text = text[4:]
    candidate = f"Tier{text}"
    return candidate if candidate in TIERS else tier


def normalize_record(record: Mapping[str, Any], kind: str) -> Dict[str, Any]:
    """Apply the field normalizers for `kind` to an accepted record"""
    kind = canonical_kind(kind)
    normalized = dict(record)
    if "date" in normalized:
        normalized["date"] = normalize_date(normalized["date"])

    if kind == "daily_score":
        normalized["total_score"] = normalize_score(normalized.get("total_score"))
        normalized["categories"] = {
            name: normalize_score(value) for name, value in (normalized.get("categories") or {}).items()
        }
    elif kind == "trade":
        normalized["pnl"] = normalize_money(normalized.get("pnl"))
    elif kind == "job_application":
        normalized["tier"] = normalize_tier(normalized.get("tier"))
    elif kind == "expense":
        normalized["amount"] = normalize_money(normalized.get("amount"))
    return normalized


# ---------------------------------------------------------------------------
# Batch helpers
# ---------------------------------------------------------------------------


def validate_batch(entries: Iterable[Any], validator: Validator) -> List[ValidationResult]:
    """Apply one validator across entries, tagging each result with its index"""
    results = []
    for index, entry in enumerate(entries):
        result = validator(entry)
        results.append(ValidationResult(valid=result.valid, error=result.error, index=index, entry=entry))
    return results


def all_valid(results: Iterable[ValidationResult]) -> bool:
    return all(result.valid for result in results)


def get_errors(results: Iterable[ValidationResult]) -> List[Dict[str, Any]]:
    return [{"index": r.index, "error": r.error} for r in results if not r.valid]
