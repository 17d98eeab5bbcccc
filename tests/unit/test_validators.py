"""Unit tests for record validation and normalization"""

import pytest
from datetime import date, datetime

from lifedash.domain.exceptions import UnknownRecordKindError
from lifedash.domain.validators import (
    all_valid,
    get_errors,
    normalize_date,
    normalize_direction,
    normalize_money,
    normalize_percentage,
    normalize_record,
    normalize_score,
    normalize_tier,
    validate,
    validate_batch,
    validate_trade,
)


def _trade(**overrides):
    trade = {
        "date": "2024-06-10",
        "asset": "ES",
        "direction": "Long",
        "entry_price": 5000.0,
        "exit_price": 5010.0,
        "quantity": 1,
        "pnl": 50.0,
    }
    trade.update(overrides)
    return trade


def test_trade_negative_entry_price_rejected():
    """Test trade with entryPrice -5 reports the exact error"""
    result = validate(_trade(entry_price=-5), "trade")

    assert result.valid is False
    assert result.error == "Entry price must be positive"


def test_trade_rules_in_order():
    """Test each trade rule reports its own message"""
    assert validate_trade(_trade(date="")).error == "Trade date is required"
    assert validate_trade(_trade(pnl="50")).error == "P&L must be a number"
    assert validate_trade(_trade(exit_price=0)).error == "Exit price must be positive"
    assert validate_trade(_trade(quantity=-1)).error == "Quantity must be positive"
    assert validate_trade(_trade()).valid is True


def test_daily_score_range_and_categories():
    """Test total score and per-category scores must be within 0-10"""
    assert validate({"date": "2024-06-10", "total_score": 7.5}, "daily_score").valid
    assert validate({"date": "2024-06-10", "total_score": 11}, "daily_score").error == "Score must be between 0 and 10"

    bad_category = {"date": "2024-06-10", "total_score": 7, "categories": {"sleep": -1}}
    assert validate(bad_category, "dailyScore").error == "Score must be between 0 and 10"


@pytest.mark.parametrize("categories", [[7, 8], "sleep", 5])
def test_daily_score_categories_must_be_an_object(categories):
    """Test malformed categories are reported instead of raising"""
    entry = {"date": "2024-06-01", "total_score": 5, "categories": categories}

    result = validate(entry, "daily_score")

    assert result.valid is False
    assert result.error == "Categories must be an object"


def test_trade_direction_must_be_long_or_short():
    assert validate_trade(_trade(direction="Sideways")).error == "Direction must be Long or Short"
    assert validate_trade(_trade(direction=None)).error == "Direction must be Long or Short"
    assert validate_trade(_trade(direction="Short")).valid is True


def test_job_application_tier_must_be_canonical():
    """Test tier outside Tier1..Tier4 is rejected"""
    app = {"company": "Acme", "tier": "Tier5", "date": "2024-06-10"}
    result = validate(app, "jobApplication")

    assert result.valid is False
    assert result.error == "Invalid tier. Must be Tier1, Tier2, Tier3, or Tier4"

    app["tier"] = "Tier1"
    assert validate(app, "job_application").valid


def test_workout_intensity_bounds():
    """Test workout intensity must be 1-10 and duration positive"""
    workout = {"date": "2024-06-10", "type": "strength", "duration": 45, "intensity": 0}
    assert validate(workout, "workout").error == "Intensity must be 1-10"

    workout.update(intensity=8, duration=0)
    assert validate(workout, "workout").error == "Duration must be a positive number (minutes)"


def test_expense_requires_positive_amount_and_category():
    assert validate({"amount": 0, "category": "food", "date": "2024-06-10"}, "expense").error == (
        "Amount must be a positive number"
    )
    assert validate({"amount": 10, "category": " ", "date": "2024-06-10"}, "expense").error == "Category is required"


@pytest.mark.parametrize(
    "kind,value,valid",
    [
        ("percentage", 0, True),
        ("percentage", 100, True),
        ("percentage", 100.1, False),
        ("money", 0, True),
        ("money", -0.01, False),
        ("money", 5_000_000_000, False),
        ("date", "2024-02-30", False),
        ("date", "2024-02-29", True),
    ],
)
def test_scalar_validators(kind, value, valid):
    """Test scalar kinds validate the bare value"""
    assert validate(value, kind).valid is valid


def test_non_mapping_record_is_a_validation_error():
    """Test a record that is not an object is reported, not raised"""
    result = validate(["not", "a", "record"], "trade")

    assert result.valid is False
    assert result.error == "Record must be an object"


def test_unknown_kind_raises():
    """Test unknown record kind is a caller bug"""
    with pytest.raises(UnknownRecordKindError):
        validate({}, "horoscope")


@pytest.mark.parametrize(
    "raw,expected",
    [(7.24, 7.2), (7.25, 7.3), (5.25, 5.3), (-3, 0.0), (14, 10.0), ("8", 8.0), (None, 0.0), (float("nan"), 0.0)],
)
def test_normalize_score_clamps_and_rounds_half_up(raw, expected):
    assert normalize_score(raw) == expected


def test_normalize_percentage_and_money():
    assert normalize_percentage(-5) == 0.0
    assert normalize_percentage(150) == 100.0
    assert normalize_money(19.999) == 20.0
    assert normalize_money(12.344) == 12.34
    assert normalize_money(2.675) == 2.68
    assert normalize_money(float("inf")) == 0.0


@pytest.mark.parametrize("raw", ["Long", "long", " LONG "])
def test_normalize_direction_aliases(raw):
    assert normalize_direction(raw) == "Long"


def test_normalize_direction_unknown_passes_through():
    assert normalize_direction("Sideways") == "Sideways"
    assert normalize_direction(None) is None


def test_normalize_date_forms():
    """Test dates become ISO strings; unparseable strings pass through"""
    assert normalize_date(date(2024, 6, 1)) == "2024-06-01"
    assert normalize_date(datetime(2024, 6, 1, 23, 59)) == "2024-06-01"
    assert normalize_date("2024-06-01T08:30:00Z") == "2024-06-01"
    assert normalize_date("someday") == "someday"
    assert normalize_date(42) is None


@pytest.mark.parametrize("raw", ["Tier1", "Tier 1", "tier1", "TIER 1", 1, "1"])
def test_normalize_tier_aliases(raw):
    assert normalize_tier(raw) == "Tier1"


def test_normalize_tier_unknown_passes_through():
    assert normalize_tier("Dream Job") == "Dream Job"
    assert normalize_tier(None) is None


def test_normalize_record_daily_score():
    """Test normalization touches the date, total and every category"""
    record = {"date": "2024-06-01T07:00:00", "total_score": 12, "categories": {"sleep": 7.77}}

    normalized = normalize_record(record, "dailyScore")

    assert normalized == {"date": "2024-06-01", "total_score": 10.0, "categories": {"sleep": 7.8}}
    assert record["total_score"] == 12  # input untouched


def test_validate_batch_tags_indexes():
    """Test batch validation keeps each entry's source index"""
    trades = [_trade(), _trade(entry_price=-1), _trade(quantity=0)]

    results = validate_batch(trades, validate_trade)

    assert [r.index for r in results] == [0, 1, 2]
    assert all_valid(results) is False
    assert get_errors(results) == [
        {"index": 1, "error": "Entry price must be positive"},
        {"index": 2, "error": "Quantity must be positive"},
    ]
    assert all_valid(validate_batch([_trade()], validate_trade)) is True
