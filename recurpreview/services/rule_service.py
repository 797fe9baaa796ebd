from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from recurpreview.services.recurrence_engine import (
    InvalidInterval,
    InvalidStartDate,
    RecurrenceType,
    RecurrenceValidationError,
    is_strict_int,
    parse_recurrence_type,
)


DAYS_OF_WEEK = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
NTH_DAY_MIN = 1
NTH_DAY_MAX = 31


class RuleValidationError(RecurrenceValidationError):
    pass


@dataclass(frozen=True)
class RecurrenceRuleInput:
    start_date: date
    recurrence_type: str = RecurrenceType.DAILY.value
    interval: int = 1
    start_time: time | None = None
    end_date: date | None = None
    days_of_week: list[str] | None = None
    nth_day: int | None = None


@dataclass(frozen=True)
class RecurrenceRule:
    start: date
    recurrence_type: RecurrenceType
    interval: int
    end_date: date | None = None
    days_of_week: tuple[str, ...] = ()
    nth_day: int | None = None


def _normalize_days_of_week(values: list[str]) -> tuple[str, ...]:
    lookup = {day.lower(): day for day in DAYS_OF_WEEK}
    selected: set[str] = set()
    for raw in values:
        key = raw.strip().lower() if isinstance(raw, str) else ""
        if key not in lookup:
            raise RuleValidationError(
                f"Invalid day of week: {raw!r} (expected one of {', '.join(DAYS_OF_WEEK)})"
            )
        selected.add(lookup[key])
    return tuple(day for day in DAYS_OF_WEEK if day in selected)


def _as_plain_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def normalize_rule(rule_input: RecurrenceRuleInput) -> RecurrenceRule:
    """Validate a collected rule and resolve it into generator inputs.

    Day-of-week picks are only kept for weekly rules and the nth day only for
    monthly rules. Both are recorded on the rule but do not change the
    generated dates. The end date is informational and never truncates a
    preview.
    """
    if not isinstance(rule_input.start_date, date):
        raise InvalidStartDate(f"Start date must be a date, got {type(rule_input.start_date).__name__}")
    recurrence_type = parse_recurrence_type(rule_input.recurrence_type)

    interval = rule_input.interval
    if not is_strict_int(interval) or interval < 1:
        raise InvalidInterval(f"Interval must be an integer >= 1, got {interval!r}")

    end_date = rule_input.end_date
    if end_date is not None:
        if not isinstance(end_date, date):
            raise RuleValidationError(f"End date must be a date, got {type(end_date).__name__}")
        end_date = _as_plain_date(end_date)
        if end_date < _as_plain_date(rule_input.start_date):
            raise RuleValidationError("End date must be on or after the start date.")

    days_of_week: tuple[str, ...] = ()
    if rule_input.days_of_week:
        if not isinstance(rule_input.days_of_week, (list, tuple)):
            raise RuleValidationError("Days of week must be a list of day names.")
        days_of_week = _normalize_days_of_week(rule_input.days_of_week)

    nth_day = rule_input.nth_day
    if nth_day is not None:
        if not is_strict_int(nth_day):
            raise RuleValidationError(f"Nth day must be an integer, got {nth_day!r}")
        if not NTH_DAY_MIN <= nth_day <= NTH_DAY_MAX:
            raise RuleValidationError(f"Nth day must be between {NTH_DAY_MIN} and {NTH_DAY_MAX}.")

    start: date = rule_input.start_date
    if rule_input.start_time is not None:
        if not isinstance(rule_input.start_time, time):
            raise RuleValidationError(f"Start time must be a time, got {type(rule_input.start_time).__name__}")
        start = datetime.combine(rule_input.start_date, rule_input.start_time)

    return RecurrenceRule(
        start=start,
        recurrence_type=recurrence_type,
        interval=interval,
        end_date=end_date,
        days_of_week=days_of_week if recurrence_type is RecurrenceType.WEEKLY else (),
        nth_day=nth_day if recurrence_type is RecurrenceType.MONTHLY else None,
    )
