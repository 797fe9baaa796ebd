from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum


DEFAULT_OCCURRENCE_COUNT = 5


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


RECURRENCE_TYPES = tuple(item.value for item in RecurrenceType)


class RecurrenceValidationError(ValueError):
    pass


class InvalidRecurrenceType(RecurrenceValidationError):
    pass


class InvalidInterval(RecurrenceValidationError):
    pass


class InvalidStartDate(RecurrenceValidationError):
    pass


class InvalidCount(RecurrenceValidationError):
    pass


class OccurrenceOutOfRange(RecurrenceValidationError):
    pass


def is_strict_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    zero_based = (year * 12 + (month - 1)) + offset
    return zero_based // 12, (zero_based % 12) + 1


def _monthly_occurrence(start: date, month_offset: int) -> date:
    year, month = _add_months(start.year, start.month, month_offset)
    if not date.min.year <= year <= date.max.year:
        raise OccurrenceOutOfRange(f"Occurrence year {year} is outside the supported calendar")
    dom = min(start.day, _days_in_month(year, month))
    return start.replace(year=year, month=month, day=dom)


def _yearly_occurrence(start: date, year_offset: int) -> date:
    year = start.year + year_offset
    if not date.min.year <= year <= date.max.year:
        raise OccurrenceOutOfRange(f"Occurrence year {year} is outside the supported calendar")
    dom = min(start.day, _days_in_month(year, start.month))
    return start.replace(year=year, day=dom)


def _fixed_step_occurrence(start: date, step_days: int) -> date:
    try:
        return start + timedelta(days=step_days)
    except OverflowError as exc:
        raise OccurrenceOutOfRange(
            f"Occurrence {step_days} days after {start.isoformat()} is outside the supported calendar"
        ) from exc


def parse_recurrence_type(value: object) -> RecurrenceType:
    if isinstance(value, RecurrenceType):
        return value
    if isinstance(value, str):
        try:
            return RecurrenceType(value.strip().lower())
        except ValueError:
            pass
    raise InvalidRecurrenceType(
        f"Unsupported recurrence_type: {value!r} (expected one of {', '.join(RECURRENCE_TYPES)})"
    )


def occurrence_at(start: date, recurrence_type: RecurrenceType, offset: int) -> date:
    """Return ``start`` advanced by ``offset`` units of ``recurrence_type``.

    Month and year offsets are always taken from ``start`` itself, clamping the
    day of month to the last day of the target month, so a Jan 31 start yields
    Feb 28/29, then Mar 31 again.
    """
    if recurrence_type is RecurrenceType.DAILY:
        return _fixed_step_occurrence(start, offset)
    if recurrence_type is RecurrenceType.WEEKLY:
        return _fixed_step_occurrence(start, offset * 7)
    if recurrence_type is RecurrenceType.MONTHLY:
        return _monthly_occurrence(start, offset)
    if recurrence_type is RecurrenceType.YEARLY:
        return _yearly_occurrence(start, offset)
    raise InvalidRecurrenceType(f"Unsupported recurrence_type: {recurrence_type!r}")


def generate_recurring_dates(
    start: date,
    recurrence_type: RecurrenceType | str,
    interval: int,
    count: int = DEFAULT_OCCURRENCE_COUNT,
) -> list[date]:
    """Return ``start`` followed by ``count`` successors spaced ``interval`` units apart.

    ``start`` may be a ``date`` or a ``datetime``; the time of day of a
    datetime is kept on every occurrence.
    """
    if not isinstance(start, date):
        raise InvalidStartDate(f"Start must be a date or datetime, got {type(start).__name__}")
    kind = parse_recurrence_type(recurrence_type)
    if not is_strict_int(interval) or interval < 1:
        raise InvalidInterval(f"Interval must be an integer >= 1, got {interval!r}")
    if not is_strict_int(count) or count < 0:
        raise InvalidCount(f"Count must be an integer >= 0, got {count!r}")

    results: list[date] = [start]
    for index in range(1, count + 1):
        results.append(occurrence_at(start, kind, index * interval))
    return results
