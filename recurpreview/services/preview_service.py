from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging

from recurpreview.config import Settings, get_settings
from recurpreview.services.recurrence_engine import RecurrenceValidationError, generate_recurring_dates, is_strict_int
from recurpreview.services.rule_service import RecurrenceRule

logger = logging.getLogger(__name__)


class PreviewValidationError(RecurrenceValidationError):
    pass


@dataclass(frozen=True)
class PreviewOccurrence:
    index: int
    value: date
    label: str


@dataclass(frozen=True)
class RecurrencePreview:
    rule: RecurrenceRule
    occurrences: list[PreviewOccurrence]


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_occurrence_label(value: date) -> str:
    label = f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"
    if isinstance(value, datetime):
        hour = value.hour % 12 or 12
        meridiem = "AM" if value.hour < 12 else "PM"
        label = f"{label} at {hour}:{value.minute:02d} {meridiem}"
    return label


def _resolve_count(count: int | None, settings: Settings) -> int:
    if count is None:
        return settings.default_preview_count
    if not is_strict_int(count):
        raise PreviewValidationError(f"Count must be an integer, got {count!r}")
    if not 0 <= count <= settings.max_preview_count:
        raise PreviewValidationError(f"Count must be between 0 and {settings.max_preview_count}.")
    return count


def build_preview(
    rule: RecurrenceRule,
    *,
    count: int | None = None,
    settings: Settings | None = None,
) -> RecurrencePreview:
    resolved_settings = settings or get_settings()
    resolved_count = _resolve_count(count, resolved_settings)

    values = generate_recurring_dates(rule.start, rule.recurrence_type, rule.interval, resolved_count)
    logger.debug(
        "Recurrence preview built recurrence_type=%s interval=%s count=%s start=%s",
        rule.recurrence_type.value,
        rule.interval,
        resolved_count,
        rule.start.isoformat(),
    )
    return RecurrencePreview(
        rule=rule,
        occurrences=[
            PreviewOccurrence(index=index, value=value, label=format_occurrence_label(value))
            for index, value in enumerate(values)
        ],
    )
