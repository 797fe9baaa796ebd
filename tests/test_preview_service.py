from datetime import date, datetime

import pytest

from recurpreview.config import Settings
from recurpreview.services.preview_service import PreviewValidationError, build_preview, format_occurrence_label
from recurpreview.services.recurrence_engine import RecurrenceType
from recurpreview.services.rule_service import RecurrenceRule


SETTINGS = Settings(default_preview_count=5, max_preview_count=10)


def test_labels_use_long_date_with_ordinal_day() -> None:
    assert format_occurrence_label(date(2024, 1, 1)) == "January 1st, 2024"
    assert format_occurrence_label(date(2024, 2, 2)) == "February 2nd, 2024"
    assert format_occurrence_label(date(2024, 3, 3)) == "March 3rd, 2024"
    assert format_occurrence_label(date(2024, 4, 11)) == "April 11th, 2024"
    assert format_occurrence_label(date(2024, 5, 12)) == "May 12th, 2024"
    assert format_occurrence_label(date(2024, 6, 13)) == "June 13th, 2024"
    assert format_occurrence_label(date(2024, 7, 21)) == "July 21st, 2024"
    assert format_occurrence_label(date(2024, 8, 22)) == "August 22nd, 2024"
    assert format_occurrence_label(date(2024, 12, 31)) == "December 31st, 2024"


def test_labels_include_time_for_datetimes() -> None:
    assert format_occurrence_label(datetime(2024, 1, 15, 9, 5)) == "January 15th, 2024 at 9:05 AM"
    assert format_occurrence_label(datetime(2024, 1, 15, 0, 0)) == "January 15th, 2024 at 12:00 AM"
    assert format_occurrence_label(datetime(2024, 1, 15, 12, 30)) == "January 15th, 2024 at 12:30 PM"
    assert format_occurrence_label(datetime(2024, 1, 15, 23, 59)) == "January 15th, 2024 at 11:59 PM"


def test_build_preview_uses_default_count() -> None:
    rule = RecurrenceRule(start=date(2024, 1, 1), recurrence_type=RecurrenceType.WEEKLY, interval=2)
    preview = build_preview(rule, settings=SETTINGS)
    assert preview.rule == rule
    assert [row.index for row in preview.occurrences] == [0, 1, 2, 3, 4, 5]
    assert preview.occurrences[0].value == date(2024, 1, 1)
    assert preview.occurrences[3].value == date(2024, 2, 12)
    assert preview.occurrences[3].label == "February 12th, 2024"


def test_build_preview_respects_explicit_count() -> None:
    rule = RecurrenceRule(start=date(2024, 1, 31), recurrence_type=RecurrenceType.MONTHLY, interval=1)
    preview = build_preview(rule, count=1, settings=SETTINGS)
    assert [row.value for row in preview.occurrences] == [date(2024, 1, 31), date(2024, 2, 29)]

    empty_tail = build_preview(rule, count=0, settings=SETTINGS)
    assert [row.value for row in empty_tail.occurrences] == [date(2024, 1, 31)]


@pytest.mark.parametrize("count", [-1, 11, True])
def test_build_preview_rejects_out_of_bounds_count(count) -> None:
    rule = RecurrenceRule(start=date(2024, 1, 1), recurrence_type=RecurrenceType.DAILY, interval=1)
    with pytest.raises(PreviewValidationError):
        build_preview(rule, count=count, settings=SETTINGS)
