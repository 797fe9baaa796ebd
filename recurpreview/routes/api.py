from __future__ import annotations

from datetime import date, time

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from recurpreview.config import get_settings
from recurpreview.services.preview_service import RecurrencePreview, build_preview
from recurpreview.services.recurrence_engine import RECURRENCE_TYPES, RecurrenceValidationError
from recurpreview.services.rule_service import (
    DAYS_OF_WEEK,
    NTH_DAY_MAX,
    NTH_DAY_MIN,
    RecurrenceRuleInput,
    normalize_rule,
)

api_router = APIRouter(tags=["api"])


class PreviewRequest(BaseModel):
    start_date: date
    start_time: time | None = None
    end_date: date | None = None
    recurrence_type: str = "daily"
    interval: int = 1
    days_of_week: list[str] | None = None
    nth_day: int | None = Field(default=None, ge=NTH_DAY_MIN, le=NTH_DAY_MAX)
    count: int | None = None


def _serialize_preview(preview: RecurrencePreview) -> dict[str, object]:
    rule = preview.rule
    return {
        "rule": {
            "start": rule.start.isoformat(),
            "recurrence_type": rule.recurrence_type.value,
            "interval": rule.interval,
            "end_date": None if rule.end_date is None else rule.end_date.isoformat(),
            "days_of_week": list(rule.days_of_week),
            "nth_day": rule.nth_day,
        },
        "occurrence_count": len(preview.occurrences),
        "occurrences": [
            {
                "index": row.index,
                "value": row.value.isoformat(),
                "label": row.label,
            }
            for row in preview.occurrences
        ],
    }


@api_router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/recurrence-types")
def recurrence_types() -> dict[str, object]:
    return {
        "recurrence_types": list(RECURRENCE_TYPES),
        "days_of_week": list(DAYS_OF_WEEK),
        "default_preview_count": get_settings().default_preview_count,
    }


@api_router.post("/recurrence/preview")
def recurrence_preview(payload: PreviewRequest) -> dict[str, object]:
    try:
        rule = normalize_rule(
            RecurrenceRuleInput(
                start_date=payload.start_date,
                start_time=payload.start_time,
                end_date=payload.end_date,
                recurrence_type=payload.recurrence_type,
                interval=payload.interval,
                days_of_week=payload.days_of_week,
                nth_day=payload.nth_day,
            )
        )
        preview = build_preview(rule, count=payload.count)
    except RecurrenceValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail={"error": type(exc).__name__, "message": str(exc)},
        ) from exc
    return _serialize_preview(preview)
