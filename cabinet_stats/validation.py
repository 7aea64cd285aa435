"""
Input parsing for the cabinet form and the inline editor.

The core assumes well-typed numbers; everything typed by a user passes through
here first. Failures raise ``ValidationError`` naming the offending field.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Mapping

import pandas as pd

from cabinet_stats.models import COUNT_FIELDS, MONEY_FIELDS, TEXT_FIELDS

FIELD_LABELS = {
    "id": "ID",
    "last_name": "Last name",
    "first_name": "First name",
    "cabinet_label": "Cabinet",
    "total_revenue": "Cabinet revenue",
    "daily_revenue": "Daily revenue",
    "balance": "Balance",
    "deals_before_midnight": "Deals before 00:00",
    "deals_after_midnight": "Deals after 00:00",
    "date": "Date",
}

# daily_revenue is a delta and goes negative when revenue drops
SIGNED_FIELDS = {"daily_revenue"}


class ValidationError(ValueError):
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{FIELD_LABELS.get(field, field)}: {message}")


def _clean_number_text(raw: str) -> str:
    text = raw.strip().replace("\u00a0", "").replace(" ", "").replace("₽", "")
    return text.replace(",", ".")


def parse_number(field: str, raw: Any, allow_negative: bool = False) -> float:
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        raise ValidationError(field, "value is required")
    if isinstance(raw, bool):
        raise ValidationError(field, "must be a number")
    if isinstance(raw, str):
        text = _clean_number_text(raw)
        if not text:
            raise ValidationError(field, "value is required")
        value = pd.to_numeric(text, errors="coerce")
        if pd.isna(value):
            raise ValidationError(field, f"'{raw}' is not a number")
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ValidationError(field, f"'{raw}' is not a number") from None
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(field, "must be a finite number")
    if value < 0 and not allow_negative:
        raise ValidationError(field, "must not be negative")
    return value


def parse_money(field: str, raw: Any) -> float:
    return parse_number(field, raw, allow_negative=field in SIGNED_FIELDS)


def parse_count(field: str, raw: Any) -> int:
    value = parse_number(field, raw)
    if not value.is_integer():
        raise ValidationError(field, "must be a whole number")
    return int(value)


def parse_text(field: str, raw: Any) -> str:
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise ValidationError(field, "value is required")
    return text


def parse_entry(form: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Turn the raw add-form values into typed record fields.

    ``daily_revenue`` is not accepted here; it is derived by the reconciler.
    Fields are checked in form order so the first bad one is reported.
    """
    out: Dict[str, Any] = {}
    for name in TEXT_FIELDS:
        out[name] = parse_text(name, form.get(name))
    out["total_revenue"] = parse_money("total_revenue", form.get("total_revenue"))
    out["balance"] = parse_money("balance", form.get("balance"))
    for name in COUNT_FIELDS:
        out[name] = parse_count(name, form.get(name))
    return out


def validate_fields(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Typed copy of a partial field mapping, as used by the update path."""
    out: Dict[str, Any] = {}
    for name, raw in changes.items():
        if name in TEXT_FIELDS:
            out[name] = parse_text(name, raw)
        elif name in MONEY_FIELDS:
            out[name] = parse_money(name, raw)
        elif name in COUNT_FIELDS:
            out[name] = parse_count(name, raw)
        elif name == "date":
            parsed = pd.to_datetime(raw, errors="coerce")
            if pd.isna(parsed):
                raise ValidationError(name, f"'{raw}' is not a date")
            out[name] = parsed.date()
        elif name == "id":
            # the store rejects an id change
            out[name] = raw
        else:
            raise ValidationError(name, "unknown field")
    return out


__all__ = [
    "FIELD_LABELS",
    "ValidationError",
    "parse_number",
    "parse_money",
    "parse_count",
    "parse_text",
    "parse_entry",
    "validate_fields",
]
