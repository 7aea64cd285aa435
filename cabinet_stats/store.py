"""
Record store.

The module-level functions are pure: they take the current collection and
return a new list, leaving the input untouched. ``CabinetStore`` is the owner
object the dashboard keeps in its session; it holds the list and routes every
mutation through those functions.

``update`` and ``remove`` on an id that is not in the collection are no-ops,
not errors: the dashboard only offers edits for rows it is displaying.
"""
from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from cabinet_stats.log import get_logger
from cabinet_stats.models import RECORD_FIELDS, CabinetRecord, new_record_id
from cabinet_stats.reconcile import compute_daily_revenue
from cabinet_stats.validation import ValidationError, parse_entry

log = get_logger(__name__)

Changes = Union[CabinetRecord, Mapping[str, Any]]


def add(records: Sequence[CabinetRecord], record: CabinetRecord) -> List[CabinetRecord]:
    # ids come from the caller; a collision is the caller's bug
    return [*records, record]


def update(records: Sequence[CabinetRecord], record_id: str, changes: Changes) -> List[CabinetRecord]:
    """
    Replace the record with ``record_id``.

    ``changes`` is either a full replacement record or a mapping of fields to
    overwrite. The id itself cannot change. ``daily_revenue`` is left as given:
    editing ``total_revenue`` does not re-run reconciliation.
    """
    out = list(records)
    for i, current in enumerate(out):
        if current.id != record_id:
            continue
        if isinstance(changes, CabinetRecord):
            replacement = changes
        else:
            for name in changes:
                if name not in RECORD_FIELDS:
                    raise ValidationError(name, "unknown field")
            replacement = dataclasses.replace(current, **dict(changes))
        if replacement.id != record_id:
            raise ValidationError("id", "record id is immutable")
        out[i] = replacement
        return out
    log.debug("update ignored, unknown record id", extra={"record_id": record_id})
    return out


def remove(records: Sequence[CabinetRecord], record_id: str) -> List[CabinetRecord]:
    out = [r for r in records if r.id != record_id]
    if len(out) == len(records):
        log.debug("remove ignored, unknown record id", extra={"record_id": record_id})
    return out


def list_records(records: Iterable[CabinetRecord]) -> List[CabinetRecord]:
    return list(records)


def build_record(
    fields: Mapping[str, Any],
    existing: Sequence[CabinetRecord],
    today: Optional[date] = None,
    baseline: str = "first",
    record_id: Optional[str] = None,
) -> CabinetRecord:
    """New snapshot from typed form fields, with its daily revenue reconciled."""
    daily = compute_daily_revenue(fields["cabinet_label"], fields["total_revenue"], existing, baseline)
    return CabinetRecord(
        id=record_id or new_record_id(),
        last_name=fields["last_name"],
        first_name=fields["first_name"],
        cabinet_label=fields["cabinet_label"],
        total_revenue=fields["total_revenue"],
        daily_revenue=daily,
        balance=fields["balance"],
        deals_before_midnight=fields["deals_before_midnight"],
        deals_after_midnight=fields["deals_after_midnight"],
        date=today or date.today(),
    )


class CabinetStore:
    def __init__(self, records: Optional[Iterable[CabinetRecord]] = None, baseline: str = "first"):
        self._records: List[CabinetRecord] = list(records or [])
        self.baseline = baseline

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> List[CabinetRecord]:
        return list_records(self._records)

    def get(self, record_id: str) -> Optional[CabinetRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    def add(self, record: CabinetRecord) -> CabinetRecord:
        self._records = add(self._records, record)
        log.info("record added", extra={"record_id": record.id, "cabinet": record.cabinet_label})
        return record

    def create(self, form: Mapping[str, Any], today: Optional[date] = None) -> CabinetRecord:
        """Validate raw form input, reconcile it and append the new record."""
        fields = parse_entry(form)
        return self.add(build_record(fields, self._records, today=today, baseline=self.baseline))

    def update(self, record_id: str, changes: Changes) -> bool:
        if self.get(record_id) is None:
            log.debug("update ignored, unknown record id", extra={"record_id": record_id})
            return False
        self._records = update(self._records, record_id, changes)
        log.info("record updated", extra={"record_id": record_id})
        return True

    def remove(self, record_id: str) -> bool:
        before = len(self._records)
        self._records = remove(self._records, record_id)
        removed = len(self._records) < before
        if removed:
            log.info("record removed", extra={"record_id": record_id})
        return removed

    def replace_all(self, records: Iterable[CabinetRecord]) -> None:
        self._records = list(records)
        log.info("records replaced", extra={"rows": len(self._records)})


__all__ = ["add", "update", "remove", "list_records", "build_record", "CabinetStore"]
