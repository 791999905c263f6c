"""Diff proposed bookings against stored ones and apply the minimal edit set."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from timeguard.domain.model import TimesheetEntry

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from timeguard.domain.model import Assignment, DateRange
    from timeguard.domain.ports.persistence import TimesheetEntryRepository

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationChanges:
    """Edits issued against the entry store for one assignment."""

    inserted: list[TimesheetEntry] = field(default_factory=list[TimesheetEntry])
    updated: list[TimesheetEntry] = field(default_factory=list[TimesheetEntry])
    deleted: list[TimesheetEntry] = field(default_factory=list[TimesheetEntry])
    any_increase: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.inserted or self.updated or self.deleted)


def validate_proposed_entries(
    assignment: Assignment,
    proposed: Iterable[TimesheetEntry],
    date_range: DateRange,
) -> list[TimesheetEntry]:
    """Return ``proposed`` as a list after checking it belongs to one assignment and range."""

    entries = list(proposed)
    seen: set[date] = set()
    for entry in entries:
        if entry.assignment.id != assignment.id:
            raise ValueError(
                f"Entry on {entry.entry_date} belongs to assignment {entry.assignment.id}, "
                f"not {assignment.id}"
            )
        if not date_range.contains(entry.entry_date):
            raise ValueError(f"Entry on {entry.entry_date} falls outside {date_range}")
        if entry.entry_date in seen:
            raise ValueError(f"Duplicate entry for {entry.entry_date}")
        seen.add(entry.entry_date)
    return entries


def reconcile_entries(
    repository: TimesheetEntryRepository,
    assignment: Assignment,
    proposed: Iterable[TimesheetEntry],
    stored: Iterable[TimesheetEntry],
) -> ReconciliationChanges:
    """Insert, update or delete stored entries so they match ``proposed``.

    Only days present in ``proposed`` are considered; stored entries for other days
    stay untouched.
    """

    stored_by_date = {entry.entry_date: entry for entry in stored}
    changes = ReconciliationChanges()

    for entry in proposed:
        existing = stored_by_date.get(entry.entry_date)
        if existing is None:
            if not entry.is_booked:
                continue
            new_entry = TimesheetEntry(
                assignment=assignment,
                entry_date=entry.entry_date,
                hours=entry.hours,
            )
            repository.add(new_entry)
            changes.inserted.append(new_entry)
            changes.any_increase = True
            log.debug("Inserted %s hours on %s", entry.hours, entry.entry_date)
            continue

        if not entry.is_booked:
            repository.delete(existing)
            changes.deleted.append(existing)
            log.debug("Deleted booking on %s", entry.entry_date)
            continue

        if entry.hours == existing.hours:
            continue

        previous = existing.booked_hours
        existing.hours = entry.hours
        repository.update(existing)
        changes.updated.append(existing)
        if entry.booked_hours > previous:
            changes.any_increase = True
        log.debug("Updated %s from %s to %s hours", entry.entry_date, previous, entry.hours)

    return changes
