"""Daily slot templates and date-range shift generation."""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from studio_scheduler.core.exceptions import InvalidDateRangeError

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 5


@dataclass(frozen=True)
class ShiftTemplate:
    name: str
    code: str
    start: str
    end: str

    @property
    def hours(self) -> float:
        return shift_hours(self.start, self.end)


# Break between 13:30 and 14:45 is not staffed.
SHIFT_TEMPLATES: tuple[ShiftTemplate, ...] = (
    ShiftTemplate(name="Morning", code="M", start="06:30", end="08:30"),
    ShiftTemplate(name="Day", code="D", start="08:30", end="13:30"),
    ShiftTemplate(name="Evening", code="E", start="14:45", end="18:30"),
)

_TEMPLATES_BY_START = {template.start: template for template in SHIFT_TEMPLATES}


@dataclass
class ShiftSlot:
    id: str
    date: date
    start_time: str
    end_time: str
    role: str = "host"
    assigned_staff_id: str | None = None


def shift_hours(start: str, end: str) -> float:
    fmt = "%H:%M"
    delta = datetime.strptime(end, fmt) - datetime.strptime(start, fmt)
    return round(delta.total_seconds() / 3600, 2)


def slot_label(start_time: str) -> tuple[str, str]:
    """Return the (name, one-letter code) of the slot starting at *start_time*."""
    template = _TEMPLATES_BY_START.get(start_time)
    if template is None:
        return "Shift", "?"
    return template.name, template.code


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def make_shift_id(day: date, index: int) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"shift-{day.isoformat()}-{index}-{suffix}"


def generate_shift_slots(start: date, end: date, *, role: str = "host") -> list[ShiftSlot]:
    """
    Build one unassigned slot per template for every day in ``[start, end]``.

    Identifiers are random per call, so generating the same range twice
    yields different ids.
    """
    if start > end:
        raise InvalidDateRangeError("Start date cannot be after end date")

    slots: list[ShiftSlot] = []
    for day in iter_dates(start, end):
        for index, template in enumerate(SHIFT_TEMPLATES):
            slots.append(
                ShiftSlot(
                    id=make_shift_id(day, index),
                    date=day,
                    start_time=template.start,
                    end_time=template.end,
                    role=role,
                )
            )
    return slots


def sort_key(shift) -> tuple[date, str]:
    return shift.date, shift.start_time
