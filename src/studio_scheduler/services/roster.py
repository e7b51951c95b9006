"""Apply model assignments to shift records and build the roster views."""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date
from typing import Any, Iterable, Sequence

from studio_scheduler.core.logging import get_logger
from studio_scheduler.schemas.schedule import (
    CalendarDay,
    CalendarMonth,
    CalendarSlot,
    DailySchedule,
    DailySlot,
    ScheduleResult,
    ScheduleStats,
    StaffWorkload,
)
from studio_scheduler.services.shifts import shift_hours, slot_label, sort_key

logger = get_logger("services.roster")


def clear_assignments(shifts: Iterable[Any]) -> None:
    for shift in shifts:
        shift.assigned_staff_id = None


def apply_assignments(shifts: Sequence[Any], result: ScheduleResult) -> list[Any]:
    """
    Reset every shift, then assign the first matching assignment per shift.

    Assignments with an empty staff id leave the shift unassigned. Shifts are
    mutated in place and returned for convenience.
    """
    clear_assignments(shifts)

    by_shift: dict[str, str] = {}
    for assignment in result.assignments:
        if assignment.shift_id in by_shift:
            continue
        by_shift[assignment.shift_id] = assignment.staff_id

    known_ids = {shift.id for shift in shifts}
    unknown_shift_ids = sorted(set(by_shift) - known_ids)
    if unknown_shift_ids:
        logger.warning("Ignoring assignments for unknown shift ids: %s", unknown_shift_ids)

    for shift in shifts:
        staff_id = by_shift.get(shift.id)
        if staff_id:
            shift.assigned_staff_id = staff_id
    return list(shifts)


def unfilled_warning(result: ScheduleResult) -> str | None:
    count = len(result.unfilled_shift_ids)
    if count == 0:
        return None
    return f"Warning: {count} shifts could not be filled based on constraints."


class StaffDirectory:
    """Looks staff up by id and reports ids that do not resolve."""

    def __init__(self, staff: Iterable[Any]) -> None:
        self._by_id = {member.id: member for member in staff}
        self._reported: set[str] = set()

    def __iter__(self):
        return iter(self._by_id.values())

    def get(self, staff_id: str | None) -> Any | None:
        if not staff_id:
            return None
        member = self._by_id.get(staff_id)
        if member is None and staff_id not in self._reported:
            self._reported.add(staff_id)
            logger.warning(
                'Staff ID not found: "%s". Available IDs: %s', staff_id, sorted(self._by_id)
            )
        return member


def _is_unfilled(shift: Any, member: Any | None, unfilled_ids: set[str]) -> bool:
    return shift.id in unfilled_ids or member is None


def group_by_date(shifts: Iterable[Any]) -> dict[date, list[Any]]:
    grouped: dict[date, list[Any]] = defaultdict(list)
    for shift in sorted(shifts, key=sort_key):
        grouped[shift.date].append(shift)
    return dict(grouped)


def build_calendar(
    shifts: Sequence[Any],
    staff: Iterable[Any],
    unfilled_shift_ids: Iterable[str] = (),
) -> list[CalendarMonth]:
    directory = StaffDirectory(staff)
    unfilled = set(unfilled_shift_ids)
    by_date = group_by_date(shifts)
    months = sorted({(day.year, day.month) for day in by_date})

    result: list[CalendarMonth] = []
    for year, month in months:
        first = date(year, month, 1)
        days_in_month = calendar.monthrange(year, month)[1]
        days: list[CalendarDay] = []
        for day_number in range(1, days_in_month + 1):
            current = date(year, month, day_number)
            slots = []
            for shift in by_date.get(current, []):
                member = directory.get(shift.assigned_staff_id)
                label, code = slot_label(shift.start_time)
                slots.append(
                    CalendarSlot(
                        shift_id=shift.id,
                        label=label,
                        code=code,
                        start_time=shift.start_time,
                        end_time=shift.end_time,
                        staff_id=member.id if member else None,
                        staff_name=member.name if member else None,
                        unfilled=_is_unfilled(shift, member, unfilled),
                    )
                )
            days.append(CalendarDay(date=current, day=day_number, slots=slots))

        result.append(
            CalendarMonth(
                year=year,
                month=month,
                label=first.strftime("%B %Y"),
                # Sunday-first grid; date.weekday() is Monday-first.
                leading_blank_days=(first.weekday() + 1) % 7,
                days=days,
            )
        )
    return result


def build_stats(
    shifts: Sequence[Any],
    staff: Iterable[Any],
    unfilled_shift_ids: Iterable[str] = (),
) -> ScheduleStats:
    directory = StaffDirectory(staff)
    unfilled = set(unfilled_shift_ids)
    workloads = {
        member.id: StaffWorkload(staff_id=member.id, name=member.name, shift_count=0, hours=0.0)
        for member in directory
    }

    assigned = 0
    unfilled_count = 0
    total_hours = 0.0
    for shift in shifts:
        hours = shift_hours(shift.start_time, shift.end_time)
        total_hours += hours
        member = directory.get(shift.assigned_staff_id)
        if _is_unfilled(shift, member, unfilled):
            unfilled_count += 1
        if member is None:
            continue
        assigned += 1
        workload = workloads[member.id]
        workload.shift_count += 1
        workload.hours = round(workload.hours + hours, 2)

    return ScheduleStats(
        total_slots=len(shifts),
        assigned_slots=assigned,
        unfilled_slots=unfilled_count,
        total_hours=round(total_hours, 2),
        staff=sorted(workloads.values(), key=lambda item: (-item.hours, item.name)),
    )


def build_daily_list(shifts: Sequence[Any], staff: Iterable[Any]) -> list[DailySchedule]:
    directory = StaffDirectory(staff)
    days: list[DailySchedule] = []
    for current, day_shifts in group_by_date(shifts).items():
        slots = []
        for shift in day_shifts:
            member = directory.get(shift.assigned_staff_id)
            label, _ = slot_label(shift.start_time)
            slots.append(
                DailySlot(
                    shift_id=shift.id,
                    label=label,
                    start_time=shift.start_time,
                    end_time=shift.end_time,
                    hours=shift_hours(shift.start_time, shift.end_time),
                    staff_id=member.id if member else None,
                    staff_name=member.name if member else None,
                )
            )
        days.append(DailySchedule(date=current, weekday=current.strftime("%A"), slots=slots))
    return days
