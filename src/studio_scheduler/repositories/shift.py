from datetime import date
from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.db.models.staff import Shift
from studio_scheduler.services.shifts import ShiftSlot


async def list_shifts(session: AsyncSession) -> list[Shift]:
    result = await session.execute(select(Shift).order_by(Shift.date, Shift.start_time))
    return list(result.scalars().all())


async def get_shift(session: AsyncSession, shift_id: str) -> Shift | None:
    return await session.get(Shift, shift_id)


async def replace_shifts_in_range(
    session: AsyncSession, start: date, end: date, slots: Iterable[ShiftSlot]
) -> list[Shift]:
    """Drop every stored shift dated within ``[start, end]`` and insert *slots*."""
    await session.execute(delete(Shift).where(Shift.date >= start, Shift.date <= end))

    shifts = [
        Shift(
            id=slot.id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            role=slot.role,
            assigned_staff_id=slot.assigned_staff_id,
        )
        for slot in slots
    ]
    session.add_all(shifts)
    await session.flush()
    return shifts


async def delete_shift(session: AsyncSession, shift: Shift) -> None:
    await session.delete(shift)


async def clear_shifts(session: AsyncSession) -> None:
    await session.execute(delete(Shift))
