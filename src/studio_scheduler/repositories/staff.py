from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.db.models.staff import Staff
from studio_scheduler.schemas.staff import StaffCreate, StaffUpdate


async def list_staff(session: AsyncSession) -> list[Staff]:
    result = await session.execute(select(Staff).order_by(Staff.position, Staff.created_at))
    return list(result.scalars().all())


async def _next_position(session: AsyncSession) -> int:
    result = await session.execute(select(func.coalesce(func.max(Staff.position), 0)))
    return result.scalar_one() + 1


async def create_staff(session: AsyncSession, payload: StaffCreate) -> Staff:
    staff = Staff(**payload.to_record(), position=await _next_position(session))
    session.add(staff)
    await session.flush()
    await session.refresh(staff)
    return staff


async def get_staff(session: AsyncSession, staff_id: str) -> Staff | None:
    return await session.get(Staff, staff_id)


async def update_staff(session: AsyncSession, staff: Staff, payload: StaffUpdate) -> Staff:
    data = payload.to_changes(staff.name)
    for field, value in data.items():
        setattr(staff, field, value)
    await session.flush()
    await session.refresh(staff)
    return staff


async def delete_staff(session: AsyncSession, staff: Staff) -> None:
    await session.delete(staff)
