from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.db.models.schedule import ScheduleRun
from studio_scheduler.schemas.schedule import ScheduleResult


async def record_run(
    session: AsyncSession,
    result: ScheduleResult,
    *,
    model: str,
    shift_count: int,
    staff_count: int,
) -> ScheduleRun:
    run = ScheduleRun(
        model=model,
        notes=result.notes,
        assignments=[item.model_dump(by_alias=True) for item in result.assignments],
        unfilled_shift_ids=list(result.unfilled_shift_ids),
        shift_count=shift_count,
        staff_count=staff_count,
    )
    session.add(run)
    await session.flush()
    await session.refresh(run)
    return run


async def list_runs(session: AsyncSession) -> list[ScheduleRun]:
    result = await session.execute(select(ScheduleRun).order_by(ScheduleRun.id.desc()))
    return list(result.scalars().all())


async def get_latest_run(session: AsyncSession) -> ScheduleRun | None:
    result = await session.execute(select(ScheduleRun).order_by(ScheduleRun.id.desc()).limit(1))
    return result.scalars().first()
