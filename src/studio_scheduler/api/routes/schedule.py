from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.core.config import Settings, get_settings
from studio_scheduler.db.session import get_db_session
from studio_scheduler.repositories import schedule as schedule_repo
from studio_scheduler.repositories import shift as shift_repo
from studio_scheduler.repositories import staff as staff_repo
from studio_scheduler.schemas.schedule import (
    CalendarMonth,
    DailySchedule,
    RosterResponse,
    ScheduleRequest,
    ScheduleResult,
    ScheduleRuleRead,
    ScheduleRunRead,
    ScheduleStats,
)
from studio_scheduler.schemas.staff import ShiftRead
from studio_scheduler.services.roster import (
    apply_assignments,
    build_calendar,
    build_daily_list,
    build_stats,
    unfilled_warning,
)
from studio_scheduler.services.rules import load_default_rules
from studio_scheduler.services.scheduler import (
    ScheduleGenerator,
    build_context,
    create_schedule_generator,
)

router = APIRouter()


def get_schedule_generator(
    settings: Annotated[Settings, Depends(get_settings)]
) -> ScheduleGenerator:
    return create_schedule_generator(settings)


async def _latest_unfilled_ids(session: AsyncSession) -> list[str]:
    run = await schedule_repo.get_latest_run(session)
    return list(run.unfilled_shift_ids) if run else []


@router.post("", response_model=ScheduleResult, response_model_exclude_unset=True)
async def generate_schedule(
    payload: ScheduleRequest,
    generator: Annotated[ScheduleGenerator, Depends(get_schedule_generator)],
) -> ScheduleResult:
    """Forward the given shifts and staff to the model and return its answer as-is."""
    context = build_context(payload.shifts, payload.staff)
    return await generator.generate(context)


@router.post("/roster", response_model=RosterResponse)
async def generate_roster(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    generator: Annotated[ScheduleGenerator, Depends(get_schedule_generator)],
) -> RosterResponse:
    """
    Build a roster for every stored shift and persist the assignments.

    Prior assignments are discarded. When the model call fails nothing is
    committed, so the previous roster stays in place.
    """
    shifts = await shift_repo.list_shifts(session)
    staff = await staff_repo.list_staff(session)
    context = build_context(shifts, staff)

    result = await generator.generate(context)
    apply_assignments(shifts, result)
    await schedule_repo.record_run(
        session,
        result,
        model=generator.model,
        shift_count=len(shifts),
        staff_count=len(staff),
    )
    await session.commit()

    return RosterResponse(
        shifts=[ShiftRead.model_validate(shift) for shift in shifts],
        notes=result.notes or None,
        unfilled_shift_ids=result.unfilled_shift_ids,
        warning=unfilled_warning(result),
    )


@router.get("/calendar", response_model=list[CalendarMonth])
async def get_calendar(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[CalendarMonth]:
    shifts = await shift_repo.list_shifts(session)
    staff = await staff_repo.list_staff(session)
    return build_calendar(shifts, staff, await _latest_unfilled_ids(session))


@router.get("/stats", response_model=ScheduleStats)
async def get_stats(session: Annotated[AsyncSession, Depends(get_db_session)]) -> ScheduleStats:
    shifts = await shift_repo.list_shifts(session)
    staff = await staff_repo.list_staff(session)
    return build_stats(shifts, staff, await _latest_unfilled_ids(session))


@router.get("/daily", response_model=list[DailySchedule])
async def get_daily_schedule(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[DailySchedule]:
    shifts = await shift_repo.list_shifts(session)
    staff = await staff_repo.list_staff(session)
    return build_daily_list(shifts, staff)


@router.get("/runs", response_model=list[ScheduleRunRead])
async def list_schedule_runs(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[ScheduleRunRead]:
    runs = await schedule_repo.list_runs(session)
    return [ScheduleRunRead.model_validate(run) for run in runs]


@router.get("/rules", response_model=list[ScheduleRuleRead])
async def list_schedule_rules() -> list[ScheduleRuleRead]:
    rule_set = load_default_rules()
    return [ScheduleRuleRead.model_validate(rule.model_dump()) for rule in rule_set.rules.constraints]
