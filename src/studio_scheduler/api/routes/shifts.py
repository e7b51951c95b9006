from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.core.logging import get_logger
from studio_scheduler.db.session import get_db_session
from studio_scheduler.repositories import shift as shift_repo
from studio_scheduler.schemas.staff import ShiftRangeRequest, ShiftRead
from studio_scheduler.services.shifts import generate_shift_slots

router = APIRouter()
logger = get_logger("api.shifts")


@router.get("/", response_model=list[ShiftRead])
async def list_shifts(session: Annotated[AsyncSession, Depends(get_db_session)]) -> list[ShiftRead]:
    shifts = await shift_repo.list_shifts(session)
    return [ShiftRead.model_validate(shift) for shift in shifts]


@router.post("/generate", response_model=list[ShiftRead], status_code=status.HTTP_201_CREATED)
async def generate_shifts(
    payload: ShiftRangeRequest, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[ShiftRead]:
    """Replace the slots between the two dates with fresh, unassigned ones."""
    slots = generate_shift_slots(payload.start_date, payload.end_date)
    shifts = await shift_repo.replace_shifts_in_range(
        session, payload.start_date, payload.end_date, slots
    )
    await session.commit()
    logger.info(
        "Generated %d shift slots from %s to %s",
        len(shifts),
        payload.start_date,
        payload.end_date,
    )
    return [ShiftRead.model_validate(shift) for shift in shifts]


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_shifts(session: Annotated[AsyncSession, Depends(get_db_session)]) -> None:
    await shift_repo.clear_shifts(session)
    await session.commit()


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: str, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    await shift_repo.delete_shift(session, shift)
    await session.commit()
