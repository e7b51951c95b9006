from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from studio_scheduler.db.session import get_db_session
from studio_scheduler.repositories import staff as staff_repo
from studio_scheduler.schemas.staff import StaffCreate, StaffRead, StaffUpdate

router = APIRouter()


@router.get("/", response_model=list[StaffRead])
async def list_staff(session: Annotated[AsyncSession, Depends(get_db_session)]) -> list[StaffRead]:
    staff = await staff_repo.list_staff(session)
    return [StaffRead.model_validate(member) for member in staff]


@router.post("/", response_model=StaffRead, status_code=status.HTTP_201_CREATED)
async def create_staff(
    payload: StaffCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> StaffRead:
    member = await staff_repo.create_staff(session, payload)
    await session.commit()
    return StaffRead.model_validate(member)


@router.get("/{staff_id}", response_model=StaffRead)
async def get_staff(
    staff_id: str, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> StaffRead:
    member = await staff_repo.get_staff(session, staff_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff member not found")
    return StaffRead.model_validate(member)


@router.put("/{staff_id}", response_model=StaffRead)
async def update_staff(
    staff_id: str,
    payload: StaffUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> StaffRead:
    member = await staff_repo.get_staff(session, staff_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff member not found")
    member = await staff_repo.update_staff(session, member, payload)
    await session.commit()
    return StaffRead.model_validate(member)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_staff(
    staff_id: str, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    member = await staff_repo.get_staff(session, staff_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff member not found")
    await staff_repo.delete_staff(session, member)
    await session.commit()
