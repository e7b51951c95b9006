"""Seed a handful of demo hosts and this month's shift slots for local development.

Run this after applying Alembic migrations:

    python -m alembic upgrade head
    python scripts/seed_demo.py
"""

from __future__ import annotations

import asyncio
import calendar
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from studio_scheduler.core.config import get_settings
from studio_scheduler.core.logging import configure_logging
from studio_scheduler.db.models.staff import Shift, Staff
from studio_scheduler.repositories import shift as shift_repo
from studio_scheduler.repositories import staff as staff_repo
from studio_scheduler.schemas.staff import StaffCreate
from studio_scheduler.services.shifts import generate_shift_slots

DEMO_HOSTS: list[tuple[str, str]] = [
    ("Sarah Smith", "Can only work weekends, max 20 hours/week."),
    ("Jordan Blake", "Mornings only. Needs Tuesdays off."),
    ("Priya Nair", "No Sundays."),
    ("Luis Ortega", "Evenings preferred, available every day."),
    ("Mei Chen", ""),
]


def _current_month(today: date) -> tuple[date, date]:
    last = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last)


async def seed() -> None:
    settings = get_settings()
    logger = configure_logging(settings.log_level)
    engine = create_async_engine(settings.database_url, future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        existing_staff = await session.scalar(select(func.count(Staff.id)))
        if not existing_staff:
            for name, constraints in DEMO_HOSTS:
                await staff_repo.create_staff(
                    session, StaffCreate(name=name, constraints=constraints)
                )
            logger.info("Seeded %d demo hosts", len(DEMO_HOSTS))

        existing_shifts = await session.scalar(select(func.count(Shift.id)))
        if not existing_shifts:
            start, end = _current_month(date.today())
            slots = generate_shift_slots(start, end)
            await shift_repo.replace_shifts_in_range(session, start, end, slots)
            logger.info("Seeded %d shift slots from %s to %s", len(slots), start, end)

        await session.commit()

    await engine.dispose()


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
