from __future__ import annotations

import datetime as dt
import uuid
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column

from studio_scheduler.db.base import Base


class StaffRole(str, Enum):  # type: ignore[call-arg]
    HOST = "host"


staff_role_type = SqlEnum(
    StaffRole,
    name="staffrole",
    create_type=False,
    values_callable=lambda enum: [member.value for member in enum],
)


def _new_id() -> str:
    return uuid.uuid4().hex


class Staff(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[StaffRole] = mapped_column(staff_role_type, nullable=False, default=StaffRole.HOST)
    constraints: Mapped[str] = mapped_column(Text, nullable=False)
    avatar: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, nullable=False)
    # Creation order; timestamps can tie.
    position: Mapped[int] = mapped_column(Integer, index=True, nullable=False, default=0)


class Shift(Base):
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    role: Mapped[StaffRole] = mapped_column(staff_role_type, nullable=False, default=StaffRole.HOST)
    # Not a foreign key: the model may answer with ids we do not know.
    assigned_staff_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
