from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studio_scheduler.schemas.staff import ShiftRead


class CamelModel(BaseModel):
    """Wire models shared with the browser and the generative model use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduleAssignment(CamelModel):
    shift_id: str
    staff_id: str
    reasoning: str | None = None


class ScheduleResult(CamelModel):
    assignments: list[ScheduleAssignment]
    unfilled_shift_ids: list[str]
    notes: str


class ScheduleShiftIn(CamelModel):
    id: str
    date: date
    start_time: str
    end_time: str
    role: str = "host"
    assigned_staff_id: str | None = None


class ScheduleStaffIn(CamelModel):
    id: str
    name: str
    role: str = "host"
    constraints: str = ""
    avatar: str | None = None


class ScheduleRequest(CamelModel):
    shifts: list[ScheduleShiftIn]
    staff: list[ScheduleStaffIn]


class RosterResponse(BaseModel):
    shifts: list[ShiftRead]
    notes: str | None = None
    unfilled_shift_ids: list[str] = Field(default_factory=list)
    warning: str | None = None


class ScheduleRunRead(BaseModel):
    id: int
    model: str
    notes: str | None = None
    assignments: list[dict] = Field(default_factory=list)
    unfilled_shift_ids: list[str] = Field(default_factory=list)
    shift_count: int
    staff_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScheduleRuleRead(BaseModel):
    code: str
    title: str
    description: str


class CalendarSlot(BaseModel):
    shift_id: str
    label: str
    code: str
    start_time: str
    end_time: str
    staff_id: str | None = None
    staff_name: str | None = None
    unfilled: bool = False


class CalendarDay(BaseModel):
    date: date
    day: int
    slots: list[CalendarSlot] = Field(default_factory=list)


class CalendarMonth(BaseModel):
    year: int
    month: int
    label: str
    leading_blank_days: int
    days: list[CalendarDay]


class StaffWorkload(BaseModel):
    staff_id: str
    name: str
    shift_count: int
    hours: float


class ScheduleStats(BaseModel):
    total_slots: int
    assigned_slots: int
    unfilled_slots: int
    total_hours: float
    staff: list[StaffWorkload]


class DailySlot(BaseModel):
    shift_id: str
    label: str
    start_time: str
    end_time: str
    hours: float
    staff_id: str | None = None
    staff_name: str | None = None


class DailySchedule(BaseModel):
    date: date
    weekday: str
    slots: list[DailySlot]
