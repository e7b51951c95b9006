from .schedule import ScheduleRun
from .staff import Shift, Staff, StaffRole

__all__ = [
    "Staff",
    "StaffRole",
    "Shift",
    "ScheduleRun",
]
