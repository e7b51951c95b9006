from fastapi import APIRouter

from . import schedule, shifts, staff, system

api_router = APIRouter()

api_router.include_router(system.router, prefix="/system", tags=["system"])
api_router.include_router(staff.router, prefix="/staff", tags=["staff"])
api_router.include_router(shifts.router, prefix="/shifts", tags=["shifts"])
api_router.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
