from typing import Annotated

from fastapi import APIRouter, Depends

from studio_scheduler.core.config import Settings, get_settings
from studio_scheduler.services.shifts import SHIFT_TEMPLATES

router = APIRouter()


@router.get("/settings")
async def read_settings(
    settings: Annotated[Settings, Depends(get_settings)]
) -> dict[str, str]:
    """Expose basic runtime metadata for diagnostics."""
    return {
        "environment": settings.environment,
        "project": settings.project_name,
        "version": settings.version,
        "model": settings.genai_model,
    }


@router.get("/shift-templates")
async def list_shift_templates() -> list[dict[str, str | float]]:
    return [
        {
            "name": template.name,
            "code": template.code,
            "start": template.start,
            "end": template.end,
            "hours": template.hours,
        }
        for template in SHIFT_TEMPLATES
    ]
