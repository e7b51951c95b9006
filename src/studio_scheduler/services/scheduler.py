"""Prompt construction and the generative-model call that produces a roster."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Any, Protocol, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from studio_scheduler.core.config import Settings
from studio_scheduler.core.exceptions import ScheduleGenerationError, ScheduleRequestError
from studio_scheduler.core.logging import get_logger
from studio_scheduler.schemas.schedule import ScheduleResult
from studio_scheduler.services.rules import RuleSet, load_default_rules

logger = get_logger("services.scheduler")


@dataclass
class SchedulingShift:
    id: str
    date: date
    start_time: str
    end_time: str
    role: str = "host"


@dataclass
class SchedulingStaff:
    id: str
    name: str
    role: str = "host"
    constraints: str = ""


@dataclass
class SchedulingContext:
    shifts: list[SchedulingShift]
    staff: list[SchedulingStaff]
    rules: RuleSet = field(default_factory=load_default_rules)


RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "assignments": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "shiftId": {"type": "STRING"},
                    "staffId": {"type": "STRING"},
                    "reasoning": {"type": "STRING"},
                },
                "required": ["shiftId", "staffId"],
            },
        },
        "unfilledShiftIds": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
        "notes": {"type": "STRING"},
    },
    "required": ["assignments", "unfilledShiftIds", "notes"],
}


def build_context(
    shifts: Sequence[Any], staff: Sequence[Any], rules: RuleSet | None = None
) -> SchedulingContext:
    """
    Validate the inputs of a schedule request and copy them into a context.

    Accepts ORM rows or request models alike; only the attributes the model
    needs are read.
    """
    if not isinstance(shifts, (list, tuple)) or not isinstance(staff, (list, tuple)):
        raise ScheduleRequestError("Invalid input: shifts and staff arrays are required")
    if not shifts:
        raise ScheduleRequestError("Add some shifts first!")
    if not staff:
        raise ScheduleRequestError("Add some staff members first!")

    return SchedulingContext(
        shifts=[
            SchedulingShift(
                id=item.id,
                date=item.date,
                start_time=item.start_time,
                end_time=item.end_time,
                role=_role_value(item.role),
            )
            for item in shifts
        ],
        staff=[
            SchedulingStaff(
                id=item.id,
                name=item.name,
                role=_role_value(item.role),
                constraints=item.constraints,
            )
            for item in staff
        ],
        rules=rules or load_default_rules(),
    )


def _role_value(role: Any) -> str:
    return getattr(role, "value", role)


def build_prompt(context: SchedulingContext) -> str:
    shift_payload = json.dumps(
        [
            {
                "id": shift.id,
                "date": shift.date.isoformat(),
                "time": f"{shift.start_time}-{shift.end_time}",
                "role": shift.role,
            }
            for shift in context.shifts
        ]
    )
    staff_payload = json.dumps(
        [
            {
                "id": member.id,
                "name": member.name,
                "role": member.role,
                "constraints": member.constraints,
            }
            for member in context.staff
        ]
    )
    rules = context.rules.rules
    rule_lines = "\n".join(
        f"    {index}. **{rule.title}**: {rule.description}"
        for index, rule in enumerate(rules.constraints, start=1)
    )

    return f"""
    You are an expert studio manager and scheduler. Your task is to assign Hosts to a list of pre-defined shift slots for the month.

    The shifts provided are individual slots. There are exactly 3 slots per day: Morning, Day, and Evening.

    **Inputs:**
    1. Shift Slots to Fill: {shift_payload}
    2. Hosts Available: {staff_payload}

    **Rules & Constraints:**
{rule_lines}

    **Output Goal:**
    Produce a valid schedule maximizing coverage and preference for splitting the day among {rules.preferred_daily_staff} different staff.
  """


def parse_schedule_response(text: str | None) -> ScheduleResult:
    if not text:
        logger.error("Generative model returned an empty response")
        raise ScheduleGenerationError("No response from the generative model")
    try:
        return ScheduleResult.model_validate_json(text)
    except ValidationError as exc:
        logger.error("Generative model returned an unusable payload: %s", exc)
        raise ScheduleGenerationError("Invalid schedule response from the generative model") from exc


class ScheduleGenerator(Protocol):
    model: str

    async def generate(self, context: SchedulingContext) -> ScheduleResult: ...


class GeminiScheduleGenerator:
    """
    Asks a Gemini model for assignments using a JSON response schema.

    Without an explicit client one is created from ``api_key`` on the first
    call, so a missing key only surfaces once there is something to schedule.
    """

    def __init__(
        self,
        client: genai.Client | None = None,
        *,
        model: str,
        thinking_budget: int,
        api_key: str | None = None,
    ) -> None:
        self.client = client
        self.model = model
        self.thinking_budget = thinking_budget
        self.api_key = api_key

    def _get_client(self) -> genai.Client:
        if self.client is None:
            if not self.api_key:
                logger.error("Generative AI API key is not configured")
                raise ScheduleGenerationError(
                    "Generative AI API key is not configured; set GEMINI_API_KEY"
                )
            self.client = genai.Client(api_key=self.api_key)
        return self.client

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
            thinking_config=types.ThinkingConfig(thinking_budget=self.thinking_budget),
        )

    async def generate(self, context: SchedulingContext) -> ScheduleResult:
        client = self._get_client()
        logger.info(
            "Requesting schedule from %s for %d shifts and %d staff",
            self.model,
            len(context.shifts),
            len(context.staff),
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(context),
                config=self._config(),
            )
        except genai_errors.APIError as exc:
            logger.error("GenAI error: %s", exc)
            raise ScheduleGenerationError(f"Generative model request failed: {exc}") from exc
        # Transport failures are not wrapped by the SDK.
        except httpx.HTTPError as exc:
            logger.error("GenAI transport error: %r", exc)
            raise ScheduleGenerationError(f"Generative model request failed: {exc!r}") from exc

        result = parse_schedule_response(response.text)
        logger.info(
            "Model returned %d assignments and %d unfilled shifts",
            len(result.assignments),
            len(result.unfilled_shift_ids),
        )
        return result


@lru_cache(maxsize=4)
def _cached_generator(api_key: str | None, model: str, thinking_budget: int) -> GeminiScheduleGenerator:
    return GeminiScheduleGenerator(api_key=api_key, model=model, thinking_budget=thinking_budget)


def create_schedule_generator(settings: Settings) -> ScheduleGenerator:
    """Return the generator for these settings, sharing one client per key and model."""
    return _cached_generator(
        settings.genai_api_key, settings.genai_model, settings.genai_thinking_budget
    )
