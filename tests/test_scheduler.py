import json
import logging
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors

from studio_scheduler.core.config import Settings
from studio_scheduler.core.exceptions import ScheduleGenerationError, ScheduleRequestError
from studio_scheduler.services.scheduler import (
    RESPONSE_SCHEMA,
    GeminiScheduleGenerator,
    build_context,
    build_prompt,
    create_schedule_generator,
    parse_schedule_response,
)

from .factories import build_shift_slot


def _staff(**overrides) -> SimpleNamespace:
    data = {"id": "staff-1", "name": "Sarah", "role": "host", "constraints": "No weekends."}
    data.update(overrides)
    return SimpleNamespace(**data)


class _FakeModels:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def _fake_client(models: _FakeModels) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def test_build_context_rejects_missing_inputs() -> None:
    with pytest.raises(ScheduleRequestError, match="Add some shifts first!"):
        build_context([], [_staff()])
    with pytest.raises(ScheduleRequestError, match="Add some staff members first!"):
        build_context([build_shift_slot()], [])
    with pytest.raises(ScheduleRequestError, match="arrays are required"):
        build_context(None, [_staff()])  # type: ignore[arg-type]


def test_prompt_embeds_slots_hosts_and_rules() -> None:
    context = build_context(
        [build_shift_slot(), build_shift_slot(id="shift-2025-12-01-1-fghij", start_time="08:30", end_time="13:30")],
        [_staff(), _staff(id="staff-2", name="Tom", constraints="Only Tuesday mornings")],
    )

    prompt = build_prompt(context)

    assert '"time": "06:30-08:30"' in prompt
    assert '"date": "2025-12-01"' in prompt
    assert '"id": "shift-2025-12-01-1-fghij"' in prompt
    assert '"constraints": "Only Tuesday mornings"' in prompt
    assert "1. **No Overlaps**" in prompt
    assert "6. **Unfilled Shifts**" in prompt
    assert "splitting the day among 3 different staff" in prompt
    # avatars and assignments are not sent to the model
    assert "avatar" not in prompt


def test_response_schema_requires_top_level_keys() -> None:
    assert RESPONSE_SCHEMA["required"] == ["assignments", "unfilledShiftIds", "notes"]
    item = RESPONSE_SCHEMA["properties"]["assignments"]["items"]
    assert item["required"] == ["shiftId", "staffId"]
    assert "reasoning" in item["properties"]


def test_parse_schedule_response() -> None:
    payload = {
        "assignments": [{"shiftId": "s1", "staffId": "a"}, {"shiftId": "s2", "staffId": "b", "reasoning": "free"}],
        "unfilledShiftIds": ["s3"],
        "notes": "Tight week.",
    }

    result = parse_schedule_response(json.dumps(payload))

    assert result.assignments[0].shift_id == "s1"
    assert result.assignments[0].reasoning is None
    assert result.assignments[1].reasoning == "free"
    assert result.unfilled_shift_ids == ["s3"]
    assert result.notes == "Tight week."


@pytest.mark.parametrize("text", [None, "", "not json", json.dumps({"assignments": []})])
def test_parse_schedule_response_rejects_unusable_payloads(text: str | None) -> None:
    with pytest.raises(ScheduleGenerationError):
        parse_schedule_response(text)


@pytest.mark.anyio("asyncio")
async def test_gemini_generator_sends_prompt_with_json_schema() -> None:
    models = _FakeModels(text=json.dumps({"assignments": [], "unfilledShiftIds": [], "notes": "ok"}))
    generator = GeminiScheduleGenerator(
        _fake_client(models), model="gemini-2.5-flash", thinking_budget=2048  # type: ignore[arg-type]
    )
    context = build_context([build_shift_slot()], [_staff()])

    result = await generator.generate(context)

    assert result.notes == "ok"
    (call,) = models.calls
    assert call["model"] == "gemini-2.5-flash"
    assert "Shift Slots to Fill" in call["contents"]
    config = call["config"]
    assert config.response_mime_type == "application/json"
    assert config.thinking_config.thinking_budget == 2048


@pytest.mark.anyio("asyncio")
async def test_gemini_generator_wraps_provider_errors() -> None:
    error = genai_errors.APIError(503, {"error": {"message": "overloaded", "status": "UNAVAILABLE"}})
    generator = GeminiScheduleGenerator(
        _fake_client(_FakeModels(error=error)), model="gemini-2.5-flash", thinking_budget=0  # type: ignore[arg-type]
    )

    with pytest.raises(ScheduleGenerationError, match="request failed"):
        await generator.generate(build_context([build_shift_slot()], [_staff()]))


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError("connection refused"), httpx.ReadTimeout("timed out")],
)
async def test_gemini_generator_wraps_transport_errors(
    error: httpx.HTTPError, caplog: pytest.LogCaptureFixture
) -> None:
    generator = GeminiScheduleGenerator(
        _fake_client(_FakeModels(error=error)), model="gemini-2.5-flash", thinking_budget=0  # type: ignore[arg-type]
    )

    with caplog.at_level(logging.ERROR, logger="studio_scheduler"):
        with pytest.raises(ScheduleGenerationError, match="request failed") as excinfo:
            await generator.generate(build_context([build_shift_slot()], [_staff()]))

    assert excinfo.value.__cause__ is error
    assert "GenAI transport error" in caplog.text


@pytest.mark.anyio("asyncio")
async def test_gemini_generator_rejects_empty_response(caplog: pytest.LogCaptureFixture) -> None:
    generator = GeminiScheduleGenerator(
        _fake_client(_FakeModels(text=None)), model="gemini-2.5-flash", thinking_budget=0  # type: ignore[arg-type]
    )

    with caplog.at_level(logging.ERROR, logger="studio_scheduler"):
        with pytest.raises(ScheduleGenerationError, match="No response"):
            await generator.generate(build_context([build_shift_slot()], [_staff()]))

    assert "empty response" in caplog.text


@pytest.mark.anyio("asyncio")
async def test_missing_api_key_fails_only_when_generating() -> None:
    generator = create_schedule_generator(Settings(genai_api_key=None))

    with pytest.raises(ScheduleGenerationError, match="API key"):
        await generator.generate(build_context([build_shift_slot()], [_staff()]))


def test_create_schedule_generator_is_shared_per_settings() -> None:
    settings = Settings(genai_api_key="test-key", genai_model="gemini-test")

    generator = create_schedule_generator(settings)

    assert generator.model == "gemini-test"
    assert create_schedule_generator(settings) is generator
    assert create_schedule_generator(Settings(genai_api_key="other-key")) is not generator
