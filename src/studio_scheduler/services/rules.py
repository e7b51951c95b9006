"""Scheduling rules handed to the generative model, and their loader."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

from pydantic import BaseModel, Field, field_validator


class ScheduleRule(BaseModel):
    code: str
    title: str
    description: str


class SchedulingRules(BaseModel):
    preferred_daily_staff: int = Field(ge=1)
    minimum_shifts_per_week: int = Field(ge=0)
    constraints: list[ScheduleRule] = Field(default_factory=list)

    @field_validator("constraints")
    @classmethod
    def unique_codes(cls, value: list[ScheduleRule]) -> list[ScheduleRule]:
        codes = [rule.code for rule in value]
        if len(codes) != len(set(codes)):
            raise ValueError("rule codes must be unique")
        return value


@dataclass(frozen=True)
class RuleSet:
    """Named, versioned wrapper around the typed rules."""

    name: str
    version: str
    rules: SchedulingRules


def _load_rules_from_json() -> RuleSet:
    with resources.files("studio_scheduler.services.data").joinpath("default_rules.json").open(
        "r", encoding="utf-8"
    ) as handle:
        payload = json.load(handle)
    return RuleSet(
        name=payload["name"],
        version=payload["version"],
        rules=SchedulingRules.model_validate(payload["rules"]),
    )


@lru_cache(maxsize=1)
def load_default_rules() -> RuleSet:
    """Return the default rule set bundled with the application."""

    return _load_rules_from_json()
