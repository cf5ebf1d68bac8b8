"""
Input Schemas
Typed input structs for medications and schedule suggestions.
Field names accept both snake_case and the camelCase used by the web client.
"""

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from config import tracker_config
from models import MedicationForm, ScheduleRule, ScheduleType


_TIME_RE = re.compile(tracker_config.TIME_OF_DAY_PATTERN)


class InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ScheduleRuleInput(InputModel):
    """Recurrence rule as entered by the user"""
    type: ScheduleType = ScheduleType.DAILY
    times: List[str] = Field(..., min_length=1)
    days: Optional[List[int]] = None
    interval_days: Optional[int] = Field(None, ge=1)

    @field_validator("times")
    @classmethod
    def check_times(cls, v: List[str]) -> List[str]:
        for t in v:
            if not _TIME_RE.fullmatch(t):
                raise ValueError(f"Invalid time format (HH:MM): {t!r}")
        # Keep entry order, drop repeats
        return list(dict.fromkeys(v))

    @field_validator("days")
    @classmethod
    def check_days(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        if v is None:
            return v
        for d in v:
            if not 0 <= d <= 6:
                raise ValueError(f"Weekday index must be 0 (Sunday) to 6 (Saturday), got {d}")
        return sorted(set(v))

    @model_validator(mode="after")
    def check_rule_fields(self) -> "ScheduleRuleInput":
        if self.type == ScheduleType.WEEKLY:
            if not self.days:
                raise ValueError("Weekly schedules need at least one day")
        elif self.days is not None:
            raise ValueError("days is only allowed for weekly schedules")

        if self.type == ScheduleType.INTERVAL:
            if self.interval_days is None:
                raise ValueError("Interval schedules need intervalDays")
        elif self.interval_days is not None:
            raise ValueError("intervalDays is only allowed for interval schedules")
        return self

    def to_rule(self) -> ScheduleRule:
        return ScheduleRule(
            type=self.type,
            times=tuple(self.times),
            days=tuple(self.days) if self.days is not None else None,
            interval_days=self.interval_days,
        )


class MedicationInput(InputModel):
    """Data needed to add a medication"""
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=100)
    form: MedicationForm = MedicationForm.PILL
    schedule: ScheduleRuleInput
    instructions: Optional[str] = None

    @field_validator("instructions")
    @classmethod
    def blank_instructions_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class SuggestionRequest(InputModel):
    """Request sent to the schedule suggestion model"""
    medication_name: str = Field(..., min_length=1)
    current_schedule: str = Field(..., min_length=1)
    adherence_data: str = Field(..., min_length=1)
    user_daily_routine: str = Field(..., min_length=1)


class SuggestionResponse(InputModel):
    """The two fields the suggestion model must return"""
    suggested_schedule: str = Field(..., min_length=1)
    explanation: str = Field(..., min_length=1)
