"""
Medication Schemas
Pydantic models for medication and dose log API requests and responses
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field

from api.schemas.base import ApiModel
from models import DoseStatus, Medication, MedicationForm, ScheduleType


# ==================== REQUEST SCHEMAS ====================

class DoseLogCreate(ApiModel):
    """Schema for logging a dose"""
    status: str = Field(..., description="'taken' or 'skipped'")


# ==================== RESPONSE SCHEMAS ====================

class ScheduleRuleResponse(ApiModel):
    type: ScheduleType
    times: List[str]
    days: Optional[List[int]] = None
    interval_days: Optional[int] = None


class MedicationResponse(ApiModel):
    """Schema for medication response"""
    id: str
    name: str
    dosage: str
    form: MedicationForm
    schedule: ScheduleRuleResponse
    instructions: Optional[str] = None
    next_dose: Optional[datetime] = None

    @classmethod
    def from_domain(
        cls,
        medication: Medication,
        next_dose: Optional[datetime] = None
    ) -> "MedicationResponse":
        response = cls.model_validate(medication)
        response.next_dose = next_dose
        return response


class DoseLogResponse(ApiModel):
    """Schema for dose log response"""
    id: str
    medication_id: str
    scheduled_time: datetime
    action_time: datetime
    status: DoseStatus
