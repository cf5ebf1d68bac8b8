"""
Adherence Schemas
Pydantic models for adherence statistics responses
"""

from typing import List
import datetime

from api.schemas.base import ApiModel
from models import MedicationAdherence


class AdherenceStatsResponse(ApiModel):
    """Trailing-window adherence"""
    total_doses: int
    taken_doses: int
    skipped_doses: int
    adherence_percentage: int


class DailyAdherenceResponse(ApiModel):
    """One bar of the weekly chart"""
    date: datetime.date
    label: str
    taken: int
    skipped: int


class MedicationAdherenceResponse(ApiModel):
    """Adherence for a single medication"""
    medication_id: str
    medication_name: str
    dosage: str
    total_doses: int
    taken_doses: int
    skipped_doses: int
    adherence_percentage: int

    @classmethod
    def from_domain(cls, row: MedicationAdherence) -> "MedicationAdherenceResponse":
        return cls(
            medication_id=row.medication_id,
            medication_name=row.medication_name,
            dosage=row.dosage,
            total_doses=row.stats.total_doses,
            taken_doses=row.stats.taken_doses,
            skipped_doses=row.stats.skipped_doses,
            adherence_percentage=row.stats.adherence_percentage,
        )


class AdherenceDashboard(ApiModel):
    """Stats card plus weekly chart"""
    stats: AdherenceStatsResponse
    daily: List[DailyAdherenceResponse]
