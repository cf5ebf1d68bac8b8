"""
Domain Models
Plain data records for medications, dose logs and derived adherence figures
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum as PyEnum
from typing import Optional, Tuple


# ==================== ENUMS ====================

class MedicationForm(str, PyEnum):
    """Physical form of a medication"""
    PILL = "pill"
    LIQUID = "liquid"
    INJECTION = "injection"
    OTHER = "other"


class ScheduleType(str, PyEnum):
    """Recurrence rule kinds"""
    DAILY = "daily"
    WEEKLY = "weekly"
    INTERVAL = "interval"


class DoseStatus(str, PyEnum):
    """Outcome recorded for a dose"""
    TAKEN = "taken"
    SKIPPED = "skipped"


# ==================== RECORDS ====================

@dataclass(frozen=True)
class ScheduleRule:
    """
    When a medication's doses occur.

    times are "HH:MM" strings in the order the user entered them; days
    (0=Sunday..6=Saturday) is only set for weekly rules and interval_days
    only for interval rules.
    """
    type: ScheduleType
    times: Tuple[str, ...]
    days: Optional[Tuple[int, ...]] = None
    interval_days: Optional[int] = None


@dataclass(frozen=True)
class Medication:
    """A medication the user tracks. Edits replace the record."""
    id: str
    name: str
    dosage: str
    form: MedicationForm
    schedule: ScheduleRule
    instructions: Optional[str] = None


@dataclass(frozen=True)
class DoseLog:
    """A single taken/skipped event, append-only"""
    id: str
    medication_id: str
    scheduled_time: datetime
    action_time: datetime
    status: DoseStatus


# ==================== DERIVED ====================

@dataclass(frozen=True)
class AdherenceStats:
    """Aggregate adherence over a trailing window"""
    total_doses: int = 0
    taken_doses: int = 0
    skipped_doses: int = 0
    adherence_percentage: int = 100


@dataclass(frozen=True)
class DailyAdherence:
    """Taken/skipped counts for one calendar day"""
    date: date
    label: str
    taken: int = 0
    skipped: int = 0


@dataclass
class MedicationAdherence:
    """Per-medication adherence row"""
    medication_id: str
    medication_name: str
    dosage: str
    stats: AdherenceStats = field(default_factory=AdherenceStats)
