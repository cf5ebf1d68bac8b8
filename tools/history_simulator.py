"""
History Simulator
Synthetic dose history for demos and tests
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from models import DoseLog, DoseStatus, Medication
from services.schedule_service import at_local_time


logger = logging.getLogger(__name__)


# Starter medications shown in a fresh demo session
DEMO_MEDICATIONS: List[Dict[str, Any]] = [
    {
        "name": "Lisinopril",
        "dosage": "10mg",
        "form": "pill",
        "schedule": {"type": "daily", "times": ["08:00"]},
        "instructions": "Take with a full glass of water.",
    },
    {
        "name": "Metformin",
        "dosage": "500mg",
        "form": "pill",
        "schedule": {"type": "daily", "times": ["09:00", "21:00"]},
    },
    {
        "name": "Amoxicillin",
        "dosage": "250mg",
        "form": "liquid",
        "schedule": {"type": "interval", "interval_days": 1, "times": ["07:00", "15:00", "23:00"]},
        "instructions": "Finish the entire course. Shake well before use.",
    },
]


def simulate_history(
    medications: Sequence[Medication],
    now: datetime,
    days: int = 30,
    adherence_rate: float = 0.85,
    rng: Optional[random.Random] = None
) -> List[DoseLog]:
    """
    One log per medication time for each of the last `days` days

    Today counts as the first day; doses later than now are left out. Each
    dose is taken with probability adherence_rate, otherwise skipped.
    Pass a seeded random.Random for reproducible output.
    """
    if not 0.0 <= adherence_rate <= 1.0:
        raise ValueError(f"adherence_rate must be between 0 and 1, got {adherence_rate}")

    rng = rng or random.Random()
    logs = []

    for day_index in range(days):
        day = (now - timedelta(days=day_index)).date()
        for med in medications:
            for time_str in med.schedule.times:
                dose_time = at_local_time(day, time_str, now)
                if dose_time > now:
                    continue
                status = DoseStatus.TAKEN if rng.random() < adherence_rate else DoseStatus.SKIPPED
                logs.append(DoseLog(
                    id=f"log-{med.id}-{day.isoformat()}-{time_str.replace(':', '')}",
                    medication_id=med.id,
                    scheduled_time=dose_time,
                    action_time=dose_time,
                    status=status,
                ))

    return logs


def seed_demo_state(
    state,
    now: Optional[datetime] = None,
    days: int = 30,
    adherence_rate: float = 0.85,
    rng: Optional[random.Random] = None
) -> List[Medication]:
    """Add the demo medications and their simulated history to a TrackerState"""
    now = now or state.clock()
    medications = [state.add_medication(data) for data in DEMO_MEDICATIONS]

    logs = simulate_history(medications, now, days=days, adherence_rate=adherence_rate, rng=rng)
    for log in logs:
        state.record_log(log)

    logger.info(f"Seeded {len(medications)} medications and {len(logs)} dose logs")
    return medications
