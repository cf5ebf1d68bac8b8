"""
Adherence Service
Adherence statistics and per-day breakdowns derived from dose logs
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence
from datetime import datetime, date, timedelta
from collections import defaultdict

from config import settings, tracker_config
from models import (
    AdherenceStats,
    DailyAdherence,
    DoseLog,
    DoseStatus,
    Medication,
    MedicationAdherence,
)
from services.schedule_service import to_local


logger = logging.getLogger(__name__)


def _percentage(taken: int, total: int) -> int:
    """round(taken / total * 100) with halves rounded up; 100 when total is 0"""
    if total == 0:
        return 100
    return (taken * 200 + total) // (2 * total)


def _local_date(instant: datetime, now: datetime) -> date:
    if instant.tzinfo is not None and now.tzinfo is not None:
        return to_local(instant, now).date()
    return instant.date()


def trailing_window_start(now: datetime, days: Optional[int] = None) -> datetime:
    """Start of the trailing window ending at now"""
    days = settings.ADHERENCE_WINDOW_DAYS if days is None else days
    return now - timedelta(days=days)


def filter_logs_for_medication(
    logs: Iterable[DoseLog],
    medication_id: Optional[str]
) -> List[DoseLog]:
    if medication_id is None:
        return list(logs)
    return [log for log in logs if log.medication_id == medication_id]


def compute_stats(
    logs: Iterable[DoseLog],
    window_start: datetime,
    now: datetime
) -> AdherenceStats:
    """
    Adherence over logs whose action time falls in (window_start, now]

    Args:
        logs: Dose logs, any order
        window_start: Exclusive lower bound
        now: Inclusive upper bound

    Returns:
        AdherenceStats; an empty window scores 100
    """
    taken = 0
    skipped = 0
    for log in logs:
        if not (window_start < log.action_time <= now):
            continue
        if log.status == DoseStatus.TAKEN:
            taken += 1
        else:
            skipped += 1

    total = taken + skipped
    return AdherenceStats(
        total_doses=total,
        taken_doses=taken,
        skipped_doses=skipped,
        adherence_percentage=_percentage(taken, total),
    )


def compute_daily_series(
    logs: Iterable[DoseLog],
    now: datetime,
    days: int
) -> List[DailyAdherence]:
    """
    Taken/skipped counts for the most recent `days` calendar days, oldest
    first and ending today. Days without logs are zero-filled.
    """
    if days <= 0:
        return []

    today = now.date()
    first_day = today - timedelta(days=days - 1)

    counts: Dict[date, Dict[str, int]] = defaultdict(lambda: {"taken": 0, "skipped": 0})
    for log in logs:
        day = _local_date(log.action_time, now)
        if first_day <= day <= today:
            counts[day][log.status.value] += 1

    series = []
    for offset in range(days):
        day = first_day + timedelta(days=offset)
        bucket = counts.get(day, {"taken": 0, "skipped": 0})
        series.append(DailyAdherence(
            date=day,
            # isoweekday: Monday=1..Sunday=7, labels are indexed from Sunday
            label=tracker_config.WEEKDAY_LABELS[day.isoweekday() % 7],
            taken=bucket["taken"],
            skipped=bucket["skipped"],
        ))
    return series


def build_adherence_summary(medication: Medication, logs: Iterable[DoseLog]) -> str:
    """Adherence text handed to the schedule suggestion model"""
    med_logs = filter_logs_for_medication(logs, medication.id)
    taken = sum(1 for log in med_logs if log.status == DoseStatus.TAKEN)
    skipped = sum(1 for log in med_logs if log.status == DoseStatus.SKIPPED)
    return (
        f"User has taken {taken} doses and skipped {skipped} doses "
        f"for {medication.name}."
    )


class AdherenceService:
    """
    Service for adherence queries over a session's medications and logs
    """

    def get_stats(
        self,
        logs: Sequence[DoseLog],
        now: datetime,
        days: Optional[int] = None,
        medication_id: Optional[str] = None
    ) -> AdherenceStats:
        """Trailing-window stats, optionally for a single medication"""
        selected = filter_logs_for_medication(logs, medication_id)
        return compute_stats(selected, trailing_window_start(now, days), now)

    def get_daily_series(
        self,
        logs: Sequence[DoseLog],
        now: datetime,
        days: Optional[int] = None,
        medication_id: Optional[str] = None
    ) -> List[DailyAdherence]:
        """Per-day breakdown, defaulting to the configured chart length"""
        days = settings.DAILY_SERIES_DAYS if days is None else days
        selected = filter_logs_for_medication(logs, medication_id)
        return compute_daily_series(selected, now, days)

    def get_adherence_by_medication(
        self,
        medications: Sequence[Medication],
        logs: Sequence[DoseLog],
        now: datetime,
        days: Optional[int] = None
    ) -> List[MedicationAdherence]:
        """Adherence breakdown by medication"""
        window_start = trailing_window_start(now, days)

        results = []
        for med in medications:
            stats = compute_stats(
                filter_logs_for_medication(logs, med.id), window_start, now
            )
            results.append(MedicationAdherence(
                medication_id=med.id,
                medication_name=med.name,
                dosage=med.dosage,
                stats=stats,
            ))

        # Sort by adherence rate (lowest first to highlight problems)
        results.sort(key=lambda x: x.stats.adherence_percentage)
        return results


# Singleton instance
adherence_service = AdherenceService()
