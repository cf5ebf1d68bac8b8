"""
Schedule Service
Next-dose projection and schedule formatting
"""

import logging
import re
from typing import List, Optional
from datetime import datetime, date, time, timedelta, timezone
from zoneinfo import ZoneInfo

from config import settings, tracker_config
from models import Medication, ScheduleRule, ScheduleType


logger = logging.getLogger(__name__)

_TIME_RE = re.compile(tracker_config.TIME_OF_DAY_PATTERN)


def parse_time_of_day(val: str) -> time:
    """Parse a strict 24-hour 'HH:MM' string.

    Raises ValueError if the string is not in that form.
    """
    match = _TIME_RE.fullmatch(val) if isinstance(val, str) else None
    if not match:
        raise ValueError(f"Invalid time format (HH:MM): {val!r}")
    return time(int(match.group(1)), int(match.group(2)))


def local_now() -> datetime:
    """Current instant in the configured timezone (system local when unset)"""
    if settings.TIMEZONE:
        return datetime.now(ZoneInfo(settings.TIMEZONE))
    return datetime.now().astimezone()


def _uses_system_zone(reference: datetime) -> bool:
    # datetime.astimezone() hands out a fixed offset; the wall clock it
    # stands for follows the system zone's DST rules
    return (
        isinstance(reference.tzinfo, timezone)
        and reference.astimezone().utcoffset() == reference.utcoffset()
    )


def at_local_time(day: date, time_str: str, reference: datetime) -> datetime:
    """
    The instant time_str names on day, in reference's timezone.

    A bare system-local offset (as returned by local_now without TIMEZONE)
    is resolved per day, so DST changes keep the wall-clock time.
    """
    wall = datetime.combine(day, parse_time_of_day(time_str))
    if _uses_system_zone(reference):
        return wall.astimezone()
    return wall.replace(tzinfo=reference.tzinfo)


def to_local(instant: datetime, reference: datetime) -> datetime:
    """instant converted to reference's timezone (DST-aware for system local)"""
    if _uses_system_zone(reference):
        return instant.astimezone()
    return instant.astimezone(reference.tzinfo)


def next_dose(schedule: ScheduleRule, from_: datetime) -> datetime:
    """
    Next scheduled dose instant after from_.

    Each time of day is placed on from_'s calendar day in from_'s timezone
    and the earliest one strictly later than from_ wins. When every time has
    passed, the first listed time on the following day is returned. The
    weekly and interval rules are not consulted on rollover.
    """
    today = from_.date()
    upcoming = [
        candidate
        for candidate in (at_local_time(today, t, from_) for t in schedule.times)
        if candidate > from_
    ]
    if upcoming:
        return min(upcoming)

    return at_local_time(today + timedelta(days=1), schedule.times[0], from_)


def describe_schedule(schedule: ScheduleRule) -> str:
    """Human readable schedule, e.g. 'Daily at 08:00, 20:00'"""
    times = ", ".join(schedule.times)

    if schedule.type == ScheduleType.WEEKLY and schedule.days:
        labels = ", ".join(tracker_config.WEEKDAY_LABELS[d] for d in sorted(schedule.days))
        return f"Weekly on {labels} at {times}"

    if schedule.type == ScheduleType.INTERVAL and schedule.interval_days:
        if schedule.interval_days == 1:
            return f"Every day at {times}"
        return f"Every {schedule.interval_days} days at {times}"

    return f"Daily at {times}"


class ScheduleService:
    """
    Service for dose timing queries over medications
    """

    def get_next_dose(
        self,
        medication: Medication,
        now: Optional[datetime] = None
    ) -> datetime:
        """Next dose instant for a medication"""
        now = now or local_now()
        return next_dose(medication.schedule, now)

    def get_upcoming_doses(
        self,
        medications: List[Medication],
        now: Optional[datetime] = None
    ) -> List[dict]:
        """
        Next dose for each medication, soonest first

        Returns:
            List of {"medication_id", "medication_name", "next_dose"}
        """
        now = now or local_now()
        upcoming = [
            {
                "medication_id": med.id,
                "medication_name": med.name,
                "next_dose": next_dose(med.schedule, now),
            }
            for med in medications
        ]
        upcoming.sort(key=lambda x: x["next_dose"])
        return upcoming


# Singleton instance
schedule_service = ScheduleService()
