"""
Tracker Service
Per-session application state: medications and the dose log
"""

import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from config import tracker_config
from errors import NotFoundError, ValidationError
from models import DoseLog, DoseStatus, Medication
from repository import InMemoryRepository, Repository
from schemas import MedicationInput
from services.schedule_service import local_now


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Either a validated MedicationInput or the ValidationError explaining why not"""
    value: Optional[MedicationInput] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_medication(data: Union[MedicationInput, Mapping[str, Any]]) -> ValidationResult:
    """Validate medication input without raising"""
    if isinstance(data, MedicationInput):
        return ValidationResult(value=data)
    try:
        return ValidationResult(value=MedicationInput.model_validate(data))
    except PydanticValidationError as e:
        return ValidationResult(error=ValidationError.from_pydantic(e, "Invalid medication"))


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class TrackerState:
    """
    Medications and dose logs for one session.

    Medications are immutable once added and logs are append-only, so the
    collections handed out are snapshots.
    """

    def __init__(
        self,
        repository: Optional[Repository] = None,
        clock: Callable[[], datetime] = local_now
    ):
        self.repository = repository or InMemoryRepository()
        self.clock = clock

    @property
    def medications(self) -> Tuple[Medication, ...]:
        return self.repository.list_medications()

    @property
    def dose_logs(self) -> Tuple[DoseLog, ...]:
        return self.repository.list_logs()

    def add_medication(self, data: Union[MedicationInput, Mapping[str, Any]]) -> Medication:
        """
        Validate and store a medication

        Raises:
            ValidationError: with field-level detail
        """
        result = validate_medication(data)
        if not result.ok:
            raise result.error

        med_input = result.value
        medication = Medication(
            id=_new_id("med"),
            name=med_input.name,
            dosage=med_input.dosage,
            form=med_input.form,
            schedule=med_input.schedule.to_rule(),
            instructions=med_input.instructions,
        )
        self.repository.add_medication(medication)
        logger.info(f"Added medication {medication.id} ({medication.name})")
        return medication

    def get_medication(self, medication_id: str) -> Medication:
        medication = self.repository.get_medication(medication_id)
        if medication is None:
            raise NotFoundError(f"Medication {medication_id} not found")
        return medication

    def remove_medication(self, medication_id: str) -> None:
        if not self.repository.remove_medication(medication_id):
            raise NotFoundError(f"Medication {medication_id} not found")

    def log_dose(
        self,
        medication_id: str,
        status: Union[DoseStatus, str],
        now: Optional[datetime] = None
    ) -> DoseLog:
        """
        Record a taken or skipped dose at the current instant

        Raises:
            NotFoundError: unknown medication
            ValidationError: status is not taken/skipped
        """
        self.get_medication(medication_id)

        try:
            status = DoseStatus(status)
        except ValueError:
            raise ValidationError(
                "Invalid dose status",
                [{"field": "status", "message": f"Must be 'taken' or 'skipped', got {status!r}"}],
            )

        # No separate due time is tracked yet, both instants are the log time
        now = now or self.clock()
        log = DoseLog(
            id=_new_id("log"),
            medication_id=medication_id,
            scheduled_time=now,
            action_time=now,
            status=status,
        )
        self.repository.append_log(log)
        logger.info(f"Logged dose for medication {medication_id}: {status.value}")
        return log

    def record_log(self, log: DoseLog) -> DoseLog:
        """Append an already built log (used for seeded history)"""
        self.get_medication(log.medication_id)
        self.repository.append_log(log)
        return log


class SessionStore:
    """
    Owns one TrackerState per session id. New states are passed to the
    optional initializer before first use.

    Sessions idle for longer than idle_ttl seconds are dropped, and once
    max_sessions is reached the least recently used one makes room.
    """

    def __init__(
        self,
        initializer: Optional[Callable[[TrackerState], None]] = None,
        max_sessions: Optional[int] = None,
        idle_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self._states: "OrderedDict[str, TrackerState]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}
        self.initializer = initializer
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self.clock = clock

    def get(self, session_id: Optional[str] = None) -> TrackerState:
        session_id = session_id or tracker_config.DEFAULT_SESSION_ID
        current_time = self.clock()
        self._expire(current_time)

        state = self._states.get(session_id)
        if state is None:
            state = TrackerState()
            if self.initializer:
                self.initializer(state)
            self._states[session_id] = state
            logger.info(f"Created session {session_id}")
            self._enforce_limit()
        else:
            self._states.move_to_end(session_id)

        self._last_seen[session_id] = current_time
        return state

    def drop(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        return self._states.pop(session_id, None) is not None

    def _expire(self, current_time: float) -> None:
        if self.idle_ttl is None:
            return
        # Oldest access first, so stop at the first live session
        for session_id in list(self._states):
            if current_time - self._last_seen[session_id] < self.idle_ttl:
                break
            self.drop(session_id)
            logger.info(f"Expired idle session {session_id}")

    def _enforce_limit(self) -> None:
        if self.max_sessions is None:
            return
        while len(self._states) > self.max_sessions:
            session_id, _ = self._states.popitem(last=False)
            self._last_seen.pop(session_id, None)
            logger.info(f"Evicted least recently used session {session_id}")

    def __len__(self) -> int:
        return len(self._states)
