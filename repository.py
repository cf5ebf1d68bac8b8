"""
Storage boundary for DoseKeeper
Session state is kept in memory; the abstract Repository keeps the
services independent of where records live.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from models import DoseLog, Medication


logger = logging.getLogger(__name__)


class Repository(ABC):
    """Storage operations needed by the tracker"""

    @abstractmethod
    def add_medication(self, medication: Medication) -> None:
        ...

    @abstractmethod
    def get_medication(self, medication_id: str) -> Optional[Medication]:
        ...

    @abstractmethod
    def list_medications(self) -> Tuple[Medication, ...]:
        ...

    @abstractmethod
    def remove_medication(self, medication_id: str) -> bool:
        ...

    @abstractmethod
    def append_log(self, log: DoseLog) -> None:
        ...

    @abstractmethod
    def list_logs(self) -> Tuple[DoseLog, ...]:
        ...


class InMemoryRepository(Repository):
    """
    Repository backed by plain Python collections.
    Medications keep insertion order; logs are append-only.
    """

    def __init__(self):
        self._medications: Dict[str, Medication] = {}
        self._logs: List[DoseLog] = []

    def add_medication(self, medication: Medication) -> None:
        if medication.id in self._medications:
            raise KeyError(f"Medication {medication.id} already exists")
        self._medications[medication.id] = medication

    def get_medication(self, medication_id: str) -> Optional[Medication]:
        return self._medications.get(medication_id)

    def list_medications(self) -> Tuple[Medication, ...]:
        return tuple(self._medications.values())

    def remove_medication(self, medication_id: str) -> bool:
        # Logs for the medication are kept
        removed = self._medications.pop(medication_id, None)
        if removed is not None:
            logger.info(f"Removed medication {medication_id}")
        return removed is not None

    def append_log(self, log: DoseLog) -> None:
        self._logs.append(log)

    def list_logs(self) -> Tuple[DoseLog, ...]:
        return tuple(self._logs)
