"""Condition alert handlers.

Handlers suitable for ``Hospital.condition_alert``, the single-slot
callback fired on Critical admissions. The slot holds exactly one
callable; use ``AlertManager.for_condition`` to pick the right one.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from hpms.core.entities import Condition
from hpms.model.patient import Patient

logger = logging.getLogger(__name__)

ConditionAlertHandler = Callable[[Patient], None]


@dataclass
class ConditionAlertNotice:
    """Alert raised for one patient."""

    level: str
    patient_id: int
    patient_name: str
    condition: str
    instruction: str
    issued_at: datetime = field(default_factory=datetime.now)

    @property
    def headline(self) -> str:
        return f"{self.level} PATIENT ALERT"


class AlertManager:
    """Issues and keeps condition alerts.

    Attributes:
        issued: Every notice issued, in order.
    """

    def __init__(self) -> None:
        self.issued: List[ConditionAlertNotice] = []

    def _issue(self, level: str, patient: Patient, instruction: str) -> ConditionAlertNotice:
        notice = ConditionAlertNotice(
            level=level,
            patient_id=patient.patient_id,
            patient_name=patient.name,
            condition=patient.condition_description(),
            instruction=instruction,
        )
        self.issued.append(notice)
        logger.warning(
            f"{notice.headline}: {patient.name} (ID: {patient.patient_id}) - "
            f"{notice.condition} {instruction}"
        )
        return notice

    def critical_patient_alert(self, patient: Patient) -> None:
        self._issue("CRITICAL", patient, "Immediate medical attention required!")

    def serious_patient_alert(self, patient: Patient) -> None:
        self._issue("SERIOUS", patient, "Close monitoring required!")

    def for_condition(self, condition: Condition) -> Optional[ConditionAlertHandler]:
        """Handler matching a condition level, or None below Serious."""
        if condition == Condition.CRITICAL:
            return self.critical_patient_alert
        if condition == Condition.SERIOUS:
            return self.serious_patient_alert
        return None
