"""Admission registry.

The Hospital stores admitted patients, classifies them into per-priority
FIFO queues, and is the single publishing point for admission, billing and
critical-alert events.

Example usage:
    hospital = Hospital()
    subscribe_departments(hospital)
    hospital.condition_alert = AlertManager().critical_patient_alert

    hospital.admit(patient)
    hospital.generate_bill(patient, select_strategy("5"))
    hospital.queue_status()   # {Priority.EMERGENCY: 0, Priority.URGENT: 1, ...}

Registry state (patient list and queues) is always updated before any
observer runs, so an observer fault can never leave an admission half
applied. The registry is not thread-safe; share one instance across
threads only behind a single lock.
"""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple, Union

from hpms.billing.strategies import BillingStrategy, recommend_strategy
from hpms.core.config import HospitalConfig
from hpms.core.entities import Condition, Priority, QUEUE_ORDER
from hpms.core.money import MoneyLike, quantize_money
from hpms.events.channel import (
    DispatchFailure,
    EventChannel,
    ObserverError,
    observer_name,
)
from hpms.events.payloads import AdmissionOccurred, BillGenerated, CriticalAlert
from hpms.model.patient import Patient, PatientIdSequence

logger = logging.getLogger(__name__)

CRITICAL_ALERT_MESSAGE = "CRITICAL condition patient admitted - immediate care required!"
SERIOUS_ALERT_MESSAGE = "SERIOUS condition patient admitted - close monitoring required!"

ConditionAlertCallback = Callable[[Patient], None]
StrategyFunc = Callable[[MoneyLike], MoneyLike]


class Hospital:
    """Patient registry and event publisher.

    Attributes:
        config: Registry configuration (name, fee schedule, fault policy).
        admissions: Channel for AdmissionOccurred events.
        billing: Channel for BillGenerated events.
        critical_alerts: Channel for CriticalAlert events (Serious/Critical).
        condition_alert: Single-slot callback fired on Critical admissions
            only, after the critical-alert channel. Assigning replaces any
            previous callback.
        observer_failures: Every observer/callback fault contained so far.
        patient_ids: Id source starting at config.first_patient_id, for
            callers that let the registry number patients.
    """

    def __init__(self, name: Optional[str] = None, config: Optional[HospitalConfig] = None):
        self.config = config or HospitalConfig()
        self.name = name or self.config.name

        self._patients: List[Patient] = []
        self._queues: Dict[Priority, Deque[Patient]] = {p: deque() for p in QUEUE_ORDER}

        # Channels never raise mid-operation; the fault policy is applied
        # once the whole operation has dispatched (see _finish).
        self.admissions: EventChannel[AdmissionOccurred] = EventChannel("admission")
        self.billing: EventChannel[BillGenerated] = EventChannel("billing")
        self.critical_alerts: EventChannel[CriticalAlert] = EventChannel("critical_alert")

        self.condition_alert: Optional[ConditionAlertCallback] = None
        self.observer_failures: List[DispatchFailure] = []
        self.patient_ids = PatientIdSequence.from_config(self.config)

    @classmethod
    def for_site(cls, site: str = "city_general") -> "Hospital":
        """Registry configured from a named site file (see HospitalConfig.load_default)."""
        return cls(config=HospitalConfig.load_default(site))

    # ---------------- Admission ----------------

    def admit(self, patient: Patient) -> AdmissionOccurred:
        """Store a patient, queue it by priority and raise events.

        Critical patients additionally raise a CriticalAlert and fire the
        condition_alert callback; Serious patients raise a CriticalAlert
        only.

        Returns:
            The AdmissionOccurred event that was published.

        Raises:
            ObserverError: Only when config.fail_open is False and an
                observer failed; the admission itself is already complete.
        """
        patient._mark_admitted()
        self._patients.append(patient)
        self._queues[patient.priority].append(patient)

        logger.info(
            f"Patient {patient.name} (ID: {patient.patient_id}) admitted to "
            f"{self.name} - {patient.priority.name} queue"
        )

        failures: List[DispatchFailure] = []
        event = AdmissionOccurred(patient)
        failures += self.admissions.publish(event).failures

        if patient.condition == Condition.CRITICAL:
            alert = CriticalAlert(patient, CRITICAL_ALERT_MESSAGE)
            failures += self.critical_alerts.publish(alert).failures
            failures += self._fire_condition_alert(patient)
        elif patient.condition == Condition.SERIOUS:
            alert = CriticalAlert(patient, SERIOUS_ALERT_MESSAGE)
            failures += self.critical_alerts.publish(alert).failures

        self._finish("admit", failures)
        return event

    def _fire_condition_alert(self, patient: Patient) -> List[DispatchFailure]:
        callback = self.condition_alert
        if callback is None:
            return []
        try:
            callback(patient)
        except Exception as e:
            name = observer_name(callback)
            logger.error(f"Condition alert callback {name} failed: {e}")
            return [DispatchFailure(channel="condition_alert", observer=name, error=e)]
        return []

    def reprioritize(self, patient: Patient, priority: Priority) -> None:
        """Move an admitted patient to another priority queue.

        The patient goes to the back of the new queue. No events are raised.

        Raises:
            ValueError: If the patient is not queued in this registry.
        """
        priority = Priority(priority)
        old_queue = self._queues[patient.priority]
        if patient not in old_queue:
            raise ValueError(
                f"Patient {patient.patient_id} is not queued in {self.name}"
            )
        if priority == patient.priority:
            return

        old_queue.remove(patient)
        patient._move_priority(priority)
        self._queues[priority].append(patient)
        logger.info(
            f"Patient {patient.name} (ID: {patient.patient_id}) moved to "
            f"{priority.name} queue"
        )

    # ---------------- Billing ----------------

    def recommend_strategy(self, patient: Patient) -> Optional[BillingStrategy]:
        """Advisory strategy for a patient using config.senior_citizen_age."""
        return recommend_strategy(patient.age, senior_age=self.config.senior_citizen_age)

    def generate_bill(
        self,
        patient: Patient,
        strategy: Union[BillingStrategy, StrategyFunc],
        strategy_name: Optional[str] = None,
    ) -> BillGenerated:
        """Compute a patient's bill, apply a strategy and raise a billing event.

        The patient record is not modified.

        Args:
            patient: Patient to bill.
            strategy: A BillingStrategy member or any callable mapping the
                base bill to the final bill.
            strategy_name: Reporting name. Defaults to the member's display
                name, or "Custom Billing" for plain callables.

        Returns:
            The BillGenerated event that was published.
        """
        if strategy_name is None:
            if isinstance(strategy, BillingStrategy):
                strategy_name = strategy.display_name
            else:
                strategy_name = "Custom Billing"

        base_bill = patient.total_bill(self.config.fees)
        final_bill = quantize_money(strategy(base_bill))

        event = BillGenerated(
            patient=patient,
            base_bill=base_bill,
            final_bill=final_bill,
            strategy_name=strategy_name,
        )
        logger.info(
            f"Bill for {patient.name} (ID: {patient.patient_id}): base {base_bill}, "
            f"final {final_bill} via {strategy_name}"
        )

        failures = self.billing.publish(event).failures
        self._finish("generate_bill", failures)
        return event

    def _finish(self, operation: str, failures: List[DispatchFailure]) -> None:
        if not failures:
            return
        self.observer_failures.extend(failures)
        if not self.config.fail_open:
            raise ObserverError(
                f"{len(failures)} observer(s) failed during {operation}: "
                f"{', '.join(f.observer for f in failures)}",
                failures,
            )

    # ---------------- Queries ----------------

    def queue_status(self) -> Dict[Priority, int]:
        """Patients per priority queue, most urgent first."""
        return {priority: len(self._queues[priority]) for priority in QUEUE_ORDER}

    def queue(self, priority: Priority) -> Tuple[Patient, ...]:
        """Snapshot of one queue in arrival (FIFO) order."""
        return tuple(self._queues[Priority(priority)])

    @property
    def patients(self) -> Tuple[Patient, ...]:
        """Snapshot of all admitted patients in admission order."""
        return tuple(self._patients)

    @property
    def total_admitted(self) -> int:
        return len(self._patients)

    def find_patient(self, patient_id: int) -> Optional[Patient]:
        """Look up an admitted patient by id."""
        for patient in self._patients:
            if patient.patient_id == patient_id:
                return patient
        return None

    def __len__(self) -> int:
        return len(self._patients)

    def __repr__(self) -> str:
        return f"Hospital(name={self.name!r}, admitted={len(self._patients)})"
