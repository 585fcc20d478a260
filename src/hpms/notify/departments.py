"""Department observers.

Each department reacts to the registry channels it is subscribed to by
issuing a DepartmentNotice. Notices are logged and appended to a shared
NotificationLog so a presentation layer can render them.

Reference wiring (``subscribe_departments``):

    admission      -> Reception, Medical, Pharmacy
    billing        -> Reception, Accounts
    critical_alert -> Medical, ICU, NotificationService
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Optional

from hpms.core.money import format_currency
from hpms.events.payloads import (
    AdmissionOccurred,
    BillGenerated,
    CriticalAlert,
    EventKind,
)

if TYPE_CHECKING:
    from hpms.model.hospital import Hospital

logger = logging.getLogger(__name__)


@dataclass
class DepartmentNotice:
    """Acknowledgement issued by a department for one event."""

    department: str
    kind: EventKind
    patient_id: int
    message: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class NotificationLog:
    """Collects department notices in the order they were issued."""

    notices: List[DepartmentNotice] = field(default_factory=list)

    def record(self, notice: DepartmentNotice) -> DepartmentNotice:
        self.notices.append(notice)
        logger.info(f"[{notice.department}] {notice.message}")
        return notice

    def for_department(self, department: str) -> List[DepartmentNotice]:
        return [n for n in self.notices if n.department == department]

    def for_kind(self, kind: EventKind) -> List[DepartmentNotice]:
        return [n for n in self.notices if n.kind == kind]

    def counts_by_department(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for notice in self.notices:
            counts[notice.department] = counts.get(notice.department, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self.notices)

    def clear(self) -> None:
        self.notices.clear()


class Department:
    """Base class: holds the shared log and display currency."""

    name = "DEPARTMENT"

    def __init__(self, log: Optional[NotificationLog] = None, currency_symbol: str = "$"):
        self.log = log if log is not None else NotificationLog()
        self.currency_symbol = currency_symbol

    def _notify(self, kind: EventKind, patient_id: int, message: str) -> DepartmentNotice:
        return self.log.record(
            DepartmentNotice(
                department=self.name,
                kind=kind,
                patient_id=patient_id,
                message=message,
            )
        )

    def _money(self, amount: Decimal) -> str:
        return format_currency(amount, self.currency_symbol)


class ReceptionDepartment(Department):
    name = "RECEPTION"

    def on_patient_admitted(self, event: AdmissionOccurred) -> DepartmentNotice:
        p = event.patient
        return self._notify(
            EventKind.ADMISSION,
            p.patient_id,
            f"Patient {p.name} (ID: {p.patient_id}) admitted at "
            f"{event.timestamp:%H:%M:%S}. Preparing documentation. "
            f"Condition: {p.condition.name} | Priority: {p.priority.name}",
        )

    def on_bill_generated(self, event: BillGenerated) -> DepartmentNotice:
        return self._notify(
            EventKind.BILLING,
            event.patient.patient_id,
            f"Bill of {self._money(event.final_bill)} generated for "
            f"{event.patient.name}. Strategy: {event.strategy_name}",
        )


class MedicalDepartment(Department):
    name = "MEDICAL"

    def on_patient_admitted(self, event: AdmissionOccurred) -> DepartmentNotice:
        p = event.patient
        return self._notify(
            EventKind.ADMISSION,
            p.patient_id,
            f"New patient {p.name} assigned. Ailment: {p.ailment}. "
            f"Scheduling treatment. Condition: {p.condition_description()}",
        )

    def on_critical_patient(self, event: CriticalAlert) -> DepartmentNotice:
        return self._notify(
            EventKind.CRITICAL_ALERT,
            event.patient.patient_id,
            f"ALERT {event.message} Patient: {event.patient.name} | "
            f"Time: {event.timestamp:%H:%M:%S}",
        )


class PharmacyDepartment(Department):
    name = "PHARMACY"

    def on_patient_admitted(self, event: AdmissionOccurred) -> DepartmentNotice:
        p = event.patient
        return self._notify(
            EventKind.ADMISSION,
            p.patient_id,
            f"Preparing medications for {p.name}. Ailment: {p.ailment}",
        )


class AccountsDepartment(Department):
    """Records each payment alongside the discount granted."""

    name = "ACCOUNTS"

    def __init__(self, log: Optional[NotificationLog] = None, currency_symbol: str = "$"):
        super().__init__(log, currency_symbol)
        self.payments: List[BillGenerated] = []

    @property
    def total_received(self) -> Decimal:
        return sum((b.final_bill for b in self.payments), Decimal("0.00"))

    def on_bill_generated(self, event: BillGenerated) -> DepartmentNotice:
        self.payments.append(event)
        return self._notify(
            EventKind.BILLING,
            event.patient.patient_id,
            f"Recording payment of {self._money(event.final_bill)} for patient "
            f"ID: {event.patient.patient_id}. Discount applied: "
            f"{self._money(event.discount)} | Strategy: {event.strategy_name}",
        )


class ICUDepartment(Department):
    name = "ICU"

    def on_critical_patient(self, event: CriticalAlert) -> DepartmentNotice:
        p = event.patient
        return self._notify(
            EventKind.CRITICAL_ALERT,
            p.patient_id,
            f"Preparing ICU bed for patient: {p.name}. Condition: "
            f"{p.condition.name} | Alert Time: {event.timestamp:%H:%M:%S}",
        )


@dataclass
class OutboundMessage:
    """Simulated SMS/Email sent to a patient's emergency contacts."""

    patient_id: int
    recipients: str
    body: str
    channels: tuple = ("SMS", "Email")
    sent_at: datetime = field(default_factory=datetime.now)


class NotificationService(Department):
    """Sends (simulated) outward alerts for critical-alert events."""

    name = "NOTIFICATION"

    def __init__(self, log: Optional[NotificationLog] = None, currency_symbol: str = "$"):
        super().__init__(log, currency_symbol)
        self.outbox: List[OutboundMessage] = []

    def on_critical_patient(self, event: CriticalAlert) -> DepartmentNotice:
        p = event.patient
        self.outbox.append(
            OutboundMessage(
                patient_id=p.patient_id,
                recipients="emergency contacts",
                body=f"Critical patient: {p.name} | Message: {event.message}",
            )
        )
        return self._notify(
            EventKind.CRITICAL_ALERT,
            p.patient_id,
            f"Sending SMS/Email alert to emergency contacts. "
            f"Critical patient: {p.name} | Message: {event.message}",
        )


@dataclass
class Departments:
    """The reference set of subscribed departments sharing one log."""

    log: NotificationLog
    reception: ReceptionDepartment
    medical: MedicalDepartment
    pharmacy: PharmacyDepartment
    accounts: AccountsDepartment
    icu: ICUDepartment
    notification: NotificationService


def subscribe_departments(
    hospital: "Hospital",
    log: Optional[NotificationLog] = None,
) -> Departments:
    """Create the reference departments and subscribe them to a hospital.

    Args:
        hospital: Registry whose channels the departments join.
        log: Shared notice log. A new one is created if None.

    Returns:
        Departments holding every observer and the shared log.
    """
    log = log if log is not None else NotificationLog()
    symbol = hospital.config.get_currency_symbol()

    departments = Departments(
        log=log,
        reception=ReceptionDepartment(log, symbol),
        medical=MedicalDepartment(log, symbol),
        pharmacy=PharmacyDepartment(log, symbol),
        accounts=AccountsDepartment(log, symbol),
        icu=ICUDepartment(log, symbol),
        notification=NotificationService(log, symbol),
    )

    hospital.admissions.subscribe(departments.reception.on_patient_admitted)
    hospital.admissions.subscribe(departments.medical.on_patient_admitted)
    hospital.admissions.subscribe(departments.pharmacy.on_patient_admitted)

    hospital.billing.subscribe(departments.reception.on_bill_generated)
    hospital.billing.subscribe(departments.accounts.on_bill_generated)

    hospital.critical_alerts.subscribe(departments.medical.on_critical_patient)
    hospital.critical_alerts.subscribe(departments.icu.on_critical_patient)
    hospital.critical_alerts.subscribe(departments.notification.on_critical_patient)

    return departments
