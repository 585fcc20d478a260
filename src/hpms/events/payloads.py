"""Event payloads raised by the hospital registry.

One payload is created per occurrence and handed to the observers of the
matching channel; the registry does not keep them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hpms.model.patient import Patient


class EventKind(Enum):
    """Notification channels exposed by the registry."""
    ADMISSION = "admission"
    BILLING = "billing"
    CRITICAL_ALERT = "critical_alert"


@dataclass(frozen=True)
class AdmissionOccurred:
    """A patient was stored and queued."""

    patient: "Patient"
    timestamp: datetime = field(default_factory=datetime.now)

    kind = EventKind.ADMISSION


@dataclass(frozen=True)
class BillGenerated:
    """A bill was computed and a strategy applied.

    Attributes:
        patient: Billed patient.
        base_bill: Polymorphic total before the strategy.
        final_bill: Amount payable after the strategy.
        strategy_name: Reporting name of the strategy.
    """

    patient: "Patient"
    base_bill: Decimal
    final_bill: Decimal
    strategy_name: str
    timestamp: datetime = field(default_factory=datetime.now)

    kind = EventKind.BILLING

    @property
    def discount(self) -> Decimal:
        """Amount waived by the strategy (base - final)."""
        return self.base_bill - self.final_bill


@dataclass(frozen=True)
class CriticalAlert:
    """A Serious or Critical condition patient was admitted."""

    patient: "Patient"
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    kind = EventKind.CRITICAL_ALERT
