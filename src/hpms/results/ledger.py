"""Billing ledger.

Records BillGenerated events and summarises them by strategy and by
patient type. Summaries keep Decimal amounts; ``to_dataframe`` hands a
table to a presentation layer.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List

import pandas as pd

from hpms.core.money import ZERO
from hpms.events.payloads import BillGenerated

if TYPE_CHECKING:
    from hpms.model.hospital import Hospital

LEDGER_COLUMNS = [
    "timestamp",
    "patient_id",
    "patient_name",
    "patient_type",
    "condition",
    "priority",
    "strategy",
    "base_bill",
    "final_bill",
    "discount",
]


@dataclass
class StrategyTotals:
    """Aggregated amounts for one group of bills."""

    count: int = 0
    base_total: Decimal = ZERO
    final_total: Decimal = ZERO

    @property
    def discount_total(self) -> Decimal:
        return self.base_total - self.final_total

    def add(self, event: BillGenerated) -> None:
        self.count += 1
        self.base_total += event.base_bill
        self.final_total += event.final_bill

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "base_total": self.base_total,
            "final_total": self.final_total,
            "discount_total": self.discount_total,
        }


@dataclass
class BillingLedger:
    """Accumulates generated bills.

    Attributes:
        entries: BillGenerated events in the order they were recorded.

    Patient details (name, condition, priority) are captured when a bill
    is recorded, so later changes to the patient do not rewrite history.
    """

    entries: List[BillGenerated] = field(default_factory=list)
    _rows: List[Dict[str, Any]] = field(default_factory=list, repr=False)

    def attach(self, hospital: "Hospital") -> "BillingLedger":
        """Subscribe this ledger to a hospital's billing channel."""
        hospital.billing.subscribe(self.record)
        return self

    def record(self, event: BillGenerated) -> None:
        self.entries.append(event)
        self._rows.append(_ledger_row(event))

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def total_billed(self) -> Decimal:
        """Sum of base bills."""
        return sum((e.base_bill for e in self.entries), ZERO)

    @property
    def total_collected(self) -> Decimal:
        """Sum of final bills."""
        return sum((e.final_bill for e in self.entries), ZERO)

    @property
    def total_discount(self) -> Decimal:
        return self.total_billed - self.total_collected

    def summary_by_strategy(self) -> Dict[str, StrategyTotals]:
        """Totals per strategy name, in first-seen order."""
        summary: Dict[str, StrategyTotals] = {}
        for event in self.entries:
            summary.setdefault(event.strategy_name, StrategyTotals()).add(event)
        return summary

    def summary_by_patient_type(self) -> Dict[str, StrategyTotals]:
        """Totals per patient variant, in first-seen order."""
        summary: Dict[str, StrategyTotals] = {}
        for event in self.entries:
            summary.setdefault(event.patient.patient_type, StrategyTotals()).add(event)
        return summary

    def to_dataframe(self) -> pd.DataFrame:
        """One row per bill. Money columns hold Decimal values."""
        return pd.DataFrame(list(self._rows), columns=LEDGER_COLUMNS)


def _ledger_row(event: BillGenerated) -> Dict[str, Any]:
    patient = event.patient
    return {
        "timestamp": event.timestamp,
        "patient_id": patient.patient_id,
        "patient_name": patient.name,
        "patient_type": patient.patient_type,
        "condition": patient.condition.name,
        "priority": patient.priority.name,
        "strategy": event.strategy_name,
        "base_bill": event.base_bill,
        "final_bill": event.final_bill,
        "discount": event.discount,
    }
