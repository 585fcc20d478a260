"""Patient entity definitions.

Three admission variants share one base record. Each variant itemises its
own charges; the total bill is the sum of those line items, so overriding
``charge_breakdown`` is what makes ``total_bill`` polymorphic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Type

from hpms.core.config import FeeSchedule, HospitalConfig
from hpms.core.entities import (
    Condition, Priority, RoomType,
    severity_multiplier, room_multiplier,
    condition_description, priority_description,
)
from hpms.core.money import ZERO, quantize_money, to_money

MIN_AGE = 1
MAX_AGE = 150


class PatientValidationError(ValueError):
    """Raised when a patient record fails a range check."""


def validate_age(age: int) -> int:
    """Check that an age is an integer in [MIN_AGE, MAX_AGE]."""
    if isinstance(age, bool) or not isinstance(age, int):
        raise PatientValidationError(f"Age must be an integer, got {age!r}")
    if not MIN_AGE <= age <= MAX_AGE:
        raise PatientValidationError(
            f"Age must be between {MIN_AGE} and {MAX_AGE}, got {age}"
        )
    return age


def validate_count(name: str, value: Any) -> int:
    """Check a day/visit count: a non-negative whole number.

    Integral floats such as 3.0 are accepted and stored as int.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise PatientValidationError(f"{name} must be a whole number, got {value!r}")
    if value < 0:
        raise PatientValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_amount(name: str, value: Any) -> Decimal:
    """Convert a charge to Decimal and check it is not negative."""
    amount = to_money(value)
    if amount < 0:
        raise PatientValidationError(f"{name} must be non-negative, got {amount}")
    return amount


@dataclass(eq=False)
class Patient(ABC):
    """Admitted patient record.

    Attributes:
        patient_id: Caller-assigned unique identifier.
        name: Patient name.
        age: Age in years (1-150, checked on every assignment).
        ailment: Free-text description of the complaint.
        base_treatment_cost: Treatment cost before the severity multiplier.
        condition: Condition severity (drives the billing multiplier).
        priority: Admission priority (selects the registry queue). Fixed
            once the patient is admitted; use Hospital.reprioritize().
        admitted_at: Admission timestamp, fixed at construction.
    """

    patient_type: ClassVar[str] = "Patient"
    _money_fields: ClassVar[FrozenSet[str]] = frozenset({"base_treatment_cost"})
    _count_fields: ClassVar[FrozenSet[str]] = frozenset()
    _enum_fields: ClassVar[Dict[str, Type]] = {
        "condition": Condition,
        "priority": Priority,
    }

    patient_id: int
    name: str
    age: int
    ailment: str
    base_treatment_cost: Decimal
    condition: Condition
    priority: Priority
    admitted_at: datetime = field(default_factory=datetime.now, kw_only=True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "age":
            value = validate_age(value)
        elif name == "admitted_at" and "admitted_at" in self.__dict__:
            raise AttributeError("admitted_at is fixed at construction")
        elif name == "priority" and self.is_admitted:
            raise AttributeError(
                "priority is fixed once admitted; use Hospital.reprioritize()"
            )
        elif name in self._money_fields:
            value = validate_amount(name, value)
        elif name in self._count_fields:
            value = validate_count(name, value)
        elif name in self._enum_fields:
            value = self._enum_fields[name](value)
        super().__setattr__(name, value)

    @property
    def is_admitted(self) -> bool:
        """Whether a registry has queued this patient."""
        return self.__dict__.get("_admitted", False)

    def _mark_admitted(self) -> None:
        object.__setattr__(self, "_admitted", True)

    def _move_priority(self, priority: Priority) -> None:
        # Registry-only path; the caller re-files the queue entry
        object.__setattr__(self, "priority", Priority(priority))

    def severity_multiplier(self) -> Decimal:
        """Billing multiplier for the current condition."""
        return severity_multiplier(self.condition)

    def condition_description(self) -> str:
        return condition_description(self.condition)

    def priority_description(self) -> str:
        return priority_description(self.priority)

    @property
    def requires_alert(self) -> bool:
        """Whether admission raises a condition alert (Serious or Critical)."""
        return self.condition >= Condition.SERIOUS

    def is_senior(self, threshold: int = 60) -> bool:
        """Whether the senior citizen discount should be recommended."""
        return self.age >= threshold

    def treatment_charge(self) -> Decimal:
        """Base treatment cost scaled by condition severity."""
        return self.base_treatment_cost * self.severity_multiplier()

    @abstractmethod
    def charge_breakdown(self, fees: Optional[FeeSchedule] = None) -> Dict[str, Decimal]:
        """Itemised charges for this admission, in bill order."""

    def total_bill(self, fees: Optional[FeeSchedule] = None) -> Decimal:
        """Total bill before any billing strategy is applied.

        Args:
            fees: Flat charge schedule. Uses the default schedule if None.

        Returns:
            Sum of the charge breakdown, rounded to cents.
        """
        return quantize_money(sum(self.charge_breakdown(fees).values(), ZERO))

    def _details(self) -> Dict[str, Any]:
        return {}

    def describe(self) -> Dict[str, Any]:
        """Summary of the record for display or serialization."""
        summary = {
            "patient_type": self.patient_type,
            "patient_id": self.patient_id,
            "name": self.name,
            "age": self.age,
            "ailment": self.ailment,
            "base_treatment_cost": self.base_treatment_cost,
            "condition": self.condition.name,
            "condition_description": self.condition_description(),
            "priority": self.priority.name,
            "priority_description": self.priority_description(),
            "admitted_at": self.admitted_at.isoformat(timespec="minutes"),
        }
        summary.update(self._details())
        return summary


@dataclass(eq=False)
class InPatient(Patient):
    """Patient staying on a ward, billed per day by room category."""

    patient_type: ClassVar[str] = "In-Patient"
    _money_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"base_treatment_cost", "room_charge_per_day"}
    )
    _count_fields: ClassVar[FrozenSet[str]] = frozenset({"days"})
    _enum_fields: ClassVar[Dict[str, Type]] = {
        "condition": Condition,
        "priority": Priority,
        "room_type": RoomType,
    }

    days: int = 0
    room_charge_per_day: Decimal = Decimal("0")
    room_type: RoomType = RoomType.GENERAL
    special_diet: bool = False
    physiotherapy: bool = False

    def charge_breakdown(self, fees: Optional[FeeSchedule] = None) -> Dict[str, Decimal]:
        fees = fees or FeeSchedule()
        return {
            "treatment": self.treatment_charge(),
            "room": self.days * self.room_charge_per_day * room_multiplier(self.room_type),
            "special_diet": self.days * fees.special_diet_per_day if self.special_diet else ZERO,
            "physiotherapy": self.days * fees.physiotherapy_per_day if self.physiotherapy else ZERO,
        }

    def _details(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "room_type": self.room_type.name,
            "room_charge_per_day": self.room_charge_per_day,
            "special_diet": self.special_diet,
            "physiotherapy": self.physiotherapy,
        }


@dataclass(eq=False)
class OutPatient(Patient):
    """Patient attending consultations without a stay."""

    patient_type: ClassVar[str] = "Out-Patient"
    _money_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"base_treatment_cost", "consultation_fee"}
    )
    _count_fields: ClassVar[FrozenSet[str]] = frozenset({"visits"})

    visits: int = 0
    consultation_fee: Decimal = Decimal("0")
    lab_tests: bool = False
    xray: bool = False

    def charge_breakdown(self, fees: Optional[FeeSchedule] = None) -> Dict[str, Decimal]:
        fees = fees or FeeSchedule()
        return {
            "treatment": self.treatment_charge(),
            "consultations": self.visits * self.consultation_fee,
            "lab_tests": fees.lab_tests if self.lab_tests else ZERO,
            "xray": fees.xray if self.xray else ZERO,
        }

    def _details(self) -> Dict[str, Any]:
        return {
            "visits": self.visits,
            "consultation_fee": self.consultation_fee,
            "lab_tests": self.lab_tests,
            "xray": self.xray,
        }


@dataclass(eq=False)
class EmergencyPatient(Patient):
    """Patient admitted through the emergency department."""

    patient_type: ClassVar[str] = "Emergency Patient"
    _money_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"base_treatment_cost", "emergency_surcharge"}
    )

    emergency_surcharge: Decimal = Decimal("0")
    ambulance: bool = False
    surgery: bool = False
    blood_transfusion: bool = False
    emergency_type: str = "Other Emergency"

    def charge_breakdown(self, fees: Optional[FeeSchedule] = None) -> Dict[str, Decimal]:
        fees = fees or FeeSchedule()
        return {
            "treatment": self.treatment_charge(),
            "emergency_surcharge": self.emergency_surcharge,
            "ambulance": fees.ambulance if self.ambulance else ZERO,
            "surgery": fees.surgery if self.surgery else ZERO,
            "blood_transfusion": fees.blood_transfusion if self.blood_transfusion else ZERO,
        }

    def _details(self) -> Dict[str, Any]:
        return {
            "emergency_type": self.emergency_type,
            "emergency_surcharge": self.emergency_surcharge,
            "ambulance": self.ambulance,
            "surgery": self.surgery,
            "blood_transfusion": self.blood_transfusion,
        }


PATIENT_KINDS: Dict[str, Type[Patient]] = {
    "in": InPatient,
    "inpatient": InPatient,
    "out": OutPatient,
    "outpatient": OutPatient,
    "emergency": EmergencyPatient,
    "emergencypatient": EmergencyPatient,
}


def create_patient(kind: str, **fields: Any) -> Patient:
    """Construct a patient variant by name.

    Args:
        kind: "in", "out" or "emergency" (class names are accepted too).
        **fields: Constructor arguments for the variant.

    Raises:
        ValueError: If the kind is not a known variant.
        PatientValidationError: If the age is out of range.
    """
    key = "".join(ch for ch in kind.lower() if ch.isalpha())
    try:
        patient_cls = PATIENT_KINDS[key]
    except KeyError:
        raise ValueError(
            f"Unknown patient kind '{kind}'. Use 'in', 'out' or 'emergency'"
        ) from None
    return patient_cls(**fields)


class PatientIdSequence:
    """Monotonically increasing patient id source for the admitting caller."""

    def __init__(self, start: int = 1000):
        self._next = start

    @classmethod
    def from_config(cls, config: HospitalConfig) -> "PatientIdSequence":
        """Sequence starting at the configured first patient id."""
        return cls(start=config.first_patient_id)

    def next_id(self) -> int:
        """Hand out the next id."""
        patient_id = self._next
        self._next += 1
        return patient_id

    def peek(self) -> int:
        """The id the next call to next_id() will return."""
        return self._next
