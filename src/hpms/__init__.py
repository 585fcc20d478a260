"""
HPMS - Hospital Patient Management System.

Polymorphic patient billing, priority-queue admission and synchronous
inter-department notification for a single hospital.
"""

__version__ = "0.1.0"

from hpms.core.config import HospitalConfig
from hpms.core.entities import Condition, Priority, RoomType
from hpms.billing.strategies import BillingStrategy, select_strategy
from hpms.model.patient import (
    InPatient,
    OutPatient,
    EmergencyPatient,
    PatientValidationError,
    create_patient,
)
from hpms.model.hospital import Hospital

__all__ = [
    "HospitalConfig",
    "Condition",
    "Priority",
    "RoomType",
    "BillingStrategy",
    "select_strategy",
    "InPatient",
    "OutPatient",
    "EmergencyPatient",
    "PatientValidationError",
    "create_patient",
    "Hospital",
    "__version__",
]
