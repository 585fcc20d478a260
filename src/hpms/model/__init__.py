"""Model layer: patient hierarchy and the admission registry."""

from hpms.model.patient import (
    Patient,
    InPatient,
    OutPatient,
    EmergencyPatient,
    PatientValidationError,
    PatientIdSequence,
    create_patient,
)
from hpms.model.hospital import Hospital

__all__ = [
    "Patient",
    "InPatient",
    "OutPatient",
    "EmergencyPatient",
    "PatientValidationError",
    "PatientIdSequence",
    "create_patient",
    "Hospital",
]
