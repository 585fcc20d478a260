"""Pytest fixtures for HPMS tests."""

from decimal import Decimal

import pytest

from hpms.core.config import HospitalConfig
from hpms.core.entities import Condition, Priority, RoomType
from hpms.model.hospital import Hospital
from hpms.model.patient import EmergencyPatient, InPatient, OutPatient


@pytest.fixture
def hospital() -> Hospital:
    """Fresh registry with default configuration."""
    return Hospital(config=HospitalConfig())


@pytest.fixture
def icu_inpatient() -> InPatient:
    """3-day ICU stay, Moderate, special diet: bills 2150.00."""
    return InPatient(
        patient_id=1000,
        name="Asha Rao",
        age=45,
        ailment="Pneumonia",
        base_treatment_cost=Decimal("1000.00"),
        condition=Condition.MODERATE,
        priority=Priority.HIGH,
        days=3,
        room_charge_per_day=Decimal("100.00"),
        room_type=RoomType.ICU,
        special_diet=True,
        physiotherapy=False,
    )


@pytest.fixture
def lab_outpatient() -> OutPatient:
    """Two visits with lab tests, Stable: bills 860.00."""
    return OutPatient(
        patient_id=1001,
        name="Tom Hale",
        age=30,
        ailment="Migraine",
        base_treatment_cost=Decimal("500"),
        condition=Condition.STABLE,
        priority=Priority.NORMAL,
        visits=2,
        consultation_fee=Decimal("80"),
        lab_tests=True,
        xray=False,
    )


@pytest.fixture
def surgical_emergency() -> EmergencyPatient:
    """Critical emergency with ambulance and surgery: bills 8800.00."""
    return EmergencyPatient(
        patient_id=1002,
        name="Lena Ortiz",
        age=67,
        ailment="Internal bleeding",
        base_treatment_cost=Decimal("2000"),
        condition=Condition.CRITICAL,
        priority=Priority.EMERGENCY,
        emergency_surcharge=Decimal("300"),
        ambulance=True,
        surgery=True,
        blood_transfusion=False,
        emergency_type="Accident",
    )


@pytest.fixture
def make_outpatient():
    """Factory for minimal out-patients used in registry tests."""

    def _make(
        patient_id: int = 2000,
        condition: Condition = Condition.STABLE,
        priority: Priority = Priority.NORMAL,
        age: int = 40,
    ) -> OutPatient:
        return OutPatient(
            patient_id=patient_id,
            name=f"Patient {patient_id}",
            age=age,
            ailment="Check-up",
            base_treatment_cost=Decimal("100"),
            condition=condition,
            priority=priority,
        )

    return _make
