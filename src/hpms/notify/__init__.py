"""Notification layer: department observers and condition alert handlers."""

from hpms.notify.departments import (
    Department,
    DepartmentNotice,
    NotificationLog,
    ReceptionDepartment,
    MedicalDepartment,
    PharmacyDepartment,
    AccountsDepartment,
    ICUDepartment,
    NotificationService,
    OutboundMessage,
    Departments,
    subscribe_departments,
)
from hpms.notify.alerts import AlertManager, ConditionAlertNotice, ConditionAlertHandler

__all__ = [
    "Department",
    "DepartmentNotice",
    "NotificationLog",
    "ReceptionDepartment",
    "MedicalDepartment",
    "PharmacyDepartment",
    "AccountsDepartment",
    "ICUDepartment",
    "NotificationService",
    "OutboundMessage",
    "Departments",
    "subscribe_departments",
    "AlertManager",
    "ConditionAlertNotice",
    "ConditionAlertHandler",
]
