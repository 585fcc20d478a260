"""Event layer: payloads and synchronous observer channels."""

from hpms.events.payloads import (
    EventKind,
    AdmissionOccurred,
    BillGenerated,
    CriticalAlert,
)
from hpms.events.channel import (
    EventChannel,
    DispatchResult,
    DispatchFailure,
    ObserverError,
)

__all__ = [
    "EventKind",
    "AdmissionOccurred",
    "BillGenerated",
    "CriticalAlert",
    "EventChannel",
    "DispatchResult",
    "DispatchFailure",
    "ObserverError",
]
