"""Synchronous publish/subscribe channels.

Each channel keeps an ordered list of observers and calls them in
registration order on the publishing thread. A failing observer is
isolated: the fault is logged and recorded, and the remaining observers
are still notified.

Example usage:
    channel = EventChannel("admission")
    channel.subscribe(reception.on_patient_admitted)
    channel.subscribe(pharmacy.on_patient_admitted)

    result = channel.publish(AdmissionOccurred(patient))
    if not result.all_succeeded:
        print(result.failed_observers)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[T], Any]


class ObserverError(Exception):
    """Raised by a fail-closed channel after dispatch if any observer failed."""

    def __init__(self, message: str, failures: List["DispatchFailure"]):
        super().__init__(message)
        self.failures = failures


def observer_name(observer: Callable) -> str:
    """Readable name for an observer (bound method, function or object)."""
    owner = getattr(observer, "__self__", None)
    func_name = getattr(observer, "__name__", None)
    if owner is not None and func_name:
        return f"{type(owner).__name__}.{func_name}"
    if func_name:
        return func_name
    return type(observer).__name__


@dataclass
class DispatchFailure:
    """One observer fault contained during dispatch.

    Attributes:
        channel: Channel name the event was published on.
        observer: Readable observer name.
        error: The exception the observer raised.
    """

    channel: str
    observer: str
    error: Exception

    @property
    def error_message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class DispatchResult:
    """Outcome of publishing one event on one channel."""

    channel: str
    notified: int = 0
    failures: List[DispatchFailure] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return not self.failures

    @property
    def failed_observers(self) -> List[str]:
        return [f.observer for f in self.failures]


class EventChannel(Generic[T]):
    """Ordered observer list for one event kind.

    Attributes:
        name: Channel name used in logs and failure records.
        fail_open: Continue silently (after logging) on observer faults if
            True. If False, every observer is still called, then
            ObserverError is raised.
    """

    def __init__(self, name: str, fail_open: bool = True):
        self.name = name
        self.fail_open = fail_open
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        """Append an observer. The same callable may be added more than once."""
        if not callable(observer):
            raise TypeError(f"Observer for '{self.name}' must be callable")
        self._observers.append(observer)
        logger.info(f"Subscribed {observer_name(observer)} to {self.name}")

    @property
    def observers(self) -> List[str]:
        """Names of subscribed observers, in dispatch order."""
        return [observer_name(o) for o in self._observers]

    def __len__(self) -> int:
        return len(self._observers)

    def publish(self, event: T) -> DispatchResult:
        """Deliver an event to every observer, in registration order.

        Args:
            event: Payload to deliver.

        Returns:
            DispatchResult with the number of observers called and any
            contained failures.

        Raises:
            ObserverError: If fail_open is False and an observer failed.
        """
        result = DispatchResult(channel=self.name)

        # Snapshot so an observer subscribing during dispatch waits for the next event
        for observer in list(self._observers):
            result.notified += 1
            try:
                observer(event)
            except Exception as e:
                name = observer_name(observer)
                logger.error(f"Observer {name} failed on {self.name}: {e}")
                result.failures.append(
                    DispatchFailure(channel=self.name, observer=name, error=e)
                )

        logger.debug(
            f"Published {type(event).__name__} on {self.name} to "
            f"{result.notified} observers ({len(result.failures)} failed)"
        )

        if result.failures and not self.fail_open:
            raise ObserverError(
                f"{len(result.failures)} observer(s) failed on {self.name}: "
                f"{', '.join(result.failed_observers)}",
                result.failures,
            )

        return result
