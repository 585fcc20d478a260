"""Core entity definitions for the admission and billing engine.

This module contains enums and pure lookup tables that are used across
the codebase, placed here to avoid circular imports.
"""

from decimal import Decimal
from enum import Enum, IntEnum
from typing import Dict, Optional, Type, TypeVar, Union


class Condition(IntEnum):
    """Patient condition severity. Higher value = more severe."""
    STABLE = 1      # Normal condition - no extra charges
    MODERATE = 2    # Regular monitoring - 10% extra
    SERIOUS = 3     # Intensive care - 25% extra
    CRITICAL = 4    # Immediate attention - 50% extra


class Priority(IntEnum):
    """Admission priority levels. Higher value = more urgent."""
    NORMAL = 1
    HIGH = 2
    URGENT = 3
    EMERGENCY = 4


class RoomType(IntEnum):
    """Room categories for in-patients."""
    GENERAL = 1
    SEMI_PRIVATE = 2
    PRIVATE = 3
    ICU = 4
    NICU = 5      # Neonatal ICU


SEVERITY_MULTIPLIERS: Dict[Condition, Decimal] = {
    Condition.STABLE: Decimal("1.00"),
    Condition.MODERATE: Decimal("1.10"),
    Condition.SERIOUS: Decimal("1.25"),
    Condition.CRITICAL: Decimal("1.50"),
}

ROOM_MULTIPLIERS: Dict[RoomType, Decimal] = {
    RoomType.GENERAL: Decimal("1.0"),
    RoomType.SEMI_PRIVATE: Decimal("1.5"),
    RoomType.PRIVATE: Decimal("2.0"),
    RoomType.ICU: Decimal("3.0"),
    RoomType.NICU: Decimal("3.5"),
}

CONDITION_DESCRIPTIONS: Dict[Condition, str] = {
    Condition.STABLE: "Stable - Patient is in normal condition",
    Condition.MODERATE: "Moderate - Patient requires regular monitoring",
    Condition.SERIOUS: "Serious - Patient requires intensive care",
    Condition.CRITICAL: "CRITICAL - Patient requires immediate attention!",
}

PRIORITY_DESCRIPTIONS: Dict[Priority, str] = {
    Priority.NORMAL: "Normal Priority",
    Priority.HIGH: "High Priority",
    Priority.URGENT: "URGENT Priority",
    Priority.EMERGENCY: "EMERGENCY - Immediate Action Required!",
}

# Queue order used for status reports: most urgent first
QUEUE_ORDER = (Priority.EMERGENCY, Priority.URGENT, Priority.HIGH, Priority.NORMAL)

# Emergency categories offered at the admission desk (free-form is allowed)
EMERGENCY_TYPES = (
    "Accident",
    "Heart Attack",
    "Stroke",
    "Trauma",
    "Respiratory Emergency",
    "Other Emergency",
)


def severity_multiplier(condition: Condition) -> Decimal:
    """Billing multiplier applied to the base treatment cost."""
    return SEVERITY_MULTIPLIERS[Condition(condition)]


def room_multiplier(room_type: RoomType) -> Decimal:
    """Multiplier applied to the per-day room charge."""
    return ROOM_MULTIPLIERS[RoomType(room_type)]


def condition_description(condition: Condition) -> str:
    """Human-readable description of a condition level."""
    return CONDITION_DESCRIPTIONS[Condition(condition)]


def priority_description(priority: Priority) -> str:
    """Human-readable description of a priority level."""
    return PRIORITY_DESCRIPTIONS[Priority(priority)]


E = TypeVar("E", bound=Enum)


def normalise_name(text: str) -> str:
    """Upper-case a label and drop everything but letters and digits."""
    return "".join(ch for ch in text.upper() if ch.isalnum())


def parse_enum(
    enum_cls: Type[E],
    choice: Union[E, int, str, None],
    default: Optional[E] = None,
) -> Optional[E]:
    """Resolve an enum member from a menu choice.

    Accepts a member, its integer value, a numeric string ("3") or the
    member name ("semi-private", "SEMI_PRIVATE", "SemiPrivate").

    Args:
        enum_cls: Enum class to resolve against.
        choice: Raw selection from the caller.
        default: Returned when the choice does not match any member.

    Returns:
        The matching member, or ``default``.
    """
    if isinstance(choice, enum_cls):
        return choice
    if choice is None:
        return default

    if isinstance(choice, str):
        text = choice.strip()
        if text.isdigit():
            choice = int(text)
        else:
            wanted = normalise_name(text)
            for member in enum_cls:
                if normalise_name(member.name) == wanted:
                    return member
            return default

    if isinstance(choice, int) and not isinstance(choice, bool):
        for member in enum_cls:
            if member.value == choice:
                return member
    return default
