"""Core foundation layer: enums, money helpers, hospital configuration."""

from hpms.core.entities import (
    Condition,
    Priority,
    RoomType,
    EMERGENCY_TYPES,
    QUEUE_ORDER,
    severity_multiplier,
    room_multiplier,
    condition_description,
    priority_description,
    parse_enum,
)
from hpms.core.money import to_money, quantize_money, format_currency
from hpms.core.config import (
    FeeSchedule,
    HospitalConfig,
    load_hospital_config,
    save_hospital_config,
    get_default_config_dir,
    list_available_configs,
    find_site_config,
)

__all__ = [
    "Condition",
    "Priority",
    "RoomType",
    "EMERGENCY_TYPES",
    "QUEUE_ORDER",
    "severity_multiplier",
    "room_multiplier",
    "condition_description",
    "priority_description",
    "parse_enum",
    "to_money",
    "quantize_money",
    "format_currency",
    "FeeSchedule",
    "HospitalConfig",
    "load_hospital_config",
    "save_hospital_config",
    "get_default_config_dir",
    "list_available_configs",
    "find_site_config",
]
