"""Hospital configuration.

Fee schedule and registry settings, stored per site as YAML or JSON.
Site files are looked up in $HPMS_CONFIG_DIR, then ./config/hospital, then
the configs bundled with the package.

Example usage:
    config = HospitalConfig.load_default("city_general")
    hospital = Hospital(config=config)

    save_hospital_config(config, Path("config/hospital/st_marys.yaml"))
"""

import json
import os
from dataclasses import dataclass, field, fields
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from hpms.core.money import CURRENCY_SYMBOLS, to_money

CONFIG_DIR_ENV = "HPMS_CONFIG_DIR"
CONFIG_SUFFIXES = (".yaml", ".yml", ".json")
BUNDLED_CONFIG_DIR = Path(__file__).parent / "default_config"


@dataclass
class FeeSchedule:
    """Flat add-on charges used by the patient bill calculations.

    Per-day charges scale with the in-patient's stay length; the rest are
    charged once per admission.
    """

    # === IN-PATIENT (PER DAY) ===
    special_diet_per_day: Decimal = Decimal("50")
    physiotherapy_per_day: Decimal = Decimal("100")

    # === OUT-PATIENT ===
    lab_tests: Decimal = Decimal("200")
    xray: Decimal = Decimal("150")

    # === EMERGENCY ===
    ambulance: Decimal = Decimal("500")
    surgery: Decimal = Decimal("5000")
    blood_transfusion: Decimal = Decimal("1000")

    def __post_init__(self) -> None:
        for f in fields(self):
            amount = to_money(getattr(self, f.name))
            if amount < 0:
                raise ValueError(f"{f.name} must be non-negative, got {amount}")
            setattr(self, f.name, amount)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization (amounts as strings)."""
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}


@dataclass
class HospitalConfig:
    """Registry configuration.

    Attributes:
        name: Hospital name used in log messages and notices.
        currency: "USD" | "GBP" | "EUR" | "INR".
        fees: Flat charge schedule for bill calculation.
        senior_citizen_age: Age from which the senior discount is recommended.
        first_patient_id: First id handed out by a PatientIdSequence.
        fail_open: Keep going when an observer raises. If False, the
            registry still completes the whole operation (every channel and
            the condition alert callback), then raises one ObserverError.
    """

    name: str = "City General Hospital"
    currency: str = "USD"
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    senior_citizen_age: int = 60
    first_patient_id: int = 1000
    fail_open: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.fees, dict):
            self.fees = FeeSchedule(**self.fees)

    def get_currency_symbol(self) -> str:
        """Get the currency symbol for display."""
        return CURRENCY_SYMBOLS.get(self.currency, self.currency)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "currency": self.currency,
            "fees": self.fees.to_dict(),
            "senior_citizen_age": self.senior_citizen_age,
            "first_patient_id": self.first_patient_id,
            "fail_open": self.fail_open,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HospitalConfig":
        """Build a config from a plain dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown hospital config keys: {sorted(unknown)}")

        fee_data = data.get("fees") or {}
        fee_known = {f.name for f in fields(FeeSchedule)}
        unknown_fees = set(fee_data) - fee_known
        if unknown_fees:
            raise ValueError(f"Unknown fee keys: {sorted(unknown_fees)}")

        values = dict(data)
        values["fees"] = FeeSchedule(**fee_data)
        return cls(**values)



    @classmethod
    def load_default(
        cls,
        site: str = "city_general",
        config_dir: Path | None = None,
    ) -> "HospitalConfig":
        """Load a named site config from the config directory.

        Args:
            site: File stem to look for ("city_general" finds
                city_general.yaml, .yml or .json).
            config_dir: Directory to search. Uses get_default_config_dir()
                if None.
        """
        return load_hospital_config(find_site_config(site, config_dir))


def _config_format(config_path: Path) -> str:
    if config_path.suffix not in CONFIG_SUFFIXES:
        raise ValueError(
            f"Unsupported config format: {config_path.suffix}. "
            f"Use one of {', '.join(CONFIG_SUFFIXES)}"
        )
    return "json" if config_path.suffix == ".json" else "yaml"


def load_hospital_config(config_path: Path) -> HospitalConfig:
    """Read a HospitalConfig from a .yaml, .yml or .json file.

    An empty file gives the default configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is not supported or a key is unknown.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    fmt = _config_format(config_path)
    text = config_path.read_text(encoding="utf-8")
    if fmt == "json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text)
    return HospitalConfig.from_dict(data or {})


def save_hospital_config(config: HospitalConfig, config_path: Path) -> None:
    """Write a HospitalConfig as YAML or JSON, chosen by suffix.

    Missing parent directories are created.
    """
    config_path = Path(config_path)
    fmt = _config_format(config_path)
    data = config.to_dict()

    if fmt == "json":
        text = json.dumps(data, indent=2)
    else:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(text, encoding="utf-8")


def get_default_config_dir() -> Path:
    """Directory searched for site configs.

    $HPMS_CONFIG_DIR wins, then ./config/hospital when it exists, then the
    configs bundled with the package.
    """
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)

    local_dir = Path.cwd() / "config" / "hospital"
    return local_dir if local_dir.is_dir() else BUNDLED_CONFIG_DIR


def list_available_configs(config_dir: Path | None = None) -> list[Path]:
    """Config files in a directory, sorted by name."""
    config_dir = Path(config_dir) if config_dir is not None else get_default_config_dir()
    if not config_dir.is_dir():
        return []
    return sorted(p for p in config_dir.iterdir() if p.suffix in CONFIG_SUFFIXES)


def find_site_config(site: str, config_dir: Path | None = None) -> Path:
    """Path of the config file for a site name.

    Raises:
        FileNotFoundError: If no file with that stem exists, naming the
            sites that do.
    """
    configs = list_available_configs(config_dir)
    for path in configs:
        if path.stem == site:
            return path
    available = ", ".join(p.stem for p in configs) or "none"
    raise FileNotFoundError(f"No config for site '{site}' (available: {available})")
