"""Tests for hospital configuration loading and saving."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from hpms.core.config import (
    FeeSchedule,
    HospitalConfig,
    find_site_config,
    get_default_config_dir,
    list_available_configs,
    load_hospital_config,
    save_hospital_config,
)


class TestFeeSchedule:
    """Tests for the flat charge schedule."""

    def test_defaults(self):
        fees = FeeSchedule()
        assert fees.special_diet_per_day == Decimal("50")
        assert fees.physiotherapy_per_day == Decimal("100")
        assert fees.lab_tests == Decimal("200")
        assert fees.xray == Decimal("150")
        assert fees.ambulance == Decimal("500")
        assert fees.surgery == Decimal("5000")
        assert fees.blood_transfusion == Decimal("1000")

    def test_amounts_coerced(self):
        fees = FeeSchedule(xray="175.50", surgery=4000)
        assert fees.xray == Decimal("175.50")
        assert isinstance(fees.surgery, Decimal)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            FeeSchedule(ambulance=-1)


class TestHospitalConfig:
    """Tests for HospitalConfig."""

    def test_defaults(self):
        config = HospitalConfig()
        assert config.name == "City General Hospital"
        assert config.senior_citizen_age == 60
        assert config.first_patient_id == 1000
        assert config.fail_open is True

    def test_currency_symbol(self):
        assert HospitalConfig().get_currency_symbol() == "$"
        assert HospitalConfig(currency="GBP").get_currency_symbol() == "£"
        assert HospitalConfig(currency="CHF").get_currency_symbol() == "CHF"

    def test_fees_from_dict(self):
        config = HospitalConfig(fees={"surgery": "6000"})
        assert config.fees.surgery == Decimal("6000")

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown hospital config keys"):
            HospitalConfig.from_dict({"beds": 200})

    def test_from_dict_rejects_unknown_fees(self):
        with pytest.raises(ValueError, match="Unknown fee keys"):
            HospitalConfig.from_dict({"fees": {"parking": 10}})


class TestConfigFiles:
    """Tests for YAML/JSON persistence."""

    def test_yaml_round_trip(self, tmp_path):
        config = HospitalConfig(
            name="St. Mary's",
            currency="EUR",
            fees=FeeSchedule(surgery=Decimal("4500.00")),
            fail_open=False,
        )
        path = tmp_path / "st_marys.yaml"
        save_hospital_config(config, path)

        loaded = load_hospital_config(path)
        assert loaded.name == "St. Mary's"
        assert loaded.currency == "EUR"
        assert loaded.fees.surgery == Decimal("4500.00")
        assert loaded.fail_open is False

    def test_json_file(self, tmp_path):
        path = tmp_path / "clinic.json"
        path.write_text(json.dumps({"name": "Riverside Clinic", "fees": {"xray": "120"}}))

        loaded = load_hospital_config(path)
        assert loaded.name == "Riverside Clinic"
        assert loaded.fees.xray == Decimal("120")
        assert loaded.fees.lab_tests == Decimal("200")

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_hospital_config(path) == HospitalConfig()

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "site.json"
        save_hospital_config(HospitalConfig(), path)
        assert path.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_hospital_config(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "site.toml"
        path.write_text("name = 'x'")
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_hospital_config(path)


class TestConfigDiscovery:
    """Tests for locating config files."""

    def test_env_var_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HPMS_CONFIG_DIR", str(tmp_path))
        assert get_default_config_dir() == tmp_path

    def test_package_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HPMS_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        config_dir = get_default_config_dir()
        assert config_dir.name == "default_config"
        assert (config_dir / "city_general.yaml").exists()

    def test_bundled_config_matches_defaults(self, monkeypatch, tmp_path):
        monkeypatch.delenv("HPMS_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        path = get_default_config_dir() / "city_general.yaml"
        assert load_hospital_config(path) == HospitalConfig()

    def test_list_available_configs(self, tmp_path):
        (tmp_path / "a.yaml").write_text("")
        (tmp_path / "b.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("")
        names = [p.name for p in list_available_configs(tmp_path)]
        assert names == ["a.yaml", "b.json"]

    def test_list_missing_dir(self, tmp_path):
        assert list_available_configs(tmp_path / "nope") == []

    def test_cwd_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HPMS_CONFIG_DIR", raising=False)
        local = tmp_path / "config" / "hospital"
        local.mkdir(parents=True)
        monkeypatch.chdir(tmp_path)
        assert get_default_config_dir() == Path.cwd() / "config" / "hospital"


class TestSiteConfigs:
    """Tests for loading configs by site name."""

    def test_load_default_bundled(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HPMS_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert HospitalConfig.load_default() == HospitalConfig()

    def test_load_default_from_env_dir(self, tmp_path, monkeypatch):
        save_hospital_config(HospitalConfig(name="Harbour View"), tmp_path / "harbour.json")
        monkeypatch.setenv("HPMS_CONFIG_DIR", str(tmp_path))
        assert HospitalConfig.load_default("harbour").name == "Harbour View"

    def test_find_site_config(self, tmp_path):
        (tmp_path / "north.yml").write_text("name: North Wing\n")
        assert find_site_config("north", tmp_path) == tmp_path / "north.yml"

    def test_unknown_site_lists_available(self, tmp_path):
        (tmp_path / "north.yaml").write_text("")
        with pytest.raises(FileNotFoundError, match="available: north"):
            find_site_config("south", tmp_path)

    def test_save_unsupported_suffix_writes_nothing(self, tmp_path):
        path = tmp_path / "out" / "site.ini"
        with pytest.raises(ValueError, match="Unsupported config format"):
            save_hospital_config(HospitalConfig(), path)
        assert not path.parent.exists()

    def test_unicode_name_round_trip(self, tmp_path):
        path = tmp_path / "sao_paulo.yaml"
        save_hospital_config(HospitalConfig(name="Hospital São Paulo"), path)
        assert load_hospital_config(path).name == "Hospital São Paulo"
