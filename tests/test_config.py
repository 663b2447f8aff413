from pathlib import Path

import pytest

from jolbondhu.core.models import SimulationParameters
from jolbondhu.utils.config import load_station_columns, load_yaml


def test_load_yaml_and_columns(tmp_path):
    cfg_path = tmp_path / "cfg.yml"
    cfg_path.write_text("station_columns:\n  station_code: 1\n  danger_flow_level: '5'\n", encoding="utf-8")
    cfg = load_yaml(str(cfg_path))
    assert load_station_columns(cfg) == {"station_code": 1, "danger_flow_level": 5}


def test_load_station_columns_absent():
    assert load_station_columns({}) is None


def test_load_station_columns_invalid():
    with pytest.raises(ValueError):
        load_station_columns({"station_columns": {"lat": "north"}})


def test_load_yaml_rejects_non_mapping(tmp_path):
    cfg_path = tmp_path / "list.yml"
    cfg_path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(str(cfg_path))


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(str(tmp_path / "nope.yml"))


def test_shipped_config_matches_defaults():
    cfg = load_yaml(str(Path(__file__).resolve().parents[1] / "config" / "jolbondhu.yml"))
    assert cfg["station_risk_ratio"] == {"high": 0.95, "medium": 0.80}
    assert SimulationParameters.from_mapping(cfg["simulation_defaults"]) == SimulationParameters()
