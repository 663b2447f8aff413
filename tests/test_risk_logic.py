import pytest

from jolbondhu.core.models import HIGH, LOW, MEDIUM, SimulationParameters
from jolbondhu.core.risk_logic import (
    assess,
    classify_risk,
    classify_station_risk,
    effective_rainfall,
    estimate_water_level,
)


@pytest.mark.parametrize(
    "current, expected",
    [
        (9.5, HIGH),
        (12.0, HIGH),
        (9.4999, MEDIUM),
        (8.0, MEDIUM),
        (7.9999, LOW),
        (0.0, LOW),
    ],
)
def test_station_ratio_boundaries(current, expected):
    assert classify_station_risk(current, 10.0) == expected


def test_station_missing_danger_level_is_low():
    assert classify_station_risk(50.0, None) == LOW
    assert classify_station_risk(None, 10.0) == LOW


def test_station_zero_danger_level_is_low():
    assert classify_station_risk(5.0, 0.0) == LOW


def test_station_custom_thresholds():
    thresholds = {"high": 1.0, "medium": 0.9}
    assert classify_station_risk(9.5, 10.0, thresholds) == MEDIUM
    assert classify_station_risk(10.0, 10.0, thresholds) == HIGH


def test_effective_rainfall_adds_saturation_bonus():
    assert effective_rainfall(SimulationParameters(50, 0, 100)) == 70
    assert effective_rainfall(SimulationParameters(50, 0, 0)) == 50


def test_risk_high_by_rain_and_blockage():
    assert classify_risk(SimulationParameters(rainfall=120, blockage=60, soil_saturation=0)) == HIGH


def test_risk_high_by_extreme_rain_without_blockage():
    assert classify_risk(SimulationParameters(rainfall=160, blockage=0, soil_saturation=0)) == HIGH


def test_risk_high_by_extreme_blockage():
    assert classify_risk(SimulationParameters(rainfall=70, blockage=85, soil_saturation=0)) == HIGH


def test_risk_extreme_blockage_needs_moderate_rain():
    assert classify_risk(SimulationParameters(rainfall=20, blockage=90, soil_saturation=0)) == MEDIUM


def test_risk_saturation_pushes_rain_over_threshold():
    # 95 + 20 = 115 effective
    assert classify_risk(SimulationParameters(rainfall=95, blockage=60, soil_saturation=100)) == HIGH
    assert classify_risk(SimulationParameters(rainfall=95, blockage=60, soil_saturation=0)) == MEDIUM


def test_risk_low_uses_raw_rainfall():
    # effective rainfall is 45 but raw rainfall is below 30
    params = SimulationParameters(rainfall=25, blockage=10, soil_saturation=100)
    assert classify_risk(params) == LOW


def test_risk_medium_catch_all():
    assert classify_risk(SimulationParameters(rainfall=50, blockage=30, soil_saturation=50)) == MEDIUM
    assert classify_risk(SimulationParameters(rainfall=10, blockage=40, soil_saturation=0)) == MEDIUM


def test_water_level_example():
    # 0.15 * 1.3 * 1.25 = 0.24375
    assert estimate_water_level(SimulationParameters(rainfall=50, blockage=30, soil_saturation=50)) == 0.24


def test_water_level_zero_rain():
    assert estimate_water_level(SimulationParameters(rainfall=0, blockage=100, soil_saturation=100)) == 0.0


def test_water_level_clamped_for_negative_rain():
    assert estimate_water_level(SimulationParameters(rainfall=-100, blockage=0, soil_saturation=0)) == 0.0


def test_water_level_monotonic_in_blockage():
    levels = [
        estimate_water_level(SimulationParameters(rainfall=120, blockage=b, soil_saturation=40))
        for b in range(0, 101, 5)
    ]
    assert levels == sorted(levels)


def test_water_level_monotonic_in_saturation():
    levels = [
        estimate_water_level(SimulationParameters(rainfall=120, blockage=40, soil_saturation=s))
        for s in range(0, 101, 5)
    ]
    assert levels == sorted(levels)


def test_out_of_domain_inputs_do_not_raise():
    params = SimulationParameters(rainfall=-5, blockage=250, soil_saturation=-40)
    assert classify_risk(params) in (HIGH, MEDIUM, LOW)
    assert estimate_water_level(params) >= 0


def test_assess_is_idempotent():
    params = SimulationParameters(rainfall=88, blockage=47, soil_saturation=63)
    first = assess(params)
    second = assess(params)
    assert first == second
    assert first.risk_level == classify_risk(params)
    assert first.estimated_water_level == estimate_water_level(params)
    assert first.to_dict()["inputs"] == {"rainfall": 88, "blockage": 47, "soilSaturation": 63}


def test_station_partial_thresholds_keep_defaults():
    assert classify_station_risk(8.5, 10.0, {"high": 0.9}) == MEDIUM
    assert classify_station_risk(5.0, 10.0, {"high": 0.9}) == LOW
    assert classify_station_risk(9.2, 10.0, {"high": 0.9}) == HIGH
    assert classify_station_risk(8.5, 10.0, {"medium": 0.86}) == LOW
