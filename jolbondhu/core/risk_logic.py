"""
Rule-based flood risk logic.

Two independent rule sets live here: the gauge-station tier derived from the
current/danger flow-level ratio, and the what-if simulation tier and water
level derived from rainfall, drainage blockage and soil saturation.
"""

from __future__ import annotations

from typing import Dict, Optional

from jolbondhu.core.models import HIGH, LOW, MEDIUM, RiskAssessment, SimulationParameters
from jolbondhu.utils.numeric import round_half_up

DEFAULT_RATIO_THRESHOLDS: Dict[str, float] = {"high": 0.95, "medium": 0.80}

# Soil saturation adds up to this many mm/h of effective rainfall at 100%.
SATURATION_RAINFALL_BONUS = 20.0


def classify_station_risk(
    current_level: Optional[float],
    danger_level: Optional[float],
    thresholds: Optional[Dict[str, float]] = None,
) -> str:
    """
    Classify a gauge station from its current and danger flow levels.

    Missing readings or a zero danger level yield Low rather than a ratio.
    `thresholds` may override either cut-off; the other keeps its default.
    """
    if current_level is None or danger_level is None or danger_level == 0:
        return LOW
    cutoffs = {**DEFAULT_RATIO_THRESHOLDS, **(thresholds or {})}
    ratio = current_level / danger_level
    if ratio >= cutoffs["high"]:
        return HIGH
    if ratio >= cutoffs["medium"]:
        return MEDIUM
    return LOW


def effective_rainfall(params: SimulationParameters) -> float:
    """Rainfall intensity raised by reduced soil absorption."""
    return params.rainfall + (params.soil_saturation / 100) * SATURATION_RAINFALL_BONUS


def classify_risk(params: SimulationParameters) -> str:
    """
    Classify simulation inputs into High/Medium/Low.

    Rules are evaluated in order and the first match wins. The Low rule checks
    raw rainfall, not effective rainfall.
    """
    eff_rain = effective_rainfall(params)
    blockage = params.blockage

    if eff_rain > 100 and blockage > 50:
        return HIGH
    if eff_rain > 150:
        return HIGH
    if blockage > 80 and eff_rain > 60:
        return HIGH
    if params.rainfall < 30 and blockage < 40:
        return LOW
    return MEDIUM


def estimate_water_level(params: SimulationParameters) -> float:
    """
    Estimate water level in meters from simulation inputs.

    Rainfall (mm) maps to a base level, amplified linearly by blockage and by up
    to 50% from soil saturation. Rounded to centimeters, never negative.
    """
    base_level = (params.rainfall / 1000) * 3
    base_level *= 1 + params.blockage / 100
    base_level *= 1 + (params.soil_saturation / 100) * 0.5
    return max(0.0, round_half_up(base_level, 2))


def assess(params: SimulationParameters) -> RiskAssessment:
    """Run both simulation rule sets for one parameter set."""
    return RiskAssessment(
        risk_level=classify_risk(params),
        estimated_water_level=estimate_water_level(params),
        inputs=params,
    )
