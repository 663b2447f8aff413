"""
What-if simulation across basins.

Fans a single parameter set out over many basins with bounded per-basin jitter.
The random source is passed in, so seeding it makes the output reproducible.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from jolbondhu.core.models import SimulationParameters
from jolbondhu.core.risk_logic import classify_risk, estimate_water_level
from jolbondhu.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

# Multiplicative (low, high) bounds applied per basin.
JITTER_BOUNDS: Dict[str, Tuple[float, float]] = {
    "rainfall": (0.8, 1.2),
    "blockage": (0.7, 1.3),
    "soil_saturation": (0.9, 1.1),
}


def jitter_parameters(params: SimulationParameters, rng: random.Random) -> SimulationParameters:
    """Scale each parameter by a uniform factor drawn from JITTER_BOUNDS."""
    return SimulationParameters(
        rainfall=params.rainfall * rng.uniform(*JITTER_BOUNDS["rainfall"]),
        blockage=params.blockage * rng.uniform(*JITTER_BOUNDS["blockage"]),
        soil_saturation=params.soil_saturation * rng.uniform(*JITTER_BOUNDS["soil_saturation"]),
    )


def simulate_basin(basin: Mapping[str, Any], params: SimulationParameters) -> Dict[str, Any]:
    """
    Overlay simulated values on a basin record.

    Args:
        basin: Basin data as received (any mapping, e.g. from the mock API).
        params: Parameters to evaluate for this basin.

    Returns:
        Copy of the basin with riskLevel, rainfall, drainageBlockage,
        soilSaturation, estimatedWaterLevel and isSimulated set.
    """
    simulated = dict(basin)
    simulated.update(
        {
            "riskLevel": classify_risk(params),
            "rainfall": params.rainfall,
            "drainageBlockage": params.blockage,
            "soilSaturation": params.soil_saturation,
            "estimatedWaterLevel": estimate_water_level(params),
            "isSimulated": True,
        }
    )
    return simulated


def simulate_basins(
    basins: Iterable[Mapping[str, Any]],
    params: SimulationParameters,
    rng: Optional[random.Random] = None,
) -> List[Dict[str, Any]]:
    """
    Simulate every basin with independently jittered parameters.

    Non-deterministic unless a seeded `rng` is supplied.
    """
    rng = rng or random.Random()
    results = [simulate_basin(basin, jitter_parameters(params, rng)) for basin in basins]
    logger.debug("Simulated %d basins with %s", len(results), params)
    return results


def generate_rainfall_chart_data(
    params: SimulationParameters,
    hours: int = 6,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Build an hourly rainfall series ending at `now` for the simulation chart.

    Values ramp up toward the configured rainfall with random variation and are
    capped at the whole-number part of `params.rainfall`; every value is an int.
    """
    rng = rng or random.Random()
    now = now or datetime.now()
    data = []
    for i in range(hours):
        hour = now - timedelta(hours=hours - 1 - i)
        variation = 0.5 + rng.random()
        rainfall = int(round_half_up(params.rainfall * variation * (i + 1) / hours, 0))
        data.append(
            {
                "time": hour.strftime("%H:%M"),
                "rainfall": min(rainfall, int(params.rainfall)),
            }
        )
    return data
