"""
Record types shared by the station normalizer and the simulation classifier.

Attributes are snake_case; `to_dict` emits the camelCase keys the dashboard and
the mock API expect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

HIGH = "High"
MEDIUM = "Medium"
LOW = "Low"
RISK_LEVELS = (HIGH, MEDIUM, LOW)


@dataclass(frozen=True)
class StationRecord:
    """One river/water-level gauge station, normalized from the CSV snapshot."""

    id: str
    station_code: str
    name: str
    lat: Optional[float]
    lon: Optional[float]
    district: str
    rc_name: str
    river_name: str
    basin_name: str
    high_flow_level: Optional[float]
    danger_flow_level: Optional[float]
    warning_flow_level: Optional[float]
    current_flow_level: Optional[float]
    risk_level: str
    type: str = ""
    last_update: str = ""
    risk_color: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "stationCode": self.station_code,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "district": self.district,
            "rcName": self.rc_name,
            "riverName": self.river_name,
            "basinName": self.basin_name,
            "highFlowLevel": self.high_flow_level,
            "dangerFlowLevel": self.danger_flow_level,
            "warningFlowLevel": self.warning_flow_level,
            "currentFlowLevel": self.current_flow_level,
            "riskLevel": self.risk_level,
            "type": self.type,
            "lastUpdate": self.last_update,
            "riskColor": self.risk_color,
        }


@dataclass(frozen=True)
class SimulationParameters:
    """Slider inputs for the what-if model: mm/h rainfall and two percentages."""

    rainfall: float = 50
    blockage: float = 30
    soil_saturation: float = 50

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SimulationParameters":
        """Build from a plain dict; soil saturation may be camelCase or snake_case."""
        data = data or {}
        defaults = cls()
        saturation = data.get("soilSaturation", data.get("soil_saturation", defaults.soil_saturation))
        return cls(
            rainfall=float(data.get("rainfall", defaults.rainfall)),
            blockage=float(data.get("blockage", defaults.blockage)),
            soil_saturation=float(saturation),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "rainfall": self.rainfall,
            "blockage": self.blockage,
            "soilSaturation": self.soil_saturation,
        }


@dataclass(frozen=True)
class RiskAssessment:
    risk_level: str
    estimated_water_level: float
    inputs: SimulationParameters = field(default_factory=SimulationParameters)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskLevel": self.risk_level,
            "estimatedWaterLevel": self.estimated_water_level,
            "inputs": self.inputs.to_dict(),
        }
