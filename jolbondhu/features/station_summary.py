"""
Risk summaries over normalized gauge stations.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

import pandas as pd

from jolbondhu.core.models import RISK_LEVELS, StationRecord

logger = logging.getLogger(__name__)


def stations_to_frame(records: Iterable[StationRecord]) -> pd.DataFrame:
    """Tabulate station records, one row per station."""
    rows = [record.to_dict() for record in records]
    if not rows:
        return pd.DataFrame(columns=["id", "district", "riskLevel"])
    return pd.DataFrame(rows)


def summarize_stations(records: Iterable[StationRecord]) -> Dict[str, Any]:
    """
    Count stations per risk tier, overall and per district.

    Returns a dict with:
      - total: number of stations
      - by_risk: High/Medium/Low counts (always all three keys)
      - by_district: district -> High/Medium/Low counts
    """
    df = stations_to_frame(records)
    by_risk = {level: 0 for level in RISK_LEVELS}
    if df.empty:
        return {"total": 0, "by_risk": by_risk, "by_district": {}}

    by_risk.update({str(k): int(v) for k, v in df["riskLevel"].value_counts().items()})

    district_counts = (
        df.groupby(["district", "riskLevel"]).size().unstack(fill_value=0)
        .reindex(columns=list(RISK_LEVELS), fill_value=0)
    )
    by_district = {
        str(district): {level: int(row[level]) for level in RISK_LEVELS}
        for district, row in district_counts.iterrows()
    }
    return {"total": int(len(df)), "by_risk": by_risk, "by_district": by_district}


def filter_stations(records: Iterable[StationRecord], risk: str = "all") -> List[StationRecord]:
    """Stations of one risk tier (case-insensitive); "all" keeps everything."""
    wanted = risk.strip().lower()
    if wanted == "all":
        return list(records)
    if wanted not in {level.lower() for level in RISK_LEVELS}:
        raise ValueError(f"Unknown risk filter: {risk}")
    return [record for record in records if record.risk_level.lower() == wanted]
