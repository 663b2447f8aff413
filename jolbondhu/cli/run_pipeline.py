"""
CLI entrypoint for the JolBondhu flood-risk core.

Usage:
    python -m jolbondhu.cli.run_pipeline normalize --csv water_level_data.csv --out water_levels.json
    python -m jolbondhu.cli.run_pipeline simulate --rainfall 120 --blockage 60 --basins basins.json --seed 7
    python -m jolbondhu.cli.run_pipeline summary --csv water_level_data.csv
"""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from jolbondhu.core.models import SimulationParameters
from jolbondhu.core.risk_logic import assess
from jolbondhu.core.simulation import generate_rainfall_chart_data, simulate_basins
from jolbondhu.data_ingestion.mock_api import fetch_collection, merge_into_db, publish_stations
from jolbondhu.data_ingestion.station_csv import read_station_table, write_station_json
from jolbondhu.features.station_summary import summarize_stations
from jolbondhu.utils.config import DEFAULT_CONFIG_PATH, load_station_columns, load_yaml
from jolbondhu.utils.logger import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_MOCK_API_URL = "http://localhost:3001"


def _load_config(path: Optional[str]) -> Dict[str, Any]:
    if path:
        return load_yaml(path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_yaml(DEFAULT_CONFIG_PATH)
    return {}


def run_normalize(
    csv_path: str,
    cfg: Dict[str, Any],
    out_path: Optional[str] = None,
    db_path: Optional[str] = None,
    publish_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Normalize the station table and send it wherever requested."""
    records = read_station_table(
        csv_path,
        columns=load_station_columns(cfg),
        thresholds=cfg.get("station_risk_ratio"),
    )
    result: Dict[str, Any] = {"stations": [r.to_dict() for r in records]}
    if out_path:
        result["written_to"] = write_station_json(records, out_path)
    if db_path:
        result["db_collections"] = merge_into_db(db_path, records)
    if publish_url:
        result["published"] = publish_stations(publish_url, records)
    return result


def _load_basins(source: str, cfg: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Basins come from a JSON file, or from the mock API when source is 'api'."""
    if source == "api":
        base_url = (cfg.get("mock_api") or {}).get("base_url", DEFAULT_MOCK_API_URL)
        return fetch_collection(base_url, "basins")
    with Path(source).open("r", encoding="utf-8") as f:
        data = json.load(f)
    # Accept either a bare list or a db.json snapshot.
    if isinstance(data, dict):
        data = data.get("basins", [])
    if not isinstance(data, list):
        raise ValueError(f"No basin list found in {source}")
    return data


def run_simulate(
    params: SimulationParameters,
    cfg: Dict[str, Any],
    basins_source: Optional[str] = None,
    seed: Optional[int] = None,
    hours: int = 6,
) -> Dict[str, Any]:
    """Assess one parameter set, optionally fanned out over basins."""
    rng = random.Random(seed)
    result: Dict[str, Any] = {
        "assessment": assess(params).to_dict(),
        "rainfall_chart": generate_rainfall_chart_data(params, hours=hours, rng=rng),
    }
    if basins_source:
        basins = _load_basins(basins_source, cfg)
        result["basins"] = simulate_basins(basins, params, rng)
    return result


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="JolBondhu flood-risk tools.")
    parser.add_argument("--config", default=None, help=f"Path to config YAML (default {DEFAULT_CONFIG_PATH}).")
    parser.add_argument(
        "--loglevel",
        default=None,
        help="Logging level (e.g., INFO, DEBUG). Overrides LOGLEVEL env.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    norm = sub.add_parser("normalize", help="Convert the gauge CSV to station JSON.")
    norm.add_argument("--csv", required=True, help="Path to water-level station CSV.")
    norm.add_argument("--out", default=None, help="Write the station JSON array here.")
    norm.add_argument("--db", default=None, help="Merge stations into this JSON-Server db.json.")
    norm.add_argument("--publish", default=None, help="POST stations to this mock API base URL.")

    sim = sub.add_parser("simulate", help="Run the what-if risk model.")
    sim.add_argument("--rainfall", type=float, default=None, help="Rainfall intensity (mm/h).")
    sim.add_argument("--blockage", type=float, default=None, help="Drainage blockage (%%).")
    sim.add_argument("--soil-saturation", type=float, default=None, help="Soil saturation (%%).")
    sim.add_argument("--basins", default=None, help="Basin JSON file, or 'api' to fetch from the mock API.")
    sim.add_argument("--seed", type=int, default=None, help="Seed for per-basin jitter.")
    sim.add_argument("--hours", type=int, default=6, help="Hours of rainfall chart data.")

    summ = sub.add_parser("summary", help="Count stations per risk tier and district.")
    summ.add_argument("--csv", required=True, help="Path to water-level station CSV.")

    args = parser.parse_args(argv)

    configure_logging(level=args.loglevel)
    cfg = _load_config(args.config)
    logger.info("Running %s", args.command)

    if args.command == "normalize":
        result = run_normalize(args.csv, cfg, args.out, args.db, args.publish)
    elif args.command == "simulate":
        defaults = SimulationParameters.from_mapping(cfg.get("simulation_defaults"))
        params = SimulationParameters(
            rainfall=defaults.rainfall if args.rainfall is None else args.rainfall,
            blockage=defaults.blockage if args.blockage is None else args.blockage,
            soil_saturation=defaults.soil_saturation if args.soil_saturation is None else args.soil_saturation,
        )
        result = run_simulate(params, cfg, args.basins, args.seed, args.hours)
    else:
        records = read_station_table(
            args.csv,
            columns=load_station_columns(cfg),
            thresholds=cfg.get("station_risk_ratio"),
        )
        result = summarize_stations(records)

    print(json.dumps(result, default=str, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
