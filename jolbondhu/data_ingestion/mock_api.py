"""
JSON-Server mock backend integration.

Reads collections (e.g. basins) from the mock REST API, publishes normalized
stations to it, and merges stations straight into a db.json snapshot when the
server is not running.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import requests

from jolbondhu.core.models import StationRecord

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10
STATION_COLLECTION = "waterLevels"


def _collection_url(base_url: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/{name}"


def fetch_collection(base_url: str, name: str) -> List[Dict[str, Any]]:
    """
    Fetch every item of a JSON-Server collection.

    Raises:
        requests.RequestException on network issues.
        ValueError if the response is not a JSON array.
    """
    url = _collection_url(base_url, name)
    logger.info("Fetching %s from %s", name, url)
    try:
        resp = requests.get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.error("Mock API request failed for %s: %s", name, exc)
        raise

    try:
        payload = resp.json()
    except ValueError as exc:
        logger.error("Invalid JSON from mock API for %s: %s", name, exc)
        raise

    if not isinstance(payload, list):
        msg = f"Expected a list for collection {name}, got {type(payload).__name__}"
        logger.error(msg)
        raise ValueError(msg)
    return payload


def publish_stations(base_url: str, records: Iterable[StationRecord]) -> Dict[str, Dict[str, Any]]:
    """
    POST each station to the mock API's waterLevels collection.

    Returns:
        Dict keyed by station id with either the created item or error info.
    """
    url = _collection_url(base_url, STATION_COLLECTION)
    results: Dict[str, Dict[str, Any]] = {}

    for record in records:
        try:
            resp = requests.post(url, json=record.to_dict(), timeout=REQUEST_TIMEOUT)
            resp.raise_for_status()
            results[record.id] = resp.json()
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to publish station %s: %s", record.id, exc)
            results[record.id] = {"id": record.id, "error": str(exc)}

    failed = sum(1 for item in results.values() if "error" in item)
    logger.info("Published %d stations to %s (%d failed)", len(results) - failed, url, failed)
    return results


def merge_into_db(
    db_path: str,
    records: Iterable[StationRecord],
    collection: str = STATION_COLLECTION,
) -> List[str]:
    """
    Replace one collection of a JSON-Server db.json with the given stations.

    Other collections are kept as they are.

    Returns:
        Sorted collection names present in the written file.
    """
    path = Path(db_path)
    if not path.exists():
        raise FileNotFoundError(f"Mock database not found at {db_path}")

    with path.open("r", encoding="utf-8") as f:
        db = json.load(f)
    if not isinstance(db, dict):
        raise ValueError(f"Mock database at {db_path} is not an object")

    db[collection] = [record.to_dict() for record in records]
    with path.open("w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)

    logger.info("Added %d stations to %s as %s", len(db[collection]), db_path, collection)
    return sorted(db.keys())
