"""
Water-level gauge table ingestion.

Normalizes rows of the Assam water-level station CSV into StationRecord objects
and derives a risk tier per station from its current/danger flow-level ratio.
The source table has no reliable header, so fields are read by position.
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from jolbondhu.core.models import StationRecord
from jolbondhu.core.risk_logic import classify_station_risk
from jolbondhu.utils.numeric import parse_float_or_none

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS: Dict[str, int] = {
    "sequence": 0,
    "station_code": 2,
    "lat": 3,
    "lon": 4,
    "name": 6,
    "type": 7,
    "district": 9,
    "rc_name": 10,
    "high_flow_level": 11,
    "danger_flow_level": 12,
    "warning_flow_level": 13,
    "current_flow_level": 14,
    "river_name": 15,
    "basin_name": 16,
    "last_update": 17,
    "risk_color": 18,
}

NUMERIC_FIELDS = (
    "lat",
    "lon",
    "high_flow_level",
    "danger_flow_level",
    "warning_flow_level",
    "current_flow_level",
)
TEXT_FIELDS = (
    "station_code",
    "name",
    "type",
    "district",
    "rc_name",
    "river_name",
    "basin_name",
    "last_update",
    "risk_color",
)


def _resolve_columns(columns: Optional[Dict[str, int]]) -> Dict[str, int]:
    # An explicit mapping replaces the default one; unmapped fields read as empty.
    return DEFAULT_COLUMNS if columns is None else dict(columns)


def _field(raw_fields: Sequence[str], columns: Dict[str, int], name: str) -> str:
    index = columns.get(name)
    if index is None or index >= len(raw_fields):
        return ""
    value = raw_fields[index]
    return "" if value is None else str(value).strip()


def normalize_station(
    raw_fields: Sequence[str],
    sequence_number: Union[int, str],
    columns: Optional[Dict[str, int]] = None,
    thresholds: Optional[Dict[str, float]] = None,
) -> StationRecord:
    """
    Convert one positional gauge-table row into a StationRecord.

    Args:
        raw_fields: Field values of one row, in column order.
        sequence_number: Used to build the record id (`wl_<sequence_number>`).
        columns: Field name -> column index. Defaults to DEFAULT_COLUMNS; when
            given it is used as-is and fields it leaves out stay empty/None.
        thresholds: Optional ratio cut-offs passed to classify_station_risk.

    Returns:
        StationRecord with risk_level already derived. Unparseable numeric
        fields become None.
    """
    cols = _resolve_columns(columns)
    numbers = {name: parse_float_or_none(_field(raw_fields, cols, name)) for name in NUMERIC_FIELDS}
    texts = {name: _field(raw_fields, cols, name) for name in TEXT_FIELDS}

    risk = classify_station_risk(
        numbers["current_flow_level"],
        numbers["danger_flow_level"],
        thresholds,
    )
    return StationRecord(id=f"wl_{sequence_number}", risk_level=risk, **numbers, **texts)


def _required_width(columns: Dict[str, int]) -> int:
    return max(columns.values(), default=-1) + 1


def read_station_table(
    csv_path: str,
    columns: Optional[Dict[str, int]] = None,
    thresholds: Optional[Dict[str, float]] = None,
) -> List[StationRecord]:
    """
    Read a gauge-station CSV and normalize every complete row.

    The first line is a header and is skipped; its width plays no part, each
    data row keeps all of its own fields. Rows with fewer fields than the
    column mapping needs are skipped and logged. The `sequence` column (the
    table's serial number) supplies the id; the 1-based row index is used if
    it is blank or unmapped.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Station table not found at {csv_path}")

    cols = _resolve_columns(columns)
    width = _required_width(cols)

    text = path.read_text(encoding="utf-8")
    # Upper bound on fields per line, so pandas never truncates a wide row.
    max_fields = max((line.count(",") + 1 for line in text.splitlines()), default=1)

    df = pd.read_csv(
        io.StringIO(text),
        header=None,
        skiprows=1,
        names=list(range(max(max_fields, width))),
        index_col=False,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )

    records: List[StationRecord] = []
    skipped = 0
    for row_number, row in enumerate(df.itertuples(index=False, name=None), start=1):
        # pandas pads short rows with NaN; real empty fields stay "".
        fields = [value for value in row if not pd.isna(value)]
        if len(fields) < width:
            skipped += 1
            logger.warning(
                "Skipping station row %d: %d fields, %d required",
                row_number,
                len(fields),
                width,
            )
            continue
        sequence = _field(fields, cols, "sequence") or str(row_number)
        records.append(normalize_station(fields, sequence, cols, thresholds))

    logger.info("Normalized %d stations from %s (%d skipped)", len(records), csv_path, skipped)
    return records


def write_station_json(records: Iterable[StationRecord], output_path: str) -> str:
    """Write station records as a JSON array and return the path written."""
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.to_dict() for record in records]
    with out.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    logger.info("Wrote %d stations to %s", len(payload), out)
    return str(out)
