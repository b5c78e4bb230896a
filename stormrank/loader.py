"""
Dataset loader (CSV -> StormRecord list)
========================================

Reads the NOAA storm CSV (plain or compressed, e.g. `StormData.csv.bz2`)
and converts each row into a `StormRecord`.

Key ideas:
- Only the seven columns we need are read; the other ~30 are ignored.
- Everything is read as text, so exponent codes such as "+", "?" or "0"
  reach the damage resolver exactly as written in the file.
- Column names are matched tolerantly (case and punctuation insensitive).
- `EVTYPE` is passed through untouched; trimming is left to the normalizer.
- A malformed row fails on its own (`MalformedRecordError`) instead of
  leaking a bad number into the sums. `skip_malformed=True` drops it with a
  warning instead.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import logging
import math
import re

import pandas as pd

from .models import StormRecord

logger = logging.getLogger(__name__)

# field -> accepted column names (first match wins)
COLUMNS: Dict[str, Sequence[str]] = {
    "event_type": ("EVTYPE", "EVENT_TYPE", "Event Type"),
    "fatalities": ("FATALITIES", "DEATHS", "DEATHS_DIRECT"),
    "injuries": ("INJURIES", "INJURIES_DIRECT"),
    "prop_dmg": ("PROPDMG", "PROP_DMG", "Property Damage"),
    "prop_dmg_exp": ("PROPDMGEXP", "PROP_DMG_EXP", "Property Damage Exp"),
    "crop_dmg": ("CROPDMG", "CROP_DMG", "Crop Damage"),
    "crop_dmg_exp": ("CROPDMGEXP", "CROP_DMG_EXP", "Crop Damage Exp"),
}

_NUMERIC_FIELDS = ("fatalities", "injuries", "prop_dmg", "crop_dmg")


class MalformedRecordError(ValueError):
    """A row whose casualty or magnitude field is not a non-negative number."""

    def __init__(self, row_id: int, field: str, value: str) -> None:
        super().__init__(f"Row {row_id}: field {field!r} is not a non-negative number: {value!r}")
        self.row_id = row_id
        self.field = field
        self.value = value


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(columns: Sequence[str], *names: str) -> str:
    cols = list(columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")


def _to_number(x: Optional[str], row_id: int, field: str) -> float:
    """Convert a cell to a non-negative float; blank cells count as 0."""
    s = "" if x is None else str(x).strip()
    if not s:
        return 0.0
    try:
        v = float(s)
    except ValueError:
        raise MalformedRecordError(row_id, field, s) from None
    if not math.isfinite(v) or v < 0:
        raise MalformedRecordError(row_id, field, s)
    return v


def _to_str(x: Optional[str]) -> str:
    if x is None:
        return ""
    return str(x).strip()


def _to_raw(x: Optional[str]) -> str:
    return "" if x is None else str(x)


def resolve_columns(columns: Sequence[str]) -> Dict[str, str]:
    """Map each `StormRecord` field to the matching column of the file."""
    return {f: _col(columns, *names) for f, names in COLUMNS.items()}


def records_from_frame(df: pd.DataFrame, *, skip_malformed: bool = False) -> List[StormRecord]:
    """Convert an all-text DataFrame into `StormRecord`s."""
    mapping = resolve_columns([str(c).strip() for c in df.columns])
    df = df.rename(columns={c: str(c).strip() for c in df.columns})
    logger.debug("Column mapping: %s", mapping)

    cells = {f: df[c].tolist() for f, c in mapping.items()}
    records: List[StormRecord] = []
    skipped = 0
    for i in range(len(df)):
        try:
            nums = {f: _to_number(cells[f][i], i, f) for f in _NUMERIC_FIELDS}
        except MalformedRecordError as e:
            if not skip_malformed:
                raise
            logger.warning("Skipping malformed record: %s", e)
            skipped += 1
            continue
        records.append(StormRecord(
            row_id=i,
            event_type=_to_raw(cells["event_type"][i]),
            fatalities=nums["fatalities"],
            injuries=nums["injuries"],
            prop_dmg=nums["prop_dmg"],
            prop_dmg_exp=_to_str(cells["prop_dmg_exp"][i]),
            crop_dmg=nums["crop_dmg"],
            crop_dmg_exp=_to_str(cells["crop_dmg_exp"][i]),
        ))
    if skipped:
        logger.warning("Skipped %d malformed records", skipped)
    return records


def load_storm_csv(path: str, *, skip_malformed: bool = False) -> List[StormRecord]:
    """Read the storm CSV at `path` (compression inferred from the suffix).

    Raises:
        KeyError: a required column is missing.
        MalformedRecordError: a numeric field is invalid (unless skipped).
    """
    header = pd.read_csv(path, nrows=0, compression="infer")
    mapping = resolve_columns([str(c).strip() for c in header.columns])
    wanted = set(mapping.values())
    df = pd.read_csv(
        path,
        compression="infer",
        dtype=str,
        keep_default_na=False,
        usecols=lambda c: str(c).strip() in wanted,
    )
    records = records_from_frame(df, skip_malformed=skip_malformed)
    logger.info("Loaded %d storm records from %s", len(records), path)
    return records
