"""
Pipeline
========

The analysis is a straight line:

    load -> normalize event types -> resolve damage + aggregate -> rank

Each stage receives the previous stage's output as an argument and returns a
new value; nothing is shared or edited in place.

The export helpers write the rankings as CSV (one long table) or JSON
(one list per metric).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence
import csv
import json
import logging
import os

from .aggregate import aggregate
from .loader import load_storm_csv
from .models import EventAggregate, StormRecord
from .normalize import normalize_records
from .ranking import METRICS, Rankings, rank_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StormSummary:
    """Everything the report needs, computed from one input file."""
    record_count: int
    aggregates: Dict[str, EventAggregate]
    rankings: Rankings
    collapse: bool = True

    @property
    def event_type_count(self) -> int:
        return len(self.aggregates)


def run_pipeline(records: Sequence[StormRecord], *, top: int = 10, collapse: bool = True) -> StormSummary:
    """Normalize, aggregate and rank already-loaded records."""
    cleaned = normalize_records(records, collapse=collapse)
    aggregates = aggregate(cleaned, normalized=True)
    logger.info("Aggregated %d records into %d event types", len(cleaned), len(aggregates))
    rankings = rank_all(aggregates, n=top)
    return StormSummary(
        record_count=len(cleaned),
        aggregates=aggregates,
        rankings=rankings,
        collapse=collapse,
    )


def analyze_file(path: str, *, top: int = 10, collapse: bool = True, skip_malformed: bool = False) -> StormSummary:
    """Load the CSV at `path` and run the whole pipeline."""
    records = load_storm_csv(path, skip_malformed=skip_malformed)
    return run_pipeline(records, top=top, collapse=collapse)


def _ensure_parent(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def export_rankings_csv(rankings: Rankings, path: str) -> None:
    """Write all four rankings as rows of `metric,rank,event_type,value`."""
    _ensure_parent(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["metric", "rank", "event_type", "value"])
        for m in METRICS:
            for rank, (event_type, value) in enumerate(rankings.pairs(m), start=1):
                w.writerow([m, rank, event_type, value])


def export_rankings_json(rankings: Rankings, path: str) -> None:
    """Write the rankings as `{metric: [{rank, event_type, value}, ...]}`."""
    _ensure_parent(path)
    payload = {
        m: [
            {"rank": rank, "event_type": event_type, "value": value}
            for rank, (event_type, value) in enumerate(rankings.pairs(m), start=1)
        ]
        for m in METRICS
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
