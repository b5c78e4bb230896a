"""
Aggregator
==========

Collapses the record list into one `EventAggregate` per normalized event
type, summing fatalities, injuries, property damage and crop damage.

A bad exponent code anywhere aborts the whole aggregation: there is no
"best effort" result with some records silently missing.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Union

from .damage import InvalidExponentCode, damage_value
from .models import EventAggregate, StormRecord
from .normalize import normalize_event_type


def _count(total: float) -> Union[int, float]:
    return int(total) if total.is_integer() else total


def aggregate(
    records: Iterable[StormRecord],
    *,
    collapse: bool = True,
    normalized: bool = False,
) -> Dict[str, EventAggregate]:
    """Group records by normalized event type and sum the four metrics.

    Pass `normalized=True` when the records already went through
    `normalize_records`; their event types are then used as given.
    Casualty totals come back as `int` when they are whole numbers.
    Groups whose sums are all zero are kept; filtering is the ranker's job.

    Raises:
        InvalidExponentCode: with `row_id` set to the offending record.
    """
    # event type -> [fatalities, injuries, property damage, crop damage]
    sums: Dict[str, List[float]] = {}

    for r in records:
        try:
            prop = damage_value(r.prop_dmg, r.prop_dmg_exp)
            crop = damage_value(r.crop_dmg, r.crop_dmg_exp)
        except InvalidExponentCode as e:
            e.row_id = r.row_id
            raise
        key = r.event_type if normalized else normalize_event_type(r.event_type, collapse=collapse)
        acc = sums.setdefault(key, [0.0, 0.0, 0.0, 0.0])
        acc[0] += r.fatalities
        acc[1] += r.injuries
        acc[2] += prop
        acc[3] += crop

    return {
        key: EventAggregate(
            event_type=key,
            fatalities=_count(acc[0]),
            injuries=_count(acc[1]),
            property_damage=acc[2],
            crop_damage=acc[3],
        )
        for key, acc in sums.items()
    }
