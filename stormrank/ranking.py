"""
Top-N ranker
============

Produces the four rankings the report is built from:

- fatalities        (population health)
- injuries          (population health)
- property_damage   (economic cost)
- crop_damage       (economic cost)

For the two damage rankings, event types that recorded *no* economic loss at
all (property == 0 and crop == 0) are dropped before ranking. It is one
combined filter: an event with only crop damage still shows up in the
property ranking's candidate pool.

Ties on the metric are broken by event type, ascending, so the output is
reproducible.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple, Union
import heapq

from .models import EventAggregate

METRICS: Tuple[str, ...] = ("fatalities", "injuries", "property_damage", "crop_damage")
DAMAGE_METRICS = frozenset({"property_damage", "crop_damage"})

METRIC_LABELS: Dict[str, str] = {
    "fatalities": "Fatalities",
    "injuries": "Injuries",
    "property_damage": "Property Damage (US$)",
    "crop_damage": "Crop Damage (US$)",
}

Aggregates = Union[Mapping[str, EventAggregate], Iterable[EventAggregate]]


def metric_key(name: str) -> str:
    """Resolve a metric name or alias to one of `METRICS`."""
    f = name.lower().strip().replace("-", "_")
    if f in ("fatalities", "deaths", "fatal"):
        return "fatalities"
    if f in ("injuries", "injured"):
        return "injuries"
    if f in ("property_damage", "property", "prop", "propdmg", "prop_dmg"):
        return "property_damage"
    if f in ("crop_damage", "crop", "crops", "cropdmg", "crop_dmg"):
        return "crop_damage"
    raise ValueError("metric must be: fatalities, injuries, property_damage, crop_damage")


def _as_list(aggregates: Aggregates) -> List[EventAggregate]:
    if isinstance(aggregates, Mapping):
        return list(aggregates.values())
    return list(aggregates)


def top_n(aggregates: Aggregates, metric: str, n: int = 10) -> List[EventAggregate]:
    """Return the `n` aggregates with the largest `metric`, descending.

    Returns fewer than `n` entries when fewer are eligible.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"n must be a positive integer, got {n!r}")
    key = metric_key(metric)
    pool = _as_list(aggregates)
    if key in DAMAGE_METRICS:
        pool = [a for a in pool if not (a.property_damage == 0 and a.crop_damage == 0)]
    # heap selection on (-value, event_type): descending value, ascending name
    return heapq.nsmallest(n, pool, key=lambda a: (-a.metric(key), a.event_type))


@dataclass(frozen=True)
class Rankings:
    """The four independent top-N views."""
    by_metric: Dict[str, List[EventAggregate]] = field(default_factory=dict)

    def __getitem__(self, metric: str) -> List[EventAggregate]:
        return self.by_metric[metric_key(metric)]

    def pairs(self, metric: str) -> List[Tuple[str, float]]:
        """Return `(event_type, value)` pairs for one ranking."""
        key = metric_key(metric)
        return [(a.event_type, a.metric(key)) for a in self.by_metric[key]]

    def is_empty(self) -> bool:
        return not any(self.by_metric.values())


def rank_all(aggregates: Aggregates, n: int = 10) -> Rankings:
    """Build the fatalities / injuries / property / crop rankings."""
    pool = _as_list(aggregates)
    return Rankings(by_metric={m: top_n(pool, m, n) for m in METRICS})
