"""
Data model (StormRecord / EventAggregate)
=========================================

Each row of the storm CSV becomes a `StormRecord`. Records are frozen
(`frozen=True`): a cleaning stage returns *new* records instead of editing
the ones it received, so every stage depends only on its explicit input.

After aggregation there is one `EventAggregate` per normalized event type.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StormRecord:
    """Immutable record for one storm-event row (only the columns we use)."""
    row_id: int
    event_type: str
    fatalities: float
    injuries: float
    prop_dmg: float
    prop_dmg_exp: str
    crop_dmg: float
    crop_dmg_exp: str


@dataclass(frozen=True)
class EventAggregate:
    """Summed casualties and damage for one normalized event type."""
    event_type: str
    fatalities: float = 0.0
    injuries: float = 0.0
    # stored in US$
    property_damage: float = 0.0
    crop_damage: float = 0.0

    def metric(self, name: str) -> float:
        """Return the value of a metric by its ranking key (e.g. 'injuries')."""
        if name not in ("fatalities", "injuries", "property_damage", "crop_damage"):
            raise ValueError(f"Unknown metric: {name!r}")
        return getattr(self, name)
