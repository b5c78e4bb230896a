"""
Event-type normalizer
=====================

`EVTYPE` is free text typed by many offices over decades, so the same event
appears as "TSTM WIND", "Tstm Wind", "TSTM WIND/HAIL", "FROST\\FREEZE"...

We only do the *syntactic* cleanup:
- lowercase everything
- replace blanks (space, tab) and ASCII punctuation (this includes "+")
  with spaces

By default each run of replaced characters becomes a single space and the
result is stripped, so "Tornado!" and "tornado" land in the same group.
Pass `collapse=False` for the literal rule: one space per offending
character, nothing trimmed.

No synonym merging: "tstm wind" and "thunderstorm wind" stay distinct.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable, List
import re
import string

from .models import StormRecord

_SEPARATORS = " \t" + string.punctuation
_SEPARATOR_RE = re.compile("[" + re.escape(_SEPARATORS) + "]")
_SEPARATOR_RUN_RE = re.compile("[" + re.escape(_SEPARATORS) + "]+")


def normalize_event_type(raw: str, *, collapse: bool = True) -> str:
    """Return the canonical grouping key for a raw event-type string."""
    text = str(raw).lower()
    if not collapse:
        return _SEPARATOR_RE.sub(" ", text)
    return _SEPARATOR_RUN_RE.sub(" ", text).strip(" ")


def normalize_records(records: Iterable[StormRecord], *, collapse: bool = True) -> List[StormRecord]:
    """Return new records whose `event_type` has been normalized."""
    return [
        replace(r, event_type=normalize_event_type(r.event_type, collapse=collapse))
        for r in records
    ]
