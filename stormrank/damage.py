"""
Damage value resolver
=====================

The storm data stores each damage figure as two columns: a magnitude
(`PROPDMG`, `CROPDMG`) and an exponent code (`PROPDMGEXP`, `CROPDMGEXP`).
The code says which power of ten the magnitude is scaled by:

    h/H -> 10^2    k/K -> 10^3    m/M -> 10^6    b/B -> 10^9
    "3" -> 10^3    (a numeric code *is* the exponent)
    "", "-", "?", "+" -> 10^0

Anything else raises `InvalidExponentCode`. Unknown codes are never turned
into zero: a damage figure scaled by the wrong power of ten would silently
reorder the whole economic ranking.
"""

from __future__ import annotations
from typing import Dict, Optional, Union
import math
import re

Number = Union[int, float]

# Letter codes (matched case-insensitively)
EXPONENT_SCALE: Dict[str, int] = {
    "h": 2,
    "k": 3,
    "m": 6,
    "b": 9,
}

# Codes that mean "no scale"
NO_SCALE_CODES = frozenset({"", "-", "?", "+"})

_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class InvalidExponentCode(ValueError):
    """Raised when a damage exponent token is outside the known vocabulary."""

    def __init__(self, code: str, row_id: Optional[int] = None) -> None:
        super().__init__(code)
        self.code = code
        self.row_id = row_id

    def __str__(self) -> str:
        msg = f"Invalid damage exponent code: {self.code!r}"
        if self.row_id is not None:
            msg += f" (row {self.row_id})"
        return msg


def resolve_exponent(code: Optional[str]) -> Number:
    """Map an exponent code to its power of ten.

    Letters are case-insensitive and surrounding whitespace is ignored.
    `None` (a missing cell) is treated like the empty string.
    """
    token = "" if code is None else str(code).strip()
    key = token.lower()
    if key in EXPONENT_SCALE:
        return EXPONENT_SCALE[key]
    if _NUMERIC_RE.match(token):
        value = float(token)
        if not math.isfinite(value):
            raise InvalidExponentCode(token)
        return int(value) if value.is_integer() else value
    if token in NO_SCALE_CODES:
        return 0
    raise InvalidExponentCode(token)


def damage_value(magnitude: Number, code: Optional[str]) -> float:
    """Return `magnitude * 10 ** resolve_exponent(code)` in US$.

    Zero magnitude is 0 for any valid code. A scale too large for a float
    raises `InvalidExponentCode` rather than producing inf.
    """
    exponent = resolve_exponent(code)
    if magnitude == 0:
        return 0.0
    try:
        value = float(magnitude) * 10.0 ** exponent
    except OverflowError:
        raise InvalidExponentCode(str(code).strip()) from None
    if not math.isfinite(value):
        raise InvalidExponentCode(str(code).strip())
    return value
