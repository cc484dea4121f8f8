from __future__ import annotations
import re
from typing import Optional, Union

from .errors import MalformedInputError
from .types import PlainDate, WireDate

NumT = Union[int, float]

_YMD_RE = re.compile(r"^([0-9]{1,6})-([0-9]{1,2})-([0-9]{1,2})$")


def safe_mod(value: NumT, modulus: NumT) -> NumT:
    """Floor modulo, always in [0, modulus) for a positive modulus."""
    r = value % modulus
    # float rounding can land exactly on the modulus for tiny negative values
    if r >= modulus:
        return r - modulus
    return r


def to_plain(d: WireDate) -> PlainDate:
    """The single 1-based -> 0-based month normalization."""
    return PlainDate(year=int(d.year), month=max(0, int(d.month) - 1), day=int(d.day))


def to_wire(d: PlainDate) -> WireDate:
    return WireDate(year=d.year, month=d.month + 1, day=d.day)


def parse_ymd(s: str) -> WireDate:
    """Parse ``YYYY-M-D`` (1-6 digit year, 1-2 digit month and day) into a wire date."""
    m = _YMD_RE.match(str(s or "").strip())
    if not m:
        raise MalformedInputError(f"Expected YYYY-M-D, got {s!r}")
    y, mo, d = (int(x) for x in m.groups())
    return WireDate(year=y, month=mo, day=d)


def try_parse_ymd(s: str) -> Optional[WireDate]:
    try:
        return parse_ymd(s)
    except MalformedInputError:
        return None
