# -*- coding: utf-8 -*-
"""Value coercion for loosely typed spreadsheet cells.

Cells arrive as whatever the reader produced: str, int, float (NaN for
empty cells), datetime/Timestamp, or None. These helpers never raise on bad
input; they fall back to a neutral value instead.
"""

import logging
import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional, Sequence, Union

import pandas as pd

from kardex.constants import SERIAL_EPOCH_OFFSET, SERIAL_THRESHOLD

logger = logging.getLogger(__name__)

Number = Union[int, float]

UNIX_EPOCH = date(1970, 1, 1)


def is_blank(value: Any) -> bool:
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def clean_text(value: Any) -> str:
    """Cell as a trimmed string; blank cells become "".

    Integral floats lose their ".0" so numeric codes read back from a
    float column stay recognizable ("1001.0" -> "1001").
    """
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def normalize_code(value: Any) -> str:
    """Normalize an item code for matching."""
    return clean_text(value).upper()


def _as_number(value: Any) -> Optional[float]:
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        number = pd.to_numeric(str(value).strip(), errors="coerce")
        if pd.isna(number):
            return None
        number = float(number)
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _tidy(number: float) -> Number:
    return int(number) if number.is_integer() else number


def parse_quantity(value: Any) -> Number:
    """Absolute numeric value of a cell, or 0 when it is not a number."""
    number = _as_number(value)
    if number is None:
        return 0
    return _tidy(abs(number))


def round_half_up(number: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(number + 0.5))


def parse_whole_quantity(value: Any) -> int:
    """Absolute value rounded half-up, used by the inventory import."""
    number = _as_number(value)
    if number is None:
        return 0
    return round_half_up(abs(number))


def parse_min_stock(value: Any) -> Optional[Number]:
    """Positive threshold, or None when absent, zero or unreadable."""
    number = _as_number(value)
    if number is None or number == 0:
        return None
    return _tidy(abs(number))


def serial_to_date(serial: float) -> date:
    """Convert a spreadsheet serial day number (1900 date system)."""
    return UNIX_EPOCH + timedelta(days=int(serial) - SERIAL_EPOCH_OFFSET)


def parse_date(value: Any, today: Optional[date] = None) -> date:
    """Resolve a date cell.

    Accepts a serial day number above SERIAL_THRESHOLD, a date/datetime,
    or a parseable calendar string. Anything else resolves to today.
    """
    today = today or date.today()
    if is_blank(value):
        return today

    if isinstance(value, (pd.Timestamp, datetime)):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if value > SERIAL_THRESHOLD and math.isfinite(value):
            try:
                return serial_to_date(value)
            except OverflowError:
                logger.debug(f"Serial date {value} out of range, using today")
                return today
        logger.debug(f"Numeric date {value} below serial threshold, using today")
        return today

    text = str(value).strip()
    if text.isdigit():
        return parse_date(int(text), today)
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    parsed = pd.to_datetime(text, errors="coerce", dayfirst=True)
    if pd.isna(parsed):
        logger.debug(f"Unparseable date {text!r}, using today")
        return today
    return parsed.date()


def pick(row: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """First non-blank value among the aliased headers, or None.

    Headers are compared case-insensitively and ignoring surrounding
    whitespace. Aliases are tried in priority order.
    """
    folded = {}
    for key, value in row.items():
        folded.setdefault(str(key).strip().casefold(), []).append(value)

    for alias in aliases:
        for value in folded.get(alias.casefold(), ()):
            if not is_blank(value):
                return value
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Naive datetime from a cell, or None when blank or unparseable."""
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        parsed = pd.Timestamp(value)
    else:
        parsed = pd.to_datetime(str(value).strip(), errors="coerce")
        if pd.isna(parsed):
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    return parsed.to_pydatetime()
