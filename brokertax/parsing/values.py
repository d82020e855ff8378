"""Locale-tolerant date and decimal parsing for statement cells.

Both parsers resolve unparseable input to ``None`` instead of raising, so an
odd cell shows up as a missing value downstream rather than aborting an
extraction.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from brokertax.config import DATE_FORMATS

_NON_NUMERIC = re.compile(r"[^\d.,-]")
_COMMA_DECIMAL = re.compile(r",\d{1,2}$")


def first_value(row: Mapping[str, str], aliases: Iterable[str]) -> str | None:
    """Return the value of the first alias present in ``row``."""
    for alias in aliases:
        if alias in row:
            return row[alias]
    return None


def parse_date(value: str | None, formats: Iterable[str] = DATE_FORMATS) -> date | None:
    """Parse a statement date, ignoring a trailing ``", HH:MM:SS"`` time part.

    Formats are tried in order and the first one that fits wins.
    """
    if value is None or not value.strip():
        return None
    date_part = value.strip().split(", ")[0]
    for fmt in formats:
        try:
            return datetime.strptime(date_part, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value: str | None) -> Decimal | None:
    """Parse an amount written as ``1.234,56`` or ``1,234.56``.

    Currency symbols and other decoration are dropped. Blank and ``-`` mean
    absent, not zero.
    """
    if value is None or not value.strip() or value.strip() == "-":
        return None

    cleaned = _NON_NUMERIC.sub("", value)
    negative = cleaned.startswith("-")
    cleaned = cleaned.replace("-", "")
    if not cleaned:
        return None

    if "," in cleaned and "." in cleaned:
        # Right-most separator is the decimal point
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        if _COMMA_DECIMAL.search(cleaned):
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        return None
    return -result if negative else result
