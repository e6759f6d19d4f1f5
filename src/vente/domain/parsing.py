from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

_NOISE_RE = re.compile(r"[^0-9.,-]")
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
# "12,000" or "1,234,567.5": commas between groups of three digits are grouping
_COMMA_GROUPED_RE = re.compile(r"-?[1-9]\d{0,2}(?:,\d{3})+(?![\d,])")
_LOCAL_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


@dataclass(frozen=True)
class Numeric:
    value: float


@dataclass(frozen=True)
class Text:
    raw: str


Amount = Union[Numeric, Text]


def to_amount(value: object) -> Amount:
    """Tag a loosely-typed form value as numeric or raw text."""
    if isinstance(value, (Numeric, Text)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return Numeric(float(value))
        except OverflowError:
            return Numeric(math.inf if value > 0 else -math.inf)
    if value is None:
        return Text("")
    return Text(str(value))


def try_parse_amount(value: object) -> float | None:
    """
    Canonical amount parser shared by formatters, validators and the sales engine.

    Text keeps digits, '.', ',' and '-' and takes the longest leading number. A comma
    is the decimal separator unless it sits between short groups of three digits:
    "12 000 FCFA" -> 12000.0, "1 234,5" -> 1234.5, "12,000 FCFA" -> 12000.0.
    Returns None when nothing numeric can be read.
    """
    amount = to_amount(value)
    if isinstance(amount, Numeric):
        number = amount.value
    else:
        cleaned = _NOISE_RE.sub("", amount.raw)
        if _COMMA_GROUPED_RE.match(cleaned):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")
        m = _LEADING_NUMBER_RE.match(cleaned)
        if not m:
            return None
        number = float(m.group(0))

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_amount(value: object) -> float:
    parsed = try_parse_amount(value)
    return 0.0 if parsed is None else parsed


def parse_date(value: object) -> datetime | None:
    """Accepts date/datetime values, ISO strings and the local dd/mm/yyyy form."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    m = _LOCAL_DATE_RE.match(raw)
    try:
        if m:
            day, month, year = (int(g) for g in m.groups())
            return datetime(year, month, day)
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def digits_only(value: object) -> str:
    if value is None:
        return ""
    return re.sub(r"\D", "", str(value))
