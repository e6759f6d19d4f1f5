"""
Display formatters for form screens.

Every function here is total: None, empty strings, NaN or text noise give a
defined string instead of raising. Amounts go through parse_amount so that
the parsing rule is the same everywhere.
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import Callable, Optional

from vente.domain.parsing import digits_only, parse_amount, parse_date

DEFAULT_CURRENCY = "FCFA"
COUNTRY_CODE = "228"

_MONTHS = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)
_WEEKDAYS = ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche")
_SIZE_UNITS = ("B", "KB", "MB", "GB")


def _is_blank(value: object) -> bool:
    return value is None or value == ""


def format_number(value: object, decimals: int = 2) -> str:
    """Group thousands with a space and use a decimal comma: 1234.5 -> '1 234,5'."""
    number = round(parse_amount(value), decimals)
    if number == 0:
        number = 0.0
    sign = "-" if number < 0 else ""
    whole, _, frac = f"{abs(number):,.{decimals}f}".partition(".")
    whole = whole.replace(",", " ")
    frac = frac.rstrip("0")
    return f"{sign}{whole},{frac}" if frac else f"{sign}{whole}"


def format_currency(amount: object, show_currency: bool = True, currency: str = DEFAULT_CURRENCY) -> str:
    formatted = "0" if _is_blank(amount) else format_number(amount)
    return f"{formatted} {currency}" if show_currency else formatted


_DATE_FORMATS: dict[str, Callable[[datetime], str]] = {
    "short": lambda d: f"{d.day:02d}/{d.month:02d}/{d.year}",
    "medium": lambda d: f"{d.day:02d} {_MONTHS[d.month - 1]} {d.year}",
    "long": lambda d: f"{_WEEKDAYS[d.weekday()]} {d.day:02d} {_MONTHS[d.month - 1]} {d.year}",
    "time": lambda d: f"{d.hour:02d}:{d.minute:02d}",
}


def format_date(value: object, fmt: str = "short") -> str:
    """
    fmt is one of 'short' (05/03/2024), 'medium' (05 mars 2024),
    'long' (mardi 05 mars 2024) or 'time' (14:30). Anything else renders as 'short'.
    """
    d = parse_date(value)
    if d is None:
        return ""
    render = _DATE_FORMATS.get(fmt, _DATE_FORMATS["short"])
    return render(d)


def format_phone(phone: object) -> str:
    if _is_blank(phone):
        return ""
    original = phone if isinstance(phone, str) else str(phone)
    cleaned = digits_only(phone)

    if len(cleaned) == 11 and cleaned.startswith(COUNTRY_CODE):
        return f"+{cleaned[:3]} {cleaned[3:5]} {cleaned[5:7]} {cleaned[7:9]} {cleaned[9:]}"
    if len(cleaned) == 8:
        return f"{cleaned[:2]} {cleaned[2:4]} {cleaned[4:6]} {cleaned[6:]}"
    return original


def format_percentage(value: object, decimals: int = 0) -> str:
    if _is_blank(value):
        return "0%"
    return f"{parse_amount(value):.{decimals}f}%"


def format_duration(minutes: object) -> str:
    if _is_blank(minutes):
        return "0 min"
    hours, mins = divmod(int(round(parse_amount(minutes))), 60)
    if hours == 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


def format_name(name: object) -> str:
    if _is_blank(name):
        return ""
    return " ".join(word[:1].upper() + word[1:].lower() for word in str(name).split(" "))


def format_file_size(size: object) -> str:
    number = parse_amount(size)
    if number <= 0:
        return "0 B"
    i = 0
    while number >= 1024 and i < len(_SIZE_UNITS) - 1:
        number /= 1024
        i += 1
    scaled = f"{number:.2f}".rstrip("0").rstrip(".")
    return f"{scaled} {_SIZE_UNITS[i]}"


def _naive_local(d: datetime) -> datetime:
    if d.tzinfo is None:
        return d
    return d.astimezone().replace(tzinfo=None)


def format_relative_time(value: object, now: Optional[datetime] = None) -> str:
    d = parse_date(value)
    if d is None:
        return ""
    d = _naive_local(d)
    current = _naive_local(now) if now is not None else datetime.now()

    seconds = (current - d).total_seconds()
    diff_mins = math.floor(seconds / 60)
    diff_hours = math.floor(seconds / 3600)
    diff_days = math.floor(seconds / 86400)

    if diff_mins < 1:
        return "À l'instant"
    if diff_mins < 60:
        return f"Il y a {diff_mins} min"
    if diff_hours < 24:
        return f"Il y a {diff_hours}h"
    if diff_days == 1:
        return "Hier"
    if diff_days < 7:
        return f"Il y a {diff_days} jours"
    if diff_days < 30:
        return f"Il y a {diff_days // 7} semaines"
    if diff_days < 365:
        return f"Il y a {diff_days // 30} mois"
    return f"Il y a {diff_days // 365} ans"


def truncate_text(text: object, max_length: int = 50) -> str:
    if _is_blank(text):
        return ""
    text = str(text)
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def format_reference(ref: object, length: int = 4) -> str:
    if _is_blank(ref):
        return ""
    return str(ref).rjust(length, "0")


def get_initials(name: object) -> str:
    if _is_blank(name):
        return ""
    words = str(name).split()
    if not words:
        return ""
    if len(words) == 1:
        return words[0][:1].upper()
    return f"{words[0][:1]}{words[-1][:1]}".upper()
