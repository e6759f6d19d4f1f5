from __future__ import annotations

import random
from datetime import date
from typing import Any, Iterable, Optional

from vente.domain.parsing import parse_amount


def generate_reference(
    prefix: str = "REF",
    length: int = 4,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """REF-2026-0042 style reference: prefix, year, zero-padded random number."""
    year = (today or date.today()).year
    number = (rng or random).randrange(10 ** length)
    return f"{prefix}-{year}-{number:0{length}d}"


def calculate_percentage(value: object, total: object, decimals: int = 0) -> float:
    base = parse_amount(total)
    if base == 0:
        return 0.0
    return round(parse_amount(value) / base * 100, decimals)


def sum_by(items: Iterable[Any], key: str) -> float:
    total = 0.0
    for item in items:
        value = item.get(key) if isinstance(item, dict) else getattr(item, key, None)
        total += parse_amount(value)
    return total
