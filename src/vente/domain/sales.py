"""
Line-item computation for the sales form.

State lives with the caller: each operation takes the current lines (or
record) and returns a new tuple (or record). A line's total is derived from
its quantity and unit price and is only ever written here.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from vente.domain.formatters import DEFAULT_CURRENCY, format_currency, format_date
from vente.domain.models import (
    FormValidationResult,
    LineItem,
    PaymentMethod,
    SalesRecord,
    SalesTotals,
    SaleStatus,
)
from vente.domain.parsing import parse_amount
from vente.domain.validators import validate_required

DEFAULT_TAX_RATE = 0.18
EDITABLE_FIELDS = ("name", "quantity", "unit_price")
PRICED_FIELDS = ("quantity", "unit_price")


def compute_line_total(quantity: object, unit_price: object, currency: str = DEFAULT_CURRENCY) -> str:
    return format_currency(parse_amount(quantity) * parse_amount(unit_price), currency=currency)


def add_line(lines: Sequence[LineItem], default_quantity: str = "1") -> tuple[LineItem, ...]:
    return (*lines, LineItem(quantity=default_quantity, line_total=""))


def remove_line(lines: Sequence[LineItem], index: int) -> tuple[LineItem, ...]:
    # the last remaining line stays so the form always has one row to edit
    if len(lines) <= 1 or not 0 <= index < len(lines):
        return tuple(lines)
    return tuple(ln for i, ln in enumerate(lines) if i != index)


def edit_line(
    lines: Sequence[LineItem],
    index: int,
    field: str,
    value: str,
    currency: str = DEFAULT_CURRENCY,
) -> tuple[LineItem, ...]:
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Line field is not editable: {field}")
    if not 0 <= index < len(lines):
        return tuple(lines)

    line = replace(lines[index], **{field: value})
    if field in PRICED_FIELDS:
        line = replace(line, line_total=compute_line_total(line.quantity, line.unit_price, currency))

    updated = list(lines)
    updated[index] = line
    return tuple(updated)


def compute_subtotal(lines: Iterable[LineItem]) -> float:
    return sum((parse_amount(ln.line_total) for ln in lines), 0.0)


def compute_tax(subtotal: object, rate: float = DEFAULT_TAX_RATE) -> float:
    return parse_amount(subtotal) * rate


def compute_grand_total(subtotal: object, rate: float = DEFAULT_TAX_RATE) -> float:
    base = parse_amount(subtotal)
    return base + compute_tax(base, rate)


def compute_totals(lines: Iterable[LineItem], rate: float = DEFAULT_TAX_RATE) -> SalesTotals:
    subtotal = compute_subtotal(lines)
    tax = compute_tax(subtotal, rate)
    return SalesTotals(subtotal=subtotal, tax=tax, total=subtotal + tax, tax_rate=rate)


def is_valid_line(line: LineItem) -> bool:
    return bool(str(line.name or "").strip()) and parse_amount(line.quantity) > 0


def check_saveable(record: SalesRecord) -> FormValidationResult:
    """Gate before handing a record to persistence. Reports the first problem only."""
    client = validate_required(str(record.client or "").strip(), "Le client")
    if not client.is_valid:
        return FormValidationResult({"client": "Le client est obligatoire"})

    if not any(is_valid_line(ln) for ln in record.lines):
        return FormValidationResult({"lines": "Ajoutez au moins un article valide"})

    return FormValidationResult()


def new_sales_record(
    today: Optional[date] = None,
    reference: str = "",
    default_quantity: str = "1",
) -> SalesRecord:
    return SalesRecord(
        date=format_date(today or date.today()),
        reference=reference,
        payment_method=PaymentMethod.BANK_TRANSFER,
        status=SaleStatus.PENDING,
        lines=(LineItem(quantity=default_quantity),),
    )
