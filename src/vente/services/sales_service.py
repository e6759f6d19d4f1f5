from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Callable, Optional
import logging

from vente.config import SalesSettings
from vente.domain import sales
from vente.domain.errors import ValidationError
from vente.domain.helpers import generate_reference
from vente.domain.models import FormValidationResult, PaymentMethod, SalesRecord, SalesTotals, SaleStatus

log = logging.getLogger("vente.sales")

HEADER_FIELDS = ("client", "date", "due_date", "reference", "payment_method", "status", "notes")


class SalesService:
    """
    Record-level operations behind the sales form.

    Records are immutable: every method returns a new SalesRecord and the
    caller keeps the only reference. `sink` is the persistence collaborator;
    it only ever receives records that passed the save gate.
    """

    def __init__(
        self,
        settings: SalesSettings | None = None,
        sink: Callable[[SalesRecord], Any] | None = None,
    ):
        self.settings = settings or SalesSettings()
        self.sink = sink

    def new_record(self, today: Optional[date] = None) -> SalesRecord:
        reference = generate_reference(self.settings.reference_prefix, today=today)
        return sales.new_sales_record(
            today=today,
            reference=reference,
            default_quantity=self.settings.default_quantity,
        )

    def add_line(self, record: SalesRecord) -> SalesRecord:
        return replace(record, lines=sales.add_line(record.lines, self.settings.default_quantity))

    def remove_line(self, record: SalesRecord, index: int) -> SalesRecord:
        return replace(record, lines=sales.remove_line(record.lines, index))

    def edit_line(self, record: SalesRecord, index: int, field: str, value: str) -> SalesRecord:
        lines = sales.edit_line(record.lines, index, field, value, currency=self.settings.currency)
        return replace(record, lines=lines)

    def update_header(self, record: SalesRecord, **fields: Any) -> SalesRecord:
        unknown = set(fields) - set(HEADER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown header fields: {', '.join(sorted(unknown))}")
        if "payment_method" in fields:
            fields["payment_method"] = PaymentMethod(fields["payment_method"])
        if "status" in fields:
            fields["status"] = SaleStatus(fields["status"])
        return replace(record, **fields)

    def totals(self, record: SalesRecord) -> SalesTotals:
        return sales.compute_totals(record.lines, self.settings.tax_rate)

    def validate(self, record: SalesRecord) -> FormValidationResult:
        return sales.check_saveable(record)

    def save(self, record: SalesRecord) -> SalesRecord:
        result = self.validate(record)
        if not result.is_valid:
            field, message = next(iter(result.errors.items()))
            log.info("sale_rejected reference=%s field=%s", record.reference, field)
            raise ValidationError(message, field=field)

        if self.sink is not None:
            self.sink(record)

        totals = self.totals(record)
        log.info(
            "sale_saved reference=%s lines=%s total=%.2f status=%s",
            record.reference, len(record.lines), totals.total, record.status.value,
        )
        return record
