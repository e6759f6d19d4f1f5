from __future__ import annotations

from pathlib import Path
import logging
import re

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from vente.config import SalesSettings
from vente.domain.errors import ExportError, ValidationError
from vente.domain.models import SalesRecord
from vente.domain.parsing import parse_amount
from vente.domain.sales import check_saveable, compute_totals

log = logging.getLogger("vente.export")

LINE_HEADERS = ["Article", "Quantité", "Prix unitaire", "Total"]

_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]+")


def _write_text(ws, row: int, column: int, value: object):
    """Text cell that stays text even when it starts with '='."""
    cell = ws.cell(row=row, column=column, value=value)
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"
    return cell


class ExcelService:
    def __init__(self, settings: SalesSettings | None = None, exports_dir: str | Path | None = None):
        self.settings = settings or SalesSettings()
        self.exports_dir = Path(exports_dir) if exports_dir is not None else None

    def default_export_path(self, record: SalesRecord) -> Path:
        if self.exports_dir is None:
            raise ExportError("No export path given and no exports directory configured")
        stem = _UNSAFE_FILENAME_RE.sub("_", f"vente-{record.reference}".strip("-")).strip("_")
        return self.exports_dir / f"{stem}.xlsx"

    def export_sales_record(self, record: SalesRecord, path: str | Path | None = None) -> Path:
        """
        Printable workbook for one sale: header block, line table, then
        Sous-total / TVA / Total TTC. Blank rows (no name, no total) are left
        out; totals match the ones shown on the form. Without a path the file
        goes to the exports directory, named after the reference.
        """
        result = check_saveable(record)
        if not result.is_valid:
            field, message = next(iter(result.errors.items()))
            raise ValidationError(message, field=field)

        money_format = f'#,##0.00" {self.settings.currency}"'
        wb = Workbook()
        ws = wb.active
        ws.title = "Vente"

        ws["A1"] = f"Vente {record.reference}".strip()
        ws["A1"].font = Font(bold=True, size=14)

        header = [
            ("Client", record.client),
            ("Date", record.date),
            ("Échéance", record.due_date),
            ("Référence", record.reference),
            ("Moyen de paiement", record.payment_method.value),
            ("Statut", record.status.value),
            ("Notes", record.notes),
        ]
        row = 3
        for label, value in header:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            _write_text(ws, row, 2, value)
            row += 1

        table_top = row + 1
        for col, title in enumerate(LINE_HEADERS, start=1):
            ws.cell(row=table_top, column=col, value=title).font = Font(bold=True)

        lines = [ln for ln in record.lines if str(ln.name or "").strip() or parse_amount(ln.line_total)]
        row = table_top + 1
        for ln in lines:
            _write_text(ws, row, 1, ln.name)
            ws.cell(row=row, column=2, value=parse_amount(ln.quantity))
            ws.cell(row=row, column=3, value=parse_amount(ln.unit_price)).number_format = money_format
            ws.cell(row=row, column=4, value=parse_amount(ln.line_total)).number_format = money_format
            row += 1

        table_bottom = row - 1
        ref = f"A{table_top}:{get_column_letter(len(LINE_HEADERS))}{table_bottom}"
        tab = Table(displayName="Articles", ref=ref)
        tab.tableStyleInfo = TableStyleInfo(name="TableStyleMedium9", showRowStripes=True, showColumnStripes=False)
        ws.add_table(tab)

        totals = compute_totals(record.lines, self.settings.tax_rate)
        rate_pct = f"{totals.tax_rate * 100:g}"
        summary = [
            ("Sous-total", totals.subtotal),
            (f"TVA ({rate_pct}%)", totals.tax),
            ("Total TTC", totals.total),
        ]
        row += 1
        for label, value in summary:
            ws.cell(row=row, column=3, value=label).font = Font(bold=True)
            ws.cell(row=row, column=4, value=value).number_format = money_format
            row += 1

        for col, width in {"A": 34, "B": 22, "C": 18, "D": 20}.items():
            ws.column_dimensions[col].width = width

        out = Path(path) if path is not None else self.default_export_path(record)
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            wb.save(out)
        except OSError as e:
            raise ExportError(f"Could not write workbook {out}: {e}") from e

        log.info("sale_exported reference=%s path=%s lines=%s", record.reference, out, len(lines))
        return out
