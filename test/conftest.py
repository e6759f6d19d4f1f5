import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def priced_lines(*rows):
    """rows: (name, quantity, unit_price) -> lines with totals computed by edit_line."""
    from vente.domain.models import LineItem
    from vente.domain.sales import edit_line

    lines = tuple(LineItem(name=name) for name, _q, _p in rows)
    for i, (_name, qty, price) in enumerate(rows):
        lines = edit_line(lines, i, "quantity", qty)
        lines = edit_line(lines, i, "unit_price", price)
    return lines
