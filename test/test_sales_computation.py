from datetime import date

import pytest

from conftest import priced_lines
from vente.domain.formatters import format_currency
from vente.domain.models import LineItem, PaymentMethod, SalesRecord, SaleStatus
from vente.domain.sales import (
    add_line,
    check_saveable,
    compute_grand_total,
    compute_subtotal,
    compute_tax,
    compute_totals,
    edit_line,
    new_sales_record,
    remove_line,
)


def test_two_line_sale_totals():
    lines = priced_lines(("Clavier", "2", "1500"), ("Souris", "1", "500"))

    assert lines[0].line_total == "3 000 FCFA"
    assert lines[1].line_total == "500 FCFA"

    subtotal = compute_subtotal(lines)
    assert format_currency(subtotal, show_currency=False) == "3 500"
    assert format_currency(compute_tax(subtotal), show_currency=False) == "630"
    assert format_currency(compute_grand_total(subtotal), show_currency=False) == "4 130"

    totals = compute_totals(lines)
    assert (totals.subtotal_display, totals.tax_display, totals.total_display) == ("3 500", "630", "4 130")


def test_tax_accepts_formatted_subtotal_and_custom_rate():
    assert compute_tax("3 500") == pytest.approx(630)
    assert compute_grand_total("10 000 FCFA", rate=0.1) == pytest.approx(11000)


def test_add_line_appends_default_line_without_touching_others():
    lines = priced_lines(("Clavier", "2", "1500"))
    added = add_line(lines)

    assert len(added) == 2
    assert added[0] == lines[0]
    assert added[1] == LineItem(name="", quantity="1", unit_price="", line_total="")


def test_remove_line_keeps_the_last_line():
    single = (LineItem(name="Seul"),)
    assert remove_line(single, 0) == single

    lines = priced_lines(("A", "1", "100"), ("B", "2", "200"), ("C", "3", "300"))
    remaining = remove_line(lines, 1)
    assert [ln.name for ln in remaining] == ["A", "C"]


def test_remove_line_out_of_range_is_noop():
    lines = priced_lines(("A", "1", "100"), ("B", "2", "200"))
    assert remove_line(lines, 5) == lines
    assert remove_line(lines, -1) == lines


def test_edit_line_recomputes_total_on_quantity_and_price():
    lines = (LineItem(name="Câble", quantity="1"),)

    lines = edit_line(lines, 0, "unit_price", "2 500 FCFA")
    assert lines[0].line_total == "2 500 FCFA"

    lines = edit_line(lines, 0, "quantity", "4")
    assert lines[0].line_total == "10 000 FCFA"

    lines = edit_line(lines, 0, "quantity", "abc")
    assert lines[0].line_total == "0 FCFA"


def test_edit_line_name_never_changes_total():
    lines = priced_lines(("Câble", "2", "1000"))
    renamed = edit_line(lines, 0, "name", "Câble HDMI")

    assert renamed[0].name == "Câble HDMI"
    assert renamed[0].line_total == lines[0].line_total


def test_edit_line_does_not_mutate_input():
    original = (LineItem(name="A"), LineItem(name="B"))
    edited = edit_line(original, 1, "quantity", "3")

    assert original[1].quantity == "1"
    assert edited[1].quantity == "3"
    assert edited[0] is original[0]


def test_edit_line_rejects_derived_or_unknown_fields():
    lines = (LineItem(),)
    with pytest.raises(ValueError):
        edit_line(lines, 0, "line_total", "999")
    with pytest.raises(ValueError):
        edit_line(lines, 0, "discount", "10")


def test_subtotal_treats_malformed_totals_as_zero():
    lines = (
        LineItem(line_total="1 000 FCFA"),
        LineItem(line_total="n/a"),
        LineItem(line_total=""),
        LineItem(line_total="250,5 FCFA"),
    )
    assert compute_subtotal(lines) == pytest.approx(1250.5)


def test_check_saveable_requires_client_then_a_valid_line():
    lines = priced_lines(("Clavier", "2", "1500"))

    no_client = SalesRecord(client="   ", lines=lines)
    assert check_saveable(no_client).errors == {"client": "Le client est obligatoire"}

    empty_lines = SalesRecord(client="Société Togo Plus", lines=(LineItem(quantity="3"), LineItem(name="X", quantity="0")))
    assert check_saveable(empty_lines).errors == {"lines": "Ajoutez au moins un article valide"}

    ok = SalesRecord(client="Société Togo Plus", lines=lines)
    assert check_saveable(ok).is_valid


def test_check_saveable_treats_cleared_values_as_blank():
    lines = priced_lines(("Clavier", "2", "1500"))

    cleared_client = SalesRecord(client=None, lines=lines)
    assert check_saveable(cleared_client).errors == {"client": "Le client est obligatoire"}

    cleared_name = SalesRecord(client="X", lines=edit_line((LineItem(),), 0, "name", None))
    assert check_saveable(cleared_name).errors == {"lines": "Ajoutez au moins un article valide"}


def test_new_sales_record_defaults():
    record = new_sales_record(today=date(2026, 10, 19), reference="VTE-2026-0001")

    assert record.date == "19/10/2026"
    assert record.payment_method is PaymentMethod.BANK_TRANSFER
    assert record.status is SaleStatus.PENDING
    assert record.lines == (LineItem(quantity="1"),)


def test_sales_record_mapping_round_trip():
    data = {
        "client": "Awa Mensah",
        "date": "19/10/2026",
        "payment_method": "Mobile Money",
        "status": "Payée",
        "lines": [{"name": "Ram", "quantity": "2", "unit_price": "15000", "line_total": "30 000 FCFA"}],
    }
    record = SalesRecord.from_mapping(data)

    assert record.payment_method is PaymentMethod.MOBILE_MONEY
    assert record.status is SaleStatus.PAID
    assert record.to_dict()["lines"][0]["line_total"] == "30 000 FCFA"

    with pytest.raises(ValueError):
        SalesRecord.from_mapping({"payment_method": "Bitcoin"})
