from datetime import date, datetime
from decimal import Decimal
import logging
from types import SimpleNamespace

import pytest

from invoice_pdf.core.invoice_document import (
    ClientBlock,
    InvoiceDocumentBuilder,
    InvoiceDocumentData,
    InvoiceStatus,
    LineItem,
    resolve_status,
)
from invoice_pdf.core.pdf_labels import resolve_pdf_labels


def test_build_from_mappings_with_snake_case_fields() -> None:
    doc = InvoiceDocumentBuilder().build(
        {
            "invoice_number": " INV-0042 ",
            "status": "paid",
            "issue_date": date(2026, 3, 5),
            "due_date": "2026-04-04",
            "client_name": "Jane Doe",
            "client_email": "jane@example.com",
            "client_address": "1 Main St\nSpringfield",
            "items": [
                {"description": "Design", "quantity": 2, "unit_price": "50.00"},
                {"description": "Hosting", "quantity": "1", "unit_price": 12.5},
            ],
            "total_amount": "112.50",
            "notes": "  Thanks!  ",
        },
        company={"company_name": "Acme Studio", "email": "hi@acme.test"},
        client={"name": "Ignored", "accent_color_hex": "#C0392B"},
    )

    assert doc.invoice_number == "INV-0042"
    assert doc.status is InvoiceStatus.PAID
    assert doc.due_date == date(2026, 4, 4)
    assert doc.client.name == "Jane Doe"
    assert doc.client.address == "1 Main St\nSpringfield"
    assert doc.client.accent_hex == "#C0392B"
    assert doc.company is not None and doc.company.name == "Acme Studio"
    assert [item.unit_price for item in doc.items] == [Decimal("50.00"), Decimal("12.5")]
    assert doc.items_subtotal == Decimal("112.50")
    assert doc.total_amount == Decimal("112.50")
    assert doc.notes == "Thanks!"


def test_build_from_objects_with_camel_case_fields() -> None:
    invoice = SimpleNamespace(
        invoiceNumber="INV-7",
        status=SimpleNamespace(value="Overdue"),
        issueDate=datetime(2026, 1, 2, 10, 30),
        dueDate=None,
        clientName=None,
        items=[SimpleNamespace(description="Audit", quantity=3, unitPrice=Decimal("10"))],
        totalAmount=None,
    )
    client = SimpleNamespace(name="Globex", email="ap@globex.test", address=None, accentColorHex=None)

    doc = InvoiceDocumentBuilder().build(invoice, client=client)

    assert doc.invoice_number == "INV-7"
    assert doc.status is InvoiceStatus.OVERDUE
    assert doc.issue_date == date(2026, 1, 2)
    assert doc.due_date == date(2026, 1, 2)
    assert doc.client.name == "Globex"
    assert doc.client.email == "ap@globex.test"
    assert doc.client.accent_hex is None
    assert doc.company is None
    assert doc.total_amount == Decimal("30")


def test_build_tolerates_missing_and_invalid_values(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="invoice_pdf.core.invoice_document"):
        doc = InvoiceDocumentBuilder().build(
            {
                "status": "archived",
                "issue_date": "not a date",
                "items": [
                    {"description": "Refund", "quantity": -2, "unit_price": "-5"},
                    {"description": "Broken", "quantity": "many", "unit_price": "abc"},
                    {"description": "Infinite", "quantity": 1, "unit_price": "Infinity"},
                ],
            },
            company={"company_name": "   "},
        )

    messages = [record.getMessage() for record in caplog.records]
    assert doc.invoice_number == "INV-DRAFT"
    assert doc.status is InvoiceStatus.DRAFT
    assert doc.issue_date == date(1970, 1, 1)
    assert doc.client.name == "Client"
    assert doc.company is None
    assert [(item.quantity, item.unit_price) for item in doc.items] == [(0, 0), (0, 0), (1, 0)]
    assert doc.total_amount == Decimal(0)
    assert "invoice_document_client_name_missing" in messages
    assert "invoice_document_date_unparsable" in messages


def test_supplied_total_is_kept_even_when_it_drifts() -> None:
    doc = InvoiceDocumentBuilder().build(
        {
            "client_name": "Jane",
            "items": [{"description": "Design", "quantity": 1, "unit_price": "100"}],
            "total_amount": Decimal("90"),
        }
    )

    assert doc.items_subtotal == Decimal("100")
    assert doc.total_amount == Decimal("90")


def test_line_items_coerce_float_and_text_values() -> None:
    item = LineItem("Design", 2.0, 50.00)
    broken = LineItem("Broken", "many", "abc")

    assert item.quantity == 2
    assert item.unit_price == Decimal("50.0")
    assert item.line_total == Decimal("100")
    assert (broken.quantity, broken.unit_price) == (0, Decimal(0))


def test_snapshot_coerces_status_total_and_items() -> None:
    doc = InvoiceDocumentData(
        invoice_number="INV-1",
        status="paid",
        issue_date=date(2026, 3, 5),
        due_date=date(2026, 4, 4),
        client=ClientBlock(name="Jane"),
        total_amount=112.50,
        items=[LineItem("Design", 2, 50.00), LineItem("Hosting", 1, 12.50)],
    )

    assert doc.status is InvoiceStatus.PAID
    assert doc.total_amount == Decimal("112.5")
    assert isinstance(doc.items, tuple)
    assert doc.items_subtotal == Decimal("112.5")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (InvoiceStatus.SENT, InvoiceStatus.SENT),
        ("Overdue", InvoiceStatus.OVERDUE),
        ("CANCELLED", InvoiceStatus.CANCELLED),
        ("archived", InvoiceStatus.DRAFT),
        (None, InvoiceStatus.DRAFT),
    ],
)
def test_resolve_status(value, expected) -> None:
    assert resolve_status(value) is expected


def test_status_title_accepts_plain_strings() -> None:
    assert resolve_pdf_labels("de").status_title("Paid") == "Bezahlt"
    assert resolve_pdf_labels("en").status_title("unknown") == "Draft"
