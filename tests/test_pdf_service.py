from datetime import date
from decimal import Decimal
import logging
from pathlib import Path

import pytest

from invoice_pdf.core.config import settings
from invoice_pdf.core.formatting import FormattingContext
from invoice_pdf.core.invoice_document import ClientBlock, InvoiceDocumentData, InvoiceStatus, LineItem
from invoice_pdf.core.pdf_service import (
    InvoicePdfService,
    InvoicePdfStorage,
    build_invoice_pdf_filename,
)


@pytest.fixture
def helvetica(monkeypatch) -> None:
    monkeypatch.setattr(
        "invoice_pdf.core.pdf_text_metrics._FONT_FAMILY",
        {"regular": "Helvetica", "bold": "Helvetica-Bold"},
    )


def _invoice(invoice_number: str = "INV-5") -> InvoiceDocumentData:
    return InvoiceDocumentData(
        invoice_number=invoice_number,
        status=InvoiceStatus.DRAFT,
        issue_date=date(2026, 5, 1),
        due_date=date(2026, 5, 31),
        client=ClientBlock(name="Jane Doe"),
        items=(LineItem("Consulting", 3, Decimal("80")),),
        total_amount=Decimal("240"),
    )


class _FailingRenderer:
    def render(self, data, formatting=None):
        return None


@pytest.mark.parametrize(
    ("invoice_number", "expected"),
    [
        ("INV-0042", "Invoice_INV-0042.pdf"),
        ("2026/03:7", "Invoice_2026037.pdf"),
        ('  "Q1" <draft>  ', "Invoice_Q1 draft.pdf"),
        ("///", "Invoice.pdf"),
        ("", "Invoice.pdf"),
        (None, "Invoice.pdf"),
    ],
)
def test_build_invoice_pdf_filename(invoice_number, expected: str) -> None:
    assert build_invoice_pdf_filename(invoice_number) == expected


def test_target_path_creates_missing_directory(tmp_path: Path) -> None:
    directory = tmp_path / "exports" / "2026"
    storage = InvoicePdfStorage(directory)

    path = storage.target_path("INV-7")

    assert path == directory / "Invoice_INV-7.pdf"
    assert directory.is_dir()
    assert not path.exists()


def test_save_load_and_delete(tmp_path: Path, caplog) -> None:
    storage = InvoicePdfStorage(tmp_path)

    with caplog.at_level(logging.INFO, logger="invoice_pdf.core.pdf_service"):
        path = storage.save("INV-1", b"%PDF-1.4 test")

    assert path == tmp_path / "Invoice_INV-1.pdf"
    assert path.read_bytes() == b"%PDF-1.4 test"
    assert "pdf_saved" in [record.getMessage() for record in caplog.records]
    assert storage.load("INV-1") == b"%PDF-1.4 test"
    assert storage.delete("INV-1") is True
    assert not path.exists()


def test_missing_invoice_is_not_loaded_or_deleted(tmp_path: Path) -> None:
    storage = InvoicePdfStorage(tmp_path)

    assert storage.load("INV-404") is None
    assert storage.delete("INV-404") is False


def test_configured_save_directory_is_used(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings, "pdf_save_directory", str(tmp_path / "invoices"))

    assert InvoicePdfStorage().directory == tmp_path / "invoices"


def test_documents_folder_is_the_default(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings, "pdf_save_directory", None)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert InvoicePdfStorage().directory == tmp_path / "Documents"


def test_unusable_directory_is_logged(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied")
    storage = InvoicePdfStorage(blocker)

    with caplog.at_level(logging.WARNING, logger="invoice_pdf.core.pdf_service"):
        assert storage.target_path("INV-2") is None
        assert storage.save("INV-2", b"%PDF") is None

    assert [record.getMessage() for record in caplog.records] == [
        "pdf_save_directory_unavailable",
        "pdf_save_directory_unavailable",
    ]


def test_generate_pdf_renders_document(helvetica, tmp_path: Path) -> None:
    pdf = InvoicePdfService(storage=InvoicePdfStorage(tmp_path)).generate_pdf(_invoice(), FormattingContext())

    assert pdf is not None and pdf.startswith(b"%PDF")
    assert list(tmp_path.iterdir()) == []


def test_save_pdf_writes_named_file(helvetica, tmp_path: Path) -> None:
    service = InvoicePdfService(storage=InvoicePdfStorage(tmp_path))

    path = service.save_pdf(_invoice("INV-0042"), FormattingContext())

    assert path == tmp_path / "Invoice_INV-0042.pdf"
    assert path.read_bytes().startswith(b"%PDF")
    assert service.pdf_path("INV-0042") == path
    assert service.load_pdf("INV-0042") == path.read_bytes()
    assert service.delete_pdf("INV-0042") is True


def test_save_pdf_skips_storage_when_rendering_fails(tmp_path: Path) -> None:
    service = InvoicePdfService(renderer=_FailingRenderer(), storage=InvoicePdfStorage(tmp_path))

    assert service.save_pdf(_invoice()) is None
    assert list(tmp_path.iterdir()) == []
