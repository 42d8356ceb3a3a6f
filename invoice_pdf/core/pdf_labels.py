from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from invoice_pdf.core.invoice_document import InvoiceStatus, resolve_status


@dataclass(frozen=True)
class PdfLabels:
    heading: str
    invoice_number: str
    issue_date: str
    due_date: str
    status: str
    bill_to: str
    client: str
    email: str
    address: str
    description: str
    quantity: str
    unit_price: str
    total: str
    subtotal: str
    total_amount: str
    notes: str
    title_format: str
    author_fallback: str
    statuses: dict[InvoiceStatus, str]

    def document_title(self, invoice_number: str) -> str:
        return self.title_format.format(number=invoice_number)

    def status_title(self, status: InvoiceStatus | str) -> str:
        resolved = resolve_status(status)
        return self.statuses.get(resolved, resolved.value)


PDF_LABELS_BY_LANGUAGE: Final[dict[str, PdfLabels]] = {
    "en": PdfLabels(
        heading="INVOICE",
        invoice_number="Invoice Number",
        issue_date="Invoice Date",
        due_date="Due Date",
        status="Status",
        bill_to="BILL TO",
        client="Client",
        email="Email",
        address="Address",
        description="Description",
        quantity="Quantity",
        unit_price="Unit Price",
        total="Total",
        subtotal="Subtotal",
        total_amount="TOTAL",
        notes="Notes",
        title_format="Invoice {number}",
        author_fallback="Invoice Generator",
        statuses={
            InvoiceStatus.DRAFT: "Draft",
            InvoiceStatus.SENT: "Sent",
            InvoiceStatus.PAID: "Paid",
            InvoiceStatus.OVERDUE: "Overdue",
            InvoiceStatus.CANCELLED: "Cancelled",
        },
    ),
    "de": PdfLabels(
        heading="RECHNUNG",
        invoice_number="Rechnungsnr.",
        issue_date="Rechnungsdatum",
        due_date="Fällig am",
        status="Status",
        bill_to="RECHNUNG AN",
        client="Kunde",
        email="E-Mail",
        address="Adresse",
        description="Beschreibung",
        quantity="Menge",
        unit_price="Einzelpreis",
        total="Gesamt",
        subtotal="Zwischensumme",
        total_amount="GESAMT",
        notes="Notizen",
        title_format="Rechnung {number}",
        author_fallback="Invoice Generator",
        statuses={
            InvoiceStatus.DRAFT: "Entwurf",
            InvoiceStatus.SENT: "Versendet",
            InvoiceStatus.PAID: "Bezahlt",
            InvoiceStatus.OVERDUE: "Überfällig",
            InvoiceStatus.CANCELLED: "Storniert",
        },
    ),
    "fr": PdfLabels(
        heading="FACTURE",
        invoice_number="N° de facture",
        issue_date="Date de facture",
        due_date="Échéance",
        status="Statut",
        bill_to="FACTURER À",
        client="Client",
        email="E-mail",
        address="Adresse",
        description="Description",
        quantity="Quantité",
        unit_price="Prix unitaire",
        total="Total",
        subtotal="Sous-total",
        total_amount="TOTAL",
        notes="Notes",
        title_format="Facture {number}",
        author_fallback="Invoice Generator",
        statuses={
            InvoiceStatus.DRAFT: "Brouillon",
            InvoiceStatus.SENT: "Envoyée",
            InvoiceStatus.PAID: "Payée",
            InvoiceStatus.OVERDUE: "En retard",
            InvoiceStatus.CANCELLED: "Annulée",
        },
    ),
    # Cyrillic needs a TTF face configured via PDF_FONT_REGULAR_PATH.
    "ru": PdfLabels(
        heading="СЧЁТ",
        invoice_number="Номер счёта",
        issue_date="Дата счёта",
        due_date="Оплатить до",
        status="Статус",
        bill_to="ПЛАТЕЛЬЩИК",
        client="Клиент",
        email="Email",
        address="Адрес",
        description="Описание",
        quantity="Кол-во",
        unit_price="Цена",
        total="Сумма",
        subtotal="Промежуточный итог",
        total_amount="ИТОГО",
        notes="Примечания",
        title_format="Счёт {number}",
        author_fallback="Invoice Generator",
        statuses={
            InvoiceStatus.DRAFT: "Черновик",
            InvoiceStatus.SENT: "Отправлен",
            InvoiceStatus.PAID: "Оплачен",
            InvoiceStatus.OVERDUE: "Просрочен",
            InvoiceStatus.CANCELLED: "Отменён",
        },
    ),
}


def resolve_pdf_labels(language: str | None) -> PdfLabels:
    if not language:
        return PDF_LABELS_BY_LANGUAGE["en"]
    return PDF_LABELS_BY_LANGUAGE.get(str(language).lower(), PDF_LABELS_BY_LANGUAGE["en"])
