from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


def resolve_status(value: Any) -> InvoiceStatus:
    """Maps an enum member, its value or its name (any case) to a status; DRAFT otherwise."""
    if isinstance(value, InvoiceStatus):
        return value
    raw = _text(getattr(value, "value", value)).lower()
    for status in InvoiceStatus:
        if raw in {status.value.lower(), status.name.lower()}:
            return status
    return InvoiceStatus.DRAFT


def _to_decimal(value: Any) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True, slots=True)
class LineItem:
    description: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        # Callers may hand in floats or strings; arithmetic below needs int and Decimal.
        object.__setattr__(self, "quantity", _to_int(self.quantity))
        object.__setattr__(self, "unit_price", _to_decimal(self.unit_price))

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True, slots=True)
class CompanyBlock:
    name: str
    address: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True, slots=True)
class ClientBlock:
    name: str
    email: str = ""
    address: str = ""
    accent_hex: str | None = None


@dataclass(frozen=True, slots=True)
class InvoiceDocumentData:
    invoice_number: str
    status: InvoiceStatus
    issue_date: date
    due_date: date
    client: ClientBlock
    total_amount: Decimal
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    company: CompanyBlock | None = None
    notes: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", resolve_status(self.status))
        object.__setattr__(self, "total_amount", _to_decimal(self.total_amount))
        object.__setattr__(self, "items", tuple(self.items or ()))

    @property
    def items_subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal(0))


def _field(record: Any, *names: str, default: Any = None) -> Any:
    if record is None:
        return default
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class InvoiceDocumentBuilder:
    """Assembles an `InvoiceDocumentData` snapshot from record-like objects.

    Records may be mappings or objects with attributes; both snake_case and the
    camelCase names used by the mobile record layer are accepted.
    """

    _DEFAULT_INVOICE_NUMBER = "INV-DRAFT"
    _DEFAULT_CLIENT_NAME = "Client"

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def build(
        self,
        invoice: Any,
        *,
        company: Any = None,
        client: Any = None,
    ) -> InvoiceDocumentData:
        related_client = client if client is not None else _field(invoice, "client")
        items = tuple(self._build_item(item) for item in (_field(invoice, "items", default=()) or ()))
        issue_date = self._resolve_date(_field(invoice, "issue_date", "issueDate"))
        due_date = self._resolve_date(_field(invoice, "due_date", "dueDate"), fallback=issue_date)

        raw_total = _field(invoice, "total_amount", "totalAmount")
        subtotal = sum((item.line_total for item in items), Decimal(0))
        total_amount = _to_decimal(raw_total) if raw_total is not None else subtotal

        return InvoiceDocumentData(
            invoice_number=_text(_field(invoice, "invoice_number", "invoiceNumber"))
            or self._DEFAULT_INVOICE_NUMBER,
            status=resolve_status(_field(invoice, "status")),
            issue_date=issue_date,
            due_date=due_date,
            client=self._build_client(invoice, related_client),
            company=self._build_company(company),
            items=items,
            total_amount=total_amount,
            notes=_text(_field(invoice, "notes")),
        )

    def _build_client(self, invoice: Any, client: Any) -> ClientBlock:
        name = _text(_field(invoice, "client_name", "clientName")) or _text(_field(client, "name"))
        if not name:
            self._logger.info("invoice_document_client_name_missing")
            name = self._DEFAULT_CLIENT_NAME
        return ClientBlock(
            name=name,
            email=_text(_field(invoice, "client_email", "clientEmail")) or _text(_field(client, "email")),
            address=_text(_field(invoice, "client_address", "clientAddress")) or _text(_field(client, "address")),
            accent_hex=_text(_field(client, "accent_color_hex", "accentColorHex", "accent_hex")) or None,
        )

    def _build_company(self, company: Any) -> CompanyBlock | None:
        if company is None:
            return None
        name = _text(_field(company, "company_name", "companyName", "name"))
        if not name:
            return None
        return CompanyBlock(
            name=name,
            address=_text(_field(company, "address")),
            email=_text(_field(company, "email")),
            phone=_text(_field(company, "phone")),
        )

    def _build_item(self, item: Any) -> LineItem:
        return LineItem(
            description=_text(_field(item, "description", "item_description", "itemDescription")),
            quantity=max(_to_int(_field(item, "quantity", default=0)), 0),
            unit_price=max(_to_decimal(_field(item, "unit_price", "unitPrice", default=0)), Decimal(0)),
        )

    def _resolve_date(self, value: Any, fallback: date | None = None) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return date.fromisoformat(value.strip()[:10])
            except ValueError:
                self._logger.info("invoice_document_date_unparsable", extra={"value": value})
        # Fixed epoch keeps the snapshot deterministic when a record has no date.
        return fallback or date(1970, 1, 1)


invoice_document_builder = InvoiceDocumentBuilder()
