from invoice_pdf.core.formatting import FormattingContext
from invoice_pdf.core.invoice_document import (
    ClientBlock,
    CompanyBlock,
    InvoiceDocumentBuilder,
    InvoiceDocumentData,
    InvoiceStatus,
    LineItem,
)
from invoice_pdf.core.pdf_service import (
    InvoicePdfRenderer,
    InvoicePdfService,
    InvoicePdfStorage,
    build_invoice_pdf_filename,
)

__all__ = [
    "ClientBlock",
    "CompanyBlock",
    "FormattingContext",
    "InvoiceDocumentBuilder",
    "InvoiceDocumentData",
    "InvoicePdfRenderer",
    "InvoicePdfService",
    "InvoicePdfStorage",
    "InvoiceStatus",
    "LineItem",
    "build_invoice_pdf_filename",
]
