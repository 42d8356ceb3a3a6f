from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

from invoice_pdf.core.config import settings
from invoice_pdf.core.formatting import FormattingContext
from invoice_pdf.core.invoice_document import InvoiceDocumentData
from invoice_pdf.core.pdf_canvas import CanvasAllocationFailure, PdfCanvas, ReportlabCanvas
from invoice_pdf.core.pdf_colors import derive_palette, resolve_accent
from invoice_pdf.core.pdf_labels import resolve_pdf_labels
from invoice_pdf.core.pdf_layout import SectionContext, run_sections
from invoice_pdf.core.pdf_sections import build_invoice_sections
from invoice_pdf.core.pdf_text_metrics import register_fonts
from invoice_pdf.core.pdf_themes import PdfTheme, resolve_pdf_theme


_UNSAFE_FILENAME_CHARS_RE = re.compile(r'[\\/*?:"<>|\x00-\x1f]')


def build_invoice_pdf_filename(invoice_number: str | None) -> str:
    safe_number = _UNSAFE_FILENAME_CHARS_RE.sub("", invoice_number or "").strip()
    if not safe_number:
        return "Invoice.pdf"
    return f"Invoice_{safe_number}.pdf"


class InvoicePdfRenderer:
    """Lays out one invoice on a single fixed-size page.

    `render` is a pure function of the snapshot, the formatting context and
    the theme: identical inputs yield identical bytes.
    """

    def __init__(
        self,
        theme: PdfTheme | None = None,
        canvas_factory: Callable[[tuple[float, float]], PdfCanvas] = ReportlabCanvas,
        logger: logging.Logger | None = None,
    ) -> None:
        self._theme = theme or resolve_pdf_theme(settings.pdf_theme)
        self._canvas_factory = canvas_factory
        self._logger = logger or logging.getLogger(__name__)

    @property
    def theme(self) -> PdfTheme:
        return self._theme

    def render(
        self,
        data: InvoiceDocumentData,
        formatting: FormattingContext | None = None,
    ) -> bytes | None:
        layout = self._theme.layout
        try:
            pdf = self._canvas_factory((layout.page_width, layout.page_height))
            self.draw(data, pdf, formatting)
            return pdf.finish()
        except CanvasAllocationFailure as exc:
            self._logger.warning(
                "pdf_canvas_allocation_failed",
                extra={"invoice_number": data.invoice_number, "error": str(exc)},
            )
            return None

    def draw(
        self,
        data: InvoiceDocumentData,
        pdf: PdfCanvas,
        formatting: FormattingContext | None = None,
    ) -> float:
        formatting = formatting or FormattingContext.from_settings()
        labels = resolve_pdf_labels(formatting.language)
        palette = derive_palette(resolve_accent(data.client.accent_hex, settings.pdf_default_accent_hex))
        context = SectionContext(
            theme=self._theme,
            fonts=register_fonts(),
            formatting=formatting,
            labels=labels,
        )

        pdf.set_metadata(
            title=labels.document_title(data.invoice_number),
            author=data.company.name if data.company else labels.author_fallback,
            creator=settings.pdf_creator,
        )
        bottom = run_sections(
            build_invoice_sections(self._theme.layout),
            data,
            palette,
            pdf,
            context,
            start_y=self._theme.layout.start_y,
        )
        if bottom > pdf.page_height:
            self._logger.info(
                "pdf_content_overflow_clipped",
                extra={
                    "invoice_number": data.invoice_number,
                    "content_bottom": round(bottom, 2),
                    "page_height": pdf.page_height,
                },
            )
        return bottom


class InvoicePdfStorage:
    """Keeps rendered invoices as `Invoice_<number>.pdf` inside one save directory.

    The directory comes from `PDF_SAVE_DIRECTORY` (falling back to the user's
    Documents folder) and is created the first time a path is resolved.
    """

    def __init__(self, directory: Path | str | None = None, logger: logging.Logger | None = None) -> None:
        self._directory = directory
        self._logger = logger or logging.getLogger(__name__)

    @property
    def directory(self) -> Path:
        configured = self._directory or settings.pdf_save_directory
        if configured:
            return Path(configured).expanduser()
        return Path.home() / "Documents"

    def target_path(self, invoice_number: str | None) -> Path | None:
        directory = self.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._logger.warning(
                "pdf_save_directory_unavailable",
                extra={"directory": str(directory), "error": str(exc)},
            )
            return None
        return directory / build_invoice_pdf_filename(invoice_number)

    def save(self, invoice_number: str | None, content: bytes) -> Path | None:
        path = self.target_path(invoice_number)
        if path is None:
            return None
        try:
            path.write_bytes(content)
        except OSError as exc:
            self._logger.warning(
                "pdf_save_failed",
                extra={"invoice_number": invoice_number, "path": str(path), "error": str(exc)},
            )
            return None
        self._logger.info("pdf_saved", extra={"invoice_number": invoice_number, "path": str(path)})
        return path

    def load(self, invoice_number: str | None) -> bytes | None:
        path = self.directory / build_invoice_pdf_filename(invoice_number)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            self._logger.warning(
                "pdf_load_failed",
                extra={"invoice_number": invoice_number, "path": str(path), "error": str(exc)},
            )
            return None

    def delete(self, invoice_number: str | None) -> bool:
        path = self.directory / build_invoice_pdf_filename(invoice_number)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as exc:
            self._logger.warning(
                "pdf_delete_failed",
                extra={"invoice_number": invoice_number, "path": str(path), "error": str(exc)},
            )
            return False
        return True


class InvoicePdfService:
    """Renders invoice snapshots and saves them to the invoice save directory."""

    def __init__(
        self,
        renderer: InvoicePdfRenderer | None = None,
        storage: InvoicePdfStorage | None = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._renderer = renderer or InvoicePdfRenderer(logger=self._logger)
        self._storage = storage or InvoicePdfStorage(logger=self._logger)

    @property
    def storage(self) -> InvoicePdfStorage:
        return self._storage

    def generate_pdf(
        self,
        data: InvoiceDocumentData,
        formatting: FormattingContext | None = None,
    ) -> bytes | None:
        return self._renderer.render(data, formatting)

    def save_pdf(
        self,
        data: InvoiceDocumentData,
        formatting: FormattingContext | None = None,
    ) -> Path | None:
        content = self.generate_pdf(data, formatting)
        if content is None:
            return None
        return self._storage.save(data.invoice_number, content)

    def pdf_path(self, invoice_number: str) -> Path | None:
        return self._storage.target_path(invoice_number)

    def load_pdf(self, invoice_number: str) -> bytes | None:
        return self._storage.load(invoice_number)

    def delete_pdf(self, invoice_number: str) -> bool:
        return self._storage.delete(invoice_number)
