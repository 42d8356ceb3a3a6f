from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from invoice_pdf.core.formatting import FormattingContext
from invoice_pdf.core.invoice_document import InvoiceDocumentData
from invoice_pdf.core.pdf_canvas import PdfCanvas, Point
from invoice_pdf.core.pdf_colors import Color, PdfPalette
from invoice_pdf.core.pdf_labels import PdfLabels
from invoice_pdf.core.pdf_text_metrics import PdfFont, measure
from invoice_pdf.core.pdf_themes import PdfTheme


@dataclass(frozen=True)
class SectionContext:
    """Read-only render settings shared by every section of one render call."""

    theme: PdfTheme
    fonts: dict[str, str]
    formatting: FormattingContext
    labels: PdfLabels

    def regular(self, size: float) -> PdfFont:
        return PdfFont(self.fonts["regular"], size)

    def bold(self, size: float) -> PdfFont:
        return PdfFont(self.fonts["bold"], size)


SectionFn = Callable[[InvoiceDocumentData, PdfPalette, PdfCanvas, float, SectionContext], float]


@dataclass(frozen=True)
class LayoutCursor:
    y: float

    def advance(self, delta: float) -> LayoutCursor:
        return LayoutCursor(self.y + delta)

    def below(self, *bottoms: float) -> LayoutCursor:
        return LayoutCursor(max(self.y, *bottoms))


def optional_lines(*values: str | None) -> list[str]:
    """Keeps the present values in order; blank or missing ones take no space."""
    return [value.strip() for value in values if value and value.strip()]


def split_lines(value: str | None) -> list[str]:
    if not value:
        return []
    return optional_lines(*value.replace("\r\n", "\n").split("\n"))


@dataclass(frozen=True)
class SectionSpec:
    name: str
    gap_before: float
    draw: SectionFn
    is_present: Callable[[InvoiceDocumentData], bool] = lambda _data: True


def run_sections(
    sections: Sequence[SectionSpec],
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    context: SectionContext,
    start_y: float,
) -> float:
    """Chains the sections in order, threading the vertical cursor.

    Absent sections contribute neither their gap nor any primitive.
    """
    y = start_y
    for spec in sections:
        if not spec.is_present(data):
            continue
        y = spec.draw(data, palette, canvas, y + spec.gap_before, context)
    return y


def draw_label_rows(
    canvas: PdfCanvas,
    rows: Iterable[tuple[str, str]],
    *,
    x: float,
    value_x: float,
    cursor: LayoutCursor,
    label_font: PdfFont,
    value_font: PdfFont,
    label_color: Color,
    value_color: Color,
    bottom: float | None = None,
) -> LayoutCursor:
    """Draws label/value pairs, advancing one value line height per row.

    An empty label continues the previous row (multi-line values). Rows whose
    glyphs would cross `bottom` are dropped.
    """
    value_metrics = measure(value_font)
    for label, value in rows:
        if bottom is not None and cursor.y + value_metrics.ascent + value_metrics.descent > bottom:
            break
        if label:
            canvas.draw_text_run(label, Point(x, cursor.y), label_font, label_color)
        consumed = canvas.draw_text_run(value, Point(value_x, cursor.y), value_font, value_color)
        cursor = cursor.advance(consumed)
    return cursor
