from __future__ import annotations

import logging

from invoice_pdf.core.invoice_document import InvoiceDocumentData
from invoice_pdf.core.pdf_canvas import PdfCanvas, Point, Rect
from invoice_pdf.core.pdf_colors import PdfPalette
from invoice_pdf.core.pdf_layout import (
    LayoutCursor,
    SectionContext,
    SectionSpec,
    draw_label_rows,
    optional_lines,
    split_lines,
)
from invoice_pdf.core.pdf_text_metrics import PdfFont, string_width
from invoice_pdf.core.pdf_themes import PdfLayoutMetrics


_ELLIPSIS = "…"

logger = logging.getLogger(__name__)


def fit_text(font: PdfFont, text: str, max_width: float) -> str:
    """Shortens `text` with an ellipsis so it stays inside `max_width`."""
    if string_width(font, text) <= max_width:
        return text
    # Prefix width only grows with length, so the longest fitting prefix can be bisected.
    low, high = 0, len(text)
    while low < high:
        middle = (low + high + 1) // 2
        if string_width(font, f"{text[:middle]}{_ELLIPSIS}") <= max_width:
            low = middle
        else:
            high = middle - 1
    trimmed = text[:low].rstrip()
    return f"{trimmed}{_ELLIPSIS}" if trimmed else ""


def draw_header(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    layout = context.theme.layout
    typography = context.theme.typography

    canvas.fill_rect(Rect(0, y, canvas.page_width, layout.accent_bar_height), palette.accent)

    cursor = LayoutCursor(y).advance(layout.accent_bar_height + layout.title_gap)
    consumed = canvas.draw_text_run(
        context.labels.heading,
        Point(layout.margin, cursor.y),
        context.bold(typography.title_size),
        palette.text_primary,
    )
    cursor = cursor.advance(consumed)

    if data.company is not None:
        company = data.company
        consumed = canvas.draw_text_run(
            company.name,
            Point(layout.margin, cursor.y),
            context.bold(typography.company_name_size),
            palette.text_primary,
        )
        cursor = cursor.advance(consumed)
        info_font = context.regular(typography.info_size)
        for line in [*split_lines(company.address), *optional_lines(company.email, company.phone)]:
            consumed = canvas.draw_text_run(line, Point(layout.margin, cursor.y), info_font, palette.text_secondary)
            cursor = cursor.advance(consumed)

    detail_bottom = _draw_detail_panel(data, palette, canvas, y, context)
    return cursor.below(detail_bottom).y


def _draw_detail_panel(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    layout = context.theme.layout
    typography = context.theme.typography
    labels = context.labels
    formatting = context.formatting

    box = Rect(
        canvas.page_width - layout.detail_box_width - layout.margin,
        y + layout.detail_box_offset,
        layout.detail_box_width,
        layout.detail_box_height,
    )
    canvas.fill_rect(box, palette.panel_background)

    label_font = context.bold(typography.label_size)
    value_font = context.regular(typography.value_size)
    label_x = box.x + layout.panel_padding
    value_x = label_x + layout.detail_value_offset
    value_width = box.right - layout.panel_padding - value_x
    rows = (
        (labels.invoice_number, data.invoice_number),
        (labels.issue_date, formatting.format_date(data.issue_date)),
        (labels.due_date, formatting.format_date(data.due_date)),
        (labels.status, labels.status_title(data.status)),
    )
    row_y = box.y + layout.panel_padding
    for label, value in rows:
        canvas.draw_text_run(label, Point(label_x, row_y), label_font, palette.text_secondary)
        canvas.draw_text_run(
            fit_text(value_font, value, value_width),
            Point(value_x, row_y),
            value_font,
            palette.text_primary,
        )
        row_y += layout.detail_row_step
    return box.bottom


def draw_client_panel(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    layout = context.theme.layout
    typography = context.theme.typography
    labels = context.labels
    client = data.client

    container = Rect(layout.margin, y, layout.content_width, layout.client_panel_height)
    canvas.fill_rect(container, palette.section_background)

    label_x = container.x + layout.panel_padding
    cursor = LayoutCursor(container.y + layout.panel_padding)
    canvas.draw_text_run(
        labels.bill_to,
        Point(label_x, cursor.y),
        context.bold(typography.section_header_size),
        palette.accent,
    )
    cursor = cursor.advance(layout.client_header_step)

    rows: list[tuple[str, str]] = [(labels.client, client.name)]
    rows.extend((labels.email, email) for email in optional_lines(client.email))
    for index, address_line in enumerate(split_lines(client.address)):
        rows.append((labels.address if index == 0 else "", address_line))

    draw_label_rows(
        canvas,
        rows,
        x=label_x,
        value_x=label_x + layout.client_value_offset,
        cursor=cursor,
        label_font=context.bold(typography.label_size),
        value_font=context.regular(typography.value_size),
        label_color=palette.text_secondary,
        value_color=palette.text_primary,
        bottom=container.bottom - layout.panel_padding,
    )
    return container.bottom


def draw_items_table(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    layout = context.theme.layout
    typography = context.theme.typography
    labels = context.labels
    formatting = context.formatting
    columns = layout.table_columns
    table_right = layout.margin + layout.content_width

    header = Rect(layout.margin, y, layout.content_width, layout.table_header_height)
    canvas.fill_rect(header, palette.accent)
    header_font = context.bold(typography.table_header_size)
    header_y = y + layout.table_header_text_offset
    for column_x, title in zip(columns, (labels.description, labels.quantity, labels.unit_price, labels.total)):
        canvas.draw_text_run(title, Point(column_x, header_y), header_font, palette.on_accent)

    cell_font = context.regular(typography.cell_size)
    description_width = columns[1] - columns[0] - layout.panel_padding
    row_top = header.bottom
    for index, item in enumerate(data.items):
        if index % 2 == 0:
            canvas.fill_rect(
                Rect(layout.margin, row_top, layout.content_width, layout.table_row_height),
                palette.row_background,
            )
        text_y = row_top + layout.table_row_band_offset
        cells = (
            fit_text(cell_font, item.description, description_width),
            formatting.format_quantity(item.quantity),
            formatting.format_currency(item.unit_price),
            formatting.format_currency(item.line_total),
        )
        for column_x, cell in zip(columns, cells):
            if cell:
                canvas.draw_text_run(cell, Point(column_x, text_y), cell_font, palette.text_primary)

        row_top += layout.table_row_height
        canvas.stroke_line(
            Point(layout.margin, row_top),
            Point(table_right, row_top),
            palette.divider,
            layout.divider_width,
        )

    return row_top


def draw_totals_panel(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    layout = context.theme.layout
    typography = context.theme.typography
    labels = context.labels
    formatting = context.formatting

    container = Rect(
        canvas.page_width - layout.totals_width - layout.margin,
        y,
        layout.totals_width,
        layout.totals_height,
    )
    canvas.fill_rect(container, palette.panel_background)

    # The subtotal is recomputed from the rows while TOTAL shows the supplied
    # amount, so upstream drift stays visible on the document.
    subtotal = data.items_subtotal
    if subtotal != data.total_amount:
        logger.info(
            "pdf_totals_drift",
            extra={
                "invoice_number": data.invoice_number,
                "subtotal": str(subtotal),
                "total_amount": str(data.total_amount),
            },
        )

    label_x = container.x + layout.panel_padding
    value_x = label_x + layout.totals_value_offset
    row_y = container.y + layout.panel_padding
    canvas.draw_text_run(
        labels.subtotal,
        Point(label_x, row_y),
        context.bold(typography.value_size),
        palette.text_secondary,
    )
    canvas.draw_text_run(
        formatting.format_currency(subtotal),
        Point(value_x, row_y),
        context.regular(typography.value_size),
        palette.text_primary,
    )
    row_y += layout.totals_row_step

    canvas.stroke_line(
        Point(label_x, row_y),
        Point(container.right - layout.panel_padding, row_y),
        palette.divider,
        layout.divider_width,
    )
    row_y += layout.totals_divider_gap

    total_font = context.bold(typography.total_size)
    canvas.draw_text_run(labels.total_amount, Point(label_x, row_y), total_font, palette.accent)
    canvas.draw_text_run(
        formatting.format_currency(data.total_amount),
        Point(value_x, row_y),
        total_font,
        palette.accent,
    )
    return container.bottom


def has_notes(data: InvoiceDocumentData) -> bool:
    return bool(data.notes and data.notes.strip())


def draw_notes_panel(
    data: InvoiceDocumentData,
    palette: PdfPalette,
    canvas: PdfCanvas,
    y: float,
    context: SectionContext,
) -> float:
    if not has_notes(data):
        return y
    layout = context.theme.layout
    typography = context.theme.typography

    container = Rect(layout.margin, y, layout.content_width, layout.notes_height)
    canvas.fill_rect(container, palette.section_background)
    canvas.draw_text_run(
        context.labels.notes,
        Point(container.x + layout.panel_padding, container.y + layout.panel_padding),
        context.bold(typography.notes_header_size),
        palette.accent,
    )
    body = Rect(
        container.x + layout.panel_padding,
        container.y + layout.notes_body_offset,
        container.width - layout.panel_padding * 2,
        container.height - layout.notes_body_offset - layout.panel_padding,
    )
    # Text past the body height is dropped: the document is a single page.
    canvas.draw_wrapped_text(data.notes, body, context.regular(typography.notes_body_size), palette.text_primary)
    return container.bottom


def build_invoice_sections(layout: PdfLayoutMetrics) -> tuple[SectionSpec, ...]:
    return (
        SectionSpec("header", 0, draw_header),
        SectionSpec("client", layout.gap_after_header, draw_client_panel),
        SectionSpec("items", layout.gap_after_client, draw_items_table),
        SectionSpec("totals", layout.gap_after_items, draw_totals_panel),
        SectionSpec("notes", layout.gap_before_notes, draw_notes_panel, is_present=has_notes),
    )
