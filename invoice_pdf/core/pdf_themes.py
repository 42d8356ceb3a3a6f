from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PdfTypography:
    title_size: int
    company_name_size: int
    info_size: int
    label_size: int
    value_size: int
    section_header_size: int
    table_header_size: int
    cell_size: int
    total_size: int
    notes_header_size: int
    notes_body_size: int


@dataclass(frozen=True)
class PdfLayoutMetrics:
    page_width: float
    page_height: float
    margin: float
    start_y: float
    accent_bar_height: float
    title_gap: float
    detail_box_width: float
    detail_box_height: float
    detail_box_offset: float
    detail_row_step: float
    detail_value_offset: float
    panel_padding: float
    client_panel_height: float
    client_value_offset: float
    client_header_step: float
    table_header_height: float
    table_header_text_offset: float
    table_row_height: float
    table_row_band_offset: float
    table_columns: tuple[float, float, float, float]
    totals_width: float
    totals_height: float
    totals_value_offset: float
    totals_row_step: float
    totals_divider_gap: float
    notes_height: float
    notes_body_offset: float
    divider_width: float
    gap_after_header: float
    gap_after_client: float
    gap_after_items: float
    gap_before_notes: float

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin * 2


@dataclass(frozen=True)
class PdfTheme:
    name: str
    typography: PdfTypography
    layout: PdfLayoutMetrics


# A4 at 72 DPI.
A4_PAGE_SIZE = (595.0, 842.0)

DEFAULT_INVOICE_THEME = PdfTheme(
    name="invoice-classic",
    typography=PdfTypography(
        title_size=22,
        company_name_size=14,
        info_size=11,
        label_size=11,
        value_size=12,
        section_header_size=13,
        table_header_size=12,
        cell_size=11,
        total_size=14,
        notes_header_size=12,
        notes_body_size=11,
    ),
    layout=PdfLayoutMetrics(
        page_width=A4_PAGE_SIZE[0],
        page_height=A4_PAGE_SIZE[1],
        margin=50,
        start_y=24,
        accent_bar_height=10,
        title_gap=16,
        detail_box_width=230,
        detail_box_height=104,
        detail_box_offset=18,
        detail_row_step=22,
        detail_value_offset=118,
        panel_padding=12,
        client_panel_height=110,
        client_value_offset=88,
        client_header_step=18,
        table_header_height=32,
        table_header_text_offset=9,
        table_row_height=26,
        table_row_band_offset=6,
        table_columns=(60, 320, 400, 500),
        totals_width=250,
        totals_height=84,
        totals_value_offset=134,
        totals_row_step=22,
        totals_divider_gap=12,
        notes_height=110,
        notes_body_offset=28,
        divider_width=0.5,
        gap_after_header=18,
        gap_after_client=20,
        gap_after_items=16,
        gap_before_notes=24,
    ),
)

# Tighter spacing for invoices with long item lists.
COMPACT_INVOICE_THEME = PdfTheme(
    name="invoice-compact",
    typography=PdfTypography(
        title_size=18,
        company_name_size=12,
        info_size=9,
        label_size=9,
        value_size=10,
        section_header_size=11,
        table_header_size=10,
        cell_size=9,
        total_size=12,
        notes_header_size=10,
        notes_body_size=9,
    ),
    layout=PdfLayoutMetrics(
        page_width=A4_PAGE_SIZE[0],
        page_height=A4_PAGE_SIZE[1],
        margin=40,
        start_y=20,
        accent_bar_height=8,
        title_gap=14,
        detail_box_width=220,
        detail_box_height=88,
        detail_box_offset=14,
        detail_row_step=18,
        detail_value_offset=110,
        panel_padding=10,
        client_panel_height=90,
        client_value_offset=80,
        client_header_step=15,
        table_header_height=26,
        table_header_text_offset=7,
        table_row_height=20,
        table_row_band_offset=5,
        table_columns=(50, 330, 405, 495),
        totals_width=240,
        totals_height=70,
        totals_value_offset=128,
        totals_row_step=18,
        totals_divider_gap=10,
        notes_height=90,
        notes_body_offset=22,
        divider_width=0.5,
        gap_after_header=14,
        gap_after_client=16,
        gap_after_items=12,
        gap_before_notes=18,
    ),
)

PDF_THEMES: dict[str, PdfTheme] = {
    DEFAULT_INVOICE_THEME.name: DEFAULT_INVOICE_THEME,
    COMPACT_INVOICE_THEME.name: COMPACT_INVOICE_THEME,
}


def resolve_pdf_theme(name: str | None) -> PdfTheme:
    if not name:
        return DEFAULT_INVOICE_THEME
    return PDF_THEMES.get(str(name).strip().lower(), DEFAULT_INVOICE_THEME)
