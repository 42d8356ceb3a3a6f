from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from invoice_pdf.core.config import settings


_FONT_REGULAR_NAME = "InvoiceRegular"
_FONT_BOLD_NAME = "InvoiceBold"
_FONT_FALLBACK_REGULAR = "Helvetica"
_FONT_FALLBACK_BOLD = "Helvetica-Bold"

# Extra spacing between lines, as a fraction of the font size.
LEADING_RATIO = 0.5

_FONT_FAMILY: dict[str, str] | None = None

_ZERO_WIDTH_CHARS = {
    "\u200b",  # ZERO WIDTH SPACE
    "\u200c",  # ZERO WIDTH NON-JOINER
    "\u200d",  # ZERO WIDTH JOINER
    "\u2060",  # WORD JOINER
    "\ufeff",  # ZERO WIDTH NO-BREAK SPACE
}


@dataclass(frozen=True)
class PdfFont:
    name: str
    size: float


@dataclass(frozen=True)
class FontMetrics:
    ascent: float
    descent: float
    leading: float

    @property
    def line_height(self) -> float:
        return self.ascent + self.descent + self.leading

    @property
    def baseline_offset(self) -> float:
        return self.ascent


def measure(font: PdfFont) -> FontMetrics:
    ascent, descent = pdfmetrics.getAscentDescent(font.name, font.size)
    # reportlab reports descent below the baseline as a negative number.
    return FontMetrics(ascent=ascent, descent=abs(descent), leading=font.size * LEADING_RATIO)


def string_width(font: PdfFont, text: str) -> float:
    return pdfmetrics.stringWidth(text, font.name, font.size)


def prepare_text(text: str) -> str:
    if not text:
        return ""

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    prepared_chars: list[str] = []
    for char in normalized:
        if char in _ZERO_WIDTH_CHARS:
            continue
        if ord(char) < 32 and char not in {"\n", "\t"}:
            continue
        prepared_chars.append(char)
    return "".join(prepared_chars)


class WrappedLines:
    """Greedy word wrap of `text`, recomputed on every iteration.

    Paragraph breaks (``\\n``) are kept, blank paragraphs yield an empty line.
    A word wider than `max_width` is emitted alone on its line, unbroken.
    """

    def __init__(self, font: PdfFont, text: str, max_width: float) -> None:
        self.font = font
        self.text = text
        self.max_width = max_width

    def __iter__(self) -> Iterator[str]:
        prepared = prepare_text(self.text)
        if not prepared:
            return
        for paragraph in prepared.split("\n"):
            if not paragraph.strip():
                yield ""
                continue
            yield from self._wrap_paragraph(paragraph)

    def _wrap_paragraph(self, paragraph: str) -> Iterator[str]:
        current = ""
        for word in paragraph.split():
            candidate = word if not current else f"{current} {word}"
            if string_width(self.font, candidate) <= self.max_width:
                current = candidate
                continue
            if current:
                yield current
            current = word
        if current:
            yield current

    def __repr__(self) -> str:
        return f"WrappedLines(font={self.font!r}, max_width={self.max_width!r}, text={self.text[:24]!r})"


def wrap(font: PdfFont, text: str, max_width: float) -> WrappedLines:
    return WrappedLines(font, text, max_width)


def register_fonts() -> dict[str, str]:
    global _FONT_FAMILY
    if _FONT_FAMILY is not None:
        return _FONT_FAMILY

    logger = logging.getLogger(__name__)
    regular_font = _register_font_variant(
        font_name=_FONT_REGULAR_NAME,
        variant="regular",
        paths=_configured_paths(settings.pdf_regular_font_path),
        logger=logger,
    )
    bold_font = _register_font_variant(
        font_name=_FONT_BOLD_NAME,
        variant="bold",
        paths=_configured_paths(settings.pdf_font_bold_path),
        logger=logger,
    )
    # A custom regular face paired with built-in Helvetica-Bold looks mismatched.
    if bold_font == _FONT_FALLBACK_BOLD and regular_font != _FONT_FALLBACK_REGULAR:
        bold_font = regular_font

    _FONT_FAMILY = {"regular": regular_font, "bold": bold_font}
    return _FONT_FAMILY


def _configured_paths(configured_path: str | None) -> list[Path]:
    if not configured_path:
        return []
    return [Path(configured_path)]


def _register_font_variant(
    *,
    font_name: str,
    variant: str,
    paths: list[Path],
    logger: logging.Logger,
) -> str:
    for font_path in paths:
        if not font_path.exists():
            logger.warning(
                "pdf_font_path_missing",
                extra={"variant": variant, "font_path": str(font_path)},
            )
            continue
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
            return font_name
        except Exception as exc:
            logger.warning(
                "pdf_font_register_failed",
                extra={"variant": variant, "font_path": str(font_path), "error": str(exc)},
            )

    fallback = _FONT_FALLBACK_BOLD if variant == "bold" else _FONT_FALLBACK_REGULAR
    if paths:
        logger.warning(
            "pdf_font_variant_fallback",
            extra={"variant": variant, "fallback": fallback},
        )
    return fallback
