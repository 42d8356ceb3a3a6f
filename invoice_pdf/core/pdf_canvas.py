from __future__ import annotations

import math
from dataclasses import dataclass
from io import BytesIO

from reportlab.pdfgen import canvas

from invoice_pdf.core.pdf_colors import Color
from invoice_pdf.core.pdf_text_metrics import PdfFont, measure, wrap
from invoice_pdf.core.pdf_themes import A4_PAGE_SIZE


class CanvasAllocationFailure(RuntimeError):
    """The drawing surface could not be created or serialised."""


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class PdfCanvas:
    """Fixed-size page drawn in top-left, y-down coordinates.

    Subclasses implement the `_fill_rect`, `_stroke_line` and `_draw_string`
    hooks; they receive coordinates already in the top-left space plus the
    text baseline, and must not flip anything themselves.
    """

    def __init__(self, page_size: tuple[float, float] = A4_PAGE_SIZE) -> None:
        width, height = page_size
        if not all(isinstance(value, (int, float)) and math.isfinite(value) and value > 0 for value in page_size):
            raise CanvasAllocationFailure(f"invalid page size: {page_size!r}")
        self.page_width = float(width)
        self.page_height = float(height)

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)

    def fill_rect(self, rect: Rect, color: Color) -> None:
        self._fill_rect(rect, color)

    def stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        self._stroke_line(start, end, color, width)

    def draw_text_run(self, text: str, origin: Point, font: PdfFont, color: Color) -> float:
        metrics = measure(font)
        self._draw_string(text, origin, origin.y + metrics.baseline_offset, font, color)
        return metrics.line_height

    def draw_wrapped_text(self, text: str, bounds: Rect, font: PdfFont, color: Color) -> int:
        """Draws `text` wrapped to `bounds.width`; lines that do not fit are dropped."""
        metrics = measure(font)
        glyph_height = metrics.ascent + metrics.descent
        y = bounds.y
        drawn = 0
        for line in wrap(font, text, bounds.width):
            if y + glyph_height > bounds.bottom:
                break
            if line:
                self.draw_text_run(line, Point(bounds.x, y), font, color)
                drawn += 1
            y += metrics.line_height
        return drawn

    def set_metadata(self, *, title: str, author: str, creator: str) -> None:
        return None

    def finish(self) -> bytes:
        raise NotImplementedError

    def _fill_rect(self, rect: Rect, color: Color) -> None:
        raise NotImplementedError

    def _stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        raise NotImplementedError

    def _draw_string(self, text: str, origin: Point, baseline_y: float, font: PdfFont, color: Color) -> None:
        raise NotImplementedError


class ReportlabCanvas(PdfCanvas):
    def __init__(
        self,
        page_size: tuple[float, float] = A4_PAGE_SIZE,
        *,
        page_compression: bool = True,
    ) -> None:
        super().__init__(page_size)
        self._buffer = BytesIO()
        try:
            # bottomup=0 installs the single page-wide flip; invariant=1 pins
            # the document id and timestamps.
            self._pdf = canvas.Canvas(
                self._buffer,
                pagesize=self.page_size,
                bottomup=0,
                invariant=1,
                pageCompression=int(page_compression),
            )
        except MemoryError as exc:
            raise CanvasAllocationFailure("out of memory while allocating canvas") from exc

    def set_metadata(self, *, title: str, author: str, creator: str) -> None:
        self._pdf.setTitle(title)
        self._pdf.setAuthor(author)
        self._pdf.setCreator(creator)

    def finish(self) -> bytes:
        try:
            self._pdf.showPage()
            self._pdf.save()
        except MemoryError as exc:
            raise CanvasAllocationFailure("out of memory while serialising page") from exc
        return self._buffer.getvalue()

    def _fill_rect(self, rect: Rect, color: Color) -> None:
        self._pdf.saveState()
        self._pdf.setFillColorRGB(*color.rgb, alpha=color.alpha)
        self._pdf.rect(rect.x, rect.y, rect.width, rect.height, stroke=0, fill=1)
        self._pdf.restoreState()

    def _stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        self._pdf.saveState()
        self._pdf.setStrokeColorRGB(*color.rgb, alpha=color.alpha)
        self._pdf.setLineWidth(width)
        self._pdf.line(start.x, start.y, end.x, end.y)
        self._pdf.restoreState()

    def _draw_string(self, text: str, origin: Point, baseline_y: float, font: PdfFont, color: Color) -> None:
        self._pdf.saveState()
        self._pdf.setFillColorRGB(*color.rgb, alpha=color.alpha)
        self._pdf.setFont(font.name, font.size)
        self._pdf.drawString(origin.x, baseline_y, text)
        self._pdf.restoreState()


@dataclass(frozen=True)
class DrawCall:
    kind: str
    x: float
    y: float
    x2: float | None = None
    y2: float | None = None
    width: float | None = None
    height: float | None = None
    text: str | None = None
    baseline: float | None = None
    font: PdfFont | None = None
    color: Color | None = None


class RecordingCanvas(PdfCanvas):
    """Headless backend that keeps every primitive as a `DrawCall`."""

    def __init__(self, page_size: tuple[float, float] = A4_PAGE_SIZE) -> None:
        super().__init__(page_size)
        self.calls: list[DrawCall] = []
        self.metadata: dict[str, str] = {}

    def texts(self) -> list[DrawCall]:
        return [call for call in self.calls if call.kind == "text"]

    def rects(self) -> list[DrawCall]:
        return [call for call in self.calls if call.kind == "rect"]

    def lines(self) -> list[DrawCall]:
        return [call for call in self.calls if call.kind == "line"]

    def find_text(self, text: str) -> DrawCall | None:
        return next((call for call in self.calls if call.kind == "text" and call.text == text), None)

    def set_metadata(self, *, title: str, author: str, creator: str) -> None:
        self.metadata = {"title": title, "author": author, "creator": creator}

    def finish(self) -> bytes:
        return "\n".join(repr(call) for call in self.calls).encode("utf-8")

    def _fill_rect(self, rect: Rect, color: Color) -> None:
        self.calls.append(
            DrawCall("rect", rect.x, rect.y, width=rect.width, height=rect.height, color=color)
        )

    def _stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        self.calls.append(
            DrawCall("line", start.x, start.y, x2=end.x, y2=end.y, width=width, color=color)
        )

    def _draw_string(self, text: str, origin: Point, baseline_y: float, font: PdfFont, color: Color) -> None:
        self.calls.append(
            DrawCall("text", origin.x, origin.y, text=text, baseline=baseline_y, font=font, color=color)
        )
