from __future__ import annotations

import logging
import re
from dataclasses import dataclass


_HEX_DIGITS_RE = re.compile(r"^[0-9a-fA-F]+$")

# Blend strengths for the accent-derived members of the palette.
ACCENT_TINT_ALPHA = 0.12
ROW_TINT_ALPHA = 0.06

DEFAULT_ACCENT_HEX = "#1F5FB8"


class InvalidHexFormat(ValueError):
    """Raised by `parse_hex` for anything other than #RRGGBB / #RRGGBBAA."""

    def __init__(self, value: object) -> None:
        super().__init__(f"invalid hex color: {value!r}")
        self.value = value


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def gray(cls, level: float, alpha: float = 1.0) -> Color:
        return cls(level, level, level, alpha)

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def opaque(self) -> Color:
        if self.alpha == 1.0:
            return self
        return Color(self.red, self.green, self.blue, 1.0)


WHITE = Color.gray(1.0)
BLACK = Color.gray(0.0)


def parse_hex(value: str) -> Color:
    if not isinstance(value, str):
        raise InvalidHexFormat(value)
    sanitized = value.strip()
    if sanitized.startswith("#"):
        sanitized = sanitized[1:]
    if len(sanitized) not in (6, 8) or not _HEX_DIGITS_RE.match(sanitized):
        raise InvalidHexFormat(value)

    channels = [int(sanitized[index : index + 2], 16) / 255 for index in range(0, len(sanitized), 2)]
    if len(channels) == 3:
        channels.append(1.0)
    red, green, blue, alpha = channels
    return Color(red, green, blue, alpha)


def serialize_hex(color: Color, *, include_alpha: bool = False) -> str:
    channels = list(color.rgb)
    if include_alpha:
        channels.append(color.alpha)
    return "#" + "".join(f"{_to_byte(channel):02X}" for channel in channels)


def _to_byte(channel: float) -> int:
    return max(0, min(255, int(round(channel * 255))))


def blend(accent: Color, alpha: float, background: Color = WHITE) -> Color:
    """Composites `accent` at `alpha` over an opaque `background`."""
    inverse = 1.0 - alpha
    return Color(
        background.red * inverse + accent.red * alpha,
        background.green * inverse + accent.green * alpha,
        background.blue * inverse + accent.blue * alpha,
    )


@dataclass(frozen=True)
class PdfPalette:
    accent: Color
    accent_tint: Color
    text_primary: Color
    text_secondary: Color
    panel_background: Color
    section_background: Color
    row_background: Color
    divider: Color
    on_accent: Color


def derive_palette(accent: Color) -> PdfPalette:
    solid = accent.opaque()
    return PdfPalette(
        accent=solid,
        accent_tint=blend(solid, ACCENT_TINT_ALPHA),
        text_primary=Color.gray(0.12),
        text_secondary=Color.gray(0.4),
        panel_background=Color.gray(0.96),
        section_background=Color.gray(0.97),
        row_background=blend(solid, ROW_TINT_ALPHA),
        divider=Color.gray(0.84),
        on_accent=WHITE,
    )


def resolve_accent(value: str | None, default_hex: str = DEFAULT_ACCENT_HEX) -> Color:
    logger = logging.getLogger(__name__)
    if value:
        try:
            return parse_hex(value)
        except InvalidHexFormat:
            logger.warning(
                "pdf_accent_invalid_hex",
                extra={"accent_hex": value, "fallback": default_hex},
            )
    try:
        return parse_hex(default_hex)
    except InvalidHexFormat:
        logger.warning("pdf_default_accent_invalid_hex", extra={"accent_hex": default_hex})
        return parse_hex(DEFAULT_ACCENT_HEX)
