import logging

import pytest

from invoice_pdf.core.pdf_colors import (
    DEFAULT_ACCENT_HEX,
    Color,
    InvalidHexFormat,
    blend,
    derive_palette,
    parse_hex,
    resolve_accent,
    serialize_hex,
)


def test_parse_hex_reads_rgb_channels() -> None:
    color = parse_hex("#1F5FB8")

    assert color == Color(0x1F / 255, 0x5F / 255, 0xB8 / 255, 1.0)


def test_parse_hex_accepts_alpha_whitespace_and_missing_hash() -> None:
    assert parse_hex("  1f5fb8 ") == parse_hex("#1F5FB8")
    assert parse_hex("#1F5FB880").alpha == pytest.approx(0x80 / 255)


@pytest.mark.parametrize("value", ["", "#", "#12345", "#1234567", "#GGGGGG", "red", "#1F5FB8FF00"])
def test_parse_hex_rejects_malformed_values(value: str) -> None:
    with pytest.raises(InvalidHexFormat) as exc_info:
        parse_hex(value)

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.value == value


def test_serialize_hex_is_upper_case_and_optionally_includes_alpha() -> None:
    color = parse_hex("#1f5fb880")

    assert serialize_hex(color) == "#1F5FB8"
    assert serialize_hex(color, include_alpha=True) == "#1F5FB880"


@pytest.mark.parametrize("value", ["#1F5FB8", "#000000", "#FFFFFF", "#C0392B", "#7D3C98"])
def test_palette_accent_survives_hex_round_trip(value: str) -> None:
    color = parse_hex(value)

    assert parse_hex(serialize_hex(derive_palette(color).accent)) == color


def test_blend_over_white_background() -> None:
    tinted = blend(Color(0.0, 0.0, 0.0), 0.12)

    assert tinted.rgb == pytest.approx((0.88, 0.88, 0.88))
    assert tinted.alpha == 1.0


def test_derive_palette_tints_and_constants() -> None:
    accent = Color(0.2, 0.4, 0.6)
    palette = derive_palette(accent)

    assert palette.accent == accent
    assert palette.accent_tint.rgb == pytest.approx((0.904, 0.928, 0.952))
    assert palette.row_background.rgb == pytest.approx((0.952, 0.964, 0.976))
    assert palette.text_primary == Color.gray(0.12)
    assert palette.divider == Color.gray(0.84)
    assert palette.on_accent == Color.gray(1.0)


def test_derive_palette_drops_accent_alpha() -> None:
    palette = derive_palette(parse_hex("#1F5FB840"))

    assert palette.accent.alpha == 1.0
    assert serialize_hex(palette.accent) == "#1F5FB8"


def test_resolve_accent_falls_back_to_default_and_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="invoice_pdf.core.pdf_colors"):
        color = resolve_accent("#12GG45", "#C0392B")

    assert color == parse_hex("#C0392B")
    assert [record.getMessage() for record in caplog.records] == ["pdf_accent_invalid_hex"]
    assert caplog.records[0].accent_hex == "#12GG45"


def test_resolve_accent_without_value_uses_default_silently(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="invoice_pdf.core.pdf_colors"):
        color = resolve_accent(None)

    assert color == parse_hex(DEFAULT_ACCENT_HEX)
    assert caplog.records == []


def test_resolve_accent_with_broken_default_uses_builtin_blue(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="invoice_pdf.core.pdf_colors"):
        color = resolve_accent("", "nope")

    assert color == parse_hex(DEFAULT_ACCENT_HEX)
    assert "pdf_default_accent_invalid_hex" in [record.getMessage() for record in caplog.records]
