from datetime import date
from decimal import Decimal

import pytest

from invoice_pdf.core.config import settings
from invoice_pdf.core.formatting import FormattingContext, normalize_locale


@pytest.mark.parametrize(
    ("locale", "currency", "value", "expected"),
    [
        ("en_US", "USD", Decimal("1234.5"), "$1,234.50"),
        ("en_US", "USD", Decimal("-5"), "-$5.00"),
        ("en_US", "USD", 0.125, "$0.13"),
        ("en_US", "USD", Decimal("1234567.891"), "$1,234,567.89"),
        ("en_GB", "GBP", 99, "£99.00"),
        ("de_DE", "EUR", Decimal("1234.5"), "1.234,50 €"),
        ("fr_FR", "EUR", Decimal("1234.5"), "1 234,50 €"),
        ("ru_RU", "RUB", Decimal("100"), "100,00 ₽"),
        ("en_US", "JPY", Decimal("1234.5"), "¥1,235"),
        ("en_US", "CHF", Decimal("10"), "CHF 10.00"),
        ("en_US", "USD", "abc", "$0.00"),
        ("en_US", "USD", Decimal("NaN"), "$0.00"),
    ],
)
def test_format_currency(locale: str, currency: str, value, expected: str) -> None:
    assert FormattingContext(locale=locale, currency=currency).format_currency(value) == expected


@pytest.mark.parametrize(
    ("locale", "style", "expected"),
    [
        ("en_US", "short", "3/5/26"),
        ("en_US", "medium", "Mar 5, 2026"),
        ("en_GB", "short", "05/03/2026"),
        ("de_DE", "short", "05.03.26"),
        ("fr_FR", "medium", "5 mars 2026"),
        ("ru_RU", "short", "05.03.2026"),
        ("en_US", "unknown", "3/5/26"),
    ],
)
def test_format_date(locale: str, style: str, expected: str) -> None:
    context = FormattingContext(locale=locale, date_style=style)

    assert context.format_date(date(2026, 3, 5)) == expected


def test_format_quantity_is_plain_integer() -> None:
    assert FormattingContext(locale="de_DE").format_quantity(1200) == "1200"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("de-DE", "de_DE"),
        ("ru_RU.UTF-8", "ru_RU"),
        ("de_AT", "de_DE"),
        ("fr", "fr_FR"),
        ("xx_YY", "en_US"),
        (None, "en_US"),
    ],
)
def test_normalize_locale(value, expected: str) -> None:
    assert normalize_locale(value) == expected


def test_context_from_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "pdf_locale", "fr-FR")
    monkeypatch.setattr(settings, "pdf_currency", "eur")
    monkeypatch.setattr(settings, "pdf_date_style", "medium")

    context = FormattingContext.from_settings()

    assert context == FormattingContext(locale="fr_FR", currency="EUR", date_style="medium")
    assert context.language == "fr"
