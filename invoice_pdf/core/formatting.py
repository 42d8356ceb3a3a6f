from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

from invoice_pdf.core.config import settings


@dataclass(frozen=True)
class LocaleConventions:
    decimal_separator: str
    group_separator: str
    currency_suffix: bool
    date_patterns: dict[str, str]


@dataclass(frozen=True)
class CurrencySpec:
    symbol: str
    minor_digits: int = 2


LOCALES: Final[dict[str, LocaleConventions]] = {
    "en_US": LocaleConventions(
        decimal_separator=".",
        group_separator=",",
        currency_suffix=False,
        date_patterns={"short": "{m}/{d}/{yy}", "medium": "{mon} {d}, {yyyy}"},
    ),
    "en_GB": LocaleConventions(
        decimal_separator=".",
        group_separator=",",
        currency_suffix=False,
        date_patterns={"short": "{dd}/{mm}/{yyyy}", "medium": "{d} {mon} {yyyy}"},
    ),
    "de_DE": LocaleConventions(
        decimal_separator=",",
        group_separator=".",
        currency_suffix=True,
        date_patterns={"short": "{dd}.{mm}.{yy}", "medium": "{dd}.{mm}.{yyyy}"},
    ),
    "fr_FR": LocaleConventions(
        decimal_separator=",",
        group_separator=" ",
        currency_suffix=True,
        date_patterns={"short": "{dd}/{mm}/{yyyy}", "medium": "{d} {mon} {yyyy}"},
    ),
    "ru_RU": LocaleConventions(
        decimal_separator=",",
        group_separator=" ",
        currency_suffix=True,
        date_patterns={"short": "{dd}.{mm}.{yyyy}", "medium": "{d} {mon} {yyyy}"},
    ),
}

CURRENCIES: Final[dict[str, CurrencySpec]] = {
    "USD": CurrencySpec("$"),
    "EUR": CurrencySpec("€"),
    "GBP": CurrencySpec("£"),
    "RUB": CurrencySpec("₽"),
    "JPY": CurrencySpec("¥", minor_digits=0),
}

_MONTH_ABBREVIATIONS: Final[dict[str, tuple[str, ...]]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "de": ("Jan.", "Feb.", "März", "Apr.", "Mai", "Juni", "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez."),
    "fr": ("janv.", "févr.", "mars", "avr.", "mai", "juin", "juil.", "août", "sept.", "oct.", "nov.", "déc."),
    "ru": ("янв.", "февр.", "мар.", "апр.", "мая", "июн.", "июл.", "авг.", "сент.", "окт.", "нояб.", "дек."),
}

DEFAULT_LOCALE = "en_US"


def normalize_locale(value: str | None) -> str:
    if not value:
        return DEFAULT_LOCALE
    candidate = str(value).split(".")[0].replace("-", "_")
    parts = candidate.split("_")
    if len(parts) >= 2:
        candidate = f"{parts[0].lower()}_{parts[1].upper()}"
    if candidate in LOCALES:
        return candidate
    language = parts[0].lower()
    for known in LOCALES:
        if known.startswith(f"{language}_"):
            return known
    return DEFAULT_LOCALE


@dataclass(frozen=True)
class FormattingContext:
    """Locale, currency and date style injected into a render call."""

    locale: str = DEFAULT_LOCALE
    currency: str = "USD"
    date_style: str = "short"

    @classmethod
    def from_settings(cls) -> FormattingContext:
        return cls(
            locale=normalize_locale(settings.pdf_locale),
            currency=(settings.pdf_currency or "USD").upper(),
            date_style=settings.pdf_date_style or "short",
        )

    @property
    def conventions(self) -> LocaleConventions:
        return LOCALES[normalize_locale(self.locale)]

    @property
    def language(self) -> str:
        return normalize_locale(self.locale).split("_")[0]

    def format_currency(self, value: Decimal | int | float | str) -> str:
        spec = CURRENCIES.get(self.currency.upper(), CurrencySpec(f"{self.currency.upper()} "))
        amount = _to_decimal(value)
        quantum = Decimal(1).scaleb(-spec.minor_digits)
        amount = amount.quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        number = self._group_digits(abs(amount), spec.minor_digits)
        if self.conventions.currency_suffix:
            return f"{sign}{number} {spec.symbol.strip()}"
        return f"{sign}{spec.symbol}{number}"

    def format_quantity(self, value: int) -> str:
        return str(int(value))

    def format_date(self, value: date) -> str:
        patterns = self.conventions.date_patterns
        pattern = patterns.get(self.date_style, patterns["short"])
        months = _MONTH_ABBREVIATIONS.get(self.language, _MONTH_ABBREVIATIONS["en"])
        return pattern.format(
            d=value.day,
            dd=f"{value.day:02d}",
            m=value.month,
            mm=f"{value.month:02d}",
            mon=months[value.month - 1],
            yy=f"{value.year % 100:02d}",
            yyyy=f"{value.year:04d}",
        )

    def _group_digits(self, amount: Decimal, minor_digits: int) -> str:
        whole, _, fraction = f"{amount:f}".partition(".")
        groups: list[str] = []
        while len(whole) > 3:
            groups.insert(0, whole[-3:])
            whole = whole[:-3]
        groups.insert(0, whole)
        grouped = self.conventions.group_separator.join(groups)
        if minor_digits <= 0:
            return grouped
        return f"{grouped}{self.conventions.decimal_separator}{fraction}"


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    return amount
