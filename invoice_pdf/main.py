"""Renders an invoice record stored as JSON and saves it as a PDF.

The JSON file holds an ``invoice`` object plus optional ``company`` and
``client`` objects, using the same field names the record layer exports.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from invoice_pdf.core.config import settings
from invoice_pdf.core.formatting import FormattingContext, normalize_locale
from invoice_pdf.core.invoice_document import invoice_document_builder
from invoice_pdf.core.logging import setup_logging
from invoice_pdf.core.pdf_service import InvoicePdfRenderer, InvoicePdfService, InvoicePdfStorage
from invoice_pdf.core.pdf_themes import resolve_pdf_theme


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an invoice record into a single-page PDF.")
    parser.add_argument("record", type=Path, help="JSON file with invoice, company and client objects")
    parser.add_argument("--output-dir", default=None, help="overrides PDF_SAVE_DIRECTORY")
    parser.add_argument("--locale", default=None)
    parser.add_argument("--currency", default=None)
    parser.add_argument("--date-style", choices=("short", "medium"), default=None)
    parser.add_argument("--theme", default=None)
    return parser


def _formatting_from_args(args: argparse.Namespace) -> FormattingContext:
    defaults = FormattingContext.from_settings()
    return FormattingContext(
        locale=normalize_locale(args.locale) if args.locale else defaults.locale,
        currency=args.currency.upper() if args.currency else defaults.currency,
        date_style=args.date_style or defaults.date_style,
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(settings.log_level)

    try:
        record = json.loads(args.record.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("invoice_record_unreadable", extra={"path": str(args.record), "error": str(exc)})
        print(f"Cannot read invoice record {args.record}: {exc}")
        return 1
    if not isinstance(record, dict) or not isinstance(record.get("invoice"), dict):
        print(f"{args.record} has no \"invoice\" object.")
        return 1

    data = invoice_document_builder.build(
        record["invoice"],
        company=record.get("company"),
        client=record.get("client"),
    )
    service = InvoicePdfService(
        renderer=InvoicePdfRenderer(theme=resolve_pdf_theme(args.theme or settings.pdf_theme)),
        storage=InvoicePdfStorage(args.output_dir),
    )
    path = service.save_pdf(data, _formatting_from_args(args))
    if path is None:
        print(f"Invoice {data.invoice_number} was not saved.")
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
