#!/usr/bin/env python3
"""
CardScan CLI - extract contacts from card text or card photos.

Usage:
    cardscan card.txt
    cardscan photos/*.jpg --json
    echo "Jane Doe\\nCEO\\njane@acme.com" | cardscan -
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from cardscan.config import get_settings
from cardscan.errors import CaptureError, CardScanError
from cardscan.services.ocr import OCREngine
from cardscan.services.parsing import ContactExtractor, get_profile
from cardscan.services.scanner import CardScanner, ScanResult

TEXT_SUFFIXES = {".txt", ".text"}


def setup_logging(level: str = "WARNING"):
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def print_result(source: str, result: ScanResult) -> None:
    """Print a human-readable contact summary."""
    contact = result.contact
    print(f"\n{'=' * 60}")
    print(f"Source: {source}")
    print(f"{'=' * 60}")
    print(f"  Name:      {contact.name or '-'}")
    print(f"  Job title: {contact.job_title or '-'}")
    print(f"  Company:   {contact.company or '-'}")
    print(f"  Phones:    {', '.join(contact.phone_numbers) or '-'}")
    print(f"  Emails:    {', '.join(contact.emails) or '-'}")
    print(f"  Website:   {contact.website or '-'}")
    if contact.address_lines:
        print(f"  Address:   {contact.address_lines[0]}")
        for line in contact.address_lines[1:]:
            print(f"             {line}")
    else:
        print("  Address:   -")

    for check in result.checks:
        if not check.passed:
            print(f"  ⚠ {check.message}")
    for line in result.review_lines:
        print(f"  ⚠ low confidence: '{line}'")


def scan_source(scanner: CardScanner, source: str) -> ScanResult:
    """Parse stdin ('-'), a text file, or OCR an image file."""
    if source == "-":
        return scanner.parse_text(sys.stdin.read())

    path = Path(source)
    if path.suffix.lower() in TEXT_SUFFIXES:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CaptureError(f"Cannot read text file {path}: {e}") from e
        return scanner.parse_text(text)

    return scanner.scan_file(path)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract contacts from business card text or photos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse OCR text saved to a file
  cardscan card.txt

  # OCR and parse card photos, JSON output
  cardscan photos/*.jpg --json

  # Parse text from stdin
  cat card.txt | cardscan -
        """,
    )

    parser.add_argument(
        "sources",
        nargs="+",
        help="Text files (.txt), image files, or '-' for stdin",
    )
    parser.add_argument(
        "--profile", "-p",
        default=None,
        help="Locale profile name (default: CARDSCAN_LOCALE_PROFILE, else in)",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Print contacts as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    settings = get_settings()

    try:
        extractor = ContactExtractor(get_profile(args.profile or settings.locale_profile))
    except CardScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    ocr = OCREngine(confidence_threshold=settings.ocr_confidence_threshold)
    scanner = CardScanner(extractor=extractor, ocr=ocr)

    results = {}
    failures = 0

    for source in args.sources:
        if source != "-" and not Path(source).exists():
            print(f"Error: File not found: {source}", file=sys.stderr)
            failures += 1
            continue

        try:
            result = scan_source(scanner, source)
        except CardScanError as e:
            print(f"Error processing {source}: {e}", file=sys.stderr)
            failures += 1
            continue

        if args.json:
            results[source] = result.contact.to_dict()
        else:
            print_result(source, result)

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
