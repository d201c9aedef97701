"""
Command-line pagination of an HTML fragment.

Usage:
    pageflow input.html                         # paged HTML to stdout
    pageflow input.html -o paged.html           # write to a file
    pageflow input.html --format text --page-height-mm 279.4
"""

from __future__ import annotations

import argparse
import logging
import sys

from pageflow.config import PageflowSettings
from pageflow.editor.session import Editor
from pageflow.utils.io import read_markup, write_export
from pageflow.utils.log import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Flow HTML content across fixed-size pages")
    p.add_argument("input", help="HTML fragment to paginate")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument("--format", default="html", choices=["html", "text"], help="Export format")
    p.add_argument("--measurer", choices=["grid", "pillow"], help="Height measurer")
    p.add_argument("--font-path", help="TrueType font for the pillow measurer")
    p.add_argument("--page-width-mm", type=float)
    p.add_argument("--page-height-mm", type=float)
    p.add_argument("--margin-mm", type=float)
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return p.parse_args(argv)


def build_settings(args: argparse.Namespace) -> PageflowSettings:
    """Settings from the environment, overridden by explicit flags."""
    overrides = {
        key: value
        for key, value in {
            "measurer": args.measurer,
            "font_path": args.font_path,
            "page_width_mm": args.page_width_mm,
            "page_height_mm": args.page_height_mm,
            "margin_mm": args.margin_mm,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    return PageflowSettings(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = build_settings(args)
    setup_logging(settings.log_level)

    editor = Editor.from_html(read_markup(args.input), settings=settings)
    report = editor.last_report
    if report is not None and report.oversized_pages:
        logger.warning("Pages with content taller than a page: %s", report.oversized_pages)

    content = editor.export_content(args.format)
    if args.output:
        path = write_export(args.output, content)
        print(f"Pages: {editor.document.num_pages} -> {path}")
    else:
        sys.stdout.write(content)
        logger.info("Pages: %d", editor.document.num_pages)
    return 0
