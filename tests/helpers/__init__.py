"""Test helper utilities."""

from .console import assert_console_contains, capture_console_output
from .factories import (
    make_criterion,
    make_record,
    make_report,
    make_report_with_completion,
    make_review,
)
from .source_analysis import analyze_text, classify_source, parse_valid_source
from .temp_files import temp_source_file

__all__ = [
    "analyze_text",
    "assert_console_contains",
    "capture_console_output",
    "classify_source",
    "make_criterion",
    "make_record",
    "make_report",
    "make_report_with_completion",
    "make_review",
    "parse_valid_source",
    "temp_source_file",
]
