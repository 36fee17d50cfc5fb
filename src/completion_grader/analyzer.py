"""Main analysis orchestrator for function completeness grading."""

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from completion_grader.ast_visitors.function_locator import locate_functions
from completion_grader.ast_visitors.parse_source import parse_source, parse_source_file
from completion_grader.classifier import classify_function
from completion_grader.models import (
    CompletenessReport,
    FileAnalysis,
    ParseError,
    SourceFile,
    SyntaxTree,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

JAVASCRIPT_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs"})
IGNORED_DIRECTORIES = frozenset({"node_modules", ".git"})


def calculate_completion_percentage(total_functions: int, implemented_functions: int) -> float | None:
    """Percentage of functions that are implemented.

    Returns None when there are no functions at all; there is no meaningful
    ratio to report and callers must treat it as "not applicable".
    """
    if total_functions == 0:
        return None
    return 100.0 * implemented_functions / total_functions


def _analyze_parse_result(parse_result: SyntaxTree | ParseError, file: str) -> FileAnalysis:
    if isinstance(parse_result, ParseError):
        logger.warning("Skipping %s: %s", parse_result.file, parse_result.message)
        return FileAnalysis(file=file, records=(), parse_error=parse_result)

    # The tree is only needed until every function has been classified
    records = tuple(classify_function(node) for node in locate_functions(parse_result, file))
    return FileAnalysis(file=file, records=records)


def analyze_source(source: SourceFile) -> FileAnalysis:
    """Parse, locate and classify the functions of a single source file.

    A file that fails to parse yields an analysis with no records and the
    ParseError attached; it never raises.
    """
    return _analyze_parse_result(parse_source(source), source.identifier)


def analyze_file(file_path: Path) -> FileAnalysis:
    """Parse, locate and classify the functions of a single file on disk.

    Unreadable files are treated like unparseable ones.
    """
    return _analyze_parse_result(parse_source_file(file_path), str(file_path))


def aggregate(analyses: Sequence[FileAnalysis]) -> CompletenessReport:
    """Combine per-file analyses into a single report.

    Records keep the order of analyses, then the traversal order within each
    file. Callers running files in parallel must pass analyses in their
    original file order, not completion order.
    """
    functions = tuple(record for analysis in analyses for record in analysis.records)
    total_functions = len(functions)
    implemented_functions = sum(1 for record in functions if record.implemented)
    parse_errors = tuple(analysis.parse_error for analysis in analyses if analysis.parse_error is not None)

    completion_percentage = calculate_completion_percentage(total_functions, implemented_functions)
    if completion_percentage is None:
        logger.info("No functions found in %d file(s); completion is not applicable", len(analyses))

    return CompletenessReport(
        total_functions=total_functions,
        implemented_functions=implemented_functions,
        completion_percentage=completion_percentage,
        functions=functions,
        parse_errors=parse_errors,
    )


def _map_in_order(
    analyze: Callable[[T], FileAnalysis], items: Sequence[T], max_workers: int | None
) -> list[FileAnalysis]:
    """Run analyze over items, returning results in input order.

    Executor.map yields results in submission order, so the outcome does not
    depend on which file finishes first.
    """
    if max_workers == 1 or len(items) <= 1:
        return [analyze(item) for item in items]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(analyze, items))


def analyze_sources(sources: Sequence[SourceFile], max_workers: int | None = None) -> CompletenessReport:
    """Complete analysis pipeline for a set of in-memory source files.

    Args:
        sources: Source files, in the order their records should appear
        max_workers: Thread pool size; 1 analyzes sequentially in this thread

    Returns:
        CompletenessReport across all files. Unparseable files contribute no
        functions and are listed in parse_errors.
    """
    return aggregate(_map_in_order(analyze_source, sources, max_workers))


def discover_source_files(paths: Iterable[Path]) -> tuple[Path, ...]:
    """Expand directories into the JavaScript files they contain.

    Files named explicitly are kept as given, whatever their extension.
    Directory contents are sorted so repeated runs see the same file order.
    """
    discovered: list[Path] = []
    for path in paths:
        if not path.is_dir():
            discovered.append(path)
            continue

        discovered.extend(
            sorted(
                candidate
                for candidate in path.rglob("*")
                if candidate.is_file()
                and candidate.suffix in JAVASCRIPT_EXTENSIONS
                and not IGNORED_DIRECTORIES.intersection(candidate.relative_to(path).parts)
            )
        )
    return tuple(discovered)


def analyze_paths(paths: Iterable[Path], max_workers: int | None = None) -> CompletenessReport:
    """Complete analysis pipeline for files and directories on disk."""
    return aggregate(_map_in_order(analyze_file, discover_source_files(paths), max_workers))
