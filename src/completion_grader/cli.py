"""CLI entry point for the completion grader."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .analyzer import JAVASCRIPT_EXTENSIONS, analyze_paths
from .models import ReviewSet
from .output import display_grade, display_results, grade_to_dict, report_to_dict
from .rubric import RubricFormatError, load_reviews, load_rubric
from .scoring import DEFAULT_COMPLETION_CRITERION, blend_rubric

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grade JavaScript sources by how many of their functions are implemented"
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="JavaScript files or directories to analyze",
        type=Path,
    )
    parser.add_argument(
        "--rubric",
        type=Path,
        help="JSON rubric file; enables weighted grading",
    )
    parser.add_argument(
        "--reviews",
        type=Path,
        help="JSON file with external review scores for the other rubric criteria",
    )
    parser.add_argument(
        "--completion-criterion",
        default=DEFAULT_COMPLETION_CRITERION,
        help=f"Rubric criterion scored from completeness (default: {DEFAULT_COMPLETION_CRITERION!r})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files to analyze in parallel (default: Python's thread pool default)",
    )
    parser.add_argument(
        "--stubs-only",
        action="store_true",
        help="Only list stub functions in the results table",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args(argv)


def validate_targets(targets: list[Path]) -> str | None:
    """Return an error message for the first unusable target, or None if all are valid."""
    for target in targets:
        if not target.exists():
            return f"Error: {target} does not exist"
        if target.is_file() and target.suffix not in JAVASCRIPT_EXTENSIONS:
            return f"Error: {target} is not a JavaScript file"
    return None


def main(argv: list[str] | None = None) -> None:
    """Run the CLI application."""
    console = Console()
    args = parse_args(argv)

    # Configure logging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    error = validate_targets(args.targets)
    if error is not None:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)

    if args.workers is not None and args.workers < 1:
        console.print("[red]Error: --workers must be at least 1[/red]")
        sys.exit(1)

    if args.reviews is not None and args.rubric is None:
        console.print("[red]Error: --reviews requires --rubric[/red]")
        sys.exit(1)

    try:
        rubric = load_rubric(args.rubric) if args.rubric is not None else None
        reviews = load_reviews(args.reviews) if args.reviews is not None else ReviewSet(criteria={})

        report = analyze_paths(args.targets, max_workers=args.workers)
        grade = (
            blend_rubric(
                report,
                rubric,
                reviews.criteria,
                completion_criterion=args.completion_criterion,
                overall_analysis=reviews.overall_analysis,
            )
            if rubric is not None
            else None
        )

        if args.json:
            payload = report_to_dict(report)
            if grade is not None:
                payload.update(grade_to_dict(grade))
            console.print_json(data=payload)
            return

        display_results(console, report, stubs_only=args.stubs_only)
        if grade is not None:
            console.print()
            display_grade(console, grade)

    except RubricFormatError as e:
        console.print(f"[red]Error: invalid rubric: {escape(str(e))}[/red]")
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        console.print(f"[red]Error analyzing files: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
