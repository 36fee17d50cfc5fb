"""Rich formatting and display for completeness and grading results."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .models import CompletenessReport, FunctionRecord, GradeResult, ParseError

ANONYMOUS_FUNCTION_LABEL = "<anonymous>"
NOT_APPLICABLE_LABEL = "n/a"
MAX_PARSE_ERROR_EXAMPLES = 5


def format_percentage(percentage: float | None) -> str:
    """Format a completion percentage, showing n/a when there were no functions."""
    if percentage is None:
        return NOT_APPLICABLE_LABEL
    return f"{percentage:.1f}%"


def format_functions_table(records: tuple[FunctionRecord, ...]) -> Table:
    """Create Rich table listing each function and whether it is implemented."""
    table = Table(title="Function Completeness Analysis")

    table.add_column("Function", style="cyan", no_wrap=True)
    table.add_column("File", style="blue")
    table.add_column("Line", justify="right")
    table.add_column("Kind", style="magenta")
    table.add_column("Status", justify="center")
    table.add_column("Statements", justify="right")

    for record in records:
        status = Text("implemented", style="green") if record.implemented else Text("stub", style="bold red")
        table.add_row(
            Text(record.name or ANONYMOUS_FUNCTION_LABEL),
            Text(record.file),
            str(record.line_number),
            str(record.kind),
            status,
            str(record.line_count),
        )

    return table


def print_summary_stats(console: Console, report: CompletenessReport) -> None:
    """Print summary statistics about the analysis."""
    if report.total_functions == 0:
        console.print("[yellow]No functions found to analyze.[/yellow]")
        return

    completion_text = Text(format_percentage(report.completion_percentage))
    percentage = report.completion_percentage or 0.0
    if percentage >= 80:
        completion_text.style = "green"
    elif percentage >= 50:
        completion_text.style = "yellow"
    else:
        completion_text.style = "red"

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"Total functions analyzed: {report.total_functions}")
    console.print(f"Implemented functions: {report.implemented_functions}")
    console.print(f"Stub functions: {report.stub_functions}")
    console.print(Text("Completion: ").append(completion_text))

    if report.stub_functions == 0:
        console.print("[green]🎉 All functions are implemented![/green]")
    else:
        console.print(f"[yellow]⚠️  {report.stub_functions} function(s) still need an implementation.[/yellow]")


def display_parse_errors(console: Console, parse_errors: tuple[ParseError, ...]) -> None:
    """Display summary of files that could not be parsed."""
    if not parse_errors:
        return

    console.print(f"\n[yellow]Warning: {len(parse_errors)} file(s) could not be parsed[/yellow]")
    for error in parse_errors[:MAX_PARSE_ERROR_EXAMPLES]:
        console.print(f"  {error.file}: {error.message}", markup=False)

    if len(parse_errors) > MAX_PARSE_ERROR_EXAMPLES:
        console.print(f"  ... and {len(parse_errors) - MAX_PARSE_ERROR_EXAMPLES} more")


def display_results(console: Console, report: CompletenessReport, *, stubs_only: bool = False) -> None:
    """Display complete analysis results with table and summary."""
    display_parse_errors(console, report.parse_errors)

    if not report.functions:
        console.print("[yellow]No functions found to analyze.[/yellow]")
        return

    records = tuple(r for r in report.functions if not r.implemented) if stubs_only else report.functions
    console.print(format_functions_table(records))

    print_summary_stats(console, report)


def format_grade_table(grade: GradeResult) -> Table:
    """Create Rich table with the score of every rubric criterion."""
    table = Table(title="Rubric Scores")

    table.add_column("Criterion", style="cyan", no_wrap=True)
    table.add_column("Weight", justify="right")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Source", style="magenta")
    table.add_column("Justification")

    for result in grade.criteria:
        table.add_row(
            Text(result.criterion),
            f"{result.weight:g}",
            f"{result.score:g}",
            str(result.source),
            Text(result.justification),
        )

    return table


def display_grade(console: Console, grade: GradeResult) -> None:
    """Display rubric scores, recommendations and the final score."""
    if not grade.criteria:
        console.print("[yellow]Rubric has no criteria.[/yellow]")
        return

    console.print(format_grade_table(grade))

    if grade.overall_analysis:
        console.print("\n[bold]Overall analysis:[/bold]")
        console.print(grade.overall_analysis, markup=False)

    for result in grade.criteria:
        if result.recommendations:
            console.print(f"\n[bold]{escape(result.criterion)} recommendations:[/bold]")
            for recommendation in result.recommendations:
                console.print(f"  • {recommendation}", markup=False)

    total_weight = sum(result.weight for result in grade.criteria)
    console.print(f"\n[bold]Final score: {grade.final_score:g} / {total_weight:g}[/bold]")


def report_to_dict(report: CompletenessReport) -> dict[str, Any]:
    """Convert a report into the JSON wire format (camelCase keys).

    completionPercentage is null when no functions were found.
    """
    return {
        "totalFunctions": report.total_functions,
        "implementedFunctions": report.implemented_functions,
        "completionPercentage": report.completion_percentage,
        "functions": [
            {
                "name": record.name,
                "implemented": record.implemented,
                "file": record.file,
                "lineCount": record.line_count,
            }
            for record in report.functions
        ],
        "parseErrors": [
            {"file": error.file, "message": error.message, "line": error.line_number}
            for error in report.parse_errors
        ],
    }


def grade_to_dict(grade: GradeResult) -> dict[str, Any]:
    """Convert a grade into the JSON wire format (camelCase keys)."""
    return {
        "criteriaScores": [
            {
                "criterion": result.criterion,
                "weight": result.weight,
                "score": result.score,
                "justification": result.justification,
                "recommendations": list(result.recommendations),
            }
            for result in grade.criteria
        ],
        "score": grade.final_score,
        "overallAnalysis": grade.overall_analysis,
    }
