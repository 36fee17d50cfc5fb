"""Core data models for the function completeness grader."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from tree_sitter import Node, Tree

# Parsed JavaScript module. Lives for one analysis call only.
SyntaxTree: TypeAlias = Tree


class FunctionKind(StrEnum):
    """Function-like constructs recognised by the locator."""

    DECLARATION = "declaration"  # function name() { ... }
    ARROW = "arrow"  # (...) => expr | (...) => { ... }


class ScoreSource(StrEnum):
    """Where a rubric criterion's score came from."""

    COMPLETENESS = "completeness"
    REVIEW = "review"
    MISSING = "missing"


@dataclass(frozen=True)
class SourceFile:
    """Raw source text together with the identifier it was read from."""

    identifier: str  # path or logical name
    text: str


@dataclass(frozen=True)
class ParseError:
    """A source file that could not be parsed.

    This is returned as a value rather than raised: a file that fails to parse
    contributes zero functions and analysis of its siblings continues.
    """

    file: str
    message: str
    line_number: int | None = None  # 1-based, None if the file was never read


@dataclass(frozen=True)
class FunctionNode:
    """Transient view of a located function, valid while its tree is alive."""

    kind: FunctionKind
    name: str | None
    body: Node  # statement_block, or a bare expression for concise arrows
    file: str
    line_number: int


@dataclass(frozen=True)
class FunctionRecord:
    """Classification result for a single function."""

    name: str | None
    implemented: bool
    file: str
    line_count: int  # top-level statements in the body, not source lines
    kind: FunctionKind
    line_number: int


@dataclass(frozen=True)
class FileAnalysis:
    """Records located in one file, or the reason there are none."""

    file: str
    records: tuple[FunctionRecord, ...]
    parse_error: ParseError | None = None


@dataclass(frozen=True)
class CompletenessReport:
    """Aggregated completeness metrics across every analyzed file.

    completion_percentage is None when no functions were found at all, since
    there is no meaningful ratio to report.
    """

    total_functions: int
    implemented_functions: int
    completion_percentage: float | None
    functions: tuple[FunctionRecord, ...]
    parse_errors: tuple[ParseError, ...] = ()

    @property
    def stub_functions(self) -> int:
        return self.total_functions - self.implemented_functions


@dataclass(frozen=True)
class RubricCriterion:
    """A named, weighted evaluation dimension supplied by the caller."""

    criterion: str
    weight: float  # 0 to 100
    description: str = ""


@dataclass(frozen=True)
class CriterionReview:
    """External review of one criterion: score plus reasoning."""

    score: float
    justification: str = ""
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReviewSet:
    """All criterion reviews from one external review, plus its overall summary."""

    criteria: Mapping[str, CriterionReview]
    overall_analysis: str = ""


@dataclass(frozen=True)
class CriterionResult:
    """Final score for one rubric criterion."""

    criterion: str
    weight: float
    score: float
    justification: str
    recommendations: tuple[str, ...]
    source: ScoreSource


@dataclass(frozen=True)
class GradeResult:
    """Complete rubric grading: per-criterion results and their sum."""

    criteria: tuple[CriterionResult, ...]
    final_score: float
    overall_analysis: str = ""  # reviewer's summary, empty when there was no review
