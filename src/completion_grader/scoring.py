"""Rubric scoring: blend completeness metrics with external review scores."""

import logging
import math
from collections.abc import Mapping, Sequence

from completion_grader.models import (
    CompletenessReport,
    CriterionResult,
    CriterionReview,
    GradeResult,
    RubricCriterion,
    ScoreSource,
)

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_CRITERION = "Code Completion"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's round() uses banker's rounding (round(2.5) == 2), which would make
    a 25% completion on a weight-10 criterion score 2 instead of 3.
    """
    return math.floor(value + 0.5)


def calculate_completion_score(completion_percentage: float | None, weight: float) -> int:
    """Scale a completion percentage onto a criterion's weight.

    Args:
        completion_percentage: 0-100, or None when no functions were found
        weight: The criterion's weight, 0-100

    Returns:
        round(completion_percentage / 100 * weight), or 0 when the percentage
        is not applicable.
    """
    if completion_percentage is None:
        return 0
    return round_half_up(completion_percentage / 100 * weight)


def is_completion_criterion(criterion: RubricCriterion, completion_criterion: str) -> bool:
    """Whether a rubric criterion is the one scored from completeness analysis."""
    return criterion.criterion.strip().casefold() == completion_criterion.strip().casefold()


def _score_criterion(
    criterion: RubricCriterion,
    report: CompletenessReport,
    reviews: Mapping[str, CriterionReview],
    completion_criterion: str,
) -> CriterionResult:
    if is_completion_criterion(criterion, completion_criterion):
        score = calculate_completion_score(report.completion_percentage, criterion.weight)
        if report.completion_percentage is None:
            justification = "No functions found; completion is not applicable."
        else:
            justification = (
                f"{report.implemented_functions} of {report.total_functions} functions implemented "
                f"({report.completion_percentage:.1f}%)."
            )
        return CriterionResult(
            criterion=criterion.criterion,
            weight=criterion.weight,
            score=score,
            justification=justification,
            recommendations=(),
            source=ScoreSource.COMPLETENESS,
        )

    review = reviews.get(criterion.criterion)
    if review is None:
        logger.info("No review score for criterion %r; defaulting to 0", criterion.criterion)
        return CriterionResult(
            criterion=criterion.criterion,
            weight=criterion.weight,
            score=0,
            justification="",
            recommendations=(),
            source=ScoreSource.MISSING,
        )

    return CriterionResult(
        criterion=criterion.criterion,
        weight=criterion.weight,
        score=review.score,
        justification=review.justification,
        recommendations=review.recommendations,
        source=ScoreSource.REVIEW,
    )


def blend_rubric(
    report: CompletenessReport,
    rubric: Sequence[RubricCriterion],
    reviews: Mapping[str, CriterionReview],
    completion_criterion: str = DEFAULT_COMPLETION_CRITERION,
    *,
    overall_analysis: str = "",
) -> GradeResult:
    """Score every rubric criterion and sum them into a final grade.

    The completion criterion is scored from the completeness report; every
    other criterion takes its score from the external reviews, defaulting to
    0 with an empty justification when the review never scored it.

    Args:
        report: Completeness report for the analyzed sources
        rubric: Criteria in display order
        reviews: External review results keyed by criterion name
        completion_criterion: Name of the criterion scored from the report
        overall_analysis: The reviewer's summary, carried through unchanged

    Returns:
        GradeResult with one CriterionResult per rubric entry and their sum.
    """
    criteria = tuple(_score_criterion(criterion, report, reviews, completion_criterion) for criterion in rubric)
    return GradeResult(
        criteria=criteria,
        final_score=sum(result.score for result in criteria),
        overall_analysis=overall_analysis,
    )
