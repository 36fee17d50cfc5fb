"""Loading rubric definitions and review results from JSON documents.

Rubric documents are a list of criteria::

    [{"criterion": "Code Completion", "weight": 20, "description": "..."}]

Review documents come in two shapes. The review service's own response::

    {"criteriaAnalysis": [{"criterion": "Readability", "score": 12,
                           "justification": "...", "recommendations": ["..."]}],
     "overallAnalysis": "..."}

or a plain mapping of criterion name to score::

    {"Readability": 12, "Testing": "8", "overallAnalysis": "..."}

Numeric strings are accepted wherever a score is expected, since review
models frequently quote their numbers. A score that is not a number at all
only loses that one criterion.
"""

import json
import logging
from pathlib import Path
from typing import Any

from completion_grader.models import CriterionReview, ReviewSet, RubricCriterion

logger = logging.getLogger(__name__)

MIN_WEIGHT = 0.0
MAX_WEIGHT = 100.0
OVERALL_ANALYSIS_KEY = "overallAnalysis"


class RubricFormatError(ValueError):
    """A rubric or review document does not have the expected shape."""


def _as_number(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise RubricFormatError(f"{what} must be a number, got {value!r}")
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise RubricFormatError(f"{what} must be a number, got {value!r}")


def parse_rubric(data: Any) -> tuple[RubricCriterion, ...]:
    """Validate a decoded rubric document.

    Raises:
        RubricFormatError: if the document is not a list of criteria with
            names and weights between 0 and 100.
    """
    if not isinstance(data, list):
        raise RubricFormatError("Rubric must be a list of criteria")

    criteria: list[RubricCriterion] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise RubricFormatError(f"Rubric entry {index} must be an object")
        name = item.get("criterion")
        if not isinstance(name, str) or not name.strip():
            raise RubricFormatError(f"Rubric entry {index} is missing a criterion name")

        weight = _as_number(item.get("weight"), f"Weight of {name!r}")
        if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise RubricFormatError(f"Weight of {name!r} must be between 0 and 100, got {weight:g}")

        description = item.get("description", "")
        criteria.append(RubricCriterion(criterion=name, weight=weight, description=str(description)))

    return tuple(criteria)


def _parse_review_score(value: Any, name: str) -> float | None:
    try:
        return _as_number(value, f"Score of {name!r}")
    except RubricFormatError as e:
        logger.warning("Ignoring review of %r: %s", name, e)
        return None


def _parse_review_entry(entry: Any, index: int) -> tuple[str, CriterionReview] | None:
    """Parse one criteriaAnalysis entry, or None if it cannot be used."""
    if not isinstance(entry, dict) or not isinstance(entry.get("criterion"), str):
        logger.warning("Ignoring criteriaAnalysis entry %d: no criterion name", index)
        return None
    name = entry["criterion"]

    score = _parse_review_score(entry.get("score"), name)
    if score is None:
        return None

    recommendations = entry.get("recommendations") or []
    if isinstance(recommendations, str):
        recommendations = [recommendations]
    if not isinstance(recommendations, list):
        logger.warning("Ignoring recommendations for %r: expected a list, got %r", name, recommendations)
        recommendations = []

    review = CriterionReview(
        score=score,
        justification=str(entry.get("justification") or ""),
        recommendations=tuple(str(item) for item in recommendations),
    )
    return name, review


def parse_reviews(data: Any) -> ReviewSet:
    """Validate a decoded review document and key it by criterion name.

    Reviews are recovered per criterion: an entry without a usable name or
    score is logged and dropped, so the rubric treats that criterion as
    unscored instead of failing the whole grade.

    Raises:
        RubricFormatError: if the document is not an object, or its
            criteriaAnalysis is not a list.
    """
    if not isinstance(data, dict):
        raise RubricFormatError("Reviews must be a JSON object")

    overall_analysis = data.get(OVERALL_ANALYSIS_KEY)
    overall_analysis = overall_analysis if isinstance(overall_analysis, str) else ""

    if "criteriaAnalysis" in data:
        entries = data["criteriaAnalysis"]
        if not isinstance(entries, list):
            raise RubricFormatError("criteriaAnalysis must be a list")
        parsed = (_parse_review_entry(entry, index) for index, entry in enumerate(entries))
        return ReviewSet(criteria=dict(item for item in parsed if item is not None), overall_analysis=overall_analysis)

    criteria: dict[str, CriterionReview] = {}
    for name, value in data.items():
        if name == OVERALL_ANALYSIS_KEY:
            continue
        score = _parse_review_score(value, str(name))
        if score is not None:
            criteria[str(name)] = CriterionReview(score=score)
    return ReviewSet(criteria=criteria, overall_analysis=overall_analysis)



def _load_json(file_path: Path) -> Any:
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RubricFormatError(f"{file_path} is not valid JSON: {e}") from e


def load_rubric(file_path: Path) -> tuple[RubricCriterion, ...]:
    """Read and validate a rubric JSON file."""
    return parse_rubric(_load_json(file_path))


def load_reviews(file_path: Path) -> ReviewSet:
    """Read and validate a review JSON file."""
    return parse_reviews(_load_json(file_path))
