from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable

import soupsieve as sv
from bs4 import Tag

from .dom import attr, count_attribute_matches, count_class_matches, count_text_matches
from .models import DataAttribute, LocatorCandidate, ScoreBreakdown, ScoredStrategy
from .selector_rules import (
    VOLATILE_ID_WORDS,
    has_hex_run,
    has_index_segment,
    is_identifier,
    is_numeric_value,
    is_test_attribute,
    is_utility_class,
)

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "uniqueness": 0.25,
    "stability": 0.25,
    "readability": 0.20,
    "performance": 0.15,
    "accessibility": 0.15,
}
NEUTRAL_SCORE = 0.5

# Estimated match counts for XPath paths, which are not re-executed against the tree.
XPATH_ATTRIBUTE_ESTIMATE = 1
XPATH_STRUCTURAL_ESTIMATE = 3
UNKNOWN_TYPE_ESTIMATE = 2

BASE_STABILITY: dict[str, float] = {
    "id": 0.9,
    "name": 0.85,
    "data": 0.8,
    "aria-label": 0.75,
    "role": 0.7,
    "class": 0.6,
    "css": 0.5,
    "xpath": 0.4,
    "text": 0.3,
}

BASE_READABILITY: dict[str, float] = {
    "id": 0.9,
    "name": 0.85,
    "aria-label": 0.8,
    "data": 0.75,
    "text": 0.7,
    "role": 0.65,
    "class": 0.6,
    "css": 0.4,
    "xpath": 0.3,
}

BASE_PERFORMANCE: dict[str, float] = {
    "id": 1.0,
    "name": 0.9,
    "class": 0.8,
    "data": 0.75,
    "aria-label": 0.7,
    "role": 0.7,
    "css": 0.6,
    "xpath": 0.4,
    "text": 0.3,
}

BASE_ACCESSIBILITY: dict[str, float] = {
    "aria-label": 1.0,
    "role": 0.9,
    "text": 0.8,
    "name": 0.7,
    "id": 0.6,
    "class": 0.4,
    "data": 0.3,
    "css": 0.2,
    "xpath": 0.2,
}
LABELLED_ID_ACCESSIBILITY = 0.8

ScoreFunction = Callable[[LocatorCandidate, Tag, Tag], float]


@dataclass(frozen=True, slots=True)
class SubScore:
    """Outcome of one sub-score computation: a value, or the error that prevented it."""

    dimension: str
    value: float | None = None
    error: str | None = None

    @classmethod
    def success(cls, dimension: str, value: float) -> SubScore:
        return cls(dimension=dimension, value=value)

    @classmethod
    def failed(cls, dimension: str, error: str) -> SubScore:
        return cls(dimension=dimension, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    def or_neutral(self) -> float:
        return self.value if self.ok else NEUTRAL_SCORE  # type: ignore[return-value]


def clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def uniqueness_from_count(count: int) -> float:
    if count <= 0:
        return 0.0
    if count == 1:
        return 1.0
    if count <= 3:
        return 0.8
    if count <= 5:
        return 0.6
    return 0.3


def count_candidate_matches(candidate: LocatorCandidate, tree: Tag) -> int:
    strategy_type = candidate.type
    value = candidate.raw_value

    if strategy_type == "data":
        if not isinstance(value, DataAttribute) or not value.value:
            return 0
        return count_attribute_matches(tree, value.name, value.value)
    if not isinstance(value, str) or not value.strip():
        return 0

    if strategy_type in ("id", "name", "aria-label", "role"):
        return count_attribute_matches(tree, strategy_type, value)
    if strategy_type == "class":
        return count_class_matches(tree, value)
    if strategy_type == "css":
        try:
            return len(tree.select(value))
        except sv.SelectorSyntaxError:
            return 0
    if strategy_type == "xpath":
        return XPATH_ATTRIBUTE_ESTIMATE if "[@" in value else XPATH_STRUCTURAL_ESTIMATE
    if strategy_type == "text":
        return count_text_matches(tree, value)
    return UNKNOWN_TYPE_ESTIMATE


def calculate_uniqueness(candidate: LocatorCandidate, element: Tag, tree: Tag) -> float:
    return uniqueness_from_count(count_candidate_matches(candidate, tree))


def calculate_stability(candidate: LocatorCandidate, element: Tag, tree: Tag) -> float:
    strategy_type = candidate.type
    value = candidate.raw_value
    stability = BASE_STABILITY.get(strategy_type, NEUTRAL_SCORE)

    if isinstance(value, DataAttribute):
        if strategy_type == "data":
            name = value.name.lower()
            if is_test_attribute(name):
                stability += 0.1
            elif "id" in name or "key" in name:
                stability -= 0.2
        return clamp(stability)

    if strategy_type == "id":
        if is_numeric_value(value):
            stability -= 0.4
        if has_hex_run(value):
            stability -= 0.3
        if any(word in value for word in VOLATILE_ID_WORDS):
            stability -= 0.5
    elif strategy_type == "name":
        if is_numeric_value(value):
            stability -= 0.3
    elif strategy_type == "class":
        if " " not in value:
            stability += 0.1
        if is_utility_class(value):
            stability -= 0.2
    elif strategy_type == "css":
        if value.count(">") > 2:
            stability -= 0.2
        if ":nth-child" in value:
            stability -= 0.3
    elif strategy_type == "xpath":
        if has_index_segment(value):
            stability -= 0.3
        if value.count("/") > 4:
            stability -= 0.2
    elif strategy_type == "text":
        if len(value) < 10 and not re.search(r"\d", value):
            stability += 0.2

    return clamp(stability)


def calculate_readability(candidate: LocatorCandidate, element: Tag, tree: Tag) -> float:
    strategy_type = candidate.type
    value = candidate.raw_value
    readability = BASE_READABILITY.get(strategy_type, NEUTRAL_SCORE)

    if isinstance(value, DataAttribute):
        if "test" in value.name:
            readability += 0.15
        return clamp(readability)

    if strategy_type == "id" and is_identifier(value):
        readability += 0.1
    elif strategy_type == "text" and len(value) > 30:
        readability -= 0.2
    elif strategy_type == "class" and len(value) > 20:
        readability -= 0.1
    elif strategy_type == "css" and len(value) > 50:
        readability -= 0.1
    elif strategy_type == "xpath" and len(value) > 100:
        readability -= 0.2

    return clamp(readability)


def calculate_performance(candidate: LocatorCandidate, element: Tag, tree: Tag) -> float:
    strategy_type = candidate.type
    value = candidate.raw_value
    performance = BASE_PERFORMANCE.get(strategy_type, NEUTRAL_SCORE)

    if isinstance(value, str):
        if strategy_type == "css":
            if len(re.findall(r"\s+", value)) > 2:
                performance -= 0.2
            if "*" in value:
                performance -= 0.3
        elif strategy_type == "xpath":
            if "//" in value:
                performance -= 0.1
            if value.count("[") > 2:
                performance -= 0.1

    return clamp(performance)


def calculate_accessibility(candidate: LocatorCandidate, element: Tag, tree: Tag) -> float:
    strategy_type = candidate.type
    value = candidate.raw_value
    accessibility = BASE_ACCESSIBILITY.get(strategy_type, NEUTRAL_SCORE)

    if strategy_type == "id" and isinstance(value, str):
        if _has_label_for(tree, value):
            accessibility = LABELLED_ID_ACCESSIBILITY

    if attr(element, "aria-label"):
        accessibility += 0.1
    if attr(element, "aria-describedby"):
        accessibility += 0.05
    if attr(element, "role"):
        accessibility += 0.1

    return clamp(accessibility)


def _has_label_for(tree: Tag, id_value: str) -> bool:
    return any(label.get("for") == id_value for label in tree.find_all("label"))


SCORE_FUNCTIONS: dict[str, ScoreFunction] = {
    "uniqueness": calculate_uniqueness,
    "stability": calculate_stability,
    "readability": calculate_readability,
    "performance": calculate_performance,
    "accessibility": calculate_accessibility,
}


def evaluate_dimension(
    dimension: str,
    function: ScoreFunction,
    candidate: LocatorCandidate,
    element: Tag,
    tree: Tag,
) -> SubScore:
    try:
        value = float(function(candidate, element, tree))
    except Exception as exc:
        logger.warning("Error calculating %s for %s strategy: %s", dimension, candidate.type, exc)
        return SubScore.failed(dimension, str(exc) or type(exc).__name__)
    if not math.isfinite(value):
        return SubScore.failed(dimension, f"non-finite {dimension} score")
    return SubScore.success(dimension, clamp(value))


def evaluate_candidate(candidate: LocatorCandidate, element: Tag, tree: Tag) -> list[SubScore]:
    return [
        evaluate_dimension(dimension, function, candidate, element, tree)
        for dimension, function in SCORE_FUNCTIONS.items()
    ]


def weighted_total(scores: ScoreBreakdown) -> float:
    total = sum(getattr(scores, dimension) * weight for dimension, weight in WEIGHTS.items())
    return round(clamp(total), 2)


def score_candidate(candidate: LocatorCandidate, element: Tag, tree: Tag) -> ScoredStrategy:
    outcomes = {outcome.dimension: outcome.or_neutral() for outcome in evaluate_candidate(candidate, element, tree)}
    breakdown = ScoreBreakdown(**outcomes)
    return ScoredStrategy(candidate=candidate, scores=breakdown, total_score=weighted_total(breakdown))


def score_candidates(candidates: Iterable[LocatorCandidate], element: Tag, tree: Tag) -> list[ScoredStrategy]:
    return [score_candidate(candidate, element, tree) for candidate in candidates]
