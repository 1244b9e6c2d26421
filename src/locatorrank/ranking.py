from __future__ import annotations

import logging
from typing import Sequence

from bs4 import Tag

from .models import LocatorCandidate, ScoreBreakdown, ScoredStrategy
from .scoring import NEUTRAL_SCORE, score_candidates

logger = logging.getLogger(__name__)

MAX_STRATEGIES = 5


def order_strategies(scored: Sequence[ScoredStrategy], limit: int = MAX_STRATEGIES) -> list[ScoredStrategy]:
    # sorted() is stable, so equal totals keep synthesis order.
    ordered = sorted(scored, key=lambda item: -item.total_score)[:limit]
    for index, strategy in enumerate(ordered):
        strategy.rank = index + 1
    return ordered


def fallback_ranking(candidates: Sequence[LocatorCandidate], limit: int = MAX_STRATEGIES) -> list[ScoredStrategy]:
    return [
        ScoredStrategy(
            candidate=candidate,
            scores=ScoreBreakdown.neutral(),
            total_score=NEUTRAL_SCORE,
            rank=index + 1,
        )
        for index, candidate in enumerate(candidates[:limit])
    ]


def rank_strategies(candidates: Sequence[LocatorCandidate], element: Tag, tree: Tag) -> list[ScoredStrategy]:
    """Score, sort and truncate candidates; degrades to neutral scores instead of failing."""
    valid = [candidate for candidate in candidates if candidate is not None]
    if not valid:
        logger.warning("No strategies provided for ranking")
        return []

    try:
        ranked = order_strategies(score_candidates(valid, element, tree))
    except Exception:
        logger.exception("Error ranking strategies; falling back to neutral scores")
        return fallback_ranking(valid)

    logger.debug("Ranked %d strategies", len(ranked))
    return ranked
