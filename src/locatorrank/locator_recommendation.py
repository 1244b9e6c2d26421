from __future__ import annotations

from .models import LocatorResult

WEAK_TOTAL_SCORE = 0.7
STABLE_THRESHOLD = 0.8

NO_STRATEGIES = "No strategies available for analysis"
ADD_UNIQUE_HOOK = "Consider adding a unique ID or data-testid attribute to this element"
ADD_ACCESSIBILITY = "Add accessibility attributes (aria-label, role) for better locator options"
FRAGILE_LOCATORS = "Current locators may be fragile - consider more stable alternatives"
NO_UNIQUE_LOCATOR = "No unique locators found - element may be difficult to target reliably"
LOOKS_GOOD = "Locator strategies look good"


def recommend_improvements(result: LocatorResult) -> list[str]:
    strategies = result.strategies
    if not strategies:
        return [NO_STRATEGIES]

    recommendations: list[str] = []
    if strategies[0].total_score < WEAK_TOTAL_SCORE:
        recommendations.append(ADD_UNIQUE_HOOK)

    attributes = result.element.attributes
    if not attributes.get("aria-label") and not attributes.get("role"):
        recommendations.append(ADD_ACCESSIBILITY)

    if not any(strategy.scores.stability > STABLE_THRESHOLD for strategy in strategies):
        recommendations.append(FRAGILE_LOCATORS)

    if not any(strategy.scores.uniqueness == 1.0 for strategy in strategies):
        recommendations.append(NO_UNIQUE_LOCATOR)

    return recommendations or [LOOKS_GOOD]
