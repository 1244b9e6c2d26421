from locatorrank.locator_recommendation import (
    ADD_ACCESSIBILITY,
    ADD_UNIQUE_HOOK,
    FRAGILE_LOCATORS,
    LOOKS_GOOD,
    NO_STRATEGIES,
    NO_UNIQUE_LOCATOR,
    recommend_improvements,
)
from locatorrank.models import (
    ElementContext,
    ElementDescriptor,
    LocatorCandidate,
    LocatorResult,
    ScoreBreakdown,
    ScoredStrategy,
)


def _result(attributes: dict[str, str], *strategies: ScoredStrategy) -> LocatorResult:
    return LocatorResult(
        element=ElementDescriptor(tag="button", text="Go", attributes=attributes),
        strategies=list(strategies),
        context=ElementContext(),
    )


def _strategy(total: float, uniqueness: float, stability: float) -> ScoredStrategy:
    return ScoredStrategy(
        candidate=LocatorCandidate(type="css", raw_value="main > button", formatted_selector="main > button"),
        scores=ScoreBreakdown(uniqueness, stability, 0.5, 0.5, 0.5),
        total_score=total,
        rank=1,
    )


def test_strong_accessible_element_looks_good() -> None:
    result = _result({"aria-label": "Go", "role": "button"}, _strategy(0.9, 1.0, 0.9))

    assert recommend_improvements(result) == [LOOKS_GOOD]


def test_weak_element_collects_every_hint() -> None:
    result = _result({"class": "btn"}, _strategy(0.4, 0.6, 0.3))

    assert recommend_improvements(result) == [
        ADD_UNIQUE_HOOK,
        ADD_ACCESSIBILITY,
        FRAGILE_LOCATORS,
        NO_UNIQUE_LOCATOR,
    ]


def test_role_alone_is_enough_for_accessibility() -> None:
    result = _result({"role": "button"}, _strategy(0.9, 1.0, 0.9))

    assert ADD_ACCESSIBILITY not in recommend_improvements(result)


def test_no_strategies() -> None:
    assert recommend_improvements(_result({})) == [NO_STRATEGIES]
