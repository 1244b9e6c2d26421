import pytest
from bs4 import BeautifulSoup

from locatorrank import generate_locators, generate_locators_from_html
from locatorrank.errors import InvalidRequestError, MalformedDocumentError
from locatorrank.models import GenerationOptions
from locatorrank.scoring import WEIGHTS


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_login_page_yields_one_result_per_interactive_element(login_tree) -> None:
    results = generate_locators(login_tree)

    assert [result.element.tag for result in results] == ["input", "input", "button", "a", "a", "a", "button"]
    for result in results:
        assert 1 <= len(result.strategies) <= 5
        assert [strategy.rank for strategy in result.strategies] == list(range(1, len(result.strategies) + 1))


def test_submit_button_prefers_id_then_test_hook(login_tree) -> None:
    results = generate_locators(login_tree)
    submit = results[2]

    types = [strategy.type for strategy in submit.strategies]

    assert submit.element.attributes["id"] == "submit-btn"
    assert types[:2] == ["id", "data"]
    assert "xpath" not in types
    assert submit.best.formatted_selector == 'By.id("submit-btn")'
    assert submit.context.form.id == "login-form"


def test_labelled_input_gets_accessibility_credit(login_tree) -> None:
    username = generate_locators(login_tree)[0]

    id_strategy = next(strategy for strategy in username.strategies if strategy.type == "id")

    assert id_strategy.scores.accessibility == pytest.approx(0.8)
    assert [strategy.type for strategy in username.strategies] == ["id", "name", "css", "xpath"]


def test_structural_strategies_for_button_without_hooks(login_tree) -> None:
    show_more = generate_locators(login_tree, GenerationOptions(framework="playwright"))[-1]
    by_type = {strategy.type: strategy for strategy in show_more.strategies}

    assert by_type["css"].raw_value == "body > div.container > section.content > article > button.btn-secondary"
    assert by_type["class"].formatted_selector == ".btn-secondary"
    assert show_more.context.section.tag == "article"


def test_duplicate_classes_fall_back_to_structure() -> None:
    tree = _soup(
        """
        <html><body><main>
          <div class="btn btn-primary" onclick="go()">Go</div>
          <div class="btn btn-primary" onclick="stop()">Stop</div>
        </main></body></html>
        """
    )

    first = generate_locators(tree)[0]
    by_type = {strategy.type: strategy for strategy in first.strategies}

    assert set(by_type) == {"text", "css", "xpath"}
    assert by_type["css"].raw_value == "body > main > div.btn:nth-child(1)"
    assert by_type["xpath"].raw_value == '//body/main/div[@class="btn btn-primary"][1]'


def test_numeric_id_loses_stability() -> None:
    tree = _soup('<html><body><button id="12345">Buy</button></body></html>')

    result = generate_locators(tree)[0]
    id_strategy = next(strategy for strategy in result.strategies if strategy.type == "id")

    assert id_strategy.scores.stability == pytest.approx(0.5)


def test_totals_match_weighted_scores(login_tree) -> None:
    for result in generate_locators(login_tree):
        for strategy in result.strategies:
            expected = round(sum(getattr(strategy.scores, name) * weight for name, weight in WEIGHTS.items()), 2)
            assert strategy.total_score == expected


def test_elements_without_candidates_are_dropped() -> None:
    tree = _soup('<html onclick="go()"></html><button id="b">B</button>')

    results = generate_locators(tree)

    assert [result.element.tag for result in results] == ["button"]


def test_page_without_interactive_elements() -> None:
    assert generate_locators(_soup("<p>Just text here.</p>")) == []


def test_accessibility_strategies_can_be_disabled() -> None:
    tree = _soup('<button aria-label="Close" role="button">x</button>')

    results = generate_locators(tree, GenerationOptions(include_accessibility=False))

    types = {strategy.type for strategy in results[0].strategies}
    assert "aria-label" not in types
    assert "role" not in types


def test_generation_is_deterministic(login_html) -> None:
    first = [result.to_dict() for result in generate_locators(_soup(login_html))]
    second = [result.to_dict() for result in generate_locators(_soup(login_html))]

    assert first == second


def test_result_serialisation_shape(login_tree) -> None:
    payload = generate_locators(login_tree)[2].to_dict()

    assert set(payload) == {"element", "strategies", "context"}
    strategy = payload["strategies"][1]
    assert strategy["rawValue"] == {"name": "data-testid", "value": "login-submit"}
    assert set(strategy) == {"type", "rawValue", "formattedSelector", "scores", "totalScore", "rank"}
    assert set(strategy["scores"]) == set(WEIGHTS)


def test_non_tree_input_is_malformed() -> None:
    with pytest.raises(MalformedDocumentError):
        generate_locators("not a tree")


def test_from_html_validates_request() -> None:
    with pytest.raises(InvalidRequestError, match="at least 10 characters"):
        generate_locators_from_html("   <a>   ")
    with pytest.raises(InvalidRequestError, match="framework must be one of"):
        generate_locators_from_html("<button>Go</button>", GenerationOptions(framework="puppeteer"))


def test_from_html_parses_and_generates(login_html) -> None:
    results = generate_locators_from_html(login_html, GenerationOptions(framework="cypress"))

    assert results[2].best.formatted_selector == "cy.get('#submit-btn')"


def test_id_with_surrounding_whitespace_stays_unique() -> None:
    tree = _soup('<html><body><div><button id=" go ">Go</button></div></body></html>')

    result = generate_locators(tree, GenerationOptions(framework="playwright"))[0]
    by_type = {strategy.type: strategy for strategy in result.strategies}

    assert by_type["id"].raw_value == "go"
    assert by_type["id"].scores.uniqueness == 1.0
    assert by_type["css"].scores.uniqueness == 1.0
