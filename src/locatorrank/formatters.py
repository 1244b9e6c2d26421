from __future__ import annotations

from typing import Callable, Mapping, Protocol

from .models import DataAttribute, RawValue
from .selector_rules import escape_selector_value as _esc

Template = Callable[[RawValue], str]


class SelectorFormatter(Protocol):
    framework: str

    def format(self, strategy_type: str, raw_value: RawValue) -> str: ...


def _data_parts(value: RawValue) -> tuple[str, str]:
    if isinstance(value, DataAttribute):
        return _esc(value.name), _esc(value.value)
    raise TypeError(f"data strategy expects a DataAttribute, got {type(value).__name__}")


def _text(value: RawValue) -> str:
    if isinstance(value, DataAttribute):
        raise TypeError("string strategy received a DataAttribute")
    return _esc(value)


def _selenium_data(value: RawValue) -> str:
    name, attr_value = _data_parts(value)
    return f"By.cssSelector(\"[{name}='{attr_value}']\")"


def _playwright_data(value: RawValue) -> str:
    name, attr_value = _data_parts(value)
    return f'[{name}="{attr_value}"]'


def _cypress_data(value: RawValue) -> str:
    name, attr_value = _data_parts(value)
    return f"cy.get('[{name}=\"{attr_value}\"]')"


class TableFormatter:
    """Formatter backed by a fixed ``strategy type -> template`` table."""

    def __init__(self, framework: str, templates: Mapping[str, Template]) -> None:
        self.framework = framework
        self._templates = dict(templates)

    def supports(self, strategy_type: str) -> bool:
        return strategy_type in self._templates

    def format(self, strategy_type: str, raw_value: RawValue) -> str:
        template = self._templates.get(strategy_type)
        if template is None:
            return _unformatted(raw_value)
        return template(raw_value)


SELENIUM = TableFormatter(
    "selenium",
    {
        "id": lambda v: f'By.id("{_text(v)}")',
        "name": lambda v: f'By.name("{_text(v)}")',
        "class": lambda v: f'By.className("{_text(v)}")',
        "css": lambda v: f'By.cssSelector("{_text(v)}")',
        "xpath": lambda v: f'By.xpath("{_text(v)}")',
        "text": lambda v: f'By.linkText("{_text(v)}")',
        "aria-label": lambda v: f"By.cssSelector(\"[aria-label='{_text(v)}']\")",
        "role": lambda v: f"By.cssSelector(\"[role='{_text(v)}']\")",
        "data": _selenium_data,
    },
)

# Playwright consumes plain CSS/XPath strings, so structural paths pass through untouched.
PLAYWRIGHT = TableFormatter(
    "playwright",
    {
        "id": lambda v: f"#{_text(v)}",
        "name": lambda v: f'[name="{_text(v)}"]',
        "class": lambda v: f".{_text(v)}",
        "css": lambda v: _unformatted(v),
        "xpath": lambda v: _unformatted(v),
        "text": lambda v: f'text="{_text(v)}"',
        "aria-label": lambda v: f'[aria-label="{_text(v)}"]',
        "role": lambda v: f'[role="{_text(v)}"]',
        "data": _playwright_data,
    },
)

CYPRESS = TableFormatter(
    "cypress",
    {
        "id": lambda v: f"cy.get('#{_text(v)}')",
        "name": lambda v: f"cy.get('[name=\"{_text(v)}\"]')",
        "class": lambda v: f"cy.get('.{_text(v)}')",
        "css": lambda v: f"cy.get('{_text(v)}')",
        "xpath": lambda v: f"cy.xpath('{_text(v)}')",
        "text": lambda v: f"cy.contains('{_text(v)}')",
        "aria-label": lambda v: f"cy.get('[aria-label=\"{_text(v)}\"]')",
        "role": lambda v: f"cy.get('[role=\"{_text(v)}\"]')",
        "data": _cypress_data,
    },
)

FORMATTERS: dict[str, SelectorFormatter] = {
    formatter.framework: formatter for formatter in (SELENIUM, PLAYWRIGHT, CYPRESS)
}


def format_selector(strategy_type: str, raw_value: RawValue, framework: str) -> str:
    formatter = FORMATTERS.get(framework)
    if formatter is None:
        return _unformatted(raw_value)
    return formatter.format(strategy_type, raw_value)


def _unformatted(raw_value: RawValue) -> str:
    if isinstance(raw_value, DataAttribute):
        return f"{raw_value.name}={raw_value.value}"
    return raw_value
