from __future__ import annotations

import logging
from typing import Callable

import soupsieve as sv
from bs4 import Tag

from .dom import (
    ancestors,
    attr,
    attribute_value,
    child_index,
    class_tokens,
    count_class_matches,
    has_same_tag_siblings,
    same_tag_position,
    text_content,
)
from .formatters import format_selector
from .models import DataAttribute, GenerationOptions, LocatorCandidate, RawValue
from .selector_rules import xpath_literal

logger = logging.getLogger(__name__)

TEXT_LENGTH_LIMIT = 50
CSS_MAX_DEPTH = 5
XPATH_MAX_DEPTH = 10


class CandidateFactory:
    """Synthesizes the raw locator candidates for one element."""

    def __init__(self, tree: Tag, element: Tag, options: GenerationOptions) -> None:
        self.tree = tree
        self.element = element
        self.options = options
        self._candidates: list[LocatorCandidate] = []

    def generate(self) -> list[LocatorCandidate]:
        steps: list[tuple[str, Callable[[], None]]] = [
            ("id", self._add_id_strategy),
            ("name", self._add_name_strategy),
            ("class", self._add_class_strategy),
            ("data", self._add_data_attr_strategies),
            ("text", self._add_text_strategy),
            ("css", self._add_css_strategy),
            ("xpath", self._add_xpath_strategy),
        ]
        if self.options.include_accessibility:
            steps.append(("aria-label", self._add_aria_label_strategy))
            steps.append(("role", self._add_role_strategy))

        for strategy_type, step in steps:
            try:
                step()
            except Exception:
                logger.warning(
                    "Skipping %s strategy for <%s>", strategy_type, self.element.name, exc_info=True
                )
        return list(self._candidates)

    def _add(self, strategy_type: str, raw_value: RawValue) -> None:
        selector = format_selector(strategy_type, raw_value, self.options.framework)
        self._candidates.append(
            LocatorCandidate(type=strategy_type, raw_value=raw_value, formatted_selector=selector)  # type: ignore[arg-type]
        )

    def _add_id_strategy(self) -> None:
        value = attr(self.element, "id")
        if value:
            self._add("id", value)

    def _add_name_strategy(self) -> None:
        value = attr(self.element, "name")
        if value:
            self._add("name", value)

    def _add_class_strategy(self) -> None:
        unique = find_unique_class(self.tree, class_tokens(self.element))
        if unique:
            self._add("class", unique)

    def _add_data_attr_strategies(self) -> None:
        for data_attr in data_attributes(self.element):
            try:
                self._add("data", data_attr)
            except Exception:
                logger.warning("Skipping data strategy %s", data_attr.name, exc_info=True)

    def _add_text_strategy(self) -> None:
        text = text_content(self.element)
        if text and len(text) < TEXT_LENGTH_LIMIT:
            self._add("text", text)

    def _add_css_strategy(self) -> None:
        path = build_css_path(self.tree, self.element)
        if path:
            self._add("css", path)

    def _add_xpath_strategy(self) -> None:
        path = build_xpath(self.element)
        if path:
            self._add("xpath", path)

    def _add_aria_label_strategy(self) -> None:
        value = attr(self.element, "aria-label")
        if value:
            self._add("aria-label", value)

    def _add_role_strategy(self) -> None:
        value = attr(self.element, "role")
        if value:
            self._add("role", value)


def generate_candidates(tree: Tag, element: Tag, options: GenerationOptions | None = None) -> list[LocatorCandidate]:
    factory = CandidateFactory(tree=tree, element=element, options=options or GenerationOptions())
    return factory.generate()


def find_unique_class(tree: Tag, classes: list[str]) -> str | None:
    for class_name in classes:
        if class_name and count_class_matches(tree, class_name) == 1:
            return class_name
    return None


def data_attributes(element: Tag) -> list[DataAttribute]:
    found: list[DataAttribute] = []
    for key in element.attrs:
        if not key.startswith("data-"):
            continue
        value = attribute_value(element, key)
        if value is None or not value.strip():
            continue
        found.append(DataAttribute(name=key, value=value))
    return found


def _is_walk_boundary(node: Tag) -> bool:
    return node.name in ("html", "[document]")


def _upward(element: Tag):
    yield element
    yield from ancestors(element)


def build_css_path(tree: Tag, element: Tag) -> str:
    parts: list[str] = []
    for current in _upward(element):
        if _is_walk_boundary(current) or len(parts) >= CSS_MAX_DEPTH:
            break

        raw_id = attribute_value(current, "id")
        if raw_id and raw_id.strip():
            parts.insert(0, f"#{sv.escape(raw_id)}")
            break

        selector = current.name
        classes = class_tokens(current)
        if classes:
            chosen = find_unique_class(tree, classes) or classes[0]
            selector += f".{sv.escape(chosen)}"

        if has_same_tag_siblings(current):
            selector += f":nth-child({child_index(current)})"

        parts.insert(0, selector)
    return " > ".join(parts)


def build_xpath(element: Tag) -> str:
    """XPath from the nearest id anchor, or a structural path from the top.

    An id on an ancestor keeps the segments below it, so the path still ends
    at ``element`` rather than at the anchored ancestor.
    """
    parts: list[str] = []
    for current in _upward(element):
        if _is_walk_boundary(current) or len(parts) >= XPATH_MAX_DEPTH:
            break

        raw_id = attribute_value(current, "id")
        if raw_id and raw_id.strip():
            anchor = f"//*[@id={xpath_literal(raw_id)}]"
            return "/".join([anchor, *parts]) if parts else anchor

        segment = current.name
        class_attr = attribute_value(current, "class")
        if class_attr:
            segment += f"[@class={xpath_literal(class_attr)}]"

        if has_same_tag_siblings(current):
            segment += f"[{same_tag_position(current)}]"

        parts.insert(0, segment)

    if not parts:
        return ""
    return "//" + "/".join(parts)
