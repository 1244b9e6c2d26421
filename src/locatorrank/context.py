from __future__ import annotations

import logging
from typing import Callable, TypeVar

from bs4 import Tag

from .dom import ancestors, attr, attribute_value, element_parent
from .models import ElementContext, FormContext, ParentContext, SectionContext

logger = logging.getLogger(__name__)

SECTION_TAGS = frozenset({"section", "article", "main", "aside"})

T = TypeVar("T")


def _closest(element: Tag, predicate: Callable[[Tag], bool]) -> Tag | None:
    for ancestor in ancestors(element):
        if predicate(ancestor):
            return ancestor
    return None


def _describe(node: Tag) -> ParentContext:
    return ParentContext(tag=node.name, id=attr(node, "id"), class_name=attribute_value(node, "class"))


def parent_context(element: Tag) -> ParentContext | None:
    parent = element_parent(element)
    return _describe(parent) if parent is not None else None


def form_context(element: Tag) -> FormContext | None:
    form = _closest(element, lambda node: node.name == "form")
    if form is None:
        return None
    return FormContext(id=attr(form, "id"), name=attr(form, "name"), action=attribute_value(form, "action"))


def section_context(element: Tag) -> SectionContext | None:
    section = _closest(element, lambda node: node.name in SECTION_TAGS)
    return _describe(section) if section is not None else None


def _is_navigation(node: Tag) -> bool:
    return node.name == "nav" or attribute_value(node, "role") == "navigation"


def in_navigation(element: Tag) -> bool:
    return _closest(element, _is_navigation) is not None


def _lookup(label: str, lookup: Callable[[Tag], T], element: Tag, default: T) -> T:
    try:
        return lookup(element)
    except Exception as exc:
        logger.warning("Context lookup %s failed for <%s>: %s", label, element.name, exc)
        return default


def extract_element_context(element: Tag) -> ElementContext:
    return ElementContext(
        parent=_lookup("parent", parent_context, element, None),
        form=_lookup("form", form_context, element, None),
        section=_lookup("section", section_context, element, None),
        navigation=_lookup("navigation", in_navigation, element, False),
    )
