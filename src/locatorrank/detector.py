from __future__ import annotations

import logging

from bs4 import Tag

from .dom import attribute_value, iter_elements

logger = logging.getLogger(__name__)

INTERACTIVE_TAGS = frozenset({"a", "button", "input", "select", "textarea"})
INTERACTIVE_ROLES = frozenset({"button", "link", "checkbox", "radio", "textbox", "combobox"})
CLICK_BINDING_ATTRS = ("onclick", "ng-click", "data-ng-click", "v-on:click", "@click", "(click)")
ACTION_ATTRS = ("data-action", "data-testid")


def is_interactive(element: Tag) -> bool:
    if element.name in INTERACTIVE_TAGS:
        return True
    role = attribute_value(element, "role")
    if role is not None and role.strip().lower() in INTERACTIVE_ROLES:
        return True
    return any(key in element.attrs for key in CLICK_BINDING_ATTRS + ACTION_ATTRS)


def find_interactive_elements(tree: Tag) -> list[Tag]:
    elements = [element for element in iter_elements(tree) if is_interactive(element)]
    logger.debug("Detected %d interactive elements", len(elements))
    return elements
