from __future__ import annotations

from typing import Iterator

import soupsieve as sv
from bs4 import BeautifulSoup, Tag

from .errors import MalformedDocumentError
from .models import ElementDescriptor

DESCRIPTOR_TEXT_LIMIT = 50


def parse_html(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as exc:
        raise MalformedDocumentError(f"Failed to parse HTML content: {exc}") from exc


def ensure_tree(tree: object) -> Tag:
    if not isinstance(tree, Tag):
        raise MalformedDocumentError(
            f"Expected a parsed HTML tree (bs4 Tag), got {type(tree).__name__}."
        )
    return tree


def is_document(node: object) -> bool:
    return isinstance(node, BeautifulSoup)


def attribute_value(element: Tag, key: str) -> str | None:
    raw = element.attrs.get(key)
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return " ".join(str(item) for item in raw)
    return str(raw)


def attr(element: Tag, key: str) -> str | None:
    """Attribute value with surrounding whitespace removed; empty reads as absent."""
    value = attribute_value(element, key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def attributes(element: Tag) -> dict[str, str]:
    return {key: attribute_value(element, key) or "" for key in element.attrs}


def class_tokens(element: Tag) -> list[str]:
    raw = element.attrs.get("class")
    if not raw:
        return []
    items = raw.split() if isinstance(raw, str) else [item for item in raw if isinstance(item, str)]

    seen: set[str] = set()
    tokens: list[str] = []
    for item in items:
        clean = item.strip()
        if not clean or clean in seen:
            continue
        seen.add(clean)
        tokens.append(clean)
    return tokens


def text_content(element: Tag) -> str:
    return element.get_text().strip()


def iter_elements(tree: Tag) -> Iterator[Tag]:
    yield from tree.find_all(True)


def element_parent(element: Tag) -> Tag | None:
    parent = element.parent
    if parent is None or is_document(parent):
        return None
    return parent


def ancestors(element: Tag) -> Iterator[Tag]:
    for parent in element.parents:
        if is_document(parent):
            return
        yield parent


def element_siblings(element: Tag) -> list[Tag]:
    parent = element.parent
    if parent is None:
        return []
    return [child for child in parent.children if isinstance(child, Tag) and child is not element]


def child_index(element: Tag) -> int:
    """1-based position among all element siblings (``:nth-child`` semantics)."""
    position = 1
    for sibling in element.previous_siblings:
        if isinstance(sibling, Tag):
            position += 1
    return position


def same_tag_position(element: Tag) -> int:
    """1-based position among siblings sharing the tag (XPath ``tag[n]`` semantics)."""
    position = 1
    for sibling in element.previous_siblings:
        if isinstance(sibling, Tag) and sibling.name == element.name:
            position += 1
    return position


def has_same_tag_siblings(element: Tag) -> bool:
    return any(sibling.name == element.name for sibling in element_siblings(element))


def count_attribute_matches(tree: Tag, key: str, value: str) -> int:
    target = value.strip()
    return sum(1 for element in iter_elements(tree) if attr(element, key) == target)


def count_class_matches(tree: Tag, class_name: str) -> int:
    return len(tree.select(f".{sv.escape(class_name)}"))


def count_text_matches(tree: Tag, text: str) -> int:
    return sum(1 for element in iter_elements(tree) if text_content(element) == text)


def describe_element(element: Tag) -> ElementDescriptor:
    return ElementDescriptor(
        tag=element.name,
        text=text_content(element)[:DESCRIPTOR_TEXT_LIMIT],
        attributes=attributes(element),
    )
