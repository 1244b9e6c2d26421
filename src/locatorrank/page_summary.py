"""Document-level inventories reported next to the locator results."""

from __future__ import annotations

from typing import Any

from bs4 import Tag

from .dom import attr, attribute_value, iter_elements, text_content

ACCESSIBILITY_ATTRS = ("role", "aria-label", "aria-describedby", "alt")
FORM_FIELD_TAGS = ["input", "select", "textarea", "button"]


def _meta_content(tree: Tag, name: str) -> str | None:
    meta = tree.find("meta", attrs={"name": name})
    return attribute_value(meta, "content") if isinstance(meta, Tag) else None


def extract_page_metadata(tree: Tag) -> dict[str, Any]:
    title = tree.find("title")
    charset = tree.find("meta", attrs={"charset": True})
    html = tree.find("html")
    return {
        "title": text_content(title) if isinstance(title, Tag) else "",
        "description": _meta_content(tree, "description"),
        "viewport": _meta_content(tree, "viewport"),
        "charset": attribute_value(charset, "charset") if isinstance(charset, Tag) else None,
        "language": attribute_value(html, "lang") if isinstance(html, Tag) else None,
        "forms": len(tree.find_all("form")),
        "inputs": len(tree.find_all("input")),
        "buttons": len(tree.find_all("button")),
        "links": len(tree.find_all("a")),
        "images": len(tree.find_all("img")),
    }


def extract_form_elements(tree: Tag) -> list[dict[str, Any]]:
    forms: list[dict[str, Any]] = []
    for form in tree.find_all("form"):
        fields = [
            {
                "type": field.name,
                "name": attr(field, "name"),
                "id": attr(field, "id"),
                "required": "required" in field.attrs,
                "placeholder": attribute_value(field, "placeholder"),
            }
            for field in form.find_all(FORM_FIELD_TAGS)
        ]
        forms.append(
            {
                "id": attr(form, "id"),
                "name": attr(form, "name"),
                "action": attribute_value(form, "action"),
                "method": attribute_value(form, "method"),
                "fields": fields,
            }
        )
    return forms


def extract_accessibility_elements(tree: Tag) -> list[dict[str, Any]]:
    elements: list[dict[str, Any]] = []
    for element in iter_elements(tree):
        if not any(key in element.attrs for key in ACCESSIBILITY_ATTRS):
            continue
        elements.append(
            {
                "tag": element.name,
                "role": attribute_value(element, "role"),
                "ariaLabel": attribute_value(element, "aria-label"),
                "ariaDescribedby": attribute_value(element, "aria-describedby"),
                "alt": attribute_value(element, "alt"),
                "text": text_content(element)[:50],
            }
        )
    return elements


def find_shadow_hosts(tree: Tag) -> list[dict[str, Any]]:
    return [
        {"tag": element.name, "id": attr(element, "id"), "class": attribute_value(element, "class")}
        for element in iter_elements(tree)
        if "shadowroot" in element.attrs or "shadow" in element.attrs
    ]


def summarize_page(tree: Tag) -> dict[str, Any]:
    return {
        "metadata": extract_page_metadata(tree),
        "forms": extract_form_elements(tree),
        "accessibility": extract_accessibility_elements(tree),
        "shadowHosts": find_shadow_hosts(tree),
    }
