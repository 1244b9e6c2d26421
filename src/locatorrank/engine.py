from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from .context import extract_element_context
from .detector import find_interactive_elements
from .dom import describe_element, ensure_tree, parse_html
from .errors import InvalidRequestError, MalformedDocumentError
from .locator_generator import generate_candidates
from .models import GenerationOptions, LocatorResult
from .ranking import rank_strategies
from .validation import validate_generation_request

logger = logging.getLogger(__name__)


def generate_locators(tree: object, options: GenerationOptions | None = None) -> list[LocatorResult]:
    """Ranked locator strategies for every interactive element, in document order.

    Elements that yield no candidate are left out. Only a tree that cannot be
    walked at all raises (``MalformedDocumentError``); failures inside one
    candidate, sub-score or ranking are absorbed locally.
    """
    root = ensure_tree(tree)
    opts = options or GenerationOptions()

    try:
        elements = find_interactive_elements(root)
    except Exception as exc:
        raise MalformedDocumentError(f"Unable to walk the document tree: {exc}") from exc

    results: list[LocatorResult] = []
    for element in elements:
        result = _locate_element(root, element, opts)
        if result is not None:
            results.append(result)

    logger.info(
        "Generated locators for %d of %d interactive elements (framework=%s)",
        len(results),
        len(elements),
        opts.framework,
    )
    return results


def _locate_element(root: Tag, element: Tag, options: GenerationOptions) -> LocatorResult | None:
    candidates = generate_candidates(root, element, options)
    if not candidates:
        logger.debug("No candidates for <%s>; element dropped", element.name)
        return None

    strategies = rank_strategies(candidates, element, root)
    if not strategies:
        return None

    return LocatorResult(
        element=describe_element(element),
        strategies=strategies,
        context=extract_element_context(element),
    )


def parse_generation_request(html: str, options: GenerationOptions) -> BeautifulSoup:
    validation = validate_generation_request(
        html=html,
        framework=options.framework,
        include_accessibility=options.include_accessibility,
    )
    if not validation.ok:
        raise InvalidRequestError(validation.message)
    return parse_html(html)


def generate_locators_from_html(html: str, options: GenerationOptions | None = None) -> list[LocatorResult]:
    opts = options or GenerationOptions()
    return generate_locators(parse_generation_request(html, opts), opts)
