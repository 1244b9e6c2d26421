from __future__ import annotations

from .engine import generate_locators, generate_locators_from_html
from .errors import InvalidRequestError, LocatorRankError, MalformedDocumentError, PageFetchError
from .models import GenerationOptions, LocatorResult, ScoredStrategy

__version__ = "0.1.0"

__all__ = [
    "GenerationOptions",
    "InvalidRequestError",
    "LocatorRankError",
    "LocatorResult",
    "MalformedDocumentError",
    "PageFetchError",
    "ScoredStrategy",
    "generate_locators",
    "generate_locators_from_html",
]
