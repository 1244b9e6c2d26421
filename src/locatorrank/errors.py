from __future__ import annotations


class LocatorRankError(Exception):
    """Base error surfaced to callers of the public entry points."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class MalformedDocumentError(LocatorRankError):
    """The supplied tree cannot be analysed as a whole."""


class InvalidRequestError(LocatorRankError):
    pass


class PageFetchError(LocatorRankError):
    pass
