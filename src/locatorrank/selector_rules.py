from __future__ import annotations

import re

_SPECIAL_CHARS = re.compile(r"(['\"\\])")

_NUMERIC_VALUE = re.compile(r"^\d+$")
_HEX_RUN = re.compile(r"[a-f0-9]{8,}", re.IGNORECASE)
_IDENTIFIER = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
_INDEX_SEGMENT = re.compile(r"\[\d+\]")

VOLATILE_ID_WORDS = ("random", "temp")

# Utility/css-framework class prefixes (Bootstrap, Tailwind spacing and sizing).
UTILITY_CLASS_PREFIX = re.compile(r"^(btn|button|link|text|bg|p-|m-|w-|h-)")

TEST_ATTR_TOKENS = ("qa", "cy", "e2e")


def escape_selector_value(value: str) -> str:
    """Backslash-escape quotes and backslashes before quoting ``value``."""
    return _SPECIAL_CHARS.sub(r"\\\1", value)


def xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    pieces = value.split('"')
    quoted = [f'"{piece}"' for piece in pieces]
    return "concat(" + ", '\"', ".join(quoted) + ")"


def is_numeric_value(value: str) -> bool:
    return bool(_NUMERIC_VALUE.match(value))


def has_hex_run(value: str) -> bool:
    return bool(_HEX_RUN.search(value))


def is_identifier(value: str) -> bool:
    return bool(_IDENTIFIER.match(value))


def has_index_segment(path: str) -> bool:
    return bool(_INDEX_SEGMENT.search(path))


def is_utility_class(value: str) -> bool:
    return bool(UTILITY_CLASS_PREFIX.match(value))


def is_test_attribute(name: str) -> bool:
    lowered = name.strip().lower()
    if "test" in lowered:
        return True
    tokens = lowered.split("-")
    return any(token in tokens for token in TEST_ATTR_TOKENS)
