from __future__ import annotations

from dataclasses import dataclass

from .models import FRAMEWORKS

MIN_HTML_LENGTH = 10


@dataclass(frozen=True, slots=True)
class GenerationValidation:
    ok: bool
    message: str


def validate_generation_request(
    *,
    html: object,
    framework: object,
    include_accessibility: object,
) -> GenerationValidation:
    if not isinstance(html, str):
        return GenerationValidation(False, "html must be a string.")
    if len(html.strip()) < MIN_HTML_LENGTH:
        return GenerationValidation(False, f"html must be at least {MIN_HTML_LENGTH} characters long.")
    if framework not in FRAMEWORKS:
        allowed = ", ".join(FRAMEWORKS)
        return GenerationValidation(False, f"framework must be one of: {allowed}.")
    if not isinstance(include_accessibility, bool):
        return GenerationValidation(False, "includeAccessibility must be a boolean.")
    return GenerationValidation(True, "Validation successful.")
