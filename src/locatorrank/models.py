from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

StrategyType = Literal["id", "name", "class", "data", "text", "css", "xpath", "aria-label", "role"]

FRAMEWORKS: tuple[str, ...] = ("selenium", "playwright", "cypress")
SCORE_DIMENSIONS: tuple[str, ...] = ("uniqueness", "stability", "readability", "performance", "accessibility")


@dataclass(frozen=True, slots=True)
class DataAttribute:
    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


RawValue = Union[str, DataAttribute]


@dataclass(frozen=True, slots=True)
class ElementDescriptor:
    tag: str
    text: str
    attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag, "text": self.text, "attributes": dict(self.attributes)}


@dataclass(frozen=True, slots=True)
class LocatorCandidate:
    type: StrategyType
    raw_value: RawValue
    formatted_selector: str

    def raw_value_payload(self) -> str | dict[str, str]:
        if isinstance(self.raw_value, DataAttribute):
            return self.raw_value.to_dict()
        return self.raw_value


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    uniqueness: float
    stability: float
    readability: float
    performance: float
    accessibility: float

    @classmethod
    def neutral(cls) -> ScoreBreakdown:
        return cls(0.5, 0.5, 0.5, 0.5, 0.5)

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SCORE_DIMENSIONS}


@dataclass(slots=True)
class ScoredStrategy:
    candidate: LocatorCandidate
    scores: ScoreBreakdown
    total_score: float
    rank: int = 0

    @property
    def type(self) -> str:
        return self.candidate.type

    @property
    def raw_value(self) -> RawValue:
        return self.candidate.raw_value

    @property
    def formatted_selector(self) -> str:
        return self.candidate.formatted_selector

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.candidate.type,
            "rawValue": self.candidate.raw_value_payload(),
            "formattedSelector": self.candidate.formatted_selector,
            "scores": self.scores.as_dict(),
            "totalScore": self.total_score,
            "rank": self.rank,
        }


@dataclass(frozen=True, slots=True)
class ParentContext:
    tag: str
    id: str | None
    class_name: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag, "id": self.id, "class": self.class_name}


SectionContext = ParentContext


@dataclass(frozen=True, slots=True)
class FormContext:
    id: str | None
    name: str | None
    action: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "action": self.action}


@dataclass(frozen=True, slots=True)
class ElementContext:
    parent: ParentContext | None = None
    form: FormContext | None = None
    section: SectionContext | None = None
    navigation: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "parent": self.parent.to_dict() if self.parent else None,
            "form": self.form.to_dict() if self.form else None,
            "section": self.section.to_dict() if self.section else None,
            "navigation": self.navigation,
        }


@dataclass(slots=True)
class LocatorResult:
    element: ElementDescriptor
    strategies: list[ScoredStrategy]
    context: ElementContext

    @property
    def best(self) -> ScoredStrategy:
        return self.strategies[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "element": self.element.to_dict(),
            "strategies": [strategy.to_dict() for strategy in self.strategies],
            "context": self.context.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    framework: str = "selenium"
    include_accessibility: bool = True
