# db/schema.py - Central definition of the records passed through the reaction pipeline.
# Identities and rules come from the static knowledge base; outcomes and results are what
# the pipeline hands to the UI. Everything here is frozen once built.

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Tuple


class SafetyLevel(str, Enum):
    SAFE = "Safe"
    MILD = "Mild"
    EXOTHERMIC = "Exothermic"
    DANGEROUS = "Dangerous"
    EXTREME = "Extreme"
    UNKNOWN = "Unknown"

    @classmethod
    def from_label(cls, label: Any) -> "SafetyLevel | None":
        """Exact, case-sensitive label match; None when the label is not one of ours."""
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            return None
        for level in cls:
            if level.value == label:
                return level
        return None


class ResultSource(str, Enum):
    """Which pipeline path produced a result."""
    SAME_SUBSTANCE = "same_substance"
    RULE = "rule"
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ChemicalIdentity:
    id: str
    name: str
    formula: str
    aliases: Tuple[str, ...] = ()

    def lookup_keys(self) -> Tuple[str, ...]:
        return (self.name, self.formula) + tuple(self.aliases)


@dataclass(frozen=True)
class ReactionOutcome:
    type: SafetyLevel
    title: str
    explanation: str
    recommendations: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.type, SafetyLevel):
            raise ValueError(f"type must be a SafetyLevel, got {self.type!r}")
        if not self.title or not self.title.strip():
            raise ValueError("ReactionOutcome.title must not be empty")
        if not self.explanation or not self.explanation.strip():
            raise ValueError("ReactionOutcome.explanation must not be empty")
        # accept any iterable of strings but store an immutable tuple
        object.__setattr__(self, "recommendations", tuple(self.recommendations))


@dataclass(frozen=True)
class ReactionRule:
    chemicals: FrozenSet[str]
    result: ReactionOutcome

    @classmethod
    def between(cls, first_id: str, second_id: str, result: ReactionOutcome) -> "ReactionRule":
        return cls(frozenset((first_id, second_id)), result)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ReactionResult:
    type: SafetyLevel
    title: str
    explanation: str
    recommendations: Tuple[str, ...]
    chemicals: Tuple[str, str]
    source: ResultSource
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_outcome(cls, outcome: ReactionOutcome, chemicals: Iterable[str],
                     source: ResultSource) -> "ReactionResult":
        """Stamp an outcome with the raw inputs (as typed) and a fresh timestamp."""
        first, second = tuple(chemicals)
        return cls(
            type=outcome.type,
            title=outcome.title,
            explanation=outcome.explanation,
            recommendations=tuple(outcome.recommendations),
            chemicals=(first, second),
            source=source,
        )

    @property
    def outcome(self) -> ReactionOutcome:
        return ReactionOutcome(self.type, self.title, self.explanation, self.recommendations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "explanation": self.explanation,
            "recommendations": list(self.recommendations),
            "chemicals": list(self.chemicals),
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
        }
