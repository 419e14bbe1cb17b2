"""Intermediate representation dataclasses for both pipelines.

WHY: The formatting and summarization pipelines pass small structured
values between stages (segments, sentences, constraints, budgets). Typed
dataclasses make each stage's contract explicit and independently testable.

HOW: Plain dataclasses and enums:
  Segment        — one timestamped transcript unit (formatting pipeline)
  BreakCategory  — inline < line < paragraph, with the separator each inserts
  Sentence       — one terminator-delimited unit with index and score
  ConstraintType — time / chars / words / default
  Constraint     — requested constraint type plus optional positive value
  Budget         — resolved numeric target and its measurement unit
  Correction     — one repaired occurrence from the repair table

RULES:
- Segment.time is whole seconds; sequences keep document order
- Sentence.index is the original position and is carried through every
  stage and never re-derived from text
- BreakCategory ordering reflects break severity
- Constraint.value, when given, must be positive
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class Segment:
    """A parsed transcript unit: absolute offset in seconds plus spoken text."""

    time: int
    text: str


class BreakCategory(enum.IntEnum):
    """Break severity between two consecutive segments.

    Integer values order the categories so that callers can compare
    severities directly (``BreakCategory.LINE < BreakCategory.PARAGRAPH``).
    """

    INLINE = 0
    LINE = 1
    PARAGRAPH = 2

    @property
    def separator(self) -> str:
        return _SEPARATORS[self]


_SEPARATORS = {
    BreakCategory.INLINE: " ",
    BreakCategory.LINE: "\n",
    BreakCategory.PARAGRAPH: "\n\n",
}


@dataclass
class Sentence:
    """A terminator-delimited unit of a document.

    WHY: Selection ranks sentences by importance but the excerpt must be
    emitted in document order. Carrying the index on the sentence itself
    keeps ordering correct even when two sentences have identical text.

    RULES:
    - text: the sentence with surrounding whitespace trimmed
    - index: 0-based position among all sentences of the document
    - start / end: character offsets of the matched run in the source
    - score: composite importance, 0.0 until scored
    """

    text: str
    index: int
    start: int
    end: int
    score: float = 0.0

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def char_count(self) -> int:
        return len(self.text)


class ConstraintType(str, enum.Enum):
    """Kinds of length constraint a summary may be asked to honour."""

    TIME = "time"
    CHARS = "chars"
    WORDS = "words"
    DEFAULT = "default"


@dataclass
class Constraint:
    """A requested summary constraint.

    RULES:
    - type: ConstraintType (strings are coerced; None means DEFAULT)
    - value: optional positive number (minutes for TIME, characters for
      CHARS, words for WORDS); ignored for DEFAULT
    """

    type: ConstraintType = ConstraintType.DEFAULT
    value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.type is None:
            self.type = ConstraintType.DEFAULT
        elif not isinstance(self.type, ConstraintType):
            self.type = ConstraintType(self.type)
        if self.value is not None and self.value <= 0:
            raise ValueError(
                "Constraint value must be positive, got {}".format(self.value)
            )

    @classmethod
    def from_params(
        cls,
        constraint_type: Union[ConstraintType, str, None],
        constraint_value: Optional[float] = None,
    ) -> "Constraint":
        """Build a Constraint from loose request parameters."""
        return cls(type=constraint_type or ConstraintType.DEFAULT, value=constraint_value)


@dataclass
class Budget:
    """A resolved length target.

    unit is ``"chars"`` only for CHARS constraints, otherwise ``"words"``.
    """

    value: float
    unit: str

    def measure(self, sentence: Sentence) -> int:
        """Length of *sentence* in this budget's unit."""
        if self.unit == "chars":
            return sentence.char_count
        return sentence.word_count


@dataclass
class Correction:
    """One repaired occurrence produced by the repair table."""

    original: str
    corrected: str
    confidence: int
    context: str
    evidence: List[str] = field(default_factory=list)
