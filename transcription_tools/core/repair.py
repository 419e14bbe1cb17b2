"""Fixed-dictionary repair of common transcription misspellings.

WHY: Speech-to-text and hand transcription repeat a handful of well-known
misspellings. A small, high-confidence replacement table fixes them
without any risk of rewriting legitimate words.

HOW: Each table entry is a case-insensitive pattern, its replacement, and
a confidence percentage. Every occurrence becomes a Correction with a
little surrounding context, then the whole pattern is replaced.

RULES:
- Only entries in COMMON_ERRORS are applied (confidence > 90%)
- Each occurrence yields one Correction with ±20 chars of context taken
  around that occurrence
- Evidence is a fixed list; there is no model behind it
- average_confidence is the rounded mean, or 0 with no corrections
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Pattern

from transcription_tools.core.ir import Correction

CONTEXT_CHARS = 20

EVIDENCE = ["Pattern recognition", "Dictionary verification", "Semantic analysis"]


@dataclass(frozen=True)
class CommonError:
    pattern: Pattern[str]
    replacement: str
    confidence: int


COMMON_ERRORS: List[CommonError] = [
    CommonError(re.compile(r"recieve", re.IGNORECASE), "receive", 95),
    CommonError(re.compile(r"defiantly", re.IGNORECASE), "definitely", 93),
    CommonError(re.compile(r"irregardless", re.IGNORECASE), "regardless", 91),
    CommonError(re.compile(r"alot", re.IGNORECASE), "a lot", 97),
    CommonError(re.compile(r"seperate", re.IGNORECASE), "separate", 94),
]


@dataclass
class RepairResult:
    """Repaired text plus the corrections and statistics behind it."""

    text: str
    total_words: int
    corrections: List[Correction] = field(default_factory=list)

    @property
    def corrections_made(self) -> int:
        return len(self.corrections)

    @property
    def average_confidence(self) -> int:
        if not self.corrections:
            return 0
        return round(sum(c.confidence for c in self.corrections) / len(self.corrections))

    def stats(self) -> dict:
        return {
            "total_words": self.total_words,
            "corrections_made": self.corrections_made,
            "average_confidence": self.average_confidence,
        }


def repair_text(text: str) -> RepairResult:
    """Apply the COMMON_ERRORS table to *text*."""
    repaired = text
    corrections: List[Correction] = []

    for error in COMMON_ERRORS:
        for match in error.pattern.finditer(repaired):
            start = max(0, match.start() - CONTEXT_CHARS)
            end = min(len(repaired), match.end() + CONTEXT_CHARS)
            corrections.append(Correction(
                original=match.group(0),
                corrected=error.replacement,
                confidence=error.confidence,
                context=repaired[start:end],
                evidence=list(EVIDENCE),
            ))
        repaired = error.pattern.sub(error.replacement, repaired)

    return RepairResult(
        text=repaired,
        total_words=len(text.split()),
        corrections=corrections,
    )
