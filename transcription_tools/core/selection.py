"""Budget resolution, greedy sentence selection, and order restoration.

WHY: A summary must fit a caller's constraint (a reading time, a
character count, or a word count) while keeping the most important
sentences and reading naturally. This module turns the constraint into a
numeric budget, picks sentences greedily by score, and puts the picks back
into document order.

HOW:
  resolve_budget   — constraint + document size → Budget (value, unit)
  select_sentences — score-ordered greedy fill up to the budget
  restore_order    — sort picks by carried index and join with spaces
  summarize        — extract → score → resolve → select → restore

RULES:
- TIME: value * 150 / 60 words; CHARS: value chars; WORDS: value words
- No value (or DEFAULT): 0.3 of total words (0.3 of total chars for CHARS)
- Ranking: score descending, ties by ascending index
- Accept while accumulated + candidate <= budget; stop at the first miss
- If the top candidate alone exceeds the budget, it is returned alone
- No backtracking; selection is greedy, not optimal
- Output order is document order, never ranking order
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from transcription_tools.core.ir import Budget, Constraint, ConstraintType, Sentence
from transcription_tools.core.sentences import extract_sentences, score_sentences
from transcription_tools.errors import MalformedInputError

logger = logging.getLogger(__name__)

# Assumed speaking rate used to convert a reading time into words.
WORDS_PER_MINUTE = 150

# Fraction of the document kept when no explicit target is given.
DEFAULT_SUMMARY_RATIO = 0.3


def count_words(text: str) -> int:
    return len(text.split())


def resolve_budget(constraint: Constraint, total_words: int, total_chars: int) -> Budget:
    """Resolve a constraint into a numeric budget for a document.

    Args:
        constraint: Requested constraint type and optional value.
        total_words: Whitespace-separated token count of the document.
        total_chars: Character length of the document.

    Returns:
        Budget measured in characters for CHARS constraints, words otherwise.
    """
    kind = constraint.type
    value = constraint.value

    if kind == ConstraintType.CHARS:
        target = value if value is not None else total_chars * DEFAULT_SUMMARY_RATIO
        return Budget(value=target, unit="chars")

    if kind == ConstraintType.TIME and value is not None:
        return Budget(value=value * WORDS_PER_MINUTE / 60, unit="words")

    if kind == ConstraintType.WORDS and value is not None:
        return Budget(value=value, unit="words")

    return Budget(value=total_words * DEFAULT_SUMMARY_RATIO, unit="words")


def rank_sentences(sentences: List[Sentence]) -> List[Sentence]:
    """Order sentences by score descending, breaking ties by index."""
    return sorted(sentences, key=lambda s: (-s.score, s.index))


def select_sentences(sentences: List[Sentence], budget: Budget) -> List[Sentence]:
    """Greedily pick scored sentences until the budget is exhausted.

    Returns the picks in ranking order; pass them to restore_order for
    document order.
    """
    selected: List[Sentence] = []
    accumulated = 0

    for candidate in rank_sentences(sentences):
        length = budget.measure(candidate)
        if accumulated + length <= budget.value:
            selected.append(candidate)
            accumulated += length
        elif not selected:
            # A non-empty document always yields at least one sentence
            selected.append(candidate)
            break
        else:
            break

    return selected


def restore_order(selected: List[Sentence]) -> str:
    """Join selected sentences in original document order."""
    ordered = sorted(selected, key=lambda s: s.index)
    return " ".join(s.text for s in ordered).strip()


@dataclass
class Excerpt:
    """Result of summarizing one document.

    RULES:
    - text: the joined excerpt in document order
    - sentences: selected sentences in document order
    - budget: the resolved budget
    - achieved: total selected length in the budget's unit
    - sentence_count: number of sentences found in the document
    """

    text: str
    budget: Budget
    achieved: int
    sentence_count: int
    sentences: List[Sentence] = field(default_factory=list)


def summarize(text: str, constraint: Constraint) -> Excerpt:
    """Produce an extractive excerpt of *text* that honours *constraint*.

    Raises:
        MalformedInputError: If *text* is blank or contains no sentence
            terminator.
    """
    if not text.strip():
        raise MalformedInputError("Document is empty")

    sentences = score_sentences(extract_sentences(text))
    if not sentences:
        raise MalformedInputError(
            "Document contains no sentences ending in '.', '!' or '?'",
            context={"chars": len(text)},
        )

    budget = resolve_budget(constraint, count_words(text), len(text))
    selected = select_sentences(sentences, budget)
    achieved = sum(budget.measure(s) for s in selected)
    logger.debug(
        "Selected %d of %d sentences (%d/%.1f %s)",
        len(selected), len(sentences), achieved, budget.value, budget.unit,
    )

    return Excerpt(
        text=restore_order(selected),
        budget=budget,
        achieved=achieved,
        sentence_count=len(sentences),
        sentences=sorted(selected, key=lambda s: s.index),
    )
