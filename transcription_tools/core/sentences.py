"""Sentence extraction and heuristic importance scoring.

WHY: Extractive summarization ranks whole sentences. Without a language
model the only cheap signals are where a sentence sits (openings tend to
state the topic) and how much it says (very short sentences are usually
filler).

HOW: extract_sentences finds every run of non-terminator characters that
ends in one or more of ``.``, ``!``, ``?``. score_sentences assigns each a
fixed-weight composite of a position score and a capped length score.

RULES:
- A sentence is ``[^.!?]+[.!?]+``; trailing text with no terminator is
  not a sentence
- positionScore = 1 - i / N
- lengthScore = min(1, len(text) / 100), where text is the trimmed
  sentence; the whitespace between sentences is not counted, so a
  sentence scores the same wherever it sits in the document
- Budgets measure the same trimmed text (Budget.measure)
- score = 0.7 * positionScore + 0.3 * lengthScore
- Weights and the 100-char cap are fixed, not configurable
"""

from __future__ import annotations

import re
from typing import List

from transcription_tools.core.ir import Sentence

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")

POSITION_WEIGHT = 0.7
LENGTH_WEIGHT = 0.3
LENGTH_CAP_CHARS = 100


def extract_sentences(text: str) -> List[Sentence]:
    """Split *text* into terminator-delimited sentences in document order."""
    return [
        Sentence(
            text=match.group(0).strip(),
            index=index,
            start=match.start(),
            end=match.end(),
        )
        for index, match in enumerate(_SENTENCE_RE.finditer(text))
    ]


def position_score(index: int, total: int) -> float:
    return 1 - (index / total)


def length_score(sentence: Sentence) -> float:
    return min(1.0, sentence.char_count / LENGTH_CAP_CHARS)


def score_sentences(sentences: List[Sentence]) -> List[Sentence]:
    """Set the composite importance score on each sentence.

    Scores are written in place; the same list is returned for chaining.
    """
    total = len(sentences)
    for sentence in sentences:
        sentence.score = (
            POSITION_WEIGHT * position_score(sentence.index, total)
            + LENGTH_WEIGHT * length_score(sentence)
        )
    return sentences
