"""Gap classification and text assembly for timestamped transcripts.

WHY: A timestamped transcript has no paragraphing. Pauses in speech are
the only structural signal. Long pauses usually mark a topic change, short
pauses a new thought, and tiny gaps are mid-sentence. Turning gaps into
blank lines, line breaks, and spaces gives readable prose without touching
a single transcribed word.

HOW: classify_gap maps one gap to a BreakCategory using two thresholds in
priority order. assemble_text walks the segments, emits the first one
verbatim, and prefixes every later one with the separator of its gap's
category.

RULES:
- gap = segment.time - previous segment.time (may be zero or negative)
- gap > paragraph_gap → PARAGRAPH ("\\n\\n")
- else gap > line_gap → LINE ("\\n")
- else → INLINE (" "), whatever the punctuation or capitalization
- The first segment has no leading separator
- Segment text is never modified
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from transcription_tools.config import DEFAULT_LINE_GAP, DEFAULT_PARAGRAPH_GAP
from transcription_tools.core.ir import BreakCategory, Segment
from transcription_tools.core.segments import parse_segments

logger = logging.getLogger(__name__)


def classify_gap(
    gap: float,
    paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
    line_gap: float = DEFAULT_LINE_GAP,
) -> BreakCategory:
    """Classify the pause between two segments.

    Non-positive gaps (out-of-order or repeated timestamps) fall through
    to INLINE like any other small gap.
    """
    if gap > paragraph_gap:
        return BreakCategory.PARAGRAPH
    if gap > line_gap:
        return BreakCategory.LINE
    return BreakCategory.INLINE


def assemble_text(
    segments: Iterable[Segment],
    paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
    line_gap: float = DEFAULT_LINE_GAP,
) -> str:
    """Join segments into one string, inserting breaks by timestamp gap.

    Args:
        segments: Segments in document order.
        paragraph_gap: Seconds above which a blank line is inserted.
        line_gap: Seconds above which a single newline is inserted.

    Returns:
        The reconstructed text. Empty string for no segments.
    """
    parts: List[str] = []
    last_time = None

    for segment in segments:
        if last_time is None:
            parts.append(segment.text)
        else:
            category = classify_gap(segment.time - last_time, paragraph_gap, line_gap)
            # Inline joins are a plain space even after "," / "." or before a
            # lowercase word; smarter joining was never specified.
            parts.append(category.separator)
            parts.append(segment.text)
        last_time = segment.time

    return "".join(parts)


def format_timestamped_text(
    text: str,
    paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
    line_gap: float = DEFAULT_LINE_GAP,
) -> str:
    """Parse a raw timestamped transcript and assemble it into prose."""
    segments = parse_segments(text)
    logger.debug(
        "Assembling %d segments (paragraph_gap=%s, line_gap=%s)",
        len(segments), paragraph_gap, line_gap,
    )
    return assemble_text(segments, paragraph_gap, line_gap)
