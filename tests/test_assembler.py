"""Unit tests for gap classification and text assembly.

WHY: The assembler is the only place formatting decisions are made. A
wrong threshold comparison or an altered word cascades straight into the
user's document.

HOW: Tests cover each classification rule and its boundaries,
monotonicity of break severity, token preservation, idempotence, and the
reference examples (gap 11 → paragraph, gap 3 → space).

RULES:
- Default thresholds: paragraph_gap = 8, line_gap = 4
- Comparisons are strict: a gap equal to a threshold does not cross it
"""

from collections import Counter

import pytest

from transcription_tools.core.assembler import (
    assemble_text,
    classify_gap,
    format_timestamped_text,
)
from transcription_tools.core.ir import BreakCategory, Segment


class TestClassifyGap:
    """Priority order: paragraph, then line, then inline."""

    @pytest.mark.parametrize("gap, expected", [
        (11, BreakCategory.PARAGRAPH),
        (9, BreakCategory.PARAGRAPH),
        (8, BreakCategory.LINE),
        (5, BreakCategory.LINE),
        (4, BreakCategory.INLINE),
        (0, BreakCategory.INLINE),
        (-30, BreakCategory.INLINE),
    ])
    def test_default_thresholds(self, gap, expected):
        assert classify_gap(gap) == expected

    def test_custom_thresholds(self):
        assert classify_gap(3, paragraph_gap=2, line_gap=1) == BreakCategory.PARAGRAPH
        assert classify_gap(2, paragraph_gap=2, line_gap=1) == BreakCategory.LINE

    def test_line_gap_above_paragraph_gap(self):
        """Paragraph check runs first, so it wins whenever it applies."""
        assert classify_gap(6, paragraph_gap=5, line_gap=10) == BreakCategory.PARAGRAPH
        assert classify_gap(4, paragraph_gap=5, line_gap=10) == BreakCategory.INLINE

    def test_monotonic_in_gap(self):
        categories = [classify_gap(gap) for gap in range(-5, 30)]
        assert categories == sorted(categories)

    def test_separators(self):
        assert BreakCategory.INLINE.separator == " "
        assert BreakCategory.LINE.separator == "\n"
        assert BreakCategory.PARAGRAPH.separator == "\n\n"


class TestAssembleText:

    def test_first_segment_verbatim(self):
        assert assemble_text([Segment(time=40, text="Only one.")]) == "Only one."

    def test_no_segments(self):
        assert assemble_text([]) == ""

    def test_paragraph_break_for_gap_eleven(self):
        text = format_timestamped_text(
            "[00:00:01] Hello there.\n[00:00:12] Next paragraph.",
            paragraph_gap=8,
            line_gap=4,
        )
        assert text == "Hello there.\n\nNext paragraph."

    def test_space_join_for_gap_three(self):
        text = format_timestamped_text(
            "[00:00:01] Hello there.\n[00:00:04] quick follow up.",
            paragraph_gap=8,
            line_gap=4,
        )
        assert text == "Hello there. quick follow up."
        assert "\n" not in text

    def test_line_break(self):
        segments = [Segment(time=0, text="One"), Segment(time=6, text="Two")]
        assert assemble_text(segments) == "One\nTwo"

    def test_gap_measured_from_previous_segment(self):
        segments = [
            Segment(time=0, text="a"),
            Segment(time=3, text="b"),
            Segment(time=6, text="c"),
            Segment(time=9, text="d"),
        ]
        assert assemble_text(segments) == "a b c d"

    def test_inline_join_ignores_punctuation_and_case(self):
        segments = [
            Segment(time=0, text="Ends with comma,"),
            Segment(time=1, text="lowercase start"),
            Segment(time=2, text="Capital start"),
            Segment(time=3, text="ends with period."),
            Segment(time=4, text="Next"),
        ]
        assert assemble_text(segments) == (
            "Ends with comma, lowercase start Capital start ends with period. Next"
        )

    def test_sample_transcript(self, sample_transcript):
        assert format_timestamped_text(sample_transcript) == (
            "Hello there. Thanks for joining, today we talk budgets."
            "\n\n"
            "Second topic now. continued without a timestamp and a quick follow up."
        )


class TestContentPreservation:
    """Formatting only inserts whitespace; words are never altered."""

    def test_token_multiset_preserved(self, sample_transcript):
        from transcription_tools.core.segments import parse_segments

        segments = parse_segments(sample_transcript)
        expected = Counter(tok for s in segments for tok in s.text.split())
        actual = Counter(format_timestamped_text(sample_transcript).split())
        assert actual == expected

    def test_idempotent(self, sample_transcript):
        first = format_timestamped_text(sample_transcript, paragraph_gap=5, line_gap=2)
        second = format_timestamped_text(sample_transcript, paragraph_gap=5, line_gap=2)
        assert first == second
