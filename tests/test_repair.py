"""Unit tests for the fixed-dictionary repair table.

WHY: Repair edits user text. It must fix exactly the table's misspellings,
report one correction per occurrence, and leave everything else alone.

HOW: Tests check each table entry, case-insensitivity, per-occurrence
context, statistics, and the no-change case.
"""

import pytest

from transcription_tools.core.repair import (
    COMMON_ERRORS,
    CONTEXT_CHARS,
    EVIDENCE,
    repair_text,
)


class TestRepairTable:

    @pytest.mark.parametrize("wrong, right", [
        ("recieve", "receive"),
        ("defiantly", "definitely"),
        ("irregardless", "regardless"),
        ("alot", "a lot"),
        ("seperate", "separate"),
    ])
    def test_each_entry(self, wrong, right):
        result = repair_text("we {} it".format(wrong))
        assert result.text == "we {} it".format(right)
        assert result.corrections_made == 1

    def test_all_entries_high_confidence(self):
        assert all(error.confidence > 90 for error in COMMON_ERRORS)

    def test_case_insensitive_match(self):
        result = repair_text("Recieve it. RECIEVE it.")
        assert result.text == "receive it. receive it."
        assert [c.original for c in result.corrections] == ["Recieve", "RECIEVE"]

    def test_clean_text_unchanged(self):
        text = "Nothing here needs fixing."
        result = repair_text(text)
        assert result.text == text
        assert result.corrections == []
        assert result.average_confidence == 0


class TestCorrections:

    def test_one_correction_per_occurrence(self):
        result = repair_text("alot of work and alot of fun")
        assert result.corrections_made == 2
        assert result.text == "a lot of work and a lot of fun"

    def test_context_taken_around_each_occurrence(self):
        prefix = "x" * 30
        text = "recieve at the start " + prefix + " then recieve again"
        result = repair_text(text)
        first, second = result.corrections
        assert first.context.startswith("recieve")
        assert second.context.endswith("recieve again")
        assert first.context != second.context

    def test_context_width(self):
        text = "a" * 40 + " seperate " + "b" * 40
        correction = repair_text(text).corrections[0]
        assert len(correction.context) == len("seperate") + 2 * CONTEXT_CHARS

    def test_evidence_is_fixed_list(self):
        correction = repair_text("defiantly").corrections[0]
        assert correction.evidence == EVIDENCE
        assert correction.evidence is not EVIDENCE

    def test_fields(self):
        correction = repair_text("irregardless").corrections[0]
        assert correction.original == "irregardless"
        assert correction.corrected == "regardless"
        assert correction.confidence == 91


class TestStats:

    def test_average_confidence_rounded(self):
        # 95 + 93 → 94
        result = repair_text("recieve defiantly")
        assert result.average_confidence == 94

    def test_stats_dict(self):
        result = repair_text("I will recieve alot today")
        assert result.stats() == {
            "total_words": 5,
            "corrections_made": 2,
            "average_confidence": 96,
        }
