"""Unit tests for session ids and audit log records.

WHY: Audit logs are the only persistent output besides repaired files. A
record that collides with another session, escapes its directory, or
breaks its schema is worse than no record.

HOW: Tests use the tmp_path-rooted session_logger fixture and inspect the
written JSON directly.
"""

import json

import pytest

from transcription_tools.audit import (
    REPAIR_SUBDIR,
    SUMMARY_SUBDIR,
    SessionLogger,
    build_process_tracking,
    validate_session_id,
)
from transcription_tools.core.ir import Correction
from transcription_tools.errors import (
    InputResolutionError,
    MalformedInputError,
    PersistenceError,
)


def _correction():
    return Correction(
        original="alot",
        corrected="a lot",
        confidence=97,
        context="did alot today",
        evidence=["Pattern recognition"],
    )


class TestSessionIds:

    def test_default_ids_are_unique(self, tmp_path):
        logger = SessionLogger(log_dir=tmp_path)
        ids = {logger.new_session_id() for _ in range(50)}
        assert len(ids) == 50

    def test_injected_source(self, session_logger):
        assert session_logger.new_session_id() == "session-1"
        assert session_logger.new_session_id() == "session-2"

    @pytest.mark.parametrize("bad", ["", "../escape", "a/b", "with space", "dot.log", "trailing\n"])
    def test_unsafe_ids_rejected(self, bad):
        with pytest.raises(MalformedInputError):
            validate_session_id(bad)

    def test_safe_id_accepted(self):
        assert validate_session_id("abc_DEF-123") == "abc_DEF-123"


class TestSummaryRecord:

    def test_written_under_summary_dir(self, session_logger):
        path = session_logger.record_summary(
            "session-1",
            constraint={"type": "words", "target": 20, "achieved": 16},
            process_tracking=build_process_tracking("One. Two.", 2),
        )
        assert path == session_logger.log_dir / SUMMARY_SUBDIR / "session-1.log"
        record = json.loads(path.read_text(encoding="utf-8"))
        assert record["kind"] == "summary"
        assert record["constraint"] == {"type": "words", "target": 20, "achieved": 16}
        assert record["process_tracking"]["context_maps"]["semantic_units"] == 2

    def test_default_constraint_has_null_target(self, session_logger):
        path = session_logger.record_summary(
            "session-1",
            constraint={"type": "default", "target": None, "achieved": 4},
            process_tracking=build_process_tracking("One.", 1),
        )
        record = json.loads(path.read_text(encoding="utf-8"))
        assert record["constraint"]["target"] is None

    def test_invalid_record_not_written(self, session_logger):
        with pytest.raises(PersistenceError, match="failed validation"):
            session_logger.record_summary(
                "session-1",
                constraint={"type": "pages", "target": 1, "achieved": 1},
                process_tracking=build_process_tracking("One.", 1),
            )
        assert not (session_logger.log_dir / SUMMARY_SUBDIR / "session-1.log").exists()

    def test_unwritable_log_dir(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        logger = SessionLogger(log_dir=blocker)
        with pytest.raises(PersistenceError, match="Failed to write log file"):
            logger.record_summary(
                "session-1",
                constraint={"type": "default", "target": None, "achieved": 1},
                process_tracking=build_process_tracking("One.", 1),
            )


class TestProcessTracking:

    def test_paragraph_metrics(self):
        tracking = build_process_tracking("First para.\n\nSecond para.\n\n\nThird.", 3)
        metrics = tracking["comprehension_metrics"]
        assert metrics["core_theme_count"] == 3
        assert metrics["relationship_nodes"] == 6
        assert metrics["causal_chains"] == 1
        assert metrics["hierarchy_levels"] == 3

    def test_core_theme_count_capped(self):
        text = "\n\n".join("Para {}.".format(i) for i in range(9))
        tracking = build_process_tracking(text, 9)
        assert tracking["comprehension_metrics"]["core_theme_count"] == 5


class TestRepairRecord:

    def test_record_contents(self, session_logger):
        path = session_logger.record_repair(
            "session-1",
            source="direct_input",
            corrections=[_correction()],
            stats={"total_words": 3, "corrections_made": 1, "average_confidence": 97},
        )
        assert path.parent.name == REPAIR_SUBDIR
        record = json.loads(path.read_text(encoding="utf-8"))
        assert record["source"] == "direct_input"
        assert record["corrections"][0]["corrected"] == "a lot"
        assert record["summary"]["corrections_made"] == 1

    def test_lookup_existing_log(self, session_logger):
        written = session_logger.record_repair(
            "session-7",
            source="notes.txt",
            corrections=[],
            stats={"total_words": 0, "corrections_made": 0, "average_confidence": 0},
        )
        assert session_logger.repair_log_path("session-7") == written

    def test_lookup_missing_log(self, session_logger):
        with pytest.raises(InputResolutionError, match="Repair log not found for session ghost"):
            session_logger.repair_log_path("ghost")

    def test_lookup_unsafe_id(self, session_logger):
        with pytest.raises(MalformedInputError):
            session_logger.repair_log_path("../../etc/passwd")
