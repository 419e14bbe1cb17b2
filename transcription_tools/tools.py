"""Operations exposed by every surface: format, summarize, repair, log lookup.

WHY: The HTTP API, the MCP tool server, and the CLI all offer the same
four operations with the same parameters. Putting content resolution,
audit logging and error wrapping here keeps the surfaces thin and
consistent.

HOW: Each operation resolves ``input_text`` (literal or file path), runs
the matching core pipeline, records an audit log where the operation has
one, and returns a small result dataclass. Library errors raised inside
an operation are re-raised as the same class with an
``"<Operation> failed: ..."`` prefix.

RULES:
- format_transcript: no audit log; empty transcript → MalformedInputError
- summary_text: one summary log per call; returns the session id; an
  invalid constraint is a MalformedInputError
- repair_text: writes the repaired text and one repair log per call
- get_repair_log: read-only lookup of an existing repair log
- Errors are never swallowed; one descriptive error per failed call
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from transcription_tools.audit import SessionLogger, build_process_tracking
from transcription_tools.config import (
    DEFAULT_LINE_GAP,
    DEFAULT_PARAGRAPH_GAP,
    REPAIR_OUTPUT_FILE,
)
from transcription_tools.core import repair
from transcription_tools.core.assembler import assemble_text
from transcription_tools.core.content import resolve_text_content, write_text_file
from transcription_tools.core.ir import Constraint, ConstraintType
from transcription_tools.core.segments import parse_segments
from transcription_tools.core.selection import summarize
from transcription_tools.errors import (
    MalformedInputError,
    PersistenceError,
    TranscriptionToolsError,
)

logger = logging.getLogger(__name__)

FORMAT_OPERATION = "Formatting process"
SUMMARY_OPERATION = "Summary process"
REPAIR_OPERATION = "Repair process"
REPAIR_LOG_OPERATION = "Repair log lookup"


@contextmanager
def _operation(name: str) -> Iterator[None]:
    """Prefix library errors raised inside the block with *name*."""
    try:
        yield
    except TranscriptionToolsError as exc:
        logger.warning("%s failed: %s", name, exc)
        raise exc.with_operation(name) from exc


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class FormatResult:
    formatted_text: str
    segment_count: int


@dataclass
class SummaryResult:
    summary: str
    session_id: str
    log_file: Path
    achieved: int
    target: float
    unit: str


@dataclass
class RepairReport:
    output_file: Path
    session_id: str
    log_file: Path
    corrections_made: int
    average_confidence: int


@dataclass
class RepairLogResult:
    log_file: Path


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def format_transcript(
    input_text: str,
    is_file_path: bool = False,
    paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
    line_gap: float = DEFAULT_LINE_GAP,
) -> FormatResult:
    """Transform a timestamped transcript into naturally formatted text."""
    with _operation(FORMAT_OPERATION):
        text = resolve_text_content(input_text, is_file_path)
        segments = parse_segments(text)
        if not segments:
            raise MalformedInputError("Transcript is empty")
        formatted = assemble_text(segments, paragraph_gap, line_gap)

    logger.info("Formatted %d segments into %d chars", len(segments), len(formatted))
    return FormatResult(formatted_text=formatted, segment_count=len(segments))


def summary_text(
    input_text: str,
    is_file_path: bool = False,
    constraint_type: Union[ConstraintType, str, None] = None,
    constraint_value: Optional[float] = None,
    session_logger: Optional[SessionLogger] = None,
) -> SummaryResult:
    """Produce a constrained extractive summary and record its audit log."""
    session_logger = session_logger or SessionLogger()

    with _operation(SUMMARY_OPERATION):
        try:
            constraint = Constraint.from_params(constraint_type, constraint_value)
        except ValueError as exc:
            raise MalformedInputError(
                "Invalid constraint: {}".format(exc),
                context={"constraint_type": constraint_type, "constraint_value": constraint_value},
            ) from exc
        text = resolve_text_content(input_text, is_file_path)
        excerpt = summarize(text, constraint)

        session_id = session_logger.new_session_id()
        log_file = session_logger.record_summary(
            session_id,
            constraint={
                "type": constraint.type.value,
                "target": constraint.value,
                "achieved": excerpt.achieved,
            },
            process_tracking=build_process_tracking(text, excerpt.sentence_count),
        )

    logger.info(
        "Summary session %s: %d sentences, %d/%.1f %s",
        session_id, len(excerpt.sentences), excerpt.achieved,
        excerpt.budget.value, excerpt.budget.unit,
    )
    return SummaryResult(
        summary=excerpt.text,
        session_id=session_id,
        log_file=log_file,
        achieved=excerpt.achieved,
        target=excerpt.budget.value,
        unit=excerpt.budget.unit,
    )


def repair_text(
    input_text: str,
    is_file_path: bool = False,
    output_file: Union[str, Path, None] = None,
    session_logger: Optional[SessionLogger] = None,
) -> RepairReport:
    """Fix common transcription misspellings and write the repaired text."""
    session_logger = session_logger or SessionLogger()
    output_path = Path(output_file) if output_file is not None else Path(REPAIR_OUTPUT_FILE)

    with _operation(REPAIR_OPERATION):
        text = resolve_text_content(input_text, is_file_path)
        result = repair.repair_text(text)

        try:
            write_text_file(output_path, result.text)
        except OSError as exc:
            raise PersistenceError(
                "Failed to write file {}: {}".format(output_path, exc),
                context={"path": str(output_path)},
            ) from exc

        session_id = session_logger.new_session_id()
        log_file = session_logger.record_repair(
            session_id,
            source=input_text if is_file_path else "direct_input",
            corrections=result.corrections,
            stats=result.stats(),
        )

    return RepairReport(
        output_file=output_path,
        session_id=session_id,
        log_file=log_file,
        corrections_made=result.corrections_made,
        average_confidence=result.average_confidence,
    )


def get_repair_log(
    session_id: str,
    session_logger: Optional[SessionLogger] = None,
) -> RepairLogResult:
    """Locate the audit log of a previous repair_text call."""
    session_logger = session_logger or SessionLogger()
    with _operation(REPAIR_LOG_OPERATION):
        return RepairLogResult(log_file=session_logger.repair_log_path(session_id))
