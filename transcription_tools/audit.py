"""Per-session audit logs for summary and repair operations.

WHY: Summary and repair runs leave an audit trail so a caller can later
look up what was changed (repair) or which constraint was applied
(summary). Each run is one session with its own log record.

HOW: SessionLogger hands out session ids from an injectable id source
(UUID4 hex by default), builds fixed-schema JSON records, validates them
with jsonschema, and writes them under ``<log_dir>/summary/`` or
``<log_dir>/repairs/`` as ``<session_id>.log``.

RULES:
- Session ids are unique per invocation, not per wall-clock second
- Session ids must match [A-Za-z0-9_-]+ (they become file names)
- Records are validated before writing; invalid records are never written
- Process-tracking fields are static descriptive content, not analytics
- Any validation or write failure raises PersistenceError
- Logs are write-only for the pipelines; only get_repair_log reads paths
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import jsonschema

from transcription_tools.config import LOG_DIR
from transcription_tools.core.content import write_text_file
from transcription_tools.core.ir import Correction
from transcription_tools.errors import InputResolutionError, MalformedInputError, PersistenceError

logger = logging.getLogger(__name__)

SUMMARY_SUBDIR = "summary"
REPAIR_SUBDIR = "repairs"

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")

PRIMING_FACTORS = [
    "Document length analysis",
    "Content type recognition",
    "Terminological evaluation",
    "Priority patterns identified",
]
EXPANSION_ITERATIONS = 3
RECURSIVE_OPTIMIZATIONS = 2

# ---------------------------------------------------------------------------
# Record schemas
# ---------------------------------------------------------------------------

_NUMBER_OR_NULL = {"type": ["number", "null"]}

SUMMARY_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["session_id", "kind", "created_at", "process_tracking", "constraint"],
    "properties": {
        "session_id": {"type": "string", "pattern": _SESSION_ID_RE.pattern},
        "kind": {"const": "summary"},
        "created_at": {"type": "string"},
        "process_tracking": {
            "type": "object",
            "required": [
                "priming_factors",
                "comprehension_metrics",
                "context_maps",
                "expansion_iterations",
                "recursive_optimizations",
            ],
            "properties": {
                "priming_factors": {"type": "array", "items": {"type": "string"}},
                "comprehension_metrics": {
                    "type": "object",
                    "required": [
                        "core_theme_count",
                        "relationship_nodes",
                        "causal_chains",
                        "hierarchy_levels",
                    ],
                    "additionalProperties": {"type": "integer"},
                },
                "context_maps": {"type": "object"},
                "expansion_iterations": {"type": "integer"},
                "recursive_optimizations": {"type": "integer"},
            },
        },
        "constraint": {
            "type": "object",
            "required": ["type", "target", "achieved"],
            "properties": {
                "type": {"enum": ["time", "chars", "words", "default"]},
                "target": _NUMBER_OR_NULL,
                "achieved": {"type": "number"},
            },
            "additionalProperties": False,
        },
    },
}

REPAIR_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["session_id", "kind", "created_at", "source", "corrections", "summary"],
    "properties": {
        "session_id": {"type": "string", "pattern": _SESSION_ID_RE.pattern},
        "kind": {"const": "repair"},
        "created_at": {"type": "string"},
        "source": {"type": "string"},
        "corrections": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["original", "corrected", "confidence", "context", "evidence"],
                "properties": {
                    "original": {"type": "string"},
                    "corrected": {"type": "string"},
                    "confidence": {"type": "integer", "minimum": 0, "maximum": 100},
                    "context": {"type": "string"},
                    "evidence": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
        "summary": {
            "type": "object",
            "required": ["total_words", "corrections_made", "average_confidence"],
            "additionalProperties": {"type": "integer"},
        },
    },
}


def build_process_tracking(text: str, sentence_count: int) -> Dict[str, Any]:
    """Build the static process-tracking block of a summary record.

    Only the paragraph and sentence counts come from the document; the
    remaining fields are fixed descriptive labels.
    """
    paragraphs = re.split(r"\n\n+", text)
    return {
        "priming_factors": list(PRIMING_FACTORS),
        "comprehension_metrics": {
            "core_theme_count": min(5, len(paragraphs)),
            "relationship_nodes": len(paragraphs) * 2,
            "causal_chains": len(paragraphs) // 2,
            "hierarchy_levels": 3,
        },
        "context_maps": {
            "semantic_units": sentence_count,
            "density_evaluation": "Completed",
            "dependency_graph": "Generated",
            "narrative_threads": "Mapped",
        },
        "expansion_iterations": EXPANSION_ITERATIONS,
        "recursive_optimizations": RECURSIVE_OPTIMIZATIONS,
    }


def _uuid_session_id() -> str:
    return uuid.uuid4().hex


def validate_session_id(session_id: str) -> str:
    """Reject session ids that are unsafe to use as file names."""
    if not _SESSION_ID_RE.fullmatch(session_id or ""):
        raise MalformedInputError(
            "Invalid session id: {!r}".format(session_id),
            context={"allowed": "letters, digits, '_' and '-'"},
        )
    return session_id


class SessionLogger:
    """Writes per-session audit records to a log directory.

    RULES:
    - log_dir: base directory; defaults to config.LOG_DIR
    - id_source: zero-argument callable returning a new session id
    """

    def __init__(
        self,
        log_dir: Union[str, Path, None] = None,
        id_source: Optional[Callable[[], str]] = None,
    ) -> None:
        self.log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
        self._id_source = id_source or _uuid_session_id

    def new_session_id(self) -> str:
        return validate_session_id(self._id_source())

    def _log_path(self, subdir: str, session_id: str) -> Path:
        return self.log_dir / subdir / "{}.log".format(validate_session_id(session_id))

    def _write(self, path: Path, record: Dict[str, Any], schema: Dict[str, Any]) -> Path:
        try:
            jsonschema.validate(instance=record, schema=schema)
        except jsonschema.ValidationError as exc:
            raise PersistenceError(
                "Audit record failed validation: {}".format(exc.message),
                context={"session_id": record.get("session_id")},
            ) from exc

        try:
            write_text_file(path, json.dumps(record, indent=2, ensure_ascii=False) + "\n")
        except OSError as exc:
            raise PersistenceError(
                "Failed to write log file {}: {}".format(path, exc),
                context={"session_id": record.get("session_id")},
            ) from exc

        logger.info("Wrote %s log for session %s", record["kind"], record["session_id"])
        return path

    def record_summary(
        self,
        session_id: str,
        constraint: Dict[str, Any],
        process_tracking: Dict[str, Any],
    ) -> Path:
        """Write the audit record of one summary run.

        Args:
            session_id: Id from new_session_id().
            constraint: ``{"type", "target", "achieved"}``.
            process_tracking: Block from build_process_tracking().

        Returns:
            Path of the written log file.
        """
        record = {
            "session_id": session_id,
            "kind": "summary",
            "created_at": _now_iso(),
            "process_tracking": process_tracking,
            "constraint": constraint,
        }
        return self._write(self._log_path(SUMMARY_SUBDIR, session_id), record, SUMMARY_RECORD_SCHEMA)

    def record_repair(
        self,
        session_id: str,
        source: str,
        corrections: List[Correction],
        stats: Dict[str, int],
    ) -> Path:
        """Write the audit record of one repair run."""
        record = {
            "session_id": session_id,
            "kind": "repair",
            "created_at": _now_iso(),
            "source": source,
            "corrections": [asdict(c) for c in corrections],
            "summary": stats,
        }
        return self._write(self._log_path(REPAIR_SUBDIR, session_id), record, REPAIR_RECORD_SCHEMA)

    def repair_log_path(self, session_id: str) -> Path:
        """Return the path of an existing repair log.

        Raises:
            MalformedInputError: If the session id is unsafe.
            InputResolutionError: If no log exists for the session.
        """
        path = self._log_path(REPAIR_SUBDIR, session_id)
        if not path.is_file():
            raise InputResolutionError(
                "Repair log not found for session {}".format(session_id),
                context={"path": str(path)},
            )
        return path


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
