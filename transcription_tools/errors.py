"""Exception hierarchy for transcription tool operations.

WHY: Callers (HTTP API, MCP server, CLI) need to tell "the input could not
be read" apart from "the input was read but is unusable" so they can map
each failure to the right status code or message.

HOW: Every error carries a human-readable message plus an optional context
dict. ``with_operation`` produces a copy of the same class whose message
is prefixed with the failing operation, so wrapping never changes the kind.

RULES:
- All library errors inherit from TranscriptionToolsError
- Wrapping preserves the exception class and context
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional


class TranscriptionToolsError(Exception):
    """Base exception for all transcription tool errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join("{}={}".format(k, v) for k, v in self.context.items())
            return "{} ({})".format(self.message, ctx_str)
        return self.message

    def with_operation(self, operation: str) -> "TranscriptionToolsError":
        """Return a copy of this error tagged with the failing operation.

        The copy has the same class and context; only the message changes,
        e.g. ``"Summary process failed: Document contains no sentences"``.
        """
        wrapped = copy.copy(self)
        wrapped.message = "{} failed: {}".format(operation, self.message)
        wrapped.args = (wrapped.message,)
        wrapped.context = dict(self.context)
        return wrapped


class InputResolutionError(TranscriptionToolsError):
    """Raised when the source text, file, or a stored log cannot be reached."""


class MalformedInputError(TranscriptionToolsError):
    """Raised when input was read but cannot be processed.

    Covers empty documents, documents with no extractable sentences, and
    identifiers that are unsafe to use as file names.
    """


class PersistenceError(TranscriptionToolsError):
    """Raised when an audit record or output file cannot be persisted.

    Also covers audit records that fail their JSON Schema before writing.
    """
