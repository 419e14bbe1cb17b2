"""Shared test fixtures for the transcription_tools test suite.

WHY: Several test modules need the same sample transcript, the same
ten-sentence document, and an isolated session logger. Centralizing them
here avoids duplication and keeps expected values in one place.

HOW: Pytest fixtures provide raw sample text and a SessionLogger rooted
in tmp_path with a deterministic counter id source.

RULES:
- Log files are always written under tmp_path, never the working dir
- Session ids from the counter source are "session-1", "session-2", ...
"""

from __future__ import annotations

import itertools

import pytest

from transcription_tools.audit import SessionLogger


SAMPLE_TRANSCRIPT = (
    "[00:00:01] Hello there.\n"
    "[00:00:03] Thanks for joining,\n"
    "[00:00:06] today we talk budgets.\n"
    "[00:00:20] Second topic now.\n"
    "continued without a timestamp\n"
    "[00:00:22] and a quick follow up."
)

# Ten sentences; the first few are long so the position and length
# signals both matter.
TEN_SENTENCE_DOCUMENT = (
    "The quarterly planning meeting opened with a review of the revenue numbers for every region. "
    "Sales in the northern region grew faster than expected during the spring campaign. "
    "Costs stayed flat. "
    "The team discussed hiring two more engineers for the platform group next quarter. "
    "Lunch was served. "
    "Marketing asked for a larger budget to cover the autumn trade shows. "
    "Nobody objected. "
    "The finance lead will prepare a revised forecast before the next meeting. "
    "Questions were taken. "
    "The meeting closed on time."
)


def counter_id_source(prefix: str = "session"):
    """Return an id source yielding prefix-1, prefix-2, ..."""
    counter = itertools.count(1)
    return lambda: "{}-{}".format(prefix, next(counter))


@pytest.fixture
def sample_transcript():
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def ten_sentence_document():
    return TEN_SENTENCE_DOCUMENT


@pytest.fixture
def session_logger(tmp_path):
    """SessionLogger writing under tmp_path/logs with predictable ids."""
    return SessionLogger(log_dir=tmp_path / "logs", id_source=counter_id_source())
