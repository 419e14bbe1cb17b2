"""Timestamped transcript line parsing.

WHY: Speech-to-text exports arrive as lines like ``[00:01:12] and then
we``. The formatter needs each line's absolute offset in seconds and its
text, with untagged lines folded into the preceding segment so nothing is
lost.

HOW: Each line is matched against the bracketed ``[HH:MM:SS]`` prefix.
A match starts a new Segment; anything else is continuation text for the
previous Segment, or a time-0 Segment when there is none yet.

RULES:
- Timestamp pattern: ``[HH:MM:SS]`` with two digits per field, at the
  start of the line (leading whitespace allowed)
- time = h * 3600 + m * 60 + s
- Segment text is trimmed
- Untagged lines are space-joined onto the previous segment
- Blank lines carry no text and are skipped
- Never raises; malformed timestamps become continuation text
"""

from __future__ import annotations

import re
from typing import List

from transcription_tools.core.ir import Segment

# Bracketed timestamp at the start of a line, followed by the spoken text.
_TIMESTAMP_RE = re.compile(r"^\s*\[(\d{2}):(\d{2}):(\d{2})\]\s*(.*)$")


def parse_timestamp(hours: str, minutes: str, seconds: str) -> int:
    """Convert HH, MM, SS digit strings to an absolute second offset."""
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds)


def parse_segments(text: str) -> List[Segment]:
    """Parse a timestamped transcript into an ordered list of Segments.

    Args:
        text: Raw transcript text, one timestamped line per utterance.

    Returns:
        Segments in document order. Empty when *text* is blank.
    """
    segments: List[Segment] = []

    for line in text.strip().splitlines():
        match = _TIMESTAMP_RE.match(line)
        if match:
            hours, minutes, seconds, spoken = match.groups()
            segments.append(Segment(
                time=parse_timestamp(hours, minutes, seconds),
                text=spoken.strip(),
            ))
            continue

        continuation = line.strip()
        if not continuation:
            continue

        if segments:
            previous = segments[-1]
            previous.text = "{} {}".format(previous.text, continuation) if previous.text else continuation
        else:
            segments.append(Segment(time=0, text=continuation))

    return segments
