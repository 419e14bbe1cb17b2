"""MCP tool server exposing the transcription tools over stdio.

WHY: LLM clients (Claude Desktop, IDE agents) call tools through the Model
Context Protocol. Exposing repair, log lookup, formatting, and
summarization as MCP tools lets an assistant post-process transcripts
without going through HTTP.

HOW: A FastMCP server registers one tool per operation in
transcription_tools.tools. Each tool returns plain text (formatted text,
summary) or a JSON string (repair results). Library errors are re-raised
as ToolError so the client receives an ``isError`` result carrying the
descriptive message instead of a protocol fault.

RULES:
- Tool names and parameter names are a stable client contract:
  repair_text, get_repair_log, format_transcript, summary_text
- Every tool failure surfaces as ToolError("Error: <message>")
- The session logger is shared by all tool calls in the process
- Runs on stdio: ``python -m transcription_tools mcp``
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from transcription_tools import tools
from transcription_tools.audit import SessionLogger
from transcription_tools.config import DEFAULT_LINE_GAP, DEFAULT_PARAGRAPH_GAP
from transcription_tools.errors import TranscriptionToolsError

logger = logging.getLogger(__name__)

session_logger = SessionLogger()

mcp = FastMCP(
    name="transcription-tools",
    instructions=(
        "Tools for transcript post-processing: repair common transcription "
        "errors, format timestamped transcripts into readable text, and "
        "produce constrained extractive summaries."
    ),
)


def _tool_error(exc: Exception) -> ToolError:
    return ToolError("Error: {}".format(exc))


@mcp.tool()
def repair_text(input_text: str, is_file_path: bool = False) -> str:
    """Analyzes and repairs transcription errors with greater than 90% confidence.

    Args:
        input_text: Text content or path to file containing transcribed text.
        is_file_path: Whether input_text is a file path.

    Returns:
        JSON with output_file, session_id, and corrections_made.
    """
    try:
        result = tools.repair_text(
            input_text,
            is_file_path=is_file_path,
            session_logger=session_logger,
        )
    except TranscriptionToolsError as exc:
        raise _tool_error(exc) from exc
    return json.dumps({
        "output_file": str(result.output_file),
        "session_id": result.session_id,
        "corrections_made": result.corrections_made,
    }, indent=2)


@mcp.tool()
def get_repair_log(session_id: str) -> str:
    """Retrieves the detailed analysis log from a previous repair operation.

    Args:
        session_id: Session ID returned by repair_text.

    Returns:
        JSON with log_file.
    """
    try:
        result = tools.get_repair_log(session_id, session_logger=session_logger)
    except TranscriptionToolsError as exc:
        raise _tool_error(exc) from exc
    return json.dumps({"log_file": str(result.log_file)}, indent=2)


@mcp.tool()
def format_transcript(
    input_text: str,
    is_file_path: bool = False,
    paragraph_gap: float = DEFAULT_PARAGRAPH_GAP,
    line_gap: float = DEFAULT_LINE_GAP,
) -> str:
    """Transforms timestamped transcripts into naturally formatted text.

    Args:
        input_text: Timestamped transcript text or path to file.
        is_file_path: Whether input_text is a file path.
        paragraph_gap: Seconds gap for paragraph breaks.
        line_gap: Seconds gap for line breaks.
    """
    try:
        result = tools.format_transcript(
            input_text,
            is_file_path=is_file_path,
            paragraph_gap=paragraph_gap,
            line_gap=line_gap,
        )
    except TranscriptionToolsError as exc:
        raise _tool_error(exc) from exc
    return result.formatted_text


@mcp.tool()
def summary_text(
    input_text: str,
    is_file_path: bool = False,
    constraint_type: Optional[str] = None,
    constraint_value: Optional[float] = None,
) -> str:
    """Generates a constrained extractive summary of a text.

    Args:
        input_text: Text to summarize or path to file.
        is_file_path: Whether input_text is a file path.
        constraint_type: One of "time" (minutes), "chars", "words", or null.
        constraint_value: Value for the specified constraint.
    """
    try:
        result = tools.summary_text(
            input_text,
            is_file_path=is_file_path,
            constraint_type=constraint_type,
            constraint_value=constraint_value,
            session_logger=session_logger,
        )
    except TranscriptionToolsError as exc:
        raise _tool_error(exc) from exc
    return result.summary


def main() -> None:
    """Run the MCP server on stdio (blocking)."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.info("Transcription tools MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
