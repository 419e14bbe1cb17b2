"""Command-line interface for the transcription tools.

WHY: Users need a simple way to format, summarize, and repair transcripts
from the terminal, and to start the HTTP API or the MCP server. The CLI
wires the operations in transcription_tools.tools behind one command.

HOW: argparse with one subcommand per operation plus ``serve`` and
``mcp``. The positional INPUT is a file path unless ``--text`` is given,
in which case it is the document itself. Results go to stdout (or
``--output``); status messages and errors go to stderr.

RULES:
- Subcommands: format, summarize, repair, repair-log, serve, mcp
- Results to stdout so the CLI can be piped; status to stderr
- Library errors print "Error: <message>" and exit with code 1
- -v/--verbose enables INFO logging, -vv DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcription_tools import tools
from transcription_tools.audit import SessionLogger
from transcription_tools.config import (
    API_HOST,
    API_PORT,
    DEFAULT_LINE_GAP,
    DEFAULT_PARAGRAPH_GAP,
    LOG_DIR,
    REPAIR_OUTPUT_FILE,
)
from transcription_tools.core.content import write_text_file
from transcription_tools.errors import PersistenceError, TranscriptionToolsError


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _emit(text: str, output: Optional[str]) -> None:
    """Write a result to --output, or to stdout."""
    if output:
        try:
            path = write_text_file(output, text)
        except OSError as exc:
            raise PersistenceError("Failed to write file {}: {}".format(output, exc)) from exc
        _status("Saved: {}".format(path))
    else:
        print(text)


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _cmd_format(args: argparse.Namespace) -> None:
    result = tools.format_transcript(
        args.input,
        is_file_path=not args.text,
        paragraph_gap=args.paragraph_gap,
        line_gap=args.line_gap,
    )
    _status("Formatted {} segments".format(result.segment_count))
    _emit(result.formatted_text, args.output)


def _cmd_summarize(args: argparse.Namespace) -> None:
    result = tools.summary_text(
        args.input,
        is_file_path=not args.text,
        constraint_type=args.constraint,
        constraint_value=args.value,
        session_logger=SessionLogger(args.log_dir),
    )
    _status("Summary: {} of {:g} {} (session {})".format(
        result.achieved, result.target, result.unit, result.session_id,
    ))
    _emit(result.summary, args.output)


def _cmd_repair(args: argparse.Namespace) -> None:
    result = tools.repair_text(
        args.input,
        is_file_path=not args.text,
        output_file=args.output_file,
        session_logger=SessionLogger(args.log_dir),
    )
    _status("Corrections made: {} (average confidence {}%)".format(
        result.corrections_made, result.average_confidence,
    ))
    _status("Log: {}".format(result.log_file))
    print(result.output_file)
    print(result.session_id)


def _cmd_repair_log(args: argparse.Namespace) -> None:
    result = tools.get_repair_log(args.session_id, session_logger=SessionLogger(args.log_dir))
    print(result.log_file)


def _cmd_serve(args: argparse.Namespace) -> None:
    from transcription_tools.server.app import run_api
    _status("Serving API on http://{}:{}".format(args.host, args.port))
    run_api(host=args.host, port=args.port)


def _cmd_mcp(args: argparse.Namespace) -> None:
    from transcription_tools.mcp_server import main as mcp_main
    mcp_main()


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        help="Path to the input file (or the text itself with --text).",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Treat INPUT as literal text instead of a file path.",
    )


def _add_log_dir_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=LOG_DIR,
        help="Directory for session audit logs (default: %(default)s).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    any operation.
    """
    parser = argparse.ArgumentParser(
        prog="transcription_tools",
        description="Format, summarize, and repair speech transcripts.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fmt = subparsers.add_parser(
        "format",
        help="Turn a [HH:MM:SS] timestamped transcript into formatted text.",
    )
    _add_input_arguments(fmt)
    fmt.add_argument(
        "--paragraph-gap",
        type=float,
        default=DEFAULT_PARAGRAPH_GAP,
        help="Seconds gap for paragraph breaks (default: %(default)s).",
    )
    fmt.add_argument(
        "--line-gap",
        type=float,
        default=DEFAULT_LINE_GAP,
        help="Seconds gap for line breaks (default: %(default)s).",
    )
    fmt.add_argument("--output", default=None, help="Write the result to this file.")
    fmt.set_defaults(handler=_cmd_format)

    summ = subparsers.add_parser(
        "summarize",
        help="Produce a constrained extractive summary.",
    )
    _add_input_arguments(summ)
    summ.add_argument(
        "--constraint",
        choices=["time", "chars", "words"],
        default=None,
        help="Constraint type: time (minutes), chars, or words. Default: 30%% of words.",
    )
    summ.add_argument(
        "--value",
        type=float,
        default=None,
        help="Constraint value (must be positive).",
    )
    summ.add_argument("--output", default=None, help="Write the summary to this file.")
    _add_log_dir_argument(summ)
    summ.set_defaults(handler=_cmd_summarize)

    rep = subparsers.add_parser(
        "repair",
        help="Repair common transcription misspellings.",
    )
    _add_input_arguments(rep)
    rep.add_argument(
        "--output-file",
        default=REPAIR_OUTPUT_FILE,
        help="Where to write the repaired text (default: %(default)s).",
    )
    _add_log_dir_argument(rep)
    rep.set_defaults(handler=_cmd_repair)

    log = subparsers.add_parser(
        "repair-log",
        help="Print the path of a previous repair's audit log.",
    )
    log.add_argument("session_id", help="Session ID printed by the repair command.")
    _add_log_dir_argument(log)
    log.set_defaults(handler=_cmd_repair_log)

    serve = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=API_HOST, help="Bind address (default: %(default)s).")
    serve.add_argument("--port", type=int, default=API_PORT, help="Port (default: %(default)s).")
    serve.set_defaults(handler=_cmd_serve)

    mcp = subparsers.add_parser("mcp", help="Run the MCP tool server on stdio.")
    mcp.set_defaults(handler=_cmd_mcp)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    argv=None means use sys.argv; an explicit list is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        args.handler(args)
    except TranscriptionToolsError as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
