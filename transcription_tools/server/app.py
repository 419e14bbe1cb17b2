"""FastAPI application exposing the transcription tools over HTTP.

WHY: External clients (scripts, n8n, other services) need an HTTP API to
format transcripts, summarize documents, repair common misspellings, and
look up repair logs. FastAPI provides automatic OpenAPI documentation and
request validation.

HOW: One endpoint per operation in transcription_tools.tools, grouped by
tags. Request bodies are validated by the Pydantic models in
server/models.py. Library errors are turned into ErrorResponse bodies by a
single exception handler, so a failed call always returns a structured
result rather than a server fault.

RULES:
- All endpoints have OpenAPI descriptions and documented error responses
- InputResolutionError → 404, MalformedInputError → 422,
  PersistenceError → 500
- The session logger is a module-level singleton created at import
- /repair writes only inside output_dir (REPAIR_OUTPUT_DIR); clients
  supply a bare file name, never a path
- Handlers are plain ``def``: the operations do blocking file I/O, so
  FastAPI runs them in its threadpool
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from transcription_tools import __version__, tools
from transcription_tools.audit import SessionLogger
from transcription_tools.config import (
    API_HOST,
    API_PORT,
    REPAIR_OUTPUT_DIR,
    REPAIR_OUTPUT_FILE,
)
from transcription_tools.errors import (
    InputResolutionError,
    MalformedInputError,
    PersistenceError,
    TranscriptionToolsError,
)
from transcription_tools.server.models import (
    ErrorResponse,
    FormatRequest,
    FormatResponse,
    HealthResponse,
    RepairLogResponse,
    RepairRequest,
    RepairResponse,
    SummaryRequest,
    SummaryResponse,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and logger setup
# ---------------------------------------------------------------------------

session_logger = SessionLogger()

# Repaired files are only ever written inside this directory
output_dir = REPAIR_OUTPUT_DIR

app = FastAPI(
    title="Transcription Tools API",
    description=(
        "REST API for transcript post-processing: turn timestamped "
        "transcripts into formatted prose, produce constrained extractive "
        "summaries, and repair common transcription misspellings."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_ERROR_STATUS = (
    (InputResolutionError, 404),
    (MalformedInputError, 422),
    (PersistenceError, 500),
)


def _status_for(exc: TranscriptionToolsError) -> int:
    for error_cls, status_code in _ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code
    return 500


@app.exception_handler(TranscriptionToolsError)
async def _handle_tool_error(request: Request, exc: TranscriptionToolsError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    body = ErrorResponse(detail=str(exc), error=type(exc).__name__)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# Endpoints: Formatting
# ---------------------------------------------------------------------------


@app.post(
    "/format",
    response_model=FormatResponse,
    tags=["formatting"],
    summary="Format a timestamped transcript",
    description=(
        "Transforms `[HH:MM:SS] text` lines into naturally formatted text. "
        "Gaps above paragraph_gap seconds become blank lines, gaps above "
        "line_gap seconds become line breaks, smaller gaps join with a space."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Input file not found"},
        422: {"model": ErrorResponse, "description": "Empty transcript or invalid parameters"},
    },
)
def format_transcript(request: FormatRequest) -> FormatResponse:
    result = tools.format_transcript(
        request.input_text,
        is_file_path=request.is_file_path,
        paragraph_gap=request.paragraph_gap,
        line_gap=request.line_gap,
    )
    return FormatResponse(formatted_text=result.formatted_text)


# ---------------------------------------------------------------------------
# Endpoints: Summarization
# ---------------------------------------------------------------------------


@app.post(
    "/summary",
    response_model=SummaryResponse,
    tags=["summarization"],
    summary="Summarize a document",
    description=(
        "Selects the highest-scoring sentences that fit the constraint "
        "(reading time in minutes at 150 words/minute, characters, or "
        "words; default 30% of the original words) and returns them in "
        "document order."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Input file not found"},
        422: {"model": ErrorResponse, "description": "Empty document or no sentences"},
        500: {"model": ErrorResponse, "description": "Audit log could not be written"},
    },
)
def summarize_document(request: SummaryRequest) -> SummaryResponse:
    result = tools.summary_text(
        request.input_text,
        is_file_path=request.is_file_path,
        constraint_type=request.constraint_type.value if request.constraint_type else None,
        constraint_value=request.constraint_value,
        session_logger=session_logger,
    )
    return SummaryResponse(summary=result.summary, session_id=result.session_id)


# ---------------------------------------------------------------------------
# Endpoints: Repair
# ---------------------------------------------------------------------------


@app.post(
    "/repair",
    response_model=RepairResponse,
    tags=["repair"],
    summary="Repair common transcription errors",
    description=(
        "Applies a fixed table of high-confidence (>90%) misspelling fixes, "
        "writes the repaired text to a file, and records a repair log."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Input file not found"},
        422: {"model": ErrorResponse, "description": "output_file is not a bare file name"},
        500: {"model": ErrorResponse, "description": "Output or log file could not be written"},
    },
)
def repair_document(request: RepairRequest) -> RepairResponse:
    result = tools.repair_text(
        request.input_text,
        is_file_path=request.is_file_path,
        output_file=output_dir / (request.output_file or Path(REPAIR_OUTPUT_FILE).name),
        session_logger=session_logger,
    )
    return RepairResponse(
        output_file=str(result.output_file),
        session_id=result.session_id,
        corrections_made=result.corrections_made,
    )


@app.get(
    "/repairs/{session_id}/log",
    response_model=RepairLogResponse,
    tags=["repair"],
    summary="Locate a repair log",
    description="Returns the path of the audit log written by a previous repair.",
    responses={
        404: {"model": ErrorResponse, "description": "No log for this session"},
        422: {"model": ErrorResponse, "description": "Invalid session id"},
    },
)
def get_repair_log(session_id: str) -> RepairLogResponse:
    result = tools.get_repair_log(session_id, session_logger=session_logger)
    return RepairLogResponse(log_file=str(result.log_file))


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: str = API_HOST, port: int = API_PORT) -> None:
    """Serve the app with uvicorn (blocking)."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)
