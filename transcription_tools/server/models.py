"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint pair (request + response) has its own model. The
constraint type is an Enum so only supported kinds are accepted. All
models include Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Request field names match the tool parameter names exactly
- Gap thresholds are non-negative; constraint values are positive
- RepairRequest.output_file is a bare file name; any path is a 422
- ErrorResponse is the single error body shape for every endpoint
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from transcription_tools.config import DEFAULT_LINE_GAP, DEFAULT_PARAGRAPH_GAP


class SummaryConstraintType(str, Enum):
    """Constraint kinds a summary request may name.

    RULES:
    - Values match transcription_tools.core.ir.ConstraintType
    - Omitting constraint_type means the default 30% word budget
    """

    time = "time"
    chars = "chars"
    words = "words"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TextInput(BaseModel):
    """Fields shared by every text-processing request."""

    input_text: str = Field(
        description="Text content, or a path to a file when is_file_path is true.",
    )
    is_file_path: bool = Field(
        default=False,
        description="Whether input_text is a file path.",
    )


class FormatRequest(TextInput):
    """Request body for POST /format."""

    paragraph_gap: float = Field(
        default=DEFAULT_PARAGRAPH_GAP,
        ge=0,
        description="Seconds gap above which a paragraph break is inserted.",
    )
    line_gap: float = Field(
        default=DEFAULT_LINE_GAP,
        ge=0,
        description="Seconds gap above which a line break is inserted.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "input_text": "[00:00:01] Hello there.\n[00:00:12] Next paragraph.",
                "is_file_path": False,
                "paragraph_gap": 8,
                "line_gap": 4,
            }
        ]
    }}


class SummaryRequest(TextInput):
    """Request body for POST /summary."""

    constraint_type: Optional[SummaryConstraintType] = Field(
        default=None,
        description="Type of constraint to apply (time in minutes, chars, or words).",
    )
    constraint_value: Optional[float] = Field(
        default=None,
        gt=0,
        description="Value for the specified constraint. Omit for 30% of the original.",
    )


class RepairRequest(TextInput):
    """Request body for POST /repair."""

    output_file: Optional[str] = Field(
        default=None,
        description=(
            "Bare file name for the repaired text, placed in the server's "
            "REPAIR_OUTPUT_DIR. Defaults to REPAIR_OUTPUT_FILE. Paths are rejected."
        ),
    )

    @field_validator("output_file")
    @classmethod
    def _bare_file_name(cls, value: Optional[str]) -> Optional[str]:
        # Clients choose a name, never a location on the server
        if value is None:
            return value
        if value in ("", ".", "..") or Path(value).name != value or "\\" in value:
            raise ValueError("output_file must be a bare file name, got {!r}".format(value))
        return value


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FormatResponse(BaseModel):
    formatted_text: str = Field(description="The reconstructed, naturally formatted text.")


class SummaryResponse(BaseModel):
    summary: str = Field(description="Extractive excerpt in original document order.")
    session_id: str = Field(description="Audit session identifier for this summary.")


class RepairResponse(BaseModel):
    output_file: str = Field(description="Path of the file holding the repaired text.")
    session_id: str = Field(description="Session identifier; pass to the repair log endpoint.")
    corrections_made: int = Field(description="Number of corrected occurrences.")


class RepairLogResponse(BaseModel):
    log_file: str = Field(description="Path of the repair audit log.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message naming the operation
    - error is the exception class name (e.g. 'MalformedInputError')
    """

    detail: str = Field(description="Human-readable error description.")
    error: str = Field(description="Error kind.", json_schema_extra={"example": "MalformedInputError"})


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
