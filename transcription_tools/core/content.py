"""Content resolution and text file I/O.

WHY: Every operation accepts ``input_text`` that is either the document
itself or a path to it. Resolving that indirection in one place keeps the
pipelines free of file handling and gives one consistent error when a
path cannot be read.

HOW: resolve_text_content returns the value unchanged, or reads the file
as UTF-8. write_text_file creates parent directories before writing.

RULES:
- Files are UTF-8
- Unreadable paths raise InputResolutionError (never a bare OSError)
- Write failures propagate as OSError to the caller
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from transcription_tools.errors import InputResolutionError


def read_text_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file.

    Raises:
        InputResolutionError: If the file is missing, unreadable, or not
            valid UTF-8.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputResolutionError(
            "Failed to read file {}: {}".format(path, exc),
            context={"path": str(path)},
        ) from exc


def write_text_file(path: Union[str, Path], content: str) -> Path:
    """Write *content* to *path*, creating directories as needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def resolve_text_content(value: str, is_file_path: bool = False) -> str:
    """Return the document text for an ``input_text`` value.

    Args:
        value: Literal text, or a path when *is_file_path* is true.
        is_file_path: Whether *value* names a file to read.
    """
    if is_file_path:
        return read_text_file(value)
    return value
