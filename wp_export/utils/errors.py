"""
Error types and structured run reports for the export.

The exception classes describe the failures that abort a run: the export
file cannot be read, it is not well-formed XML, or it parses but has no
items to export.  Record-level problems never raise; they are written to
JSON Lines reports under the configured reports directory so they can be
reviewed after a run.

Two reporting functions are provided:

``report_error``
    Record a problem with a single post.  An optional exception can be
    supplied and will be serialized to the log.

``report_ok``
    Record a successful step for a post.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

ERRORS: Dict[str, str] = {
    "RECORD_FAILED": "Failed to export post",
    "DATE_UNPARSABLE": "Publish date could not be parsed; raw text kept",
    "FILENAME_COLLISION": "Another post was written to the same file",
    "FILENAME_FALLBACK": "Slug and title produced an empty filename",
    "WRITTEN": "Post written",
}

ERROR_LOG_NAME = "errors.jsonl"
OK_LOG_NAME = "success.jsonl"


class ExportError(Exception):
    """Base class for failures that abort an export run."""


class ConfigError(ExportError):
    """The configuration file is missing, unreadable or not valid JSON."""


class InputUnavailableError(ExportError):
    """The export file is missing or unreadable."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = getattr(cause, "strerror", None) or str(cause or "")
        super().__init__(f"Could not read input file: {self.path} ({detail})")


class InputMalformedError(ExportError):
    """The export file is not well-formed XML."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to parse XML in {self.path}: {cause}")


class StructureUnexpectedError(ExportError):
    """The export parsed but holds no ``channel`` or no ``item`` elements."""

    def __init__(self, message: str, snapshot_path: Optional[Path] = None) -> None:
        self.snapshot_path = snapshot_path
        super().__init__(message)


def _write_jsonl(path: Path, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``path``."""
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _entry(code: str, post: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "code": code,
        "message": ERRORS.get(code, code),
        "slug": post.get("Slug"),
        "title": post.get("Title"),
    }


def report_error(
    code: str,
    post: Dict[str, Any],
    exc: Optional[BaseException] = None,
    *,
    reports_dir: Union[str, Path],
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Log a problem with ``post`` to ``errors.jsonl``.

    Parameters
    ----------
    code:
        A key identifying the type of problem.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    post:
        The normalized post dictionary.  Only the ``Slug`` and ``Title`` keys
        are referenced.
    exc:
        Optional exception instance that triggered the problem.
    reports_dir:
        Directory holding the report files; created when missing.
    extra:
        Optional dictionary of additional fields to merge into the entry.

    Returns
    -------
    dict
        The entry that was written.
    """
    entry = _entry(code, post)
    if extra:
        entry.update(extra)
    if exc is not None:
        entry["error"] = str(exc)
    _write_jsonl(Path(reports_dir) / ERROR_LOG_NAME, entry)
    return entry


def report_ok(
    code: str,
    post: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    reports_dir: Union[str, Path],
) -> Dict[str, Any]:
    """Log a successful event for ``post`` to ``success.jsonl``."""
    entry = _entry(code, post)
    if extra:
        entry.update(extra)
    _write_jsonl(Path(reports_dir) / OK_LOG_NAME, entry)
    return entry
