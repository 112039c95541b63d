"""
Utility helpers used by the export tool.

This subpackage exposes the error types and structured reports, file name
sanitizing, and redirect map generation.
"""

from .errors import (
    ERRORS,
    ConfigError,
    ExportError,
    InputMalformedError,
    InputUnavailableError,
    StructureUnexpectedError,
    report_error,
    report_ok,
)
from .filenames import FilenameRegistry, post_filename, safe_filename
from .redirects import generate_redirects_csv

__all__ = [
    "ERRORS",
    "ConfigError",
    "ExportError",
    "FilenameRegistry",
    "InputMalformedError",
    "InputUnavailableError",
    "StructureUnexpectedError",
    "generate_redirects_csv",
    "post_filename",
    "report_error",
    "report_ok",
    "safe_filename",
]
