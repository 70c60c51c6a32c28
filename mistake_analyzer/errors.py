# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Exception types raised by the record layer and the storage
#   layer. The analysis core never raises for valid Category input;
#   everything it cannot decide maps to a sentinel value instead.
#
# CLASSES:
# --------
# - MistakeAnalyzerError(Exception)
#     Base class for everything below.
#
# - InvalidMistakeError(MistakeAnalyzerError, ValueError)
#     A user-supplied field failed validation.
#     field_name tells the caller which input to highlight.
#
# - FileOperationError(MistakeAnalyzerError, OSError)
#     Reading or writing the data file failed.
#     operation is a FileOperation (READ, WRITE, DELETE, PARSE).
#
# ==============================================

from enum import Enum
from typing import Optional


class MistakeAnalyzerError(Exception):
    """Base class for all application errors."""


class InvalidMistakeError(MistakeAnalyzerError, ValueError):
    """
    Raised when a mistake record fails validation.

    Args:
        message: What went wrong
        field_name: The offending input field ("description", "date", "severity", "id")
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field_name = field_name

    @property
    def user_message(self) -> str:
        """Message suitable for direct display, prefixed with the field name when known."""
        if self.field_name:
            return f"Error in '{self.field_name}': {self.message}"
        return self.message


class FileOperation(Enum):
    """Kind of file operation that failed."""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    PARSE = "parse"


class FileOperationError(MistakeAnalyzerError, OSError):
    """Raised when the flat data file cannot be read or written."""

    def __init__(self, message: str, operation: Optional[FileOperation] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return self.message
