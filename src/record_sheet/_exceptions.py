"""Exception hierarchy for record_sheet library.

All exceptions propagate without recovery. Callers handle failures explicitly.
"""

from __future__ import annotations


class RecordSheetError(Exception):
    """Base exception for record_sheet library.

    All library exceptions inherit from this base class.
    """


class InvalidConfigurationError(RecordSheetError):
    """Raised when projection options are malformed.

    Covers non-sequence columns or headers, unsupported column
    specification shapes, bad format options and missing record fields.
    Detected before any row is written wherever the input allows it.

    Attributes:
        option: The option or context that was malformed (e.g. "columns").
        message: Description of the problem.
    """

    def __init__(self, option: str, message: str) -> None:
        self.option = option
        self.message = message
        super().__init__(f"{option}: {message}")


class WriterError(RecordSheetError):
    """Raised when writing output fails.

    Attributes:
        path: The output path.
        message: Description of the failure.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


__all__ = [
    "InvalidConfigurationError",
    "RecordSheetError",
    "WriterError",
]
