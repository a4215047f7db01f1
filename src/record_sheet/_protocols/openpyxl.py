"""Protocol definitions for openpyxl library.

Provides type-safe interfaces to openpyxl Workbook, Worksheet, Cell and
dimension classes without importing openpyxl directly.
"""

from __future__ import annotations

import re
from collections.abc import MutableMapping
from pathlib import Path
from typing import BinaryIO, Protocol

from record_sheet.types.common import CellValue


class AlignmentProtocol(Protocol):
    """Protocol for openpyxl Alignment."""

    horizontal: str | None
    vertical: str | None
    wrap_text: bool | None


class ColorProtocol(Protocol):
    """Protocol for openpyxl Color."""

    rgb: str


class FontProtocol(Protocol):
    """Protocol for openpyxl Font."""

    bold: bool
    italic: bool
    underline: str | None
    name: str | None
    size: float | None
    color: ColorProtocol | None


class PatternFillProtocol(Protocol):
    """Protocol for openpyxl PatternFill."""

    start_color: ColorProtocol
    end_color: ColorProtocol
    fill_type: str | None


class StyleableProtocol(Protocol):
    """Style attributes shared by cells, rows and columns."""

    alignment: AlignmentProtocol
    font: FontProtocol
    fill: PatternFillProtocol
    number_format: str


class CellProtocol(StyleableProtocol, Protocol):
    """Protocol for openpyxl Cell."""

    value: CellValue
    column_letter: str


class ColumnDimensionProtocol(StyleableProtocol, Protocol):
    """Protocol for openpyxl ColumnDimension."""

    width: float


class RowDimensionProtocol(StyleableProtocol, Protocol):
    """Protocol for openpyxl RowDimension."""


class _GetColumnLetterFn(Protocol):
    """Protocol for openpyxl.utils.get_column_letter function."""

    def __call__(self, col_idx: int) -> str: ...


class WorksheetProtocol(Protocol):
    """Protocol for openpyxl Worksheet."""

    def cell(self, row: int, column: int, value: CellValue = None) -> CellProtocol:
        """Get or create cell at (row, column)."""
        ...

    @property
    def column_dimensions(self) -> MutableMapping[str, ColumnDimensionProtocol]:
        """Return column dimensions mapping."""
        ...

    @property
    def row_dimensions(self) -> MutableMapping[int, RowDimensionProtocol]:
        """Return row dimensions mapping."""
        ...

    @property
    def max_row(self) -> int:
        """Return maximum row number with data."""
        ...

    @property
    def max_column(self) -> int:
        """Return maximum column number with data."""
        ...

    @property
    def title(self) -> str:
        """Return worksheet title."""
        ...

    @title.setter
    def title(self, value: str) -> None:
        """Set worksheet title."""
        ...


class WorkbookProtocol(Protocol):
    """Protocol for openpyxl Workbook."""

    @property
    def sheetnames(self) -> list[str]:
        """Return list of sheet names."""
        ...

    def __getitem__(self, name: str) -> WorksheetProtocol:
        """Get worksheet by name."""
        ...

    def create_sheet(
        self, title: str | None = None, index: int | None = None
    ) -> WorksheetProtocol:
        """Create a worksheet and return it."""
        ...

    def save(self, filename: str | Path | BinaryIO) -> None:
        """Save workbook to a file path or binary stream."""
        ...

    def close(self) -> None:
        """Close workbook."""
        ...

    @property
    def active(self) -> WorksheetProtocol:
        """Return active worksheet."""
        ...


class _LoadWorkbookFn(Protocol):
    """Protocol for openpyxl load_workbook function."""

    def __call__(
        self, filename: Path | BinaryIO, read_only: bool = False, data_only: bool = False
    ) -> WorkbookProtocol: ...


class _WorkbookCtor(Protocol):
    """Protocol for openpyxl.Workbook constructor."""

    def __call__(self) -> WorkbookProtocol: ...


def _load_workbook(
    source: Path | BinaryIO, read_only: bool = False, data_only: bool = False
) -> WorkbookProtocol:
    """Load workbook with proper typing via Protocol.

    Args:
        source: Path to an Excel file or a binary stream holding one.
        read_only: Open in read-only mode.
        data_only: Read cell values only, not formulas.

    Returns:
        WorkbookProtocol for the loaded workbook.
    """
    openpyxl_mod = __import__("openpyxl")
    load_fn: _LoadWorkbookFn = openpyxl_mod.load_workbook
    return load_fn(source, read_only=read_only, data_only=data_only)


def _create_workbook() -> WorkbookProtocol:
    """Create a new openpyxl Workbook with strict typing.

    Returns:
        WorkbookProtocol for the new workbook.
    """
    openpyxl_mod = __import__("openpyxl")
    ctor: _WorkbookCtor = openpyxl_mod.Workbook
    return ctor()


def _get_column_letter(col_idx: int) -> str:
    """Get Excel column letter via typed Protocol.

    Args:
        col_idx: 1-based column index.

    Returns:
        Column letter (e.g., "A", "B", "AA").
    """
    utils_mod = __import__("openpyxl.utils", fromlist=["get_column_letter"])
    fn: _GetColumnLetterFn = utils_mod.get_column_letter
    return fn(col_idx)


def _create_alignment(
    *,
    horizontal: str | None = None,
    vertical: str | None = None,
    wrap_text: bool | None = None,
) -> AlignmentProtocol:
    """Create openpyxl Alignment.

    Args:
        horizontal: Horizontal alignment ("left", "center", "right", "general", ...).
        vertical: Vertical alignment ("top", "center", "bottom", ...).
        wrap_text: Whether cell text wraps.

    Returns:
        AlignmentProtocol instance.
    """
    styles_mod = __import__("openpyxl.styles", fromlist=["Alignment"])
    alignment: AlignmentProtocol = styles_mod.Alignment(
        horizontal=horizontal,
        vertical=vertical,
        wrap_text=wrap_text,
    )
    return alignment


def _create_font(
    *,
    bold: bool = False,
    italic: bool = False,
    underline: str | None = None,
    name: str | None = None,
    size: float | None = None,
    color: str | None = None,
) -> FontProtocol:
    """Create openpyxl Font.

    Args:
        bold: Whether font is bold.
        italic: Whether font is italic.
        underline: Underline style ("single", "double", ...) or None.
        name: Font family name, None keeps the workbook default.
        size: Font size in points, None keeps the workbook default.
        color: Font color as hex string (e.g., "006100" for dark green).

    Returns:
        FontProtocol instance.
    """
    styles_mod = __import__("openpyxl.styles", fromlist=["Font"])
    font: FontProtocol = styles_mod.Font(
        name=name,
        size=size,
        bold=bold,
        italic=italic,
        underline=underline,
        color=color,
    )
    return font


def _create_pattern_fill(
    *,
    start_color: str,
    end_color: str | None = None,
    fill_type: str = "solid",
) -> PatternFillProtocol:
    """Create openpyxl PatternFill.

    Args:
        start_color: Fill color as hex string (e.g., "C6EFCE" for light green).
        end_color: End color for gradient fills. Defaults to start_color.
        fill_type: Fill pattern type ("solid", "darkDown", etc.).

    Returns:
        PatternFillProtocol instance.
    """
    styles_mod = __import__("openpyxl.styles", fromlist=["PatternFill"])
    actual_end_color = end_color if end_color is not None else start_color
    fill: PatternFillProtocol = styles_mod.PatternFill(
        start_color=start_color,
        end_color=actual_end_color,
        fill_type=fill_type,
    )
    return fill


def _illegal_characters_re() -> re.Pattern[str]:
    """Return openpyxl's pattern of characters not allowed in cell strings.

    Returns:
        Compiled pattern matching XML-illegal control characters.
    """
    cell_mod = __import__("openpyxl.cell.cell", fromlist=["ILLEGAL_CHARACTERS_RE"])
    pattern: re.Pattern[str] = cell_mod.ILLEGAL_CHARACTERS_RE
    return pattern


__all__ = [
    "AlignmentProtocol",
    "CellProtocol",
    "ColorProtocol",
    "ColumnDimensionProtocol",
    "FontProtocol",
    "PatternFillProtocol",
    "RowDimensionProtocol",
    "StyleableProtocol",
    "WorkbookProtocol",
    "WorksheetProtocol",
    "_create_alignment",
    "_create_font",
    "_create_pattern_fill",
    "_create_workbook",
    "_get_column_letter",
    "_illegal_characters_re",
    "_load_workbook",
]
