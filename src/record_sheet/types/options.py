"""Projection option type definitions.

``SheetOptions`` documents the loose options mapping accepted by the
writer. ``ProjectionConfig`` is the validated form it is parsed into,
built once per writer and never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal, TypedDict

from record_sheet.types.columns import ColumnInput, GroupSpec

HorizontalAlignment = Literal[
    "general",
    "left",
    "center",
    "right",
    "fill",
    "justify",
    "centerContinuous",
    "distributed",
]

VerticalAlignment = Literal["top", "center", "bottom", "justify", "distributed"]

UnderlineStyle = Literal["single", "double", "singleAccounting", "doubleAccounting"]

# One column name, several names sharing a rule, or None (entry skipped)
ColumnKey = str | tuple[str, ...] | None


class FormatOptions(TypedDict, total=False):
    """Flat format options for a row or a column.

    Attributes:
        bold: Bold font.
        italic: Italic font.
        underline: Underline style.
        font_name: Font family name.
        font_size: Font size in points.
        font_color: Font color as RGB or ARGB hex (e.g. "FF0000").
        fill_color: Solid background color as RGB or ARGB hex.
        horizontal: Horizontal alignment.
        vertical: Vertical alignment.
        wrap_text: Wrap cell text.
        number_format: Excel number format code (e.g. "0.00").
    """

    bold: bool
    italic: bool
    underline: UnderlineStyle
    font_name: str
    font_size: float
    font_color: str
    fill_color: str
    horizontal: HorizontalAlignment
    vertical: VerticalAlignment
    wrap_text: bool
    number_format: str


class SheetOptions(TypedDict, total=False):
    """Options accepted by SheetWriter and to_xlsx.

    Every key is optional; absence selects the default behavior.
    """

    columns: Sequence[ColumnInput]
    headers: Sequence[str] | Literal[False]
    name: str
    cell_format: FormatOptions
    header_format: FormatOptions
    column_format: Mapping[ColumnKey, FormatOptions]
    column_width: Mapping[ColumnKey, float | None]


class ProjectionConfig(TypedDict):
    """Validated projection options.

    Attributes:
        columns: Parsed explicit columns, or None to infer from the data.
        headers: Explicit header labels, or None for the flat column names.
        include_headers: False only when headers were explicitly disabled.
        name: Worksheet name.
        cell_format: Default format for data rows, or None.
        header_format: Default format for the header row, or None.
        column_format: Per-column format rules.
        column_width: Per-column width rules.
    """

    columns: GroupSpec | None
    headers: list[str] | None
    include_headers: bool
    name: str
    cell_format: FormatOptions | None
    header_format: FormatOptions | None
    column_format: dict[ColumnKey, FormatOptions]
    column_width: dict[ColumnKey, float | None]


__all__ = [
    "ColumnKey",
    "FormatOptions",
    "HorizontalAlignment",
    "ProjectionConfig",
    "SheetOptions",
    "UnderlineStyle",
    "VerticalAlignment",
]
