"""Row and column formatting for worksheets.

Format rules are keyed by column name, not position. ``apply_column_rules``
turns a rule table into calls by resolved column position; names that do
not match a resolved column are dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from record_sheet._protocols.openpyxl import (
    StyleableProtocol,
    WorksheetProtocol,
    _create_alignment,
    _create_font,
    _create_pattern_fill,
    _get_column_letter,
)
from record_sheet.types.options import ColumnKey, FormatOptions

DEFAULT_FONT_NAME = "Calibri"
DEFAULT_FONT_SIZE = 11.0

_FONT_KEYS = ("bold", "italic", "underline", "font_name", "font_size", "font_color")
_ALIGNMENT_KEYS = ("horizontal", "vertical", "wrap_text")

_RuleValue = TypeVar("_RuleValue")


def apply_column_rules(
    rules: Mapping[ColumnKey, _RuleValue],
    resolved_columns: list[str],
    apply_fn: Callable[[int, _RuleValue], None],
) -> None:
    """Apply name-keyed rules by zero-based column position.

    Args:
        rules: Column name (or tuple of names) to rule value. None keys are skipped.
        resolved_columns: Flat ordered column names of the projection.
        apply_fn: Called with (position, rule value) for every matched name.
    """
    for key, value in rules.items():
        if key is None:
            continue
        names: tuple[str, ...] = (key,) if isinstance(key, str) else key
        for name in names:
            if name not in resolved_columns:
                continue
            apply_fn(resolved_columns.index(name), value)


def merge_format_options(base: FormatOptions | None, override: FormatOptions) -> FormatOptions:
    """Return base updated key by key with override."""
    merged: FormatOptions = {}
    if base is not None:
        merged.update(base)
    merged.update(override)
    return merged


def apply_format(target: StyleableProtocol, options: FormatOptions) -> None:
    """Set the font, fill, alignment and number format named in options.

    Style groups with no key present in options are left untouched.
    """
    if any(key in options for key in _FONT_KEYS):
        target.font = _create_font(
            bold=options.get("bold", False),
            italic=options.get("italic", False),
            underline=options.get("underline"),
            name=options.get("font_name", DEFAULT_FONT_NAME),
            size=options.get("font_size", DEFAULT_FONT_SIZE),
            color=options.get("font_color"),
        )
    fill_color = options.get("fill_color")
    if fill_color is not None:
        target.fill = _create_pattern_fill(start_color=fill_color)
    if any(key in options for key in _ALIGNMENT_KEYS):
        target.alignment = _create_alignment(
            horizontal=options.get("horizontal"),
            vertical=options.get("vertical"),
            wrap_text=options.get("wrap_text"),
        )
    number_format = options.get("number_format")
    if number_format is not None:
        target.number_format = number_format


def apply_row_format(
    ws: WorksheetProtocol,
    row: int,
    column_count: int,
    options: FormatOptions,
) -> None:
    """Apply options as the default format of a 1-based row and its cells."""
    apply_format(ws.row_dimensions[row], options)
    for column in range(1, column_count + 1):
        apply_format(ws.cell(row=row, column=column), options)


def apply_column_format(
    ws: WorksheetProtocol,
    position: int,
    options: FormatOptions,
    row_formats: list[FormatOptions | None],
) -> None:
    """Apply options to a column, overriding the row defaults of its cells.

    Args:
        ws: Worksheet to modify.
        position: Zero-based column position.
        options: Column format options.
        row_formats: Row default of every written row, in row order.
    """
    column = position + 1
    apply_format(ws.column_dimensions[_get_column_letter(column)], options)
    for row, row_format in enumerate(row_formats, start=1):
        effective = merge_format_options(row_format, options)
        apply_format(ws.cell(row=row, column=column), effective)


def apply_column_width(ws: WorksheetProtocol, position: int, width: float | None) -> None:
    """Set the width of a zero-based column; a None width is skipped."""
    if width is None:
        return
    ws.column_dimensions[_get_column_letter(position + 1)].width = float(width)


__all__ = [
    "DEFAULT_FONT_NAME",
    "DEFAULT_FONT_SIZE",
    "apply_column_format",
    "apply_column_rules",
    "apply_column_width",
    "apply_format",
    "apply_row_format",
    "merge_format_options",
]
