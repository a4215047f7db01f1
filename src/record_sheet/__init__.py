"""Project in-memory records onto a single .xlsx worksheet.

Columns are given as field names, ordered groups of fields, or nested
``{field: sub-columns}`` mappings, or inferred from the first record.
Header row, row formats, column formats and widths are configured by a
flat options mapping. Workbooks are produced via openpyxl.

All data structures use TypedDicts for strict typing.
"""

from __future__ import annotations

# Errors
from record_sheet._exceptions import (
    InvalidConfigurationError,
    RecordSheetError,
    WriterError,
)

# Column resolution
from record_sheet.columns import (
    HEADER,
    fill_row,
    flatten_columns,
    get_field,
    parse_column_spec,
    resolve_columns,
    resolve_headers,
)

# Configuration
from record_sheet.config import (
    DEFAULT_SHEET_NAME,
    parse_options,
)

# Types
from record_sheet.types import (
    CellValue,
    ColumnKey,
    ColumnSpec,
    FormatOptions,
    ProjectionConfig,
    SheetOptions,
)

# Writer
from record_sheet.writer import SheetWriter, to_xlsx

__all__ = [
    "DEFAULT_SHEET_NAME",
    "HEADER",
    "CellValue",
    "ColumnKey",
    "ColumnSpec",
    "FormatOptions",
    "InvalidConfigurationError",
    "ProjectionConfig",
    "RecordSheetError",
    "SheetOptions",
    "SheetWriter",
    "WriterError",
    "fill_row",
    "flatten_columns",
    "get_field",
    "parse_column_spec",
    "parse_options",
    "resolve_columns",
    "resolve_headers",
    "to_xlsx",
]
