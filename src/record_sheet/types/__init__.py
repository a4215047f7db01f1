"""TypedDict definitions for record_sheet data structures.

All types are immutable TypedDicts with strict typing.
"""

from __future__ import annotations

from record_sheet.types.columns import (
    ColumnInput,
    ColumnSpec,
    GroupSpec,
    LeafSpec,
    NestingSpec,
)
from record_sheet.types.common import CellValue, Dataset, Record
from record_sheet.types.options import (
    ColumnKey,
    FormatOptions,
    HorizontalAlignment,
    ProjectionConfig,
    SheetOptions,
    UnderlineStyle,
    VerticalAlignment,
)

__all__ = [
    "CellValue",
    "ColumnInput",
    "ColumnKey",
    "ColumnSpec",
    "Dataset",
    "FormatOptions",
    "GroupSpec",
    "HorizontalAlignment",
    "LeafSpec",
    "NestingSpec",
    "ProjectionConfig",
    "Record",
    "SheetOptions",
    "UnderlineStyle",
    "VerticalAlignment",
]
