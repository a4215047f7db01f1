"""Protocol definitions for external library abstraction.

Internal protocols used to provide type-safe interfaces to openpyxl
without importing it directly at module load time.
"""

from __future__ import annotations

from record_sheet._protocols.openpyxl import (
    AlignmentProtocol,
    CellProtocol,
    ColumnDimensionProtocol,
    FontProtocol,
    PatternFillProtocol,
    RowDimensionProtocol,
    StyleableProtocol,
    WorkbookProtocol,
    WorksheetProtocol,
)

__all__ = [
    "AlignmentProtocol",
    "CellProtocol",
    "ColumnDimensionProtocol",
    "FontProtocol",
    "PatternFillProtocol",
    "RowDimensionProtocol",
    "StyleableProtocol",
    "WorkbookProtocol",
    "WorksheetProtocol",
]
