"""Common type definitions for record_sheet library.

Provides the cell value type written to worksheets and the record type
read from datasets.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal

# Values openpyxl writes natively; anything else is stringified first
CellValue = str | int | float | bool | Decimal | datetime | date | time | None

# Source records are arbitrary objects read through the field accessor
Record = object

# An ordered, in-memory dataset
Dataset = Sequence[Record]


__all__ = [
    "CellValue",
    "Dataset",
    "Record",
]
