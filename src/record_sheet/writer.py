"""Record-to-worksheet writer.

Projects a sequence of records onto one openpyxl worksheet: an optional
header row, one row per record, then name-keyed column formats and widths.
The result can be returned as bytes, written to a binary stream or a file,
or left in a caller-supplied workbook or worksheet.
"""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import BinaryIO, Unpack

from record_sheet._exceptions import WriterError
from record_sheet._protocols.openpyxl import (
    WorkbookProtocol,
    WorksheetProtocol,
    _create_workbook,
)
from record_sheet.columns import (
    fill_row,
    flatten_columns,
    resolve_columns,
    resolve_headers,
    to_cell_value,
)
from record_sheet.config import parse_options
from record_sheet.logging import get_logger
from record_sheet.styles import (
    apply_column_format,
    apply_column_rules,
    apply_column_width,
    apply_row_format,
)
from record_sheet.types.columns import GroupSpec
from record_sheet.types.common import CellValue, Record
from record_sheet.types.options import FormatOptions, ProjectionConfig, SheetOptions

_logger = get_logger(__name__)


def _write_row(ws: WorksheetProtocol, row: int, values: Sequence[CellValue]) -> None:
    for column, value in enumerate(values, start=1):
        ws.cell(row=row, column=column, value=value)


class SheetWriter:
    """Writer projecting records onto a single worksheet.

    Options are parsed and columns and headers resolved once, when the
    writer is constructed, so configuration errors surface before any
    workbook exists. All methods raise exceptions on failure - no recovery
    or fallbacks.
    """

    def __init__(
        self,
        records: Sequence[Record],
        options: Mapping[str, object] | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            records: Records to project, one row each.
            options: Projection options (see SheetOptions).

        Raises:
            InvalidConfigurationError: If the options are malformed.
        """
        self._records = records
        self._config: ProjectionConfig = parse_options(options)
        self._columns: GroupSpec = resolve_columns(self._config["columns"], records)
        self._flat_columns: list[str] = flatten_columns(self._columns)
        self._headers: list[str] = resolve_headers(self._config["headers"], self._flat_columns)

    @property
    def config(self) -> ProjectionConfig:
        """Return the parsed options."""
        return self._config

    @property
    def columns(self) -> GroupSpec:
        """Return the resolved column specification."""
        return self._columns

    @property
    def flat_columns(self) -> list[str]:
        """Return the flat ordered column names used for rule lookups."""
        return list(self._flat_columns)

    @property
    def headers(self) -> list[str]:
        """Return the header labels."""
        return list(self._headers)

    @property
    def include_headers(self) -> bool:
        """Return whether the header row is written."""
        return self._config["include_headers"]

    def write_bytes(self) -> bytes:
        """Return the workbook serialized as .xlsx bytes."""
        buffer = io.BytesIO()
        self.write_io(buffer)
        return buffer.getvalue()

    def write_io(self, stream: BinaryIO) -> None:
        """Serialize a new workbook holding the projection to a binary stream.

        Args:
            stream: Writable binary stream.
        """
        wb = _create_workbook()
        try:
            self._fill_default_sheet(wb)
            wb.save(stream)
        finally:
            wb.close()

    def write_file(self, out_path: Path) -> Path:
        """Write the workbook to a file, creating parent directories.

        Args:
            out_path: Output file path.

        Returns:
            The written path.

        Raises:
            WriterError: If the file cannot be written.
        """
        wb = _create_workbook()
        try:
            self._fill_default_sheet(wb)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(out_path)
        except OSError as exc:
            raise WriterError(str(out_path), f"Failed to save workbook ({exc})") from exc
        finally:
            wb.close()
        return out_path

    def write_book(self, wb: WorkbookProtocol) -> WorkbookProtocol:
        """Add a worksheet named after the projection to a workbook and fill it.

        Existing worksheets of the workbook are left as they are.

        Args:
            wb: Workbook to write into.

        Returns:
            The same workbook.
        """
        self.write_sheet(wb.create_sheet(self._config["name"]))
        return wb

    def _fill_default_sheet(self, wb: WorkbookProtocol) -> None:
        ws = wb.active
        ws.title = self._config["name"]
        self.write_sheet(ws)

    def write_sheet(self, ws: WorksheetProtocol) -> int:
        """Fill a worksheet starting at row 1.

        All row values are extracted before the first cell is written, so a
        record missing a field leaves the worksheet untouched.

        Args:
            ws: Worksheet to fill.

        Returns:
            Number of rows written, header row included.
        """
        if not self._flat_columns:
            _logger.debug("No columns resolved, worksheet left empty")
            return 0

        data_rows = [fill_row(self._columns, record) for record in self._records]

        row_formats: list[FormatOptions | None] = []
        if self.include_headers:
            header_values = [to_cell_value(label) for label in self._headers]
            self._emit_row(ws, header_values, self._config["header_format"], row_formats)
        for values in data_rows:
            self._emit_row(ws, values, self._config["cell_format"], row_formats)

        apply_column_rules(
            self._config["column_format"],
            self._flat_columns,
            lambda position, options: apply_column_format(ws, position, options, row_formats),
        )
        apply_column_rules(
            self._config["column_width"],
            self._flat_columns,
            lambda position, width: apply_column_width(ws, position, width),
        )

        _logger.debug(
            "Projected %d records onto worksheet %r",
            len(data_rows),
            ws.title,
            extra={"sheet": ws.title, "rows": len(row_formats), "columns": len(self._flat_columns)},
        )
        return len(row_formats)

    def _emit_row(
        self,
        ws: WorksheetProtocol,
        values: Sequence[CellValue],
        row_format: FormatOptions | None,
        row_formats: list[FormatOptions | None],
    ) -> None:
        row = len(row_formats) + 1
        _write_row(ws, row, values)
        if row_format is not None:
            apply_row_format(ws, row, len(values), row_format)
        row_formats.append(row_format)


def to_xlsx(records: Sequence[Record], **options: Unpack[SheetOptions]) -> bytes:
    """Project records onto a single worksheet and return .xlsx bytes.

    Example:
        >>> data = to_xlsx(
        ...     [{"name": "Ada", "age": 36}],
        ...     columns=["name", "age"],
        ...     header_format={"bold": True},
        ... )
    """
    return SheetWriter(records, options).write_bytes()


__all__ = [
    "SheetWriter",
    "to_xlsx",
]
