"""Column resolution and row filling.

Column specifications arrive as loose Python values and are parsed once
into the ``ColumnSpec`` tagged union:

- ``"name"`` becomes a leaf that reads one field from a record.
- ``["a", "b"]`` (list or tuple) becomes a group of sibling columns.
- ``{"address": ["city", "zip"]}`` becomes a nesting that reads
  ``record.address`` and applies the nested specification to it.

``fill_row`` walks a parsed specification against one record and
returns the flat cell values. Run against the ``HEADER`` sentinel it
returns the leaf names instead, so the header row and every data row
come from the same traversal.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal

from record_sheet._exceptions import InvalidConfigurationError
from record_sheet._protocols.openpyxl import _illegal_characters_re
from record_sheet.logging import get_logger
from record_sheet.types.columns import ColumnSpec, GroupSpec, LeafSpec, NestingSpec
from record_sheet.types.common import CellValue, Record

_logger = get_logger(__name__)


class _HeaderMode:
    """Sentinel record: leaves emit their own names."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "HEADER"


HEADER = _HeaderMode()


class _MissingValue:
    """Sentinel for an absent record field."""

    __slots__ = ()


_MISSING = _MissingValue()

# Date an aware time is combined with to shift it to UTC
_TIME_ANCHOR = date(2000, 1, 1)


def _describe(value: object) -> str:
    return f"{value!r} has an invalid type ({type(value).__name__})"


def parse_column_spec(value: object, context: str = "columns") -> ColumnSpec:
    """Parse a loose column specification into a ColumnSpec.

    Args:
        value: A field name, a list/tuple of specs, or a mapping of
            field name to nested spec.
        context: Option name used in error messages.

    Returns:
        The parsed specification.

    Raises:
        InvalidConfigurationError: If any part of value has an unsupported shape.
    """
    if isinstance(value, str):
        leaf: LeafSpec = {"type": "leaf", "name": value}
        return leaf
    if isinstance(value, (list, tuple)):
        items: list[ColumnSpec] = [parse_column_spec(item, context) for item in value]
        group: GroupSpec = {"type": "group", "items": items}
        return group
    if isinstance(value, Mapping):
        entries: list[tuple[str, ColumnSpec]] = []
        for key, nested in value.items():
            if not isinstance(key, str):
                raise InvalidConfigurationError(context, f"nesting key {_describe(key)}")
            entries.append((key, parse_column_spec(nested, context)))
        nesting: NestingSpec = {"type": "nesting", "entries": entries}
        return nesting
    raise InvalidConfigurationError(context, f"column {_describe(value)}")


def parse_columns(value: object) -> GroupSpec | None:
    """Parse the top-level ``columns`` option.

    Args:
        value: None, or a list/tuple of column specifications.

    Returns:
        A group spec, or None when columns should be inferred.

    Raises:
        InvalidConfigurationError: If value is neither None nor a list/tuple.
    """
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise InvalidConfigurationError(
            "columns", f"({value!r}) must be an ordered sequence or absent"
        )
    items: list[ColumnSpec] = [parse_column_spec(item) for item in value]
    return {"type": "group", "items": items}


def parse_headers(value: object) -> list[str] | None:
    """Parse an explicit ``headers`` option (False is handled by the caller).

    Args:
        value: None, or a list/tuple of strings.

    Returns:
        Header labels, or None to default to the flat column names.

    Raises:
        InvalidConfigurationError: If value is not a sequence of strings.
    """
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise InvalidConfigurationError("headers", f"({value!r}) must be an ordered sequence")
    labels: list[str] = []
    for label in value:
        if not isinstance(label, str):
            raise InvalidConfigurationError("headers", f"label {_describe(label)}")
        labels.append(label)
    return labels


def record_field_names(record: Record) -> list[str] | None:
    """Return the field names a record exposes, or None if it exposes none.

    Mappings expose their keys, dataclass instances their fields, named
    tuples their ``_fields``, and any object with a mapping-valued
    ``attributes`` attribute that mapping's keys.
    """
    if isinstance(record, Mapping):
        return [str(key) for key in record]
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [field.name for field in dataclasses.fields(record)]
    if isinstance(record, tuple):
        named: object = getattr(type(record), "_fields", None)
        if isinstance(named, tuple):
            return [str(name) for name in named]
        return None
    attributes: object = getattr(record, "attributes", None)
    if isinstance(attributes, Mapping):
        return [str(key) for key in attributes]
    return None


def infer_columns(records: Sequence[Record]) -> GroupSpec:
    """Infer columns from the first record, sorted by name.

    Args:
        records: The dataset.

    Returns:
        A flat group of leaves; empty when nothing can be inferred.
    """
    items: list[ColumnSpec] = []
    if records:
        names = record_field_names(records[0])
        if names is not None:
            for name in sorted(names):
                leaf: LeafSpec = {"type": "leaf", "name": name}
                items.append(leaf)
    _logger.debug("Inferred %d columns from first record", len(items))
    return {"type": "group", "items": items}


def resolve_columns(explicit: GroupSpec | None, records: Sequence[Record]) -> GroupSpec:
    """Return explicit columns when given, otherwise infer them from records."""
    if explicit is not None:
        return explicit
    return infer_columns(records)


def flatten_columns(spec: ColumnSpec) -> list[str]:
    """Return the flat ordered leaf names of a specification."""
    return [str(name) for name in fill_row(spec, HEADER)]


def resolve_headers(explicit: list[str] | None, flat_columns: list[str]) -> list[str]:
    """Return the header labels for a projection.

    Explicit labels are used as given; a length that differs from the
    flat column count is logged and tolerated.
    """
    if explicit is None:
        return list(flat_columns)
    if len(explicit) != len(flat_columns):
        _logger.warning(
            "Header count %d does not match column count %d",
            len(explicit),
            len(flat_columns),
        )
    return list(explicit)


def _missing_field(record: Record, name: str) -> InvalidConfigurationError:
    return InvalidConfigurationError(
        "columns", f"record of type {type(record).__name__} has no field {name!r}"
    )


def get_field(record: Record, name: str) -> object:
    """Read a named field from a record.

    Mappings are read by key; a non-string key matches when its ``str()``
    form equals name, the same form inference reports. Other objects are
    read by attribute. A bound method found by attribute is called
    without arguments.

    Raises:
        InvalidConfigurationError: If the record has no such field.
    """
    if isinstance(record, Mapping):
        if name in record:
            item: object = record[name]
            return item
        for key in record:
            if not isinstance(key, str) and str(key) == name:
                matched: object = record[key]
                return matched
        raise _missing_field(record, name)
    value: object = getattr(record, name, _MISSING)
    if isinstance(value, _MissingValue):
        raise _missing_field(record, name)
    if inspect.ismethod(value):
        called: object = value()
        return called
    return value


def _naive_utc_datetime(value: datetime) -> datetime:
    if value.utcoffset() is None:
        return value.replace(tzinfo=None)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _naive_utc_time(value: time) -> time:
    offset = value.utcoffset()
    if offset is None:
        return value.replace(tzinfo=None)
    anchored = datetime.combine(_TIME_ANCHOR, value.replace(tzinfo=None)) - offset
    return anchored.time()


def to_cell_value(value: object) -> CellValue:
    """Normalize an extracted value to something openpyxl can write.

    Strings lose XML-illegal control characters. Timezone-aware datetimes
    and times are converted to naive UTC. Values openpyxl cannot store
    natively are written as ``str(value)``.
    """
    if isinstance(value, str):
        cleaned: str = _illegal_characters_re().sub("", value)
        return cleaned
    if value is None or isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value
        return _naive_utc_datetime(value)
    if isinstance(value, time):
        if value.tzinfo is None:
            return value
        return _naive_utc_time(value)
    if isinstance(value, date):
        return value
    return to_cell_value(str(value))


def _descend(record: Record | _HeaderMode, name: str) -> Record | _HeaderMode:
    if isinstance(record, _HeaderMode) or record is None:
        return record
    return get_field(record, name)


def _fill(spec: ColumnSpec, record: Record | _HeaderMode, cells: list[CellValue]) -> None:
    if spec["type"] == "leaf":
        if isinstance(record, _HeaderMode):
            cells.append(spec["name"])
        elif record is None:
            # Missing sub-object: leave the cell empty
            cells.append(None)
        else:
            cells.append(to_cell_value(get_field(record, spec["name"])))
    elif spec["type"] == "group":
        for item in spec["items"]:
            _fill(item, record, cells)
    else:
        for key, nested in spec["entries"]:
            _fill(nested, _descend(record, key), cells)


def fill_row(spec: ColumnSpec, record: Record | _HeaderMode) -> list[CellValue]:
    """Produce the flat cell values of one row.

    Args:
        spec: Parsed column specification.
        record: Source record, or HEADER to produce the leaf names.

    Returns:
        Cell values in specification order.

    Raises:
        InvalidConfigurationError: If a record lacks a named field.
    """
    cells: list[CellValue] = []
    _fill(spec, record, cells)
    return cells


__all__ = [
    "HEADER",
    "fill_row",
    "flatten_columns",
    "get_field",
    "infer_columns",
    "parse_column_spec",
    "parse_columns",
    "parse_headers",
    "record_field_names",
    "resolve_columns",
    "resolve_headers",
    "to_cell_value",
]
