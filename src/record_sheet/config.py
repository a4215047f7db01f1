"""Option parsing for projections.

``parse_options`` validates the loose options mapping once and returns an
immutable ``ProjectionConfig``. Every malformed option raises
``InvalidConfigurationError`` before a workbook is touched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from record_sheet._exceptions import InvalidConfigurationError
from record_sheet.columns import parse_columns, parse_headers
from record_sheet.types.options import (
    ColumnKey,
    FormatOptions,
    HorizontalAlignment,
    ProjectionConfig,
    UnderlineStyle,
    VerticalAlignment,
)

DEFAULT_SHEET_NAME = "Sheet 1"

_OPTION_KEYS: frozenset[str] = frozenset(
    {
        "columns",
        "headers",
        "name",
        "cell_format",
        "header_format",
        "column_format",
        "column_width",
    }
)

_HORIZONTAL: dict[str, HorizontalAlignment] = {
    "general": "general",
    "left": "left",
    "center": "center",
    "right": "right",
    "fill": "fill",
    "justify": "justify",
    "centerContinuous": "centerContinuous",
    "distributed": "distributed",
}

_VERTICAL: dict[str, VerticalAlignment] = {
    "top": "top",
    "center": "center",
    "bottom": "bottom",
    "justify": "justify",
    "distributed": "distributed",
}

_UNDERLINE: dict[str, UnderlineStyle] = {
    "single": "single",
    "double": "double",
    "singleAccounting": "singleAccounting",
    "doubleAccounting": "doubleAccounting",
}

_HEX_COLOR = re.compile(r"^(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

# Characters Excel rejects in worksheet titles
_INVALID_TITLE_CHARS = re.compile(r"[\\*?:/\[\]]")
_MAX_TITLE_LENGTH = 31


def _require_bool(option: str, key: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise InvalidConfigurationError(option, f"{key} must be a bool, got {value!r}")
    return value


def _require_str(option: str, key: str, value: object) -> str:
    if not isinstance(value, str) or value == "":
        raise InvalidConfigurationError(option, f"{key} must be a non-empty string, got {value!r}")
    return value


def _require_number(option: str, key: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigurationError(option, f"{key} must be a number, got {value!r}")
    if value < 0:
        raise InvalidConfigurationError(option, f"{key} must not be negative, got {value!r}")
    return float(value)


def _require_color(option: str, key: str, value: object) -> str:
    if not isinstance(value, str) or _HEX_COLOR.match(value) is None:
        raise InvalidConfigurationError(
            option, f"{key} must be an RGB or ARGB hex string, got {value!r}"
        )
    return value.upper()


def _require_choice(option: str, key: str, value: object, choices: Mapping[str, str]) -> str:
    if not isinstance(value, str) or value not in choices:
        allowed = ", ".join(sorted(choices))
        raise InvalidConfigurationError(option, f"{key} must be one of {allowed}, got {value!r}")
    return value


def parse_format_options(option: str, value: object) -> FormatOptions:
    """Validate a flat format options mapping.

    Args:
        option: Option name used in error messages.
        value: Mapping of format option name to value.

    Returns:
        Validated FormatOptions.

    Raises:
        InvalidConfigurationError: On unknown keys or wrongly typed values.
    """
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError(option, f"({value!r}) must be a mapping of format options")
    result: FormatOptions = {}
    for key, raw in value.items():
        if key == "bold":
            result["bold"] = _require_bool(option, key, raw)
        elif key == "italic":
            result["italic"] = _require_bool(option, key, raw)
        elif key == "wrap_text":
            result["wrap_text"] = _require_bool(option, key, raw)
        elif key == "underline":
            result["underline"] = _UNDERLINE[_require_choice(option, key, raw, _UNDERLINE)]
        elif key == "font_name":
            result["font_name"] = _require_str(option, key, raw)
        elif key == "font_size":
            result["font_size"] = _require_number(option, key, raw)
        elif key == "font_color":
            result["font_color"] = _require_color(option, key, raw)
        elif key == "fill_color":
            result["fill_color"] = _require_color(option, key, raw)
        elif key == "horizontal":
            result["horizontal"] = _HORIZONTAL[_require_choice(option, key, raw, _HORIZONTAL)]
        elif key == "vertical":
            result["vertical"] = _VERTICAL[_require_choice(option, key, raw, _VERTICAL)]
        elif key == "number_format":
            result["number_format"] = _require_str(option, key, raw)
        else:
            raise InvalidConfigurationError(option, f"unknown format option {key!r}")
    return result


def _parse_column_key(option: str, key: object) -> ColumnKey:
    if key is None or isinstance(key, str):
        return key
    if isinstance(key, tuple):
        names: list[str] = []
        for name in key:
            if not isinstance(name, str):
                raise InvalidConfigurationError(
                    option, f"column name {name!r} must be a string"
                )
            names.append(name)
        return tuple(names)
    raise InvalidConfigurationError(
        option, f"key {key!r} must be a column name or a tuple of column names"
    )


def parse_column_format(value: object) -> dict[ColumnKey, FormatOptions]:
    """Validate the ``column_format`` rule table."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError("column_format", f"({value!r}) must be a mapping")
    rules: dict[ColumnKey, FormatOptions] = {}
    for key, options in value.items():
        rules[_parse_column_key("column_format", key)] = parse_format_options(
            "column_format", options
        )
    return rules


def parse_column_width(value: object) -> dict[ColumnKey, float | None]:
    """Validate the ``column_width`` rule table. A None width is skipped later."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError("column_width", f"({value!r}) must be a mapping")
    rules: dict[ColumnKey, float | None] = {}
    for key, width in value.items():
        column_key = _parse_column_key("column_width", key)
        if width is None:
            rules[column_key] = None
        else:
            rules[column_key] = _require_number("column_width", "width", width)
    return rules


def parse_sheet_name(value: object) -> str:
    """Validate the worksheet name, defaulting to "Sheet 1"."""
    if value is None:
        return DEFAULT_SHEET_NAME
    if not isinstance(value, str) or value == "":
        raise InvalidConfigurationError("name", f"({value!r}) must be a non-empty string")
    if len(value) > _MAX_TITLE_LENGTH:
        raise InvalidConfigurationError(
            "name", f"({value!r}) must be at most {_MAX_TITLE_LENGTH} characters"
        )
    if _INVALID_TITLE_CHARS.search(value) is not None:
        raise InvalidConfigurationError("name", f"({value!r}) contains a character Excel rejects")
    return value


def parse_options(options: Mapping[str, object] | None) -> ProjectionConfig:
    """Parse the options mapping into a ProjectionConfig.

    Args:
        options: Loose options (see SheetOptions), or None for defaults.

    Returns:
        Validated configuration.

    Raises:
        InvalidConfigurationError: If any option is unknown or malformed.
    """
    raw: Mapping[str, object] = options if options is not None else {}
    unknown = sorted(key for key in raw if key not in _OPTION_KEYS)
    if unknown:
        raise InvalidConfigurationError("options", f"unknown option(s): {', '.join(unknown)}")

    headers_value = raw.get("headers")
    include_headers = headers_value is not False
    headers = parse_headers(headers_value) if include_headers else None

    cell_format_value = raw.get("cell_format")
    header_format_value = raw.get("header_format")

    return {
        "columns": parse_columns(raw.get("columns")),
        "headers": headers,
        "include_headers": include_headers,
        "name": parse_sheet_name(raw.get("name")),
        "cell_format": (
            None
            if cell_format_value is None
            else parse_format_options("cell_format", cell_format_value)
        ),
        "header_format": (
            None
            if header_format_value is None
            else parse_format_options("header_format", header_format_value)
        ),
        "column_format": parse_column_format(raw.get("column_format")),
        "column_width": parse_column_width(raw.get("column_width")),
    }


__all__ = [
    "DEFAULT_SHEET_NAME",
    "parse_column_format",
    "parse_column_width",
    "parse_format_options",
    "parse_options",
    "parse_sheet_name",
]
