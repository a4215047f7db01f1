"""Column specification type definitions.

A column specification is a closed tagged union parsed once from loose
user input (strings, lists, mappings) by ``record_sheet.columns``.

All types are immutable TypedDicts with strict typing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal, TypedDict


class LeafSpec(TypedDict):
    """A single named field.

    Attributes:
        type: Always "leaf".
        name: Field name read from the record.
    """

    type: Literal["leaf"]
    name: str


class GroupSpec(TypedDict):
    """Ordered sibling specifications, flattened in order.

    Attributes:
        type: Always "group".
        items: Child specifications.
    """

    type: Literal["group"]
    items: list[ColumnSpec]


class NestingSpec(TypedDict):
    """Descend into named sub-objects before applying nested specifications.

    Attributes:
        type: Always "nesting".
        entries: (field name, nested specification) pairs in mapping order.
    """

    type: Literal["nesting"]
    entries: list[tuple[str, ColumnSpec]]


ColumnSpec = LeafSpec | GroupSpec | NestingSpec

# Loose input accepted for a column specification: "name", ["a", "b"],
# {"address": ["city", "zip"]}, or any nesting of those.
ColumnInput = str | Sequence["ColumnInput"] | Mapping[str, "ColumnInput"]


__all__ = [
    "ColumnInput",
    "ColumnSpec",
    "GroupSpec",
    "LeafSpec",
    "NestingSpec",
]
