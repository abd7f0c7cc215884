"""
Predicate templates and placeholder syntax.

A template is a single comparison against a quoted column whose right-hand
side is a named placeholder, never a value::

    "height" >= ${height_gte}
    "status" IN (${status_in:csv})
    "id" = DECODE(${id}, 'hex')

``${name}`` is a scalar bind point and ``${name:csv}`` a list bind point.
Adapters locate placeholders with :func:`iter_placeholders`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::(csv))?\}")


class Comparator(str, Enum):
    """SQL comparison emitted between column and bind point."""

    EQ = "="
    NE = "<>"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    IN = "IN"
    LIKE = "LIKE"


class PlaceholderKind(str, Enum):
    SCALAR = "scalar"
    CSV = "csv"


class ValueTransform(str, Enum):
    """Transform applied to the bound value inside the database."""

    NONE = "none"
    HEX = "hex"


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def placeholder(name: str, kind: PlaceholderKind = PlaceholderKind.SCALAR) -> str:
    if kind is PlaceholderKind.CSV:
        return "${" + name + ":csv}"
    return "${" + name + "}"


def iter_placeholders(template: str) -> Iterator[tuple[str, PlaceholderKind]]:
    """Yield ``(name, kind)`` for every placeholder in *template*, in order."""
    for match in PLACEHOLDER_PATTERN.finditer(template):
        kind = PlaceholderKind.CSV if match.group(2) else PlaceholderKind.SCALAR
        yield match.group(1), kind


@dataclass(frozen=True)
class PredicateTemplate:
    """
    One operator variant of a declared filter.

    Attributes:
        variant: Variant name, also the default bound parameter name.
        column: Real column compared on the left-hand side.
        comparator: Comparison operator.
        placeholder: Scalar or csv bind point.
        transform: Database-side transform wrapped around the bind point.
    """

    variant: str
    column: str
    comparator: Comparator
    placeholder: PlaceholderKind = PlaceholderKind.SCALAR
    transform: ValueTransform = ValueTransform.NONE

    @property
    def parameter(self) -> str:
        return self.variant

    @property
    def template(self) -> str:
        return self.render()

    def render(self, parameter: str | None = None) -> str:
        """Render the clause, optionally binding under another parameter name."""
        bind = placeholder(parameter or self.parameter, self.placeholder)
        if self.transform is ValueTransform.HEX:
            bind = f"DECODE({bind}, 'hex')"
        if self.placeholder is PlaceholderKind.CSV:
            bind = f"({bind})"
        return f"{quote_identifier(self.column)} {self.comparator.value} {bind}"

    def __str__(self) -> str:
        return self.template
