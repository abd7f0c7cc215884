"""
Filter value types and their operator variant tables.

Each value type maps to a fixed, ordered tuple of :class:`VariantShape`
entries. Expanding a declaration walks that tuple, so the same type always
yields the same variant names in the same order.

New types are added by registering a shape tuple on a
:class:`FilterTypeRegistry`::

    registry = build_default_registry()
    registry.register("UUID", (
        VariantShape("", Comparator.EQ),
        VariantShape("_in", Comparator.IN, PlaceholderKind.CSV),
    ))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import DuplicateVariantError, NonSupportedFilterTypeError
from .templates import Comparator, PlaceholderKind, ValueTransform


class FilterType(str, Enum):
    """Built-in filter value types."""

    BOOLEAN = "BOOLEAN"
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    BINARY = "BINARY"


@dataclass(frozen=True)
class VariantShape:
    """Suffix appended to the filter name and the template it produces."""

    suffix: str
    comparator: Comparator
    placeholder: PlaceholderKind = PlaceholderKind.SCALAR
    transform: ValueTransform = ValueTransform.NONE

    def variant_name(self, filter_name: str) -> str:
        return f"{filter_name}{self.suffix}"


_EQUALITY = (
    VariantShape("", Comparator.EQ),
    VariantShape("_eql", Comparator.EQ),
    VariantShape("_neql", Comparator.NE),
)

_HEX_EQUALITY = (
    VariantShape("", Comparator.EQ, transform=ValueTransform.HEX),
    VariantShape("_eql", Comparator.EQ, transform=ValueTransform.HEX),
    VariantShape("_neql", Comparator.NE, transform=ValueTransform.HEX),
)

_IN = VariantShape("_in", Comparator.IN, PlaceholderKind.CSV)

DEFAULT_VARIANTS: dict[str, tuple[VariantShape, ...]] = {
    FilterType.BOOLEAN.value: _EQUALITY,
    FilterType.TEXT.value: (
        *_EQUALITY,
        _IN,
        VariantShape("_like", Comparator.LIKE),
    ),
    FilterType.NUMBER.value: (
        *_EQUALITY,
        VariantShape("_gt", Comparator.GT),
        VariantShape("_gte", Comparator.GE),
        VariantShape("_lt", Comparator.LT),
        VariantShape("_lte", Comparator.LE),
        _IN,
    ),
    FilterType.BINARY.value: _HEX_EQUALITY,
}


def _type_key(filter_type: object) -> str | None:
    if isinstance(filter_type, Enum):
        filter_type = filter_type.value
    if isinstance(filter_type, str):
        return filter_type
    return None


class FilterTypeRegistry:
    """
    Registry of variant tables keyed by filter type name.

    Usage::

        registry = build_default_registry()
        shapes = registry.variants_for(FilterType.TEXT)
    """

    def __init__(self) -> None:
        self._types: dict[str, tuple[VariantShape, ...]] = {}

    # -- registration --------------------------------------------------------

    def register(
        self, filter_type: FilterType | str, shapes: tuple[VariantShape, ...]
    ) -> None:
        """Register (or replace) the variant table for a type."""
        key = _type_key(filter_type)
        if key is None:
            raise NonSupportedFilterTypeError(filter_type, self.supported_types)
        suffixes = [shape.suffix for shape in shapes]
        if len(set(suffixes)) != len(suffixes):
            raise DuplicateVariantError(key, suffixes)
        self._types[key] = tuple(shapes)

    def unregister(self, filter_type: FilterType | str) -> None:
        key = _type_key(filter_type)
        if key is not None:
            self._types.pop(key, None)

    # -- look-up -------------------------------------------------------------

    def get(self, filter_type: object) -> tuple[VariantShape, ...] | None:
        key = _type_key(filter_type)
        if key is None:
            return None
        return self._types.get(key)

    def has(self, filter_type: object) -> bool:
        return self.get(filter_type) is not None

    @property
    def supported_types(self) -> list[str]:
        return list(self._types)

    def variants_for(self, filter_type: object) -> tuple[VariantShape, ...]:
        """
        Return the ordered variant table for *filter_type*.

        Raises:
            NonSupportedFilterTypeError: If the type is not registered.
        """
        shapes = self.get(filter_type)
        if shapes is None:
            raise NonSupportedFilterTypeError(filter_type, self.supported_types)
        return shapes


def build_default_registry() -> FilterTypeRegistry:
    """Create a registry holding the built-in filter types."""
    registry = FilterTypeRegistry()
    for filter_type, shapes in DEFAULT_VARIANTS.items():
        registry.register(filter_type, shapes)
    return registry


DEFAULT_FILTER_TYPE_REGISTRY: FilterTypeRegistry = build_default_registry()
