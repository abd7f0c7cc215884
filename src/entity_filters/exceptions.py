"""
Entity filter exception hierarchy.

All exceptions inherit from ``EntityFiltersError`` and provide
``to_dict()`` for API-friendly error responses.

``FilterError`` covers declaration and compilation failures.
``ImplementationPendingError`` is deliberately outside that branch: it
signals an incomplete entity integration, not a bad query.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class EntityFiltersError(Exception):
    """Root exception for the entity filters package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterError(EntityFiltersError):
    """Base class for filter declaration and compilation errors."""


class NonSupportedFilterTypeError(FilterError):
    """A filter was declared with a value type the registry does not know."""

    def __init__(self, filter_type: object, supported: list[str] | None = None) -> None:
        self.filter_type = filter_type
        self.supported = sorted(supported or [])

        message = f"Non supported filter type: {filter_type!r}."
        if self.supported:
            message += f" Supported types: {', '.join(self.supported)}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NON_SUPPORTED_FILTER_TYPE",
            "filter_type": str(self.filter_type),
            "supported_types": self.supported,
        }


class UnknownFilterKeyError(FilterError):
    """
    Criteria reference one or more variants absent from the filter map.

    Provides fuzzy-matched suggestions for every unknown key::

        Unknown filter key(s): 'heigth_gt'.
        Did you mean: heigth_gt -> height_gt?
    """

    def __init__(self, keys: list[str], available: list[str]) -> None:
        self.keys = list(keys)
        self.available = list(available)
        self.suggestions: dict[str, list[str]] = {
            key: get_close_matches(key, self.available, n=3, cutoff=0.6)
            for key in self.keys
        }

        message = f"Unknown filter key(s): {', '.join(repr(k) for k in self.keys)}."
        hints = [
            f"{key} -> {', '.join(matches)}"
            for key, matches in self.suggestions.items()
            if matches
        ]
        if hints:
            message += f" Did you mean: {'; '.join(hints)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_FILTER_KEY",
            "keys": self.keys,
            "suggestions": self.suggestions,
            "available_filters": sorted(self.available),
        }


class InvalidCriteriaError(FilterError):
    """Criteria are neither a group mapping nor a list of group mappings."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_CRITERIA",
            "message": self.message,
            "path": self.path,
        }


class InvalidFilterDeclarationError(FilterError):
    """Filter name or real column name cannot be used in a predicate."""


class DuplicateVariantError(FilterError, ValueError):
    """A variant table repeats a suffix, so two variants would share a name."""

    def __init__(self, filter_type: str, suffixes: list[str]) -> None:
        self.filter_type = filter_type
        self.suffixes = list(suffixes)
        super().__init__(f"Duplicate variant suffixes for {filter_type}: {suffixes}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DUPLICATE_VARIANT",
            "filter_type": self.filter_type,
            "suffixes": self.suffixes,
        }


class FilterMapFrozenError(FilterError):
    """A filter was declared after the filter map became read-only."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot declare filter {name!r}: filters are frozen once the "
            f"first query has been compiled"
        )


class AdapterError(EntityFiltersError):
    """Base class for errors raised while binding a compiled predicate."""


class MissingParameterError(AdapterError):
    """A template placeholder has no matching value."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No value supplied for placeholder {name!r}")


class ImplementationPendingError(EntityFiltersError, NotImplementedError):
    """
    A persistence operation was not implemented by the entity.

    Raised at construction for every abstract operation a subclass left
    out, and by the base implementations when reached through ``super()``.
    """

    def __init__(self, entity: str, operations: list[str] | None = None) -> None:
        self.entity = entity
        self.operations = sorted(operations or [])

        if self.operations:
            message = (
                f"{entity} does not implement: {', '.join(self.operations)}"
            )
        else:
            message = f"{entity}: implementation pending"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "IMPLEMENTATION_PENDING",
            "entity": self.entity,
            "operations": self.operations,
        }
