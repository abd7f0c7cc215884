"""Declarative entity filters — type-driven expansion and predicate compilation."""

from __future__ import annotations

from .adapter import IQueryAdapter
from .compiler import CompiledPredicate, Criteria, compile_criteria
from .declarations import FilterDeclaration
from .entity import PERSISTENCE_OPERATIONS, BaseEntity, IEntity
from .exceptions import (
    AdapterError,
    DuplicateVariantError,
    EntityFiltersError,
    FilterError,
    FilterMapFrozenError,
    ImplementationPendingError,
    InvalidCriteriaError,
    InvalidFilterDeclarationError,
    MissingParameterError,
    NonSupportedFilterTypeError,
    UnknownFilterKeyError,
)
from .expander import expand_declaration
from .filter_map import FilterMap
from .filter_types import (
    DEFAULT_FILTER_TYPE_REGISTRY,
    FilterType,
    FilterTypeRegistry,
    VariantShape,
    build_default_registry,
)
from .templates import (
    Comparator,
    PlaceholderKind,
    PredicateTemplate,
    ValueTransform,
    iter_placeholders,
)

__all__ = [
    # Types and registry
    "FilterType",
    "FilterTypeRegistry",
    "VariantShape",
    "DEFAULT_FILTER_TYPE_REGISTRY",
    "build_default_registry",
    # Templates
    "Comparator",
    "PlaceholderKind",
    "ValueTransform",
    "PredicateTemplate",
    "iter_placeholders",
    # Declaration and expansion
    "FilterDeclaration",
    "FilterMap",
    "expand_declaration",
    # Compilation
    "CompiledPredicate",
    "Criteria",
    "compile_criteria",
    # Entity contract
    "IQueryAdapter",
    "IEntity",
    "BaseEntity",
    "PERSISTENCE_OPERATIONS",
    # Exceptions
    "EntityFiltersError",
    "FilterError",
    "NonSupportedFilterTypeError",
    "DuplicateVariantError",
    "UnknownFilterKeyError",
    "InvalidCriteriaError",
    "InvalidFilterDeclarationError",
    "FilterMapFrozenError",
    "AdapterError",
    "MissingParameterError",
    "ImplementationPendingError",
]
