"""FilterMap — per-entity registry of predicate templates."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .declarations import FilterDeclaration
from .exceptions import FilterMapFrozenError
from .expander import expand_declaration
from .filter_types import DEFAULT_FILTER_TYPE_REGISTRY, FilterType

if TYPE_CHECKING:
    from .filter_types import FilterTypeRegistry
    from .templates import PredicateTemplate

logger = logging.getLogger("entity_filters.filters")


class FilterMap(Mapping[str, "PredicateTemplate"]):
    """
    Mapping of variant name to :class:`PredicateTemplate`.

    Filters are declared during entity construction. Declaring is atomic:
    the declaration is validated and fully expanded before the map is
    touched. Re-declaring a name replaces every variant it produced before.

    Once :meth:`freeze` has been called the map is read-only and may be
    shared freely between threads.
    """

    def __init__(self, registry: FilterTypeRegistry | None = None) -> None:
        self._registry = registry or DEFAULT_FILTER_TYPE_REGISTRY
        self._templates: dict[str, PredicateTemplate] = {}
        self._declarations: dict[str, FilterDeclaration] = {}
        self._variants_by_name: dict[str, list[str]] = {}
        self._frozen = False

    # -- declaration ---------------------------------------------------------

    def declare(
        self,
        name: str,
        filter_type: FilterType | str = FilterType.NUMBER,
        *,
        real_name: str | None = None,
    ) -> list[str]:
        """
        Declare a filter and register all of its variants.

        Args:
            name: Logical filter name, prefix of every variant.
            filter_type: Value type, selects the variant table.
            real_name: Actual column name, defaults to ``name``.

        Returns:
            The variant names created, in table order.

        Raises:
            FilterMapFrozenError: If the map has been frozen.
            NonSupportedFilterTypeError: If the type is not registered.
            InvalidFilterDeclarationError: If a name is not usable.
        """
        if self._frozen:
            raise FilterMapFrozenError(name)

        self._registry.variants_for(filter_type)
        declaration = FilterDeclaration.of(name, filter_type, real_name)
        templates = expand_declaration(declaration, self._registry)

        for variant in self._variants_by_name.pop(name, []):
            self._templates.pop(variant, None)
        for variants in self._variants_by_name.values():
            variants[:] = [v for v in variants if v not in templates]

        self._templates.update(templates)
        self._variants_by_name[name] = list(templates)
        self._declarations[name] = declaration

        logger.debug(
            "Declared filter %s (%s) on column %s: %s",
            name,
            declaration.filter_type,
            declaration.column,
            ", ".join(templates),
        )
        return list(templates)

    def freeze(self) -> None:
        """Make the map read-only. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.debug("Froze filter map with %d variants", len(self._templates))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- introspection -------------------------------------------------------

    def names(self) -> list[str]:
        """All registered variant names, in declaration order."""
        return list(self._templates)

    @property
    def declarations(self) -> Mapping[str, FilterDeclaration]:
        return MappingProxyType(self._declarations)

    def variants_of(self, name: str) -> list[str]:
        """Variant names produced by the declaration called *name*."""
        return list(self._variants_by_name.get(name, []))

    def as_mapping(self) -> Mapping[str, PredicateTemplate]:
        return MappingProxyType(self._templates)

    # -- Mapping protocol ----------------------------------------------------

    def __getitem__(self, variant: str) -> PredicateTemplate:
        return self._templates[variant]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, variant: Any) -> bool:
        return variant in self._templates

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<FilterMap {state} variants={len(self._templates)}>"
