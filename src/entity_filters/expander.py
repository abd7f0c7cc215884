"""
Expand a filter declaration into its operator variants.

The left-hand side of every variant is the declaration's real column and
every variant binds a parameter named after itself, so ``height_gte``
expands to ``"height" >= ${height_gte}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .filter_types import DEFAULT_FILTER_TYPE_REGISTRY
from .templates import PredicateTemplate

if TYPE_CHECKING:
    from .declarations import FilterDeclaration
    from .filter_types import FilterTypeRegistry


def expand_declaration(
    declaration: FilterDeclaration,
    registry: FilterTypeRegistry | None = None,
) -> dict[str, PredicateTemplate]:
    """
    Build one template per variant of the declaration's type.

    Returns:
        Ordered mapping of variant name to template.

    Raises:
        NonSupportedFilterTypeError: If the type is not registered.
    """
    reg = registry or DEFAULT_FILTER_TYPE_REGISTRY
    templates: dict[str, PredicateTemplate] = {}
    for shape in reg.variants_for(declaration.filter_type):
        variant = shape.variant_name(declaration.name)
        templates[variant] = PredicateTemplate(
            variant=variant,
            column=declaration.column,
            comparator=shape.comparator,
            placeholder=shape.placeholder,
            transform=shape.transform,
        )
    return templates
