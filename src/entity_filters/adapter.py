"""IQueryAdapter — protocol for binding compiled predicates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class IQueryAdapter(Protocol):
    """Substitute placeholder values into a predicate template.

    Implementations own all escaping and parameter binding; the compiler
    never inlines values. Examples include SQLAlchemy ``TextClause``
    construction or a driver-specific formatter.
    """

    def resolve(self, template: str, values: Mapping[str, Any]) -> Any:
        """Return the backend-native fragment for *template*."""
        ...
