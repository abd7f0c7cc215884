"""
Entity contract shared by storage entities.

An entity declares its filters in ``__init__`` and implements the eight
persistence operations. ``BaseEntity`` checks the latter when a subclass
is instantiated, so a half-finished entity fails at construction rather
than on the first call of a missing operation::

    class Block(BaseEntity):
        def __init__(self, adapter):
            super().__init__(adapter)
            self.add_filter("id", FilterType.TEXT)
            self.add_filter("height", FilterType.NUMBER)
            self.add_filter("blockSignature", FilterType.BINARY,
                            real_name="block_signature")

        def get(self, filters, field_set=None, options=None): ...
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .adapter import IQueryAdapter
from .compiler import compile_criteria
from .exceptions import ImplementationPendingError
from .filter_map import FilterMap
from .filter_types import FilterType

if TYPE_CHECKING:
    from .compiler import CompiledPredicate, Criteria
    from .filter_types import FilterTypeRegistry

PERSISTENCE_OPERATIONS: tuple[str, ...] = (
    "get",
    "get_all",
    "count",
    "create",
    "update",
    "save",
    "is_persisted",
    "get_field_sets",
)


@runtime_checkable
class IEntity(Protocol):
    """Capabilities every storage entity exposes."""

    def get(
        self, filters: Any, field_set: str | None = None, options: Any = None
    ) -> Any: ...

    def get_all(
        self, filters: Any = None, field_set: str | None = None, options: Any = None
    ) -> Any: ...

    def count(self, filters: Any = None) -> Any: ...

    def create(self, data: Any, options: Any = None) -> Any: ...

    def update(self, filters: Any, data: Any, options: Any = None) -> Any: ...

    def save(self, filters: Any, data: Any, options: Any = None) -> Any: ...

    def is_persisted(self, filters: Any) -> Any: ...

    def get_field_sets(self) -> list[str]: ...

    def get_filters(self) -> list[str]: ...

    def parse_filters(self, criteria: Criteria | None) -> Any: ...


class BaseEntity(ABC):
    """
    Base class for entities with declarative filters.

    Persistence operations are abstract. Operations may be implemented as
    coroutines; the base class does not call them.
    """

    default_field_set: str | None = None

    def __new__(cls, *args: Any, **kwargs: Any) -> BaseEntity:
        missing = sorted(getattr(cls, "__abstractmethods__", ()))
        if missing:
            raise ImplementationPendingError(cls.__name__, missing)
        return super().__new__(cls)

    def __init__(
        self,
        adapter: IQueryAdapter,
        *,
        registry: FilterTypeRegistry | None = None,
    ) -> None:
        if not isinstance(adapter, IQueryAdapter):
            raise TypeError(
                f"{type(self).__name__} requires an IQueryAdapter, "
                f"got {type(adapter).__name__}"
            )
        self.adapter = adapter
        self.fields: dict[str, Any] = {}
        self.filters = FilterMap(registry)

    # -- persistence operations ----------------------------------------------

    @abstractmethod
    def get(
        self, filters: Any, field_set: str | None = None, options: Any = None
    ) -> Any:
        """
        Get one object from the persistence layer.

        Args:
            filters: Filter criteria, or just a primary key.
            field_set: Field set defining the collection of fields to get.
            options: Extended options.
        """
        raise ImplementationPendingError(type(self).__name__, ["get"])

    @abstractmethod
    def get_all(
        self, filters: Any = None, field_set: str | None = None, options: Any = None
    ) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["get_all"])

    @abstractmethod
    def count(self, filters: Any = None) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["count"])

    @abstractmethod
    def create(self, data: Any, options: Any = None) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["create"])

    @abstractmethod
    def update(self, filters: Any, data: Any, options: Any = None) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["update"])

    @abstractmethod
    def save(self, filters: Any, data: Any, options: Any = None) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["save"])

    @abstractmethod
    def is_persisted(self, filters: Any) -> Any:
        raise ImplementationPendingError(type(self).__name__, ["is_persisted"])

    @abstractmethod
    def get_field_sets(self) -> list[str]:
        """Return the available field sets."""
        raise ImplementationPendingError(type(self).__name__, ["get_field_sets"])

    # -- filters -------------------------------------------------------------

    def add_filter(
        self,
        filter_name: str,
        filter_type: FilterType | str = FilterType.NUMBER,
        *,
        real_name: str | None = None,
    ) -> list[str]:
        """
        Set up a filter for getters.

        Args:
            filter_name: Logical filter name.
            filter_type: Value type of the filter.
            real_name: Actual name of the column, defaults to ``filter_name``.
        """
        return self.filters.declare(filter_name, filter_type, real_name=real_name)

    def get_filters(self) -> list[str]:
        return self.filters.names()

    def compile_filters(self, criteria: Criteria | None) -> CompiledPredicate:
        """Compile criteria against this entity's filters, freezing them."""
        self.filters.freeze()
        return compile_criteria(criteria, self.filters)

    def parse_filters(self, criteria: Criteria | None) -> Any:
        """
        Compile criteria and hand the result to the adapter.

        Returns:
            The adapter's fragment, or ``None`` when there is nothing to
            filter on.
        """
        predicate = self.compile_filters(criteria)
        if not predicate:
            return None
        return self.adapter.resolve(predicate.clause, predicate.parameters)
