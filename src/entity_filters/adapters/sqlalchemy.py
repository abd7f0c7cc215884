"""
Bind compiled predicates into SQLAlchemy ``TextClause`` objects.

Scalar placeholders become named bind parameters. List placeholders are
expanded into one bind parameter per element, so the template's own
parentheses stay valid SQL::

    "status" IN (${status_in:csv})   with  ["a", "b"]
    -> "status" IN (:status_in_0, :status_in_1)

An empty list renders ``NULL`` and therefore matches no row. An element
name that collides with another placeholder gets a numeric suffix
(``:tag_in_0_1``), so every value stays on its own bind parameter.

Usage::

    adapter = SQLAlchemyQueryAdapter()
    predicate = compile_criteria({"height_gte": 10}, entity.filters)
    stmt = select(blocks).where(adapter.resolve(predicate.clause,
                                                predicate.parameters))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy import bindparam, text

from ..exceptions import MissingParameterError
from ..templates import PLACEHOLDER_PATTERN, PlaceholderKind, iter_placeholders

if TYPE_CHECKING:
    import re
    from collections.abc import Mapping

    from sqlalchemy.sql.elements import BindParameter, TextClause

logger = logging.getLogger("entity_filters.adapter")


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


class SQLAlchemyQueryAdapter:
    """:class:`IQueryAdapter` producing bound ``sqlalchemy.text`` clauses."""

    def __init__(self, *, empty_list_sql: str = "NULL") -> None:
        self._empty_list_sql = empty_list_sql

    def resolve(self, template: str, values: Mapping[str, Any]) -> TextClause:
        """
        Replace every placeholder in *template* with bind parameters.

        Raises:
            MissingParameterError: If a placeholder has no value.
        """
        # Scalar placeholders keep their own names; list elements never take one.
        scalars = {
            name
            for name, kind in iter_placeholders(template)
            if kind is PlaceholderKind.SCALAR
        }
        binds: dict[str, BindParameter[Any]] = {}
        bound_names: dict[tuple[str, int | None], str] = {}

        def _bind(origin: tuple[str, int | None], candidate: str, value: Any) -> str:
            if origin in bound_names:
                return f":{bound_names[origin]}"
            name = candidate
            counter = 0
            while name in binds or (origin[1] is not None and name in scalars):
                counter += 1
                name = f"{candidate}_{counter}"
            bound_names[origin] = name
            binds[name] = bindparam(name, value)
            return f":{name}"

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in values:
                raise MissingParameterError(name)
            value = values[name]
            if not match.group(2):
                return _bind((name, None), name, value)
            items = _as_list(value)
            if not items:
                return self._empty_list_sql
            return ", ".join(
                _bind((name, index), f"{name}_{index}", item)
                for index, item in enumerate(items)
            )

        sql = PLACEHOLDER_PATTERN.sub(_replace, template)
        logger.debug("Resolved predicate with %d bind parameters", len(binds))
        clause = text(sql)
        if binds:
            clause = clause.bindparams(*binds.values())
        return clause
