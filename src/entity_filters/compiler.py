"""
Compile runtime filter criteria into a parameterized predicate.

Criteria come in two shapes:

- a **group** — ``{"height_gte": 10, "status": "ok"}`` — whose conditions
  are joined with ``AND`` in key order;
- a **group list** — ``[{...}, {...}]`` — whose groups are each
  parenthesized and joined with ``OR`` in list order.

Every key is checked against the filter map before any output is built,
so an unknown key never leaves a partial clause behind. Values are only
ever placed in :attr:`CompiledPredicate.parameters`; the clause contains
placeholders exclusively.

Within a group list the same variant may appear in several groups with
different values, so parameters there are suffixed with the group index::

    [{"status": "a"}, {"status": "b"}]
    -> ('("status" = ${status__0}) OR ("status" = ${status__1})',
        {"status__0": "a", "status__1": "b"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidCriteriaError, UnknownFilterKeyError

logger = logging.getLogger("entity_filters.compiler")

Group = Mapping[str, Any]
GroupList = Sequence[Group]
Criteria = Group | GroupList


@dataclass(frozen=True)
class CompiledPredicate:
    """A predicate clause plus the values for its placeholders."""

    clause: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.clause)


def compile_criteria(
    criteria: Criteria | None,
    filter_map: Mapping[str, Any],
) -> CompiledPredicate:
    """
    Resolve criteria keys against *filter_map* and compose the clause.

    Args:
        criteria: A group mapping, a sequence of group mappings, or ``None``.
        filter_map: Variant name to :class:`PredicateTemplate` mapping.

    Returns:
        The compiled predicate; empty when there is nothing to filter on.

    Raises:
        InvalidCriteriaError: If criteria have an unsupported shape.
        UnknownFilterKeyError: If any key is not a declared variant.
    """
    groups, is_list = _normalise(criteria)
    _validate_keys(groups, filter_map)

    if not groups:
        return CompiledPredicate()
    if any(not group for group in groups):
        # An empty group matches every row, and so does any OR containing it.
        logger.debug("Criteria contain an empty group; no predicate emitted")
        return CompiledPredicate()

    if not is_list:
        clause, parameters = _compile_group(groups[0], filter_map)
        return CompiledPredicate(clause=clause, parameters=parameters)

    parts: list[str] = []
    parameters: dict[str, Any] = {}
    for index, group in enumerate(groups):
        group_clause, group_parameters = _compile_group(
            group, filter_map, suffix=f"__{index}"
        )
        parts.append(f"({group_clause})")
        parameters.update(group_parameters)
    return CompiledPredicate(clause=" OR ".join(parts), parameters=parameters)


def _normalise(criteria: Any) -> tuple[list[Group], bool]:
    if criteria is None:
        return [], False
    if isinstance(criteria, Mapping):
        return [criteria], False
    if isinstance(criteria, Sequence) and not isinstance(criteria, (str, bytes)):
        for index, group in enumerate(criteria):
            if not isinstance(group, Mapping):
                raise InvalidCriteriaError(
                    f"Expected a mapping of filters, got {type(group).__name__}",
                    path=f"[{index}]",
                )
        return list(criteria), True
    raise InvalidCriteriaError(
        "Criteria must be a mapping of filters or a list of such mappings, "
        f"got {type(criteria).__name__}"
    )


def _validate_keys(groups: list[Group], filter_map: Mapping[str, Any]) -> None:
    unknown: list[str] = []
    for group in groups:
        for key in group:
            if key not in filter_map and str(key) not in unknown:
                unknown.append(str(key))
    if unknown:
        raise UnknownFilterKeyError(unknown, list(filter_map))


def _compile_group(
    group: Group,
    filter_map: Mapping[str, Any],
    suffix: str = "",
) -> tuple[str, dict[str, Any]]:
    conditions: list[str] = []
    parameters: dict[str, Any] = {}
    for key, value in group.items():
        template = filter_map[key]
        parameter = f"{template.parameter}{suffix}"
        conditions.append(template.render(parameter))
        parameters[parameter] = value
    return " AND ".join(conditions), parameters
