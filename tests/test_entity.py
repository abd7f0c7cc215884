"""Tests for the BaseEntity contract."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import text

from entity_filters import (
    BaseEntity,
    FilterError,
    FilterMapFrozenError,
    FilterType,
    IEntity,
    ImplementationPendingError,
    UnknownFilterKeyError,
)
from entity_filters.adapters import SQLAlchemyQueryAdapter


class RecordingAdapter:
    """Adapter double that returns what it was given."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def resolve(self, template: str, values: Any) -> tuple[str, dict[str, Any]]:
        self.calls.append((template, dict(values)))
        return template, dict(values)


class BlockEntity(BaseEntity):
    def __init__(self, adapter: Any) -> None:
        super().__init__(adapter)
        self.add_filter("id", FilterType.TEXT)
        self.add_filter("height", FilterType.NUMBER)
        self.add_filter(
            "blockSignature", FilterType.BINARY, real_name="block_signature"
        )

    def get(self, filters, field_set=None, options=None):
        return self.parse_filters(filters)

    def get_all(self, filters=None, field_set=None, options=None):
        return []

    def count(self, filters=None):
        return 0

    def create(self, data, options=None):
        return data

    def update(self, filters, data, options=None):
        return data

    def save(self, filters, data, options=None):
        return super().save(filters, data, options)

    def is_persisted(self, filters):
        return False

    def get_field_sets(self):
        return ["FIELD_SET_SIMPLE"]


class HalfEntity(BaseEntity):
    def get(self, filters, field_set=None, options=None):
        return None

    def count(self, filters=None):
        return 0


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def entity(adapter) -> BlockEntity:
    return BlockEntity(adapter)


# -- Capability checks -------------------------------------------------------


def test_complete_entity_satisfies_protocol(entity):
    assert isinstance(entity, IEntity)


def test_incomplete_entity_fails_at_construction(adapter):
    with pytest.raises(ImplementationPendingError) as exc_info:
        HalfEntity(adapter)
    err = exc_info.value
    assert err.entity == "HalfEntity"
    assert err.operations == sorted(
        ["get_all", "create", "update", "save", "is_persisted", "get_field_sets"]
    )
    assert isinstance(err, NotImplementedError)
    assert not isinstance(err, FilterError)


def test_base_operation_through_super_raises(entity):
    with pytest.raises(ImplementationPendingError, match="save"):
        entity.save({}, {})


def test_adapter_must_implement_resolve():
    with pytest.raises(TypeError, match="IQueryAdapter"):
        BlockEntity(object())


# -- Filters -----------------------------------------------------------------


def test_get_filters_lists_every_variant(entity):
    filters = entity.get_filters()
    assert len(filters) == 5 + 8 + 3
    assert "height_lte" in filters
    assert "blockSignature_neql" in filters


def test_parse_filters_hands_predicate_to_adapter(entity, adapter):
    result = entity.get({"height_gt": 5, "id_in": ["x", "y"]})
    assert result == (
        '"height" > ${height_gt} AND "id" IN (${id_in:csv})',
        {"height_gt": 5, "id_in": ["x", "y"]},
    )
    assert len(adapter.calls) == 1


def test_empty_criteria_skip_adapter(entity, adapter):
    assert entity.parse_filters({}) is None
    assert entity.parse_filters(None) is None
    assert adapter.calls == []


def test_unknown_key_never_reaches_adapter(entity, adapter):
    with pytest.raises(UnknownFilterKeyError):
        entity.parse_filters({"height": 1, "weight": 2})
    assert adapter.calls == []


def test_filters_frozen_after_first_compile(entity):
    entity.compile_filters({"id": "x"})
    with pytest.raises(FilterMapFrozenError):
        entity.add_filter("timestamp", FilterType.NUMBER)


def test_binary_filter_with_sqlalchemy_adapter():
    entity = BlockEntity(SQLAlchemyQueryAdapter())
    clause = entity.parse_filters({"blockSignature": "deadbeef"})
    assert str(clause) == "\"block_signature\" = DECODE(:blockSignature, 'hex')"
    assert clause.compile().params == {"blockSignature": "deadbeef"}


def test_sqlalchemy_fragment_is_text_clause():
    entity = BlockEntity(SQLAlchemyQueryAdapter())
    clause = entity.parse_filters([{"id": "a"}, {"height_gte": 2}])
    assert isinstance(clause, type(text("")))
    assert str(clause) == '("id" = :id__0) OR ("height" >= :height_gte__1)'
