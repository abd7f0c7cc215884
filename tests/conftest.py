"""Shared fixtures for entity filter tests."""

from __future__ import annotations

import pytest

from entity_filters import FilterMap, FilterType, build_default_registry


@pytest.fixture
def registry():
    """Fresh filter type registry holding the built-in types."""
    return build_default_registry()


@pytest.fixture
def filter_map(registry) -> FilterMap:
    """Filter map declared the way a blocks entity would declare it."""
    filters = FilterMap(registry)
    filters.declare("id", FilterType.TEXT)
    filters.declare("height", FilterType.NUMBER)
    filters.declare("isActive", FilterType.BOOLEAN, real_name="is_active")
    filters.declare("blockSignature", FilterType.BINARY, real_name="block_signature")
    return filters
