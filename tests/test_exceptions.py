"""Tests for exceptions module."""

from __future__ import annotations

from entity_filters.exceptions import (
    AdapterError,
    EntityFiltersError,
    FilterError,
    FilterMapFrozenError,
    ImplementationPendingError,
    InvalidCriteriaError,
    MissingParameterError,
    NonSupportedFilterTypeError,
    UnknownFilterKeyError,
)

# -- NonSupportedFilterTypeError ---------------------------------------------


def test_non_supported_filter_type():
    err = NonSupportedFilterTypeError("DATE", ["TEXT", "BOOLEAN"])
    assert "DATE" in str(err)
    assert "BOOLEAN, TEXT" in str(err)
    d = err.to_dict()
    assert d["error"] == "NON_SUPPORTED_FILTER_TYPE"
    assert d["filter_type"] == "DATE"
    assert d["supported_types"] == ["BOOLEAN", "TEXT"]


# -- UnknownFilterKeyError ---------------------------------------------------


def test_unknown_filter_key_fuzzy_suggestion():
    err = UnknownFilterKeyError(["heigth"], ["height", "height_gt", "id"])
    assert "heigth" in str(err)
    assert "height" in str(err)
    assert "height" in err.suggestions["heigth"]


def test_unknown_filter_key_no_matches():
    err = UnknownFilterKeyError(["zzzzz"], ["id", "height"])
    d = err.to_dict()
    assert d["error"] == "UNKNOWN_FILTER_KEY"
    assert d["suggestions"] == {"zzzzz": []}
    assert d["available_filters"] == ["height", "id"]
    assert "Did you mean" not in str(err)


# -- Other errors ------------------------------------------------------------


def test_invalid_criteria_to_dict():
    err = InvalidCriteriaError("bad shape", path="[2]")
    assert err.to_dict() == {
        "error": "INVALID_CRITERIA",
        "message": "bad shape",
        "path": "[2]",
    }


def test_frozen_error_names_filter():
    err = FilterMapFrozenError("timestamp")
    assert err.name == "timestamp"
    assert "timestamp" in str(err)


def test_missing_parameter_is_adapter_error():
    err = MissingParameterError("id_in")
    assert isinstance(err, AdapterError)
    assert not isinstance(err, FilterError)
    assert err.to_dict() == {
        "error": "MissingParameterError",
        "message": "No value supplied for placeholder 'id_in'",
    }


def test_implementation_pending_is_distinct_from_filter_errors():
    err = ImplementationPendingError("Block", ["update", "get"])
    assert isinstance(err, EntityFiltersError)
    assert isinstance(err, NotImplementedError)
    assert not isinstance(err, FilterError)
    assert str(err) == "Block does not implement: get, update"
    assert err.to_dict()["operations"] == ["get", "update"]


def test_implementation_pending_without_operations():
    assert str(ImplementationPendingError("Block")) == "Block: implementation pending"
