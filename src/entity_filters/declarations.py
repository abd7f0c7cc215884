"""Immutable filter declarations."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import InvalidFilterDeclarationError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class FilterDeclaration(BaseModel):
    """
    A filter an entity supports: its name, value type and real column.

    ``name`` doubles as the prefix of every bind parameter, so it must be a
    plain identifier. ``real_name`` defaults to ``name``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    filter_type: str
    real_name: str | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"filter name must be an identifier, got {value!r}")
        return value

    @field_validator("filter_type", mode="before")
    @classmethod
    def _enum_value(cls, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value

    @field_validator("real_name")
    @classmethod
    def _check_real_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("real_name must not be blank")
        # Bind markers belong to the right-hand side only.
        if "${" in value or ":" in value:
            raise ValueError(
                f"real_name must not contain bind markers ('${{' or ':'), got {value!r}"
            )
        return value

    @property
    def column(self) -> str:
        return self.real_name or self.name

    @classmethod
    def of(
        cls,
        name: str,
        filter_type: Any,
        real_name: str | None = None,
    ) -> FilterDeclaration:
        """Build a declaration, reporting bad input as a filter error."""
        try:
            return cls(name=name, filter_type=filter_type, real_name=real_name)
        except ValidationError as e:
            raise InvalidFilterDeclarationError(
                f"Invalid filter declaration {name!r}: {e.errors()[0]['msg']}"
            ) from e
