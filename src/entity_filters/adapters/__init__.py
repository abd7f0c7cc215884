"""Concrete ``IQueryAdapter`` implementations."""

from .sqlalchemy import SQLAlchemyQueryAdapter

__all__ = ["SQLAlchemyQueryAdapter"]
