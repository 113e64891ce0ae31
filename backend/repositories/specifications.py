"""
Specification Pattern Implementation

Encapsulates query criteria in small objects that can be checked against an
entity in memory or turned into a SQLAlchemy filter expression.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy.sql.elements import ColumnElement


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single query criterion over one model.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if a candidate object satisfies this specification.

        Args:
            candidate: Object to check

        Returns:
            True if candidate satisfies specification
        """

    @abstractmethod
    def to_sql_filter(self, model: type) -> ColumnElement:
        """Convert specification to a SQLAlchemy filter expression on ``model``."""


class FieldEquals(Specification[T]):
    """
    A column equals a value.

    Used to find the rows whose foreign key points at a given entity.
    """

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value

    def is_satisfied_by(self, candidate: T) -> bool:
        return getattr(candidate, self.field) == self.value

    def to_sql_filter(self, model: type) -> ColumnElement:
        return getattr(model, self.field) == self.value

    def __repr__(self):
        return f"FieldEquals({self.field}={self.value!r})"
