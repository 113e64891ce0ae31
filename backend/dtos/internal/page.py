"""
Internal Paging DTOs

Page requests and results passed between the API, service and repository
layers.
"""

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, List, TypeVar

from constants import SortDirection, IDENTIFIER_FIELD

T = TypeVar('T')


@dataclass(frozen=True)
class SortOrder:
    """One ``sort=field,dir`` criterion."""

    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class PageRequest:
    """
    Internal DTO for a page of a collection query.

    ``page`` is zero-based. An empty ``sort`` means ascending by id.
    """

    page: int = 0
    size: int = 20
    sort: List[SortOrder] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def effective_sort(self) -> List[SortOrder]:
        return list(self.sort) or [SortOrder(IDENTIFIER_FIELD)]


@dataclass
class Page(Generic[T]):
    """
    Internal DTO for one page of results.

    Used by the API layer to build pagination headers.
    """

    items: List[T]
    total: int
    request: PageRequest

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.request.size) if self.request.size else 0

    @property
    def is_last(self) -> bool:
        return self.request.page >= self.total_pages - 1
