"""Pure state transitions for the listing query."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from ..models.query import FilterCriteria, PageRequest, QueryState, SortOrder


@dataclass(frozen=True)
class ApplyFilters:
    filters: FilterCriteria


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class ChangeSort:
    order: SortOrder


@dataclass(frozen=True)
class ChangePage:
    page: int


@dataclass(frozen=True)
class ChangePageSize:
    limit: int


QueryEvent = Union[ApplyFilters, ClearFilters, ChangeSort, ChangePage, ChangePageSize]


def reduce(state: QueryState, event: QueryEvent) -> QueryState:
    """Return the QueryState that follows ``event``.

    Sorting keeps the current page while filters and page size go back to the
    first page.
    """

    if isinstance(event, ApplyFilters):
        return replace(state, filters=event.filters, page=replace(state.page, page=1))
    if isinstance(event, ClearFilters):
        return replace(
            state,
            filters=FilterCriteria(),
            sort=SortOrder.NEWEST,
            page=replace(state.page, page=1),
        )
    if isinstance(event, ChangeSort):
        return replace(state, sort=SortOrder(event.order))
    if isinstance(event, ChangePage):
        return replace(state, page=replace(state.page, page=max(1, int(event.page))))
    if isinstance(event, ChangePageSize):
        return replace(state, page=PageRequest(page=1, limit=int(event.limit)))
    raise TypeError(f"unsupported query event: {event!r}")


__all__ = [
    "ApplyFilters",
    "ChangePage",
    "ChangePageSize",
    "ChangeSort",
    "ClearFilters",
    "QueryEvent",
    "reduce",
]
