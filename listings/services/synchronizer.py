"""Keeps the property listing in step with the user's filter, sort and page choices.

The synchronizer owns two things: the ``QueryState`` that describes what the
user asked for, and the display state (status, last result, error message)
that the browse page renders. State changes go through
:func:`listings.services.query_state.reduce`; :meth:`ListingSynchronizer.sync`
is the effect runner that turns a changed QueryState into one backend fetch.

Several fetches may be outstanding at once (quick page clicks, a sort change
while a page is loading). Nothing is cancelled: every fetch carries a ticket
and only the most recently issued ticket may touch the display state, so a
slow stale response can never overwrite a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from ..errors import ApiError
from ..models.property import PageResult, Property
from ..models.query import FilterCriteria, QueryState, SortOrder
from ..utils.logging import get_logger
from .query_state import (
    ApplyFilters,
    ChangePage,
    ChangePageSize,
    ChangeSort,
    ClearFilters,
    QueryEvent,
    reduce,
)

LOGGER = get_logger("services.synchronizer")

LOAD_ERROR_MESSAGE = "Failed to load properties."

Fetcher = Callable[[QueryState], Awaitable[PageResult]]


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


@dataclass(frozen=True)
class FetchTicket:
    request_id: int
    query: QueryState


class ListingSynchronizer:
    def __init__(self, fetch: Fetcher, query: Optional[QueryState] = None) -> None:
        self._fetch = fetch
        self.query = query or QueryState()
        self.draft: FilterCriteria = self.query.filters
        self.status = FetchStatus.IDLE
        self.result: Optional[PageResult] = None
        self.error: Optional[str] = None
        self.scroll_requested = False
        self._issued = 0
        self._issued_query: Optional[QueryState] = None

    # ------------------------------------------------------------------
    # User operations
    def set_draft_filter(self, name: str, value) -> None:
        self.draft = self.draft.with_value(name, value)

    def apply_filters(self) -> QueryState:
        self.scroll_requested = True
        return self.dispatch(ApplyFilters(self.draft))

    def clear_filters(self) -> QueryState:
        self.draft = FilterCriteria()
        self.scroll_requested = True
        return self.dispatch(ClearFilters())

    def set_sort(self, order: SortOrder | str) -> QueryState:
        return self.dispatch(ChangeSort(SortOrder(order)))

    def set_page(self, page: int) -> QueryState:
        return self.dispatch(ChangePage(page))

    def set_page_size(self, limit: int) -> QueryState:
        return self.dispatch(ChangePageSize(limit))

    def dispatch(self, event: QueryEvent) -> QueryState:
        self.query = reduce(self.query, event)
        return self.query

    def consume_scroll(self) -> bool:
        requested, self.scroll_requested = self.scroll_requested, False
        return requested

    # ------------------------------------------------------------------
    # Read projections
    @property
    def active_filter_count(self) -> int:
        return self.query.filters.active_count

    @property
    def visible(self) -> Optional[PageResult]:
        if self.status is FetchStatus.READY:
            return self.result
        return None

    @property
    def items(self) -> List[Property]:
        shown = self.visible
        return list(shown.items) if shown else []

    @property
    def total(self) -> int:
        shown = self.visible
        return shown.total if shown else 0

    @property
    def has_next(self) -> bool:
        shown = self.visible
        return bool(shown and shown.has_next)

    @property
    def has_prev(self) -> bool:
        shown = self.visible
        return bool(shown and shown.has_prev)

    # ------------------------------------------------------------------
    # Request sequencing
    def needs_fetch(self) -> bool:
        return self.query != self._issued_query

    def begin_fetch(self) -> FetchTicket:
        self._issued += 1
        ticket = FetchTicket(request_id=self._issued, query=self.query)
        self._issued_query = self.query
        self.status = FetchStatus.LOADING
        self.error = None
        LOGGER.debug("fetch_issued request_id=%s params=%s", ticket.request_id, self.query.to_params())
        return ticket

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.request_id == self._issued

    def resolve(self, ticket: FetchTicket, result: PageResult) -> bool:
        if not self.is_current(ticket):
            LOGGER.debug("fetch_discarded request_id=%s latest=%s", ticket.request_id, self._issued)
            return False
        self.result = result
        self.status = FetchStatus.READY
        self.error = None
        LOGGER.debug(
            "fetch_resolved request_id=%s page=%s total=%s",
            ticket.request_id,
            result.page,
            result.total,
        )
        return True

    def reject(self, ticket: FetchTicket, exc: Exception) -> bool:
        if not self.is_current(ticket):
            LOGGER.debug("fetch_failure_discarded request_id=%s latest=%s", ticket.request_id, self._issued)
            return False
        self.status = FetchStatus.ERRORED
        self.error = LOAD_ERROR_MESSAGE
        LOGGER.warning("fetch_failed request_id=%s error=%s", ticket.request_id, exc)
        return True

    # ------------------------------------------------------------------
    # Effect runner
    async def sync(self) -> bool:
        """Fetch the listing if the QueryState changed since the last fetch."""

        if not self.needs_fetch():
            return False
        await self._run(self.begin_fetch())
        return True

    async def retry(self) -> None:
        """Fetch again from the unchanged QueryState."""

        await self._run(self.begin_fetch())

    async def _run(self, ticket: FetchTicket) -> None:
        try:
            result = await self._fetch(ticket.query)
        except ApiError as exc:
            self.reject(ticket, exc)
            return
        except Exception as exc:
            # Leave the error state behind before the failure propagates.
            self.reject(ticket, exc)
            raise
        self.resolve(ticket, result)


__all__ = ["FetchStatus", "FetchTicket", "Fetcher", "LOAD_ERROR_MESSAGE", "ListingSynchronizer"]
