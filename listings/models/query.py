"""Filter, sort and pagination state for the property listing query.

These are immutable values: every user action produces a new ``QueryState``
through :func:`listings.services.query_state.reduce`, and value equality is
what decides whether the listing has to be fetched again.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Dict, Tuple

from ..utils.coerce import to_param, to_str

PAGE_SIZES: Tuple[int, ...] = (6, 9, 12, 18)
DEFAULT_PAGE_SIZE = 9


class SortOrder(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    ROI_DESC = "roi_desc"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortOrder.NEWEST: "Newest",
    SortOrder.PRICE_ASC: "Price: Low to High",
    SortOrder.PRICE_DESC: "Price: High to Low",
    SortOrder.ROI_DESC: "ROI: High to Low",
}


@dataclass(frozen=True)
class FilterCriteria:
    """Optional constraints on the listing; an empty string means unconstrained."""

    location: str = ""
    category_id: str = ""
    min_price: str = ""
    max_price: str = ""
    min_roi: str = ""
    min_area: str = ""
    max_distance_from_highway: str = ""
    status: str = ""

    def with_value(self, name: str, value) -> "FilterCriteria":
        if name not in FILTER_FIELDS:
            raise KeyError(f"unknown filter field: {name}")
        return replace(self, **{name: "" if value is None else str(value)})

    def active_fields(self) -> Tuple[str, ...]:
        return tuple(name for name in FILTER_FIELDS if to_str(getattr(self, name)))

    @property
    def active_count(self) -> int:
        return len(self.active_fields())

    def is_empty(self) -> bool:
        return self.active_count == 0


FILTER_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(FilterCriteria))

# Declared order doubles as the query-string order.
FILTER_PARAMS: Dict[str, str] = {
    "location": "location",
    "category_id": "categoryId",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "min_roi": "minRoi",
    "min_area": "minArea",
    "max_distance_from_highway": "maxDistanceFromHighway",
    "status": "status",
}

NUMERIC_FILTERS = frozenset(
    {"category_id", "min_price", "max_price", "min_roi", "min_area", "max_distance_from_highway"}
)


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit not in PAGE_SIZES:
            raise ValueError(f"limit must be one of {PAGE_SIZES}, got {self.limit}")


@dataclass(frozen=True)
class QueryState:
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortOrder = SortOrder.NEWEST
    page: PageRequest = field(default_factory=PageRequest)

    def to_params(self) -> Dict[str, str]:
        """Query parameters for ``GET /api/properties``; empty filters are omitted."""

        params: Dict[str, str] = {}
        for name, param in FILTER_PARAMS.items():
            raw = getattr(self.filters, name)
            value = to_param(raw) if name in NUMERIC_FILTERS else to_str(raw)
            if value:
                params[param] = value
        params["sort"] = self.sort.value
        params["page"] = str(self.page.page)
        params["limit"] = str(self.page.limit)
        return params


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FILTER_FIELDS",
    "FILTER_PARAMS",
    "FilterCriteria",
    "NUMERIC_FILTERS",
    "PAGE_SIZES",
    "PageRequest",
    "QueryState",
    "SortOrder",
]
