"""Filter panel bound to the listing synchronizer."""

from __future__ import annotations

from typing import Dict, List

import streamlit as st

from listings.models.property import Category
from listings.models.query import PAGE_SIZES, SortOrder
from listings.services.synchronizer import ListingSynchronizer
from storefront.components.cards import capitalize

STATUS_OPTIONS = ["", "available", "pending", "sold"]

TEXT_FILTERS = [
    ("location", "Location"),
    ("min_price", "Min Price (NPR)"),
    ("max_price", "Max Price (NPR)"),
    ("min_roi", "Min ROI (%)"),
    ("min_area", "Min Area (sq ft)"),
    ("max_distance_from_highway", "Max Distance (m)"),
]


def _widget_key(name: str) -> str:
    return f"filter_{name}"


def _on_draft_change(sync: ListingSynchronizer, name: str) -> None:
    sync.set_draft_filter(name, st.session_state.get(_widget_key(name), ""))


def _on_clear(sync: ListingSynchronizer) -> None:
    sync.clear_filters()
    for name, _ in TEXT_FILTERS:
        st.session_state[_widget_key(name)] = ""
    st.session_state[_widget_key("category_id")] = ""
    st.session_state[_widget_key("status")] = ""
    st.session_state["listing_sort"] = SortOrder.NEWEST


def _seed_widgets(sync: ListingSynchronizer) -> None:
    for name in [name for name, _ in TEXT_FILTERS] + ["category_id", "status"]:
        st.session_state.setdefault(_widget_key(name), getattr(sync.draft, name))
    st.session_state.setdefault("listing_sort", sync.query.sort)
    st.session_state.setdefault("listing_limit", sync.query.page.limit)


def category_options(categories: List[Category]) -> Dict[str, str]:
    names: Dict[str, str] = {"": "All Categories"}
    names.update({str(category.id): capitalize(category.name) for category in categories})
    return names


def render_filter_panel(sync: ListingSynchronizer, categories: List[Category]) -> None:
    _seed_widgets(sync)
    names = category_options(categories)

    with st.container(border=True):
        columns = st.columns(4)
        for idx, (name, label) in enumerate(TEXT_FILTERS):
            with columns[idx % 4]:
                st.text_input(
                    label,
                    key=_widget_key(name),
                    on_change=_on_draft_change,
                    args=(sync, name),
                )
        with columns[len(TEXT_FILTERS) % 4]:
            st.selectbox(
                "Category",
                options=list(names),
                format_func=names.get,
                key=_widget_key("category_id"),
                on_change=_on_draft_change,
                args=(sync, "category_id"),
            )
        with columns[(len(TEXT_FILTERS) + 1) % 4]:
            st.selectbox(
                "Status",
                options=STATUS_OPTIONS,
                format_func=lambda value: capitalize(value) or "All Status",
                key=_widget_key("status"),
                on_change=_on_draft_change,
                args=(sync, "status"),
            )

        sort_col, limit_col, apply_col, clear_col = st.columns([2, 2, 1, 1])
        with sort_col:
            st.selectbox(
                "Sort",
                options=list(SortOrder),
                format_func=lambda order: order.label,
                key="listing_sort",
                on_change=lambda: sync.set_sort(st.session_state["listing_sort"]),
            )
        with limit_col:
            st.selectbox(
                "Per page",
                options=list(PAGE_SIZES),
                format_func=lambda size: f"{size} / page",
                key="listing_limit",
                on_change=lambda: sync.set_page_size(st.session_state["listing_limit"]),
            )
        with apply_col:
            st.button("Apply", type="primary", on_click=sync.apply_filters)
        with clear_col:
            st.button("Clear", on_click=_on_clear, args=(sync,))

    st.caption(f"Active filters: {sync.active_filter_count} | Total results: {sync.total}")
