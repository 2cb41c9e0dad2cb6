"""Admin tables with a declared column schema per entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import pandas as pd
import streamlit as st

from listings.models.property import Category, Property


def _fmt_number(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value}"


def fmt_price(value: str) -> str:
    return f"Nrs. {value} per aana"


def fmt_roi(value: str) -> str:
    return f"{value}%"


def fmt_area(value: str) -> str:
    return f"{value} sq ft"


def fmt_distance(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{_fmt_number(value)}m"


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    render: Callable[[object], object]


CATEGORY_COLUMNS: Sequence[Column] = (
    Column("id", "ID", lambda c: c.id),
    Column("name", "Name", lambda c: c.name),
    Column("properties", "Properties", lambda c: c.property_count),
)

PROPERTY_COLUMNS: Sequence[Column] = (
    Column("id", "ID", lambda p: p.id),
    Column("title", "Title", lambda p: p.title),
    Column("category", "Category", lambda p: p.category_name or "N/A"),
    Column("location", "Location", lambda p: p.location),
    Column("price", "Price", lambda p: fmt_price(p.price)),
    Column("roi", "ROI", lambda p: fmt_roi(p.roi)),
    Column("status", "Status", lambda p: p.status),
    Column("area", "Area", lambda p: fmt_area(p.area)),
    Column("area_nepali", "Area (R-A-P-D)", lambda p: p.area_nepali or "N/A"),
    Column("distance_from_highway", "From Highway", lambda p: fmt_distance(p.distance_from_highway)),
    Column("images", "Images", lambda p: f"{len(p.images)} image(s)"),
)


def build_frame(records: Sequence[object], columns: Sequence[Column]) -> pd.DataFrame:
    rows = [{column.label: column.render(record) for column in columns} for record in records]
    return pd.DataFrame(rows, columns=[column.label for column in columns])


def filter_by_id(properties: List[Property], search: str) -> Optional[List[Property]]:
    """Rows matching a numeric id search; None when the search text is not a number."""

    text = (search or "").strip()
    if not text:
        return list(properties)
    if not text.isdigit():
        return None
    wanted = int(text)
    return [prop for prop in properties if prop.id == wanted]


def render_category_table(categories: Sequence[Category]) -> None:
    if not categories:
        st.info("No data available.")
        return
    st.dataframe(build_frame(categories, CATEGORY_COLUMNS), hide_index=True, width="stretch")


def render_property_table(properties: Sequence[Property]) -> None:
    if not properties:
        st.info("No data available.")
        return
    st.dataframe(build_frame(properties, PROPERTY_COLUMNS), hide_index=True, width="stretch")
