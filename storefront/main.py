"""Streamlit UI for the property listings site."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import sys

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

load_dotenv(dotenv_path=ROOT_DIR / ".env", override=False)

from listings.config import ContactInfo, load_config, load_contact
from listings.errors import ApiError, NotFoundError
from listings.models.property import Category
from listings.services.synchronizer import FetchStatus, ListingSynchronizer
from listings.utils.logging import get_logger
from storefront.admin import render_admin
from storefront.api_client import ListingsClient
from storefront.components.cards import capitalize, contact_link_html, render_property_card, status_tone
from storefront.components.filters import render_filter_panel
from storefront.components.gallery import render_gallery
from storefront.components.tables import fmt_distance

st.set_page_config(page_title="Investment Properties", layout="wide", page_icon="🏡")

LOGGER = get_logger("ui")

LIST_ANCHOR = "property-list"


@st.cache_resource(show_spinner=False)
def get_client() -> ListingsClient:
    return ListingsClient(load_config())


@st.cache_resource(show_spinner=False)
def get_contact() -> ContactInfo:
    return load_contact()


def get_synchronizer(client: ListingsClient) -> ListingSynchronizer:
    if "listing_sync" not in st.session_state:
        st.session_state["listing_sync"] = ListingSynchronizer(client.fetch_listing)
    return st.session_state["listing_sync"]


def load_styles() -> None:
    css_path = Path(__file__).resolve().parent / "assets" / "styles.css"
    if css_path.exists():
        st.markdown(f"<style>{css_path.read_text()}</style>", unsafe_allow_html=True)


def navigate_to(property_id: int) -> None:
    st.query_params.from_dict({"property_id": str(property_id)})


def navigate_home() -> None:
    st.query_params.clear()


def load_categories(client: ListingsClient) -> List[Category]:
    try:
        return client.list_categories()
    except ApiError as exc:
        LOGGER.warning("categories_unavailable error=%s", exc)
        return []


def scroll_to_list() -> None:
    components.html(
        f"<script>window.parent.document.getElementById('{LIST_ANCHOR}')"
        "?.scrollIntoView({behavior: 'smooth'});</script>",
        height=0,
    )


def render_listing_page() -> None:
    st.title("Discover Profitable Investment Properties")
    st.caption("Use real filters for location, price, ROI, area, and highway distance.")
    client = get_client()
    sync = get_synchronizer(client)

    # Widget callbacks have already updated the QueryState by the time the script reruns.
    if sync.needs_fetch():
        with st.spinner("Loading properties..."):
            asyncio.run(sync.sync())

    render_filter_panel(sync, load_categories(client))

    st.markdown(f"<div id='{LIST_ANCHOR}'></div>", unsafe_allow_html=True)
    if sync.consume_scroll():
        scroll_to_list()

    if sync.status is FetchStatus.ERRORED:
        st.error(sync.error)
        if st.button("Retry"):
            with st.spinner("Loading properties..."):
                asyncio.run(sync.retry())
            st.rerun()
        return

    properties = sync.items
    if not properties:
        st.info("No properties found for selected filters.")
    else:
        columns = st.columns(3)
        for idx, prop in enumerate(properties):
            with columns[idx % 3]:
                render_property_card(
                    prop,
                    client.image_url(prop.images[0]) if prop.images else None,
                    on_click=lambda pid=prop.id: navigate_to(pid),
                    key=str(prop.id),
                    contact=get_contact(),
                )

    page = sync.query.page.page
    total_pages = sync.visible.total_pages if sync.visible else 1
    prev_col, label_col, next_col = st.columns([1, 2, 1])
    with prev_col:
        st.button("Previous", disabled=not sync.has_prev, on_click=sync.set_page, args=(page - 1,))
    with label_col:
        st.markdown(f"<p style='text-align:center'>Page {page} of {total_pages}</p>", unsafe_allow_html=True)
    with next_col:
        st.button("Next", disabled=not sync.has_next, on_click=sync.set_page, args=(page + 1,))

    call_link = contact_link_html(get_contact(), "Make a Call", "contact-button")
    if call_link:
        st.markdown(
            "<div class='contact-card contact-card--center'><h3>Ready to Invest?</h3>"
            "<p>Schedule a call with our experts or view all available listings to get started.</p>"
            f"{call_link}</div>",
            unsafe_allow_html=True,
        )


def render_detail_page(property_id: str) -> None:
    client = get_client()
    st.button("← Back to Properties", on_click=navigate_home)

    if not property_id.isdigit():
        render_not_found()
        return
    try:
        prop = client.get_property(int(property_id))
    except NotFoundError:
        render_not_found()
        return
    except ApiError as exc:
        LOGGER.warning("property_unavailable id=%s error=%s", property_id, exc)
        st.error("Failed to load property details.")
        if st.button("Retry"):
            st.rerun()
        return

    header_col, status_col = st.columns([4, 1])
    with header_col:
        st.markdown(f"## {prop.title}")
        st.caption(prop.location)
    with status_col:
        st.markdown(
            f"<span class='{status_tone(prop.status)}'>{capitalize(prop.status)}</span>",
            unsafe_allow_html=True,
        )

    gallery_col, facts_col = st.columns([2, 1])
    with gallery_col:
        render_gallery(prop.id, prop.images, client.image_url, prop.title)
        st.markdown("### Property Description")
        st.write(prop.description)
    with facts_col:
        st.metric("Price (per aana)", f"NRs. {prop.price}")
        st.metric("Expected ROI", f"{prop.roi}%")
        st.markdown("### Property Details")
        st.write(f"**Area (sq ft):** {prop.area}")
        if prop.area_nepali:
            st.write(f"**Area (R-A-P-D):** {prop.area_nepali}")
        st.write(f"**Category:** {capitalize(prop.category_name) or 'N/A'}")
        if prop.distance_from_highway is not None:
            st.write(f"**From Highway:** {fmt_distance(prop.distance_from_highway)}")

        agent_link = contact_link_html(get_contact(), "Contact Agent", "contact-button")
        if agent_link:
            st.markdown(
                "<div class='contact-card'><h3>Interested in this property?</h3>"
                "<p>Get in touch with our team for more information or to schedule a viewing.</p>"
                f"{agent_link}</div>",
                unsafe_allow_html=True,
            )


def render_not_found() -> None:
    st.markdown("## Property Not Found")
    st.write("Sorry, the property you're looking for doesn't exist or may have been removed.")


def navigate_admin() -> None:
    st.query_params.from_dict({"view": "admin"})


load_styles()
with st.sidebar:
    st.button("Properties", on_click=navigate_home)
    st.button("Admin", on_click=navigate_admin)

params = st.query_params
view = params.get("view")
property_id = params.get("property_id")

if view == "admin":
    render_admin(get_client(), params.get("section", "categories"))
elif property_id:
    render_detail_page(property_id)
else:
    render_listing_page()
