"""Streamlit components for property listing cards."""

from __future__ import annotations

from html import escape
from typing import Callable, Optional

import streamlit as st

from listings.config import ContactInfo
from listings.models.property import Property

from storefront.components.tables import fmt_distance


def status_tone(status: str | None) -> str:
    label = (status or "").strip().lower()
    if label == "available":
        tone = "success"
    elif label == "pending":
        tone = "warning"
    elif label == "sold":
        tone = "danger"
    else:
        tone = "neutral"
    return f"status-pill status-{tone}"


def capitalize(value: str | None) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def contact_link_html(contact: Optional[ContactInfo], label: str, css_class: str = "contact-link") -> str:
    href = contact.tel_href if contact else None
    if not href:
        return ""
    return f'<a class="{css_class}" href="{escape(href)}">{escape(label)}</a>'


def render_property_card(
    prop: Property,
    image_url: Optional[str],
    on_click: Callable[[], None],
    key: Optional[str] = None,
    contact: Optional[ContactInfo] = None,
) -> None:
    key = key or str(prop.id)
    image_html = f'<img class="property-card__image" src="{escape(image_url)}" alt="{escape(prop.title)}"/>' if image_url else ""
    extra = ""
    if prop.area_nepali:
        extra += f"<div><b>{escape(prop.area_nepali)}</b><span>Area (R-A-P-D)</span></div>"
    if prop.distance_from_highway is not None:
        extra += f"<div><b>{fmt_distance(prop.distance_from_highway)}</b><span>From Highway</span></div>"

    card_html = f"""
        <div class="property-card">
            {image_html}
            <h3>{escape(prop.title)}</h3>
            <p class="property-card__meta">{escape(prop.location)}</p>
            <p class="property-card__desc">{escape(prop.description)}</p>
            <div class="property-card__facts">
                <div><b>NRs. {escape(prop.price)}</b><span>Price (per aana)</span></div>
                <div><b>{escape(prop.roi)}%</b><span>Expected ROI</span></div>
                <div><b>{escape(prop.area)}</b><span>Area (sq ft)</span></div>
                {extra}
                <div><b class="{status_tone(prop.status)}">{escape(capitalize(prop.status))}</b><span>Status</span></div>
            </div>
            {contact_link_html(contact, "Make a Call", "property-card__call")}
        </div>
    """
    with st.container():
        st.markdown(card_html, unsafe_allow_html=True)
        st.button("Open details", key=f"open-{key}", on_click=on_click)
