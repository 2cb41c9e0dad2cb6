"""Admin console: categories, properties and the add-property form."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import streamlit as st

from listings.errors import ApiError, HttpStatusError
from listings.models.property import Category, ImageUpload, LocationSuggestion, PropertyForm
from listings.services.autocomplete import LocationAutocomplete
from listings.services.validation import MAX_IMAGES, validate_category, validate_property_form
from listings.utils.logging import get_logger
from storefront.api_client import ListingsClient
from storefront.components.cards import capitalize
from storefront.components.tables import filter_by_id, render_category_table, render_property_table

LOGGER = get_logger("ui.admin")

SECTIONS = {
    "categories": "Categories",
    "properties": "Properties",
    "add-property": "Add Property",
}

PROPERTY_STATUSES = ["", "available", "pending", "sold"]

FORM_KEYS = [
    "form_title",
    "form_category_id",
    "form_location_query",
    "form_price",
    "form_roi",
    "form_status",
    "form_area",
    "form_area_nepali",
    "form_distance",
    "form_description",
]


def _go(section: str) -> None:
    st.query_params.from_dict({"view": "admin", "section": section})


def _field_error(errors: Dict[str, str], name: str) -> None:
    if name in errors:
        st.caption(f":red[{errors[name]}]")


def _flash(message: str, ok: bool = True) -> None:
    st.session_state["admin_flash"] = (ok, message)


def _show_flash() -> None:
    flash = st.session_state.pop("admin_flash", None)
    if not flash:
        return
    ok, message = flash
    (st.success if ok else st.error)(message)


def render_admin(client: ListingsClient, section: str) -> None:
    st.title("Admin")
    nav = st.columns(len(SECTIONS))
    for idx, (key, label) in enumerate(SECTIONS.items()):
        with nav[idx]:
            st.button(label, key=f"nav-{key}", on_click=_go, args=(key,), disabled=key == section)
    _show_flash()

    if section == "properties":
        render_property_admin(client)
    elif section == "add-property":
        render_add_property(client)
    else:
        render_category_admin(client)


# ----------------------------------------------------------------------
# Categories
def render_category_admin(client: ListingsClient) -> None:
    st.header("Category List")
    try:
        categories = client.list_categories()
    except ApiError as exc:
        LOGGER.warning("admin_categories_unavailable error=%s", exc)
        st.error("Failed to load categories.")
        st.button("Retry", key="retry-categories")
        return
    render_category_table(categories)

    with st.expander("+ Add Category"):
        name = st.text_input("Category Name", key="new_category_name", placeholder="Enter category name")
        if st.button("Add Category"):
            _submit_category(client, None, name)

    if not categories:
        return
    by_id = {category.id: category for category in categories}
    selected = st.selectbox(
        "Select a category",
        options=list(by_id),
        format_func=lambda cid: f"{cid} · {by_id[cid].name}",
        key="selected_category",
    )
    category = by_id[selected]
    edit_col, delete_col = st.columns(2)
    with edit_col:
        new_name = st.text_input("Rename", value=category.name, key=f"edit_category_{category.id}")
        if st.button("Update Category"):
            _submit_category(client, category, new_name)
    with delete_col:
        confirm = st.checkbox("Are you sure you want to delete this category?", key=f"confirm_category_{category.id}")
        if st.button("Delete", disabled=not confirm, key="delete-category"):
            _delete_category(client, category)


def _submit_category(client: ListingsClient, category: Optional[Category], name: str) -> None:
    errors = validate_category(name)
    if errors:
        st.error(errors["name"])
        return
    try:
        if category is None:
            client.create_category(name)
            _flash("Category created successfully!")
        else:
            client.update_category(category.id, name)
            _flash("Category updated successfully!")
    except ApiError as exc:
        LOGGER.warning("category_save_failed id=%s error=%s", category.id if category else None, exc)
        verb = "create" if category is None else "update"
        detail = exc.detail if isinstance(exc, HttpStatusError) else None
        st.error(detail or f"Failed to {verb} category")
        return
    st.rerun()


def _delete_category(client: ListingsClient, category: Category) -> None:
    try:
        client.delete_category(category.id)
    except ApiError as exc:
        LOGGER.warning("category_delete_failed id=%s error=%s", category.id, exc)
        st.error("Failed to delete category")
        return
    _flash("Category deleted successfully")
    st.rerun()


# ----------------------------------------------------------------------
# Properties
def render_property_admin(client: ListingsClient) -> None:
    header_col, add_col = st.columns([4, 1])
    with header_col:
        st.header("Property List")
    with add_col:
        st.button("+ Add Property", on_click=_go, args=("add-property",))

    try:
        properties = client.list_properties().items
    except ApiError as exc:
        LOGGER.warning("admin_properties_unavailable error=%s", exc)
        st.error("Cannot connect to backend server. Please make sure it's running.")
        st.button("Retry", key="retry-properties")
        return

    search = st.text_input("Search by ID", key="property_search")
    shown = filter_by_id(properties, search)
    if shown is None:
        st.warning("Please enter a valid numeric ID")
        shown = properties
    render_property_table(shown)

    if not shown:
        return
    by_id = {prop.id: prop for prop in shown}
    selected = st.selectbox(
        "Select a property",
        options=list(by_id),
        format_func=lambda pid: f"{pid} · {by_id[pid].title}",
        key="selected_property",
    )
    confirm = st.checkbox("Are you sure you want to delete this property?", key=f"confirm_property_{selected}")
    if st.button("Delete", disabled=not confirm, key="delete-property"):
        try:
            client.delete_property(selected)
        except ApiError as exc:
            LOGGER.warning("property_delete_failed id=%s error=%s", selected, exc)
            st.error("Failed to delete property")
            return
        _flash("Property deleted successfully")
        st.rerun()


# ----------------------------------------------------------------------
# Add property
def _autocomplete(client: ListingsClient) -> LocationAutocomplete:
    if "location_autocomplete" not in st.session_state:
        st.session_state["location_autocomplete"] = LocationAutocomplete(client.autocomplete_locations)
    return st.session_state["location_autocomplete"]


def _on_location_typed() -> None:
    st.session_state["form_location"] = None


def _select_location(suggestion: LocationSuggestion) -> None:
    st.session_state["form_location"] = suggestion
    st.session_state["form_location_query"] = suggestion.description
    st.session_state["location_suggestions"] = []


def _collect_form(uploads: List) -> PropertyForm:
    selected: Optional[LocationSuggestion] = st.session_state.get("form_location")
    return PropertyForm(
        title=st.session_state.get("form_title", ""),
        category_id=st.session_state.get("form_category_id") or 0,
        location=selected.description if selected else "",
        location_place_id=selected.place_id if selected else "",
        price=st.session_state.get("form_price", ""),
        roi=st.session_state.get("form_roi", ""),
        status=st.session_state.get("form_status", ""),
        area=st.session_state.get("form_area", ""),
        area_nepali=st.session_state.get("form_area_nepali", ""),
        distance_from_highway=st.session_state.get("form_distance", ""),
        description=st.session_state.get("form_description", ""),
        images=[
            ImageUpload(filename=upload.name, content=upload.getvalue(), content_type=upload.type or "application/octet-stream")
            for upload in uploads
        ],
    )


def _reset_form() -> None:
    for key in FORM_KEYS + ["form_location", "location_suggestions", "form_errors"]:
        st.session_state.pop(key, None)
    st.session_state["upload_generation"] = st.session_state.get("upload_generation", 0) + 1


def render_add_property(client: ListingsClient) -> None:
    st.header("Add New Property")
    errors: Dict[str, str] = st.session_state.get("form_errors", {})
    try:
        categories = client.list_categories()
    except ApiError as exc:
        LOGGER.warning("form_categories_unavailable error=%s", exc)
        categories = []
    names = {0: "Select Category"}
    names.update({category.id: category.name for category in categories})

    left, right = st.columns(2)
    with left:
        st.text_input("Title", key="form_title")
        _field_error(errors, "title")
    with right:
        st.selectbox("Category", options=list(names), format_func=names.get, key="form_category_id")
        _field_error(errors, "category_id")

    query = st.text_input("Location", key="form_location_query", placeholder="Search location...", on_change=_on_location_typed)
    autocomplete = _autocomplete(client)
    if st.session_state.get("form_location") is None and autocomplete.accepts(query):
        found = asyncio.run(autocomplete.search(query))
        if found is not None:
            st.session_state["location_suggestions"] = found
        suggestions = st.session_state.get("location_suggestions", [])
        if not suggestions:
            st.caption("No locations found")
        for idx, suggestion in enumerate(suggestions):
            st.button(suggestion.description, key=f"suggestion-{idx}", on_click=_select_location, args=(suggestion,))
    _field_error(errors, "location")

    left, right = st.columns(2)
    with left:
        st.text_input("Price per aana", key="form_price")
        _field_error(errors, "price")
        st.selectbox(
            "Status",
            options=PROPERTY_STATUSES,
            format_func=lambda value: capitalize(value) or "Select Status",
            key="form_status",
        )
        _field_error(errors, "status")
        st.text_input("Area (R-A-P-D)", key="form_area_nepali", placeholder="e.g. 0-0-0-0.0")
        _field_error(errors, "area_nepali")
    with right:
        st.text_input("ROI (in %)", key="form_roi")
        _field_error(errors, "roi")
        st.text_input("Area", key="form_area")
        _field_error(errors, "area")
        st.text_input("Distance From Highway (m)", key="form_distance")
        _field_error(errors, "distance_from_highway")

    uploads = st.file_uploader(
        f"Upload Images (max {MAX_IMAGES})",
        type=["png", "jpg", "jpeg"],
        accept_multiple_files=True,
        key=f"form_images_{st.session_state.get('upload_generation', 0)}",
    ) or []
    _field_error(errors, "images")
    st.text_area("Description", key="form_description", height=120)
    _field_error(errors, "description")

    if st.button("Add Property", type="primary"):
        form = _collect_form(uploads)
        errors = validate_property_form(form)
        st.session_state["form_errors"] = errors
        if errors:
            st.rerun()
        try:
            created = client.create_property(form)
        except ApiError as exc:
            LOGGER.warning("property_create_failed error=%s", exc)
            st.error("Failed to submit property")
            return
        LOGGER.info("property_created id=%s", created.id)
        _reset_form()
        _flash("Property submitted successfully!")
        st.rerun()
