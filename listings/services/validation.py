"""Client-side form checks run before anything is sent to the backend."""

from __future__ import annotations

import re
from typing import Dict

from ..models.property import PropertyForm
from ..utils.coerce import to_float

MAX_IMAGES = 10

# Ropani-Aana-Paisa-Daam, e.g. 0-4-2-1.5
AREA_NEPALI_PATTERN = re.compile(r"^\d+-\d+-\d+-\d+(\.\d+)?$")


def validate_category(name: str) -> Dict[str, str]:
    if not (name or "").strip():
        return {"name": "Category name is required"}
    return {}


def _check_number(errors: Dict[str, str], field: str, value: str, label: str) -> None:
    if not value.strip():
        errors[field] = f"{label} is required"
    elif to_float(value) is None:
        errors[field] = f"{label} must be a number"


def validate_property_form(form: PropertyForm) -> Dict[str, str]:
    """Return per-field error messages; an empty dict means the form can be submitted."""

    errors: Dict[str, str] = {}
    if not form.title.strip():
        errors["title"] = "Title is required"
    if not form.category_id:
        errors["category_id"] = "Category is required"
    if not form.location.strip() or not form.location_place_id:
        errors["location"] = "Please select a location from the suggestions"
    _check_number(errors, "price", form.price, "Price")
    _check_number(errors, "roi", form.roi, "ROI")
    if not form.status.strip():
        errors["status"] = "Status is required"
    _check_number(errors, "area", form.area, "Area")
    if not form.description.strip():
        errors["description"] = "Description is required"

    distance = form.distance_from_highway.strip()
    if distance:
        value = to_float(distance)
        if value is None:
            errors["distance_from_highway"] = "Distance from highway must be a number"
        elif value < 0:
            errors["distance_from_highway"] = "Distance from highway cannot be negative"

    if form.area_nepali and not AREA_NEPALI_PATTERN.match(form.area_nepali):
        errors["area_nepali"] = "Invalid format (e.g., 0-0-0-0.0)"

    if len(form.images) > MAX_IMAGES:
        errors["images"] = f"You can only upload up to {MAX_IMAGES} images."
    return errors


__all__ = ["AREA_NEPALI_PATTERN", "MAX_IMAGES", "validate_category", "validate_property_form"]
