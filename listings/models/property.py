"""Pydantic models for the objects served by the listings backend."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

KNOWN_STATUSES = ("available", "pending", "sold")


class WireModel(BaseModel):
    """Accepts camelCase keys from the backend and snake_case from Python."""

    model_config = ConfigDict(populate_by_name=True)


class CategoryRef(WireModel):
    id: Optional[int] = None
    name: str = ""


class Category(WireModel):
    id: int
    name: str
    property_count: int = Field(0, alias="propertyCount")

    @model_validator(mode="before")
    @classmethod
    def _count_properties(cls, data: Any) -> Any:
        # The backend embeds the related properties instead of a count.
        if isinstance(data, dict) and "propertyCount" not in data and "property_count" not in data:
            related = data.get("properties")
            if isinstance(related, list):
                data = dict(data, propertyCount=len(related))
        return data


class Property(WireModel):
    id: int
    title: str
    category_id: Optional[int] = Field(None, alias="categoryId")
    category: Optional[CategoryRef] = None
    location: str = ""
    price: str = ""
    roi: str = ""
    status: str = ""
    area: str = ""
    area_nepali: Optional[str] = Field(None, alias="areaNepali")
    distance_from_highway: Optional[float] = Field(None, alias="distanceFromHighway")
    images: List[str] = Field(default_factory=list)
    description: str = ""

    @field_validator("price", "roi", "area", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("images", mode="before")
    @classmethod
    def _images_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def status_key(self) -> str:
        key = self.status.strip().lower()
        return key if key in KNOWN_STATUSES else "other"

    @property
    def category_name(self) -> Optional[str]:
        if self.category and self.category.name:
            return self.category.name
        return None


class LocationSuggestion(WireModel):
    place_id: str = Field(..., alias="placeId")
    description: str


class PageResult(WireModel):
    items: List[Property] = Field(default_factory=list)
    page: int = Field(1, ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(0, ge=0)
    total_pages: int = Field(1, ge=0, alias="totalPages")

    @model_validator(mode="after")
    def _items_fit_page(self) -> "PageResult":
        if len(self.items) > self.limit:
            raise ValueError(f"page holds {len(self.items)} items but limit is {self.limit}")
        return self

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class ImageUpload(BaseModel):
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class PropertyForm(BaseModel):
    """Values collected by the add-property form before submission.

    Numeric inputs stay as the text the user typed; the validator decides
    whether they are usable and the client sends them verbatim.
    """

    title: str = ""
    category_id: int = 0
    location: str = ""
    location_place_id: str = ""
    price: str = ""
    roi: str = ""
    status: str = ""
    area: str = ""
    area_nepali: str = ""
    distance_from_highway: str = ""
    description: str = ""
    images: List[ImageUpload] = Field(default_factory=list)


__all__ = [
    "Category",
    "CategoryRef",
    "ImageUpload",
    "KNOWN_STATUSES",
    "LocationSuggestion",
    "PageResult",
    "Property",
    "PropertyForm",
]
