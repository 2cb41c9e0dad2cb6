"""HTTP client used by the Streamlit app to talk to the listings REST API."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from listings.config import ClientConfig, load_config
from listings.errors import HttpStatusError, MalformedResponseError, NotFoundError, TransportError
from listings.models.property import Category, LocationSuggestion, PageResult, Property, PropertyForm
from listings.models.query import QueryState
from listings.utils.logging import get_logger

LOGGER = get_logger("client")


class ListingsClient:
    def __init__(self, config: Optional[ClientConfig] = None, session: Any = None) -> None:
        self.config = config or load_config()
        self.session = session if session is not None else requests.Session()

    # ------------------------------------------------------------------
    # Categories
    def list_categories(self) -> List[Category]:
        body = self._get_json("/api/categories")
        if not isinstance(body, list):
            raise MalformedResponseError("expected a list of categories", url=self.config.url("/api/categories"))
        categories = [self._parse(Category, row) for row in body]
        return sorted(categories, key=lambda category: category.id)

    def get_category(self, category_id: int) -> Category:
        return self._parse(Category, self._get_json(f"/api/categories/{category_id}"))

    def create_category(self, name: str) -> Category:
        resp = self._request("POST", "/api/categories", json={"name": name.strip()})
        return self._parse(Category, self._json(resp))

    def update_category(self, category_id: int, name: str) -> Category:
        resp = self._request("PUT", f"/api/categories/{category_id}", json={"name": name.strip()})
        return self._parse(Category, self._json(resp))

    def delete_category(self, category_id: int) -> None:
        self._request("DELETE", f"/api/categories/{category_id}")

    # ------------------------------------------------------------------
    # Properties
    def list_properties(self, query: Optional[QueryState] = None) -> PageResult:
        params = query.to_params() if query else None
        url = self.config.url("/api/properties")
        body = self._get_json("/api/properties", params=params)
        if isinstance(body, list):
            rows, pagination = body, None
        elif isinstance(body, dict):
            rows, pagination = body.get("data"), body.get("pagination")
            if not isinstance(rows, list):
                raise MalformedResponseError("listing body has no data list", url=url)
        else:
            raise MalformedResponseError("unexpected listing body", url=url)

        if not isinstance(pagination, dict):
            page = query.page.page if query else 1
            limit = query.page.limit if query else max(len(rows), 1)
            pagination = {"page": page, "limit": limit, "total": len(rows), "totalPages": 1}
        return self._parse(PageResult, dict(pagination, items=rows))

    async def fetch_listing(self, query: QueryState) -> PageResult:
        return await asyncio.to_thread(self.list_properties, query)

    def get_property(self, property_id: int) -> Property:
        return self._parse(Property, self._get_json(f"/api/properties/{property_id}"))

    def create_property(self, form: PropertyForm) -> Property:
        data: Dict[str, str] = {
            "title": form.title.strip(),
            "categoryId": str(form.category_id),
            "location": form.location,
            "price": form.price.strip(),
            "roi": form.roi.strip(),
            "status": form.status,
            "area": form.area.strip(),
        }
        if form.area_nepali:
            data["areaNepali"] = form.area_nepali
        if form.distance_from_highway.strip():
            data["distanceFromHighway"] = form.distance_from_highway.strip()
        data["description"] = form.description
        files = [("images", (image.filename, image.content, image.content_type)) for image in form.images]
        resp = self._request("POST", "/api/properties", data=data, files=files or None)
        return self._parse(Property, self._json(resp))

    def delete_property(self, property_id: int) -> None:
        self._request("DELETE", f"/api/properties/{property_id}")

    # ------------------------------------------------------------------
    # Locations and assets
    def autocomplete_locations(self, query: str) -> List[LocationSuggestion]:
        body = self._get_json("/api/locations/autocomplete", params={"q": query.strip()})
        rows = body.get("data") if isinstance(body, dict) else None
        if not isinstance(rows, list):
            return []
        return [self._parse(LocationSuggestion, row) for row in rows]

    def image_url(self, path: str) -> str:
        return self.config.url(path)

    # ------------------------------------------------------------------
    def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return self._json(self._request("GET", path, params=params))

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.config.url(path)
        try:
            resp = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as exc:
            LOGGER.warning("request_failed method=%s url=%s error=%s", method, url, exc)
            raise TransportError(str(exc), url=url) from exc
        self._raise_for_status(resp, method, url)
        return resp

    def _raise_for_status(self, response: Any, method: str, url: str) -> None:
        status = response.status_code
        if status < 400:
            return
        detail = self._error_message(response)
        message = detail or f"{method} {url} returned {status}"
        LOGGER.warning("request_rejected method=%s url=%s status=%s", method, url, status)
        if status == 404:
            raise NotFoundError(message, url=url, detail=detail)
        raise HttpStatusError(status, message, url=url, detail=detail)

    @staticmethod
    def _error_message(response: Any) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return None

    @staticmethod
    def _json(response: Any) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"response is not JSON: {exc}", url=str(response.url)) from exc

    @staticmethod
    def _parse(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"unexpected {model.__name__} payload: {exc}") from exc


__all__ = ["ListingsClient"]
