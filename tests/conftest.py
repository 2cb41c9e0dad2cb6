import math
from typing import Dict, List, Optional

import pytest
from fastapi import FastAPI, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.testclient import TestClient

from listings.config import ClientConfig
from storefront.api_client import ListingsClient

SORT_KEYS = {
    "newest": (lambda p: p["id"], True),
    "price_asc": (lambda p: float(p["price"]), False),
    "price_desc": (lambda p: float(p["price"]), True),
    "roi_desc": (lambda p: float(p["roi"]), True),
}


def _seed_properties() -> List[Dict]:
    statuses = ["available", "pending", "sold", "available"]
    rows = []
    for idx in range(1, 13):
        rows.append(
            {
                "id": idx,
                "title": f"Plot {idx}",
                "categoryId": 1 if idx % 2 else 2,
                "location": "Pokhara" if idx <= 6 else "Chitwan",
                "price": str(500000 * idx),
                "roi": str(4 + idx % 5),
                "status": statuses[idx % 4],
                "area": str(1000 + 100 * idx),
                "areaNepali": "0-4-2-1.5" if idx % 3 == 0 else None,
                "distanceFromHighway": 50 * idx if idx % 2 == 0 else None,
                "images": [f"uploads/plot-{idx}-a.jpg", f"uploads/plot-{idx}-b.jpg"],
                "description": f"Flat land parcel number {idx}",
            }
        )
    return rows


def make_backend() -> FastAPI:
    app = FastAPI()
    app.state.categories = {1: {"id": 1, "name": "land"}, 2: {"id": 2, "name": "house"}}
    app.state.properties = {row["id"]: row for row in _seed_properties()}
    app.state.listing_requests = []
    app.state.listing_mode = "ok"
    app.state.uploads = []

    def with_category(row: Dict) -> Dict:
        category = app.state.categories.get(row["categoryId"])
        return dict(row, category={"id": category["id"], "name": category["name"]} if category else None)

    @app.get("/api/categories")
    def list_categories():
        rows = []
        for category in reversed(list(app.state.categories.values())):
            related = [p for p in app.state.properties.values() if p["categoryId"] == category["id"]]
            rows.append(dict(category, properties=related))
        return rows

    @app.get("/api/categories/{category_id}")
    def get_category(category_id: int):
        if category_id not in app.state.categories:
            raise HTTPException(404, detail="Category not found")
        return app.state.categories[category_id]

    @app.post("/api/categories", status_code=201)
    async def create_category(request: Request):
        body = await request.json()
        name = (body.get("name") or "").strip()
        if any(c["name"] == name for c in app.state.categories.values()):
            return JSONResponse({"message": "Category already exists"}, status_code=400)
        new_id = max(app.state.categories) + 1
        app.state.categories[new_id] = {"id": new_id, "name": name}
        return app.state.categories[new_id]

    @app.put("/api/categories/{category_id}")
    async def update_category(category_id: int, request: Request):
        if category_id not in app.state.categories:
            raise HTTPException(404, detail="Category not found")
        body = await request.json()
        app.state.categories[category_id]["name"] = body["name"]
        return app.state.categories[category_id]

    @app.delete("/api/categories/{category_id}")
    def delete_category(category_id: int):
        if app.state.categories.pop(category_id, None) is None:
            raise HTTPException(404, detail="Category not found")
        return {"success": True}

    @app.get("/api/properties")
    def list_properties(
        request: Request,
        location: Optional[str] = None,
        categoryId: Optional[int] = None,
        minPrice: Optional[float] = None,
        maxPrice: Optional[float] = None,
        minRoi: Optional[float] = None,
        minArea: Optional[float] = None,
        maxDistanceFromHighway: Optional[float] = None,
        status: Optional[str] = None,
        sort: str = "newest",
        page: int = Query(1, ge=1),
        limit: int = Query(9, ge=1),
    ):
        app.state.listing_requests.append(str(request.url.query))
        if app.state.listing_mode == "html":
            return HTMLResponse("<html>gateway</html>")
        if app.state.listing_mode == "error":
            return JSONResponse({"message": "boom"}, status_code=500)
        if app.state.listing_mode == "bare":
            return [with_category(p) for p in app.state.properties.values()]

        rows = list(app.state.properties.values())
        if location:
            rows = [p for p in rows if location.lower() in p["location"].lower()]
        if categoryId is not None:
            rows = [p for p in rows if p["categoryId"] == categoryId]
        if minPrice is not None:
            rows = [p for p in rows if float(p["price"]) >= minPrice]
        if maxPrice is not None:
            rows = [p for p in rows if float(p["price"]) <= maxPrice]
        if minRoi is not None:
            rows = [p for p in rows if float(p["roi"]) >= minRoi]
        if minArea is not None:
            rows = [p for p in rows if float(p["area"]) >= minArea]
        if maxDistanceFromHighway is not None:
            rows = [
                p for p in rows
                if p["distanceFromHighway"] is not None and p["distanceFromHighway"] <= maxDistanceFromHighway
            ]
        if status:
            rows = [p for p in rows if p["status"] == status]
        key, reverse = SORT_KEYS[sort]
        rows.sort(key=key, reverse=reverse)

        total = len(rows)
        total_pages = max(1, math.ceil(total / limit))
        chunk = rows[(page - 1) * limit: page * limit]
        return {
            "data": [with_category(p) for p in chunk],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": total_pages,
                "hasNext": page < total_pages,
                "hasPrev": page > 1,
            },
        }

    @app.get("/api/properties/{property_id}")
    def get_property(property_id: int):
        row = app.state.properties.get(property_id)
        if row is None:
            raise HTTPException(404, detail="Property not found")
        return with_category(row)

    @app.post("/api/properties", status_code=201)
    async def create_property(
        title: str = Form(...),
        categoryId: int = Form(...),
        location: str = Form(...),
        price: str = Form(...),
        roi: str = Form(...),
        status: str = Form(...),
        area: str = Form(...),
        description: str = Form(...),
        areaNepali: Optional[str] = Form(None),
        distanceFromHighway: Optional[float] = Form(None),
        images: List[UploadFile] = File(default=[]),
    ):
        stored = []
        for upload in images:
            app.state.uploads.append((upload.filename, await upload.read()))
            stored.append(f"uploads/{upload.filename}")
        new_id = max(app.state.properties) + 1
        row = {
            "id": new_id,
            "title": title,
            "categoryId": categoryId,
            "location": location,
            "price": price,
            "roi": roi,
            "status": status,
            "area": area,
            "areaNepali": areaNepali,
            "distanceFromHighway": distanceFromHighway,
            "images": stored,
            "description": description,
        }
        app.state.properties[new_id] = row
        return with_category(row)

    @app.delete("/api/properties/{property_id}")
    def delete_property(property_id: int):
        if app.state.properties.pop(property_id, None) is None:
            raise HTTPException(404, detail="Property not found")
        return {"success": True}

    @app.get("/api/locations/autocomplete")
    def autocomplete(q: str = ""):
        places = ["Pokhara, Kaski", "Pokhara Lakeside", "Chitwan, Bharatpur"]
        matches = [p for p in places if p.lower().startswith(q.lower())]
        return {"data": [{"placeId": f"place-{idx}", "description": p} for idx, p in enumerate(matches)]}

    return app


@pytest.fixture
def backend() -> FastAPI:
    return make_backend()


@pytest.fixture
def client(backend: FastAPI) -> ListingsClient:
    return ListingsClient(ClientConfig(base_url="http://testserver/"), session=TestClient(backend))
