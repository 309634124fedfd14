# =============================================================================
# api/app.py  —  The "Existing" Product REST API
# =============================================================================
#
# This is the API both architectures integrate with.  It knows nothing about
# agents, tools, or language models — it's a plain CRUD service, exactly
# the kind of thing a team already has in production before anyone says
# "let's put an agent in front of it."
#
# RUNNING IT:
#   uvicorn api.app:app --port 8085
#
# ERROR CONTRACT:
#   FastAPI's standard {"detail": ...} body.
#     404 → product not found
#     422 → request body / store validation failed
# =============================================================================

from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from core.errors import ProductNotFoundError, ProductValidationError
from core.store import ProductStore

app = FastAPI(title="product-catalog (in-memory demo)")

STORE = ProductStore()


# ---------------------------
# Pydantic schemas
# ---------------------------
class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    price_cents: int = Field(..., ge=0)
    quantity: int = Field(0, ge=0)
    category: Optional[str] = "general"


class ProductPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price_cents: Optional[int] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None


# ---------------------------
# Helpers
# ---------------------------
def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="product not found")


def _invalid(exc: ProductValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


# ---------------------------
# Product endpoints
# ---------------------------
@app.post("/products", status_code=201)
def create_product(payload: ProductIn):
    try:
        product = STORE.add(
            name=payload.name,
            price_cents=payload.price_cents,
            quantity=payload.quantity,
            category=payload.category or "general",
        )
    except ProductValidationError as exc:
        raise _invalid(exc)
    return asdict(product)


@app.get("/products")
def list_products(category: Optional[str] = None, available_only: bool = False):
    return [asdict(p) for p in STORE.list_products(category=category, available_only=available_only)]


# Declared before /products/{product_id} so "search" isn't taken as an id.
@app.get("/products/search")
def search_products(name: str = Query(..., min_length=1)):
    return [asdict(p) for p in STORE.search(name)]


@app.get("/products/{product_id}")
def get_product(product_id: str):
    try:
        return asdict(STORE.get(product_id))
    except ProductNotFoundError:
        raise _not_found()


@app.patch("/products/{product_id}")
def update_product(product_id: str, payload: ProductPatch):
    try:
        product = STORE.update(product_id, **payload.model_dump(exclude_none=True))
    except ProductNotFoundError:
        raise _not_found()
    except ProductValidationError as exc:
        raise _invalid(exc)
    return asdict(product)


@app.delete("/products/{product_id}")
def delete_product(product_id: str):
    try:
        return asdict(STORE.delete(product_id))
    except ProductNotFoundError:
        raise _not_found()


# ---------------------------
# Test helper
# ---------------------------
@app.post("/reset")
def reset():
    STORE.reset()
    return {"status": "reset"}
