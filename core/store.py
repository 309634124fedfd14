# =============================================================================
# core/store.py  —  In-Memory Product Store
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the catalog that the REST API serves.  It plays the role of the
#   "existing system" both architectures sit in front of.
#
# WHY IN-MEMORY?
#   In a real deployment this is a database.  The INTERFACE is what matters
#   (add/get/list/search/update/delete); swapping in a real database changes
#   only this module.
#
# THREAD SAFETY:
#   FastAPI runs sync endpoints in a thread pool, so every mutation happens
#   under one lock.  Reads take the lock too; the dict is tiny.
# =============================================================================

import threading
import uuid
from dataclasses import replace
from typing import Optional

from core.errors import ProductNotFoundError, ProductValidationError
from core.models import Product

_UPDATABLE_FIELDS = ("name", "price_cents", "quantity", "category")


def _validate(product: Product) -> None:
    if not product.name or not product.name.strip():
        raise ProductValidationError("name must not be blank")
    if product.price_cents < 0:
        raise ProductValidationError("price_cents must be >= 0")
    if product.quantity < 0:
        raise ProductValidationError("quantity must be >= 0")


class ProductStore:
    """Thread-safe dict of products, keyed by id, in insertion order."""

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self._lock = threading.Lock()

    def add(
        self,
        name: str,
        price_cents: int,
        quantity: int = 0,
        category: str = "general",
    ) -> Product:
        product = Product(
            id=uuid.uuid4().hex,
            name=name.strip() if name else name,
            price_cents=price_cents,
            quantity=quantity,
            category=category or "general",
        )
        _validate(product)
        with self._lock:
            self._products[product.id] = product
        return product

    def get(self, product_id: str) -> Product:
        with self._lock:
            product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def list_products(self, category: Optional[str] = None, available_only: bool = False) -> list[Product]:
        with self._lock:
            products = list(self._products.values())
        if category:
            products = [p for p in products if p.category == category]
        if available_only:
            products = [p for p in products if p.quantity > 0]
        return products

    def search(self, term: str) -> list[Product]:
        """Case-insensitive substring match on the name.  No match → []."""
        needle = term.lower()
        with self._lock:
            return [p for p in self._products.values() if needle in p.name.lower()]

    def update(self, product_id: str, **changes) -> Product:
        """Apply the non-None changes to a product and return the new version.

        Only name, price_cents, quantity and category can change; anything
        else is a validation error rather than being silently dropped.
        """
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ProductValidationError(f"cannot update field(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in changes.items() if v is not None}
        if isinstance(changes.get("name"), str):
            changes["name"] = changes["name"].strip()

        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                raise ProductNotFoundError(product_id)
            updated = replace(current, **changes)
            _validate(updated)
            self._products[product_id] = updated
        return updated

    def delete(self, product_id: str) -> Product:
        with self._lock:
            product = self._products.pop(product_id, None)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def reset(self) -> None:
        with self._lock:
            self._products.clear()

    def __len__(self) -> int:
        return len(self._products)
