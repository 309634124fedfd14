# =============================================================================
# core/client.py  —  REST Client for the Product API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns HTTP calls into Python calls that return Product objects, and
#   turns every failed call into ONE exception type: ApiError.
#
# WHY ONE EXCEPTION TYPE?
#   The two architectures differ precisely in what they do with a failure.
#   The tool provider lets ApiError travel up to the model untouched; the
#   wrapper agent catches it and explains it.  Both need the same, simple
#   thing to catch: a status code and a detail string.
#
# NO RETRIES:
#   A failed call raises immediately.  Retry policy is out of scope here.
#
# TESTING:
#   Pass any httpx.Client as `http` — FastAPI's TestClient is one, so tests
#   run the real API in-process with no network.
# =============================================================================

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import Settings
from core.errors import ApiError
from core.models import Product

logger = logging.getLogger(__name__)


class ProductAPIClient:
    """Synchronous client for the product catalog REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[httpx.Client] = None,
    ):
        if http is None:
            if base_url is None or timeout is None:
                settings = Settings.from_env()
                base_url = base_url or settings.api_url
                timeout = settings.api_timeout if timeout is None else timeout
            http = httpx.Client(base_url=base_url, timeout=timeout)
        self._http = http

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProductAPIClient":
        return cls(base_url=settings.api_url, timeout=settings.api_timeout)

    def close(self) -> None:
        self._http.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(None, f"could not reach the product API ({exc})") from exc

        if response.is_success:
            return response.json()

        detail = _error_detail(response)
        logger.info("%s %s → %s %s", method, path, response.status_code, detail)
        raise ApiError(response.status_code, detail)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    def add_product(
        self,
        name: str,
        price_cents: int,
        quantity: int = 0,
        category: str = "general",
    ) -> Product:
        body = {"name": name, "price_cents": price_cents, "quantity": quantity, "category": category}
        return Product.from_dict(self._request("POST", "/products", json=body))

    def get_product(self, product_id: str) -> Product:
        return Product.from_dict(self._request("GET", _product_path(product_id)))

    def list_products(self, category: Optional[str] = None, available_only: bool = False) -> list[Product]:
        params: dict[str, Any] = {}
        if category:
            params["category"] = category
        if available_only:
            params["available_only"] = "true"
        return [Product.from_dict(p) for p in self._request("GET", "/products", params=params)]

    def search_products(self, name: str) -> list[Product]:
        data = self._request("GET", "/products/search", params={"name": name})
        return [Product.from_dict(p) for p in data]

    def update_product(
        self,
        product_id: str,
        name: Optional[str] = None,
        price_cents: Optional[int] = None,
        quantity: Optional[int] = None,
        category: Optional[str] = None,
    ) -> Product:
        changes = {
            "name": name,
            "price_cents": price_cents,
            "quantity": quantity,
            "category": category,
        }
        body = {k: v for k, v in changes.items() if v is not None}
        return Product.from_dict(self._request("PATCH", _product_path(product_id), json=body))

    def delete_product(self, product_id: str) -> Product:
        return Product.from_dict(self._request("DELETE", _product_path(product_id)))


def _product_path(product_id: str) -> str:
    """Escape the id into a single path segment.

    Slashes and dots are encoded so an id like "a/../b" can never resolve to
    another product's URL.
    """
    return "/products/" + quote(product_id, safe="").replace(".", "%2E")


def _error_detail(response: httpx.Response) -> str:
    """Pull FastAPI's {"detail": ...} out of an error body, or fall back to text.

    Validation errors carry a list of {"loc", "msg"} dicts; they're flattened
    into "field: message" pairs.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    detail = body.get("detail") if isinstance(body, dict) else None
    if detail is None:
        return response.text or response.reason_phrase
    if isinstance(detail, list):
        parts = []
        for item in detail:
            if isinstance(item, dict):
                field = ".".join(str(x) for x in item.get("loc", ())[1:]) or "body"
                parts.append(f"{field}: {item.get('msg', 'invalid')}")
            else:
                parts.append(str(item))
        return "; ".join(parts)
    return str(detail)
