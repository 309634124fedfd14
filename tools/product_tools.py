# =============================================================================
# tools/product_tools.py  —  Stateless Tool Functions over the Product API
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines one tool per REST operation.  Each tool is a thin wrapper around
#   ProductAPIClient — it formats input/output and logs the call.  That's all.
#
# STATELESS BY CONSTRUCTION:
#   There is no "last product" here.  Every call carries every id it needs.
#   If the model wants to change a price, it must pass the product_id it got
#   back from add_product.  Remembering that is the CALLER's job — compare
#   agent/assistant.py, where remembering it is the whole point.
#
# RAW ERRORS:
#   ApiError is NOT caught.  A 404 from the API reaches the caller as
#   "404: product not found".  The tool provider doesn't guess what the
#   caller meant; it reports what the API said.
#
# TOOL NAMING CONVENTIONS:
#   - get_* / list_* / search_*  → read-only (idempotent, safe to retry)
#   - add_* / update_* / delete_* → writes (NOT idempotent: add twice, get two)
#
# CONTEXT BUDGET:
#   Every tool returns a dict.  List tools cap output at MAX_LIST_RESULTS so a
#   big catalog can't flood the model's context.
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from typing import Optional

from core.client import ProductAPIClient
from core.registry import ToolRegistry

MAX_LIST_RESULTS = 20

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: when served over stdio, STDOUT carries the MCP protocol and
# any stray log line there would corrupt it.
#
#   CYAN   → incoming requests (tool name + parameters)
#   YELLOW → intermediate status
#   GREEN  → response JSON
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger("tools")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


def _listing(products) -> dict:
    shown = products[:MAX_LIST_RESULTS]
    result = {"count": len(products), "products": [asdict(p) for p in shown]}
    if len(products) > len(shown):
        result["truncated"] = True
    return result


class ProductTools:
    """The product API, one stateless tool per operation.

    Method docstrings are what a language model reads during discovery, so
    they say WHEN to call the tool, not how it works.
    """

    def __init__(self, api: ProductAPIClient):
        self.api = api

    def add_product(
        self,
        name: str,
        price_cents: int,
        quantity: int = 0,
        category: str = "general",
    ) -> dict:
        """Create a new product in the catalog and return it, including its new id.

        Keep the returned "id": every other tool needs it to refer to this
        product.  Prices are integer cents (e.g. 1299 for $12.99).
        """
        _log_request("add_product", name=name, price_cents=price_cents,
                     quantity=quantity, category=category)
        product = self.api.add_product(name, price_cents, quantity=quantity, category=category)
        _log_status(f"Created product {product.id}")
        return _log_response("add_product", asdict(product))

    def get_product(self, product_id: str) -> dict:
        """Fetch one product by its id."""
        _log_request("get_product", product_id=product_id)
        return _log_response("get_product", asdict(self.api.get_product(product_id)))

    def list_products(self, category: Optional[str] = None, available_only: bool = False) -> dict:
        """List catalog products, optionally only one category or only items in stock.

        Returns {"count", "products"}; at most 20 products are included.
        """
        _log_request("list_products", category=category, available_only=available_only)
        products = self.api.list_products(category=category, available_only=available_only)
        _log_status(f"Found {len(products)} products")
        return _log_response("list_products", _listing(products))

    def search_products(self, name: str) -> dict:
        """Find products whose name contains the given text (case-insensitive).

        Use this to look up an id when you only know the product's name.
        """
        _log_request("search_products", name=name)
        products = self.api.search_products(name)
        _log_status(f"Matched {len(products)} products")
        return _log_response("search_products", _listing(products))

    def update_product(
        self,
        product_id: str,
        name: Optional[str] = None,
        price_cents: Optional[int] = None,
        quantity: Optional[int] = None,
        category: Optional[str] = None,
    ) -> dict:
        """Change a product's name, price, stock quantity or category.

        Only the fields you pass are changed.  Requires the product's id.
        """
        _log_request("update_product", product_id=product_id, name=name,
                     price_cents=price_cents, quantity=quantity, category=category)
        product = self.api.update_product(
            product_id, name=name, price_cents=price_cents, quantity=quantity, category=category
        )
        return _log_response("update_product", asdict(product))

    def delete_product(self, product_id: str) -> dict:
        """Permanently remove a product from the catalog and return what was removed."""
        _log_request("delete_product", product_id=product_id)
        product = self.api.delete_product(product_id)
        _log_status(f"Deleted {product.name}")
        return _log_response("delete_product", asdict(product))

    def all(self) -> list:
        """Every tool method, in the order they're advertised."""
        return [
            self.add_product,
            self.get_product,
            self.list_products,
            self.search_products,
            self.update_product,
            self.delete_product,
        ]


def build_registry(tools: ProductTools) -> ToolRegistry:
    """An in-process tool provider: the same six tools, no server."""
    registry = ToolRegistry()
    for fn in tools.all():
        registry.register(fn)
    return registry
