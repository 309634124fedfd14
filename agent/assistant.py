# =============================================================================
# agent/assistant.py  —  The Wrapper Agent's Hands and Memory
# =============================================================================
#
# WHAT THIS FILE DOES:
#   ProductAssistant sits in front of the product API and adds the two things
#   a raw API can't give a conversation:
#
#     1. MEMORY — it remembers the last product it touched, so the user can
#        say "set its price to $15" instead of quoting a 32-char id.
#     2. RECOVERY — when the API fails, it explains what happened in terms of
#        what the user was trying to do, and says what to do next.
#
#   Every method returns a SENTENCE, not a dict.  The LLM (see
#   agent/product_agent.py) calls these methods as tools and relays or
#   rephrases the sentence; the methods also work on their own, without any
#   model, which is how the tests drive them.
#
# COMPARE WITH tools/product_tools.py:
#   Same API, same operations.  There, every call needs an explicit id and a
#   404 comes back as "404: product not found".  Here, the id is optional and
#   a 404 comes back as "...no longer exists, so I've forgotten it."
# =============================================================================

import logging
from typing import Callable, Optional

from core.client import ProductAPIClient
from core.errors import ApiError
from core.models import AssistantMemory, Product

logger = logging.getLogger(__name__)

_NO_PRODUCT = (
    "I'm not sure which product you mean. I haven't worked with one yet. "
    "Add a product first, or tell me its id."
)


def _money(cents: int) -> str:
    return f"${cents / 100:.2f}"


class ProductAssistant:
    """Stateful, conversational wrapper around ProductAPIClient."""

    def __init__(self, api: ProductAPIClient, memory: Optional[AssistantMemory] = None):
        self.api = api
        self.memory = memory or AssistantMemory()

    # -------------------------------------------------------------------------
    # Memory helpers
    # -------------------------------------------------------------------------
    def _target(self, product_id: Optional[str]) -> Optional[str]:
        """An explicit id wins; otherwise fall back to the remembered one."""
        return product_id or self.memory.last_product_id

    def _reply(self, text: str) -> str:
        self.memory.record(text)
        return text

    def _recover(self, exc: ApiError, action: str, product_id: Optional[str] = None) -> str:
        """Turn an API failure into something the user can act on."""
        logger.info("recovering from %s while trying to %s", exc, action)

        if exc.unreachable:
            return self._reply(
                f"I couldn't {action} because the catalog service isn't responding right now. "
                "Nothing was changed, please try again in a moment."
            )
        if exc.status_code == 404:
            if product_id and product_id == self.memory.last_product_id:
                self.memory.forget()
                return self._reply(
                    f"I couldn't {action}: the product I was working with ({product_id}) "
                    "no longer exists, so I've forgotten it. Want to add it again?"
                )
            return self._reply(
                f"I couldn't {action}: there's no product with id {product_id}. "
                "You can ask me to search the catalog by name."
            )
        if exc.status_code in (400, 422):
            return self._reply(
                f"I couldn't {action} because the catalog rejected the values ({exc.detail}). "
                "Could you check them and try again?"
            )
        return self._reply(f"I couldn't {action}: the catalog returned an error ({exc}).")

    # -------------------------------------------------------------------------
    # Conversational operations
    # -------------------------------------------------------------------------
    def add_product(
        self,
        name: str,
        price_cents: int,
        quantity: int = 0,
        category: str = "general",
    ) -> str:
        """Add a new product to the catalog and remember it as the current product.

        Args:
            name: Product name, e.g. "Espresso Beans 1kg".
            price_cents: Price in integer cents (1299 means $12.99).
            quantity: Units in stock.
            category: Catalog category.
        """
        try:
            product = self.api.add_product(name, price_cents, quantity=quantity, category=category)
        except ApiError as exc:
            return self._recover(exc, f"add '{name}'")
        self.memory.remember(product)
        return self._reply(
            f"Added '{product.name}' at {_money(product.price_cents)} with {product.quantity} "
            f"in stock (id {product.id}). I'll remember it, so you can just say 'it' from now on."
        )

    def update_price(self, price_cents: int, product_id: Optional[str] = None) -> str:
        """Change a product's price.  Leave product_id empty to use the current product."""
        target = self._target(product_id)
        if target is None:
            return self._reply(_NO_PRODUCT)
        try:
            product = self.api.update_product(target, price_cents=price_cents)
        except ApiError as exc:
            return self._recover(exc, "update the price", target)
        self.memory.remember(product)
        return self._reply(f"Done. '{product.name}' now costs {_money(product.price_cents)}.")

    def restock(self, quantity: int, product_id: Optional[str] = None) -> str:
        """Set a product's stock quantity.  Leave product_id empty to use the current product."""
        target = self._target(product_id)
        if target is None:
            return self._reply(_NO_PRODUCT)
        try:
            product = self.api.update_product(target, quantity=quantity)
        except ApiError as exc:
            return self._recover(exc, "update the stock", target)
        self.memory.remember(product)
        return self._reply(f"'{product.name}' now has {product.quantity} in stock.")

    def describe_product(self, product_id: Optional[str] = None) -> str:
        """Describe a product.  Leave product_id empty to describe the current product."""
        target = self._target(product_id)
        if target is None:
            return self._reply(_NO_PRODUCT)
        try:
            product = self.api.get_product(target)
        except ApiError as exc:
            return self._recover(exc, "look that product up", target)
        self.memory.remember(product)
        return self._reply(_describe(product))

    def remove_product(self, product_id: Optional[str] = None) -> str:
        """Delete a product.  Leave product_id empty to delete the current product."""
        target = self._target(product_id)
        if target is None:
            return self._reply(_NO_PRODUCT)
        try:
            product = self.api.delete_product(target)
        except ApiError as exc:
            return self._recover(exc, "remove that product", target)
        if self.memory.last_product_id == product.id:
            self.memory.forget()
        return self._reply(f"Removed '{product.name}' from the catalog.")

    def list_catalog(self, category: Optional[str] = None) -> str:
        """Summarize the catalog, optionally for one category."""
        try:
            products = self.api.list_products(category=category)
        except ApiError as exc:
            return self._recover(exc, "list the catalog")
        where = f" in '{category}'" if category else ""
        if not products:
            return self._reply(f"The catalog has no products{where} yet.")
        lines = [f"There are {len(products)} products{where}:"]
        lines += [f"  • {_describe(p)}" for p in products]
        return self._reply("\n".join(lines))

    def find_products(self, term: str) -> str:
        """Search the catalog by name.  A single match becomes the current product."""
        try:
            products = self.api.search_products(term)
        except ApiError as exc:
            return self._recover(exc, f"search for '{term}'")
        if not products:
            return self._reply(f"Nothing in the catalog matches '{term}'.")
        if len(products) == 1:
            self.memory.remember(products[0])
            return self._reply(f"Found one match: {_describe(products[0])}")
        lines = [f"Found {len(products)} matches for '{term}':"]
        lines += [f"  • {_describe(p)}" for p in products]
        return self._reply("\n".join(lines))

    def forget(self) -> str:
        """Forget the current product."""
        self.memory.forget()
        return self._reply("Okay, I've forgotten which product we were talking about.")

    def tools(self) -> list[Callable[..., str]]:
        """The methods an LLM agent may call."""
        return [
            self.add_product,
            self.update_price,
            self.restock,
            self.describe_product,
            self.remove_product,
            self.list_catalog,
            self.find_products,
            self.forget,
        ]


def _describe(product: Product) -> str:
    return (
        f"'{product.name}' ({product.category}): {_money(product.price_cents)}, "
        f"{product.quantity} in stock, id {product.id}"
    )
