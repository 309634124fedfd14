# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# between the REST API, the tool provider, and the wrapper agent.  They carry
# almost no behavior: a product, a tool description, and the assistant's
# memory.
#
# DESIGN PRINCIPLE — one shape, two consumers:
#   The wrapper agent and the tool provider both work with the same Product.
#   The difference between the two architectures is NOT the data — it's who
#   holds state (AssistantMemory) and who turns errors into language.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Product — one entry in the catalog behind the REST API
# -----------------------------------------------------------------------------
@dataclass
class Product:
    """A catalog product as returned by the REST API."""

    id: str                            # uuid hex assigned by the API
    name: str                          # "Espresso Beans 1kg"
    price_cents: int                   # Integer cents, never floats for money
    quantity: int                      # Units in stock
    category: str = "general"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from an API JSON body, ignoring unknown keys."""
        return cls(
            id=data["id"],
            name=data["name"],
            price_cents=int(data["price_cents"]),
            quantity=int(data["quantity"]),
            category=data.get("category") or "general",
        )


# -----------------------------------------------------------------------------
# ToolSpec — what a tool provider advertises during discovery
# -----------------------------------------------------------------------------
# A language model never sees Python functions.  It sees a name, a sentence
# saying when to use the tool, and a JSON schema for the arguments.  That's
# the entire contract, so it gets its own type.
# -----------------------------------------------------------------------------
@dataclass
class ToolSpec:
    """A discoverable tool: name, description, JSON-schema parameters."""

    name: str
    description: str
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def to_openai(self) -> dict[str, Any]:
        """Render in the OpenAI function-calling shape LiteLLM expects."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


# -----------------------------------------------------------------------------
# AssistantMemory — the wrapper agent's state
# -----------------------------------------------------------------------------
# This is the ONLY stateful thing in the whole system.  The REST API is
# stateless per request, the tool provider is stateless per call; the
# wrapper agent remembers "the last product" so the user can say "change its
# price" without repeating an id.
# -----------------------------------------------------------------------------
@dataclass
class AssistantMemory:
    """What the wrapper agent remembers between turns."""

    last_product_id: Optional[str] = None
    history: list[str] = field(default_factory=list)

    def remember(self, product: Product) -> None:
        self.last_product_id = product.id

    def forget(self) -> None:
        self.last_product_id = None

    def record(self, line: str) -> None:
        self.history.append(line)
