# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every layer raises one of these, and every layer decides differently what
# to do with them:
#   - api/         maps them to HTTP status codes
#   - tools/       lets them propagate raw (the caller sees the API's error)
#   - agent/       turns them into a sentence a person can act on
# =============================================================================

from typing import Iterable, Optional


class CatalogError(Exception):
    """Base class for every error raised by this project."""


class ProductNotFoundError(CatalogError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"product '{product_id}' not found")


class ProductValidationError(CatalogError):
    """Product data the store refuses to hold (blank name, negative price...)."""


class ApiError(CatalogError):
    """A REST call failed.

    ``status_code`` is the HTTP status, or ``None`` when the API could not be
    reached at all (connection refused, timeout).
    """

    def __init__(self, status_code: Optional[int], detail: str):
        self.status_code = status_code
        self.detail = detail
        label = status_code if status_code is not None else "unreachable"
        super().__init__(f"{label}: {detail}")

    @property
    def unreachable(self) -> bool:
        return self.status_code is None


class ToolNotFoundError(CatalogError):
    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"unknown tool '{name}' (available: {', '.join(self.available) or 'none'})"
        )


class ToolArgumentError(CatalogError):
    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(f"{tool}: {message}")
