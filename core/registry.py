# =============================================================================
# core/registry.py  —  Tool Registry (discovery + lookup-and-invoke)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Keeps a table of named Python functions and exposes the two operations
#   every tool-calling protocol boils down to:
#     1. DISCOVERY  — list_tools(): name, description, JSON schema per tool
#     2. EXECUTION  — call(name, arguments): validate, invoke, return
#
#   FastMCP does the same job over a wire protocol.  This registry does it
#   in-process, so the tool-provider idea can be exercised (and tested)
#   without a server.
#
# HOW SCHEMAS ARE BUILT:
#   From the function signature.  Each annotated parameter is run through a
#   pydantic TypeAdapter to get its JSON schema; a parameter without a
#   default is "required".  The function's docstring summary becomes the
#   description the model reads.
#
# ERRORS:
#   Problems with the CALL (unknown tool, bad arguments) raise registry
#   errors.  Problems inside the TOOL propagate unchanged — a tool provider
#   does not reinterpret the API's failures.
# =============================================================================

import inspect
from typing import Any, Callable, Optional

from pydantic import TypeAdapter, ValidationError

from core.errors import ToolArgumentError, ToolNotFoundError
from core.models import ToolSpec


class _RegisteredTool:
    """A function plus everything needed to describe and validate calls to it."""

    def __init__(self, fn: Callable, name: str, description: str):
        self.fn = fn
        self.name = name
        self.description = description
        self.signature = inspect.signature(fn)
        self.adapters: dict[str, TypeAdapter] = {}

        properties: dict[str, Any] = {}
        required: list[str] = []
        for pname, param in self.signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            annotation = Any if param.annotation is param.empty else param.annotation
            adapter = TypeAdapter(annotation)
            self.adapters[pname] = adapter

            schema = adapter.json_schema()
            if param.default is param.empty:
                required.append(pname)
            else:
                schema["default"] = param.default
            properties[pname] = schema

        self.spec = ToolSpec(
            name=name,
            description=description,
            parameters={"type": "object", "properties": properties, "required": required},
        )

    def bind(self, arguments: dict[str, Any]) -> dict[str, Any]:
        unknown = set(arguments) - set(self.adapters)
        if unknown:
            raise ToolArgumentError(self.name, f"unexpected argument(s): {', '.join(sorted(unknown))}")
        missing = [p for p in self.spec.parameters["required"] if p not in arguments]
        if missing:
            raise ToolArgumentError(self.name, f"missing required argument(s): {', '.join(missing)}")

        bound = {}
        for pname, value in arguments.items():
            try:
                bound[pname] = self.adapters[pname].validate_python(value)
            except ValidationError as exc:
                reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
                raise ToolArgumentError(self.name, f"invalid value for '{pname}': {reason}") from exc
        return bound


def _summary(fn: Callable) -> str:
    doc = inspect.getdoc(fn) or ""
    return doc.split("\n\n", 1)[0].replace("\n", " ").strip()


class ToolRegistry:
    """Named tools with JSON-schema parameters, looked up by dict."""

    def __init__(self) -> None:
        self._tools: dict[str, _RegisteredTool] = {}

    def register(
        self,
        fn: Optional[Callable] = None,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ):
        """Register a function as a tool.

        Works directly (``registry.register(fn)``) or as a decorator, with or
        without arguments (``@registry.register(name="x")``).

        Raises:
            ValueError: if a tool with the same name is already registered.
        """
        def _register(func: Callable) -> Callable:
            tool_name = name or func.__name__
            if tool_name in self._tools:
                raise ValueError(f"tool '{tool_name}' is already registered")
            self._tools[tool_name] = _RegisteredTool(func, tool_name, description or _summary(func))
            return func

        if fn is None:
            return _register
        return _register(fn)

    def list_tools(self) -> list[ToolSpec]:
        return [tool.spec for tool in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec:
        return self._lookup(name).spec

    def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> Any:
        """Validate ``arguments`` against the tool's signature and invoke it."""
        tool = self._lookup(name)
        return tool.fn(**tool.bind(arguments or {}))

    def _lookup(self, name: str) -> _RegisteredTool:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, self._tools) from None

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
