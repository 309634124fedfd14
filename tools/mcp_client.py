# =============================================================================
# tools/mcp_client.py  —  Discover and Invoke Tools for a Language Model
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The other half of the tool-provider pattern.  A language model can't
#   speak MCP; it speaks "function calling".  This module bridges the two:
#
#     MCP server ──list_tools──▶ ToolSpec ──to_openai()──▶ LLM `tools=[...]`
#     LLM tool_call ──call_tool──▶ MCP server ──result──▶ LLM `tool` message
#
# THE LOOP (run_with_tools):
#   1. Discover the tools once.
#   2. Send the user's prompt plus the tool schemas to the model.
#   3. If the model asks for tools, run each one and append the results.
#   4. Repeat until the model answers in plain text.
#
#   Notice what is NOT here: memory.  If the model forgets an id between
#   rounds, nothing on this side will remember it.
#
# LLM ACCESS:
#   litellm.acompletion, with the same model strings ADK's LiteLlm uses
#   ("openrouter/openai/gpt-4o" by default).
# =============================================================================

import json
import logging
from typing import Any

import litellm
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.models import ToolSpec

logger = logging.getLogger(__name__)


class ToolProviderClient:
    """Async MCP client that returns plain ToolSpecs and dicts.

    ``source`` is whatever fastmcp.Client accepts: a FastMCP instance (in
    memory), a path to a server script (stdio), or a URL.

        async with ToolProviderClient(server) as tools:
            specs = await tools.list_tools()
            product = await tools.call_tool("get_product", {"product_id": "..."})
    """

    def __init__(self, source: Any):
        self._client = Client(source)

    async def __aenter__(self) -> "ToolProviderClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._client.__aexit__(*exc_info)

    async def list_tools(self) -> list[ToolSpec]:
        tools = await self._client.list_tools()
        return [
            ToolSpec(
                name=tool.name,
                description=tool.description or "",
                parameters=tool.inputSchema,
            )
            for tool in tools
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict:
        """Invoke a tool and return its structured result.

        Raises:
            ToolError: the tool failed; the message carries the raw API error.
        """
        result = await self._client.call_tool(name, arguments)
        if result.structured_content is not None:
            return result.structured_content
        # Tools that returned text only.
        text = "".join(getattr(block, "text", "") for block in result.content)
        return {"result": text}


def to_openai_tools(specs: list[ToolSpec]) -> list[dict]:
    return [spec.to_openai() for spec in specs]


def _tool_message(call_id: str, payload: dict) -> dict:
    return {"role": "tool", "tool_call_id": call_id, "content": json.dumps(payload)}


async def run_with_tools(
    client: ToolProviderClient,
    prompt: str,
    model: str,
    max_rounds: int = 5,
    system: str = "",
) -> str:
    """Answer ``prompt`` with a model that may call the provider's tools.

    Tool failures are handed back to the model as {"error": "..."} so it can
    react; they don't abort the loop.

    Raises:
        RuntimeError: the model was still asking for tools after max_rounds.
    """
    tools = to_openai_tools(await client.list_tools())
    messages: list[dict] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    for round_no in range(1, max_rounds + 1):
        response = await litellm.acompletion(model=model, messages=messages, tools=tools)
        message = response.choices[0].message
        tool_calls = getattr(message, "tool_calls", None) or []

        if not tool_calls:
            return message.content or ""

        messages.append({
            "role": "assistant",
            "content": message.content,
            "tool_calls": [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {"name": call.function.name, "arguments": call.function.arguments},
                }
                for call in tool_calls
            ],
        })

        for call in tool_calls:
            name = call.function.name
            try:
                arguments = json.loads(call.function.arguments or "{}")
            except json.JSONDecodeError as exc:
                messages.append(_tool_message(call.id, {"error": f"arguments are not valid JSON: {exc}"}))
                continue

            logger.info("round %d: calling %s(%s)", round_no, name, arguments)
            try:
                payload = await client.call_tool(name, arguments)
            except ToolError as exc:
                logger.info("round %d: %s failed: %s", round_no, name, exc)
                payload = {"error": str(exc)}
            messages.append(_tool_message(call.id, payload))

    raise RuntimeError(f"model still requesting tools after {max_rounds} rounds")
