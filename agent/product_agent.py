# =============================================================================
# agent/product_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the LLM agent in one of two configurations, one per architecture.
#   Both use Google ADK for orchestration and LiteLlm for the model
#   (OpenRouter → GPT-4o by default, see core/config.py).
#
#   ┌──────────────────────────── create_agent() ───────────────────────────┐
#   │  LLM ──▶ ProductAssistant methods ──▶ ProductAPIClient ──▶ REST API   │
#   │           (memory + error recovery, in-process)                       │
#   └───────────────────────────────────────────────────────────────────────┘
#
#   ┌───────────────────────── create_tool_provider_agent() ────────────────┐
#   │  LLM ──▶ MCPToolset ══stdio══▶ tools/mcp_server.py ──▶ REST API       │
#   │           (discovered tools, stateless, raw errors)                   │
#   └───────────────────────────────────────────────────────────────────────┘
#
# MCP CONNECTION (tool-provider mode):
#   ADK starts tools/mcp_server.py as a subprocess and talks to it over
#   stdin/stdout.  "uv run" makes sure the subprocess uses this project's
#   virtualenv (fastmcp, httpx, ...) rather than the system Python.
# =============================================================================

import os
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.assistant import ProductAssistant
from agent.prompt import TOOL_PROVIDER_PROMPT, get_assistant_prompt
from core.client import ProductAPIClient
from core.config import Settings


def create_agent(
    assistant: Optional[ProductAssistant] = None,
    settings: Optional[Settings] = None,
) -> Agent:
    """Create the wrapper agent.

    The assistant's bound methods are handed to ADK as plain function tools;
    ADK reads their signatures and docstrings to describe them to the model.
    Because they're bound to ONE assistant, every turn of the session shares
    its memory.

    Args:
        assistant: An existing assistant (and its memory).  A new one talking
            to PRODUCT_API_URL is created when omitted.
        settings: Model and API settings; read from the environment when omitted.
    """
    settings = settings or Settings.from_env()
    if assistant is None:
        assistant = ProductAssistant(ProductAPIClient.from_settings(settings))

    return Agent(
        name="product_assistant",
        model=LiteLlm(model=settings.model),
        instruction=get_assistant_prompt(),
        tools=assistant.tools(),
    )


def create_tool_provider_agent(settings: Optional[Settings] = None) -> Agent:
    """Create an agent whose only capabilities are the stateless MCP tools."""
    settings = settings or Settings.from_env()

    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    mcp_server_path = os.path.join(project_root, "tools", "mcp_server.py")

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", mcp_server_path],
            env={**os.environ, "PRODUCT_API_URL": settings.api_url},
        ),
    )

    return Agent(
        name="product_tool_client",
        model=LiteLlm(model=settings.model),
        instruction=TOOL_PROVIDER_PROMPT,
        tools=[mcp_tools],
    )
