# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Provider for the Product API
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the six ProductTools methods over MCP (Model Context Protocol).
#   Any MCP client — an ADK agent, Claude Desktop, tools/mcp_client.py —
#   can connect, DISCOVER the tools (names, descriptions, JSON schemas) and
#   INVOKE them by name.
#
# HOW IT WORKS (the flow):
#   1. A client asks "what tools do you have?"  FastMCP answers from the
#      registered functions' signatures and docstrings.
#   2. The client calls a tool by name with JSON arguments.
#   3. FastMCP validates the arguments and routes to the ProductTools method.
#   4. The method calls the REST API and returns a dict.
#   5. If the API failed, the ApiError becomes an MCP tool error whose text
#      is the raw "<status>: <detail>" message.
#
# WHAT THIS SERVER DOES NOT DO:
#   Remember anything between calls.  There is no session, no "last
#   product".  That's the defining property of the tool-provider pattern.
#
# RUNNING THIS SERVER:
#   python tools/mcp_server.py         (stdio transport, what ADK launches)
# =============================================================================

import os
import sys

from fastmcp import FastMCP

if __name__ == "__main__":
    # Launched as a script by the agent: make core/ and tools/ importable.
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.client import ProductAPIClient
from tools.product_tools import ProductTools, configure_logging

SERVER_NAME = "product-catalog-tools"


def create_server(api: ProductAPIClient) -> FastMCP:
    """Build the MCP server around a product API client.

    A factory instead of a module-level instance so tests can point the
    server at an in-process API.
    """
    mcp = FastMCP(SERVER_NAME)
    tools = ProductTools(api)
    for fn in tools.all():
        mcp.tool(fn)
    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from dotenv import load_dotenv

    from core.config import Settings

    load_dotenv()
    configure_logging()
    create_server(ProductAPIClient.from_settings(Settings.from_env())).run()
