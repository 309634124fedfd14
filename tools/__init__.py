# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the TOOL PROVIDER: the architecture that exposes each
# product API operation as a stateless, discoverable tool.
#
# ARCHITECTURAL ROLE:
#   - product_tools.py  one tool per REST operation (+ in-process registry)
#   - mcp_server.py     the same tools served over MCP by FastMCP
#   - mcp_client.py     discovery/invocation for a language model (LiteLLM)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT remember anything between calls
#   - They do NOT reinterpret API errors (a 404 stays a 404)
#   - They do NOT know about Google ADK
#
# TOOL CONTRACT QUALITY:
#   Each tool has a descriptive name, a docstring saying WHEN to call it,
#   typed parameters, and a dict result.  The model sees nothing else, so
#   these contracts are the whole interface.
# =============================================================================
