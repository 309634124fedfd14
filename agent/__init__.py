# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the WRAPPER AGENT: the architecture that puts a
# stateful, conversational layer in front of the product API.
#
# ARCHITECTURAL ROLE:
#   - assistant.py      memory ("the current product") + error recovery
#   - prompt.py         system prompts for both architectures
#   - product_agent.py  Google ADK agent configuration (both modes)
#   - tasks.py          agent-to-agent task messaging (skills over HTTP)
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the API (that's api/)
#   - It is NOT the stateless tool provider (that's tools/)
#
# THE KEY INSIGHT:
#   The wrapper agent and the tool provider call the SAME API client.  What
#   the agent adds is judgment: which product "it" is, and what a 404 means
#   for the person asking.
# =============================================================================
