# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the framework-free pieces shared by both
# architectures: data models, errors, settings, the in-memory store behind
# the REST API, the REST client, and the tool registry.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, FastAPI, or any
#   agent framework.  The agent and the tool provider are wiring; the core
#   is what they wire together.
# =============================================================================
