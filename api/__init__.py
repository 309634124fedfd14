# =============================================================================
# api/__init__.py
# =============================================================================
# The product catalog REST API — the existing service that the wrapper agent
# (agent/) and the tool provider (tools/) both sit in front of.
#
# It deliberately has no idea either of them exists.
# =============================================================================
