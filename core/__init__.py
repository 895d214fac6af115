# =============================================================================
# core/__init__.py
# =============================================================================
# The tool contract and the Replicate gateway for the image server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or Google ADK.  The contract
#   (schema + validation) and the gateway (request building + error mapping)
#   depend only on pydantic, httpx and the mcp error codes, so they can be
#   tested without starting a server or touching the network.
# =============================================================================
