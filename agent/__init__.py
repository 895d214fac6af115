# =============================================================================
# agent/__init__.py
# =============================================================================
# A small Google ADK agent that uses the image server as its only toolset.
#
# It is a client of tools/mcp_server.py, not part of it: ADK spawns the
# server as a subprocess, talks MCP over stdio, and lets the LLM decide
# when to call generate_image and with which options.
# =============================================================================
