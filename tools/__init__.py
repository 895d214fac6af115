# =============================================================================
# tools/__init__.py
# =============================================================================
# The FastMCP layer.
#
# tools/ translates between MCP and core/:
#   1. Registers generate_image with a FastMCP server
#   2. Hands each call to core.contract.validate and core.gateway
#   3. Turns core errors into MCP tool errors and logs them to stderr
#
# No validation rules or upstream details live here; those are in core/.
# =============================================================================
