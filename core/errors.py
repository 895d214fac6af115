# =============================================================================
# core/errors.py  -  Error taxonomy for tool calls
# =============================================================================
#
# Every failure a caller can see is one of three classes, each tagged with
# the JSON-RPC code the MCP spec reserves for it:
#
#   UnknownTool       -> METHOD_NOT_FOUND  (wrong tool name)
#   InvalidArguments  -> INVALID_PARAMS    (bag failed type/enum checks)
#   UpstreamError     -> INTERNAL_ERROR    (Replicate call failed)
#
# None of them are retried.  Anything that is NOT a ToolCallError is a bug
# in this code and is left to propagate as-is.
# =============================================================================

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class ToolCallError(Exception):
    """Base class for failures reported back to the calling agent."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_error_data(self) -> ErrorData:
        return ErrorData(code=self.code, message=str(self))


class UnknownTool(ToolCallError):
    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(ToolCallError):
    code = INVALID_PARAMS

    def __init__(self, details: str = ""):
        message = "Invalid parameters for generate_image"
        if details:
            message = f"{message}: {details}"
        super().__init__(message)
        self.details = details


class UpstreamError(ToolCallError):
    """The inference API call failed.

    ``message`` is the upstream ``detail`` when there was one, else the
    transport error's text.  ``str()`` adds the provider prefix.
    """

    code = INTERNAL_ERROR

    def __str__(self) -> str:
        return f"Replicate API error: {self.message}"


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing or malformed."""
