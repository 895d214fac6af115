# =============================================================================
# tools/mcp_server.py  -  FastMCP server for the Flux Schnell image tool
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes ONE MCP tool, generate_image, backed by Replicate's hosted
#   black-forest-labs/flux-schnell model.
#
# HOW A CALL FLOWS:
#   1. The agent lists tools and sees generate_image with its schema
#   2. It calls generate_image with a prompt and optional knobs
#   3. FastMCP checks the arguments against the typed signature below
#   4. core.contract.validate re-checks them as a closed record
#   5. core.gateway builds the {"input": {...}} body and POSTs it once
#   6. The Replicate response goes back verbatim as indented JSON text
#
# ERRORS:
#   core raises UnknownTool / InvalidArguments / UpstreamError.  We log them
#   as "[MCP Error]" and re-raise as FastMCP's ToolError, which the agent
#   receives as an error result.  Other exceptions are left alone.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server     (stdio transport, Ctrl+C to stop)
#   Requires REPLICATE_API_TOKEN in the environment or in .env
# =============================================================================

import json
import logging
import os
import sys
from typing import Any

from anyio import to_thread
from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from pydantic import StrictBool

from core.config import load_config
from core.contract import list_tools, validate
from core.errors import ConfigurationError, ToolCallError
from core.gateway import ReplicateGateway, build_request, format_result
from core.models import (
    DEFAULT_ARGUMENTS,
    TOOL_NAME,
    AspectRatio,
    Megapixels,
    Number,
    OutputFormat,
    ToolCallRequest,
)

SERVER_NAME = "flux-schnell-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP JSON-RPC stream, so every log line goes to STDERR.
# The API token is never passed to any of these helpers.
# =============================================================================

_CYAN = "\033[36m"     # Requests
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"

logging.basicConfig(
    level=os.environ.get("MCP_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, body: Any) -> str:
    """Log the upstream body as compact JSON in GREEN, return the tool text."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(body, separators=(',', ':'))}{_RESET}")
    return format_result(body)


def _log_error(error: ToolCallError) -> None:
    # The JSON-RPC code only reaches this log line.  FastMCP and the MCP SDK
    # turn any exception raised by a tool into an isError text result, so the
    # caller gets the message without the code.
    data = error.to_error_data()
    logging.error(f"{_RED}[MCP Error] {data.code} {data.message}{_RESET}")


# =============================================================================
# Server factory
# =============================================================================
# The gateway (and so the credential) is passed in rather than read from
# module globals.  Tests build a server around a gateway whose HTTP traffic
# is mocked; main() builds the real one.
#
# The typed signature is what FastMCP validates arguments against.  The
# schema it ADVERTISES is swapped for the contract's declaration, so
# tools/list shows the closed parameter set with its bounds.
# =============================================================================
def build_server(gateway: ReplicateGateway) -> FastMCP:
    """Create the FastMCP server with generate_image bound to ``gateway``."""
    mcp = FastMCP(SERVER_NAME)

    async def generate_image(
        prompt: str,
        go_fast: StrictBool = DEFAULT_ARGUMENTS["go_fast"],
        megapixels: Megapixels = DEFAULT_ARGUMENTS["megapixels"],
        num_outputs: Number = DEFAULT_ARGUMENTS["num_outputs"],
        aspect_ratio: AspectRatio = DEFAULT_ARGUMENTS["aspect_ratio"],
        output_format: OutputFormat = DEFAULT_ARGUMENTS["output_format"],
        output_quality: Number = DEFAULT_ARGUMENTS["output_quality"],
        num_inference_steps: Number = DEFAULT_ARGUMENTS["num_inference_steps"],
    ) -> str:
        """Generate an image with Flux Schnell and return Replicate's response.

        The result is the prediction object as JSON text.  Image URLs are in
        its "output" list, one per requested image.
        """
        arguments = {
            "prompt": prompt,
            "go_fast": go_fast,
            "megapixels": megapixels,
            "num_outputs": num_outputs,
            "aspect_ratio": aspect_ratio,
            "output_format": output_format,
            "output_quality": output_quality,
            "num_inference_steps": num_inference_steps,
        }
        _log_request(TOOL_NAME, **arguments)

        try:
            validated = validate(ToolCallRequest(name=TOOL_NAME, arguments=arguments))
            _log_status(f"POST {gateway.config.predictions_path}")
            # The upstream call blocks for as long as the prediction runs; a
            # worker thread keeps the event loop free for other requests.
            body = await to_thread.run_sync(gateway.execute, build_request(validated))
        except ToolCallError as e:
            _log_error(e)
            raise ToolError(str(e)) from e

        return _log_response(TOOL_NAME, body)

    declared = list_tools()[0]
    tool = Tool.from_function(generate_image, name=declared["name"], description=declared["description"])
    mcp.add_tool(tool.model_copy(update={"parameters": declared["inputSchema"]}))

    return mcp


# =============================================================================
# Process entry point
# =============================================================================
def main() -> None:
    """Load config, serve over stdio until interrupted, then exit 0."""
    load_dotenv()
    logging.getLogger().setLevel(os.environ.get("MCP_LOG_LEVEL", "INFO").upper())

    try:
        config = load_config()
    except ConfigurationError as e:
        logging.error(f"{_RED}[MCP Error] {e}{_RESET}")
        sys.exit(1)

    gateway = ReplicateGateway(config)
    mcp = build_server(gateway)

    logging.info(f"Flux Schnell MCP server running on stdio ({SERVER_NAME} {SERVER_VERSION})")
    try:
        mcp.run()
    except KeyboardInterrupt:
        # Stops the listener only; nothing in flight is cancelled.
        logging.info("Interrupted, shutting down")
    finally:
        gateway.close()
    sys.exit(0)


if __name__ == "__main__":
    main()
