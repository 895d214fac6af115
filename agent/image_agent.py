# =============================================================================
# agent/image_agent.py  -  Google ADK agent wired to the image MCP server
# =============================================================================
#
# The agent has no image logic of its own:
#   - agent/prompt.py    tells the LLM how to use generate_image
#   - tools/mcp_server   is spawned over stdio and does the actual work
#   - LiteLlm            routes reasoning to a model behind OpenRouter
#
# The server subprocess inherits this process's environment, so the
# REPLICATE_API_TOKEN loaded by main.py reaches it.  The server also runs
# load_dotenv() itself, from the project root (our cwd for it).
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_image_agent_prompt

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Any OpenRouter model id works here, e.g. "openrouter/openai/gpt-4o-mini".
DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def server_parameters() -> StdioServerParameters:
    """How ADK should launch the image server: same interpreter, module mode."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(model: str = DEFAULT_MODEL) -> Agent:
    """Create the image agent with the MCP server as its toolset.

    Nothing is spawned here; ADK starts the server on first tool use.
    """
    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name="flux_image_agent",
        model=LiteLlm(model=model),
        instruction=get_image_agent_prompt(),
        tools=[mcp_tools],
    )
