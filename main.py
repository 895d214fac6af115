# =============================================================================
# main.py  -  Interactive demo: chat with an agent that generates images
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# NEEDS (in the environment or .env):
#   REPLICATE_API_TOKEN   used by the MCP server to call Replicate
#   OPENROUTER_API_KEY    used by LiteLlm for the agent's reasoning
#
# WHAT HAPPENS:
#   1. Creates the ADK agent (agent/image_agent.py)
#   2. ADK spawns tools/mcp_server.py over stdio when a tool is first needed
#   3. Each line you type goes to the agent; tool calls are echoed
#   4. The agent's final reply (with image URLs) is printed
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must run before the agent exists: LiteLlm reads OPENROUTER_API_KEY and the
# server subprocess inherits REPLICATE_API_TOKEN from this environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.image_agent import create_agent

APP_NAME = "flux_image_studio"
USER_ID = "demo_user"


async def run_agent():
    """Run the image agent interactively until the user quits."""
    print("=" * 70)
    print("  FLUX SCHNELL IMAGE AGENT")
    print("  Powered by Google ADK + FastMCP + Replicate")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Describe the image you want.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is working...\n")
        print("-" * 70)

        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if hasattr(part, "text") and part.text:
                        final_response = part.text

                    if hasattr(part, "function_call") and part.function_call:
                        call = part.function_call
                        print(f"  🔧 Calling tool: {call.name} {dict(call.args or {})}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
