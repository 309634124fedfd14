# =============================================================================
# main.py  —  Entry Point for the Product Catalog Agents
# =============================================================================
#
# HOW TO RUN:
#   1. Start the REST API:      uvicorn api.app:app --port 8085
#   2. Talk to an agent:
#        uv run python main.py            → wrapper agent (memory + recovery)
#        uv run python main.py --tools    → tool-provider agent (MCP, stateless)
#
# TRY THIS IN BOTH MODES:
#   You: add a ceramic mug for $12.99, 40 in stock
#   You: actually make it $14.50
#   You: delete it
#   You: what's its price?
#
#   The wrapper agent resolves "it" from its own memory and explains the
#   final 404 ("...no longer exists, so I've forgotten it").  The
#   tool-provider agent has to carry the id in the conversation itself and
#   gets "404: product not found" back from the tool.
#
# GOOGLE ADK CONCEPTS USED:
#   - Runner: Manages the agent's execution lifecycle
#   - SessionService: Tracks conversation state across turns
#   - Content/Part: ADK's message format
#   - Event stream: Real-time updates as the agent thinks and acts
# =============================================================================

import argparse
import asyncio

from dotenv import load_dotenv

# Load environment variables from .env (OPENROUTER_API_KEY, PRODUCT_API_URL,
# AGENT_MODEL) before the agent reads them.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.product_agent import create_agent, create_tool_provider_agent
from core.config import Settings

APP_NAME = "product_catalog"
USER_ID = "shop_owner"


async def run_agent(use_tool_provider: bool = False):
    """Run one of the two agents interactively until the user quits."""
    settings = Settings.from_env()
    mode = "TOOL PROVIDER (MCP)" if use_tool_provider else "WRAPPER AGENT"

    print("=" * 70)
    print(f"  PRODUCT CATALOG ASSISTANT: {mode}")
    print(f"  Model: {settings.model}   API: {settings.api_url}")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_tool_provider_agent(settings) if use_tool_provider else create_agent(settings=settings)

    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask the agent to manage the catalog.")
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

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


def main():
    parser = argparse.ArgumentParser(description="Chat with a product catalog agent.")
    parser.add_argument(
        "--tools",
        action="store_true",
        help="use the stateless MCP tool provider instead of the wrapper agent",
    )
    args = parser.parse_args()
    asyncio.run(run_agent(use_tool_provider=args.tools))


if __name__ == "__main__":
    main()
