# =============================================================================
# core/config.py  —  Runtime Settings
# =============================================================================
#
# All configuration comes from environment variables.  Entry points
# (main.py, tools/mcp_server.py) call load_dotenv() first, so a local .env
# file works too.  This module only READS os.environ; it never loads files,
# which keeps core/ importable anywhere.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:8085"
DEFAULT_AGENT_SERVER_URL = "http://localhost:8090"

# OpenRouter → OpenAI GPT-4o, through LiteLLM.
DEFAULT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_timeout: float = 10.0
    model: str = DEFAULT_MODEL
    agent_server_url: str = DEFAULT_AGENT_SERVER_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from the environment (or a mapping, for tests).

        Raises:
            ValueError: if PRODUCT_API_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("PRODUCT_API_TIMEOUT", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"PRODUCT_API_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ValueError(f"PRODUCT_API_TIMEOUT must be positive, got {timeout}")

        return cls(
            api_url=env.get("PRODUCT_API_URL", DEFAULT_API_URL).rstrip("/"),
            api_timeout=timeout,
            model=env.get("AGENT_MODEL", DEFAULT_MODEL),
            agent_server_url=env.get("AGENT_SERVER_URL", DEFAULT_AGENT_SERVER_URL).rstrip("/"),
        )
