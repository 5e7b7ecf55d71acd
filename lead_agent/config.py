"""
Settings for the Vapi Lead Nurture Agent.

Environment is read ONCE at process entry (after load_dotenv) and frozen into
a Settings object. Request handling never touches os.environ.

Python 3.9 compatible - uses typing.Optional, typing.Mapping
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MODEL = "gpt-4"

# Completion parameters for spoken replies
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, immutable after startup."""
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    debug: bool = False


def parse_port(raw: Optional[str]) -> int:
    """Parse PORT, falling back to 3000 when unset, non-numeric or not positive."""
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError:
        return DEFAULT_PORT
    return port if port > 0 else DEFAULT_PORT


def load_env_files() -> None:
    """Load .env from the project root or the current working directory."""
    env_paths = [
        Path(__file__).parent.parent / ".env",
        Path.cwd() / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break
    else:
        load_dotenv()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or an explicit mapping in tests)."""
    env = os.environ if environ is None else environ

    return Settings(
        port=parse_port(env.get("PORT")),
        host=env.get("HOST") or DEFAULT_HOST,
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        openai_model=env.get("OPENAI_MODEL") or DEFAULT_MODEL,
        debug=env.get("DEBUG", "false").lower() == "true",
    )
