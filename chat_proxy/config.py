# chat_proxy/config.py
import json
import logging
import os
from typing import List, Literal

from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

# --- Defaults ---
DEFAULT_API_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"
# Vendor bot endpoint (Volcengine Ark style). The bot id goes in the "model" field.
DEFAULT_BOT_PATH = "/api/v3/bots/chat/completions"

# Generation defaults applied when the caller leaves them out.
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000


class Settings(BaseModel):
    """Everything the proxy needs, resolved once at startup and never mutated."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    upstream_base_url: str = DEFAULT_API_BASE_URL
    client_api_key: str = ""
    upstream_api_key: str = ""
    model_id: str = DEFAULT_MODEL
    system_prompt: str = ""
    allowed_origins: List[str] = ["*"]
    upstream_kind: Literal["openai", "bot"] = "openai"
    bot_path: str = DEFAULT_BOT_PATH
    log_level: str = "INFO"

    @field_validator("upstream_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("allowed_origins")
    @classmethod
    def _drop_blank_origins(cls, value: List[str]) -> List[str]:
        origins = [o.strip() for o in value if o.strip()]
        return origins or ["*"]

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """
        Builds settings from environment variables.
        Secrets are expected to be set on the host, e.g. fly secrets set CLIENT_API_KEY="..."
        """
        env = os.environ if environ is None else environ

        system_prompt = env.get("SYSTEM_PROMPT")
        if system_prompt is None:
            system_prompt = load_prompt_file(env.get("PROMPT_FILE"))

        return cls(
            upstream_base_url=env.get("API_BASE_URL") or DEFAULT_API_BASE_URL,
            client_api_key=env.get("CLIENT_API_KEY", ""),
            upstream_api_key=env.get("UPSTREAM_API_KEY", ""),
            model_id=env.get("MODEL") or DEFAULT_MODEL,
            system_prompt=system_prompt,
            allowed_origins=env.get("CORS_ORIGINS", "*").split(","),
            upstream_kind=env.get("UPSTREAM_KIND", "openai").lower(),
            bot_path=env.get("BOT_PATH") or DEFAULT_BOT_PATH,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def load_prompt_file(path) -> str:
    """Reads the "system" entry of a prompt JSON file. Missing file means an empty prompt."""
    if not path:
        return ""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f).get("system", "")
    except FileNotFoundError:
        logger.warning("⚠️ Prompt file %s not found, using an empty system prompt.", path)
        return ""
