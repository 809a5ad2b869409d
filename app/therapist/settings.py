"""
Purpose: Deployment configuration read from the environment (and a local
.env file when present). Also the one place that wires a provider client
and the logging format.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .interfaces import LLMClient
from .models import LLMSettings
from .services.llm_gemini import DEFAULT_GEMINI_MODEL, GeminiLLMClient
from .services.llm_openai import DEFAULT_OPENAI_MODEL, OpenAILLMClient

PROVIDERS = ("gemini", "openai")
DEFAULT_STORAGE_DIR = "~/.therapist_chat"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class AppSettings:
    provider: str = "gemini"
    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    storage_dir: Path = Path(DEFAULT_STORAGE_DIR).expanduser()
    log_level: str = "INFO"

    def llm_settings(self) -> LLMSettings:
        return LLMSettings(model=self.model)


def _get_str(env: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = env.get(key)
    if not isinstance(value, str) or not value.strip():
        return default
    return value.strip()


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Build settings from `env` (defaults to os.environ after load_dotenv)."""
    if env is None:
        load_dotenv()
        env = os.environ

    provider = (_get_str(env, "THERAPIST_PROVIDER", "gemini") or "gemini").lower()
    if provider not in PROVIDERS:
        raise ValueError(
            f"Unknown THERAPIST_PROVIDER {provider!r}; expected one of {PROVIDERS}"
        )

    if provider == "gemini":
        api_key = _get_str(env, "GEMINI_API_KEY") or _get_str(env, "GOOGLE_API_KEY")
        default_model = DEFAULT_GEMINI_MODEL
    else:
        api_key = _get_str(env, "OPENAI_API_KEY")
        default_model = DEFAULT_OPENAI_MODEL

    return AppSettings(
        provider=provider,
        api_key=api_key,
        model=_get_str(env, "THERAPIST_MODEL", default_model),
        storage_dir=Path(_get_str(env, "THERAPIST_STORAGE_DIR", DEFAULT_STORAGE_DIR)).expanduser(),
        log_level=(_get_str(env, "THERAPIST_LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def build_llm_client(provider: str, api_key: Optional[str]) -> LLMClient:
    """Raises RuntimeError when the key or the provider SDK is missing."""
    if provider == "openai":
        return OpenAILLMClient(api_key=api_key)
    return GeminiLLMClient(api_key=api_key)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
