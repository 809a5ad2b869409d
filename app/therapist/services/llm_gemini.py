"""
Purpose: Thin client wrapper around Google Gemini (google-generativeai).
One place for auth, model options, role mapping, safety settings and
response/usage normalization.

Testing: Monkeypatch the `genai` module; assert the model is built with the
expected config and that history roles are mapped to the provider vocabulary.
"""

from __future__ import annotations
from typing import Optional
from ..models import LLMSettings, Message, Role

try:
    import google.generativeai as genai
except Exception:
    genai = None

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

_ROLE_MAP = {Role.ASSISTANT: "model", Role.USER: "user"}


def to_gemini_history(history: list[Message]) -> list[dict]:
    return [
        {"role": _ROLE_MAP[m.role], "parts": [m.content]}
        for m in history
    ]


def to_gemini_safety(settings: LLMSettings) -> list[dict[str, str]]:
    return [
        {"category": s.category.value, "threshold": s.threshold.value}
        for s in settings.safety
    ]


class GeminiLLMClient:
    def __init__(self, api_key: str):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing GEMINI_API_KEY")
        if genai is None:
            raise RuntimeError(
                "google-generativeai package not installed. "
                "pip install google-generativeai"
            )
        try:
            genai.configure(api_key=self.api_key)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize Gemini client: {e}")

    def chat(
        self,
        history: list[Message],
        user_text: str,
        settings: LLMSettings,
        system: Optional[str] = None,
    ):
        model = genai.GenerativeModel(
            model_name=settings.model,
            generation_config=genai.GenerationConfig(
                temperature=settings.temperature,
                max_output_tokens=settings.max_tokens,
            ),
            safety_settings=to_gemini_safety(settings),
            system_instruction=system,
        )
        chat = model.start_chat(history=to_gemini_history(history))
        resp = chat.send_message(user_text)

        # .text raises ValueError when the candidate was blocked or empty
        text = resp.text
        usage = getattr(resp, "usage_metadata", None)
        tokens_in = getattr(usage, "prompt_token_count", 0) if usage else 0
        tokens_out = getattr(usage, "candidates_token_count", 0) if usage else 0
        return text, {
            "model": settings.model,
            "tokens_in": tokens_in or 0,
            "tokens_out": tokens_out or 0,
            "raw": resp,
        }
