"""
Purpose: Thin client wrapper around OpenAI, the alternative provider.
One place for auth, model options, response/usage normalization.

Safety thresholds are Gemini-specific and have no chat-completions
equivalent, so they are not sent.

Testing: Mock SDK calls; assert it maps history and usage correctly.
"""

from __future__ import annotations
from typing import Optional
from ..models import LLMSettings, Message

try:
    from openai import OpenAI
except Exception:
    OpenAI = None

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAILLMClient:
    def __init__(self, api_key: str):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        if OpenAI is None:
            raise RuntimeError("openai package not installed. pip install openai")
        try:
            self.client = OpenAI(api_key=self.api_key)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}")

    def chat(
        self,
        history: list[Message],
        user_text: str,
        settings: LLMSettings,
        system: Optional[str] = None,
    ):
        payload = []
        if system:
            payload.append({"role": "system", "content": system})
        payload.extend({"role": m.role.value, "content": m.content} for m in history)
        payload.append({"role": "user", "content": user_text})

        cc = self.client.chat.completions.create(
            model=settings.model,
            messages=payload,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        text = cc.choices[0].message.content
        usage = getattr(cc, "usage", None)
        tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
        tokens_out = getattr(usage, "completion_tokens", 0) if usage else 0
        return text, {
            "model": cc.model,
            "tokens_in": tokens_in,
            "tokens_out": tokens_out,
            "raw": cc,
        }
