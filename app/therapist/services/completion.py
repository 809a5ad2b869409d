"""
Purpose: Provider-agnostic completion call for the therapist persona.
Supplies the fixed system instruction, generation and safety settings,
trims the reply, and turns any provider failure into the fallback apology.

Testing: Fake LLMClient; assert the history passed excludes the new turn,
replies are trimmed and failures never escape complete().
"""

from __future__ import annotations
import logging
from typing import Optional

from ..interfaces import LLMClient
from ..models import LLMSettings, Message
from ..prompts import DefaultPromptFactory

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """The provider call failed or returned no usable text."""


class CompletionClient:
    def __init__(
        self,
        llm: LLMClient,
        settings: LLMSettings,
        prompts: Optional[DefaultPromptFactory] = None,
    ):
        self.llm: LLMClient = llm
        self.settings = settings
        self.prompts = prompts or DefaultPromptFactory()
        self.last_meta: dict = {}

    def request(self, history: list[Message], user_text: str) -> str:
        """One provider round trip. Raises CompletionError on any failure."""
        try:
            reply, meta = self.llm.chat(
                history,
                user_text,
                self.settings,
                system=self.prompts.build_system(),
            )
        except Exception as e:
            raise CompletionError(str(e)) from e

        if not isinstance(reply, str):
            raise CompletionError(f"Unexpected reply type: {type(reply)!r}")
        text = reply.strip()
        if not text:
            raise CompletionError("Empty reply")
        self.last_meta = meta if isinstance(meta, dict) else {}
        return text

    def complete(self, history: list[Message], user_text: str) -> str:
        """Like request(), but returns the fallback apology instead of raising."""
        try:
            return self.request(history, user_text)
        except CompletionError:
            logger.exception("Completion failed; replying with fallback")
            return self.prompts.fallback_reply()
