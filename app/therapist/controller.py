"""
Purpose: The single orchestration point for a chat session. Owns the
Session, the busy flag and token counters. It centralizes the "one-turn"
logic so the UI never knows how storage, prompts or the provider work.

Key responsibilities:
- Restore the session from the store (seeded with the greeting when absent).
- Validate and sanitize user input (services.security).
- Append the user turn and persist it before the provider call.
- Call the completion client with the history prior to the new turn.
- Enrich successful replies; fall back to the apology on failure.
- Clear the busy flag whatever happens, then persist the reply.

Testing: Pure unit tests with fakes: fake LLMClient, in-memory storage,
stub random source.
"""

from __future__ import annotations
import logging
from typing import Optional

from .interfaces import SecurityGuard, SessionStore
from .models import Message, Session
from .prompts import DefaultPromptFactory
from .services.completion import CompletionClient, CompletionError
from .services.enricher import ReplyEnricher
from .services.security import DefaultSecurity

logger = logging.getLogger(__name__)


class TherapistSessionController:
    def __init__(
        self,
        completion: CompletionClient,
        store: SessionStore,
        enricher: Optional[ReplyEnricher] = None,
        security: Optional[SecurityGuard] = None,
    ):
        self.completion = completion
        self.store: SessionStore = store
        self.enricher = enricher or ReplyEnricher()
        self.security: SecurityGuard = security or DefaultSecurity()
        self.prompts: DefaultPromptFactory = completion.prompts
        self.session: Session = store.load()
        self.busy: bool = False

        self.tokens_in: int = 0
        self.tokens_out: int = 0
        self.model_used: Optional[str] = None

    def is_busy(self) -> bool:
        """True while a reply is outstanding; new submissions are refused."""
        return self.busy

    def get_history(self) -> list[Message]:
        """Get the current full history of messages."""
        return self.session.messages

    def send(self, user_text: str) -> Message:
        """
        Handles one back-and-forth turn and returns the appended assistant
        message. Raises ValueError for invalid input and RuntimeError when a
        previous turn is still in flight; provider failures never escape.
        """
        if self.busy:
            raise RuntimeError("Still replying to your last message.")
        self.security.validate_user_input(user_text)
        text = self.security.sanitize_for_prompt(user_text)

        self.busy = True
        try:
            prior = self.session.history()
            self.session.append_user(text)
            self.store.save(self.session)

            try:
                reply = self.completion.request(prior, text)
                reply = self.enricher.enrich(reply, text)
            except CompletionError:
                logger.exception("Therapist reply failed")
                reply = self.prompts.fallback_reply()
            else:
                self._track_usage(self.completion.last_meta)

            message = self.session.append_assistant(reply)
            self.store.save(self.session)
            return message
        finally:
            self.busy = False

    def _track_usage(self, meta: dict) -> None:
        self.tokens_in += _as_count(meta.get("tokens_in"))
        self.tokens_out += _as_count(meta.get("tokens_out"))
        self.model_used = meta.get("model") or self.completion.settings.model


def _as_count(value) -> int:
    """Token counts from provider meta; anything unusable counts as zero."""
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError, OverflowError):
        return 0
