"""Facade over the prompt texts so callers depend on one object."""

from __future__ import annotations
from typing import Sequence

from . import therapy as _therapy


class DefaultPromptFactory:
    # CONVERSATION
    def build_system(self) -> str:
        return _therapy.build_therapist_system()

    def greeting(self) -> str:
        return _therapy.GREETING

    def fallback_reply(self) -> str:
        return _therapy.FALLBACK_REPLY

    # ENRICHMENT
    def quotes(self) -> Sequence[str]:
        return _therapy.MOTIVATIONAL_QUOTES

    def quote_block(self, quote: str) -> str:
        return _therapy.quote_block(quote)

    def breathing_block(self) -> str:
        return _therapy.breathing_block()

    def gratitude_block(self) -> str:
        return _therapy.gratitude_block()
