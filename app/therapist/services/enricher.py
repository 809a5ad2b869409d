"""
Purpose: Append supportive extras to a model reply.
Blocks are evaluated in a fixed order and joined with blank lines:
an occasional quote, a breathing exercise for anxiety cues, a gratitude
prompt for low-motivation cues. The base reply is never modified.

Testing: Inject a stub random source to force or suppress the quote.
"""

from __future__ import annotations
import random
from typing import Optional

from ..interfaces import RandomSource
from ..prompts import DefaultPromptFactory

QUOTE_PROBABILITY = 0.3
ANXIETY_CUES = ("anxious", "panic")
LOW_MOTIVATION_CUES = ("empty", "unmotivated")


def _mentions(text: str, cues: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(cue in lowered for cue in cues)


class ReplyEnricher:
    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        prompts: Optional[DefaultPromptFactory] = None,
        quote_probability: float = QUOTE_PROBABILITY,
    ):
        self.rng: RandomSource = rng or random.Random()
        self.prompts = prompts or DefaultPromptFactory()
        self.quote_probability = quote_probability

    def extras(self, user_text: str) -> list[str]:
        blocks = []
        if self.rng.random() < self.quote_probability:
            quote = self.rng.choice(self.prompts.quotes())
            blocks.append(self.prompts.quote_block(quote))
        if _mentions(user_text, ANXIETY_CUES):
            blocks.append(self.prompts.breathing_block())
        if _mentions(user_text, LOW_MOTIVATION_CUES):
            blocks.append(self.prompts.gratitude_block())
        return blocks

    def enrich(self, reply: str, user_text: str) -> str:
        return "\n\n".join([reply, *self.extras(user_text)])
