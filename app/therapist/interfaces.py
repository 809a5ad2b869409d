"""
Abstractions for pluggable services. Inversion of control: the controller
depends on interfaces, not concrete services. Enables fakes in tests and
swapping providers or storage backends.

Common protocols:
- LLMClient.chat(history, user_text, settings, system) -> (reply, meta)
- KeyValueStorage.get_item(key) / set_item(key, value)
- SessionStore.load() -> Session & save(session)
- RandomSource.random() / choice(seq)
- SecurityGuard.validate_user_input(text) / sanitize_for_prompt(text)

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
from typing import Optional, Protocol, Sequence, TypeVar
from .models import LLMSettings, Message, Session

T = TypeVar("T")


class LLMClient(Protocol):
    def chat(
        self,
        history: list[Message],
        user_text: str,
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]: ...


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class SessionStore(Protocol):
    def load(self) -> Session: ...

    def save(self, session: Session) -> None: ...


class RandomSource(Protocol):
    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class SecurityGuard(Protocol):
    def validate_user_input(self, text: str) -> None: ...

    def sanitize_for_prompt(self, text: str) -> str: ...
