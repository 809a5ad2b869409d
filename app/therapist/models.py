"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Role (user, assistant) and Message (role, content).
- Session: the ordered message log of one chat.
- LLMSettings (model, temperature, max_tokens) and SafetySetting.

Testing: Mostly types. from_dict raises on structurally invalid payloads so
the session store can treat them as absent.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class HarmCategory(str, Enum):
    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"


class BlockThreshold(str, Enum):
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"


@dataclass
class Message:
    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, payload: dict) -> "Message":
        if not isinstance(payload, dict):
            raise TypeError(f"Unsupported message type: {type(payload)!r}")
        content = payload["content"]
        if not isinstance(content, str):
            raise TypeError("Message content must be a string.")
        return cls(role=Role(payload["role"]), content=content)


@dataclass
class Session:
    messages: list[Message] = field(default_factory=list)

    def append(self, message: Message) -> None:
        self.messages.append(message)

    def append_user(self, text: str) -> Message:
        message = Message(Role.USER, text)
        self.append(message)
        return message

    def append_assistant(self, text: str) -> Message:
        message = Message(Role.ASSISTANT, text)
        self.append(message)
        return message

    def extend(self, messages: Iterable[Message]) -> None:
        for message in messages:
            self.append(message)

    def history(self) -> list[Message]:
        """Snapshot of the messages, safe to hand to a provider."""
        return self.messages[:]

    def __len__(self) -> int:
        return len(self.messages)

    def to_list(self) -> list[dict]:
        return [m.to_dict() for m in self.messages]

    @classmethod
    def from_list(cls, payload: list) -> "Session":
        if not isinstance(payload, list):
            raise TypeError(f"Unsupported session type: {type(payload)!r}")
        return cls(messages=[Message.from_dict(m) for m in payload])


@dataclass(frozen=True)
class SafetySetting:
    category: HarmCategory
    threshold: BlockThreshold = BlockThreshold.BLOCK_MEDIUM_AND_ABOVE


DEFAULT_SAFETY_SETTINGS: tuple[SafetySetting, ...] = (
    SafetySetting(HarmCategory.HARASSMENT),
    SafetySetting(HarmCategory.HATE_SPEECH),
)


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    max_tokens: int = 512
    safety: tuple[SafetySetting, ...] = DEFAULT_SAFETY_SETTINGS
