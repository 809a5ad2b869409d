"""
Purpose: Session transcript storage behind a browser-like key-value area.
Why: Conversations survive restarts; the controller never touches files.

What is inside:
InMemoryStorage and FileStorage implementing get_item/set_item.
KeyValueSessionStore with load/save of the whole ordered message log under
one key, serialized as a JSON list. Each browser session gets its own key
(session_key), so no two sessions read or write the same history.

Testing:
In-memory: simple state tests.
File: tmp_path fixture; reopen with a fresh instance.
"""

from __future__ import annotations
import json
import logging
import os
import re
import tempfile
import uuid
from pathlib import Path
from typing import Optional

from ..interfaces import KeyValueStorage
from ..models import Message, Role, Session
from ..prompts.therapy import GREETING

logger = logging.getLogger(__name__)

STORAGE_KEY = "therapistChatHistory"

_SESSION_ID = re.compile(r"[0-9a-f]{32}")


def new_session_id() -> str:
    return uuid.uuid4().hex


def is_session_id(value: object) -> bool:
    return isinstance(value, str) and bool(_SESSION_ID.fullmatch(value))


def session_key(session_id: str) -> str:
    """Storage key owned by one browser session."""
    if not is_session_id(session_id):
        raise ValueError(f"Invalid session id: {session_id!r}")
    return f"{STORAGE_KEY}-{session_id}"


class InMemoryStorage:
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileStorage:
    """One UTF-8 file per key under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


def seed_session() -> Session:
    """Fresh session holding only the assistant greeting."""
    return Session(messages=[Message(Role.ASSISTANT, GREETING)])


class KeyValueSessionStore:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> Session:
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return seed_session()
            return Session.from_list(json.loads(raw))
        except (ValueError, TypeError, KeyError, RecursionError) as exc:
            # Unreadable history is treated as absent; the caller never sees it.
            logger.warning("Discarding unreadable chat history %r: %s", self.key, exc)
            return seed_session()

    def save(self, session: Session) -> None:
        self.storage.set_item(self.key, json.dumps(session.to_list(), ensure_ascii=False))
