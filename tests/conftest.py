import pytest

from therapist.models import LLMSettings
from therapist.persistence.session_store import InMemoryStorage, KeyValueSessionStore
from therapist.services.completion import CompletionClient


class EchoLLM:
    """Replies with the user text padded with whitespace; records every call."""

    def __init__(self):
        self.calls = []

    def chat(self, history, user_text, settings, system=None):
        self.calls.append(
            {"history": list(history), "user_text": user_text, "settings": settings, "system": system}
        )
        return f"  {user_text}  \n", {"model": settings.model, "tokens_in": 3, "tokens_out": 2}


class FailingLLM:
    def __init__(self, exc=None):
        self.exc = exc or ConnectionError("network down")

    def chat(self, history, user_text, settings, system=None):
        raise self.exc


class StubRandom:
    """Deterministic random source: fixed draw, picks the item at `index`."""

    def __init__(self, draw, index=0):
        self.draw = draw
        self.index = index

    def random(self):
        return self.draw

    def choice(self, seq):
        return seq[self.index]


@pytest.fixture
def llm_settings():
    return LLMSettings(model="test-model")


@pytest.fixture
def echo_llm():
    return EchoLLM()


@pytest.fixture
def store():
    return KeyValueSessionStore(InMemoryStorage())


@pytest.fixture
def echo_completion(echo_llm, llm_settings):
    return CompletionClient(echo_llm, llm_settings)
