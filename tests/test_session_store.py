import json

import pytest

from therapist.models import Message, Role, Session
from therapist.persistence.session_store import (
    STORAGE_KEY,
    FileStorage,
    InMemoryStorage,
    KeyValueSessionStore,
    new_session_id,
    session_key,
)
from therapist.prompts.therapy import GREETING


def _assert_seeded(session):
    assert len(session) == 1
    assert session.messages[0] == Message(Role.ASSISTANT, GREETING)


def test_load_without_history_seeds_greeting():
    store = KeyValueSessionStore(InMemoryStorage())
    _assert_seeded(store.load())


def test_load_malformed_json_behaves_like_missing():
    storage = InMemoryStorage()
    storage.set_item(STORAGE_KEY, "{not json")
    _assert_seeded(KeyValueSessionStore(storage).load())


def test_load_structurally_invalid_payloads_fall_back():
    bad_payloads = [
        {"role": "user", "content": "hi"},
        [{"role": "system", "content": "hi"}],
        [{"role": "user"}],
        [{"role": "user", "content": 42}],
        ["just a string"],
    ]
    for payload in bad_payloads:
        storage = InMemoryStorage()
        storage.set_item(STORAGE_KEY, json.dumps(payload))
        _assert_seeded(KeyValueSessionStore(storage).load())


def test_load_deeply_nested_json_falls_back():
    storage = InMemoryStorage()
    storage.set_item(STORAGE_KEY, "[" * 200000)
    _assert_seeded(KeyValueSessionStore(storage).load())


def test_load_non_utf8_file_falls_back(tmp_path):
    (tmp_path / f"{STORAGE_KEY}.json").write_bytes(b"\xff\xfe[garbage")
    _assert_seeded(KeyValueSessionStore(FileStorage(tmp_path)).load())


def test_empty_session_round_trips():
    store = KeyValueSessionStore(InMemoryStorage())
    store.save(Session())
    assert store.load().messages == []


def test_save_then_load_round_trips():
    store = KeyValueSessionStore(InMemoryStorage())
    session = store.load()
    session.append_user("I had a long day")
    session.append_assistant("Tell me more about it.")
    store.save(session)

    restored = store.load()
    assert restored.messages == session.messages
    assert [m.role for m in restored.messages] == [Role.ASSISTANT, Role.USER, Role.ASSISTANT]


def test_save_overwrites_single_key_with_json_list():
    storage = InMemoryStorage()
    store = KeyValueSessionStore(storage)
    store.save(Session([Message(Role.USER, "one")]))
    store.save(Session([Message(Role.USER, "two")]))
    assert json.loads(storage.get_item(STORAGE_KEY)) == [{"role": "user", "content": "two"}]


def test_file_storage_survives_a_new_instance(tmp_path):
    store = KeyValueSessionStore(FileStorage(tmp_path / "data"))
    session = store.load()
    session.append_user("Ça va, merci")
    store.save(session)

    reopened = KeyValueSessionStore(FileStorage(tmp_path / "data")).load()
    assert reopened.messages == session.messages
    assert (tmp_path / "data" / f"{STORAGE_KEY}.json").exists()
    assert not list((tmp_path / "data").glob("*.tmp"))


def test_file_storage_missing_key_returns_none(tmp_path):
    assert FileStorage(tmp_path).get_item("nothing") is None


def test_browser_sessions_do_not_share_history(tmp_path):
    first = KeyValueSessionStore(FileStorage(tmp_path), key=session_key(new_session_id()))
    second = KeyValueSessionStore(FileStorage(tmp_path), key=session_key(new_session_id()))

    session_a = first.load()
    session_a.append_user("secret from A")
    first.save(session_a)

    session_b = second.load()
    _assert_seeded(session_b)
    session_b.append_user("hello from B")
    second.save(session_b)

    assert [m.content for m in first.load().messages] == [GREETING, "secret from A"]
    assert [m.content for m in second.load().messages] == [GREETING, "hello from B"]


def test_session_key_rejects_foreign_ids():
    sid = new_session_id()
    assert session_key(sid) == f"{STORAGE_KEY}-{sid}"
    for bad in ["", "../etc/passwd", "ABC", None]:
        with pytest.raises(ValueError):
            session_key(bad)
