"""
Tests for durable conversation session persistence.
"""

from __future__ import annotations

import tempfile
import threading
from pathlib import Path

from fundiconnect.domain.entities.session import ConversationSession
from fundiconnect.infrastructure.store.json_store import JsonSessionStore
from fundiconnect.infrastructure.store.memory_store import MemorySessionStore

from conftest import build_pipeline


def test_json_store_round_trips_quotations():
    """A selection typed after a restart still sees the quotation list."""
    with tempfile.TemporaryDirectory() as tmpdir:
        pipeline = build_pipeline(store=JsonSessionStore(data_dir=tmpdir))
        pipeline.process("I need a plumber in Westlands", "254711000111")

        reloaded = JsonSessionStore(data_dir=tmpdir)
        session = reloaded.get("254711000111")

        assert session.last_service == "plumbing"
        assert session.last_location == "Westlands"
        assert session.conversation_step == "showing_providers"
        assert session.last_providers[0].provider_name == "John Kamau"
        assert session.last_providers[0].services[0] == "Pipe Installation"

        contact = build_pipeline(store=reloaded).process("1", "254711000111")[0]
        assert contact.title == "Contact John Kamau"


def test_json_store_missing_and_corrupted_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        assert store.get("nobody") is None

        store.put("web:abc", ConversationSession(last_service="cleaning"))
        files = list(Path(tmpdir).glob("session_*.json"))
        assert len(files) == 1
        files[0].write_text("{not json", encoding="utf-8")

        assert store.get("web:abc") is None


def test_json_store_delete_and_count():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        store.put("a", ConversationSession())
        store.put("b", ConversationSession())
        store.mark_processed("m1")

        assert store.count() == 2
        store.delete("a")
        store.delete("a")
        assert store.count() == 1
        assert not list(Path(tmpdir).glob("*.tmp"))


def test_processed_ids_survive_restart():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonSessionStore(data_dir=tmpdir).mark_processed("wamid.1")

        store = JsonSessionStore(data_dir=tmpdir)
        assert store.has_processed("wamid.1") is True
        assert store.has_processed("wamid.2") is False


def test_processed_ids_are_bounded():
    store = MemorySessionStore(processed_limit=2)
    for mid in ("m1", "m2", "m3"):
        store.mark_processed(mid)

    assert store.has_processed("m1") is False
    assert store.has_processed("m3") is True


def test_memory_store_basics():
    store = MemorySessionStore()
    store.put("u1", ConversationSession(last_service="beauty"))

    assert store.get("u1").last_service == "beauty"
    assert store.get("u2") is None
    assert store.count() == 1
    store.delete("u1")
    assert store.count() == 0


def test_lock_is_per_user_and_reentrant():
    store = MemorySessionStore()
    assert store.lock("a") is store.lock("a")
    assert store.lock("a") is not store.lock("b")

    with store.lock("a"):
        with store.lock("a"):
            store.put("a", ConversationSession())


def test_concurrent_messages_for_one_user_keep_last_list():
    store = MemorySessionStore()
    pipeline = build_pipeline(store=store)
    texts = ["I need a plumber", "I need a cleaner", "I need an electrician", "I need a tutor"] * 5

    threads = [threading.Thread(target=pipeline.process, args=(text, "same_user")) for text in texts]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    session = store.get("same_user")
    # Whatever ran last, the stored list belongs to the stored service.
    assert len(session.last_providers) == 1
    assert session.last_providers[0].service == session.last_service


def test_mark_processed_reports_first_claim():
    with tempfile.TemporaryDirectory() as tmpdir:
        for store in (MemorySessionStore(), JsonSessionStore(data_dir=tmpdir)):
            assert store.mark_processed("wamid.7") is True
            assert store.mark_processed("wamid.7") is False
            assert store.has_processed("wamid.7") is True
