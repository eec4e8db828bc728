"""
Tests for inbound message handling: dedupe, callbacks, delivery.
"""

from __future__ import annotations

import threading

from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from fundiconnect.application.use_cases.send_reply import SendReplyUseCase
from fundiconnect.domain.entities.message import Message
from fundiconnect.infrastructure.mock_platform import MockMessagePlatform


def _message(mid: str, text: str = "", action: str | None = None, callback_id: str | None = None) -> Message:
    return Message(
        id=mid,
        thread_id="chat_1",
        sender_id="chat_1",
        text=text,
        timestamp=1700000000,
        platform="telegram",
        sender_name="Otieno",
        action=action,
        callback_id=callback_id,
    )


def _handler(pipeline, store, platform, auto_reply_enabled: bool = True) -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        pipeline=pipeline,
        sessions=store,
        send_reply=SendReplyUseCase(platform=platform, auto_reply_enabled=auto_reply_enabled),
    )


def test_text_message_sends_every_reply(pipeline, store):
    platform = MockMessagePlatform()
    handler = _handler(pipeline, store, platform)

    sent = handler.handle(_message("m1", text="I need a plumber in Westlands"))

    assert sent == 2
    assert [recipient for recipient, _ in platform.sent] == ["chat_1", "chat_1"]
    assert platform.sent[1][1].kind == "quotation"


def test_duplicate_message_is_ignored(pipeline, store):
    platform = MockMessagePlatform()
    handler = _handler(pipeline, store, platform)

    assert handler.handle(_message("m1", text="hello")) == 1
    assert handler.handle(_message("m1", text="hello")) == 0
    assert len(platform.sent) == 1


def test_concurrent_redeliveries_are_handled_once(pipeline, store):
    platform = MockMessagePlatform()
    handler = _handler(pipeline, store, platform)
    start = threading.Barrier(8)
    results: list[int] = []

    def deliver() -> None:
        start.wait()
        results.append(handler.handle(_message("m9", text="hello")))

    threads = [threading.Thread(target=deliver) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(results) == [0] * 7 + [1]
    assert len(platform.sent) == 1


def test_callback_is_acknowledged_and_routed(pipeline, store):
    platform = MockMessagePlatform()
    handler = _handler(pipeline, store, platform)

    handler.handle(_message("m2", action="call_2", callback_id="cb_9"))

    assert platform.acknowledged == [("cb_9", "✅ Processing your request...")]
    assert platform.sent[0][1].title == "Contact Mary Wanjiku"


def test_auto_reply_disabled_sends_nothing(pipeline, store):
    platform = MockMessagePlatform()
    handler = _handler(pipeline, store, platform, auto_reply_enabled=False)

    assert handler.handle(_message("m3", text="hello")) == 0
    assert platform.sent == []
    # The conversation still advances.
    assert store.get("chat_1").conversation_step == "service_selection"


def test_transport_failure_is_contained(pipeline, store):
    class FailingPlatform(MessagePlatformPort):
        def send_reply(self, recipient_id, reply):
            raise ConnectionError("network unreachable")

    handler = _handler(pipeline, store, FailingPlatform())

    assert handler.handle(_message("m4", text="I need a plumber")) == 0
