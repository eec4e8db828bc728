from __future__ import annotations

import logging

from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.domain.entities.reply import BotReply


class MockMessagePlatform(MessagePlatformPort):
    """Records replies instead of delivering them."""

    def __init__(self, channel: str = "mock") -> None:
        self.channel = channel
        self.sent: list[tuple[str, BotReply]] = []
        self.acknowledged: list[tuple[str, str | None]] = []
        self._logger = logging.getLogger(__name__)

    def send_reply(self, recipient_id: str, reply: BotReply) -> None:
        self.sent.append((recipient_id, reply))
        self._logger.info(
            "Mock send",
            extra={"user_id": recipient_id, "channel": self.channel, "reason": reply.kind},
        )

    def acknowledge(self, callback_id: str, text: str | None = None) -> None:
        self.acknowledged.append((callback_id, text))
