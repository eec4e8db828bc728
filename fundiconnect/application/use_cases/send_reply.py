from __future__ import annotations

import logging

from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.domain.entities.reply import BotReply


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort, auto_reply_enabled: bool) -> None:
        self._platform = platform
        self._auto_reply_enabled = auto_reply_enabled
        self._logger = logging.getLogger(__name__)

    def execute(self, recipient_id: str, reply: BotReply) -> bool:
        """Send a reply. Returns True if actually sent, False if skipped."""
        if not self._auto_reply_enabled:
            self._logger.info("WOULD_SEND_REPLY", extra={"user_id": recipient_id, "reason": reply.kind})
            self._logger.info("AUTO_REPLY_ENABLED=false -> skipping send")
            return False
        self._platform.send_reply(recipient_id=recipient_id, reply=reply)
        return True

    def acknowledge(self, callback_id: str, text: str | None = None) -> None:
        self._platform.acknowledge(callback_id, text)
