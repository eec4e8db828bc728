from __future__ import annotations

import logging

import httpx

from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.domain.entities.reply import BotReply
from fundiconnect.infrastructure.telegram.formatter import TelegramFormatter
from fundiconnect.infrastructure.telegram.telegram_client import TelegramClient


class TelegramPlatform(MessagePlatformPort):
    def __init__(self, client: TelegramClient, formatter: TelegramFormatter) -> None:
        self._client = client
        self._formatter = formatter
        self._logger = logging.getLogger(__name__)

    def send_reply(self, recipient_id: str, reply: BotReply) -> None:
        try:
            self._client.send_message(recipient_id, self._formatter.render(reply))
        except httpx.HTTPStatusError as e:
            # Usually a MarkdownV2 entity Telegram refused to parse.
            self._logger.warning(
                "Markdown send rejected; retrying as plain text",
                extra={"user_id": recipient_id, "channel": "telegram", "reason": str(e)},
            )
            self._client.send_message(recipient_id, self._formatter.render_plain(reply))

    def acknowledge(self, callback_id: str, text: str | None = None) -> None:
        self._client.answer_callback_query(callback_id, text)
