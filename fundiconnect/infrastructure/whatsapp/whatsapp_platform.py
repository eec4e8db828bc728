from __future__ import annotations

from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.domain.entities.reply import BotReply
from fundiconnect.infrastructure.whatsapp.formatter import WhatsAppFormatter
from fundiconnect.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


class WhatsAppPlatform(MessagePlatformPort):
    def __init__(self, client: WhatsAppClient, formatter: WhatsAppFormatter) -> None:
        self._client = client
        self._formatter = formatter

    def send_reply(self, recipient_id: str, reply: BotReply) -> None:
        self._client.send_text(recipient_id=recipient_id, text=self._formatter.render(reply))
