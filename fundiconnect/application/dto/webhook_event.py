from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fundiconnect.domain.entities.message import Message

# Bot commands rewritten to the text the pipeline understands.
TELEGRAM_COMMANDS = {
    "/start": "hello",
    "/help": "help",
}


class TelegramUpdateDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: dict[str, Any] | None = None
    callback_query: dict[str, Any] | None = None

    def extract_messages(self) -> list[Message]:
        if self.callback_query:
            message = self._from_callback(self.callback_query)
        elif self.message:
            message = self._from_message(self.message)
        else:
            message = None
        return [message] if message else []

    def _from_message(self, msg: dict[str, Any]) -> Message | None:
        text = msg.get("text")
        chat_id = (msg.get("chat") or {}).get("id")
        if not (text and chat_id is not None):
            return None

        sender = msg.get("from") or {}
        text = str(text).strip()
        command = text.split(maxsplit=1)[0].split("@", 1)[0].lower() if text.startswith("/") else None
        if command in TELEGRAM_COMMANDS:
            text = TELEGRAM_COMMANDS[command]

        return Message(
            id=f"tg:{self.update_id}",
            thread_id=str(chat_id),
            sender_id=str(sender.get("id", chat_id)),
            text=text,
            timestamp=int(msg.get("date") or time.time()),
            platform="telegram",
            sender_name=sender.get("first_name"),
        )

    def _from_callback(self, query: dict[str, Any]) -> Message | None:
        data = query.get("data")
        chat_id = ((query.get("message") or {}).get("chat") or {}).get("id")
        if not (data and chat_id is not None):
            return None

        sender = query.get("from") or {}
        return Message(
            id=f"tg:{self.update_id}",
            thread_id=str(chat_id),
            sender_id=str(sender.get("id", chat_id)),
            text="",
            timestamp=int(time.time()),
            platform="telegram",
            sender_name=sender.get("first_name"),
            action=str(data),
            callback_id=str(query.get("id")) if query.get("id") else None,
        )


class WhatsAppWebhookDTO(BaseModel):
    object: str | None = None
    entry: list[dict[str, Any]] = Field(default_factory=list)

    def extract_messages(self) -> list[Message]:
        messages: list[Message] = []
        for entry in self.entry or []:
            for change in entry.get("changes", []) or []:
                value = change.get("value") or {}
                names = {
                    str(c.get("wa_id")): (c.get("profile") or {}).get("name")
                    for c in value.get("contacts", []) or []
                }
                for msg in value.get("messages", []) or []:
                    message = self._to_message(msg, names)
                    if message:
                        messages.append(message)
        return messages

    def _to_message(self, msg: dict[str, Any], names: dict[str, str | None]) -> Message | None:
        mid = msg.get("id")
        sender = msg.get("from")
        timestamp = msg.get("timestamp")
        msg_type = msg.get("type")

        text = ""
        action = None
        if msg_type == "text":
            text = str((msg.get("text") or {}).get("body") or "")
        elif msg_type == "interactive":
            interactive = msg.get("interactive") or {}
            reply = interactive.get("button_reply") or interactive.get("list_reply") or {}
            action = reply.get("id")
        elif msg_type == "button":
            text = str((msg.get("button") or {}).get("text") or "")

        if not (mid and sender and timestamp and (text.strip() or action)):
            return None

        return Message(
            id=str(mid),
            thread_id=str(sender),
            sender_id=str(sender),
            text=text,
            timestamp=int(timestamp),
            platform="whatsapp",
            sender_name=names.get(str(sender)),
            action=str(action) if action else None,
        )
