from __future__ import annotations

import logging
from typing import Any

import httpx


class TelegramClient:
    def __init__(self, bot_token: str, api_base: str = "https://api.telegram.org") -> None:
        self._base_url = f"{api_base.rstrip('/')}/bot{bot_token}"
        self._client = httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def send_message(self, chat_id: str, payload: dict[str, Any]) -> None:
        self._post("sendMessage", {"chat_id": chat_id, **payload})

    def answer_callback_query(self, callback_query_id: str, text: str | None = None) -> None:
        body: dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            body["text"] = text
        self._post("answerCallbackQuery", body)

    def _post(self, method: str, body: dict[str, Any]) -> None:
        resp = self._client.post(f"{self._base_url}/{method}", json=body)
        if resp.status_code >= 400:
            try:
                description = resp.json().get("description")
            except Exception:
                description = resp.text
            self._logger.error(
                "Telegram request failed",
                extra={
                    "user_id": body.get("chat_id"),
                    "reason": f"{method} status={resp.status_code} {description}",
                },
            )
            resp.raise_for_status()
