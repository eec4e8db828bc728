from __future__ import annotations

import re
from typing import Any

from fundiconnect.domain.entities.quotation import Quotation
from fundiconnect.domain.entities.reply import BotReply, ReplyButton

_MARKDOWN_SPECIAL = re.compile(r"([_*\[\]()~`>#+=|{}.!\-])")


def escape_markdown(text: str) -> str:
    """Escape every MarkdownV2 reserved character with a backslash."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text or "")


class TelegramFormatter:
    """Renders a BotReply into sendMessage fields (everything except chat_id)."""

    def __init__(self, currency: str = "KSh") -> None:
        self._currency = currency

    def render(self, reply: BotReply) -> dict[str, Any]:
        lines: list[str] = []
        if reply.title:
            lines.append(f"*{escape_markdown(reply.title)}*")
            lines.append("")
        if reply.body:
            lines.append(escape_markdown(reply.body))
        for position, quotation in enumerate(reply.quotations, start=1):
            lines.extend(self._quotation_lines(quotation, position, markdown=True))
        if reply.footer:
            lines.append(escape_markdown(reply.footer))
        return self._payload("\n".join(lines).strip(), reply, parse_mode="MarkdownV2")

    def render_plain(self, reply: BotReply) -> dict[str, Any]:
        lines: list[str] = []
        if reply.title:
            lines.append(reply.title)
            lines.append("")
        if reply.body:
            lines.append(reply.body)
        for position, quotation in enumerate(reply.quotations, start=1):
            lines.extend(self._quotation_lines(quotation, position, markdown=False))
        if reply.footer:
            lines.append(reply.footer)
        return self._payload("\n".join(lines).strip(), reply, parse_mode=None)

    def _quotation_lines(self, q: Quotation, position: int, markdown: bool) -> list[str]:
        esc = escape_markdown if markdown else (lambda s: s)
        name = f"*{position}\\. {esc(q.provider_name)}*" if markdown else f"{position}. {q.provider_name}"
        cost = f"{self._currency} {q.estimated_cost:,}"
        lines = [
            name,
            f"💰 {esc(cost)} {esc('(' + q.duration + ')')}",
            f"⭐ {esc(f'{q.rating:.1f}')} rating {esc('|')} {esc(q.response_time)}",
            f"📍 {esc(q.location)}",
        ]
        if q.urgency_fee:
            lines.append(esc(f"⚡ Includes urgency fee of {self._currency} {q.urgency_fee:,}"))
        lines.append("")
        return lines

    def _payload(self, text: str, reply: BotReply, parse_mode: str | None) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": text, "disable_web_page_preview": True}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply.buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [[_button(b) for b in row] for row in reply.buttons if row]
            }
        return payload


def _button(button: ReplyButton) -> dict[str, str]:
    if button.url:
        return {"text": button.label, "url": button.url}
    return {"text": button.label, "callback_data": button.action or "help"}
