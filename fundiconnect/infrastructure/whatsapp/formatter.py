from __future__ import annotations

from fundiconnect.domain.entities.reply import BotReply

# WhatsApp Cloud API caps text bodies at 4096 characters.
MAX_TEXT_LENGTH = 4096


class WhatsAppFormatter:
    """Plain text with WhatsApp *bold*. Callback buttons have no text equivalent and are dropped."""

    def __init__(self, currency: str = "KSh") -> None:
        self._currency = currency

    def render(self, reply: BotReply) -> str:
        lines: list[str] = []
        if reply.title:
            lines.append(f"*{reply.title}*")
            lines.append("")
        if reply.body:
            lines.append(reply.body)
        for position, q in enumerate(reply.quotations, start=1):
            if lines and lines[-1] != "":
                lines.append("")
            lines.append(f"*{position}. {q.provider_name}*")
            lines.append(f"💰 {self._currency} {q.estimated_cost:,} ({q.duration})")
            lines.append(f"⭐ {q.rating:.1f} rating | {q.response_time}")
            lines.append(f"📍 {q.location}")
            if q.urgency_fee:
                lines.append(f"⚡ Includes urgency fee of {self._currency} {q.urgency_fee:,}")

        links = [f"{b.label}: {b.url}" for row in reply.buttons for b in row if b.url]
        if links:
            lines.append("")
            lines.extend(links)
        if reply.footer:
            lines.append("")
            lines.append(reply.footer)

        text = "\n".join(lines).strip()
        return text[:MAX_TEXT_LENGTH]
