from __future__ import annotations

from dataclasses import dataclass

from fundiconnect.domain.entities.quotation import Quotation


@dataclass(frozen=True)
class ReplyButton:
    label: str
    action: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class BotReply:
    kind: str  # "text" | "quotation" | "contact" | "followup"
    body: str
    title: str | None = None
    quotations: tuple[Quotation, ...] = ()
    buttons: tuple[tuple[ReplyButton, ...], ...] = ()
    footer: str | None = None
