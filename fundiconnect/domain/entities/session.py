from __future__ import annotations

from dataclasses import dataclass

from fundiconnect.domain.entities.quotation import Quotation


@dataclass(frozen=True)
class ConversationSession:
    last_service: str | None = None
    last_location: str | None = None
    last_providers: tuple[Quotation, ...] = ()  # most recent quotation list, 1-based in replies
    conversation_step: str = "initial"  # "initial", "service_selection", "showing_providers", "booking_details"
    updated_at: float | None = None
