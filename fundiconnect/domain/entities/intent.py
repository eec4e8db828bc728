from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    greeting = "greeting"
    service_request = "service_request"
    pricing_inquiry = "pricing_inquiry"
    help = "help"
    booking = "booking"
    selection = "selection"
    general = "general"


@dataclass(frozen=True)
class IntentClassification:
    intent: Intent
    service: str | None = None
    location: str | None = None
    urgent: bool = False
    budget: int | None = None
    confidence: float = 0.0
    source: str = "rules"  # "rules" | "llm"
