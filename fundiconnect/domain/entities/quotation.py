from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Quotation:
    id: str
    provider_id: str
    provider_name: str
    service: str
    estimated_cost: int
    hours: int
    base_rate: int
    urgency_fee: int
    response_time: str
    rating: float
    location: str
    phone: str | None = None
    services: tuple[str, ...] = ()

    @property
    def duration(self) -> str:
        return f"{self.hours} hours"
