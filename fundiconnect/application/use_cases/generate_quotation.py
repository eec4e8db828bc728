from __future__ import annotations

import logging
import math
import random
import time
from typing import Callable, Iterable

from fundiconnect.domain.entities.provider import Provider
from fundiconnect.domain.entities.quotation import Quotation

URGENCY_MULTIPLIER = 1.2
URGENCY_FEE_RATE = 0.2


class QuotationGenerator:
    """
    Synthesises an indicative price per provider.

    This is a presentation estimate, not a pricing engine: a random complexity
    in [0.5, 1.0] sets the job at ceil(complexity * 3) hours (2 or 3), billed
    at the hourly rate with a 20% urgency uplift. Pass a seeded `random.Random`
    and a fixed clock for reproducible quotes.
    """

    def __init__(self, rng: random.Random | None = None, clock: Callable[[], float] = time.time) -> None:
        self._rng = rng or random.Random()
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def generate(self, provider: Provider, service: str, urgent: bool = False) -> Quotation | None:
        try:
            if provider.hourly_rate <= 0:
                raise ValueError(f"hourly rate must be positive, got {provider.hourly_rate}")

            complexity = self._rng.uniform(0.5, 1.0)
            hours = max(1, math.ceil(complexity * 3))
            multiplier = URGENCY_MULTIPLIER if urgent else 1.0

            estimated_cost = _round_half_up(provider.hourly_rate * multiplier * hours)
            urgency_fee = _round_half_up(provider.hourly_rate * URGENCY_FEE_RATE * hours) if urgent else 0
            timestamp_ms = int(self._clock() * 1000)

            return Quotation(
                id=f"quote_{provider.id}_{timestamp_ms}",
                provider_id=provider.id,
                provider_name=provider.name,
                service=service,
                estimated_cost=estimated_cost,
                hours=hours,
                base_rate=provider.hourly_rate,
                urgency_fee=urgency_fee,
                response_time=provider.response_time,
                rating=provider.rating,
                location=provider.location,
                phone=provider.phone,
                services=tuple(provider.services),
            )
        except Exception:
            self._logger.exception(
                "Quotation generation failed",
                extra={"service": service, "reason": f"provider={getattr(provider, 'id', None)}"},
            )
            return None

    def generate_all(self, providers: Iterable[Provider], service: str, urgent: bool = False) -> list[Quotation]:
        quotations = (self.generate(provider, service, urgent) for provider in providers)
        return [q for q in quotations if q is not None]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
