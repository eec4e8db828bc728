from __future__ import annotations

import logging

from fundiconnect.application.ports.provider_roster import ProviderRosterPort
from fundiconnect.domain.entities.provider import Provider

RATING_WEIGHT = 8
REVIEWS_CAP = 10
RESPONSE_WEIGHT = 10
URGENT_RESPONSE_WEIGHT = 20
BUDGET_BONUS = 5

# Checked in order; "< 10 mins" and "< 45 mins" fall through to the default.
RESPONSE_FACTORS: tuple[tuple[str, float], ...] = (
    ("< 15", 1.0),
    ("< 30", 0.8),
    ("< 1 hour", 0.6),
)
DEFAULT_RESPONSE_FACTOR = 0.4


class ProviderMatcher:
    """Select up to `limit` providers for a category, optionally ranked."""

    def __init__(
        self,
        roster: ProviderRosterPort,
        ranked: bool = True,
        limit: int = 3,
        budget_tolerance: float = 1.2,
    ) -> None:
        self._roster = roster
        self._ranked = ranked
        self._limit = limit
        self._budget_tolerance = budget_tolerance
        self._logger = logging.getLogger(__name__)

    def match(
        self,
        category: str,
        location: str | None = None,
        budget: int | None = None,
        urgent: bool = False,
    ) -> list[Provider]:
        try:
            wanted = category.lower().strip()
            matches = [p for p in self._roster.list_providers() if p.category.lower() == wanted]

            if location:
                needle = location.lower().strip()
                nearby = [p for p in matches if needle in p.location.lower()]
                # A location miss keeps the category-wide results.
                if nearby:
                    matches = nearby

            if budget:
                ceiling = budget * self._budget_tolerance
                matches = [p for p in matches if p.hourly_rate <= ceiling]

            if self._ranked:
                matches = sorted(matches, key=lambda p: self.score(p, urgent=urgent, budget=budget), reverse=True)

            return matches[: self._limit]
        except Exception:
            self._logger.exception(
                "Provider matching failed",
                extra={"service": category, "location": location},
            )
            return []

    def score(self, provider: Provider, urgent: bool = False, budget: int | None = None) -> float:
        score = provider.rating * RATING_WEIGHT
        score += min(provider.reviews / 10, REVIEWS_CAP)

        weight = URGENT_RESPONSE_WEIGHT if urgent else RESPONSE_WEIGHT
        score += weight * _response_factor(provider.response_time)

        if budget and provider.hourly_rate <= budget:
            score += BUDGET_BONUS
        return score


def _response_factor(response_time: str) -> float:
    for bucket, factor in RESPONSE_FACTORS:
        if bucket in (response_time or ""):
            return factor
    return DEFAULT_RESPONSE_FACTOR
