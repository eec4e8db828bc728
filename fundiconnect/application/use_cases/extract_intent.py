from __future__ import annotations

import logging
from enum import Enum

from fundiconnect.application.exceptions import LLMContractError, LLMUpstreamError
from fundiconnect.application.ports.llm import LLMPort
from fundiconnect.application.utils.message_rules import (
    BOOKING_KEYWORDS,
    HELP_KEYWORDS,
    PRICING_KEYWORDS,
    SERVICE_KEYWORDS,
    extract_budget,
    extract_location,
    has_any_keyword,
    is_greeting,
    is_selection,
    is_urgent,
    matched_keywords,
    normalize_text,
)
from fundiconnect.domain.entities.intent import Intent, IntentClassification


class CategoryPolicy(str, Enum):
    first_match = "first_match"
    best_match = "best_match"


class IntentExtractor:
    """
    Deterministic keyword/regex extractor.

    Category detection runs under a configurable policy:
    - first_match: the first declared category with any keyword hit wins
    - best_match: the category with the highest matched/total keyword ratio wins,
      earlier categories win exact ties

    When `session_aware` is False a digits-only message has nothing to select
    from and falls through to "general".

    Keywords match as plain substrings. `word_start=True` only accepts hits
    that begin a word.
    """

    def __init__(
        self,
        policy: CategoryPolicy = CategoryPolicy.best_match,
        session_aware: bool = True,
        keywords: dict[str, tuple[str, ...]] | None = None,
        word_start: bool = False,
    ) -> None:
        self._policy = CategoryPolicy(policy)
        self._session_aware = session_aware
        self._word_start = word_start
        self._keywords = keywords or SERVICE_KEYWORDS
        self._logger = logging.getLogger(__name__)

    @property
    def policy(self) -> CategoryPolicy:
        return self._policy

    def extract(self, text: str) -> IntentClassification:
        try:
            return self._extract(text or "")
        except Exception:
            self._logger.exception("Intent extraction failed; treating message as general")
            return IntentClassification(intent=Intent.general)

    def detect_category(self, normalized: str) -> tuple[str | None, float]:
        best_service: str | None = None
        best_confidence = 0.0
        for service, keywords in self._keywords.items():
            hits = matched_keywords(normalized, keywords, self._word_start)
            if not hits:
                continue
            confidence = len(hits) / len(keywords)
            if self._policy is CategoryPolicy.first_match:
                return service, confidence
            if confidence > best_confidence:
                best_service = service
                best_confidence = confidence
        return best_service, best_confidence

    def _extract(self, text: str) -> IntentClassification:
        normalized = normalize_text(text)

        service, confidence = self.detect_category(normalized)
        location = extract_location(text)
        urgent = is_urgent(normalized, self._word_start)
        budget = extract_budget(text)

        if service:
            intent = Intent.service_request
        elif is_greeting(normalized):
            intent = Intent.greeting
        elif has_any_keyword(normalized, PRICING_KEYWORDS, self._word_start):
            intent = Intent.pricing_inquiry
        elif has_any_keyword(normalized, HELP_KEYWORDS, self._word_start):
            intent = Intent.help
        elif is_selection(text):
            intent = Intent.selection if self._session_aware else Intent.general
        elif has_any_keyword(normalized, BOOKING_KEYWORDS, self._word_start):
            intent = Intent.booking
        else:
            intent = Intent.general

        return IntentClassification(
            intent=intent,
            service=service,
            location=location,
            urgent=urgent,
            budget=budget,
            confidence=confidence,
            source="rules",
        )


class ExtractIntentUseCase:
    """Runs the optional model-backed extractor first and falls back to the rules."""

    def __init__(self, extractor: IntentExtractor, llm: LLMPort | None = None) -> None:
        self._extractor = extractor
        self._llm = llm
        self._logger = logging.getLogger(__name__)

    def execute(self, text: str) -> IntentClassification:
        if self._llm is None or is_selection(text):
            return self._extractor.extract(text)

        try:
            result = self._llm.classify_intent(text=text)
        except (LLMUpstreamError, LLMContractError) as e:
            self._logger.warning(
                "LLM extraction failed; using keyword rules",
                extra={"reason": str(e)},
            )
            return self._extractor.extract(text)

        # Only a bare number can pick from the quotation list.
        if result.intent is Intent.selection:
            self._logger.info(
                "LLM selection without a number; using keyword rules",
                extra={"intent": result.intent.value},
            )
            return self._extractor.extract(text)
        return result
