from __future__ import annotations

import pytest

from fundiconnect.application.use_cases.extract_intent import ExtractIntentUseCase, IntentExtractor
from fundiconnect.application.use_cases.generate_quotation import QuotationGenerator
from fundiconnect.application.use_cases.match_providers import ProviderMatcher
from fundiconnect.application.use_cases.process_message import ConversationPipeline
from fundiconnect.application.use_cases.reply_composer import ReplyComposer
from fundiconnect.infrastructure.roster.static_roster import StaticProviderRoster
from fundiconnect.infrastructure.store.memory_store import MemorySessionStore

FIXED_NOW = 1_700_000_000.0


class FixedRandom:
    """Stands in for random.Random with a constant complexity draw."""

    def __init__(self, value: float) -> None:
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return self.value


def build_pipeline(roster=None, store=None, llm=None, complexity: float = 0.6) -> ConversationPipeline:
    roster = roster if roster is not None else StaticProviderRoster()
    return ConversationPipeline(
        extract_intent=ExtractIntentUseCase(extractor=IntentExtractor(), llm=llm),
        matcher=ProviderMatcher(roster=roster),
        quotations=QuotationGenerator(rng=FixedRandom(complexity), clock=lambda: FIXED_NOW),
        composer=ReplyComposer(),
        sessions=store if store is not None else MemorySessionStore(),
        roster=roster,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def pipeline(store: MemorySessionStore) -> ConversationPipeline:
    return build_pipeline(store=store)
