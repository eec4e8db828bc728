"""
Tests for keyword/regex intent and entity extraction.
"""

from __future__ import annotations

from fundiconnect.application.exceptions import LLMContractError, LLMUpstreamError
from fundiconnect.application.ports.llm import LLMPort
from fundiconnect.application.use_cases.extract_intent import (
    CategoryPolicy,
    ExtractIntentUseCase,
    IntentExtractor,
)
from fundiconnect.application.utils.message_rules import extract_budget, extract_location, is_urgent
from fundiconnect.domain.entities.intent import Intent, IntentClassification


def test_plumber_in_westlands():
    result = IntentExtractor().extract("I need a plumber in Westlands")

    assert result.intent is Intent.service_request
    assert result.service == "plumbing"
    assert result.location == "Westlands"
    assert result.urgent is False
    assert result.source == "rules"
    assert 0.0 < result.confidence <= 1.0


def test_hello_is_greeting_with_no_entities():
    result = IntentExtractor().extract("hello")

    assert result.intent is Intent.greeting
    assert result.service is None
    assert result.location is None
    assert result.urgent is False
    assert result.budget is None


def test_swahili_greeting():
    assert IntentExtractor().extract("Jambo!").intent is Intent.greeting
    assert IntentExtractor().extract("habari yako").intent is Intent.greeting


def test_greeting_words_match_whole_words_only():
    """'this' and 'which' contain 'hi' but are not greetings."""
    result = IntentExtractor().extract("which one is this")
    assert result.intent is Intent.general


def test_urgent_electrician():
    result = IntentExtractor().extract("need an electrician urgently")

    assert result.intent is Intent.service_request
    assert result.service == "electrical"
    assert result.urgent is True


def test_keywords_match_as_substrings():
    result = IntentExtractor().extract("the kitchen outdrain is blocked")
    assert result.intent is Intent.service_request
    assert result.service == "plumbing"


def test_urgency_keywords_match_as_substrings():
    assert is_urgent("i need it now") is True
    assert IntentExtractor().extract("do you know a plumber").urgent is True


def test_word_start_matching_is_opt_in():
    """With word_start, "know" is not "now" and "outdrain" is not "drain"."""
    extractor = IntentExtractor(word_start=True)

    assert extractor.extract("do you know a plumber").urgent is False
    assert extractor.extract("the kitchen outdrain is blocked").service is None
    assert extractor.extract("my pipes burst").service == "plumbing"
    assert is_urgent("i know a good place", word_start=True) is False


def test_best_match_prefers_highest_keyword_ratio():
    text = "water for my salon hair and makeup session"

    best = IntentExtractor(policy=CategoryPolicy.best_match).extract(text)
    first = IntentExtractor(policy=CategoryPolicy.first_match).extract(text)

    assert best.service == "beauty"
    assert first.service == "plumbing"


def test_policy_accepts_string_value():
    assert IntentExtractor(policy="first_match").policy is CategoryPolicy.first_match


def test_intent_priority_order():
    extractor = IntentExtractor()
    assert extractor.extract("how much does it cost?").intent is Intent.pricing_inquiry
    assert extractor.extract("I need help").intent is Intent.help
    assert extractor.extract("I want to book an appointment").intent is Intent.booking
    assert extractor.extract("good evening friend").intent is Intent.general
    # A service keyword outranks everything else.
    assert extractor.extract("hello, what does a plumber cost?").intent is Intent.service_request


def test_digits_only_is_selection_when_session_aware():
    assert IntentExtractor().extract(" 42 ").intent is Intent.selection


def test_digits_only_is_general_without_sessions():
    assert IntentExtractor(session_aware=False).extract("42").intent is Intent.general


def test_empty_message_is_general():
    result = IntentExtractor().extract("")
    assert result.intent is Intent.general
    assert result.service is None


def test_location_patterns():
    assert extract_location("cleaner near Ruaka please") == "Ruaka"
    assert extract_location("plumber in Mombasa") == "Mombasa"
    assert extract_location("tutor at Kitengela") == "Kitengela"
    assert extract_location("mason for the Syokimau area") == "Syokimau"
    assert extract_location("spring valley house cleaning") == "spring valley"


def test_location_skips_filler_words():
    assert extract_location("cleaning in the morning") is None
    assert extract_location("tutor at home in Karen") == "Karen"


def test_budget_extraction():
    assert extract_budget("my budget is 2,500") == 2500
    assert extract_budget("I can pay KSh 1500 max") == 1500
    assert extract_budget("cheap plumber") is None


class _FakeLLM(LLMPort):
    def __init__(self, result: IntentClassification | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[str] = []

    def classify_intent(self, text: str) -> IntentClassification:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.result


def test_llm_result_used_when_available():
    llm = _FakeLLM(
        result=IntentClassification(intent=Intent.service_request, service="masonry", confidence=0.9, source="llm")
    )
    use_case = ExtractIntentUseCase(extractor=IntentExtractor(), llm=llm)

    result = use_case.execute("nataka fundi wa mawe")

    assert result.service == "masonry"
    assert result.source == "llm"
    assert llm.calls == ["nataka fundi wa mawe"]


def test_llm_failures_fall_back_to_rules():
    for error in (LLMUpstreamError("timeout"), LLMContractError("bad json")):
        use_case = ExtractIntentUseCase(extractor=IntentExtractor(), llm=_FakeLLM(error=error))
        result = use_case.execute("I need a plumber")
        assert result.service == "plumbing"
        assert result.source == "rules"


def test_selection_never_reaches_llm():
    llm = _FakeLLM(error=AssertionError("should not be called"))
    use_case = ExtractIntentUseCase(extractor=IntentExtractor(), llm=llm)

    assert use_case.execute("2").intent is Intent.selection
    assert llm.calls == []


def test_llm_selection_for_words_uses_rules():
    llm = _FakeLLM(result=IntentClassification(intent=Intent.selection, confidence=0.8, source="llm"))
    use_case = ExtractIntentUseCase(extractor=IntentExtractor(), llm=llm)

    result = use_case.execute("the second one please")

    assert result.intent is Intent.general
    assert result.source == "rules"
    assert llm.calls == ["the second one please"]
