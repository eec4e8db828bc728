"""
Tests for the OpenAI-compatible intent classifier adapter.
"""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from fundiconnect.application.exceptions import LLMContractError, LLMUpstreamError
from fundiconnect.domain.entities.intent import Intent
from fundiconnect.infrastructure.llm.openai_llm import OpenAILLM
from fundiconnect.infrastructure.llm.prompts import build_classify_prompt


class _FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _llm(content: str | None = None, error: Exception | None = None) -> tuple[OpenAILLM, _FakeCompletions]:
    completions = _FakeCompletions(content=content, error=error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAILLM(client=client), completions


def test_classify_parses_json_object():
    llm, completions = _llm(
        json.dumps(
            {
                "intent": "service_request",
                "service": "Plumbing",
                "location": "Kileleshwa",
                "urgent": True,
                "budget": "2000",
                "confidence": 0.92,
            }
        )
    )

    result = llm.classify_intent("bomba imepasuka Kileleshwa, haraka!")

    assert result.intent is Intent.service_request
    assert result.service == "plumbing"
    assert result.location == "Kileleshwa"
    assert result.urgent is True
    assert result.budget == 2000
    assert result.confidence == 0.92
    assert result.source == "llm"
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_classify_greeting_without_entities():
    llm, _ = _llm('{"intent": "greeting", "service": null, "location": null, "urgent": false, "budget": null}')

    result = llm.classify_intent("mambo")

    assert result.intent is Intent.greeting
    assert result.service is None
    assert result.budget is None


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        "[]",
        '{"intent": "chit_chat"}',
        '{"intent": "service_request", "service": "welding"}',
        '{"intent": "service_request", "service": null}',
        '{"intent": "general", "budget": "lots"}',
        "",
    ],
)
def test_contract_violations(content):
    llm, _ = _llm(content)
    with pytest.raises(LLMContractError):
        llm.classify_intent("hello")


def test_upstream_failure():
    llm, _ = _llm(error=TimeoutError("read timeout"))
    with pytest.raises(LLMUpstreamError):
        llm.classify_intent("hello")


def test_prompt_lists_categories_and_message():
    prompt = build_classify_prompt("Need a tutor in Karen")
    assert "plumbing, cleaning, electrical, beauty, carpentry, tutoring, masonry" in prompt
    assert prompt.rstrip().endswith("Need a tutor in Karen")
