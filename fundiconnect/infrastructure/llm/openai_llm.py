from __future__ import annotations

import json
import logging
from typing import Any

from openai import OpenAI

from fundiconnect.application.exceptions import LLMContractError, LLMUpstreamError
from fundiconnect.application.ports.llm import LLMPort
from fundiconnect.core.config import settings
from fundiconnect.domain.entities.intent import Intent, IntentClassification
from fundiconnect.domain.entities.provider import SERVICE_CATEGORIES
from fundiconnect.infrastructure.llm.prompts import build_classify_prompt


class OpenAILLM(LLMPort):
    """
    OpenAI-compatible adapter implementing LLMPort.

    Works against OpenAI itself or any compatible endpoint (Groq, local
    servers) through OPENAI_BASE_URL.

    Contract guarantees:
    - classify_intent returns IntentClassification with source="llm"
    - Raises:
        LLMUpstreamError: networking/provider failures
        LLMContractError: invalid JSON or wrong schema/shape
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL or None,
        )
        self._logger = logging.getLogger(__name__)

    def classify_intent(self, text: str) -> IntentClassification:
        prompt = build_classify_prompt(text)

        raw = self._call_text(
            model=settings.OPENAI_MODEL_CLASSIFY,
            prompt=prompt,
            temperature=settings.OPENAI_TEMPERATURE_CLASSIFY,
            use_json_mode=True,
        )

        data = _parse_json(raw, what="classify")
        if not isinstance(data, dict):
            raise LLMContractError("Classify: expected a JSON object.")

        try:
            intent = Intent(str(data.get("intent", "")).strip().lower())
        except ValueError:
            raise LLMContractError(f"Classify: unknown intent {data.get('intent')!r}.")

        service = data.get("service")
        if service is not None:
            service = str(service).strip().lower() or None
        if service is not None and service not in SERVICE_CATEGORIES:
            raise LLMContractError(f"Classify: unknown service {service!r}.")
        if intent is Intent.service_request and service is None:
            raise LLMContractError("Classify: service_request without a service.")

        location = data.get("location")
        if location is not None:
            location = str(location).strip() or None

        budget = data.get("budget")
        if budget is not None:
            try:
                budget = int(budget)
            except (TypeError, ValueError):
                raise LLMContractError(f"Classify: budget must be an integer, got {budget!r}.")
            if budget <= 0:
                budget = None

        try:
            confidence = float(data.get("confidence", 0.0) or 0.0)
        except (TypeError, ValueError):
            raise LLMContractError("Classify: confidence must be a number.")

        return IntentClassification(
            intent=intent,
            service=service,
            location=location,
            urgent=bool(data.get("urgent", False)),
            budget=budget,
            confidence=min(max(confidence, 0.0), 1.0),
            source="llm",
        )

    def _call_text(self, model: str, prompt: str, temperature: float, use_json_mode: bool = False) -> str:
        try:
            kwargs: dict[str, Any] = {
                "model": model,
                "messages": [
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": prompt},
                ],
                "temperature": temperature,
                "max_tokens": 300,
            }
            if use_json_mode:
                kwargs["response_format"] = {"type": "json_object"}

            resp = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")
