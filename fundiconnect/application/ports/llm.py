from abc import ABC, abstractmethod

from fundiconnect.domain.entities.intent import IntentClassification


class LLMPort(ABC):
    @abstractmethod
    def classify_intent(self, text: str) -> IntentClassification:
        """
        Classify a customer message and extract its entities.

        Requirements:
        - `intent` must be one of the Intent values
        - `service` must be a known category key (lower-case) or None
        - `budget` must be a positive integer or None
        - `source` should be "llm"

        Raises:
            LLMUpstreamError: provider/network failures
            LLMContractError: the provider answered with an unusable payload
        """
        raise NotImplementedError
