from __future__ import annotations

from abc import ABC, abstractmethod

from fundiconnect.domain.entities.provider import Provider


class ProviderRosterPort(ABC):
    @abstractmethod
    def list_providers(self) -> list[Provider]:
        """All providers in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def get_provider(self, provider_id: str) -> Provider | None:
        raise NotImplementedError
