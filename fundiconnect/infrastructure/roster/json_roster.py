from __future__ import annotations

import json
import logging
from pathlib import Path

from fundiconnect.application.exceptions import ProviderRosterError
from fundiconnect.application.ports.provider_roster import ProviderRosterPort
from fundiconnect.domain.entities.provider import Provider


class JsonProviderRoster(ProviderRosterPort):
    """
    Roster loaded once from a JSON file.

    The file holds either a list of provider rows or {"providers": [...]}.
    Rows use the storefront's column names; invalid rows are skipped with a
    warning so one bad record never empties the marketplace.
    """

    def __init__(self, path: str) -> None:
        self._path = Path(path)
        self._logger = logging.getLogger(__name__)
        self._providers = self._load()
        self._by_id = {p.id: p for p in self._providers}

    def list_providers(self) -> list[Provider]:
        return list(self._providers)

    def get_provider(self, provider_id: str) -> Provider | None:
        return self._by_id.get(str(provider_id).strip())

    def _load(self) -> tuple[Provider, ...]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise ProviderRosterError(f"Cannot read provider roster {self._path}: {e}") from e

        rows = data.get("providers") if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise ProviderRosterError(f"Provider roster {self._path} must contain a list of providers.")

        providers: list[Provider] = []
        seen: set[str] = set()
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                self._logger.warning("Skipping provider row", extra={"reason": f"row {index} is not an object"})
                continue
            try:
                provider = Provider.from_row(row)
            except (TypeError, ValueError) as e:
                self._logger.warning("Skipping provider row", extra={"reason": f"row {index}: {e}"})
                continue
            if provider.id in seen:
                self._logger.warning("Skipping provider row", extra={"reason": f"duplicate id {provider.id}"})
                continue
            seen.add(provider.id)
            providers.append(provider)

        self._logger.info("Provider roster loaded", extra={"reason": f"{len(providers)} providers from {self._path}"})
        return tuple(providers)
