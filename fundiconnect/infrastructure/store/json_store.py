from __future__ import annotations

import json
import logging
import re
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Any

from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.domain.entities.quotation import Quotation
from fundiconnect.domain.entities.session import ConversationSession

PROCESSED_FILE = "_processed.json"


class JsonSessionStore(SessionStorePort):
    """One JSON file per user id. Survives restarts of a single-process deployment."""

    def __init__(self, data_dir: str = "./data/sessions", processed_limit: int = 5000) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._processed_limit = processed_limit
        self._locks: dict[str, threading.RLock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._processed_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def lock(self, user_id: str) -> threading.RLock:
        """Get or create the lock for a user id."""
        with self._lock_lock:
            if user_id not in self._locks:
                self._locks[user_id] = threading.RLock()
            return self._locks[user_id]

    def get(self, user_id: str) -> ConversationSession | None:
        with self.lock(user_id):
            file_path = self._get_file_path(user_id)
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return self._deserialize_session(data.get("session", {}))
            except (json.JSONDecodeError, IOError, KeyError, TypeError, ValueError) as e:
                # A corrupted file reads as a fresh conversation.
                self._logger.warning("Unreadable session file", extra={"user_id": user_id, "reason": str(e)})
                return None

    def put(self, user_id: str, session: ConversationSession) -> None:
        with self.lock(user_id):
            data = {
                "user_id": user_id,
                "session": self._serialize_session(session),
                "version": 1,
            }
            self._write_json(self._get_file_path(user_id), data)

    def delete(self, user_id: str) -> None:
        with self.lock(user_id):
            self._get_file_path(user_id).unlink(missing_ok=True)

    def has_processed(self, message_id: str) -> bool:
        with self._processed_lock:
            return message_id in self._load_processed()

    def mark_processed(self, message_id: str) -> bool:
        with self._processed_lock:
            processed = self._load_processed()
            if message_id in processed:
                return False
            processed.append(message_id)
            self._write_json(self._data_dir / PROCESSED_FILE, processed[-self._processed_limit :])
            return True

    def count(self) -> int:
        return sum(1 for path in self._data_dir.glob("*.json") if path.name != PROCESSED_FILE)

    def _get_file_path(self, user_id: str) -> Path:
        """Get the file path for a user id (phone numbers, chat ids and uuids are all file-safe after this)."""
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", user_id)
        return self._data_dir / f"session_{safe}.json"

    def _load_processed(self) -> list[str]:
        path = self._data_dir / PROCESSED_FILE
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [str(mid) for mid in data] if isinstance(data, list) else []
        except (json.JSONDecodeError, IOError):
            return []

    def _write_json(self, file_path: Path, data: Any) -> None:
        """Write JSON atomically via a temp file and rename."""
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def _serialize_session(self, session: ConversationSession) -> dict[str, Any]:
        return {
            "last_service": session.last_service,
            "last_location": session.last_location,
            "last_providers": [_serialize_quotation(q) for q in session.last_providers],
            "conversation_step": session.conversation_step,
            "updated_at": session.updated_at,
        }

    def _deserialize_session(self, data: dict[str, Any]) -> ConversationSession:
        return ConversationSession(
            last_service=data.get("last_service"),
            last_location=data.get("last_location"),
            last_providers=tuple(_deserialize_quotation(q) for q in data.get("last_providers") or []),
            conversation_step=data.get("conversation_step", "initial"),
            updated_at=data.get("updated_at"),
        )


def _serialize_quotation(quotation: Quotation) -> dict[str, Any]:
    data = asdict(quotation)
    data["services"] = list(quotation.services)
    return data


def _deserialize_quotation(data: dict[str, Any]) -> Quotation:
    return Quotation(
        id=str(data["id"]),
        provider_id=str(data["provider_id"]),
        provider_name=data.get("provider_name", ""),
        service=data.get("service", ""),
        estimated_cost=int(data["estimated_cost"]),
        hours=int(data["hours"]),
        base_rate=int(data.get("base_rate", 0)),
        urgency_fee=int(data.get("urgency_fee", 0)),
        response_time=data.get("response_time", ""),
        rating=float(data.get("rating", 0.0)),
        location=data.get("location", ""),
        phone=data.get("phone"),
        services=tuple(data.get("services") or ()),
    )
