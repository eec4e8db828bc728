from abc import ABC, abstractmethod
from typing import ContextManager

from fundiconnect.domain.entities.session import ConversationSession


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, user_id: str) -> ConversationSession | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, user_id: str, session: ConversationSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def lock(self, user_id: str) -> ContextManager:
        """
        Per-user lock. A read-modify-write of one user's session must happen
        while holding it so updates for that user apply in arrival order.
        """
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, message_id: str) -> bool:
        """Record a message id. Returns False if it was already recorded."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        """Number of stored sessions."""
        raise NotImplementedError
