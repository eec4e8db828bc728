from abc import ABC, abstractmethod

from fundiconnect.domain.entities.reply import BotReply


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_reply(self, recipient_id: str, reply: BotReply) -> None:
        raise NotImplementedError

    def acknowledge(self, callback_id: str, text: str | None = None) -> None:
        """Confirm a button press. Channels without callbacks ignore it."""
        return None
