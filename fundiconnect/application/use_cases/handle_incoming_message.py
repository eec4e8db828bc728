from __future__ import annotations

import logging

from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.application.use_cases.process_message import ConversationPipeline
from fundiconnect.application.use_cases.send_reply import SendReplyUseCase
from fundiconnect.domain.entities.message import Message


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        pipeline: ConversationPipeline,
        sessions: SessionStorePort,
        send_reply: SendReplyUseCase,
    ) -> None:
        self._pipeline = pipeline
        self._sessions = sessions
        self._send_reply = send_reply
        self._logger = logging.getLogger(__name__)

    def handle(self, message: Message) -> int:
        """Process one inbound message and deliver the replies. Returns the number sent."""
        if not self._sessions.mark_processed(message.id):
            self._logger.info("Duplicate message ignored", extra={"message_id": message.id})
            return 0

        if message.callback_id:
            try:
                self._send_reply.acknowledge(message.callback_id, "✅ Processing your request...")
            except Exception as e:
                self._logger.warning(
                    "Callback acknowledgement failed",
                    extra={"message_id": message.id, "reason": str(e)},
                )

        if message.action:
            replies = self._pipeline.handle_action(message.action, message.thread_id, message.sender_name)
        else:
            replies = self._pipeline.process(message.text, message.thread_id, message.sender_name)

        sent = 0
        for position, reply in enumerate(replies, start=1):
            try:
                if self._send_reply.execute(recipient_id=message.thread_id, reply=reply):
                    sent += 1
            except Exception as e:
                self._logger.exception(
                    "Reply delivery failed",
                    extra={
                        "message_id": message.id,
                        "channel": message.platform,
                        "reason": f"reply {position}/{len(replies)}: {e}",
                    },
                )
        self._logger.info(
            "Message handled",
            extra={"message_id": message.id, "user_id": message.thread_id, "channel": message.platform},
        )
        return sent
