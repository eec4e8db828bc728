from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable

from fundiconnect.application.ports.provider_roster import ProviderRosterPort
from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.application.use_cases.extract_intent import ExtractIntentUseCase
from fundiconnect.application.use_cases.generate_quotation import QuotationGenerator
from fundiconnect.application.use_cases.match_providers import ProviderMatcher
from fundiconnect.application.use_cases.reply_composer import ReplyComposer
from fundiconnect.application.utils.message_rules import extract_booking_number, is_selection
from fundiconnect.domain.entities.intent import Intent, IntentClassification
from fundiconnect.domain.entities.provider import SERVICE_CATEGORIES
from fundiconnect.domain.entities.reply import BotReply
from fundiconnect.domain.entities.session import ConversationSession


class ConversationPipeline:
    """
    Message -> intent -> providers -> quotations -> replies.

    Shared by every channel. Each call reads and writes the sender's session
    while holding that sender's lock, so a "2" typed right after a search
    always sees the quotation list it refers to.
    """

    def __init__(
        self,
        extract_intent: ExtractIntentUseCase,
        matcher: ProviderMatcher,
        quotations: QuotationGenerator,
        composer: ReplyComposer,
        sessions: SessionStorePort,
        roster: ProviderRosterPort,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._extract_intent = extract_intent
        self._matcher = matcher
        self._quotations = quotations
        self._composer = composer
        self._sessions = sessions
        self._roster = roster
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def process(self, text: str, user_id: str, user_name: str | None = None) -> list[BotReply]:
        try:
            with self._sessions.lock(user_id):
                session = self._sessions.get(user_id) or ConversationSession()
                classification = self._extract_intent.execute(text)
                self._logger.info(
                    "Message classified",
                    extra={
                        "user_id": user_id,
                        "intent": classification.intent.value,
                        "service": classification.service,
                        "location": classification.location,
                    },
                )
                replies, session = self._dispatch(text, classification, session, user_name)
                self._sessions.put(user_id, replace(session, updated_at=self._clock()))
                return replies
        except Exception:
            self._logger.exception("Message processing failed", extra={"user_id": user_id})
            return [self._composer.apology()]

    def handle_action(self, action: str, user_id: str, user_name: str | None = None) -> list[BotReply]:
        """Handle a button press such as "service_plumbing", "call_3" or "search_again"."""
        try:
            with self._sessions.lock(user_id):
                session = self._sessions.get(user_id) or ConversationSession()
                self._logger.info("Action received", extra={"user_id": user_id, "reason": action})
                replies, session = self._dispatch_action(action, session, user_name)
                self._sessions.put(user_id, replace(session, updated_at=self._clock()))
                return replies
        except Exception:
            self._logger.exception("Action processing failed", extra={"user_id": user_id, "reason": action})
            return [self._composer.apology()]

    def follow_up(self, user_id: str) -> BotReply | None:
        session = self._sessions.get(user_id)
        if session is None or not session.last_service:
            return None
        return self._composer.follow_up(session.last_service)

    def _dispatch(
        self,
        text: str,
        classification: IntentClassification,
        session: ConversationSession,
        user_name: str | None,
    ) -> tuple[list[BotReply], ConversationSession]:
        intent = classification.intent

        if intent is Intent.service_request and classification.service:
            return self._search(
                service=classification.service,
                location=classification.location,
                budget=classification.budget,
                urgent=classification.urgent,
                session=session,
            )

        if intent is Intent.greeting:
            return [self._composer.greeting(user_name)], replace(session, conversation_step="service_selection")

        if intent is Intent.selection:
            return [self._select(text, session)], session

        if intent is Intent.booking:
            return [self._book(text, session)], replace(session, conversation_step="booking_details")

        if intent is Intent.pricing_inquiry:
            return [self._composer.pricing_guide()], session

        if intent is Intent.help:
            return [self._composer.help()], session

        return [self._composer.general()], session

    def _dispatch_action(
        self,
        action: str,
        session: ConversationSession,
        user_name: str | None,
    ) -> tuple[list[BotReply], ConversationSession]:
        if action.startswith("service_"):
            category = action.removeprefix("service_")
            if category in SERVICE_CATEGORIES:
                return self._search(service=category, location=None, budget=None, urgent=False, session=session)
            return [self._composer.general()], session

        if action.startswith("call_"):
            provider_id = action.removeprefix("call_")
            provider = self._roster.get_provider(provider_id)
            if provider is not None:
                return [self._composer.contact_for_provider(provider)], session
            for position, quotation in enumerate(session.last_providers, start=1):
                if quotation.provider_id == provider_id:
                    return [self._composer.contact_for_quotation(quotation, position)], session
            return [self._composer.service_menu()], session

        if action.startswith("book_"):
            provider_id = action.removeprefix("book_")
            provider = self._roster.get_provider(provider_id)
            if provider is None:
                return [self._composer.booking_assistant()], replace(session, conversation_step="booking_details")
            return (
                [self._composer.booking_for_provider(provider.id, provider.name)],
                replace(session, conversation_step="booking_details"),
            )

        if action == "expand_search" and session.last_service:
            return self._search(service=session.last_service, location=None, budget=None, urgent=False, session=session)

        if action in ("search_again", "show_services", "expand_search"):
            return [self._composer.service_menu()], replace(session, conversation_step="service_selection")

        if action == "get_quote":
            return [self._composer.get_quote()], session

        if action == "pricing":
            return [self._composer.pricing_guide()], session

        if action == "help":
            return [self._composer.help()], session

        return [self._composer.general()], session

    def _search(
        self,
        service: str,
        location: str | None,
        budget: int | None,
        urgent: bool,
        session: ConversationSession,
    ) -> tuple[list[BotReply], ConversationSession]:
        session = replace(
            session,
            last_service=service,
            last_location=location,
            conversation_step="showing_providers",
        )

        if not self._roster.list_providers():
            return [self._composer.empty_marketplace(service)], session

        replies = [self._composer.searching(service, location, urgent)]
        matches = self._matcher.match(service, location=location, budget=budget, urgent=urgent)
        quotations = self._quotations.generate_all(matches, service, urgent)

        if not quotations:
            replies.append(self._composer.no_matches(service, location))
            return replies, replace(session, last_providers=())

        replies.append(self._composer.quotations(service, location, quotations))
        return replies, replace(session, last_providers=tuple(quotations))

    def _select(self, text: str, session: ConversationSession) -> BotReply:
        available = len(session.last_providers)
        if not is_selection(text):
            return self._composer.invalid_selection(available)
        choice = int(text.strip())
        if 1 <= choice <= available:
            return self._composer.contact_for_quotation(session.last_providers[choice - 1], choice)
        return self._composer.invalid_selection(available)

    def _book(self, text: str, session: ConversationSession) -> BotReply:
        choice = extract_booking_number(text)
        if choice is not None and 1 <= choice <= len(session.last_providers):
            quotation = session.last_providers[choice - 1]
            return self._composer.booking_for_provider(quotation.provider_id, quotation.provider_name)
        return self._composer.booking_assistant()
