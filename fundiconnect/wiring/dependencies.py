from functools import lru_cache
import logging
import random

from fundiconnect.core.config import settings
from fundiconnect.application.ports.llm import LLMPort
from fundiconnect.application.ports.message_platform import MessagePlatformPort
from fundiconnect.application.ports.provider_roster import ProviderRosterPort
from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.application.use_cases.extract_intent import CategoryPolicy, ExtractIntentUseCase, IntentExtractor
from fundiconnect.application.use_cases.generate_quotation import QuotationGenerator
from fundiconnect.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from fundiconnect.application.use_cases.match_providers import ProviderMatcher
from fundiconnect.application.use_cases.process_message import ConversationPipeline
from fundiconnect.application.use_cases.reply_composer import ReplyComposer
from fundiconnect.application.use_cases.send_reply import SendReplyUseCase
from fundiconnect.infrastructure.llm.openai_llm import OpenAILLM
from fundiconnect.infrastructure.mock_platform import MockMessagePlatform
from fundiconnect.infrastructure.roster.json_roster import JsonProviderRoster
from fundiconnect.infrastructure.roster.static_roster import StaticProviderRoster
from fundiconnect.infrastructure.store.json_store import JsonSessionStore
from fundiconnect.infrastructure.store.memory_store import MemorySessionStore
from fundiconnect.infrastructure.telegram.formatter import TelegramFormatter
from fundiconnect.infrastructure.telegram.telegram_client import TelegramClient
from fundiconnect.infrastructure.telegram.telegram_platform import TelegramPlatform
from fundiconnect.infrastructure.web.formatter import WebChatFormatter
from fundiconnect.infrastructure.whatsapp.formatter import WhatsAppFormatter
from fundiconnect.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from fundiconnect.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform


logger = logging.getLogger(__name__)

_session_store: SessionStorePort | None = None


@lru_cache
def get_llm() -> LLMPort | None:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM()
    return None


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        if settings.SESSION_STORE.lower() == "json":
            _session_store = JsonSessionStore(data_dir=settings.SESSION_DATA_DIR)
        else:
            _session_store = MemorySessionStore()
    return _session_store


@lru_cache
def get_provider_roster() -> ProviderRosterPort:
    if settings.PROVIDERS_FILE:
        return JsonProviderRoster(settings.PROVIDERS_FILE)
    return StaticProviderRoster()


def get_reply_composer() -> ReplyComposer:
    return ReplyComposer(
        business_name=settings.BUSINESS_NAME,
        website_url=settings.WEBSITE_URL,
        support_url=settings.SUPPORT_URL,
        currency=settings.CURRENCY,
    )


@lru_cache
def get_pipeline() -> ConversationPipeline:
    roster = get_provider_roster()
    rng = random.Random(settings.QUOTE_RANDOM_SEED) if settings.QUOTE_RANDOM_SEED is not None else None
    return ConversationPipeline(
        extract_intent=ExtractIntentUseCase(
            extractor=IntentExtractor(
                policy=CategoryPolicy(settings.CATEGORY_POLICY),
                word_start=settings.KEYWORD_WORD_START,
            ),
            llm=get_llm(),
        ),
        matcher=ProviderMatcher(roster=roster, ranked=settings.RANKED_MATCHING, limit=settings.MAX_MATCHES),
        quotations=QuotationGenerator(rng=rng),
        composer=get_reply_composer(),
        sessions=get_session_store(),
        roster=roster,
    )


@lru_cache
def get_telegram_platform() -> MessagePlatformPort:
    if not settings.TELEGRAM_BOT_TOKEN:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockMessagePlatform for Telegram (token missing, ENV=dev/local)")
            return MockMessagePlatform(channel="telegram")
        raise ValueError("TELEGRAM_BOT_TOKEN is required to send Telegram replies.")

    client = TelegramClient(bot_token=settings.TELEGRAM_BOT_TOKEN, api_base=settings.TELEGRAM_API_BASE)
    return TelegramPlatform(client=client, formatter=TelegramFormatter(currency=settings.CURRENCY))


@lru_cache
def get_whatsapp_platform() -> MessagePlatformPort:
    if not (settings.WHATSAPP_ACCESS_TOKEN and settings.WHATSAPP_PHONE_NUMBER_ID):
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockMessagePlatform for WhatsApp (credentials missing, ENV=dev/local)")
            return MockMessagePlatform(channel="whatsapp")
        raise ValueError("WHATSAPP_ACCESS_TOKEN and WHATSAPP_PHONE_NUMBER_ID are required to send WhatsApp replies.")

    client = WhatsAppClient(
        access_token=settings.WHATSAPP_ACCESS_TOKEN,
        phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
        graph_api_version=settings.WHATSAPP_GRAPH_API_VERSION,
    )
    return WhatsAppPlatform(client=client, formatter=WhatsAppFormatter(currency=settings.CURRENCY))


def get_telegram_handler() -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        pipeline=get_pipeline(),
        sessions=get_session_store(),
        send_reply=SendReplyUseCase(platform=get_telegram_platform(), auto_reply_enabled=settings.AUTO_REPLY_ENABLED),
    )


def get_whatsapp_handler() -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        pipeline=get_pipeline(),
        sessions=get_session_store(),
        send_reply=SendReplyUseCase(platform=get_whatsapp_platform(), auto_reply_enabled=settings.AUTO_REPLY_ENABLED),
    )


def get_web_formatter() -> WebChatFormatter:
    return WebChatFormatter()
