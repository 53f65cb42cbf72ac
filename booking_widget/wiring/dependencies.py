from functools import lru_cache
import logging

from booking_widget.application.exceptions import StorageError
from booking_widget.application.ports.business_store import BusinessStorePort
from booking_widget.application.ports.llm import LLMPort
from booking_widget.application.ports.notifier import NotifierPort
from booking_widget.application.ports.session_store import SessionStorePort
from booking_widget.application.use_cases.booking import BookingUseCase
from booking_widget.application.use_cases.classify_intent import ClassifyIntentUseCase
from booking_widget.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from booking_widget.application.use_cases.magic_link import MagicLinkUseCase
from booking_widget.application.use_cases.manage_business import ManageBusinessUseCase
from booking_widget.application.use_cases.resolve_knowledge_base import ResolveKnowledgeBaseUseCase
from booking_widget.core.config import settings
from booking_widget.infrastructure.db.business_store import SqlBusinessStore
from booking_widget.infrastructure.knowledge.fallback_businesses import FALLBACK_BUSINESSES
from booking_widget.infrastructure.llm.mock_llm import MockLLM
from booking_widget.infrastructure.llm.openai_llm import OpenAILLM
from booking_widget.infrastructure.notifications.mock_notifier import MockNotifier
from booking_widget.infrastructure.notifications.resend_client import ResendNotifier
from booking_widget.infrastructure.store.memory_store import MemorySessionStore


logger = logging.getLogger(__name__)


@lru_cache
def get_llm() -> LLMPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM()
    logger.info("Using MockLLM (OPENAI_API_KEY missing)")
    return MockLLM()


@lru_cache
def get_session_store() -> SessionStorePort:
    return MemorySessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)


@lru_cache
def get_business_store() -> BusinessStorePort:
    store = SqlBusinessStore(settings.DATABASE_URL)
    try:
        store.init_schema()
    except StorageError as e:
        logger.error("Business schema not created", extra={"reason": str(e)})
    return store


@lru_cache
def get_notifier() -> NotifierPort:
    if not settings.RESEND_API_KEY and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockNotifier (RESEND_API_KEY missing, ENV=dev/local)")
        return MockNotifier()
    return ResendNotifier(
        api_key=settings.RESEND_API_KEY,
        from_address=settings.EMAIL_FROM_ADDRESS,
        endpoint=settings.RESEND_ENDPOINT,
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
    )


def get_fallback_businesses():
    return FALLBACK_BUSINESSES


def get_handle_chat_message_use_case() -> HandleChatMessageUseCase:
    return HandleChatMessageUseCase(
        store=get_session_store(),
        resolve_kb=ResolveKnowledgeBaseUseCase(
            store=get_business_store(),
            fallbacks=get_fallback_businesses(),
        ),
        booking_use_case=BookingUseCase(
            classify_intent=ClassifyIntentUseCase(llm=get_llm()),
            notifier=get_notifier(),
            default_timezone=settings.DEFAULT_TIMEZONE,
        ),
    )


def get_manage_business_use_case() -> ManageBusinessUseCase:
    return ManageBusinessUseCase(
        store=get_business_store(),
        admin_token=settings.ADMIN_TOKEN,
        fallbacks=get_fallback_businesses(),
    )


def get_magic_link_use_case() -> MagicLinkUseCase:
    return MagicLinkUseCase(
        notifier=get_notifier(),
        public_base_url=settings.PUBLIC_BASE_URL,
        dashboard_url=settings.DASHBOARD_URL,
        ttl_minutes=settings.MAGIC_LINK_TTL_MINUTES,
    )
