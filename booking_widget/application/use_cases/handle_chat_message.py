from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from booking_widget.application.exceptions import DispatchError, ValidationError
from booking_widget.application.ports.session_store import SessionStorePort
from booking_widget.application.use_cases.booking import BookingUseCase
from booking_widget.application.use_cases.resolve_knowledge_base import ResolveKnowledgeBaseUseCase
from booking_widget.domain.entities.message import ChatMessage
from booking_widget.domain.entities.reply import Reply


@dataclass(frozen=True)
class ChatResponse:
    session_id: str
    reply: Reply


class HandleChatMessageUseCase:
    def __init__(
        self,
        store: SessionStorePort,
        resolve_kb: ResolveKnowledgeBaseUseCase,
        booking_use_case: BookingUseCase,
    ) -> None:
        self._store = store
        self._resolve_kb = resolve_kb
        self._booking_use_case = booking_use_case
        self._logger = logging.getLogger(__name__)

    def handle(self, message: ChatMessage) -> ChatResponse:
        slug = (message.business_slug or "").strip()
        text = (message.text or "").strip()
        if not slug or not text:
            raise ValidationError("business_slug et message requis.")

        session_id = (message.session_id or "").strip() or new_session_id()
        kb = self._resolve_kb.execute(slug, message.kb_payload)
        if kb is None:
            self._logger.info("No knowledge base for business", extra={"business_slug": slug})

        with self._store.lock(session_id):
            state = self._store.get_or_create(session_id)
            try:
                result = self._booking_use_case.process(text, state, kb)
            except DispatchError:
                self._logger.error(
                    "Booking notification failed, session kept for retry",
                    extra={"session_id": session_id, "business_slug": slug},
                )
                raise

            if result.updated_state is None:
                self._store.delete(session_id)
            else:
                self._store.set(result.updated_state)

        self._logger.info(
            "Chat message handled",
            extra={
                "session_id": session_id,
                "business_slug": slug,
                "intent": result.intent,
                "action": result.action,
                "status": result.updated_state.status if result.updated_state else "completed",
            },
        )
        return ChatResponse(
            session_id=session_id,
            reply=Reply(text=result.message, meta={"action": result.action}),
        )


def new_session_id() -> str:
    return f"s_{uuid.uuid4().hex}"
