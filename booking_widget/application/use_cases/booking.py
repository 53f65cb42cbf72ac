from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Sequence

from booking_widget.application.ports.notifier import NotifierPort
from booking_widget.application.use_cases.classify_intent import ClassifyIntentUseCase
from booking_widget.application.use_cases.reply_composer import ReplyComposer
from booking_widget.application.utils.date_parser import extract_date, extract_time, today_in
from booking_widget.application.utils.message_rules import is_confirmation, match_service
from booking_widget.domain.entities.booking_state import BookingSlotState
from booking_widget.domain.entities.intent import BOOKING, FAQ
from booking_widget.domain.entities.knowledge_base import KnowledgeBase


@dataclass(frozen=True)
class BookingResult:
    action: str
    message: str
    updated_state: BookingSlotState | None  # None: session completed, delete it
    intent: str | None = None


@dataclass(frozen=True)
class SlotRule:
    name: str
    action: str
    is_missing: Callable[[BookingSlotState], bool]
    prompt: Callable[[ReplyComposer, KnowledgeBase | None], str]


DEFAULT_SLOT_RULES: tuple[SlotRule, ...] = (
    SlotRule("service", "ask_service", lambda s: not s.service, ReplyComposer.ask_service),
    SlotRule("date", "ask_date", lambda s: not s.date, ReplyComposer.ask_date),
    SlotRule("time", "ask_time", lambda s: not s.time, ReplyComposer.ask_time),
)


class BookingUseCase:
    """
    Per-session slot-filling dialogue.

    Extraction runs in code (service matcher, date and time parsers); the intent
    classifier only decides whether an idle session enters booking mode.
    Slots are filled, never cleared. A confirmation only completes the booking when
    the same message left every slot unchanged; a message that says "oui" and also
    changes the date or time gets a fresh recap instead. Dispatch failures propagate
    so the caller keeps the session and the customer can confirm again.

    The reference date for relative dates is today in the business timezone, or in
    `default_timezone` when the knowledge base has none.
    """

    def __init__(
        self,
        classify_intent: ClassifyIntentUseCase,
        notifier: NotifierPort,
        composer: ReplyComposer | None = None,
        today: Callable[[str | None], date] = today_in,
        slot_rules: Sequence[SlotRule] = DEFAULT_SLOT_RULES,
        default_timezone: str | None = None,
    ) -> None:
        self._classify_intent = classify_intent
        self._notifier = notifier
        self._composer = composer or ReplyComposer()
        self._today = today
        self._slot_rules = tuple(slot_rules)
        self._default_timezone = default_timezone
        self._logger = logging.getLogger(__name__)

    def process(self, text: str, state: BookingSlotState, kb: KnowledgeBase | None) -> BookingResult:
        intent: str | None = None
        if not state.in_booking:
            classification = self._classify_intent.execute(text, kb)
            intent = classification.intent
            self._logger.info(
                "Intent classified",
                extra={"session_id": state.session_id, "intent": intent},
            )
            if intent != BOOKING:
                return self._idle_reply(text, state, kb, intent)
            state = replace(state, in_booking=True)

        merged = self._merge_extractions(text, state, kb)
        slots_changed = merged != state

        for rule in self._slot_rules:
            if rule.is_missing(merged):
                return BookingResult(
                    action=rule.action,
                    message=rule.prompt(self._composer, kb),
                    updated_state=merged,
                    intent=intent,
                )

        if slots_changed or not is_confirmation(text):
            return BookingResult(
                action="confirm",
                message=self._composer.recap(merged),
                updated_state=merged,
                intent=intent,
            )

        return self._complete(merged, kb, intent)

    def _idle_reply(
        self,
        text: str,
        state: BookingSlotState,
        kb: KnowledgeBase | None,
        intent: str | None,
    ) -> BookingResult:
        answer = self._composer.answer_question(text, kb) if intent == FAQ else None
        if answer:
            return BookingResult(action="answer", message=answer, updated_state=state, intent=intent)
        return BookingResult(
            action="greet",
            message=self._composer.greeting(kb),
            updated_state=state,
            intent=intent,
        )

    def _merge_extractions(
        self,
        text: str,
        state: BookingSlotState,
        kb: KnowledgeBase | None,
    ) -> BookingSlotState:
        service = match_service(text, kb.services) if kb else None
        timezone = (kb.timezone if kb else None) or self._default_timezone
        parsed_date = extract_date(text, self._today(timezone))
        parsed_time = extract_time(text)
        return replace(
            state,
            service=service.name if service else state.service,
            date=parsed_date or state.date,
            time=parsed_time or state.time,
        )

    def _complete(
        self,
        state: BookingSlotState,
        kb: KnowledgeBase | None,
        intent: str | None,
    ) -> BookingResult:
        contact_email = kb.contact_email if kb else None
        if not contact_email:
            self._logger.warning(
                "No contact address on file, booking not sent",
                extra={"session_id": state.session_id, "reason": "missing_contact_email"},
            )
            return BookingResult(
                action="booked_without_notification",
                message=self._composer.booked_without_contact(kb),
                updated_state=None,
                intent=intent,
            )

        self._notifier.send_booking(
            to=contact_email,
            business_name=self._composer.business_name(kb),
            state=state,
        )
        return BookingResult(
            action="booked",
            message=self._composer.booked(state, kb),
            updated_state=None,
            intent=intent,
        )
