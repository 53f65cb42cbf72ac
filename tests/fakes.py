from __future__ import annotations

from booking_widget.application.exceptions import DispatchError, LLMUpstreamError
from booking_widget.application.ports.llm import LLMPort
from booking_widget.application.ports.notifier import NotifierPort
from booking_widget.domain.entities.booking_state import BookingSlotState
from booking_widget.domain.entities.intent import IntentClassification
from booking_widget.domain.entities.knowledge_base import FaqEntry, KnowledgeBase, Service


def make_kb(contact_email: str | None = "salon@example.com") -> KnowledgeBase:
    return KnowledgeBase(
        business_name="Atelier Roma",
        business_type="hair_salon",
        timezone="Europe/Zurich",
        hours_text="Lun-Ven 09:00-18:00, Sam 09:00-16:00",
        services=(
            Service(name="Coupe homme", price_minor=3500, duration_minutes=30),
            Service(name="Barbe", price_minor=2500, duration_minutes=20),
        ),
        faq=(FaqEntry("Acceptez-vous Twint ?", "Oui, Twint est accepté."),),
        contact_email=contact_email,
    )


class FakeLLM(LLMPort):
    """Returns a fixed intent and records every call."""

    def __init__(self, intent: str = "booking") -> None:
        self.intent = intent
        self.calls: list[str] = []

    def classify_intent(self, text: str, kb: KnowledgeBase | None) -> IntentClassification:
        self.calls.append(text)
        return IntentClassification(intent=self.intent)


class FailingLLM(LLMPort):
    def classify_intent(self, text: str, kb: KnowledgeBase | None) -> IntentClassification:
        raise LLMUpstreamError("timeout")


class RecordingNotifier(NotifierPort):
    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.bookings: list[tuple[str, str, BookingSlotState]] = []
        self.emails: list[tuple[str, str, str]] = []

    def send_email(self, to: str, subject: str, text: str) -> None:
        if self.failures > 0:
            self.failures -= 1
            raise DispatchError("Email service rejected the send (HTTP 500)", status=500, body="boom")
        self.emails.append((to, subject, text))

    def send_booking(self, to: str, business_name: str, state: BookingSlotState) -> None:
        if self.failures > 0:
            self.failures -= 1
            raise DispatchError("Email service rejected the send (HTTP 500)", status=500, body="boom")
        self.bookings.append((to, business_name, state))
