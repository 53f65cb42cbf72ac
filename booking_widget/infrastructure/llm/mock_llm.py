from __future__ import annotations

from booking_widget.application.ports.llm import LLMPort
from booking_widget.application.utils.message_rules import (
    asks_about_hours,
    asks_about_services,
    normalize_text,
)
from booking_widget.domain.entities.intent import BOOKING, FAQ, OTHER, IntentClassification
from booking_widget.domain.entities.knowledge_base import KnowledgeBase

BOOKING_KEYWORDS = ("reserver", "reservation", "rendez-vous", "rendez vous", "rdv", "prendre un creneau", "book")


class MockLLM(LLMPort):
    def classify_intent(self, text: str, kb: KnowledgeBase | None) -> IntentClassification:
        normalized = normalize_text(text)
        if any(word in normalized for word in BOOKING_KEYWORDS):
            intent = BOOKING
        elif asks_about_hours(text) or asks_about_services(text) or normalized.endswith("?"):
            intent = FAQ
        else:
            intent = OTHER
        return IntentClassification(intent=intent)
