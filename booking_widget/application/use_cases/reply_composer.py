from __future__ import annotations

from booking_widget.application.utils.message_rules import (
    asks_about_hours,
    asks_about_services,
    find_faq_answer,
)
from booking_widget.domain.entities.booking_state import BookingSlotState
from booking_widget.domain.entities.knowledge_base import KnowledgeBase, Service

DEFAULT_BUSINESS_NAME = "ce business"


class ReplyComposer:
    """French reply texts for the widget. Pure functions of the knowledge base and slot state."""

    def business_name(self, kb: KnowledgeBase | None) -> str:
        return (kb.business_name if kb else None) or DEFAULT_BUSINESS_NAME

    def greeting(self, kb: KnowledgeBase | None) -> str:
        return f"Bienvenue chez {self.business_name(kb)}. Comment puis-je vous aider ?"

    def answer_question(self, text: str, kb: KnowledgeBase | None) -> str | None:
        """Deterministic answer from the knowledge base, or None when nothing applies."""
        if kb is None:
            return None
        entry = find_faq_answer(text, kb.faq)
        if entry is not None:
            return entry.answer
        if asks_about_hours(text) and kb.hours_text:
            return f"Nos horaires : {kb.hours_text}."
        if asks_about_services(text) and kb.services:
            return f"Voici nos services : {self.services_text(kb)}."
        return None

    def services_text(self, kb: KnowledgeBase | None) -> str:
        if kb is None or not kb.services:
            return "Je n'ai pas encore la liste des services."
        return " | ".join(_service_label(s) for s in kb.services)

    def ask_service(self, kb: KnowledgeBase | None) -> str:
        if kb is None or not kb.services:
            return "Quel service souhaitez-vous réserver ?"
        return f"Quel service souhaitez-vous réserver ? Voici ceux disponibles : {self.services_text(kb)}"

    def ask_date(self, kb: KnowledgeBase | None) -> str:
        return "Pour quelle date souhaitez-vous le rendez-vous ? (ex : le 20 mars)"

    def ask_time(self, kb: KnowledgeBase | None) -> str:
        return "À quelle heure souhaitez-vous le rendez-vous ? (ex : 14h30)"

    def recap(self, state: BookingSlotState) -> str:
        return (
            f"Parfait, je récapitule : {state.service} le {state.date} à {state.time}. "
            "Souhaitez-vous confirmer ?"
        )

    def booked(self, state: BookingSlotState, kb: KnowledgeBase | None) -> str:
        return (
            f"Merci ! Votre demande ({state.service} le {state.date} à {state.time}) "
            f"a bien été transmise à {self.business_name(kb)}. Vous serez recontacté pour la confirmation."
        )

    def booked_without_contact(self, kb: KnowledgeBase | None) -> str:
        return (
            "Désolé, je ne peux pas transmettre automatiquement votre demande. "
            f"Merci de contacter directement {self.business_name(kb)}."
        )


def _service_label(service: Service) -> str:
    if service.price_minor is None:
        return service.name
    amount = service.price_minor / 100
    price = f"{amount:.0f}" if service.price_minor % 100 == 0 else f"{amount:.2f}"
    return f"{service.name} ({price} CHF)"
