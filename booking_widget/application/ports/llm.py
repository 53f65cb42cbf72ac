from abc import ABC, abstractmethod

from booking_widget.domain.entities.intent import IntentClassification
from booking_widget.domain.entities.knowledge_base import KnowledgeBase


class LLMPort(ABC):
    @abstractmethod
    def classify_intent(self, text: str, kb: KnowledgeBase | None) -> IntentClassification:
        """
        Classify a customer message.

        Requirements:
        - intent must be one of "booking", "faq", "other"
        - optional fields must be None when unknown, never invented
        - may raise LLMUpstreamError / LLMContractError; callers recover

        Args:
            text: Raw customer message
            kb: Effective knowledge base, used as catalog context when present

        Returns:
            IntentClassification
        """
        raise NotImplementedError
