from __future__ import annotations

import logging

from booking_widget.application.exceptions import ClassifierDegraded
from booking_widget.application.ports.llm import LLMPort
from booking_widget.domain.entities.intent import IntentClassification
from booking_widget.domain.entities.knowledge_base import KnowledgeBase


class ClassifyIntentUseCase:
    def __init__(self, llm: LLMPort) -> None:
        self._llm = llm
        self._logger = logging.getLogger(__name__)

    def execute(self, text: str, kb: KnowledgeBase | None = None) -> IntentClassification:
        """Classify a message. Never raises: any adapter failure degrades to intent "other"."""
        try:
            return self._llm.classify_intent(text=text, kb=kb)
        except ClassifierDegraded as e:
            self._logger.warning("Intent classifier degraded", extra={"reason": str(e)})
        except Exception as e:
            self._logger.exception("Intent classifier failed unexpectedly", extra={"reason": str(e)})
        return IntentClassification()
