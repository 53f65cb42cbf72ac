from __future__ import annotations

import json
import re
from typing import Any

from openai import OpenAI

from booking_widget.application.exceptions import LLMContractError, LLMUpstreamError
from booking_widget.application.ports.llm import LLMPort
from booking_widget.core.config import settings
from booking_widget.domain.entities.intent import INTENTS, IntentClassification
from booking_widget.domain.entities.knowledge_base import KnowledgeBase
from booking_widget.infrastructure.llm.prompts import build_classify_prompt

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Contract guarantees:
    - classify_intent returns IntentClassification with a known intent
    - Raises:
        LLMUpstreamError: networking/provider failures (including timeouts)
        LLMContractError: invalid JSON or wrong schema/shape
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def classify_intent(self, text: str, kb: KnowledgeBase | None) -> IntentClassification:
        prompt = build_classify_prompt(text, kb)
        content = self._call_text(
            model=settings.OPENAI_MODEL_CLASSIFY,
            prompt=prompt,
            temperature=settings.OPENAI_TEMPERATURE_CLASSIFY,
        )
        data = _parse_json(content)
        return _to_classification(data)

    def _call_text(self, model: str, prompt: str, temperature: float) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=200,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")
        return content


def _parse_json(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"Classify: invalid JSON. Snippet: {snippet!r}")
    if not isinstance(data, dict):
        raise LLMContractError("Classify: expected a JSON object.")
    return data


def _to_classification(data: dict[str, Any]) -> IntentClassification:
    intent = str(data.get("intent") or "").strip().lower()
    if intent not in INTENTS:
        raise LLMContractError(f"Classify: unknown intent {intent!r}.")

    party_size = data.get("party_size")
    if not isinstance(party_size, int) or isinstance(party_size, bool):
        party_size = None

    return IntentClassification(
        intent=intent,
        service_name=_clean_str(data.get("service_name")),
        date=_matching(data.get("date"), _DATE_RE),
        time=_matching(data.get("time"), _TIME_RE),
        party_size=party_size,
    )


def _clean_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value.lower() in {"null", "unknown", "inconnu"}:
        return None
    return value


def _matching(value: Any, pattern: re.Pattern[str]) -> str | None:
    value = _clean_str(value)
    if value and pattern.match(value):
        return value
    return None
