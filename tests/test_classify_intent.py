"""
Tests for the intent classifier adapters and their degraded default.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from booking_widget.application.exceptions import ClassifierDegraded, LLMContractError, LLMUpstreamError
from booking_widget.application.use_cases.classify_intent import ClassifyIntentUseCase
from booking_widget.infrastructure.llm.mock_llm import MockLLM
from booking_widget.infrastructure.llm.openai_llm import OpenAILLM
from booking_widget.infrastructure.llm.prompts import build_classify_prompt

from fakes import make_kb


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self._content = content
        self._error = error
        self.kwargs: dict | None = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self._error is not None:
            raise self._error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self._content))])


def fake_client(content: str | None = None, error: Exception | None = None):
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_openai_adapter_parses_structured_output():
    client, completions = fake_client(
        '{"intent": "booking", "service_name": "Coupe homme", "date": "2026-03-20", "time": "14:00", "party_size": null}'
    )
    result = OpenAILLM(client=client).classify_intent("je veux une coupe homme le 20 mars", make_kb())

    assert result.intent == "booking"
    assert result.service_name == "Coupe homme"
    assert result.date == "2026-03-20"
    assert result.time == "14:00"
    assert result.party_size is None
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_openai_adapter_drops_malformed_optional_fields():
    client, _ = fake_client('{"intent": "booking", "service_name": "unknown", "date": "20 mars", "time": "2pm"}')
    result = OpenAILLM(client=client).classify_intent("rdv", None)
    assert result.intent == "booking"
    assert result.service_name is None
    assert result.date is None
    assert result.time is None


def test_openai_adapter_raises_contract_error_on_bad_json():
    client, _ = fake_client("Bien sûr ! Voici le JSON")
    with pytest.raises(LLMContractError):
        OpenAILLM(client=client).classify_intent("rdv", None)


def test_openai_adapter_raises_contract_error_on_unknown_intent():
    client, _ = fake_client('{"intent": "cancel"}')
    with pytest.raises(LLMContractError):
        OpenAILLM(client=client).classify_intent("annuler", None)


def test_openai_adapter_wraps_upstream_errors():
    client, _ = fake_client(error=TimeoutError("read timeout"))
    with pytest.raises(LLMUpstreamError):
        OpenAILLM(client=client).classify_intent("rdv", None)


def test_contract_and_upstream_errors_are_degraded():
    assert issubclass(LLMContractError, ClassifierDegraded)
    assert issubclass(LLMUpstreamError, ClassifierDegraded)


def test_use_case_returns_other_on_any_failure():
    client, _ = fake_client("")
    use_case = ClassifyIntentUseCase(llm=OpenAILLM(client=client))
    result = use_case.execute("je veux réserver", make_kb())
    assert result.intent == "other"
    assert result.service_name is None
    assert result.date is None
    assert result.time is None


def test_use_case_survives_unexpected_exception():
    client, _ = fake_client('{"intent": "booking", "party_size": "abc"}')

    class Exploding(OpenAILLM):
        def classify_intent(self, text, kb):
            raise KeyError("surprise")

    result = ClassifyIntentUseCase(llm=Exploding(client=client)).execute("rdv")
    assert result.intent == "other"


def test_mock_llm_keywords():
    llm = MockLLM()
    assert llm.classify_intent("Je voudrais réserver", None).intent == "booking"
    assert llm.classify_intent("un RDV svp", None).intent == "booking"
    assert llm.classify_intent("Quels sont vos horaires ?", None).intent == "faq"
    assert llm.classify_intent("bonjour", None).intent == "other"


def test_prompt_lists_catalog():
    prompt = build_classify_prompt("bonjour", make_kb())
    assert "- Coupe homme" in prompt
    assert "- Barbe" in prompt
    assert "JSON" in prompt
