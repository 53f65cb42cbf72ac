"""
Tests for the Resend email adapter.
"""

from __future__ import annotations

import json

import logging

import httpx
import pytest

from booking_widget.application.exceptions import DispatchError
from booking_widget.domain.entities.booking_state import BookingSlotState
from booking_widget.infrastructure.notifications.mock_notifier import MockNotifier
from booking_widget.infrastructure.notifications.resend_client import ResendNotifier
from booking_widget.main import ContextFormatter

STATE = BookingSlotState(session_id="s1", service="Coupe homme", date="2026-03-20", time="14:00", in_booking=True)


def make_notifier(handler, api_key: str | None = "re_test") -> ResendNotifier:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ResendNotifier(api_key=api_key, from_address="widget@example.com", client=client)


def test_send_booking_posts_plain_text_summary():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "email_123"})

    make_notifier(handler).send_booking("salon@example.com", "Atelier Roma", STATE)

    assert len(captured) == 1
    request = captured[0]
    assert request.headers["Authorization"] == "Bearer re_test"
    body = json.loads(request.content)
    assert body["to"] == ["salon@example.com"]
    assert body["from"] == "widget@example.com"
    assert "Coupe homme" in body["subject"]
    assert "Service : Coupe homme" in body["text"]
    assert "Date : 2026-03-20" in body["text"]
    assert "Heure : 14:00" in body["text"]


def test_non_2xx_raises_dispatch_error_with_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text='{"message": "invalid from"}')

    with pytest.raises(DispatchError) as exc_info:
        make_notifier(handler).send_booking("salon@example.com", "Atelier Roma", STATE)
    assert exc_info.value.status == 422
    assert "invalid from" in exc_info.value.body


def test_network_failure_raises_dispatch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DispatchError):
        make_notifier(handler).send_email("a@example.com", "Sujet", "Texte")


def test_missing_credential_raises_without_calling_service():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    with pytest.raises(DispatchError):
        make_notifier(handler, api_key=None).send_email("a@example.com", "Sujet", "Texte")
    assert calls == []


def test_mock_notifier_records_booking():
    notifier = MockNotifier()
    notifier.send_booking("salon@example.com", "Atelier Roma", STATE)
    assert notifier.sent[0]["to"] == "salon@example.com"
    assert "Bonjour Atelier Roma" in notifier.sent[0]["text"]


def test_mock_notifier_log_line_carries_email_text(caplog):
    notifier = MockNotifier()
    with caplog.at_level(logging.INFO):
        notifier.send_email("owner@example.com", "Votre lien", "https://engine.example/auth/verify?x=1")

    line = ContextFormatter("%(message)s").format(caplog.records[-1])
    assert "to=owner@example.com" in line
    assert "https://engine.example/auth/verify?x=1" in line


def test_rejected_send_logs_upstream_body(caplog):
    notifier = make_notifier(lambda request: httpx.Response(422, text="invalid from address"))
    with caplog.at_level(logging.ERROR), pytest.raises(DispatchError):
        notifier.send_email("owner@example.com", "Sujet", "Texte")

    line = ContextFormatter("%(message)s").format(caplog.records[-1])
    assert "status=422" in line
    assert "body=invalid from address" in line
