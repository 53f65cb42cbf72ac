"""
HTTP tests for the chat, business and auth endpoints.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from booking_widget.application.use_cases.booking import BookingUseCase
from booking_widget.application.use_cases.classify_intent import ClassifyIntentUseCase
from booking_widget.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from booking_widget.application.use_cases.magic_link import MagicLinkUseCase
from booking_widget.application.use_cases.manage_business import ManageBusinessUseCase
from booking_widget.application.use_cases.resolve_knowledge_base import ResolveKnowledgeBaseUseCase
from booking_widget.infrastructure.db.business_store import SqlBusinessStore
from booking_widget.infrastructure.knowledge.fallback_businesses import FALLBACK_BUSINESSES
from booking_widget.infrastructure.store.memory_store import MemorySessionStore
from booking_widget.main import app
from booking_widget.wiring.dependencies import (
    get_handle_chat_message_use_case,
    get_magic_link_use_case,
    get_manage_business_use_case,
)

from fakes import FakeLLM, RecordingNotifier

KB = {
    "business": {"name": "Atelier Roma", "business_type": "hair_salon", "timezone": "Europe/Zurich"},
    "hours_text": "Lun-Ven 09:00-18:00",
    "services": [{"id": "svc_1", "name": "Coupe homme", "duration_min": 30, "price_chf": 35}],
    "faq": [{"q": "Acceptez-vous Twint ?", "a": "Oui, Twint est accepté."}],
    "contact_email": "salon@example.com",
}


@pytest.fixture
def env(tmp_path):
    notifier = RecordingNotifier()
    sessions = MemorySessionStore()
    businesses = SqlBusinessStore(f"sqlite:///{tmp_path / 'businesses.db'}")
    businesses.init_schema()

    chat = HandleChatMessageUseCase(
        store=sessions,
        resolve_kb=ResolveKnowledgeBaseUseCase(store=businesses, fallbacks=FALLBACK_BUSINESSES),
        booking_use_case=BookingUseCase(
            classify_intent=ClassifyIntentUseCase(llm=FakeLLM("booking")),
            notifier=notifier,
            today=lambda tz: date(2026, 3, 1),
        ),
    )
    manage = ManageBusinessUseCase(store=businesses, admin_token="secret", fallbacks=FALLBACK_BUSINESSES)
    magic = MagicLinkUseCase(notifier=notifier, public_base_url="https://engine.example")

    app.dependency_overrides[get_handle_chat_message_use_case] = lambda: chat
    app.dependency_overrides[get_manage_business_use_case] = lambda: manage
    app.dependency_overrides[get_magic_link_use_case] = lambda: magic
    yield TestClient(app, raise_server_exceptions=False), notifier, sessions
    app.dependency_overrides.clear()


def test_health(env):
    client, _, _ = env
    assert client.get("/health").json() == {"status": "ok"}


def test_chat_requires_slug_and_message(env):
    client, _, _ = env
    resp = client.post("/chat", json={"message": "bonjour"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "business_slug et message requis."}

    resp = client.post("/chat", json={"business_slug": "atelier-roma"})
    assert resp.status_code == 400


def test_chat_booking_conversation(env):
    client, notifier, sessions = env
    payload = {"business_slug": "atelier-roma", "session_id": "web-1", "kb": KB}

    def say(text: str) -> str:
        resp = client.post("/chat", json={**payload, "message": text})
        assert resp.status_code == 200
        body = resp.json()
        assert body["session_id"] == "web-1"
        return body["reply"]["text"]

    assert say("je veux réserver une coupe homme").startswith("Pour quelle date")
    assert say("le 20 mars à 14h30").startswith("Parfait, je récapitule : Coupe homme le 2026-03-20 à 14:30")
    assert say("OK!").startswith("Merci")
    assert sessions.get("web-1") is None
    assert notifier.bookings[0][0] == "salon@example.com"


def test_chat_dispatch_failure_is_opaque_and_session_kept(env):
    client, notifier, sessions = env
    notifier.failures = 1
    payload = {"business_slug": "atelier-roma", "session_id": "web-2", "kb": KB}
    client.post("/chat", json={**payload, "message": "réserver une coupe homme le 20 mars à 14h"})

    resp = client.post("/chat", json={**payload, "message": "oui"})
    assert resp.status_code == 502
    body = resp.json()
    assert "ref" in body
    assert "HTTP 500" not in body["error"]
    assert sessions.get("web-2") is not None

    resp = client.post("/chat", json={**payload, "message": "oui"})
    assert resp.status_code == 200
    assert resp.json()["reply"]["text"].startswith("Merci")


def test_admin_upsert_and_public_read(env):
    client, _, _ = env
    doc = {
        "name": "Salon Luna",
        "address": "Rue du Lac 4, Genève",
        "contact_email": "luna@example.com",
        "services": [{"name": "Brushing", "price_chf": 40}],
        "hours": {"text": "Mar-Sam 09:00-19:00"},
    }
    assert client.put("/admin/businesses/salon-luna", json=doc).status_code == 401
    assert client.put("/admin/businesses/salon-luna", json=doc, headers={"X-Admin-Token": "nope"}).status_code == 401

    resp = client.put("/admin/businesses/salon-luna", json=doc, headers={"X-Admin-Token": "secret"})
    assert resp.status_code == 200

    public = client.get("/businesses/salon-luna").json()
    assert public["name"] == "Salon Luna"
    assert "contact_email" not in public
    assert public["map_url"].startswith("https://www.google.com/maps/search/")

    assert client.get("/businesses/inconnu").status_code == 404


def test_stored_business_drives_chat(env):
    client, notifier, _ = env
    client.put(
        "/admin/businesses/salon-luna",
        json={"name": "Salon Luna", "contact_email": "luna@example.com", "services": [{"name": "Brushing"}]},
        headers={"X-Admin-Token": "secret"},
    )
    reply = client.post("/chat", json={"business_slug": "salon-luna", "session_id": "w3", "message": "réserver"})
    assert "Brushing" in reply.json()["reply"]["text"]


def test_send_link_and_verify(env):
    client, notifier, _ = env
    resp = client.post("/auth/send-link", json={"email": "owner@example.com", "slug": "atelier-roma"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "sent": True, "verify_url": None}

    assert client.post("/auth/send-link", json={"email": "nope", "slug": "x"}).status_code == 400

    resp = client.get("/auth/verify", params={"email": "owner@example.com", "slug": "atelier-roma"})
    assert resp.status_code == 200
    assert "Connexion confirmée" in resp.text


def test_chat_accepts_question_answer_faq_entries(env):
    client, notifier, sessions = env
    chat = HandleChatMessageUseCase(
        store=sessions,
        resolve_kb=ResolveKnowledgeBaseUseCase(store=None, fallbacks={}),
        booking_use_case=BookingUseCase(
            classify_intent=ClassifyIntentUseCase(llm=FakeLLM("faq")),
            notifier=notifier,
        ),
    )
    app.dependency_overrides[get_handle_chat_message_use_case] = lambda: chat
    kb = {**KB, "faq": [{"question": "Acceptez-vous Twint ?", "answer": "Oui."}]}

    resp = client.post(
        "/chat",
        json={"business_slug": "atelier-roma", "session_id": "w4", "message": "Acceptez-vous Twint ?", "kb": kb},
    )

    assert resp.status_code == 200
    assert resp.json()["reply"]["text"] == "Oui."
