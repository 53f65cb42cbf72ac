from __future__ import annotations

import logging
from typing import Any, Mapping

from booking_widget.application.exceptions import StorageError
from booking_widget.application.ports.business_store import BusinessStorePort
from booking_widget.domain.entities.business import BusinessRecord
from booking_widget.domain.entities.knowledge_base import FaqEntry, KnowledgeBase, Service


class ResolveKnowledgeBaseUseCase:
    """
    Resolve the effective knowledge base for a business slug.

    Order: caller-supplied payload (trusted verbatim), stored business record,
    built-in fallback registry. Returns None when none applies.
    """

    def __init__(
        self,
        store: BusinessStorePort | None,
        fallbacks: Mapping[str, BusinessRecord] | None = None,
    ) -> None:
        self._store = store
        self._fallbacks = dict(fallbacks or {})
        self._logger = logging.getLogger(__name__)

    def execute(self, slug: str, payload: Mapping[str, Any] | None = None) -> KnowledgeBase | None:
        if payload:
            return knowledge_base_from_payload(payload)

        record = self._lookup(slug)
        if record is not None:
            return knowledge_base_from_record(record)
        return None

    def _lookup(self, slug: str) -> BusinessRecord | None:
        if self._store is not None:
            try:
                record = self._store.get(slug)
                if record is not None:
                    return record
            except StorageError as e:
                self._logger.warning(
                    "Business store unavailable, using fallback",
                    extra={"business_slug": slug, "reason": str(e)},
                )
        return self._fallbacks.get(slug)


def knowledge_base_from_payload(payload: Mapping[str, Any]) -> KnowledgeBase:
    business = payload.get("business") or {}
    return KnowledgeBase(
        business_name=business.get("name") or payload.get("business_name") or "ce business",
        business_type=business.get("business_type") or payload.get("business_type"),
        timezone=business.get("timezone") or payload.get("timezone"),
        hours_text=payload.get("hours_text"),
        services=tuple(_service(s) for s in payload.get("services") or [] if s.get("name")),
        faq=tuple(entry for entry in map(_faq, payload.get("faq") or []) if entry.question),
        contact_email=payload.get("contact_email") or business.get("contact_email"),
    )


def knowledge_base_from_record(record: BusinessRecord) -> KnowledgeBase:
    faq = (record.rules or {}).get("faq") or []
    return KnowledgeBase(
        business_name=record.name,
        business_type=record.business_type,
        timezone=record.timezone,
        hours_text=_hours_text(record.hours),
        services=tuple(_service(s) for s in record.services or [] if s.get("name")),
        faq=tuple(entry for entry in map(_faq, faq) if entry.question),
        contact_email=record.contact_email,
    )


def _service(raw: Mapping[str, Any]) -> Service:
    price_minor = raw.get("price_minor")
    if price_minor is None and raw.get("price_chf") is not None:
        price_minor = int(round(float(raw["price_chf"]) * 100))
    duration = raw.get("duration_minutes", raw.get("duration_min"))
    return Service(
        name=str(raw["name"]).strip(),
        price_minor=int(price_minor) if price_minor is not None else None,
        duration_minutes=int(duration) if duration is not None else None,
    )


def _faq(raw: Mapping[str, Any]) -> FaqEntry:
    return FaqEntry(
        question=str(raw.get("q") or raw.get("question") or "").strip(),
        answer=str(raw.get("a") or raw.get("answer") or "").strip(),
    )


def _hours_text(hours: Mapping[str, Any] | None) -> str | None:
    if not hours:
        return None
    if hours.get("text"):
        return str(hours["text"])
    return ", ".join(f"{day} {value}" for day, value in hours.items())
